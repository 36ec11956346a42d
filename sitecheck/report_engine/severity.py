"""Derive severity counters from topic overviews and classify topics."""

import logging
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from sitecheck.report_engine.models.aggregate import (
    BucketResult,
    ProjectBucket,
    TopicMetrics,
    TopicStatus,
)

logger = logging.getLogger(__name__)


class PrimaryKeys(BaseModel):
    """Sum every listed overview key that is present."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primary"] = "primary"
    keys: tuple[str, ...]


class FallbackKeys(BaseModel):
    """Use the first listed key that is present, only when no primary key matched."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fallback"] = "fallback"
    keys: tuple[str, ...]


MetricRule = PrimaryKeys | FallbackKeys


class TopicMetricRules(BaseModel):
    """Ordered key candidates for each derived counter."""

    model_config = ConfigDict(frozen=True)

    blocking: tuple[MetricRule, ...] = ()
    warnings: tuple[MetricRule, ...] = ()
    advisories: tuple[MetricRule, ...] = ()
    affected_pages: tuple[MetricRule, ...] = ()


_PAGES_WITH_GATING = ("pagesWithGatingIssues", "gatingPages", "pagesWithErrors")

DEFAULT_RULES = TopicMetricRules(
    blocking=(
        PrimaryKeys(
            keys=(
                "totalGatingFindings",
                "totalViolations",
                "gatingViolations",
                "consoleErrors",
                "resourceErrors",
                "brokenCount",
                "brokenLinks",
                "visualDiffs",
                "budgetBreaches",
                "failedChecks",
            )
        ),
        FallbackKeys(keys=(*_PAGES_WITH_GATING, "pagesWithOverflow")),
    ),
    warnings=(PrimaryKeys(keys=("advisoryPages", "pagesWithAdvisories", "warnings")),),
    advisories=(
        PrimaryKeys(
            keys=(
                "totalAdvisoryFindings",
                "totalBestPracticeFindings",
                "advisoryFindings",
                "bestPracticeFindings",
            )
        ),
    ),
    affected_pages=(FallbackKeys(keys=_PAGES_WITH_GATING),),
)

TOPIC_RULES: dict[str, TopicMetricRules] = {
    "wcag": TopicMetricRules(
        blocking=(
            PrimaryKeys(keys=("totalGatingFindings", "totalViolations")),
            FallbackKeys(keys=("gatingPages", "pagesWithGatingIssues")),
        ),
        warnings=(PrimaryKeys(keys=("advisoryPages", "warnings")),),
        advisories=(
            PrimaryKeys(
                keys=("totalAdvisoryFindings", "totalBestPracticeFindings")
            ),
        ),
        affected_pages=(FallbackKeys(keys=("gatingPages", "pagesWithGatingIssues")),),
    ),
    "internal-links": TopicMetricRules(
        blocking=(
            PrimaryKeys(keys=("brokenCount", "brokenLinks")),
            FallbackKeys(keys=("pagesWithBrokenLinks",)),
        ),
        warnings=(PrimaryKeys(keys=("warnings",)),),
        affected_pages=(FallbackKeys(keys=("pagesWithBrokenLinks",)),),
    ),
    "interactive": TopicMetricRules(
        blocking=(
            PrimaryKeys(keys=("consoleErrors", "resourceErrors")),
            FallbackKeys(keys=("pagesWithErrors",)),
        ),
        warnings=(PrimaryKeys(keys=("pagesWithWarnings", "warnings")),),
        affected_pages=(FallbackKeys(keys=("pagesWithErrors",)),),
    ),
    "visual": TopicMetricRules(
        blocking=(
            PrimaryKeys(keys=("visualDiffs", "diffs")),
            FallbackKeys(keys=("pagesWithDiffs",)),
        ),
        warnings=(PrimaryKeys(keys=("warnings",)),),
        advisories=(PrimaryKeys(keys=("advisories",)),),
        affected_pages=(FallbackKeys(keys=("pagesWithDiffs",)),),
    ),
    "performance": TopicMetricRules(
        blocking=(
            PrimaryKeys(keys=("budgetBreaches",)),
            FallbackKeys(keys=("pagesWithBreaches",)),
        ),
        warnings=(PrimaryKeys(keys=("warnings",)),),
        affected_pages=(FallbackKeys(keys=("pagesWithBreaches",)),),
    ),
    "iframe-metadata": TopicMetricRules(
        blocking=(FallbackKeys(keys=("pagesWithMissingLabels", "pagesWithGatingIssues")),),
        warnings=(PrimaryKeys(keys=("pagesWithAdvisories", "warnings")),),
        affected_pages=(FallbackKeys(keys=("pagesWithMissingLabels", "pagesWithGatingIssues")),),
    ),
    "reflow": TopicMetricRules(
        blocking=(
            PrimaryKeys(keys=("totalGatingFindings",)),
            FallbackKeys(keys=("pagesWithOverflow", "pagesWithGatingIssues")),
        ),
        warnings=(PrimaryKeys(keys=("pagesWithAdvisories", "warnings")),),
        affected_pages=(FallbackKeys(keys=("pagesWithOverflow", "pagesWithGatingIssues")),),
    ),
}


def _as_count(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, list):
        return len(value)
    return None


def evaluate_rules(overview: Mapping[str, Any], rules: tuple[MetricRule, ...]) -> int:
    """Evaluate ordered key rules against an overview mapping.

    Primary keys always take precedence; fallback keys are consulted only
    when no primary key of the metric is present, so the two never add up.
    """
    primary_total = 0
    primary_found = False
    for rule in rules:
        if isinstance(rule, PrimaryKeys):
            for key in rule.keys:
                count = _as_count(overview.get(key))
                if count is not None:
                    primary_total += count
                    primary_found = True
    if primary_found:
        return primary_total

    for rule in rules:
        if isinstance(rule, FallbackKeys):
            for key in rule.keys:
                count = _as_count(overview.get(key))
                if count is not None:
                    return count
    return 0


def rules_for_topic(topic: str | None) -> TopicMetricRules:
    """Metric rules for a topic, defaulting to the generic table."""
    if topic and topic in TOPIC_RULES:
        return TOPIC_RULES[topic]
    return DEFAULT_RULES


def derive_bucket_metrics(bucket: ProjectBucket, topic: str | None) -> TopicMetrics:
    """Derive the four counters from a bucket's authoritative run entry."""
    payload = bucket.run_payload
    if payload is None:
        return TopicMetrics()

    rules = rules_for_topic(topic)
    overview = payload.overview
    return TopicMetrics(
        blocking=evaluate_rules(overview, rules.blocking),
        warnings=evaluate_rules(overview, rules.warnings),
        advisories=evaluate_rules(overview, rules.advisories),
        affected_pages=evaluate_rules(overview, rules.affected_pages),
    )


def classify(metrics: TopicMetrics) -> tuple[TopicStatus, str]:
    """Reduce counters to a status and a justification."""
    if metrics.blocking > 0:
        return "fail", f"{metrics.blocking} blocking finding(s) detected."
    non_blocking = metrics.warnings + metrics.advisories
    if non_blocking > 0:
        return (
            "warn",
            f"No blocking findings; {metrics.warnings} warning(s) and "
            f"{metrics.advisories} advisory finding(s).",
        )
    return "pass", "No blocking or advisory findings."


def classify_buckets(
    buckets: list[ProjectBucket], topic: str | None
) -> tuple[list[BucketResult], TopicMetrics, TopicStatus, str]:
    """Derive per-bucket metrics, sum them, and classify the group."""
    results = [
        BucketResult(bucket=bucket, metrics=derive_bucket_metrics(bucket, topic))
        for bucket in buckets
    ]
    total = TopicMetrics()
    for result in results:
        total = total + result.metrics
    status, reason = classify(total)
    if len(results) > 1:
        reason = f"{reason[:-1]} across {len(results)} projects."
    return results, total, status, reason
