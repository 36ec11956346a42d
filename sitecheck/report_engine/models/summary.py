"""Models for schema-tagged summary payloads attached by check logic."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_ID = "codex.report.summary"
SCHEMA_VERSION = 1

KIND_RUN_SUMMARY = "run-summary"
KIND_PAGE_SUMMARY = "page-summary"


class _PayloadModel(BaseModel):
    """Base for payload models; accepts camelCase input and keeps extra keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)


class SummaryMetadata(_PayloadModel):
    """Topic metadata shared by run and page summaries."""

    summary_type: str | None = Field(
        default=None, alias="summaryType", description="Topic identifier"
    )
    scope: Literal["run", "project"] | None = Field(
        default=None, description="Whether the payload covers the run or a project"
    )
    project_name: str | None = Field(
        default=None, alias="projectName", description="Project/browser label"
    )
    viewports: list[str] = Field(default_factory=list, description="Viewports")
    fail_on: str | None = Field(
        default=None, alias="failOn", description="Gating threshold label"
    )
    suppress_page_entries: bool = Field(default=False, alias="suppressPageEntries")


class RuleSnapshot(_PayloadModel):
    """Rule-level finding aggregated across pages."""

    rule: str = Field(..., description="Rule identifier")
    impact: str | None = Field(default=None, description="Impact level")
    category: str | None = Field(
        default=None, description="Finding category (gating, advisory, ...)"
    )
    pages: list[str] = Field(default_factory=list)
    nodes: int | None = Field(default=None, description="Affected node count")
    viewports: list[str] = Field(default_factory=list)
    wcag_tags: list[str] = Field(default_factory=list, alias="wcagTags")
    help_url: str | None = Field(default=None, alias="helpUrl")

    @property
    def severity_label(self) -> str:
        """Impact, falling back to category, then ``info``."""
        return self.impact or self.category or "info"


class RunSummaryPayload(_PayloadModel):
    """Run- or project-scoped topic summary."""

    schema_id: Literal["codex.report.summary"] = Field(
        default=SCHEMA_ID, alias="schema"
    )
    version: Literal[1] = SCHEMA_VERSION
    kind: Literal["run-summary"] = KIND_RUN_SUMMARY
    base_name: str = Field(..., alias="baseName", min_length=1)
    title: str | None = None
    metadata: SummaryMetadata = Field(default_factory=SummaryMetadata)
    overview: dict[str, Any] = Field(default_factory=dict)
    rule_snapshots: list[RuleSnapshot] = Field(
        default_factory=list, alias="ruleSnapshots"
    )
    html_body: str | None = Field(default=None, alias="htmlBody")
    markdown_body: str | None = Field(default=None, alias="markdownBody")
    details: dict[str, Any] | None = None

    @property
    def detail_pages(self) -> list[dict[str, Any]] | None:
        """Per-page breakdown from ``details.pages`` when present."""
        if not self.details:
            return None
        pages = self.details.get("pages")
        if not isinstance(pages, list):
            return None
        return [page for page in pages if isinstance(page, dict)]


class PageSummaryPayload(_PayloadModel):
    """Summary for a single page under test."""

    schema_id: Literal["codex.report.summary"] = Field(
        default=SCHEMA_ID, alias="schema"
    )
    version: Literal[1] = SCHEMA_VERSION
    kind: Literal["page-summary"] = KIND_PAGE_SUMMARY
    base_name: str = Field(..., alias="baseName", min_length=1)
    title: str | None = None
    metadata: SummaryMetadata = Field(default_factory=SummaryMetadata)
    page: str = Field(..., min_length=1)
    viewport: str = Field(..., min_length=1)
    summary: dict[str, Any] = Field(default_factory=dict)


SummaryPayload = Annotated[
    RunSummaryPayload | PageSummaryPayload, Field(discriminator="kind")
]
