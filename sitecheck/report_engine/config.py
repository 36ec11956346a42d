"""Load report configuration from YAML files and the environment."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sitecheck.report_engine.models.report_config import ReportConfig

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


def _first_env(env: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


def _environment_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect settings provided through environment variables."""
    overrides: dict[str, Any] = {}

    site_name = _first_env(env, "SITE_NAME", "SITE")
    if site_name:
        overrides["site_name"] = site_name

    base_url = _first_env(env, "SITE_BASE_URL", "BASE_URL")
    if base_url:
        overrides["site_base_url"] = base_url

    profile = _first_env(env, "PROFILE", "TEST_PROFILE", "PLAYWRIGHT_PROFILE")
    if not profile and env.get("SMOKE"):
        profile = "smoke"
    if not profile and env.get("NIGHTLY"):
        profile = "nightly"
    if profile:
        overrides["profile"] = profile

    output_folder = env.get("REPORT_OUTPUT_FOLDER")
    if output_folder:
        overrides["output_folder"] = output_folder

    return overrides


def _read_config_file(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")
    return data


def load_report_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ReportConfig:
    """Build the report configuration.

    Values from the YAML file are applied first; environment variables win.

    Args:
        config_path: Optional path to a YAML configuration file
        env: Environment mapping, defaults to ``os.environ``

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file is missing, not valid YAML, or fails validation

    """
    data: dict[str, Any] = {}
    if config_path is not None:
        data.update(_read_config_file(config_path))
        logger.info(f"Loaded report config from {config_path}")

    data.update(_environment_overrides(os.environ if env is None else env))

    try:
        return ReportConfig.model_validate(data)
    except ValidationError as e:
        source = config_path or "environment"
        raise ConfigError(f"Invalid report configuration in {source}: {e}") from e
