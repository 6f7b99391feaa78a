"""
Configuration models and YAML I/O for hcp-to-wiki.

This module defines the Pydantic models that map 1:1 to hcpconfig.yaml,
plus helpers for loading a user config or the built-in default.

Key models:
- HcpConfig: Top-level config (input + output + rules).
- InputConfig: Header marker and file encoding of the advert CSV.
- OutputConfig: Debug dump toggle and optional price-matrix export.
- SystemRule: One post-aggregation rule (rename or suppress a system).

Key functions:
- load_config(path) -> HcpConfig: Load and validate from YAML.
- load_default_config() -> HcpConfig: Load the packaged defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from hcp_to_wiki.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

# Directory containing the packaged default config
_DEFAULTS_DIR = Path(__file__).parent / "defaults"
DEFAULT_CONFIG_PATH = _DEFAULTS_DIR / "hcpconfig.yaml"


class InputConfig(BaseModel):
    """How to read the advert CSV."""

    header_marker: str = Field(
        "Source",
        description="First-column text of the header row; it and everything above it are skipped",
    )
    encoding: str = Field("utf-8-sig", description="Text encoding of the CSV file")


class OutputConfig(BaseModel):
    """Output settings."""

    debug_dump: bool = Field(
        False, description="If True, print the record/series dump before the tables"
    )
    matrix_path: str | None = Field(
        None, description="If set, also write the price matrix to this file"
    )
    matrix_format: Literal["csv", "parquet"] = Field(
        "csv", description="Format of the price matrix export"
    )


class SystemRule(BaseModel):
    """A rule applied to the per-system price series after aggregation.

    ``rename`` moves the series stored under ``match`` to ``new_name``;
    ``suppress`` drops it.
    """

    match: str = Field(..., min_length=1)
    action: Literal["rename", "suppress"]
    new_name: str | None = None

    @model_validator(mode="after")
    def _check_new_name(self) -> SystemRule:
        if self.action == "rename" and not self.new_name:
            raise ValueError(f"Rename rule for '{self.match}' needs a new_name.")
        if self.action == "suppress" and self.new_name is not None:
            raise ValueError(
                f"Suppress rule for '{self.match}' must not set new_name "
                f"(got '{self.new_name}')."
            )
        return self


class HcpConfig(BaseModel):
    """Top-level configuration for hcp-to-wiki.

    Maps 1:1 to hcpconfig.yaml.  Rules are applied in the order listed.
    """

    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    rules: list[SystemRule] = Field(default_factory=list)


def load_config(path: str | Path) -> HcpConfig:
    """Load and validate an hcpconfig.yaml file.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty, is not valid YAML,
            or fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"Config file is not valid YAML: {path}: {exc}") from exc
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    try:
        config = HcpConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid config {path}:\n{exc}") from exc
    logger.info("Loaded config from %s (%d rule(s))", path, len(config.rules))
    return config


def load_default_config() -> HcpConfig:
    """Load the built-in hcpconfig.yaml shipped with the package."""
    return load_config(DEFAULT_CONFIG_PATH)
