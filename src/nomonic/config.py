from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from nomonic.core import DEFAULT_THRESHOLD
from nomonic.ignore import load_ignore_patterns

THRESHOLD_ENV_VAR = "BIP39_THRESHOLD"

LOCK_FILES = frozenset({
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
    "Cargo.lock",
    "Gemfile.lock",
    "poetry.lock",
    "composer.lock",
})


class ConfigError(RuntimeError):
    """Raised when scan settings fail validation."""


class ScanConfig(BaseModel):
    """Settings shared by the repository scan and the pre-commit check.

    Attributes:
        threshold: Minimum number of consecutive BIP39 words that is reported.
        include_lockfiles: Scan dependency lockfiles, which are skipped by default.
        ignore_patterns: Glob patterns (``.nomonicignore`` syntax) of paths to skip.
        json_output: Emit violations as a JSON array on stdout.
    """

    threshold: int = Field(default=DEFAULT_THRESHOLD, ge=1, description="Minimum consecutive BIP39 words to flag")
    include_lockfiles: bool = Field(default=False, description="Scan lockfiles such as package-lock.json")
    ignore_patterns: list[str] = Field(default_factory=list, description="Glob patterns of paths to skip")
    json_output: bool = Field(default=False, description="Write violations as JSON to stdout")


def load_config(root: str | Path = ".", **overrides) -> ScanConfig:
    """Build a :class:`ScanConfig` from ``.nomonicignore``, the environment and overrides.

    ``None`` overrides are ignored so argparse defaults can be passed through.
    Patterns in ``ignore_patterns`` are appended to those from the ignore file.
    """
    cfg: dict = {"ignore_patterns": load_ignore_patterns(root)}

    env_threshold = os.environ.get(THRESHOLD_ENV_VAR)
    if env_threshold:
        cfg["threshold"] = env_threshold

    for key, value in overrides.items():
        if value is None:
            continue
        if key == "ignore_patterns":
            cfg["ignore_patterns"] = cfg["ignore_patterns"] + list(value)
        else:
            cfg[key] = value

    try:
        return ScanConfig.model_validate(cfg)
    except ValidationError as e:
        raise ConfigError(f"Invalid nomonic configuration: {e}") from e
