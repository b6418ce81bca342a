from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import BaseModel, Field, ValidationError

from .patterns import NamedPattern

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class ConfigurationError(ValueError):
    """Raised when the pattern set cannot be built; aborts the whole run."""


class PatternFile(BaseModel):
    """Pattern definitions loaded from a JSON or YAML file."""
    description: str | None = Field(default=None, description="Optional description of this pattern file")
    patterns: list[str] = Field(default_factory=list, description="Regexes with named groups, applied in order")


def load_pattern_file(path: str | Path) -> PatternFile:
    """Load 'path' and validate it into a PatternFile.

    YAML is used for .yaml/.yml files, JSON for everything else.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Could not open pattern file {path}: {e}") from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return PatternFile.model_validate(yaml.safe_load(text) or {})
        return PatternFile.model_validate_json(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse pattern file {path}: {e}") from e
    except ValidationError as e:
        # Re-raise with a cleaner message for CLI users
        raise ConfigurationError(f"Could not parse pattern file {path}: {e}") from e


def collect_patterns(cli_patterns: Iterable[str] | None, pattern_file: PatternFile | None = None) -> list[str]:
    """Command-line patterns first, then the file's patterns."""
    collected = list(cli_patterns or [])
    if pattern_file is not None:
        collected.extend(pattern_file.patterns)
    return collected


def compile_patterns(raw_patterns: Iterable[str]) -> list[NamedPattern]:
    raw = list(raw_patterns)
    if not raw:
        raise ConfigurationError("no patterns supplied")

    compiled: list[NamedPattern] = []
    for source in raw:
        try:
            pattern = re.compile(source)
        except re.error as e:
            raise ConfigurationError(f"Invalid regular expression '{source}': {e}") from e
        if not pattern.groupindex:
            raise ConfigurationError(f"Regex '{source}' must contain at least one named capture group")
        compiled.append(NamedPattern(pattern=pattern))
    logger.debug("Compiled %d pattern(s)", len(compiled))
    return compiled
