"""Run-time tunables for reconstruction runs.

Defaults are overridden first by an optional YAML file and then by
``SHAMIR_AUDIT_*`` environment variables. Malformed environment values fall
back to the previous value instead of aborting the run.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

import yaml

from .classifier import TIE_BREAKS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _load_positive_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _load_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    for choice in choices:
        if choice.lower() == value:
            return choice
    return default


@dataclass(frozen=True)
class AuditPolicy:
    """Holds the tunables of one reconstruction run."""

    workers: int = 1
    max_subsets: Optional[int] = None
    tie_break: str = "smallest"
    audit_dir: Optional[str] = None
    progress: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.max_subsets is not None and self.max_subsets < 1:
            raise ValueError(f"max_subsets must be positive, got {self.max_subsets}")
        if self.tie_break not in TIE_BREAKS:
            raise ValueError(f"tie_break must be one of {', '.join(TIE_BREAKS)}")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")
        object.__setattr__(self, "log_level", self.log_level.upper())


def read_policy_file(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read the ``reconstruction`` section (or the whole mapping) of a YAML file."""

    with open(path, "r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Policy file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Policy file {path} must contain a mapping")
    section = data.get("reconstruction", data)
    if not isinstance(section, dict):
        raise ValueError(f"Policy section in {path} must be a mapping")
    known = {item.name for item in fields(AuditPolicy)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ValueError(f"Unknown policy keys in {path}: {', '.join(unknown)}")
    return dict(section)


def load_policy(path: str | os.PathLike[str] | None = None) -> AuditPolicy:
    """Load the policy from *path* (if given) and the environment."""

    base = AuditPolicy()
    if path is not None:
        base = replace(base, **read_policy_file(path))
    return replace(
        base,
        workers=_load_positive_int("SHAMIR_AUDIT_WORKERS", base.workers),
        max_subsets=_load_positive_int("SHAMIR_AUDIT_MAX_SUBSETS", base.max_subsets),
        tie_break=_load_choice("SHAMIR_AUDIT_TIE_BREAK", base.tie_break, TIE_BREAKS),
        audit_dir=os.environ.get("SHAMIR_AUDIT_DIR", base.audit_dir),
        log_level=_load_choice("SHAMIR_AUDIT_LOG_LEVEL", base.log_level, LOG_LEVELS),
    )


policy = load_policy()


__all__ = ["AuditPolicy", "LOG_LEVELS", "load_policy", "policy", "read_policy_file"]
