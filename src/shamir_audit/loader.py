"""Share file parsing.

The input document lists the threshold under ``keys`` and one entry per
share keyed by its x coordinate, each value written in its own base::

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"}
    }
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from .errors import ShareFormatError
from .shares import Share, decode_value, validate_shares

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShareSet:
    shares: tuple[Share, ...]
    k: int
    n: Optional[int] = None


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise ShareFormatError(f"{what} must be an integer, got {value!r}")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ShareFormatError(f"{what} must be an integer, got {value!r}") from None


def parse_share(x_key: str, entry: Any) -> Share:
    if not isinstance(entry, Mapping):
        raise ShareFormatError(f"Share {x_key!r} must be an object with base and value")
    try:
        base = entry["base"]
        value = entry["value"]
    except KeyError as exc:
        raise ShareFormatError(f"Share {x_key!r} is missing {exc.args[0]!r}") from None
    return Share(
        x=_as_int(x_key, "Share key"),
        y=decode_value(str(value), _as_int(base, f"Base of share {x_key}")),
    )


def parse_share_document(document: Mapping[str, Any]) -> ShareSet:
    """Build a :class:`ShareSet` from an already decoded JSON document."""

    keys = document.get("keys")
    if not isinstance(keys, Mapping) or "k" not in keys:
        raise ShareFormatError("Document has no keys.k threshold")
    k = _as_int(keys["k"], "keys.k")
    n = _as_int(keys["n"], "keys.n") if "n" in keys else None

    shares = []
    for key, entry in document.items():
        if key == "keys":
            continue
        if not key.strip().isdigit():
            logger.debug("Ignoring non-share entry %r", key)
            continue
        shares.append(parse_share(key, entry))
    shares = validate_shares(shares)

    if n is not None and n != len(shares):
        logger.warning("Document declares n=%d but holds %d shares", n, len(shares))
    return ShareSet(shares=tuple(shares), k=k, n=n)


def load_share_file(path: str | os.PathLike[str]) -> ShareSet:
    """Read and parse the share file at *path*."""

    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ShareFormatError(f"{path} is not UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise ShareFormatError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ShareFormatError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(document, Mapping):
        raise ShareFormatError(f"{path} must contain a JSON object")
    return parse_share_document(document)


__all__ = ["ShareSet", "load_share_file", "parse_share", "parse_share_document"]
