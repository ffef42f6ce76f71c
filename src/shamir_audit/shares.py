"""Share model and ingestion checks."""
from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Iterable

from .errors import DuplicateAbscissa, ShareFormatError

_DIGITS = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class Share:
    """A single ``(x, y)`` point of the sharing polynomial."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if isinstance(self.x, bool) or not isinstance(self.x, int):
            raise ShareFormatError(f"Share abscissa must be an integer, got {self.x!r}")
        if isinstance(self.y, bool) or not isinstance(self.y, int):
            raise ShareFormatError(f"Share value must be an integer, got {self.y!r}")
        if self.x <= 0:
            raise ShareFormatError(f"Share abscissa must be positive, got x={self.x}")
        if self.y < 0:
            raise ShareFormatError(f"Share value must be non-negative, got y={self.y}")


def decode_value(value: str, base: int) -> int:
    """Decode *value* written in *base* (2-36) into an integer."""

    if not 2 <= base <= 36:
        raise ShareFormatError(f"Unsupported base {base}: expected 2..36")
    digits = value.strip().lower()
    if not digits:
        raise ShareFormatError("Empty share value")
    allowed = _DIGITS[:base]
    bad = sorted({ch for ch in digits if ch not in allowed})
    if bad:
        raise ShareFormatError(
            f"Value {value!r} has digits {''.join(bad)!r} not valid in base {base}"
        )
    return int(digits, base)


def validate_shares(shares: Iterable[Share]) -> list[Share]:
    """Return *shares* as a list, rejecting any repeated abscissa."""

    seen: dict[int, int] = {}
    result: list[Share] = []
    for index, share in enumerate(shares):
        if share.x in seen:
            raise DuplicateAbscissa(share.x, seen[share.x], index)
        seen[share.x] = index
        result.append(share)
    return result


__all__ = ["Share", "decode_value", "validate_shares"]
