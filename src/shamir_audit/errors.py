"""Error taxonomy for reconstruction runs."""
from __future__ import annotations

from typing import Sequence


class ReconstructionError(RuntimeError):
    """Base class for failures that end a reconstruction run."""


class ShareFormatError(ReconstructionError):
    """Raised when a share or a share file cannot be decoded."""


class InvalidThreshold(ReconstructionError):
    """Raised when the threshold ``k`` is not a positive integer."""

    def __init__(self, k: int) -> None:
        super().__init__(f"Invalid threshold k={k}: must be a positive integer")
        self.k = k


class EmptyShareSet(ReconstructionError):
    """Raised when no shares were supplied."""

    def __init__(self) -> None:
        super().__init__("No shares supplied")


class DuplicateAbscissa(ReconstructionError):
    """Raised when two shares use the same x coordinate."""

    def __init__(self, x: int, first: int | None = None, second: int | None = None) -> None:
        if first is None or second is None:
            message = f"Duplicate share abscissa x={x}"
        else:
            message = f"Duplicate share abscissa x={x} at indices {first} and {second}"
        super().__init__(message)
        self.x = x
        self.indices = (first, second)

    def __reduce__(self):
        # may be raised inside a worker process
        return type(self), (self.x, *self.indices)


class NoConsistentSubset(ReconstructionError):
    """Raised when no threshold-sized subset interpolates to an integer."""

    def __init__(self, share_count: int, k: int, evaluated: int = 0) -> None:
        super().__init__(
            "No valid threshold combination found "
            f"({evaluated} subsets of size {k} from {share_count} shares)"
        )
        self.share_count = share_count
        self.k = k
        self.evaluated = evaluated


class AmbiguousReconstruction(ReconstructionError):
    """Raised when several secrets share the maximal support and ties are refused."""

    def __init__(self, secrets: Sequence[int], support: int) -> None:
        listed = ", ".join(str(secret) for secret in secrets)
        super().__init__(f"Secrets {listed} are tied with {support} winning subsets each")
        self.secrets = tuple(secrets)
        self.support = support


class EnumerationLimitExceeded(ReconstructionError):
    """Raised when the subset space is larger than the configured bound."""

    def __init__(self, total: int, limit: int) -> None:
        super().__init__(f"{total} subsets to evaluate exceeds the limit of {limit}")
        self.total = total
        self.limit = limit


class AuditTrailError(ReconstructionError):
    """Raised when a run record cannot be written to the audit trail."""


class EnumerationCancelled(ReconstructionError):
    """Raised when a running enumeration is cancelled by the caller."""

    def __init__(self, evaluated: int) -> None:
        super().__init__(f"Enumeration cancelled after {evaluated} subsets")
        self.evaluated = evaluated


__all__ = [
    "AmbiguousReconstruction",
    "AuditTrailError",
    "DuplicateAbscissa",
    "EmptyShareSet",
    "EnumerationCancelled",
    "EnumerationLimitExceeded",
    "InvalidThreshold",
    "NoConsistentSubset",
    "ReconstructionError",
    "ShareFormatError",
]
