"""Exact reconstruction and integrity audit of Shamir-style secret shares."""

from __future__ import annotations

from .classifier import AuditReport, ShareVerdict, Tier, classify, select_winner
from .engine import ReconstructionOutcome, Status, audit, reconstruct
from .enumeration import SubsetSpace, enumerate_candidates, merge_candidates
from .errors import (
    AmbiguousReconstruction,
    DuplicateAbscissa,
    EmptyShareSet,
    EnumerationCancelled,
    EnumerationLimitExceeded,
    InvalidThreshold,
    NoConsistentSubset,
    ReconstructionError,
    ShareFormatError,
)
from .interpolation import NonIntegerResult, Reconstructed, interpolate_at_zero
from .loader import ShareSet, load_share_file
from .shares import Share, decode_value

__version__ = "0.1.0"

__all__ = [
    "AmbiguousReconstruction",
    "AuditReport",
    "DuplicateAbscissa",
    "EmptyShareSet",
    "EnumerationCancelled",
    "EnumerationLimitExceeded",
    "InvalidThreshold",
    "NoConsistentSubset",
    "NonIntegerResult",
    "Reconstructed",
    "ReconstructionError",
    "ReconstructionOutcome",
    "Share",
    "ShareFormatError",
    "ShareSet",
    "ShareVerdict",
    "Status",
    "SubsetSpace",
    "Tier",
    "audit",
    "classify",
    "decode_value",
    "enumerate_candidates",
    "interpolate_at_zero",
    "load_share_file",
    "merge_candidates",
    "reconstruct",
    "select_winner",
]
