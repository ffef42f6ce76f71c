"""Prometheus counters for reconstruction runs."""
from __future__ import annotations

from prometheus_client import Counter

SUBSETS_EVALUATED = Counter(
    "shamir_audit_subsets_evaluated",
    "Threshold-sized subsets passed through interpolation",
)
SUBSETS_REJECTED = Counter(
    "shamir_audit_subsets_rejected",
    "Subsets whose interpolation at zero was not an integer",
)
RUNS = Counter(
    "shamir_audit_runs",
    "Reconstruction runs by final status",
    ["status"],
)


__all__ = ["RUNS", "SUBSETS_EVALUATED", "SUBSETS_REJECTED"]
