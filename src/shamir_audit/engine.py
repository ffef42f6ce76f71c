"""One reconstruction run: validation, enumeration and classification."""
from __future__ import annotations

import enum
import hashlib
import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Optional

from .audit_log import AuditTrail
from .classifier import AuditReport, Tier, classify
from .enumeration import SubsetSpace, enumerate_candidates
from .errors import (
    EmptyShareSet,
    InvalidThreshold,
    NoConsistentSubset,
    ReconstructionError,
)
from .metrics import RUNS
from .policy import AuditPolicy
from .policy import policy as default_policy
from .shares import Share, validate_shares

logger = logging.getLogger(__name__)


class Status(str, enum.Enum):
    SUCCESS = "success"
    NO_SHARES_OR_INVALID_THRESHOLD = "no_shares_or_invalid_threshold"
    NO_CONSISTENT_SUBSET = "no_consistent_subset"


@dataclass(frozen=True)
class ReconstructionOutcome:
    status: Status
    report: Optional[AuditReport] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS


def _secret_digest(secret: int) -> str:
    return hashlib.sha256(str(secret).encode("ascii")).hexdigest()


def _record(policy: AuditPolicy, event: str, details: dict) -> None:
    if not policy.audit_dir:
        return
    path = AuditTrail(policy.audit_dir).record(event, details=details)
    logger.debug("Audit record written to %s", path)


def audit(
    shares: Iterable[Share],
    k: int,
    *,
    policy: AuditPolicy | None = None,
    cancel: Optional[threading.Event] = None,
) -> AuditReport:
    """Reconstruct the secret behind *shares* and grade every share.

    Raises :class:`InvalidThreshold`, :class:`EmptyShareSet` or
    :class:`DuplicateAbscissa` before any interpolation, and
    :class:`NoConsistentSubset` when no subset yields an integer.
    """

    policy = policy or default_policy
    if isinstance(k, bool) or not isinstance(k, int) or k <= 0:
        raise InvalidThreshold(k)
    shares = validate_shares(shares)
    if not shares:
        raise EmptyShareSet()

    total = len(SubsetSpace(len(shares), k))
    logger.info("Reconstructing from %d shares with threshold %d (%d subsets)", len(shares), k, total)
    candidates = enumerate_candidates(
        shares,
        k,
        workers=policy.workers,
        max_subsets=policy.max_subsets,
        cancel=cancel,
        progress=policy.progress,
    )
    if not candidates:
        raise NoConsistentSubset(len(shares), k, total)

    report = classify(candidates, shares, tie_break=policy.tie_break, subsets_evaluated=total)
    bad = [verdict.index for verdict in report.shares_in(Tier.BAD)]
    suspicious = [verdict.index for verdict in report.shares_in(Tier.SUSPICIOUS)]
    logger.info(
        "Secret supported by %d winning subsets out of %d candidates; bad=%s suspicious=%s",
        report.total_winning_subsets,
        report.candidate_count,
        bad,
        suspicious,
    )
    _record(
        policy,
        "reconstruction.success",
        {
            "shares": len(shares),
            "k": k,
            "secret_sha256": _secret_digest(report.winning_secret),
            "winning_subsets": report.total_winning_subsets,
            "bad": bad,
            "suspicious": suspicious,
        },
    )
    return report


def reconstruct(
    shares: Iterable[Share],
    k: int,
    *,
    policy: AuditPolicy | None = None,
    cancel: Optional[threading.Event] = None,
) -> ReconstructionOutcome:
    """Run :func:`audit` and fold its expected failures into a status."""

    policy = policy or default_policy
    try:
        report = audit(shares, k, policy=policy, cancel=cancel)
    except (InvalidThreshold, EmptyShareSet) as exc:
        outcome = ReconstructionOutcome(Status.NO_SHARES_OR_INVALID_THRESHOLD, message=str(exc))
    except NoConsistentSubset as exc:
        outcome = ReconstructionOutcome(Status.NO_CONSISTENT_SUBSET, message=str(exc))
        _record(policy, "reconstruction.failed", {"k": k, "reason": str(exc)})
    except ReconstructionError:
        RUNS.labels(status="error").inc()
        raise
    else:
        outcome = ReconstructionOutcome(Status.SUCCESS, report=report)
    RUNS.labels(status=outcome.status.value).inc()
    if not outcome.ok:
        logger.warning("Reconstruction failed: %s", outcome.message)
    return outcome


__all__ = ["ReconstructionOutcome", "Status", "audit", "reconstruct"]
