"""Vote-based trust classification of shares."""
from __future__ import annotations

import enum
from dataclasses import asdict, dataclass
from typing import Any, Literal, Sequence

from .enumeration import CandidateMap
from .errors import AmbiguousReconstruction, NoConsistentSubset
from .shares import Share

TieBreak = Literal["smallest", "fail"]
TIE_BREAKS: tuple[TieBreak, ...] = ("smallest", "fail")


class Tier(str, enum.Enum):
    BAD = "bad"
    SUSPICIOUS = "suspicious"
    TRUSTED = "trusted"


@dataclass(frozen=True)
class ShareVerdict:
    index: int
    x: int
    y: int
    include_count: int
    tier: Tier


@dataclass(frozen=True)
class AuditReport:
    """Outcome of a successful reconstruction run."""

    winning_secret: int
    total_winning_subsets: int
    per_share: tuple[ShareVerdict, ...]
    candidate_count: int = 1
    subsets_evaluated: int = 0

    def shares_in(self, tier: Tier) -> list[ShareVerdict]:
        return [verdict for verdict in self.per_share if verdict.tier is tier]

    @property
    def clean(self) -> bool:
        return all(verdict.tier is Tier.TRUSTED for verdict in self.per_share)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["per_share"] = [
            {**asdict(verdict), "tier": verdict.tier.value} for verdict in self.per_share
        ]
        return data


def tier_for(include_count: int, total_winning: int) -> Tier:
    if include_count == 0:
        return Tier.BAD
    if include_count * 2 < total_winning:
        return Tier.SUSPICIOUS
    return Tier.TRUSTED


def select_winner(candidates: CandidateMap, *, tie_break: TieBreak = "smallest") -> int:
    """Return the secret produced by the largest number of subsets.

    Equal support is resolved towards the numerically smallest secret, or
    refused with :class:`AmbiguousReconstruction` when ``tie_break="fail"``.
    """

    if not candidates:
        raise NoConsistentSubset(0, 0)
    if tie_break not in TIE_BREAKS:
        raise ValueError(f"Unknown tie-break policy {tie_break!r}")
    best = max(len(subsets) for subsets in candidates.values())
    leaders = sorted(secret for secret, subsets in candidates.items() if len(subsets) == best)
    if len(leaders) > 1 and tie_break == "fail":
        raise AmbiguousReconstruction(leaders, best)
    return leaders[0]


def classify(
    candidates: CandidateMap,
    shares: Sequence[Share],
    *,
    tie_break: TieBreak = "smallest",
    subsets_evaluated: int = 0,
) -> AuditReport:
    """Pick the winning secret and grade every share by its support for it."""

    winner = select_winner(candidates, tie_break=tie_break)
    winning = candidates[winner]
    counts = [0] * len(shares)
    for subset in winning:
        for index in subset:
            counts[index] += 1
    total = len(winning)
    verdicts = tuple(
        ShareVerdict(
            index=index,
            x=share.x,
            y=share.y,
            include_count=counts[index],
            tier=tier_for(counts[index], total),
        )
        for index, share in enumerate(shares)
    )
    return AuditReport(
        winning_secret=winner,
        total_winning_subsets=total,
        per_share=verdicts,
        candidate_count=len(candidates),
        subsets_evaluated=subsets_evaluated,
    )


__all__ = [
    "AuditReport",
    "ShareVerdict",
    "TIE_BREAKS",
    "TieBreak",
    "Tier",
    "classify",
    "select_winner",
    "tier_for",
]
