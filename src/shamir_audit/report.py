"""Human-readable transcript of a reconstruction run."""
from __future__ import annotations

from tabulate import tabulate

from .classifier import AuditReport, Tier
from .engine import ReconstructionOutcome, Status


def render_report(report: AuditReport) -> str:
    total = report.total_winning_subsets
    lines = [
        f"Secret: {report.winning_secret}",
        "",
        f"Winning-subset-count for secret = {total}",
        "",
        "Share inclusion in winning subsets:",
        tabulate(
            [
                (v.index, v.x, f"{v.include_count}/{total}", v.tier.value)
                for v in report.per_share
            ],
            headers=["index", "x", "included", "tier"],
        ),
        "",
    ]

    bad = report.shares_in(Tier.BAD)
    suspicious = report.shares_in(Tier.SUSPICIOUS)
    if not bad and not suspicious:
        lines.append(
            "No wrong shares detected (all shares appear frequently in winning subsets)."
        )
    if bad:
        lines.append("Highly suspicious (likely wrong) share indices:")
        lines.extend(f"  index {v.index} -> x={v.x}, y={v.y}" for v in bad)
    if suspicious:
        lines.append(
            "Possibly suspicious shares (appear in fewer than half the winning subsets):"
        )
        lines.extend(
            f"  index {v.index} -> x={v.x}, y={v.y} (included {v.include_count}/{total})"
            for v in suspicious
        )
    return "\n".join(lines)


def render_failure(outcome: ReconstructionOutcome) -> str:
    if outcome.status is Status.NO_SHARES_OR_INVALID_THRESHOLD:
        return f"No shares parsed or invalid k. {outcome.message}".strip()
    if outcome.status is Status.NO_CONSISTENT_SUBSET:
        return f"No valid subset produced an integer secret. {outcome.message}".strip()
    raise ValueError("render_failure() called on a successful outcome")


__all__ = ["render_failure", "render_report"]
