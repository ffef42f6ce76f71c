# SPDX-FileCopyrightText: 2025 shamir-audit contributors
# SPDX-License-Identifier: MIT
"""Command line interface for share reconstruction and auditing."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from .classifier import TIE_BREAKS
from .engine import Status, reconstruct
from .errors import ReconstructionError
from .loader import load_share_file
from .policy import load_policy
from .report import render_failure, render_report

EXIT_OK = 0
EXIT_NO_CONSISTENT_SUBSET = 1
EXIT_INVALID_INPUT = 2

_EXIT_CODES = {
    Status.SUCCESS: EXIT_OK,
    Status.NO_CONSISTENT_SUBSET: EXIT_NO_CONSISTENT_SUBSET,
    Status.NO_SHARES_OR_INVALID_THRESHOLD: EXIT_INVALID_INPUT,
}

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_path", default="input.json", type=click.Path(dir_okay=False))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML policy file.")
@click.option("--workers", type=click.IntRange(min=1), help="Worker processes for subset evaluation.")
@click.option("--max-subsets", type=click.IntRange(min=1), help="Refuse runs with more subsets than this.")
@click.option("--tie-break", type=click.Choice(TIE_BREAKS), help="How to resolve equally supported secrets.")
@click.option("--audit-dir", type=click.Path(file_okay=False), help="Append a signed record of the run here.")
@click.option("--progress/--no-progress", default=None, help="Show a progress bar.")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity on stderr.",
)
def main(
    input_path: str,
    config_path: str | None,
    workers: int | None,
    max_subsets: int | None,
    tie_break: str | None,
    audit_dir: str | None,
    progress: bool | None,
    as_json: bool,
    log_level: str | None,
) -> None:
    """Reconstruct the secret in INPUT_PATH and flag corrupted shares."""

    overrides = {
        "workers": workers,
        "max_subsets": max_subsets,
        "tie_break": tie_break,
        "audit_dir": audit_dir,
        "progress": progress,
        "log_level": log_level.upper() if log_level else None,
    }
    try:
        policy = load_policy(config_path)
        policy = replace(policy, **{key: value for key, value in overrides.items() if value is not None})
    except (OSError, ValueError, TypeError) as exc:
        click.echo(f"Invalid policy: {exc}", err=True)
        sys.exit(EXIT_INVALID_INPUT)
    logging.basicConfig(level=policy.log_level, format=LOG_FORMAT, stream=sys.stderr)

    if not Path(input_path).exists():
        click.echo(f"File not found: {input_path} - put input.json at project root.", err=True)
        sys.exit(EXIT_INVALID_INPUT)

    try:
        share_set = load_share_file(input_path)
        outcome = reconstruct(share_set.shares, share_set.k, policy=policy)
    except ReconstructionError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_INVALID_INPUT)

    if as_json:
        payload = {"status": outcome.status.value, "message": outcome.message}
        if outcome.report is not None:
            payload.update(outcome.report.to_dict())
        click.echo(json.dumps(payload, indent=2))
    elif outcome.ok:
        click.echo(render_report(outcome.report))
    else:
        click.echo(render_failure(outcome), err=True)

    sys.exit(_EXIT_CODES[outcome.status])


if __name__ == "__main__":
    main()
