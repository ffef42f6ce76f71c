"""Shared fixtures for the test-suite."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpers import SAMPLE_DOCUMENT, make_shares
from shamir_audit.shares import Share


@pytest.fixture
def line_shares() -> list[Share]:
    # y = 5 + x
    return make_shares([5, 1], [1, 2, 3])


@pytest.fixture
def corrupted_shares() -> list[Share]:
    # x=3 should be 8
    return [Share(1, 6), Share(2, 7), Share(3, 9), Share(4, 9)]


@pytest.fixture
def share_file(tmp_path) -> Path:
    path = tmp_path / "input.json"
    path.write_text(json.dumps(SAMPLE_DOCUMENT, indent=2))
    return path
