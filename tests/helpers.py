"""Polynomial helpers for building genuine shares in tests."""
from __future__ import annotations

from typing import Sequence

from shamir_audit.shares import Share

SAMPLE_DOCUMENT = {
    "keys": {"n": 4, "k": 3},
    "1": {"base": "10", "value": "4"},
    "2": {"base": "2", "value": "111"},
    "3": {"base": "10", "value": "12"},
    "6": {"base": "4", "value": "213"},
}


def evaluate(coeffs: Sequence[int], x: int) -> int:
    y = 0
    for c in reversed(coeffs):
        y = y * x + c
    return y


def make_shares(coeffs: Sequence[int], xs: Sequence[int]) -> list[Share]:
    return [Share(x, evaluate(coeffs, x)) for x in xs]
