"""Exhaustive evaluation of threshold-sized share subsets."""
from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from math import comb
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from tqdm import tqdm

from .errors import EnumerationCancelled, EnumerationLimitExceeded
from .interpolation import Reconstructed, interpolate_at_zero
from .metrics import SUBSETS_EVALUATED, SUBSETS_REJECTED
from .shares import Share

logger = logging.getLogger(__name__)

MAX_UNIT_SIZE = 4096

Subset = Tuple[int, ...]
CandidateMap = Dict[int, List[Subset]]


class SubsetSpace:
    """All ``k``-combinations of ``range(m)`` in lexicographic order.

    Iterating the space twice yields the same sequence. ``start`` and ``stop``
    restrict it to a contiguous rank range, which is how :meth:`partitions`
    splits the work into disjoint, equally sized units.
    """

    def __init__(self, m: int, k: int, *, start: int = 0, stop: Optional[int] = None) -> None:
        if m < 0 or k < 0:
            raise ValueError("m and k must be non-negative")
        if start < 0 or (stop is not None and stop < start):
            raise ValueError("start and stop must form a non-negative range")
        self.m = m
        self.k = k
        self.start = start
        self.stop = stop

    def _bounds(self) -> Tuple[int, int]:
        total = comb(self.m, self.k)
        stop = total if self.stop is None else min(self.stop, total)
        return min(self.start, stop), stop

    def __len__(self) -> int:
        start, stop = self._bounds()
        return stop - start

    def _unrank(self, rank: int) -> List[int]:
        combination = []
        low = 0
        for position in range(self.k):
            remaining = self.k - position - 1
            while True:
                block = comb(self.m - low - 1, remaining)
                if rank < block:
                    break
                rank -= block
                low += 1
            combination.append(low)
            low += 1
        return combination

    def __iter__(self) -> Iterator[Subset]:
        start, stop = self._bounds()
        if start == 0:
            yield from itertools.islice(itertools.combinations(range(self.m), self.k), stop)
            return
        current = self._unrank(start)
        for _ in range(stop - start):
            yield tuple(current)
            i = self.k - 1
            while i >= 0 and current[i] == self.m - self.k + i:
                i -= 1
            if i < 0:
                return
            current[i] += 1
            for j in range(i + 1, self.k):
                current[j] = current[j - 1] + 1

    def partitions(self, size: int) -> list["SubsetSpace"]:
        """Split into units of at most *size* subsets; concatenated they equal ``self``."""

        if size < 1:
            raise ValueError(f"size must be positive, got {size}")
        start, stop = self._bounds()
        return [
            SubsetSpace(self.m, self.k, start=offset, stop=min(offset + size, stop))
            for offset in range(start, stop, size)
        ]

    def __repr__(self) -> str:
        return f"SubsetSpace(m={self.m}, k={self.k}, start={self.start}, stop={self.stop})"


@dataclass
class UnitResult:
    candidates: CandidateMap = field(default_factory=dict)
    evaluated: int = 0
    rejected: int = 0


def merge_candidates(target: CandidateMap, other: CandidateMap) -> CandidateMap:
    """Append the subset lists of *other* into *target* per secret value."""

    for secret, subsets in other.items():
        target.setdefault(secret, []).extend(subsets)
    return target


def evaluate_subsets(
    shares: Sequence[Share],
    subsets: Iterable[Subset],
    *,
    cancel: Optional[threading.Event] = None,
    bar: Optional[tqdm] = None,
) -> UnitResult:
    """Interpolate every subset and group the integer results by secret."""

    result = UnitResult()
    for subset in subsets:
        if cancel is not None and cancel.is_set():
            raise EnumerationCancelled(result.evaluated)
        outcome = interpolate_at_zero([shares[index] for index in subset])
        result.evaluated += 1
        if isinstance(outcome, Reconstructed):
            result.candidates.setdefault(outcome.secret, []).append(subset)
        else:
            result.rejected += 1
            logger.debug("Subset %s rejected: interpolation gives %s", subset, outcome.value)
        if bar is not None:
            bar.update(1)
    return result


def _evaluate_unit(shares: Sequence[Share], space: SubsetSpace) -> UnitResult:
    return evaluate_subsets(shares, space)


def enumerate_candidates(
    shares: Sequence[Share],
    k: int,
    *,
    workers: int = 1,
    max_subsets: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
    progress: bool = False,
) -> CandidateMap:
    """Map every integer secret to the subsets of *shares* that produce it.

    Subsets whose interpolation is not an integer are dropped. With
    ``workers > 1`` fixed-size rank ranges run in a process pool and their
    maps are merged in rank order, which keeps the result identical to a
    serial run.
    """

    shares = tuple(shares)
    space = SubsetSpace(len(shares), k)
    total = len(space)
    if max_subsets is not None and total > max_subsets:
        raise EnumerationLimitExceeded(total, max_subsets)
    logger.debug("Evaluating %d subsets of size %d with %d worker(s)", total, k, workers)

    with tqdm(total=total, disable=not progress, desc="subsets", unit="subset") as bar:
        if workers > 1 and total > 1:
            result = _run_parallel(shares, space, workers, cancel, bar)
        else:
            result = evaluate_subsets(shares, space, cancel=cancel, bar=bar)

    SUBSETS_EVALUATED.inc(result.evaluated)
    SUBSETS_REJECTED.inc(result.rejected)
    logger.debug(
        "%d subsets evaluated, %d rejected, %d distinct secrets",
        result.evaluated,
        result.rejected,
        len(result.candidates),
    )
    return result.candidates


def _run_parallel(
    shares: Tuple[Share, ...],
    space: SubsetSpace,
    workers: int,
    cancel: Optional[threading.Event],
    bar: tqdm,
) -> UnitResult:
    size = min(MAX_UNIT_SIZE, max(1, len(space) // (workers * 4)))
    merged = UnitResult()
    executor = ProcessPoolExecutor(max_workers=workers)
    try:
        futures = [executor.submit(_evaluate_unit, shares, unit) for unit in space.partitions(size)]
        for future in futures:
            if cancel is not None and cancel.is_set():
                raise EnumerationCancelled(merged.evaluated)
            part = future.result()
            merge_candidates(merged.candidates, part.candidates)
            merged.evaluated += part.evaluated
            merged.rejected += part.rejected
            bar.update(part.evaluated)
    except BaseException:
        # queued units are dropped, running ones are not waited for
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown()
    return merged


__all__ = [
    "CandidateMap",
    "MAX_UNIT_SIZE",
    "Subset",
    "SubsetSpace",
    "UnitResult",
    "enumerate_candidates",
    "evaluate_subsets",
    "merge_candidates",
]
