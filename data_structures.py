import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

import numpy as np


class AllocationError(Exception):
    """Pair-marker grid could not be allocated."""

    def __init__(self, nbytes):
        super().__init__(f"Could not allocate {nbytes} bytes")
        self.nbytes = nbytes


class FaultError(Exception):
    """Invariant violation inside the engine or the aggregator."""


class StarRecord(NamedTuple):
    id: int
    ra: float   # right ascension (degrees)
    dec: float  # declination (degrees)


class Catalog:
    """
    Ordered, read-only sequence of StarRecord.
    ra and dec are contiguous float64 copies of the coordinates so workers
    can index them without touching the records.
    """

    def __init__(self, records: Sequence[StarRecord]):
        self._records = tuple(records)
        self.ra = np.array([r.ra for r in self._records], dtype=np.float64)
        self.dec = np.array([r.dec for r in self._records], dtype=np.float64)
        self.ra.flags.writeable = False
        self.dec.flags.writeable = False

    def __len__(self):
        return len(self._records)

    def __getitem__(self, i):
        return self._records[i]

    def __iter__(self):
        return iter(self._records)

    @property
    def num_pairs(self):
        n = len(self._records)
        return n * (n - 1) // 2


class ThreadTask(NamedTuple):
    """Half-open outer index range [start_index, end_index) for one worker."""

    thread_id: int
    start_index: int
    end_index: int


@dataclass(frozen=True)
class AggregateState:
    min: float = math.inf
    max: float = -math.inf
    mean: float = 0.0
    sample_count: int = 0

    @property
    def has_data(self):
        return self.sample_count > 0


class PairMarker:
    """
    count x count uint8 grid recording which pairs were visited.
    Every entry is written by exactly one worker, so no lock is taken.
    """

    def __init__(self, count):
        nbytes = count * count * np.dtype(np.uint8).itemsize
        try:
            self.grid = np.zeros((count, count), dtype=np.uint8)
        except MemoryError:
            raise AllocationError(nbytes) from None

    def mark(self, i, j):
        if self.grid[i, j]:
            raise FaultError(f"pair ({i}, {j}) visited twice")
        self.grid[i, j] = 1
        self.grid[j, i] = 1

    def visited(self):
        """Number of unordered pairs marked so far."""
        # mark() always sets both cells
        return int(np.count_nonzero(self.grid)) // 2
