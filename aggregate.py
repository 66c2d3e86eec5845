import math
import threading

from data_structures import AggregateState, FaultError


class Aggregator:
    """
    Shared min / max / running mean over every pair distance.
    All three statistics are updated as one unit under a single lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._min = math.inf
        self._max = -math.inf
        self._mean = 0.0
        self._count = 0

    def record(self, distance):
        if not distance >= 0.0:  # also rejects NaN
            raise FaultError(f"invalid pair distance {distance!r}")
        with self._lock:
            self._count += 1
            if distance < self._min:
                self._min = distance
            if distance > self._max:
                self._max = distance
            # Welford update with the true sample count
            self._mean += (distance - self._mean) / self._count

    def snapshot(self):
        with self._lock:
            return AggregateState(self._min, self._max, self._mean, self._count)
