import threading

import numpy as np
import pytest
from data_structures import Catalog, FaultError, PairMarker, StarRecord
from engine import getAngularSeparations
from workers import pairwise_worker
from reference import getSeparationStats_dask, getSeparationStats_numpy

# Set up common test data
N = 300
np.random.seed(42)
ra = np.random.uniform(0.0, 360.0, N)
dec = np.degrees(np.arcsin(np.random.uniform(-1.0, 1.0, N)))
catalog = Catalog([StarRecord(k + 1, float(ra[k]), float(dec[k])) for k in range(N)])

expected = getSeparationStats_numpy(ra, dec)
results = {T: getAngularSeparations(catalog, T) for T in (1, 2, 4, 8)}


@pytest.mark.parametrize("T", [1, 2, 4, 8])
def test_pair_count(T):
    assert results[T].sample_count == N * (N - 1) // 2, "pair counted twice or skipped!"


@pytest.mark.parametrize("T", [1, 2, 4, 8])
def test_ordering(T):
    state = results[T]
    assert state.min <= state.mean <= state.max


@pytest.mark.parametrize("T", [1, 2, 4, 8])
def test_matches_sequential(T):
    state = results[T]
    assert np.allclose(state.min, expected.min, atol=1e-6), "min differs!"
    assert np.allclose(state.max, expected.max, atol=1e-6), "max differs!"
    assert np.allclose(state.mean, expected.mean, atol=1e-6), "mean differs!"


def test_deterministic_across_threads():
    assert results[1].min == results[8].min
    assert results[1].max == results[8].max
    assert results[1].mean == pytest.approx(results[8].mean, rel=1e-9)


def test_dask_reference_agrees():
    blocked = getSeparationStats_dask(ra, dec, chunk_size=64)
    assert blocked.sample_count == expected.sample_count
    assert np.allclose(blocked.min, expected.min, atol=1e-6), "min differs!"
    assert np.allclose(blocked.max, expected.max, atol=1e-6), "max differs!"
    assert np.allclose(blocked.mean, expected.mean, atol=1e-6), "mean differs!"


def test_orthogonal_catalog():
    stars = Catalog([StarRecord(1, 0.0, 0.0), StarRecord(2, 90.0, 0.0), StarRecord(3, 0.0, 90.0)])
    for T in (1, 2, 4):
        state = getAngularSeparations(stars, T)
        assert state.sample_count == 3
        assert state.min == pytest.approx(90.0)
        assert state.max == pytest.approx(90.0)
        assert state.mean == pytest.approx(90.0)


@pytest.mark.parametrize("size", [0, 1])
def test_no_pairs(size):
    stars = Catalog([StarRecord(k, 10.0 * k, 0.0) for k in range(size)])
    state = getAngularSeparations(stars, 4)
    assert state.sample_count == 0
    assert not state.has_data
    assert not getSeparationStats_numpy(stars.ra, stars.dec).has_data
    assert not getSeparationStats_dask(stars.ra, stars.dec).has_data


def test_more_threads_than_stars():
    stars = Catalog([StarRecord(k, 10.0 * k, 5.0 * k) for k in range(5)])
    assert getAngularSeparations(stars, 8).sample_count == 10


def test_pair_marker_tracking():
    small = Catalog(list(catalog)[:50])
    state = getAngularSeparations(small, 4, track_pairs=True)
    assert state.sample_count == 50 * 49 // 2


def test_pair_marker_rejects_revisit():
    markers = PairMarker(4)
    markers.mark(0, 1)
    with pytest.raises(FaultError):
        markers.mark(1, 0)
    assert markers.visited() == 1


def test_cancelled_run_stops_early():
    stop = threading.Event()
    stop.set()
    state = getAngularSeparations(catalog, 4, stop_event=stop)
    assert state.sample_count == 0, "workers ignored the stop flag"


def test_worker_failure_aborts_run():
    bad = Catalog([StarRecord(1, 0.0, 0.0), StarRecord(2, float("nan"), 0.0), StarRecord(3, 1.0, 1.0)])
    with pytest.raises(ValueError):
        getAngularSeparations(bad, 2)


def test_one_block_per_thread(monkeypatch):
    import engine
    runners = {}
    lock = threading.Lock()

    def recording_worker(args):
        with lock:
            runners[args[0].thread_id] = threading.get_ident()
        return pairwise_worker(args)

    monkeypatch.setattr(engine, "pairwise_worker", recording_worker)
    state = getAngularSeparations(Catalog(list(catalog)[:40]), 8)
    assert state.sample_count == 40 * 39 // 2
    assert sorted(runners) == list(range(8)), "a block was not run"
    assert len(set(runners.values())) == 8, "one thread ran two blocks"


def test_pair_marker_visited_count():
    markers = PairMarker(5)
    for i, j in [(0, 1), (0, 4), (2, 3)]:
        markers.mark(i, j)
    assert markers.visited() == 3
