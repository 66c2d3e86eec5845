import logging
import threading
from multiprocessing.pool import ThreadPool

from aggregate import Aggregator
from data_structures import FaultError, PairMarker
from partition import partition
from workers import pairwise_worker

logger = logging.getLogger(__name__)


def getAngularSeparations(catalog, num_threads=1, track_pairs=False, stop_event=None):
    """
    Min, max and mean angular separation over all unordered pairs of catalog.
    catalog       Catalog of stars
    num_threads   size of the fixed worker pool, one contiguous block each
    track_pairs   allocate a PairMarker and check no pair is visited twice
    stop_event    optional threading.Event; workers stop between outer rows once set
    returns       final AggregateState
    """
    tasks = partition(len(catalog), num_threads)
    for task in tasks:
        logger.debug("thread %d: rows [%d, %d)", *task)

    # Allocated before any thread starts so an AllocationError leaves nothing running
    markers = PairMarker(len(catalog)) if track_pairs else None
    aggregator = Aggregator()

    # Each pool thread holds its block at the barrier until all blocks are
    # claimed, so block k runs on exactly one thread and no thread runs two.
    barrier = threading.Barrier(num_threads)

    def run_block(args):
        barrier.wait()
        return pairwise_worker(args)

    args = [(task, catalog, aggregator, markers, stop_event) for task in tasks]
    with ThreadPool(num_threads) as pool:
        results = pool.map(run_block, args, chunksize=1)

    for task, pairs in zip(tasks, results):
        logger.debug("thread %d computed %d pairs", task.thread_id, pairs)

    state = aggregator.snapshot()
    cancelled = stop_event is not None and stop_event.is_set()
    if not cancelled and state.sample_count != catalog.num_pairs:
        raise FaultError(
            f"aggregated {state.sample_count} samples, expected {catalog.num_pairs}"
        )
    if markers is not None and markers.visited() != state.sample_count:
        raise FaultError("pair marker count does not match aggregated samples")
    return state
