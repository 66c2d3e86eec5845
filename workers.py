# workers.py
from angular import angularDistance


def pairwise_worker(args):
    """
    Worker function for the thread pool.
    Each worker computes the angular separation of every pair (i, j), j > i,
    whose outer index i falls in its block, and feeds it to the aggregator.
    """
    task, catalog, aggregator, markers, stop_event = args
    ra, dec = catalog.ra, catalog.dec
    count = len(catalog)
    pairs = 0
    for i in range(task.start_index, task.end_index):
        if stop_event is not None and stop_event.is_set():
            break
        ra_i, dec_i = float(ra[i]), float(dec[i])
        for j in range(i, count):
            if j == i:
                continue
            distance = angularDistance(ra_i, dec_i, float(ra[j]), float(dec[j]))
            if markers is not None:
                markers.mark(i, j)
            aggregator.record(distance)
            pairs += 1
    return pairs
