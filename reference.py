"""
Independent recomputations of the pair statistics, used to check the
threaded engine.
"""
import numpy as np
import dask.array as da

from angular import angularDistance_numexpr, angularDistance_numpy
from config import REFERENCE_CHUNK_SIZE
from data_structures import AggregateState


def _state(total, lo, hi, n):
    if n == 0:
        return AggregateState()
    return AggregateState(float(lo), float(hi), float(total) / n, int(n))


def getSeparationStats_numpy(ra, dec):
    """
    Sequential recomputation over the strict upper triangle.
    ra, dec are length-N arrays of degrees.
    """
    ra = np.asarray(ra, dtype=np.float64)
    dec = np.asarray(dec, dtype=np.float64)
    i, j = np.triu_indices(ra.shape[0], k=1)
    d = angularDistance_numpy(ra[i], dec[i], ra[j], dec[j])
    if d.size == 0:
        return AggregateState()
    return _state(np.sum(d), np.min(d), np.max(d), d.size)


def _block_stats(ra_i, dec_i, ra_j, dec_j, block_info=None):
    """
    Sum / min / max / count of the strict-upper-triangle entries in one block.
    """
    i0 = block_info[0]["array-location"][0][0]
    j0 = block_info[2]["array-location"][1][0]
    M, N = ra_i.shape[0], ra_j.shape[1]
    d = angularDistance_numexpr(ra_i, dec_i, ra_j, dec_j)
    rows = np.arange(i0, i0 + M).reshape((M, 1))
    cols = np.arange(j0, j0 + N).reshape((1, N))
    d = d[cols > rows]
    out = np.empty((1, 1, 4), dtype=np.float64)
    if d.size == 0:
        out[0, 0] = (0.0, np.inf, -np.inf, 0.0)
    else:
        out[0, 0] = (d.sum(), d.min(), d.max(), d.size)
    return out


def getSeparationStats_dask(ra, dec, chunk_size=REFERENCE_CHUNK_SIZE):
    """
    Blocked recomputation with dask.array: each (row chunk, column chunk)
    block reduces its upper-triangle distances to (sum, min, max, count).
    """
    ra = np.asarray(ra, dtype=np.float64)
    dec = np.asarray(dec, dtype=np.float64)
    N = ra.shape[0]
    if N < 2:
        return AggregateState()

    ra_i = da.from_array(ra.reshape((N, 1)), chunks=(chunk_size, 1))
    dec_i = da.from_array(dec.reshape((N, 1)), chunks=(chunk_size, 1))
    ra_j = da.from_array(ra.reshape((1, N)), chunks=(1, chunk_size))
    dec_j = da.from_array(dec.reshape((1, N)), chunks=(1, chunk_size))

    blocks = da.map_blocks(
        _block_stats, ra_i, dec_i, ra_j, dec_j,
        dtype=np.float64, chunks=(1, 1, 4), new_axis=2,
        meta=np.array((), dtype=np.float64),
    )
    total, lo, hi, n = da.compute(
        blocks[..., 0].sum(), blocks[..., 1].min(), blocks[..., 2].max(), blocks[..., 3].sum()
    )
    return _state(total, lo, hi, n)
