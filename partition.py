from data_structures import ThreadTask


def partition(count, num_threads):
    """
    Split the outer pair index [0, count) into num_threads contiguous blocks.
    Block k covers [k*count//T, (k+1)*count//T); the last block ends at count,
    so the blocks are disjoint and cover every index. Blocks may be empty
    when count < num_threads.
    """
    if num_threads < 1:
        raise ValueError(f"num_threads must be >= 1, got {num_threads}")
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    tasks = []
    for k in range(num_threads):
        start = k * count // num_threads
        end = count if k == num_threads - 1 else (k + 1) * count // num_threads
        tasks.append(ThreadTask(k, start, end))
    return tasks
