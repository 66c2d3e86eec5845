import logging
import os

# Catalog parameters
NUM_STARS = 50000                          # maximum catalog capacity
DEFAULT_CATALOG = os.environ.get("FINDANGULAR_CATALOG", "data/tycho-trimmed.csv")

# Run parameters
DEFAULT_THREADS = 1
REFERENCE_CHUNK_SIZE = 1024                # block edge for the dask recomputation


def logLevel(name=None):
    """
    Logging level named by FINDANGULAR_LOG_LEVEL, WARNING when unset or unknown.
    """
    if name is None:
        name = os.environ.get("FINDANGULAR_LOG_LEVEL", "WARNING")
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING
