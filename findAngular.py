"""
findAngular: mean, minimum and maximum angular separation between every
pair of stars in a catalog, computed on a fixed pool of threads.
"""
import argparse
import logging
import sys
import time

from catalog import CatalogError, loadCatalog
from config import DEFAULT_CATALOG, DEFAULT_THREADS, logLevel
from data_structures import AllocationError
from engine import getAngularSeparations

USAGE = """\
Use: findAngular [options]
Where options are:
-t          Number of threads to use
-f          Catalog file to read
-m          Track visited pairs in an N x N marker grid
-h          Show this help"""


class UsageRequested(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    # Bad flags are a help request, not a failure
    def error(self, message):
        raise UsageRequested(message)


def _positive_int(text):
    value = int(text)
    if value < 1:
        raise ValueError(text)
    return value


def build_parser():
    parser = _Parser(prog="findAngular", add_help=False)
    parser.add_argument("-t", dest="threads", type=_positive_int, default=DEFAULT_THREADS)
    parser.add_argument("-f", dest="path", default=DEFAULT_CATALOG)
    parser.add_argument("-m", dest="track_pairs", action="store_true")
    parser.add_argument("-h", dest="help", action="store_true")
    return parser


def report(state, elapsed):
    if state.has_data:
        print(f"Mean Distance: {state.mean:f} degrees")
        print(f"Minimum Distance: {state.min:f} degrees")
        print(f"Maximum Distance: {state.max:f} degrees")
    else:
        print("No pairs to compare")
    print(f"Time elapsed: {elapsed:f} seconds")


def main(argv=None):
    logging.basicConfig(level=logLevel(), format="%(levelname)s %(name)s: %(message)s")

    try:
        args = build_parser().parse_args(argv)
    except UsageRequested:
        print(USAGE)
        return 0
    if args.help:
        print(USAGE)
        return 0

    try:
        catalog = loadCatalog(args.path)
    except CatalogError as e:
        print(f"ERROR: {e}")
        return 1
    print(f"{len(catalog)} records read")

    start = time.perf_counter()
    try:
        state = getAngularSeparations(catalog, args.threads, track_pairs=args.track_pairs)
    except AllocationError as e:
        print(e)
        return 1
    report(state, time.perf_counter() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
