"""
Star catalog loading.

One record per line: integer id, right ascension and declination in degrees,
separated by whitespace.
"""
import logging
import math

from config import NUM_STARS
from data_structures import Catalog, StarRecord

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for catalog loading failures."""


class CatalogIOError(CatalogError):
    """Catalog file missing or unreadable."""


class ParseError(CatalogError):
    """Malformed catalog record."""

    def __init__(self, lineno, message):
        super().__init__(f"line {lineno} {message}")
        self.lineno = lineno


class CatalogCapacityError(CatalogError):
    """More records than the catalog can hold."""


def parseRecord(line, lineno):
    """
    Parse one catalog line into a StarRecord.
    line     is the raw text of the record
    lineno   is its 1-based position in the file (used in diagnostics)
    """
    fields = line.split()
    if len(fields) != 3:
        raise ParseError(lineno, f"had {len(fields)} columns, expected 3")
    try:
        record = StarRecord(int(fields[0]), float(fields[1]), float(fields[2]))
    except ValueError as e:
        raise ParseError(lineno, f"could not be parsed: {e}") from None
    if not (math.isfinite(record.ra) and math.isfinite(record.dec)):
        raise ParseError(lineno, "had a non-finite coordinate")
    return record


def loadCatalog(path, capacity=NUM_STARS):
    """
    Read a catalog file into a Catalog.
    Blank lines are skipped; any other malformed line aborts the load.
    """
    records = []
    try:
        with open(path, "rb") as f:
            for lineno, raw in enumerate(f, 1):
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError:
                    raise ParseError(lineno, "is not valid UTF-8") from None
                if not line.strip():
                    continue
                if len(records) >= capacity:
                    raise CatalogCapacityError(
                        f"catalog {path} has more than {capacity} records"
                    )
                records.append(parseRecord(line, lineno))
    except OSError as e:
        raise CatalogIOError(f"Unable to open the file {path}: {e.strerror or e}") from e

    logger.info("loaded %d records from %s", len(records), path)
    return Catalog(records)
