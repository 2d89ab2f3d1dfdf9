"""Constants for the index report package"""

import re

# Multipliers that bring a catalog size into the report's gigabyte scale.
# These reproduce the legacy report's numbers and are not SI or binary factors.
SIZE_FACTORS = {
    "kb": 0.00001,
    "mb": 0.001,
    "gb": 1,
    "b": 0.0000001,
}

SIZE_PATTERN = re.compile(r"(?P<value>[0-9]+(?:\.[0-9]+)?)(?P<unit>kb|mb|gb|b)?")

DOC_COUNT_PATTERN = re.compile(r"[0-9]+")

# Everything from the first "-<digits>" onward is the rollover suffix
FAMILY_SUFFIX_PATTERN = re.compile(r"-\d+.*")

# Columns requested from the _cat/indices API
CAT_COLUMNS = "index,pri.store.size,store.size,docs.count"

DEFAULT_INDEX_PATTERN = "*"
DEFAULT_REQUEST_TIMEOUT = 30

SORT_CHOICES = ("index", "size", "docs")

SUMMARY_FIELDS = (
    "index",
    "totalStoreSize",
    "primaryStoreSize",
    "docCount",
    "server",
)

SIZE_PRECISION = 2
