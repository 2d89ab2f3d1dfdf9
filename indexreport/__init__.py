"""
Index Report - Elasticsearch index storage report

This package lists per-index document counts and store sizes for one or more
Elasticsearch nodes, normalizes the sizes into a common gigabyte scale and can
sum them per index family (indices differing only by a date-like suffix).
"""

__version__ = "1.0.0"

from indexreport.exceptions import (
    IndexReportException,
    ConfigurationError,
    ActionError,
    NodeUnavailableError,
    RecordError,
    InvalidSizeError,
    InvalidDocCountError,
    InvalidIndexNameError,
)
from indexreport.helpers import (
    IndexRecord,
    NormalizedIndexRecord,
    FamilySummary,
)
from indexreport.utilities import (
    normalize_size,
    parse_doc_count,
    normalize_record,
    resolve_family,
    group_by_family,
    aggregate,
)
from indexreport.esclient import (
    create_es_client,
    get_index_records,
    get_node_identity,
    node_url,
)

__all__ = [
    "__version__",
    # Exceptions
    "IndexReportException",
    "ConfigurationError",
    "ActionError",
    "NodeUnavailableError",
    "RecordError",
    "InvalidSizeError",
    "InvalidDocCountError",
    "InvalidIndexNameError",
    # Data classes
    "IndexRecord",
    "NormalizedIndexRecord",
    "FamilySummary",
    # Transformations
    "normalize_size",
    "parse_doc_count",
    "normalize_record",
    "resolve_family",
    "group_by_family",
    "aggregate",
    # ES Client
    "create_es_client",
    "get_index_records",
    "get_node_identity",
    "node_url",
]
