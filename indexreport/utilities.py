"""Utility functions for the index report

This module holds the data-transformation steps of the report: size
normalization, index family resolution and per-family aggregation. None of
these talk to Elasticsearch; they operate on rows already fetched by
:py:mod:`indexreport.esclient`.
"""

import logging

from indexreport.constants import (
    DOC_COUNT_PATTERN,
    FAMILY_SUFFIX_PATTERN,
    SIZE_FACTORS,
    SIZE_PATTERN,
    SIZE_PRECISION,
)
from indexreport.exceptions import (
    InvalidDocCountError,
    InvalidIndexNameError,
    InvalidSizeError,
)
from indexreport.helpers import FamilySummary, IndexRecord, NormalizedIndexRecord


def normalize_size(raw: str) -> float:
    """
    Convert a catalog size string into the report's gigabyte scale

    :param raw: A size such as ``12.3gb``, ``500mb``, ``7kb``, ``80b`` or ``80``
    :type raw: str

    :returns: The size multiplied by the factor for its unit. Not rounded.
    :rtype: float

    :raises InvalidSizeError: If ``raw`` is not ``<number>`` followed by an
        optional lowercase ``b``, ``kb``, ``mb`` or ``gb``
    """
    if not isinstance(raw, str):
        raise InvalidSizeError(f"Size must be a string, got {raw!r}")
    match = SIZE_PATTERN.fullmatch(raw)
    if match is None:
        raise InvalidSizeError(f"Unparseable size: {raw!r}")
    unit = match.group("unit") or "b"
    return float(match.group("value")) * SIZE_FACTORS[unit]


def parse_doc_count(raw) -> int:
    """
    Coerce a catalog document count to an integer

    :param raw: An integer or a string of decimal digits
    :type raw: int or str

    :returns: The document count
    :rtype: int

    :raises InvalidDocCountError: If ``raw`` is missing, negative or not an integer
    """
    if isinstance(raw, bool):
        raise InvalidDocCountError(f"Invalid document count: {raw!r}")
    if isinstance(raw, int):
        count = raw
    elif isinstance(raw, str) and DOC_COUNT_PATTERN.fullmatch(raw.strip()):
        count = int(raw.strip())
    else:
        raise InvalidDocCountError(f"Invalid document count: {raw!r}")
    if count < 0:
        raise InvalidDocCountError(f"Negative document count: {raw!r}")
    return count


def normalize_record(record: IndexRecord) -> NormalizedIndexRecord:
    """
    Normalize both store sizes and the document count of ``record``

    :param record: A raw catalog row
    :type record: IndexRecord

    :returns: A new record with float sizes and an integer document count
    :rtype: NormalizedIndexRecord

    :raises RecordError: If the name is missing or any field cannot be parsed.
        The message names the index.
    """
    if not isinstance(record.name, str) or not record.name:
        raise InvalidIndexNameError(f"Missing index name in catalog row: {record!r}")
    try:
        return NormalizedIndexRecord(
            name=record.name,
            primary_store_size=normalize_size(record.primary_store_size),
            total_store_size=normalize_size(record.total_store_size),
            doc_count=parse_doc_count(record.doc_count),
        )
    except InvalidSizeError as err:
        raise InvalidSizeError(f"Index {record.name}: {err}") from err
    except InvalidDocCountError as err:
        raise InvalidDocCountError(f"Index {record.name}: {err}") from err


def resolve_family(name: str) -> str:
    """
    Strip the rollover suffix from an index name

    The suffix starts at the first hyphen followed by a digit and runs to the
    end of the name, so ``weblog-2022.06.01-archive`` belongs to ``weblog``.

    :param name: An index name
    :type name: str

    :returns: The family key, or ``name`` unchanged when there is no suffix
    :rtype: str
    """
    return FAMILY_SUFFIX_PATTERN.sub("", name, count=1)


def group_by_family(records: list) -> dict:
    """
    Partition ``records`` by family key

    :param records: Normalized records from a single node
    :type records: list

    :returns: Family key to list of records, keys in order of first appearance
    :rtype: dict
    """
    groups = {}
    for record in records:
        groups.setdefault(resolve_family(record.name), []).append(record)
    return groups


def aggregate(records: list, server: str, group: bool = False) -> list:
    """
    Turn one node's normalized records into output rows

    Without ``group`` each record becomes one row, sizes unrounded. With
    ``group`` records are summed per family and the sizes rounded to two places.

    :param records: Normalized records from a single node
    :type records: list
    :param server: The node address to stamp on every row
    :type server: str
    :param group: Whether to aggregate by index family
    :type group: bool

    :returns: One :py:class:`FamilySummary` per record or per family
    :rtype: list
    """
    logger = logging.getLogger("indexreport.utilities")
    if not group:
        return [
            FamilySummary(
                index=record.name,
                total_store_size=record.total_store_size,
                primary_store_size=record.primary_store_size,
                doc_count=int(record.doc_count),
                server=server,
            )
            for record in records
        ]

    summaries = []
    for family, members in group_by_family(records).items():
        logger.debug("Family %s has %d indices on %s", family, len(members), server)
        summaries.append(
            FamilySummary(
                index=family,
                total_store_size=round(
                    sum(m.total_store_size for m in members), SIZE_PRECISION
                ),
                primary_store_size=round(
                    sum(m.primary_store_size for m in members), SIZE_PRECISION
                ),
                doc_count=sum(int(m.doc_count) for m in members),
                server=server,
            )
        )
    return summaries


def sort_summaries(rows: list, sort_by: str = None) -> list:
    """
    Order output rows

    :param rows: Rows from :py:func:`aggregate`
    :type rows: list
    :param sort_by: ``index`` (ascending), ``size`` or ``docs`` (largest
        first), or ``None`` to keep the order rows were produced in
    :type sort_by: str

    :returns: A new, sorted list
    :rtype: list

    :raises ValueError: If ``sort_by`` is not a known key
    """
    if sort_by is None:
        return list(rows)
    if sort_by == "index":
        return sorted(rows, key=lambda row: row.index)
    if sort_by == "size":
        return sorted(rows, key=lambda row: row.total_store_size, reverse=True)
    if sort_by == "docs":
        return sorted(rows, key=lambda row: row.doc_count, reverse=True)
    raise ValueError(f"Invalid sort key: {sort_by}")


def summarize_totals(rows: list) -> dict:
    """Grand totals across one node's rows, for the table footer."""
    return {
        "count": len(rows),
        "totalStoreSize": round(sum(r.total_store_size for r in rows), SIZE_PRECISION),
        "primaryStoreSize": round(
            sum(r.primary_store_size for r in rows), SIZE_PRECISION
        ),
        "docCount": sum(r.doc_count for r in rows),
    }
