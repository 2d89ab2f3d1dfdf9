"""
Index Report Helpers

This module contains the dataclasses that carry catalog rows through the report:
raw rows as fetched from a node, normalized rows, and the summary rows that are
finally displayed.
"""

import json
from dataclasses import dataclass
from typing import Union


@dataclass
class IndexRecord:
    """
    One row of raw catalog data for a single index on a single node.

    Attributes:
        name (str): The index name as reported by the node.
        primary_store_size (str): Primary store size with unit suffix, e.g. "12.3gb".
        total_store_size (str): Total store size, same format.
        doc_count (int|str): Document count, possibly string-encoded.

    Example:
        record = IndexRecord.from_cat({"index": "logs-2024.01.01", "pri.store.size": "1.5gb",
                                       "store.size": "3gb", "docs.count": "100"})
    """

    name: str = None
    primary_store_size: str = None
    total_store_size: str = None
    doc_count: Union[int, str] = None

    @classmethod
    def from_cat(cls, row: dict) -> "IndexRecord":
        """
        Build a record from one ``_cat/indices`` JSON row.

        Args:
            row: A dict with ``index``, ``pri.store.size``, ``store.size`` and
                ``docs.count`` keys. Closed indices report ``None`` for the
                numeric columns.

        Returns:
            IndexRecord
        """
        return cls(
            name=row.get("index"),
            primary_store_size=row.get("pri.store.size"),
            total_store_size=row.get("store.size"),
            doc_count=row.get("docs.count"),
        )


@dataclass
class NormalizedIndexRecord:
    """
    An IndexRecord whose sizes are expressed in the report's gigabyte scale and
    whose document count is an integer.
    """

    name: str
    primary_store_size: float
    total_store_size: float
    doc_count: int


@dataclass
class FamilySummary:
    """
    One output row: a whole index family when grouping, otherwise a single index.

    Attributes:
        index (str): Family key or index name.
        total_store_size (float): Total store size in GB.
        primary_store_size (float): Primary store size in GB.
        doc_count (int): Document count.
        server (str): Address of the node the row came from.
    """

    index: str
    total_store_size: float = 0.0
    primary_store_size: float = 0.0
    doc_count: int = 0
    server: str = None

    def to_dict(self) -> dict:
        """
        Convert the summary to the report's output keys.

        Returns:
            dict: ``index``, ``totalStoreSize``, ``primaryStoreSize``,
            ``docCount`` and ``server``.
        """
        return {
            "index": self.index,
            "totalStoreSize": self.total_store_size,
            "primaryStoreSize": self.primary_store_size,
            "docCount": self.doc_count,
            "server": self.server,
        }

    def to_json(self) -> str:
        """Convert the summary to a JSON string."""
        return json.dumps(self.to_dict())
