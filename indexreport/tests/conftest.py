"""Shared fixtures for the index report tests"""

import logging

import pytest

from indexreport.helpers import IndexRecord, NormalizedIndexRecord


@pytest.fixture(autouse=True)
def reset_indexreport_logger():
    """The CLI installs handlers on the package logger; drop them after each test."""
    yield
    logger = logging.getLogger("indexreport")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def cat_rows():
    """Rows as returned by _cat/indices?format=json"""
    return [
        {"index": "logs-2024.01.01", "pri.store.size": "1.5gb", "store.size": "1.5gb", "docs.count": "100"},
        {"index": "logs-2024.01.02", "pri.store.size": "500mb", "store.size": "500mb", "docs.count": "50"},
        {"index": "metrics-2024.01", "pri.store.size": "10gb", "store.size": "20gb", "docs.count": "1000"},
        {"index": "kibana", "pri.store.size": "250kb", "store.size": "500kb", "docs.count": "12"},
    ]


@pytest.fixture
def normalized_records():
    return [
        NormalizedIndexRecord("logs-2024.01.01", 1.0, 2.0, 10),
        NormalizedIndexRecord("metrics-2024.01.01", 5.0, 10.0, 100),
        NormalizedIndexRecord("logs-2024.01.02", 0.5, 1.0, 5),
        NormalizedIndexRecord("plainindex", 0.25, 0.5, 1),
    ]


@pytest.fixture
def raw_records(cat_rows):
    return [IndexRecord.from_cat(row) for row in cat_rows]
