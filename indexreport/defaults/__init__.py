"""
Option defaults for the index report.

This module provides voluptuous schema definitions for every report option.
Each function returns a one-key dict that is merged into an action schema.
"""

from voluptuous import All, Any, Coerce, Length, Optional, Range, Required

from indexreport.constants import (
    DEFAULT_INDEX_PATTERN,
    DEFAULT_REQUEST_TIMEOUT,
    SORT_CHOICES,
)


def Boolean():
    """
    Validate boolean-like string values.
    Accepts 'true', 'false', '1', '0', 'yes', 'no' (case-insensitive).
    """
    def validator(value):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            if value.lower() in ('true', '1', 'yes'):
                return True
            if value.lower() in ('false', '0', 'no'):
                return False
        raise ValueError(f"Invalid boolean value: {value}")
    return validator


def nodes():
    """
    Node addresses to report on, processed in the order given.
    """
    return {Required("nodes"): All([All(str, Length(min=1))], Length(min=1))}


def group():
    """
    Aggregate indices into families by stripping the date-like suffix.
    """
    return {Optional("group", default=False): Any(bool, All(Any(str), Boolean()))}


def index_pattern():
    """
    Index name or wildcard pattern passed to the catalog listing.
    """
    return {
        Optional("index_pattern", default=DEFAULT_INDEX_PATTERN): All(
            str, Length(min=1)
        )
    }


def sort_by():
    """
    Order of output rows. None keeps the order the node listed them in.
    """
    return {Optional("sort_by", default=None): Any(None, *SORT_CHOICES)}


def request_timeout():
    """
    Per-request timeout in seconds.
    """
    return {
        Optional("request_timeout", default=DEFAULT_REQUEST_TIMEOUT): All(
            Coerce(int), Range(min=1, max=3600)
        )
    }


def porcelain():
    """
    Machine-readable output instead of tables.
    """
    return {Optional("porcelain", default=False): Any(bool, All(Any(str), Boolean()))}
