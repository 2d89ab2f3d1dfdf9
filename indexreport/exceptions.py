"""Index Report Exceptions

This module contains all exception classes used by the index report package.
Elasticsearch client exceptions are wrapped in one of these before they reach
the CLI.
"""


class IndexReportException(Exception):
    """
    Base class for all exceptions raised by the index report which are not
    Elasticsearch exceptions.
    """


class ConfigurationError(IndexReportException):
    """
    Exception raised when the configuration file or options are invalid
    """


class ActionError(IndexReportException):
    """
    Exception raised when an action cannot be completed
    """


class NodeUnavailableError(IndexReportException):
    """
    Exception raised when a node fails its liveness check or catalog listing
    """


class RecordError(IndexReportException):
    """
    Exception raised when a catalog row cannot be normalized
    """


class InvalidSizeError(RecordError):
    """
    Exception raised when a store size is not ``<number><unit>``
    """


class InvalidDocCountError(RecordError):
    """
    Exception raised when a document count is not a non-negative integer
    """


class InvalidIndexNameError(RecordError):
    """
    Exception raised when a catalog row has no index name
    """
