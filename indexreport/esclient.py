"""
Elasticsearch client wrapper for the index report.

Each node in the report gets its own client. Two calls are made against it: an
identity call used as a liveness check, and a ``_cat/indices`` listing that
supplies the raw catalog rows.
"""

import logging

from elasticsearch8 import Elasticsearch
from elasticsearch8.exceptions import ApiError, ConnectionError as ESConnectionError
from elasticsearch8.exceptions import TransportError

from indexreport.constants import CAT_COLUMNS, DEFAULT_INDEX_PATTERN, DEFAULT_REQUEST_TIMEOUT
from indexreport.exceptions import NodeUnavailableError
from indexreport.helpers import IndexRecord


def node_url(address: str) -> str:
    """
    Return ``address`` as a URL the client accepts.

    Args:
        address: A node address, with or without a scheme (e.g. ``es1:9200``)

    Returns:
        str: The address, prefixed with ``http://`` if it had no scheme
    """
    if "://" in address:
        return address
    return f"http://{address}"


def create_es_client(
    address: str,
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT,
    **kwargs,
) -> Elasticsearch:
    """
    Create an Elasticsearch client bound to a single node.

    The client is not validated here; call :py:func:`get_node_identity` for that.

    Args:
        address: The node address
        request_timeout: Request timeout in seconds (default: 30)
        **kwargs: Additional arguments passed to the Elasticsearch client

    Returns:
        Elasticsearch: A client for that node only
    """
    loggit = logging.getLogger("indexreport.esclient")
    url = node_url(address)
    loggit.debug("Creating Elasticsearch client for %s", url)
    return Elasticsearch(hosts=[url], request_timeout=request_timeout, **kwargs)


def get_node_identity(client: Elasticsearch) -> dict:
    """
    Liveness check: ask the node who it is.

    Args:
        client: Elasticsearch client for one node

    Returns:
        dict: ``name``, ``cluster_name`` and ``version`` of the node

    Raises:
        NodeUnavailableError: If the node cannot be reached or answers with an error
    """
    loggit = logging.getLogger("indexreport.esclient")
    try:
        info = client.info()
    except (ESConnectionError, TransportError, ApiError) as err:
        loggit.debug("Identity call failed: %s", err)
        raise NodeUnavailableError(f"Node did not answer identity check: {err}") from err

    identity = {
        "name": info.get("name"),
        "cluster_name": info.get("cluster_name"),
        "version": info.get("version", {}).get("number"),
    }
    loggit.debug(
        "Node %s in cluster %s, version %s",
        identity["name"],
        identity["cluster_name"],
        identity["version"],
    )
    return identity


def get_index_records(
    client: Elasticsearch, index_pattern: str = DEFAULT_INDEX_PATTERN
) -> list:
    """
    Fetch the catalog listing for the node.

    Calls :py:meth:`~.elasticsearch.client.CatClient.indices` with JSON output
    and only the columns the report needs.

    Args:
        client: Elasticsearch client for one node
        index_pattern: Index name or wildcard pattern (default: ``*``)

    Returns:
        list: One :py:class:`IndexRecord` per index. Empty if the node has none.

    Raises:
        NodeUnavailableError: If the listing call fails
    """
    loggit = logging.getLogger("indexreport.esclient")
    try:
        resp = client.cat.indices(index=index_pattern, format="json", h=CAT_COLUMNS)
    except (ESConnectionError, TransportError, ApiError) as err:
        raise NodeUnavailableError(f"Failed to list indices: {err}") from err

    if not resp:
        loggit.debug("No indices matched %s", index_pattern)
        return []
    records = [IndexRecord.from_cat(row) for row in resp]
    loggit.debug("Fetched %d catalog rows", len(records))
    return records
