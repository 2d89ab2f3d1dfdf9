"""Report action for the index report"""

# pylint: disable=too-many-arguments,too-many-instance-attributes

import json
import logging

from rich.console import Console
from rich.table import Table

from indexreport.constants import DEFAULT_INDEX_PATTERN, DEFAULT_REQUEST_TIMEOUT
from indexreport.esclient import create_es_client, get_index_records, get_node_identity
from indexreport.exceptions import ActionError, NodeUnavailableError, RecordError
from indexreport.utilities import (
    aggregate,
    normalize_record,
    sort_summaries,
    summarize_totals,
)


class Report:
    """
    Report action fetches the catalog of each node in turn, normalizes the
    store sizes and prints one table (or one JSON array) per node, optionally
    aggregated by index family.

    :param nodes: Node addresses, processed in the order given. Repeats are dropped.
    :param group: If True, sum indices that share a family name
    :param index_pattern: Index pattern passed to the catalog listing
    :param sort_by: ``index``, ``size``, ``docs`` or None
    :param porcelain: If True, output JSON Lines instead of rich tables
    :param request_timeout: Request timeout in seconds

    :methods:
        report_node: Fetch, normalize and aggregate a single node
        do_dry_run: Check each node is alive and show what would be queried
        do_action: Report on every node

    :example:
        >>> from indexreport.actions import Report
        >>> report = Report(["es1:9200", "es2:9200"], group=True)
        >>> report.do_action()
    """

    def __init__(
        self,
        nodes: list,
        group: bool = False,
        index_pattern: str = DEFAULT_INDEX_PATTERN,
        sort_by: str = None,
        porcelain: bool = False,
        request_timeout: int = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.loggit = logging.getLogger("indexreport.actions.report")
        self.loggit.debug("Initializing Report")

        self.console = Console()

        # A node named twice is reported once, at its first position
        nodes = list(nodes)
        self.nodes = list(dict.fromkeys(nodes))
        if len(self.nodes) != len(nodes):
            self.loggit.warning("Ignoring repeated node addresses")
        self.group = group
        self.index_pattern = index_pattern
        self.sort_by = sort_by
        self.porcelain = porcelain
        self.request_timeout = request_timeout

        # Addresses of nodes that could not be reported on, with the reason
        self.failures = {}

    def _normalize(self, address: str, records: list) -> list:
        """Normalize catalog rows, skipping (and logging) rows that do not parse."""
        normalized = []
        for record in records:
            try:
                normalized.append(normalize_record(record))
            except RecordError as e:
                self.loggit.warning("Skipping record from %s: %s", address, e)
        return normalized

    def report_node(self, address: str) -> list:
        """
        Fetch, normalize and aggregate the catalog of one node.

        Nothing is shared between calls, so one node's rows never include
        another node's indices.

        :param address: The node address
        :type address: str

        :return: The output rows for that node
        :rtype: list

        :raises NodeUnavailableError: If either call to the node fails
        """
        client = create_es_client(address, request_timeout=self.request_timeout)
        identity = get_node_identity(client)
        self.loggit.info(
            "Reporting on %s (node %s, cluster %s)",
            address,
            identity["name"],
            identity["cluster_name"],
        )
        records = get_index_records(client, index_pattern=self.index_pattern)
        normalized = self._normalize(address, records)
        rows = aggregate(normalized, address, group=self.group)
        self.loggit.debug(
            "%s: %d catalog rows, %d output rows", address, len(records), len(rows)
        )
        return sort_summaries(rows, self.sort_by)

    def _display_porcelain(self, rows: list) -> None:
        """One JSON array per node, one node per line."""
        print(json.dumps([row.to_dict() for row in rows]))

    def _display_rich(self, address: str, rows: list) -> None:
        """Output a rich table for one node."""
        if not rows:
            self.console.print(f"[dim]No indices found on {address}[/dim]")
            self.console.print()
            return

        totals = summarize_totals(rows)
        title = "Index families" if self.group else "Indices"
        table = Table(title=f"{title} on {address}", show_footer=True)
        table.add_column("Index", style="cyan", footer=f"Total ({totals['count']})")
        table.add_column(
            "Total GB", style="yellow", justify="right",
            footer=f"{totals['totalStoreSize']:,.2f}",
        )
        table.add_column(
            "Primary GB", style="yellow", justify="right",
            footer=f"{totals['primaryStoreSize']:,.2f}",
        )
        table.add_column(
            "Docs", style="green", justify="right", footer=f"{totals['docCount']:,}"
        )

        for row in rows:
            table.add_row(
                row.index,
                f"{row.total_store_size:,.2f}",
                f"{row.primary_store_size:,.2f}",
                f"{row.doc_count:,}",
            )

        self.console.print(table)
        self.console.print()

    def _display_failure(self, address: str, error: Exception) -> None:
        if self.porcelain:
            return
        self.console.print(f"[yellow]Skipping {address}: {error}[/yellow]")
        self.console.print()

    def do_dry_run(self) -> None:
        """
        Check that each node answers and log what would be queried.
        The catalog listing is not requested.

        :return: None
        :rtype: None
        """
        self.loggit.info("DRY-RUN MODE.  No catalog listings will be requested.")
        for address in self.nodes:
            try:
                client = create_es_client(address, request_timeout=self.request_timeout)
                identity = get_node_identity(client)
            except NodeUnavailableError as e:
                self.loggit.warning("DRY-RUN: %s is unavailable: %s", address, e)
                continue
            self.loggit.info(
                "DRY-RUN: would list indices matching %s on %s (cluster %s)%s",
                self.index_pattern,
                address,
                identity["cluster_name"],
                ", grouped by family" if self.group else "",
            )

    def do_action(self) -> dict:
        """
        Report on every node in order. A node that fails is reported as a
        warning and the next node is processed.

        :return: Node address to output rows, for the nodes that succeeded
        :rtype: dict

        :raises ActionError: If every node failed
        """
        self.loggit.debug("Starting Report action")
        self.failures = {}
        results = {}

        for address in self.nodes:
            try:
                rows = self.report_node(address)
            except NodeUnavailableError as e:
                self.loggit.warning("Node %s failed, continuing: %s", address, e)
                self.failures[address] = str(e)
                self._display_failure(address, e)
                continue

            results[address] = rows
            if self.porcelain:
                self._display_porcelain(rows)
            else:
                self._display_rich(address, rows)

        if self.nodes and not results:
            raise ActionError(f"No node could be reported on: {', '.join(self.nodes)}")
        return results
