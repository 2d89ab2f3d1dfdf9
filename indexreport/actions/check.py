"""Check action for the index report"""

import json
import logging

from rich.console import Console
from rich.table import Table

from indexreport.constants import DEFAULT_REQUEST_TIMEOUT
from indexreport.esclient import create_es_client, get_node_identity
from indexreport.exceptions import ActionError, NodeUnavailableError


class Check:
    """
    Check action runs only the liveness call against each node and shows
    which node, cluster and version answered.

    :param nodes: Node addresses, processed in the order given. Repeats are dropped.
    :param porcelain: If True, output one JSON object per node
    :param request_timeout: Request timeout in seconds
    """

    def __init__(
        self,
        nodes: list,
        porcelain: bool = False,
        request_timeout: int = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.loggit = logging.getLogger("indexreport.actions.check")
        self.console = Console()
        # A node named twice is reported once, at its first position
        nodes = list(nodes)
        self.nodes = list(dict.fromkeys(nodes))
        if len(self.nodes) != len(nodes):
            self.loggit.warning("Ignoring repeated node addresses")
        self.porcelain = porcelain
        self.request_timeout = request_timeout

    def check_node(self, address: str) -> dict:
        """Return the identity of the node plus its address and availability."""
        try:
            client = create_es_client(address, request_timeout=self.request_timeout)
            identity = get_node_identity(client)
        except NodeUnavailableError as e:
            self.loggit.warning("Node %s is unavailable: %s", address, e)
            return {"server": address, "available": False, "error": str(e)}
        return {"server": address, "available": True, **identity}

    def do_dry_run(self) -> None:
        """The check is read-only, so this is the same as do_action."""
        self.loggit.info("DRY-RUN MODE.  No changes will be made.")
        self.do_action()

    def do_action(self) -> list:
        """
        Check every node.

        :return: One result dict per node
        :rtype: list

        :raises ActionError: If no node answered
        """
        results = [self.check_node(address) for address in self.nodes]

        if self.porcelain:
            for result in results:
                print(json.dumps(result))
        else:
            table = Table(title="Nodes")
            table.add_column("Server", style="cyan")
            table.add_column("Status")
            table.add_column("Node", style="white")
            table.add_column("Cluster", style="yellow")
            table.add_column("Version", style="white")
            for result in results:
                if result["available"]:
                    table.add_row(
                        result["server"],
                        "[green]up[/green]",
                        result.get("name") or "",
                        result.get("cluster_name") or "",
                        result.get("version") or "",
                    )
                else:
                    table.add_row(result["server"], "[red]down[/red]", "", "", "")
            self.console.print(table)

        if results and not any(r["available"] for r in results):
            raise ActionError("No node answered the liveness check")
        return results
