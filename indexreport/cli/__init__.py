"""Index report command line interface"""

from indexreport.cli.main import cli

__all__ = ["cli"]
