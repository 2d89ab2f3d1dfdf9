"""Index report action modules

Each action class provides do_action() and do_dry_run() methods.
"""

from indexreport.actions.check import Check
from indexreport.actions.report import Report

__all__ = [
    "Check",
    "Report",
]
