"""
Reporters Layer - 报告层

包含 Rich 终端报告器和 JSON 报告器。
"""

from envsetter.reporters.base import Reporter, ScanReport
from envsetter.reporters.rich_reporter import RichReporter
from envsetter.reporters.json_reporter import JsonReporter

__all__ = [
    "Reporter",
    "ScanReport",
    "RichReporter",
    "JsonReporter",
]
