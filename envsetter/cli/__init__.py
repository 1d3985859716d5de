"""
CLI Layer - 命令行接口层

提供命令行入口和交互输入。
"""

from envsetter.cli.app import app, run, scan_command, version
from envsetter.cli.prompts import RichPrompter

__all__ = [
    "app",
    "run",
    "scan_command",
    "version",
    "RichPrompter",
]
