"""
Core Layer - 核心层

包含代码扫描器、.env 解析与写入、对账和交互会话的状态推进。
"""

from envsetter.core.errors import (
    EnvSetterError,
    ScanError,
    EnvWriteError,
)
from envsetter.core.scanner import (
    ScanResult,
    ProjectFolder,
    scan,
    scan_codebase,
    scan_env_files_only,
    discover_env_folders,
    parse_existing_env,
    parse_bulk_input,
)
from envsetter.core.reconcile import (
    Reconciliation,
    reconcile,
    has_usable_value,
    select_vars_to_fill,
)
from envsetter.core.writer import (
    format_value,
    write_env_file,
    sync_to_env_example,
)
from envsetter.core.session import (
    Action,
    Response,
    Step,
    VariablePrompt,
    SessionResult,
    advance,
    run_session,
)

__all__ = [
    # errors
    "EnvSetterError",
    "ScanError",
    "EnvWriteError",
    # scanner
    "ScanResult",
    "ProjectFolder",
    "scan",
    "scan_codebase",
    "scan_env_files_only",
    "discover_env_folders",
    "parse_existing_env",
    "parse_bulk_input",
    # reconcile
    "Reconciliation",
    "reconcile",
    "has_usable_value",
    "select_vars_to_fill",
    # writer
    "format_value",
    "write_env_file",
    "sync_to_env_example",
    # session
    "Action",
    "Response",
    "Step",
    "VariablePrompt",
    "SessionResult",
    "advance",
    "run_session",
]
