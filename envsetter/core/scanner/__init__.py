"""
Scanner 模块 - 扫描代码库提取环境变量引用

模块化结构：
- models.py: 数据类定义
- patterns.py: 匹配规则、黑名单、文件列表
- dotenv.py: .env 文件解析
- core.py: 深度/浅扫描
- discovery.py: 含 env 文件的目录发现
"""

from envsetter.core.scanner.models import (
    ScanResult,
    ProjectFolder,
)
from envsetter.core.scanner.patterns import (
    EnvPattern,
    ENV_PATTERNS,
    BLACKLIST,
    extract_candidates,
    is_candidate,
)
from envsetter.core.scanner.dotenv import (
    parse_existing_env,
    parse_env_content,
    extract_env_keys_from_content,
    parse_bulk_input,
    split_env_line,
    unquote_value,
)
from envsetter.core.scanner.core import (
    scan,
    scan_codebase,
    scan_env_files_only,
    is_self_project,
)
from envsetter.core.scanner.discovery import (
    discover_env_folders,
    find_env_files,
    list_env_files,
)

__all__ = [
    # Models
    "ScanResult",
    "ProjectFolder",
    # Patterns
    "EnvPattern",
    "ENV_PATTERNS",
    "BLACKLIST",
    "extract_candidates",
    "is_candidate",
    # DotEnv
    "parse_existing_env",
    "parse_env_content",
    "extract_env_keys_from_content",
    "parse_bulk_input",
    "split_env_line",
    "unquote_value",
    # Core
    "scan",
    "scan_codebase",
    "scan_env_files_only",
    "is_self_project",
    # Discovery
    "discover_env_folders",
    "find_env_files",
    "list_env_files",
]
