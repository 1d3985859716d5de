"""
错误类型定义

扫描根目录不可读、写入失败等致命错误；单个文件/单行的异常在内部吸收，不会抛出。
"""

from pathlib import Path
from typing import Optional


class EnvSetterError(Exception):
    """envsetter 错误基类"""
    pass


class ScanError(EnvSetterError):
    """扫描根目录不存在或不可读"""

    def __init__(self, root: Path, reason: str = ""):
        self.root = root
        self.reason = reason
        message = f"Cannot scan {root}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class EnvWriteError(EnvSetterError):
    """配置文件写入失败（权限、磁盘已满等），原文件内容保持不变"""

    def __init__(self, path: Path, cause: Optional[OSError] = None):
        self.path = path
        self.cause = cause
        message = f"Failed to write {path}"
        if cause is not None:
            message = f"{message}: {cause.strerror or cause}"
        super().__init__(message)
