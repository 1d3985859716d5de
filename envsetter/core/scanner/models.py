"""
数据模型定义

包含扫描器使用的所有数据类。
"""

from dataclasses import dataclass, field
from pathlib import Path


# 变量名 -> 引用该变量的相对文件路径集合
ScanResult = dict[str, set[str]]


@dataclass(frozen=True)
class ProjectFolder:
    """
    包含 env 文件的项目目录

    Attributes:
        rel_path: 相对扫描根目录的路径（根目录为 "."）
        abs_path: 绝对路径
        env_files: 该目录下找到的 env 文件名
    """
    rel_path: str
    abs_path: Path
    env_files: list[str] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.rel_path == "."

    @property
    def label(self) -> str:
        """用于展示的目录名"""
        return "./ (root)" if self.is_root else self.rel_path

