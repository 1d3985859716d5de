"""
目录发现

递归查找包含 env 文件的子目录，支持 monorepo 中多个独立的配置目标。
"""

import logging
import os
from pathlib import Path

from envsetter.core.scanner.models import ProjectFolder
from envsetter.core.scanner.patterns import ENV_FOLDER_MARKERS
from envsetter.filters.pathspec_filter import IGNORE_DIRS

logger = logging.getLogger(__name__)

# 防止过深遍历（含循环符号链接）
DEFAULT_MAX_DEPTH = 8


def find_env_files(directory: Path) -> list[str]:
    """返回目录中存在的 env 文件名（按约定顺序）"""
    return [name for name in ENV_FOLDER_MARKERS if (directory / name).is_file()]


def discover_env_folders(root: Path, max_depth: int = DEFAULT_MAX_DEPTH) -> list[ProjectFolder]:
    """
    递归发现所有包含 env 文件的目录

    - 祖先目录与子目录各自记录，不去重
    - 跳过忽略目录与隐藏目录（根目录本身除外）
    - 目录不可读时停止向下，不报错

    Args:
        root: 起始目录
        max_depth: 最大递归层级

    Returns:
        ProjectFolder 列表（深度优先，子目录按名称排序）
    """
    root = Path(root).resolve()
    results: list[ProjectFolder] = []

    def walk(directory: Path, depth: int) -> None:
        if depth > max_depth:
            return

        env_files = find_env_files(directory)
        if env_files:
            rel_path = directory.relative_to(root).as_posix() if directory != root else "."
            results.append(ProjectFolder(
                rel_path=rel_path,
                abs_path=directory,
                env_files=env_files,
            ))

        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError as e:
            logger.debug(f"Cannot list {directory}: {e}")
            return

        for entry in entries:
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue
            if entry.name in IGNORE_DIRS or entry.name.startswith("."):
                continue
            walk(directory / entry.name, depth + 1)

    walk(root, 0)
    return results


def list_env_files(directory: Path) -> list[str]:
    """目录下所有以 .env 开头的文件（排序），不可读时返回空列表"""
    try:
        return sorted(
            entry.name for entry in os.scandir(directory)
            if entry.name.startswith(".env") and entry.is_file()
        )
    except OSError:
        return []
