"""
核心扫描函数

深度扫描（源码 + 模板）与浅扫描（仅 env 文件）。
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from envsetter.core.errors import ScanError
from envsetter.core.scanner.models import ScanResult
from envsetter.core.scanner.patterns import (
    ENV_SOURCE_FILES,
    RUNTIME_ENV_FILES,
    extract_candidates,
    has_code_extension,
)
from envsetter.core.scanner.dotenv import extract_env_keys_from_content
from envsetter.filters.pathspec_filter import PathspecFilter, SELF_IGNORE_PATTERNS

logger = logging.getLogger(__name__)

# 深度扫描的目录层级上限
DEFAULT_SCAN_MAX_DEPTH = 32

# 判断二进制文件时读取的字节数
BINARY_SNIFF_BYTES = 8192

PROJECT_NAME = "envsetter"

# 进度回调类型
ProgressCallback = Callable[[str], None]


def is_self_project(root: Path) -> bool:
    """扫描目录是否为 envsetter 自身的项目"""
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return False
    try:
        with open(pyproject, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return data.get("project", {}).get("name") == PROJECT_NAME


def _check_root(root: Path) -> Path:
    """根目录必须存在且可读，否则抛出 ScanError"""
    root = Path(root).resolve()
    if not root.is_dir():
        raise ScanError(root, "not a directory")
    try:
        os.listdir(root)
    except OSError as e:
        raise ScanError(root, e.strerror or str(e)) from e
    return root


def _read_text(file_path: Path) -> Optional[str]:
    """读取文本文件；不可读或二进制文件返回 None"""
    try:
        data = file_path.read_bytes()
    except OSError as e:
        logger.debug(f"Skipping unreadable file {file_path}: {e}")
        return None
    if b"\0" in data[:BINARY_SNIFF_BYTES]:
        logger.debug(f"Skipping binary file {file_path}")
        return None
    return data.decode("utf-8", errors="ignore")


def iter_code_files(
    root: Path,
    path_filter: PathspecFilter,
    max_depth: int = DEFAULT_SCAN_MAX_DEPTH,
) -> Iterator[Path]:
    """
    遍历深度扫描的候选文件

    不跟随符号链接目录，超过 max_depth 的目录不再深入；
    子目录不可读时跳过。结果按路径排序，保证重复扫描结果一致。
    """
    def on_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory {error.filename}: {error}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        current = Path(dirpath)
        depth = len(current.relative_to(root).parts)
        if depth >= max_depth:
            logger.debug(f"Depth limit reached at {current}")
            dirnames[:] = []
        else:
            dirnames[:] = sorted(
                name for name in dirnames
                if not path_filter.should_ignore_dir(current / name)
            )
        for filename in sorted(filenames):
            if filename in RUNTIME_ENV_FILES:
                continue
            if not has_code_extension(filename):
                continue
            file_path = current / filename
            if path_filter.should_ignore(file_path):
                continue
            yield file_path


def scan_codebase(
    root: Path,
    extra_ignore: Iterable[str] = (),
    max_depth: int = DEFAULT_SCAN_MAX_DEPTH,
    on_file: Optional[ProgressCallback] = None,
) -> ScanResult:
    """
    深度扫描：对所有候选文件应用全部匹配规则

    Args:
        root: 扫描根目录
        extra_ignore: 额外的 gitwildmatch 忽略模式
        max_depth: 目录层级上限
        on_file: 每扫描一个文件时回调（相对路径）

    Returns:
        变量名 -> 引用文件集合
    """
    root = _check_root(root)
    patterns = list(extra_ignore)
    if is_self_project(root):
        logger.debug("Scanning envsetter itself, skipping its own sources")
        patterns.extend(SELF_IGNORE_PATTERNS)
    path_filter = PathspecFilter(root, patterns)
    logger.debug(f"Ignore patterns: {path_filter.get_patterns()}")

    found: ScanResult = {}
    for file_path in iter_code_files(root, path_filter, max_depth):
        content = _read_text(file_path)
        if content is None:
            continue
        rel_path = file_path.relative_to(root).as_posix()
        if on_file:
            on_file(rel_path)
        for name in extract_candidates(content):
            found.setdefault(name, set()).add(rel_path)

    logger.debug(f"Deep scan of {root} found {len(found)} variables")
    return found


def scan_env_files_only(root: Path) -> ScanResult:
    """浅扫描：只读取根目录下约定名称的 env 文件，提取已声明的 key"""
    root = _check_root(root)
    found: ScanResult = {}
    for filename in ENV_SOURCE_FILES:
        file_path = root / filename
        if not file_path.is_file():
            continue
        content = _read_text(file_path)
        if content is None:
            continue
        for key in extract_env_keys_from_content(content):
            found.setdefault(key, set()).add(filename)

    logger.debug(f"Env file scan of {root} found {len(found)} variables")
    return found


def scan(root: Path, deep: bool = False, **kwargs) -> ScanResult:
    """按模式扫描"""
    if deep:
        return scan_codebase(root, **kwargs)
    return scan_env_files_only(root)
