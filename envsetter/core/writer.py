"""
.env 文件写入

- 已存在的 key 原地更新
- 新 key 追加到文件末尾的分隔注释之后
- 其余行（注释、空行、无关 key）原样保留
- 整个文件一次性替换写入
"""

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, Mapping, MutableMapping, Optional

from envsetter.core.errors import EnvWriteError
from envsetter.core.scanner.dotenv import parse_env_content, split_env_line

logger = logging.getLogger(__name__)

SEPARATOR_COMMENT = "# Added by envsetter"

EXAMPLE_HEADER = [
    "# Environment variables used by this project",
    "# Copy this file to .env and fill in the values",
]

# 需要加引号的字符：空白、# = \ 引号 反引号 !
_NEEDS_QUOTES_RE = re.compile(r"[\s#=\\\"'`!]")


def needs_quotes(value: str) -> bool:
    """判断值是否需要加引号"""
    if not value:
        return False
    return bool(_NEEDS_QUOTES_RE.search(value)) or "\n" in value


def format_value(value: str) -> str:
    """
    按 .env 格式转义值

    空值写成 ""；需要引号时用双引号包裹，并转义 \\ " 和换行。
    """
    if value == "":
        return '""'
    if needs_quotes(value):
        escaped = (
            value
            .replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
        )
        return f'"{escaped}"'
    return value


def _read_lines(path: Path) -> list[str]:
    """读取原始行；非 UTF-8 字节经 surrogateescape 原样写回"""
    if not path.exists():
        return []
    try:
        content = path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        raise EnvWriteError(path, e) from e
    return content.split("\n")


def _finalize(lines: list[str]) -> str:
    """拼接并保证文件以且仅以一个换行结尾"""
    return "\n".join(lines).rstrip("\n") + "\n"


def atomic_write(path: Path, content: str) -> None:
    """
    写入临时文件后替换目标文件

    失败时抛出 EnvWriteError，原文件内容不受影响。
    """
    path = Path(path)
    tmp_name: Optional[str] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            errors="surrogateescape",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tf:
            tmp_name = tf.name
            tf.write(content)
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise EnvWriteError(path, e) from e


def write_env_file(
    env_file_path: Path,
    new_vars: Mapping[str, str],
    existing_env: Optional[MutableMapping[str, str]] = None,
) -> int:
    """
    写入环境变量

    Args:
        env_file_path: 目标文件
        new_vars: 要写入的 key -> value（按迭代顺序追加）
        existing_env: 内存中的已有配置，写入成功后同步更新

    Returns:
        原地更新数 + 追加数
    """
    path = Path(env_file_path).resolve()
    lines = _read_lines(path)
    updated: set[str] = set()

    for i, line in enumerate(lines):
        pair = split_env_line(line)
        if pair is None:
            continue
        key = pair[0]
        if key in new_vars:
            lines[i] = f"{key}={format_value(new_vars[key])}"
            updated.add(key)

    append_keys = [key for key in new_vars if key not in updated]

    if append_keys:
        # 去掉末尾空行，之后统一补一个空行分隔
        while lines and not lines[-1].strip():
            lines.pop()
        has_separator = any(line.strip() == SEPARATOR_COMMENT for line in lines)
        if lines and not has_separator:
            lines.append("")
            lines.append(SEPARATOR_COMMENT)
        for key in append_keys:
            lines.append(f"{key}={format_value(new_vars[key])}")

    atomic_write(path, _finalize(lines))
    logger.debug(f"Wrote {path}: {len(updated)} updated, {len(append_keys)} appended")

    if existing_env is not None:
        existing_env.update(new_vars)

    return len(updated) + len(append_keys)


def sync_to_env_example(keys: Iterable[str], example_path: Path) -> int:
    """
    把新写入的 key（不含值）同步到模板文件

    只追加模板中还没有的 key；新建文件时带上说明注释。

    Returns:
        新增的 key 数量
    """
    path = Path(example_path).resolve()
    lines = _read_lines(path)
    present = set(parse_env_content("\n".join(lines)))

    new_keys: list[str] = []
    for key in keys:
        if key not in present and key not in new_keys:
            new_keys.append(key)
    if not new_keys:
        return 0

    while lines and not lines[-1].strip():
        lines.pop()
    if not path.exists():
        lines = list(EXAMPLE_HEADER)
    if lines:
        lines.append("")
    lines.extend(f"{key}=" for key in new_keys)

    atomic_write(path, _finalize(lines))
    logger.debug(f"Synced {len(new_keys)} keys to {path}")
    return len(new_keys)
