"""
DotEnv 文件解析

解析 .env 文件为有序的 key -> value 映射，并提供浅扫描用的 key 提取。
"""

import logging
import re
from pathlib import Path
from typing import Optional

from envsetter.core.scanner.patterns import is_env_key

logger = logging.getLogger(__name__)

# 粘贴内容允许的 key 形状（比扫描宽松，允许小写）
BULK_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# 双引号值中的转义序列（写入时产生）
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPES = {"n": "\n", "\\": "\\", '"': '"'}


def split_env_line(line: str) -> Optional[tuple[str, str]]:
    """
    按 .env 行语法拆分一行

    空行、注释行、没有 "=" 或 key 为空的行返回 None。
    返回的 value 已去除首尾空白，但未去引号。
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    key, sep, value = stripped.partition("=")
    if not sep:
        return None
    key = key.strip()
    if not key:
        return None
    return key, value.strip()


def _unescape(inner: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), inner)


def unquote_value(value: str) -> str:
    """
    去掉一层成对的引号

    双引号内还原写入时的 \\\\ \\" \\n 转义；单引号内容原样保留。
    """
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        inner = value[1:-1]
        if value[0] == '"':
            return _unescape(inner)
        return inner
    return value


def parse_env_content(content: str) -> dict[str, str]:
    """解析 .env 文件内容字符串，按行序返回 key -> value"""
    entries: dict[str, str] = {}
    for line in content.split("\n"):
        pair = split_env_line(line)
        if pair is None:
            continue
        key, value = pair
        entries[key] = unquote_value(value)
    return entries


def parse_existing_env(env_path: Path) -> dict[str, str]:
    """解析已存在的 .env 文件；文件不存在时返回空映射"""
    env_path = Path(env_path)
    if not env_path.is_file():
        return {}
    try:
        content = env_path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        logger.warning(f"Failed to read {env_path}: {e}")
        return {}
    return parse_env_content(content)


def extract_env_keys_from_content(content: str) -> set[str]:
    """按 .env 行语法提取合法的变量名，丢弃值"""
    keys: set[str] = set()
    for line in content.split("\n"):
        pair = split_env_line(line)
        if pair is None:
            continue
        key = pair[0]
        if is_env_key(key):
            keys.add(key)
    return keys


def parse_bulk_input(raw: str) -> dict[str, str]:
    """
    解析用户粘贴的整段 env 内容

    比文件解析宽松：
    - 跳过 // 注释
    - key 允许小写
    - 去掉值中 " #" 之后的行内注释
    """
    result: dict[str, str] = {}
    for line in re.split(r"\r?\n", raw):
        if line.strip().startswith("//"):
            continue
        pair = split_env_line(line)
        if pair is None:
            continue
        key, value = pair
        if not BULK_KEY_RE.match(key):
            continue
        value = unquote_value(value)
        comment_idx = value.find(" #")
        if comment_idx > -1:
            value = value[:comment_idx].strip()
        result[key] = value
    return result
