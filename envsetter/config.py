"""
运行配置

命令行选项优先，其次是 ENVSETTER_* 环境变量，最后是默认值。
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from envsetter.core.scanner.core import DEFAULT_SCAN_MAX_DEPTH
from envsetter.core.scanner.discovery import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)

ENV_PREFIX = "ENVSETTER_"


@dataclass
class EnvSetterConfig:
    """
    扫描与写入配置

    Attributes:
        deep: 是否深度扫描源码（否则只读 env 文件）
        max_depth: 目录发现的最大层级
        scan_max_depth: 深度扫描的最大层级
        extra_ignore: 额外忽略的 gitwildmatch 模式
        example_file: 同步 key 的模板文件名
        sync_example: 是否同步模板文件
        env_file: 固定的目标文件（为空时交互选择）
    """
    deep: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    scan_max_depth: int = DEFAULT_SCAN_MAX_DEPTH
    extra_ignore: list[str] = field(default_factory=list)
    example_file: str = ".env.example"
    sync_example: bool = True
    env_file: Optional[str] = None

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "EnvSetterConfig":
        """从 ENVSETTER_* 环境变量读取默认值，非法的数字忽略"""
        environ = os.environ if environ is None else environ
        config = cls()

        for attr in ("max_depth", "scan_max_depth"):
            raw = environ.get(ENV_PREFIX + attr.upper())
            if raw is None:
                continue
            try:
                setattr(config, attr, int(raw))
            except ValueError:
                logger.warning(f"Ignoring invalid {ENV_PREFIX}{attr.upper()}={raw!r}")

        example = environ.get(ENV_PREFIX + "EXAMPLE_FILE")
        if example:
            config.example_file = example

        ignore = environ.get(ENV_PREFIX + "IGNORE")
        if ignore:
            config.extra_ignore = [p.strip() for p in ignore.split(",") if p.strip()]

        return config
