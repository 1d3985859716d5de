"""
报告器基类 - 定义报告器接口与报告数据
"""

from dataclasses import dataclass, field
from typing import Protocol

from envsetter.core.reconcile import Reconciliation, has_usable_value
from envsetter.core.scanner.models import ScanResult


@dataclass
class ScanReport:
    """
    单个目录的扫描报告

    Attributes:
        folder: 目录（相对路径）
        target: 对账使用的 env 文件
        deep: 是否为深度扫描
        found: 扫描结果
        existing: 目标文件中的已有配置
        stats: 对账统计
    """
    folder: str
    target: str
    deep: bool
    found: ScanResult
    existing: dict[str, str] = field(default_factory=dict)
    stats: Reconciliation = field(default_factory=lambda: Reconciliation(0, 0, 0))

    def is_set(self, key: str) -> bool:
        return has_usable_value(self.existing, key)


class Reporter(Protocol):
    """报告器协议"""

    def report(self, reports: list[ScanReport]) -> None:
        """生成报告"""
        ...
