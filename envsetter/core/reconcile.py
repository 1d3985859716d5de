"""
对账：扫描结果 vs 已有配置

纯函数，不缓存；每保存一个值后重新计算以保持进度准确。
"""

from dataclasses import dataclass, asdict
from typing import Literal, Mapping

from envsetter.core.scanner.models import ScanResult

FillMode = Literal["missing", "all"]


@dataclass(frozen=True)
class Reconciliation:
    """
    对账统计

    Attributes:
        total: 发现的变量数
        already_set: 已有非空值的变量数
        missing: 缺失或为空的变量数
    """
    total: int
    already_set: int
    missing: int

    @property
    def coverage(self) -> int:
        """已设置比例（百分比，四舍五入）"""
        if self.total <= 0:
            return 0
        return round(self.already_set / self.total * 100)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["coverage"] = self.coverage
        return data


def has_usable_value(existing: Mapping[str, str], key: str) -> bool:
    """key 存在且去空白后非空才算已设置"""
    value = existing.get(key)
    return isinstance(value, str) and bool(value.strip())


def reconcile(found: ScanResult, existing: Mapping[str, str]) -> Reconciliation:
    """统计已设置/缺失数量"""
    total = len(found)
    already_set = sum(1 for key in found if has_usable_value(existing, key))
    return Reconciliation(total=total, already_set=already_set, missing=total - already_set)


def missing_keys(found: ScanResult, existing: Mapping[str, str]) -> list[str]:
    return sorted(key for key in found if not has_usable_value(existing, key))


def select_vars_to_fill(found: ScanResult, existing: Mapping[str, str], mode: FillMode) -> list[str]:
    """按模式选出需要填写的变量（排序后）"""
    if mode == "missing":
        return missing_keys(found, existing)
    return sorted(found)
