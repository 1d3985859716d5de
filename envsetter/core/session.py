"""
交互会话的状态推进

把"逐个询问变量值"的循环建模为纯函数 advance()：
输入当前位置与一次用户响应，返回下一个位置和需要写入的值。
终端交互由调用方提供的 ask 回调完成，便于脱离终端测试。
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Mapping, Optional, Sequence

from envsetter.core.reconcile import Reconciliation, reconcile
from envsetter.core.scanner.dotenv import parse_bulk_input
from envsetter.core.scanner.models import ScanResult

logger = logging.getLogger(__name__)


class Action(Enum):
    """用户对单个变量的响应类型"""
    VALUE = "value"        # 保存输入的值
    SKIP = "skip"          # 跳过，不写入
    BACK = "back"          # 回到上一个变量
    CLEAR = "clear"        # 保存为空字符串
    STOP = "stop"          # 结束会话，已保存的值保留
    SKIP_ALL = "skipall"   # 跳过剩余全部变量
    BULK = "bulk"          # 整段粘贴 env 内容，一次写入


@dataclass(frozen=True)
class Response:
    action: Action
    value: str = ""

    @classmethod
    def of(cls, value: str) -> "Response":
        return cls(Action.VALUE, value)


SKIP = Response(Action.SKIP)
BACK = Response(Action.BACK)
CLEAR = Response(Action.CLEAR)
STOP = Response(Action.STOP)
SKIP_ALL = Response(Action.SKIP_ALL)

# 输入框中可用的命令
COMMANDS: dict[str, Action] = {
    "skip": Action.SKIP,
    "back": Action.BACK,
    "clear": Action.CLEAR,
    "exit": Action.STOP,
    "quit": Action.STOP,
    "skipall": Action.SKIP_ALL,
    "paste": Action.BULK,
}


def parse_command(raw: str) -> Optional[Action]:
    """识别输入中的命令（忽略大小写与首尾空白），不是命令返回 None"""
    return COMMANDS.get(raw.strip().lower())


@dataclass(frozen=True)
class Step:
    """
    一次推进的结果

    Attributes:
        index: 下一个要询问的位置
        writes: 需要立即持久化的 key -> value（一批）
        done: 会话是否结束
        stopped: 是否为用户提前结束
        skipped: 本次跳过的变量数
    """
    index: int
    writes: dict[str, str] = field(default_factory=dict)
    done: bool = False
    stopped: bool = False
    skipped: int = 0


def advance(index: int, var_list: Sequence[str], response: Response) -> Step:
    """根据响应计算下一步"""
    total = len(var_list)
    key = var_list[index]
    action = response.action

    if action is Action.BACK:
        return Step(index=max(index - 1, 0))

    if action is Action.STOP:
        return Step(index=index, done=True, stopped=True)

    if action is Action.SKIP_ALL:
        return Step(index=total, done=True, stopped=True, skipped=total - index)

    if action is Action.BULK:
        return Step(index=total, writes=parse_bulk_input(response.value), done=True)

    if action is Action.SKIP:
        writes: dict[str, str] = {}
        skipped = 1
    elif action is Action.CLEAR:
        writes = {key: ""}
        skipped = 0
    else:
        writes = {key: response.value}
        skipped = 0

    next_index = index + 1
    return Step(index=next_index, writes=writes, done=next_index >= total, skipped=skipped)


@dataclass(frozen=True)
class VariablePrompt:
    """
    询问单个变量时提供给前端的信息

    Attributes:
        key: 变量名
        index: 位置 (0-based)
        total: 变量总数
        current: 当前值（未设置时为空串）
        files: 引用该变量的文件
        stats: 最新的对账统计
        remaining: 之后还要询问的变量
    """
    key: str
    index: int
    total: int
    current: str
    files: frozenset[str]
    stats: Reconciliation
    remaining: tuple[str, ...] = ()


@dataclass
class SessionResult:
    values: dict[str, str] = field(default_factory=dict)
    skipped: int = 0
    stopped: bool = False


AskCallback = Callable[[VariablePrompt], Response]
SaveCallback = Callable[[dict[str, str]], None]


def run_session(
    var_list: Sequence[str],
    found: ScanResult,
    existing: Mapping[str, str],
    ask: AskCallback,
    on_save: SaveCallback,
) -> SessionResult:
    """
    逐个询问变量并增量保存

    每个被接受的响应立即调用一次 on_save（单个值或整段粘贴的一批），
    中途退出时之前的值已落盘。回退后重新确认的值同样立即保存。
    on_save 负责更新 existing，以便下一次询问时统计是最新的。
    """
    result = SessionResult()
    var_list = list(var_list)
    index = 0

    while index < len(var_list):
        key = var_list[index]
        prompt = VariablePrompt(
            key=key,
            index=index,
            total=len(var_list),
            current=existing.get(key, ""),
            files=frozenset(found.get(key, ())),
            stats=reconcile(found, existing),
            remaining=tuple(var_list[index + 1:]),
        )
        step = advance(index, var_list, ask(prompt))

        if step.writes:
            on_save(dict(step.writes))
            result.values.update(step.writes)
        result.skipped += step.skipped

        if step.done:
            result.stopped = step.stopped
            break
        index = step.index

    logger.debug(
        f"Session finished: {len(result.values)} saved, {result.skipped} skipped, "
        f"stopped={result.stopped}"
    )
    return result
