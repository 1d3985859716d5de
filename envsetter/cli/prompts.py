"""
交互输入 - 基于 rich.prompt 的值收集前端

把终端输入翻译为 core.session 的 Response；展示交给 RichReporter。
"""

from pathlib import Path
from typing import Literal, Optional, Sequence, Union

from rich.console import Console
from rich.prompt import Confirm, Prompt

from envsetter.core.hints import get_category, is_sensitive_key
from envsetter.core.reconcile import Reconciliation
from envsetter.core.scanner.discovery import list_env_files
from envsetter.core.scanner.dotenv import parse_bulk_input
from envsetter.core.scanner.models import ProjectFolder
from envsetter.core.scanner.patterns import WRITABLE_ENV_FILES
from envsetter.core.session import (
    Action,
    BACK,
    CLEAR,
    SKIP,
    SKIP_ALL,
    STOP,
    Response,
    VariablePrompt,
    parse_command,
)
from envsetter.reporters.rich_reporter import RichReporter

Mode = Literal["missing", "all", "bulk", "exit"]

HELP_COMMANDS = ("help", "?")
LIST_COMMAND = "list"


class RichPrompter:
    """终端交互前端"""

    def __init__(self, console: Console, reporter: RichReporter):
        self.console = console
        self.reporter = reporter
        self._last_category: Optional[str] = None

    def choose_folder(self, folders: Sequence[ProjectFolder]) -> Union[ProjectFolder, Literal["all"], None]:
        """多个目录时让用户选择，单个目录自动选中"""
        if len(folders) <= 1:
            return folders[0] if folders else None
        self.reporter.show_folders(folders)
        choices = [str(i) for i in range(1, len(folders) + 1)] + ["all"]
        answer = Prompt.ask(
            "Select folder (number, or 'all' for every folder)",
            choices=choices,
            default="1",
            console=self.console,
        )
        if answer == "all":
            return "all"
        return folders[int(answer) - 1]

    def choose_env_file(self, folder: Path) -> str:
        """选择写入目标：已有 .env* 文件、标准文件名或自定义路径"""
        existing = list_env_files(folder)
        new = [name for name in WRITABLE_ENV_FILES if name not in existing]
        options = existing + new
        self.reporter.show_env_files(existing, new)
        choices = [str(i) for i in range(1, len(options) + 2)]
        answer = Prompt.ask("Write to", choices=choices, default="1", console=self.console)
        index = int(answer) - 1
        if index < len(options):
            return options[index]
        while True:
            custom = Prompt.ask("Enter path", default=".env", console=self.console).strip()
            if custom:
                return custom
            self.console.print("[red]Path cannot be empty[/red]")

    def choose_mode(self, stats: Reconciliation) -> Mode:
        """选择填写模式"""
        choices: list[str] = []
        if stats.missing > 0:
            self.console.print(f"  [cyan]missing[/cyan]  Fill missing only [dim]({stats.missing})[/dim]")
            choices.append("missing")
        if stats.already_set > 0:
            label = "Edit all variables" if stats.missing > 0 else "Edit existing"
            self.console.print(f"  [magenta]all[/magenta]      {label} [dim]({stats.total})[/dim]")
            choices.append("all")
        self.console.print("  [green]bulk[/green]     Bulk paste [dim](paste whole .env content)[/dim]")
        self.console.print("  [red]exit[/red]     Exit")
        choices.extend(["bulk", "exit"])
        return Prompt.ask("Select mode", choices=choices, default=choices[0], console=self.console)

    def read_bulk_text(self) -> str:
        """读取粘贴内容：有内容后遇到空行结束"""
        self.console.print("[bold]◆ Bulk Paste[/bold]")
        self.console.print("[dim]  Paste your env content below, then press Enter on an empty line.[/dim]")
        lines: list[str] = []
        while True:
            try:
                line = self.console.input("  [cyan]▸[/cyan] ")
            except EOFError:
                break
            if not line.strip():
                if lines:
                    break
                continue
            lines.append(line)
            count = len(parse_bulk_input("\n".join(lines)))
            self.console.print(f"[dim]     ✔ {count} var{'s' if count != 1 else ''} detected[/dim]")
        return "\n".join(lines)

    def ask_bulk_paste(self) -> Optional[dict[str, str]]:
        """粘贴并确认，取消或没有有效内容时返回 None"""
        text = self.read_bulk_text()
        if not text.strip():
            self.console.print("[dim]  No content pasted. Skipping.[/dim]")
            return None
        values = parse_bulk_input(text)
        if not values:
            self.console.print("[yellow]⚠ No valid KEY=VALUE pairs found.[/yellow]")
            self.console.print('[dim]  Expected format: KEY=value or KEY="value"[/dim]')
            return None
        self.reporter.show_bulk_preview(values, {k for k in values if is_sensitive_key(k)})
        count = len(values)
        if not Confirm.ask(
            f"Write {count} variable{'s' if count > 1 else ''} to env file?",
            default=True,
            console=self.console,
        ):
            self.console.print("[dim]  Cancelled. Nothing was written.[/dim]")
            return None
        return values

    def start_session(self) -> None:
        self._last_category = None
        self.reporter.show_command_panel()

    def ask_value(self, prompt: VariablePrompt) -> Response:
        """询问单个变量，处理 help/list 与需要确认的命令"""
        category = get_category(prompt.key)
        if category and category != self._last_category:
            self.reporter.show_category(category)
            self._last_category = category
        self.reporter.show_variable(prompt)

        secret = is_sensitive_key(prompt.key)
        while True:
            raw = Prompt.ask(
                "  🔒 Secret" if secret else "  ▸ Value",
                password=secret,
                default=prompt.current,
                show_default=False,
                console=self.console,
            )
            command = raw.strip().lower()

            if command in HELP_COMMANDS:
                self.reporter.show_command_panel()
                continue
            if command == LIST_COMMAND:
                self.reporter.show_remaining(prompt.remaining)
                continue

            action = parse_command(raw)
            if action is None:
                return Response.of(raw)

            if action is Action.STOP:
                if Confirm.ask("End session? All saved values are kept.", default=True, console=self.console):
                    self.console.print("[yellow]⚠ Session ended early.[/yellow]")
                    return STOP
                continue
            if action is Action.SKIP_ALL:
                count = prompt.total - prompt.index
                if Confirm.ask(f"Skip all {count} remaining variable{'s' if count > 1 else ''}?",
                               default=False, console=self.console):
                    return SKIP_ALL
                continue
            if action is Action.BACK:
                if prompt.index == 0:
                    self.console.print("[dim]    → Already at first variable[/dim]")
                    continue
                self._last_category = None
                self.console.print("[dim]    → Going back...[/dim]")
                return BACK
            if action is Action.BULK:
                return Response(Action.BULK, self.read_bulk_text())
            if action is Action.SKIP:
                self.console.print("  [dim]→ Skipped[/dim]")
                return SKIP
            return CLEAR
