"""
Rich 终端报告器 - 使用 Rich 库输出彩色终端格式

负责扫描结果、变量卡片、会话总结等所有展示；不做任何输入。
"""

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from envsetter import __version__
from envsetter.core.hints import get_category, get_value_hint, mask_value
from envsetter.core.reconcile import Reconciliation
from envsetter.core.scanner.models import ProjectFolder
from envsetter.core.session import VariablePrompt
from envsetter.reporters.base import ScanReport

# 变量卡片中最多显示的引用文件数
MAX_FILES_SHOWN = 3

COMMAND_HELP = [
    ("skip", "Skip this variable"),
    ("back", "Go to previous variable"),
    ("clear", "Set value to empty string"),
    ("list", "Show all remaining variables"),
    ("paste", "Bulk paste env content and finish"),
    ("skipall", "Skip all remaining variables"),
    ("exit", "Stop and keep all saved values"),
]


def coverage_color(pct: int) -> str:
    if pct >= 80:
        return "green"
    if pct >= 50:
        return "yellow"
    return "red"


def progress_bar(done: int, total: int, width: int = 28) -> str:
    """进度条（rich markup）"""
    if total <= 0:
        return f"[dim]{'░' * width}[/dim]"
    ratio = min(max(done / total, 0.0), 1.0)
    filled = round(ratio * width)
    return f"[cyan]{'█' * filled}[/cyan][dim]{'░' * (width - filled)}[/dim]"


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def show_banner(self) -> None:
        content = Text()
        content.append("ENV SETTER\n", style="bold cyan")
        content.append("Scan > Fill > Save  |  Interactive .env manager\n", style="dim")
        content.append(f"v{__version__}", style="dim")
        self.console.print(Panel(content, border_style="cyan", expand=False))

    def show_folders(self, folders: Sequence[ProjectFolder]) -> None:
        """列出发现的目录"""
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Folder", style="bold")
        table.add_column("Env files", style="dim")
        for i, folder in enumerate(folders, 1):
            table.add_row(str(i), folder.label, ", ".join(folder.env_files))
        self.console.print("[bold]◆ Project Folders[/bold]")
        self.console.print(table)
        self.console.print()

    def show_env_files(self, existing: Sequence[str], new: Sequence[str]) -> None:
        """列出可选的目标文件"""
        self.console.print("[bold]◆ Target File[/bold]")
        index = 1
        for name in existing:
            tag = "template · exists" if _is_template(name) else "exists"
            self.console.print(f"  [dim]{index:>2}.[/dim] [green]✔[/green] [bold]{name}[/bold] [dim]({tag})[/dim]")
            index += 1
        for name in new:
            self.console.print(f"  [dim]{index:>2}.[/dim] [dim]+ {name} (new)[/dim]")
            index += 1
        self.console.print(f"  [dim]{index:>2}.[/dim] [magenta]…[/magenta] Custom path")
        self.console.print()

    def show_scan_result(self, stats: Reconciliation) -> None:
        """扫描统计面板"""
        pct = stats.coverage
        color = coverage_color(pct)
        content = (
            f"[yellow]●[/yellow]  Variables found  [bold]{stats.total:>4}[/bold]\n"
            f"[green]●[/green]  Already set      [bold green]{stats.already_set:>4}[/bold green]\n"
            f"[red]●[/red]  Missing          [bold red]{stats.missing:>4}[/bold red]\n\n"
            f"Coverage  {progress_bar(stats.already_set, stats.total)}  [bold {color}]{pct}%[/bold {color}]"
        )
        self.console.print(Panel(content, title="[bold]Scan Results[/bold]", border_style="cyan", expand=False))

    def show_no_variables(self, deep: bool) -> None:
        self.console.print("[yellow]⚠ No environment variables found.[/yellow]")
        if not deep:
            self.console.print("[dim]  Try: envsetter run --deep[/dim]")

    def show_command_panel(self) -> None:
        table = Table(show_header=False, box=None, padding=(0, 2))
        for name, desc in COMMAND_HELP:
            table.add_row(f"[bold cyan]{name}[/bold cyan]", f"[dim]{desc}[/dim]")
        table.add_row("[bold]Enter[/bold]", "[dim]Keep the current value[/dim]")
        table.add_row("[bold]?[/bold]", "[dim]Show this panel[/dim]")
        self.console.print(Panel(table, title="[bold]Commands[/bold]", border_style="dim", expand=False))

    def show_category(self, category: str) -> None:
        self.console.print()
        self.console.print(f"[reverse magenta] {category} [/reverse magenta]")

    def show_variable(self, prompt: VariablePrompt) -> None:
        """单个变量卡片：进度、取值提示、引用位置、当前值"""
        pct = round(prompt.index / prompt.total * 100) if prompt.total else 0
        lines = [
            f"[cyan]◆[/cyan] [bold]{prompt.key}[/bold]  [dim][{prompt.index + 1}/{prompt.total}]  {pct}%[/dim]",
            progress_bar(prompt.index, prompt.total, 30),
        ]
        hint = get_value_hint(prompt.key)
        if hint:
            color = "yellow" if hint.type == "Secret" else "magenta"
            lines.append(f"[{color}]{hint.type}[/{color}] [dim]{hint.hint}[/dim]")
        if prompt.files:
            files = sorted(prompt.files)
            shown = escape(", ".join(files[:MAX_FILES_SHOWN]))
            extra = f" +{len(files) - MAX_FILES_SHOWN}" if len(files) > MAX_FILES_SHOWN else ""
            lines.append(f"[dim]Found in:[/dim] {shown}[dim]{extra}[/dim]")
        if prompt.current:
            lines.append(f"[green]●[/green] [dim]Current: {escape(mask_value(prompt.current))}[/dim]")
        else:
            lines.append("[yellow]●[/yellow] [dim]Not set[/dim]")
        self.console.print()
        self.console.print(Panel("\n".join(lines), border_style="dim", expand=False))

    def show_remaining(self, remaining: Sequence[str]) -> None:
        if not remaining:
            self.console.print("[dim]    This is the last variable.[/dim]")
            return
        self.console.print(f"[dim]    Remaining ({len(remaining)}):[/dim]")
        for i, name in enumerate(remaining, 1):
            category = get_category(name)
            label = f" [magenta]{escape(f'[{category}]')}[/magenta]" if category else ""
            self.console.print(f"      [dim]{i:>2}.[/dim] {name}{label}")

    def show_saved(self, unchanged: bool, saved: int, stats: Reconciliation) -> None:
        status = "[dim]✔ Unchanged[/dim]" if unchanged else "[green]✔ Saved[/green]"
        self.console.print(
            f"  {status}  [dim]│  {saved} saved · {stats.missing} missing · {stats.coverage}% coverage[/dim]"
        )

    def show_bulk_preview(self, values: dict[str, str], sensitive: set[str]) -> None:
        """粘贴内容预览，敏感值遮盖"""
        self.console.print(f"[bold]◆ Found {len(values)} variable{'s' if len(values) != 1 else ''}[/bold]")
        for key, value in values.items():
            if key in sensitive:
                shown = f"{mask_value(value)}  \\[secret]"
            elif not value:
                shown = "(empty)"
            else:
                shown = escape(value if len(value) <= 40 else value[:37] + "...")
            self.console.print(f"    [green]✔[/green] {key} [dim]=[/dim] [dim]{shown}[/dim]")

    def warn_not_gitignored(self, env_file: str) -> None:
        self.console.print()
        self.console.print(f"[yellow]⚠ [bold]{env_file}[/bold] is [bold]NOT[/bold] in .gitignore![/yellow]")
        self.console.print(f"[dim]    Run: echo \"{env_file}\" >> .gitignore[/dim]")

    def show_synced(self, count: int, example_file: str) -> None:
        if count > 0:
            self.console.print(f"[green]✔ Synced {count} new {'keys' if count > 1 else 'key'} to {example_file}[/green]")

    def show_summary(self, saved: int, env_file: Optional[str]) -> None:
        """会话总结"""
        self.console.print()
        if saved == 0:
            self.console.print(Panel(
                "[bold yellow]⚠ No changes made[/bold yellow]\n"
                "[dim]All variables were skipped or already set.[/dim]",
                border_style="yellow",
                expand=False,
            ))
            return
        self.console.print(Panel(
            f"[bold green]✔ Complete[/bold green]\n\n"
            f"Saved     [bold]{saved}[/bold] [dim]{'variables' if saved > 1 else 'variable'}[/dim]\n"
            f"Target    [bold cyan]{env_file}[/bold cyan]\n\n"
            f"[dim]Tip: make sure {env_file} is in .gitignore[/dim]",
            border_style="green",
            expand=False,
        ))

    def report(self, reports: list[ScanReport]) -> None:
        """非交互扫描报告：每个目录一张表"""
        for report in reports:
            mode = "deep" if report.deep else "env files"
            self.console.print()
            self.console.print(
                f"[bold]◆ {report.folder}[/bold] [dim]({mode}, target {report.target})[/dim]"
            )
            if not report.found:
                self.show_no_variables(report.deep)
                continue
            table = Table(show_header=True, header_style="bold cyan", box=None)
            table.add_column("Variable", style="bold")
            table.add_column("Status", width=10)
            table.add_column("Found in", style="dim")
            for name, files in sorted(report.found.items()):
                status = "[green]set[/green]" if report.is_set(name) else "[red]missing[/red]"
                table.add_row(name, status, escape(", ".join(sorted(files))))
            self.console.print(table)
            self.show_scan_result(report.stats)


def _is_template(name: str) -> bool:
    return any(tag in name for tag in ("example", "sample", "template"))
