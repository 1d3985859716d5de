"""
CLI 入口模块 - 使用 Typer 构建命令行界面

交互流程：
1. 发现包含 env 文件的目录
2. 扫描（env 文件或深度扫描源码）
3. 选择目标文件并对账
4. 逐个填写并增量保存
5. 同步模板文件、检查 .gitignore
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from envsetter.config import EnvSetterConfig
from envsetter.core import (
    EnvSetterError,
    ProjectFolder,
    discover_env_folders,
    parse_existing_env,
    reconcile,
    run_session,
    scan,
    select_vars_to_fill,
    sync_to_env_example,
    write_env_file,
)
from envsetter.core.scanner.discovery import list_env_files
from envsetter.core.scanner.patterns import WRITABLE_ENV_FILES
from envsetter.filters import is_gitignored
from envsetter.reporters import JsonReporter, RichReporter, ScanReport
from envsetter.cli.prompts import RichPrompter

logger = logging.getLogger(__name__)

# 创建 Typer 应用实例
app = typer.Typer(
    name="envsetter",
    help="envsetter: find env vars used in your code and fill in your .env interactively.",
    add_completion=False,
)

# Rich Console 用于输出
console = Console()


def configure_logging(verbose: bool) -> None:
    """日志输出到 stderr，--verbose 时打开 DEBUG"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def resolve_root(target: str) -> Path:
    root = Path(target).resolve()
    if not root.exists():
        console.print(f"[red]Error:[/red] Path does not exist: {target}")
        raise typer.Exit(1)
    if not root.is_dir():
        console.print(f"[red]Error:[/red] Path is not a directory: {target}")
        raise typer.Exit(1)
    return root


def build_config(
    deep: bool,
    env_file: Optional[str],
    max_depth: Optional[int],
    ignore: Optional[List[str]],
    sync_example: bool = True,
) -> EnvSetterConfig:
    """环境变量提供默认值，命令行选项覆盖"""
    config = EnvSetterConfig.from_environ()
    config.deep = deep
    config.env_file = env_file
    config.sync_example = sync_example
    if max_depth is not None:
        config.max_depth = max_depth
    if ignore:
        config.extra_ignore = config.extra_ignore + list(ignore)
    return config


def default_target(folder: Path) -> str:
    """非交互模式下的对账目标：第一个已存在的标准文件，否则 .env"""
    existing = list_env_files(folder)
    for name in WRITABLE_ENV_FILES:
        if name in existing:
            return name
    return ".env"


def scan_folder(folder: Path, config: EnvSetterConfig):
    return scan(
        folder,
        deep=config.deep,
        extra_ignore=config.extra_ignore,
        max_depth=config.scan_max_depth,
    )


def process_folder(
    folder: Path,
    config: EnvSetterConfig,
    reporter: RichReporter,
    prompter: RichPrompter,
    label: Optional[str] = None,
    root: Optional[Path] = None,
) -> int:
    """
    处理单个目录：扫描、选择目标文件、填写

    .gitignore 检查使用运行根目录 root（默认即 folder）。

    Returns:
        写入的变量数
    """
    if label:
        console.print()
        console.print(f"[cyan]›[/cyan] [bold]Working in:[/bold] [bold cyan]{label}[/bold cyan]")
        console.print("[dim]" + "─" * 50 + "[/dim]")

    with console.status("Deep scanning for environment variables" if config.deep
                        else "Scanning env files for environment variables"):
        try:
            found = scan_folder(folder, config)
        except EnvSetterError as e:
            console.print(f"[red]Error:[/red] {e}")
            return 0

    if not found:
        reporter.show_no_variables(config.deep)
        return 0

    env_file = config.env_file or prompter.choose_env_file(folder)
    env_path = (folder / env_file).resolve()
    existing = parse_existing_env(env_path)
    logger.debug(f"Target {env_path}: {len(existing)} existing entries")

    stats = reconcile(found, existing)
    reporter.show_scan_result(stats)
    mode = prompter.choose_mode(stats)

    if mode == "exit":
        console.print("[dim]  Skipped this folder.[/dim]")
        return 0

    saved = 0
    saved_keys: list[str] = []

    def on_save(values: dict[str, str]) -> None:
        nonlocal saved
        unchanged = all(existing.get(k) == v for k, v in values.items())
        saved += write_env_file(env_path, values, existing)
        saved_keys.extend(k for k in values if k not in saved_keys)
        reporter.show_saved(unchanged, saved, reconcile(found, existing))

    try:
        if mode == "bulk":
            values = prompter.ask_bulk_paste()
            if values:
                on_save(values)
        else:
            var_list = select_vars_to_fill(found, existing, mode)
            if not var_list:
                console.print("[green]✔ All environment variables are already set![/green]")
                return 0
            prompter.start_session()
            run_session(var_list, found, existing, prompter.ask_value, on_save)
    except EnvSetterError as e:
        console.print(f"[red]Error:[/red] {e}")

    if saved_keys:
        if is_gitignored(root or folder, env_path) is False:
            reporter.warn_not_gitignored(env_file)
        example_path = (folder / config.example_file).resolve()
        if config.sync_example and example_path != env_path:
            try:
                reporter.show_synced(sync_to_env_example(saved_keys, example_path), config.example_file)
            except EnvSetterError as e:
                console.print(f"[red]Error:[/red] {e}")

    reporter.show_summary(saved, env_file)
    return saved


@app.command()
def run(
    target: str = typer.Argument(
        ".",
        help="Project directory to scan",
    ),
    deep: bool = typer.Option(
        False,
        "--deep",
        "-d",
        help="Scan source code for env var references instead of only env files",
    ),
    env_file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Env file to write (skips the target file picker)",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        help="Maximum folder depth when discovering env files",
    ),
    ignore: Optional[List[str]] = typer.Option(
        None,
        "--ignore",
        "-i",
        help="Extra gitignore-style pattern to skip during deep scans (repeatable)",
    ),
    no_sync: bool = typer.Option(
        False,
        "--no-sync",
        help="Do not add saved keys to .env.example",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """
    Interactively fill missing environment variables.

    Examples:
        envsetter run
        envsetter run --deep
        envsetter run ./services/api --file .env.local
    """
    configure_logging(verbose)
    root = resolve_root(target)
    config = build_config(deep, env_file, max_depth, ignore, sync_example=not no_sync)
    reporter = RichReporter(console)
    prompter = RichPrompter(console, reporter)

    reporter.show_banner()

    folders = discover_env_folders(root, config.max_depth)
    if not folders:
        console.print("[yellow]⚠ No env files found in any folder[/yellow]")
        process_folder(root, config, reporter, prompter)
        raise typer.Exit(0)

    console.print(f"[green]✔ Found env files in {len(folders)} folder{'s' if len(folders) > 1 else ''}[/green]")
    selected = prompter.choose_folder(folders)

    if selected == "all":
        total = 0
        for i, folder in enumerate(folders, 1):
            total += process_folder(
                folder.abs_path, config, reporter, prompter,
                label=f"{folder.label}  [{i}/{len(folders)}]",
                root=root,
            )
        if total > 0:
            console.print(
                f"[green]✔ Total: {total} variable{'s' if total > 1 else ''} "
                f"saved across {len(folders)} folders[/green]"
            )
    elif isinstance(selected, ProjectFolder):
        label = None if selected.is_root else selected.rel_path
        process_folder(selected.abs_path, config, reporter, prompter, label=label, root=root)
    else:
        process_folder(root, config, reporter, prompter)


@app.command("scan")
def scan_command(
    target: str = typer.Argument(
        ".",
        help="Project directory to scan",
    ),
    deep: bool = typer.Option(
        False,
        "--deep",
        "-d",
        help="Scan source code for env var references instead of only env files",
    ),
    env_file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Env file to compare against (default: first existing .env file)",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        help="Maximum folder depth when discovering env files",
    ),
    ignore: Optional[List[str]] = typer.Option(
        None,
        "--ignore",
        "-i",
        help="Extra gitignore-style pattern to skip during deep scans (repeatable)",
    ),
    format: str = typer.Option(
        "rich",
        "--format",
        help="Output format: rich (default) or json",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """
    Report found, set and missing variables without prompting.

    Exits with code 1 when any variable is missing.
    """
    configure_logging(verbose)
    root = resolve_root(target)
    config = build_config(deep, env_file, max_depth, ignore)

    folders = discover_env_folders(root, config.max_depth)
    if not folders:
        folders = [ProjectFolder(rel_path=".", abs_path=root, env_files=[])]

    reports: list[ScanReport] = []
    for folder in folders:
        try:
            found = scan_folder(folder.abs_path, config)
        except EnvSetterError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        target_file = config.env_file or default_target(folder.abs_path)
        existing = parse_existing_env(folder.abs_path / target_file)
        reports.append(ScanReport(
            folder=folder.rel_path,
            target=target_file,
            deep=config.deep,
            found=found,
            existing=existing,
            stats=reconcile(found, existing),
        ))

    if format == "json":
        reporter = JsonReporter()
    else:
        reporter = RichReporter(console)
    reporter.report(reports)

    if any(report.stats.missing for report in reports):
        raise typer.Exit(1)
    raise typer.Exit(0)


@app.command()
def version() -> None:
    """Show the version of envsetter."""
    from envsetter import __version__
    console.print(f"[bold]envsetter[/bold] v{__version__}")


if __name__ == "__main__":
    app()
