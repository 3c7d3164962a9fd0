# chatdocs/cli.py
"""
ChatDocs CLI 主入口
"""
import os
import shutil
import sys
from contextlib import contextmanager
from pathlib import Path

import click
from rich.table import Table

from chatdocs import __version__
from chatdocs.core.config import (
    STATE_DIR, SETTINGS_FILE, SETTINGS_TEMPLATE, SUGGEST_CONFIG, UPDATE_CONFIG,
    Settings, load_prompt_config, load_settings,
)
from chatdocs.core.exceptions import (
    ChatDocsError, ConfigError, DirtyWorkingTreeError, GenerationError,
    GitError, InputError, PathEscapeError,
)
from chatdocs.core.invoker import GeminiInvoker
from chatdocs.core.models import ReplayStatus
from chatdocs.core.replay import CommitReplayer
from chatdocs.core.updater import DocUpdater
from chatdocs.core.writer import FileWriter
from chatdocs.utils.console import console, echo_response, error, heading, info, success

# 失败阶段标签，顺序有意义：子类在前
STAGE_LABELS = [
    (ConfigError, "Configuration error"),
    (PathEscapeError, "Path error"),
    (InputError, "Input error"),
    (GenerationError, "Generation failed"),
    (DirtyWorkingTreeError, "Precondition failed"),
    (GitError, "Git error"),
]


def _stage_for(exc: ChatDocsError) -> str:
    for exc_type, label in STAGE_LABELS:
        if isinstance(exc, exc_type):
            return label
    return "Error"


@contextmanager
def _report_errors():
    """把 ChatDocsError 转成 stderr 上的一行诊断信息和退出码 1"""
    try:
        yield
    except ChatDocsError as e:
        error(str(e), stage=_stage_for(e))
        sys.exit(1)


# ------------------------------
# 辅助函数
# ------------------------------

def _load_settings(**overrides) -> Settings:
    return load_settings().with_overrides(**overrides)


def _make_invoker(settings: Settings) -> GeminiInvoker:
    api_key = os.environ.get(settings.api_key_env)
    if not api_key:
        raise ConfigError(f"Environment variable {settings.api_key_env} is not set.")
    return GeminiInvoker(api_key)


def _make_updater(settings: Settings) -> DocUpdater:
    invoker = _make_invoker(settings)
    return DocUpdater.from_paths(
        invoker,
        settings.suggest_config,
        settings.update_config,
        docs_dir=settings.docs_dir,
    )


def config_options(f):
    """update / replay 共用的配置选项"""
    f = click.option("--update-config", type=click.Path(dir_okay=False), help="Config for the apply phase")(f)
    f = click.option("--suggest-config", type=click.Path(dir_okay=False), help="Config for the suggest phase")(f)
    f = click.option("--docs-dir", help="Documentation directory, relative to the target")(f)
    return f


# ------------------------------
# CLI 主入口
# ------------------------------

@click.group()
@click.version_option(__version__, message="ChatDocs CLI v%(version)s")
def cli():
    """📝 ChatDocs - keep documentation in step with git history"""
    pass


# ------------------------------
# 命令 1: prompt (Prompt Invoker)
# ------------------------------

@cli.command(name="prompt")
@click.argument("config_file", type=click.Path(dir_okay=False))
def prompt_command(config_file: str):
    """💬 Send stdin to the model described by CONFIG_FILE and print the answer"""
    with _report_errors():
        config = load_prompt_config(config_file)
        invoker = _make_invoker(_load_settings())
        user_input = click.get_text_stream("stdin").read()
        result = invoker.invoke(config, user_input)

    echo_response(result.response)
    click.echo(result.text)


# ------------------------------
# 命令 2: write (File Writer)
# ------------------------------

@cli.command(name="write")
def write_command():
    """💾 Apply a JSON file change set from stdin to the current directory"""
    with _report_errors():
        payload = click.get_text_stream("stdin").read()
        FileWriter(Path.cwd()).apply_text(payload)


# ------------------------------
# 命令 3: update (Doc Update Orchestrator)
# ------------------------------

@cli.command(name="update")
@click.argument("patch_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("target_dir", type=click.Path(exists=True, file_okay=False), default=".")
@config_options
def update_command(patch_file: str, target_dir: str, docs_dir, suggest_config, update_config):
    """🧠 Update the documentation in TARGET_DIR from the diff in PATCH_FILE"""
    with _report_errors():
        settings = _load_settings(
            docs_dir=docs_dir, suggest_config=suggest_config, update_config=update_config,
        )
        updater = _make_updater(settings)
        patch = Path(patch_file).read_text(encoding="utf-8", errors="replace")
        actions = updater.run(patch, Path(target_dir).resolve())
    success(f"Documentation updated ({len(actions)} file change(s)).")


# ------------------------------
# 命令 4: replay (Commit Replay Driver)
# ------------------------------

@cli.command(name="replay")
@click.option("--base-branch", help="Branch whose history is documented")
@click.option("--tracking-branch", help="Branch holding the generated commits")
@config_options
def replay_command(base_branch, tracking_branch, docs_dir, suggest_config, update_config):
    """🔁 Generate documentation for the next unprocessed commit of the base branch"""
    with _report_errors():
        settings = _load_settings(
            base_branch=base_branch, tracking_branch=tracking_branch, docs_dir=docs_dir,
            suggest_config=suggest_config, update_config=update_config,
        )
        replayer = CommitReplayer(
            _make_updater(settings),
            repo=Path.cwd(),
            base_branch=settings.base_branch,
            tracking_branch=settings.tracking_branch,
            docs_dir=settings.docs_dir,
        )
        result = replayer.run()
    if result.status is ReplayStatus.PROCESSED:
        info(f"{settings.tracking_branch} -> {result.generated_commit}")


# ------------------------------
# 其他辅助命令
# ------------------------------

@cli.command(name="status")
@click.option("--base-branch", help="Branch whose history is documented")
@click.option("--tracking-branch", help="Branch holding the generated commits")
def status_command(base_branch, tracking_branch):
    """📊 Show how far the tracking branch has caught up with the base branch"""
    with _report_errors():
        settings = _load_settings(base_branch=base_branch, tracking_branch=tracking_branch)
        replayer = CommitReplayer(
            None,
            repo=Path.cwd(),
            base_branch=settings.base_branch,
            tracking_branch=settings.tracking_branch,
            docs_dir=settings.docs_dir,
        )
        cursor = replayer.read_cursor()
        pending = replayer.pending_count(cursor)

    heading("Replay Status")
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("Base branch", settings.base_branch)
    table.add_row("Tracking branch", settings.tracking_branch)
    table.add_row("Last generated commit", cursor.generated_commit if cursor else "-")
    table.add_row("Last base commit", cursor.base_commit if cursor else "-")
    table.add_row("Pending commits", str(pending))
    console.print(table)


@cli.command(name="init")
def init_command():
    """🔧 Write .chatdocs/ settings and editable copies of the prompt configs"""
    heading("Project Initialization")
    STATE_DIR.mkdir(exist_ok=True)
    for source, target in [
        (SETTINGS_TEMPLATE, SETTINGS_FILE),
        (SUGGEST_CONFIG, STATE_DIR / SUGGEST_CONFIG.name),
        (UPDATE_CONFIG, STATE_DIR / UPDATE_CONFIG.name),
    ]:
        if target.exists() and not click.confirm(f"{target} already exists. Overwrite?", default=False):
            info(f"Skipped: {target}")
            continue
        shutil.copyfile(source, target)
        success(f"Generated: {target}")
    success("Initialization complete!")


# ------------------------------
# 主入口
# ------------------------------
if __name__ == '__main__':
    cli()
