# tests/conftest.py
"""
ChatDocs 测试配置和共享 fixtures
"""

import os
import subprocess
import tempfile
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import yaml

INVOKER_MODULE = 'chatdocs.core.invoker'


def run_git(root: Path, *args: str) -> str:
    proc = subprocess.run(
        ["git", *args], cwd=str(root), capture_output=True, text=True, check=True
    )
    return proc.stdout.strip()


# --- Pytest Fixtures ---

@pytest.fixture(scope="function")
def isolated_filesystem():
    """
    提供一个隔离的临时目录，并在测试期间切换当前工作目录。
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir).resolve()
        original_cwd = os.getcwd()
        os.chdir(temp_path)
        try:
            yield temp_path
        finally:
            os.chdir(original_cwd)


@pytest.fixture
def git_env(tmp_path, monkeypatch):
    """隔离用户级 git 配置，并提供固定的提交者身份"""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for prefix in ("GIT_AUTHOR", "GIT_COMMITTER"):
        monkeypatch.setenv(f"{prefix}_NAME", "ChatDocs Test")
        monkeypatch.setenv(f"{prefix}_EMAIL", "chatdocs@example.com")


@pytest.fixture
def git_repo(tmp_path, git_env):
    """
    一个包含 main 分支 C1 -> C2 -> C3 三个提交的仓库。
    """
    root = (tmp_path / "repo").resolve()
    root.mkdir()
    run_git(root, "init", "-q")
    run_git(root, "symbolic-ref", "HEAD", "refs/heads/main")

    commits = []
    for i in range(1, 4):
        (root / "src").mkdir(exist_ok=True)
        (root / "src" / f"module{i}.py").write_text(f"def feature_{i}():\n    return {i}\n", encoding="utf-8")
        run_git(root, "add", "-A")
        run_git(root, "commit", "-q", "-m", f"Add feature {i}")
        commits.append(run_git(root, "rev-parse", "HEAD"))

    return SimpleNamespace(root=root, commits=commits, git=lambda *args: run_git(root, *args))


@pytest.fixture
def prompt_config_file(tmp_path):
    """写一个合法的模型配置文件，返回其路径"""
    path = tmp_path / "generate-docs.yaml"
    path.write_text(yaml.safe_dump({
        "model": "gemini-test",
        "generationConfig": {"temperature": 0.5, "maxOutputTokens": 1024},
        "systemInstruction": "You write documentation.",
    }), encoding="utf-8")
    return path


@pytest.fixture
def mock_genai():
    """
    Mock google.generativeai（在 chatdocs.core.invoker 中的引用）。
    返回 mock 模块；chat 会话可通过 mock.GenerativeModel.return_value.start_chat.return_value 访问。
    """
    with patch(f'{INVOKER_MODULE}.genai') as genai_mock:
        yield genai_mock


def make_response(text: str) -> MagicMock:
    response = MagicMock()
    response.text = text
    return response


@pytest.fixture
def runner():
    """提供一个 Click CliRunner 实例用于测试 CLI 命令"""
    from click.testing import CliRunner
    return CliRunner()
