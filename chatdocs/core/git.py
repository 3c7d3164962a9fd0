# chatdocs/core/git.py
"""
Git Layer - 对 git 命令的薄封装。

只调用 git 的 porcelain/plumbing 命令，不做任何重新实现。
命令失败时抛出 GitError，错误信息取自 stderr。
输出按 UTF-8 解码，无法解码的字节替换为 U+FFFD（提交中可能包含任意编码的文件）。
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .exceptions import GitError


@dataclass(frozen=True)
class CmdResult:
    code: int
    stdout: str
    stderr: str


class GitRepo:
    def __init__(self, root: Union[str, Path, None] = None):
        self.root = Path(root) if root else Path.cwd()

    def run(self, args: Sequence[str], input: Optional[str] = None, check: bool = True) -> CmdResult:
        try:
            proc = subprocess.run(
                ["git", *args],
                cwd=str(self.root),
                input=input,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                check=False,
            )
        except FileNotFoundError:
            raise GitError(args, "git is not installed or not found in PATH")
        result = CmdResult(proc.returncode, proc.stdout, proc.stderr.strip())
        if check and result.code != 0:
            raise GitError(args, result.stderr or result.stdout.strip() or f"exit code {result.code}")
        return result

    def _out(self, *args: str) -> str:
        return self.run(args).stdout.strip()

    # ==================== 查询 ====================

    def status_porcelain(self) -> str:
        return self.run(["status", "--porcelain"]).stdout

    def is_clean(self) -> bool:
        return not self.status_porcelain().strip()

    def branch_exists(self, branch: str) -> bool:
        res = self.run(["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"], check=False)
        return res.code == 0

    def rev_parse(self, rev: str) -> str:
        return self._out("rev-parse", "--verify", f"{rev}^{{commit}}")

    def first_parent(self, commit: str) -> Optional[str]:
        """返回 commit 的第一个父提交；根提交返回 None"""
        res = self.run(["rev-parse", "--verify", "--quiet", f"{commit}^1"], check=False)
        return res.stdout.strip() or None

    def rev_list(self, *args: str) -> List[str]:
        return self._out("rev-list", *args).split()

    def first_commit(self, branch: str) -> Optional[str]:
        """branch 上按时间顺序最早的提交"""
        commits = self.rev_list("--reverse", branch)
        return commits[0] if commits else None

    def commits_after(self, base_commit: str, branch: str) -> List[str]:
        """base_commit 之后、沿祖先路径到 branch 顶端的所有提交（从旧到新）"""
        return self.rev_list("--reverse", "--ancestry-path", f"{base_commit}..{branch}")

    def log_oneline(self, commit: str) -> str:
        return self._out("log", "--oneline", "-1", commit)

    def show_patch(self, commit: str) -> str:
        """commit 相对其父提交的完整补丁（包含提交信息）"""
        return self.run(["log", "-p", "-1", commit]).stdout

    def is_tracked(self, path: str) -> bool:
        return bool(self._out("ls-files", "--", path))

    # ==================== 修改 ====================

    def checkout(self, ref: str) -> None:
        self.run(["checkout", ref])

    def checkout_detached(self, commit: str) -> None:
        self.run(["checkout", "--detach", commit])

    def add(self, path: str) -> None:
        self.run(["add", "-A", "--", path])

    def write_tree(self) -> str:
        return self._out("write-tree")

    def commit_tree(self, tree: str, message: str, parents: Sequence[str]) -> str:
        args = ["commit-tree", tree]
        for parent in parents:
            args += ["-p", parent]
        return self.run(args, input=message + "\n").stdout.strip()

    def update_ref(self, branch: str, commit: str) -> None:
        self.run(["update-ref", f"refs/heads/{branch}", commit])

    def attach_head(self, branch: str) -> None:
        """让 HEAD 指向 branch（不修改索引和工作区）"""
        self.run(["symbolic-ref", "HEAD", f"refs/heads/{branch}"])

    def reset_hard(self, commit: str) -> None:
        self.run(["reset", "--hard", commit])
