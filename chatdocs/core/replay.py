# chatdocs/core/replay.py
"""
Commit Replay Driver：逐个回放基础分支上的提交，为每个提交生成文档，
并把结果记录在一个并行的跟踪分支上。

跟踪分支上的每个生成提交有两个父提交：
  - 第一个父提交：它所对应的基础提交
  - 第二个父提交：上一个生成提交（第一个生成提交没有这一项）
回放进度从不单独保存，每次运行都从跟踪分支的引用重新推导。
每次调用只处理一个基础提交；重复调用即可逐步追上基础分支。
"""

from pathlib import Path
from typing import Optional, Protocol, Union

from .config import DEFAULT_BASE_BRANCH, DEFAULT_TRACKING_BRANCH
from .exceptions import ChatDocsError, DirtyWorkingTreeError, GenerationError, GitError
from .git import GitRepo
from .models import ReplayCursor, ReplayResult, ReplayStatus
from ..utils.console import info, plain, success


class PatchHandler(Protocol):
    def run(self, patch: str, target_dir: Optional[Path] = None): ...


class CommitReplayer:
    def __init__(
        self,
        updater: PatchHandler,
        repo: Union[GitRepo, str, Path, None] = None,
        base_branch: str = DEFAULT_BASE_BRANCH,
        tracking_branch: str = DEFAULT_TRACKING_BRANCH,
        docs_dir: str = "docs",
    ):
        self.updater = updater
        self.git = repo if isinstance(repo, GitRepo) else GitRepo(repo)
        self.base_branch = base_branch
        self.tracking_branch = tracking_branch
        self.docs_dir = docs_dir

    # ==================== 游标 ====================

    def read_cursor(self) -> Optional[ReplayCursor]:
        """从跟踪分支推导游标；跟踪分支不存在时返回 None（只读，不切换分支）"""
        if not self.git.branch_exists(self.tracking_branch):
            return None
        tip = self.git.rev_parse(f"refs/heads/{self.tracking_branch}")
        base = self.git.first_parent(tip)
        if base is None:
            raise GitError(
                ["rev-parse", f"{tip}^1"],
                f"tip of '{self.tracking_branch}' has no parent, it is not a generated commit",
            )
        return ReplayCursor(base_commit=base, generated_commit=tip)

    def next_commit(self, cursor: Optional[ReplayCursor]) -> Optional[str]:
        """下一个待处理的基础提交；已全部处理时返回 None"""
        if cursor is None:
            return self.git.first_commit(self.base_branch)
        pending = self.git.commits_after(cursor.base_commit, self.base_branch)
        return pending[0] if pending else None

    def pending_count(self, cursor: Optional[ReplayCursor] = None) -> int:
        if cursor is None:
            return len(self.git.rev_list(self.base_branch))
        return len(self.git.commits_after(cursor.base_commit, self.base_branch))

    # ==================== 状态迁移 ====================

    def _check_clean(self):
        if not self.git.is_clean():
            raise DirtyWorkingTreeError(
                "Working directory is not clean. Please commit or stash your changes before running."
            )

    def _prepare(self) -> Optional[ReplayCursor]:
        """Initialize 或 Resume：切换到正确的起点并返回游标"""
        if not self.git.branch_exists(self.tracking_branch):
            info(f"Tracking branch {self.tracking_branch} does not exist, starting from the first commit of {self.base_branch}...")
            first = self.git.first_commit(self.base_branch)
            if first is not None:
                # 跟踪分支在第一个生成提交写入时才创建
                self.git.checkout_detached(first)
            return None

        info(f"Tracking branch {self.tracking_branch} found, checking out...")
        self.git.checkout(self.tracking_branch)
        return self.read_cursor()

    def _generate(self, commit: str):
        patch = self.git.show_patch(commit)
        try:
            self.updater.run(patch, self.git.root)
        except ChatDocsError as e:
            raise GenerationError(f"Generation failed for commit {commit}: {e}") from e

    def _commit(self, commit: str, cursor: Optional[ReplayCursor]) -> str:
        docs_path = self.git.root / self.docs_dir
        if docs_path.exists() or self.git.is_tracked(self.docs_dir):
            self.git.add(self.docs_dir)
        tree = self.git.write_tree()

        parents = [commit]
        if cursor is not None:
            parents.append(cursor.generated_commit)
        generated = self.git.commit_tree(tree, f"Generated files for {commit}", parents)

        self.git.update_ref(self.tracking_branch, generated)
        self.git.attach_head(self.tracking_branch)
        self.git.reset_hard(generated)
        return generated

    def run(self) -> ReplayResult:
        """
        处理下一个基础提交。

        Returns:
            ReplayResult: CAUGHT_UP（没有新提交）或 PROCESSED（跟踪分支前进了一个提交）。

        Raises:
            DirtyWorkingTreeError: 工作区有未提交的修改（不做任何修改）。
            GenerationError: 文档生成失败（跟踪分支保持不变）。
            GitError: git 命令失败。
        """
        self._check_clean()
        cursor = self._prepare()

        commit = self.next_commit(cursor)
        if commit is None:
            success("No new commits to process. All caught up.")
            return ReplayResult(status=ReplayStatus.CAUGHT_UP)

        plain(self.git.log_oneline(commit))
        self._generate(commit)
        generated = self._commit(commit, cursor)

        success(f"Processed and committed {commit}. Tracking branch updated.")
        return ReplayResult(
            status=ReplayStatus.PROCESSED,
            base_commit=commit,
            generated_commit=generated,
        )
