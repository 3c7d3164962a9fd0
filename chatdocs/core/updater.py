# chatdocs/core/updater.py
"""
Doc Update Orchestrator：根据一个补丁更新文档目录。

两个阶段依次执行，后者依赖前者的结果：
  1. suggest: 补丁 + 现有文档 -> 修改建议（文本）
  2. apply:   现有文档 + 修改建议 -> FileChangeSet，交给 FileWriter 写入
任何一步失败都直接抛出异常，已写入的文件不会回滚。
"""

import os
import tempfile
from pathlib import Path
from typing import Callable, List, Optional

from .config import load_prompt_config
from .models import FileAction, PromptConfig
from .prompts import PromptBuilder
from .snapshot import render_docs
from .writer import FileWriter
from ..utils.console import info

# (config, prompt) -> 响应文本；GeminiInvoker 的实例满足这个签名
Invoke = Callable[[PromptConfig, str], str]


class DocUpdater:
    def __init__(
        self,
        invoke: Invoke,
        suggest_config: PromptConfig,
        update_config: PromptConfig,
        docs_dir: str = "docs",
        log_file: Optional[Path] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        self.invoke = invoke
        self.suggest_config = suggest_config
        self.update_config = update_config
        self.docs_dir = docs_dir
        self.log_file = Path(log_file) if log_file else None
        self.prompt_builder = prompt_builder or PromptBuilder()

    @classmethod
    def from_paths(cls, invoke: Invoke, suggest_config_path, update_config_path, **kwargs) -> "DocUpdater":
        """从两个 YAML 配置文件构造"""
        return cls(
            invoke,
            load_prompt_config(suggest_config_path),
            load_prompt_config(update_config_path),
            **kwargs,
        )

    def _open_log(self) -> Path:
        if self.log_file is None:
            fd, name = tempfile.mkstemp(prefix="docs_update.", suffix=".log")
            os.close(fd)
            self.log_file = Path(name)
        info(f"Logging to {self.log_file}")
        return self.log_file

    def _log(self, title: str, text: str):
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(f"{title}:\n{text}\n")

    def suggest(self, patch: str, target_dir: Path) -> str:
        """阶段 1：生成修改建议"""
        documentation = render_docs(target_dir, self.docs_dir)
        prompt = self.prompt_builder.suggest_prompt(patch, documentation)
        info("Generating Docs")
        return self.invoke(self.suggest_config, prompt)

    def apply(self, suggestion: str, target_dir: Path) -> str:
        """阶段 2：把建议合并进文档，返回模型输出的 FileChangeSet 文本"""
        documentation = render_docs(target_dir, self.docs_dir)
        prompt = self.prompt_builder.update_prompt(documentation, suggestion)
        info("Generating Update")
        return self.invoke(self.update_config, prompt)

    def run(self, patch: str, target_dir: Optional[Path] = None) -> List[FileAction]:
        """执行完整的 suggest -> apply -> write 流程，返回实际执行的文件操作"""
        target_dir = Path(target_dir) if target_dir else Path.cwd()
        self._open_log()

        suggestion = self.suggest(patch, target_dir)
        self._log("Suggestion", suggestion)

        new_docs = self.apply(suggestion, target_dir)
        self._log("Update", new_docs)

        info("Writing Update")
        return FileWriter(target_dir).apply_text(new_docs)
