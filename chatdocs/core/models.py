# chatdocs/core/models.py
"""
定义 ChatDocs 核心数据结构。
这些模型用于在 AI 响应解析、文件写入和提交回放之间传递数据。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, TypedDict


class FileChange(TypedDict):
    """ 描述对单个文件的一次变更：new_content 为空字符串表示删除该文件。 """
    filename: str
    new_content: str


class FileChangeSet(TypedDict):
    """ 描述一次 AI 响应中包含的所有文件变更。 """
    files: List[FileChange]


@dataclass(frozen=True)
class FileAction:
    """ FileWriter 实际执行的一次操作 """
    filename: str
    action: str  # "wrote" or "deleted"


@dataclass(frozen=True)
class PromptConfig:
    """ 一次模型调用的配置，对应一个 YAML 配置文件 """
    model: str
    generation_config: Dict[str, Any] = field(default_factory=dict)
    system_instruction: Optional[str] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class ReplayCursor:
    """
    回放游标：最近一次生成提交及其对应的基础提交。
    从不单独持久化，每次运行都从跟踪分支的引用重新推导。
    """
    base_commit: str
    generated_commit: str


class ReplayStatus(Enum):
    CAUGHT_UP = "caught_up"
    PROCESSED = "processed"


@dataclass(frozen=True)
class ReplayResult:
    status: ReplayStatus
    base_commit: Optional[str] = None
    generated_commit: Optional[str] = None
