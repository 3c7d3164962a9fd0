# chatdocs/core/__init__.py
from .exceptions import (
    ChatDocsError, ConfigError, DirtyWorkingTreeError, GenerationError,
    GitError, InputError, PathEscapeError,
)
from .models import FileChange, FileChangeSet, PromptConfig, ReplayCursor, ReplayResult, ReplayStatus

__all__ = [
    'ChatDocsError', 'ConfigError', 'DirtyWorkingTreeError', 'GenerationError',
    'GitError', 'InputError', 'PathEscapeError',
    'FileChange', 'FileChangeSet', 'PromptConfig', 'ReplayCursor', 'ReplayResult', 'ReplayStatus',
]
