# chatdocs/core/exceptions.py
"""
ChatDocs 错误类型。

库代码只负责抛出，由 CLI 层统一捕获、输出到 stderr 并以退出码 1 结束。
"""


class ChatDocsError(Exception):
    """Base class for all chatdocs failures."""
    pass


class ConfigError(ChatDocsError):
    """Missing or invalid configuration (config file fields, credentials)."""
    pass


class InputError(ChatDocsError):
    """Empty prompt or malformed structured input."""
    pass


class PathEscapeError(InputError):
    """A file change targets a path outside the permitted root."""

    def __init__(self, filename: str, root: str):
        self.filename = filename
        self.root = root
        super().__init__(f'File path "{filename}" is outside the allowed directory {root}.')


class GenerationError(ChatDocsError):
    """The generative API call failed or returned nothing usable."""
    pass


class GitError(ChatDocsError):
    """A git command exited non-zero."""

    def __init__(self, args, message: str):
        self.args_list = list(args)
        super().__init__(f"git {' '.join(self.args_list)} failed: {message}")


class DirtyWorkingTreeError(ChatDocsError):
    """The working tree has uncommitted changes."""
    pass
