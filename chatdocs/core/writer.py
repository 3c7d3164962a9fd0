# chatdocs/core/writer.py
import json
from pathlib import Path
from typing import Any, List, Optional

from .exceptions import InputError, PathEscapeError
from .models import FileAction, FileChange, FileChangeSet
from .utils import is_inside, strip_code_fence
from ..utils.console import plain


def parse_change_set(text: str) -> FileChangeSet:
    """
    把模型输出解析为 FileChangeSet。

    期望格式: {"files": [{"filename": "...", "new_content": "..."}, ...]}
    任何格式错误都会在写入任何文件之前抛出 InputError。
    """
    try:
        data: Any = json.loads(strip_code_fence(text or ""))
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid input: not a JSON document ({e})") from e

    if not isinstance(data, dict):
        raise InputError("Invalid input format: expected a JSON object.")
    files = data.get("files")
    if not isinstance(files, list):
        raise InputError("Invalid input format: 'files' should be an array.")

    changes: List[FileChange] = []
    for i, entry in enumerate(files):
        if not isinstance(entry, dict):
            raise InputError(f"Invalid input format: files[{i}] should be an object.")
        filename = entry.get("filename")
        new_content = entry.get("new_content")
        if not isinstance(filename, str) or not filename:
            raise InputError(f"Invalid input format: files[{i}].filename should be a non-empty string.")
        if not isinstance(new_content, str):
            raise InputError(f"Invalid input format: files[{i}].new_content should be a string.")
        changes.append({"filename": filename, "new_content": new_content})

    return {"files": changes}


class FileWriter:
    """
    File Writer，负责把 FileChangeSet 应用到 root 目录下。
    """
    def __init__(self, root: Optional[Path] = None):
        """
        Args:
            root (Path): 允许写入的根目录，默认为当前工作目录。
        """
        self.root = Path(root if root is not None else Path.cwd()).resolve()

    def resolve(self, filename: str) -> Path:
        """解析文件名；结果不在 root 之内时抛出 PathEscapeError"""
        path = (self.root / filename).resolve()
        if not is_inside(path, self.root):
            raise PathEscapeError(filename, str(self.root))
        return path

    def apply(self, change_set: FileChangeSet) -> List[FileAction]:
        """
        按顺序应用所有变更。

        所有路径先统一校验，任何一个越界都不会写入任何文件。
        new_content 为空字符串时删除文件（文件不存在则什么都不做）。
        文件系统错误（目标是目录、无权限等）转换为 InputError，之前的条目已经写入。
        """
        resolved = [(change, self.resolve(change["filename"])) for change in change_set["files"]]

        actions: List[FileAction] = []
        for change, path in resolved:
            filename = change["filename"]
            if change["new_content"] == "":
                if path.is_file():
                    try:
                        path.unlink()
                    except OSError as e:
                        raise InputError(f"Cannot delete {filename}: {e}") from e
                    plain(f"Deleted empty file: {filename}")
                    actions.append(FileAction(filename, "deleted"))
            else:
                # 确保父目录存在
                try:
                    path.parent.mkdir(parents=True, exist_ok=True)
                    path.write_text(change["new_content"], encoding="utf-8")
                except OSError as e:
                    raise InputError(f"Cannot write {filename}: {e}") from e
                plain(f"Wrote file: {filename}")
                actions.append(FileAction(filename, "wrote"))
        return actions

    def apply_text(self, text: str) -> List[FileAction]:
        return self.apply(parse_change_set(text))
