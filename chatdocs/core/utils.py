# chatdocs/core/utils.py
"""通用工具函数，无外部依赖"""

import re
from pathlib import Path
from typing import Optional

_FENCE_RE = re.compile(r"^\s*```[\w-]*[ \t]*\n(?P<body>.*?)\n?```\s*$", re.DOTALL)


def read_text_file(path: Path, encoding: str = "utf-8") -> Optional[str]:
    """读取文本文件；二进制或非 UTF-8 文件返回 None"""
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError:
        return None


def strip_code_fence(text: str) -> str:
    """去掉包裹整段文本的 markdown 代码块（```json ... ```）"""
    match = _FENCE_RE.match(text)
    if match:
        return match.group("body")
    return text


def is_inside(path: Path, root: Path) -> bool:
    """path 是否严格位于 root 之内（两者都应是已解析的绝对路径）"""
    if path == root:
        return False
    try:
        path.relative_to(root)
    except ValueError:
        return False
    return True
