# chatdocs/core/snapshot.py
"""
把现有文档目录渲染成一个文本块，作为提示词的一部分。

格式与 files-to-prompt 一致：每个文件先输出相对路径，再输出 `---`，
然后是文件内容，最后以空行和 `---` 结束。
"""

from pathlib import Path
from typing import Iterator, List, Tuple

from .utils import read_text_file
from ..utils.console import warning


def iter_doc_files(target_dir: Path, docs_dir: str = "docs") -> Iterator[Path]:
    """按路径排序遍历文档文件，跳过隐藏文件和隐藏目录"""
    root = Path(target_dir) / docs_dir
    if not root.is_dir():
        return
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.is_file():
            yield path


def collect_docs(target_dir: Path, docs_dir: str = "docs") -> List[Tuple[str, str]]:
    """返回 (相对 target_dir 的 posix 路径, 内容) 列表；非文本文件会被跳过并给出警告"""
    target_dir = Path(target_dir)
    documents = []
    for path in iter_doc_files(target_dir, docs_dir):
        name = path.relative_to(target_dir).as_posix()
        content = read_text_file(path)
        if content is None:
            warning(f"Skipping binary or non UTF-8 file: {name}")
            continue
        documents.append((name, content))
    return documents


def render_docs(target_dir: Path, docs_dir: str = "docs") -> str:
    """渲染整个文档目录；目录不存在或为空时返回空字符串"""
    blocks = []
    for name, content in collect_docs(target_dir, docs_dir):
        blocks.append(f"{name}\n---\n{content}\n\n---")
    return "\n".join(blocks)
