# chatdocs/__init__.py
"""
ChatDocs - 根据 git 提交历史，借助生成式 AI 维护项目文档。
"""

__version__ = "0.1.0"
