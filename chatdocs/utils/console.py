"""
统一的控制台输出工具，基于 rich 实现。

进度信息输出到 stdout，诊断信息（错误、完整响应回显）输出到 stderr，
保证 `chatdocs prompt` 的 stdout 只包含模型返回的文本。
"""
from rich.console import Console as RichConsole
from rich.markup import escape
from rich.theme import Theme
from typing import Any, Optional

# 自定义主题
CUSTOM_THEME = Theme({
    "info": "cyan bold",
    "success": "green bold",
    "warning": "yellow bold",
    "error": "red bold",
    "heading": "bold underline",
})

# 全局控制台实例（单例）
console = RichConsole(theme=CUSTOM_THEME, soft_wrap=True)
err_console = RichConsole(theme=CUSTOM_THEME, soft_wrap=True, stderr=True)


# --- 便捷输出函数 ---

def info(message: str):
    """蓝色信息提示"""
    console.print(f"[info]INFO[/info]: {escape(message)}")


def success(message: str):
    """绿色成功提示"""
    console.print(f"[success]SUCCESS[/success]: {escape(message)}")


def warning(message: str):
    """黄色警告提示（stderr）"""
    err_console.print(f"[warning]WARNING[/warning]: {escape(message)}")


def error(message: str, stage: Optional[str] = None):
    """红色错误提示（stderr），stage 用于标识失败的阶段"""
    prefix = f"{stage}: " if stage else ""
    err_console.print(f"[error]ERROR[/error]: {escape(prefix + message)}")


def heading(title: str):
    """标题输出"""
    console.print(f"\n[heading]{escape(title)}[/heading]\n")


def plain(message: str):
    """原样输出一行，不做 markup 解析"""
    console.print(message, markup=False, highlight=False)


def echo_response(obj: Any):
    """将完整的 API 响应对象回显到 stderr"""
    err_console.print(str(obj), markup=False)

