# chatdocs/core/config.py
"""
配置加载：模型调用配置（generate-docs.yaml / update-docs.yaml）与项目设置（.chatdocs/config.yaml）。
"""

import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigError
from .models import PromptConfig

# ------------------------------
# 常量定义
# ------------------------------

PACKAGE_CONFIG_DIR = Path(__file__).parent.parent / "configs"
SUGGEST_CONFIG = PACKAGE_CONFIG_DIR / "generate-docs.yaml"
UPDATE_CONFIG = PACKAGE_CONFIG_DIR / "update-docs.yaml"
SETTINGS_TEMPLATE = PACKAGE_CONFIG_DIR / "config.yaml"

STATE_DIR = Path(".chatdocs")
SETTINGS_FILE = STATE_DIR / "config.yaml"

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _read_yaml(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML configuration {path}: {e}") from e


def snake_case_keys(options: Dict[str, Any]) -> Dict[str, Any]:
    """generationConfig 使用 REST 风格的 camelCase 键名，客户端库需要 snake_case（只转换顶层）"""
    return {_CAMEL_RE.sub("_", key).lower(): value for key, value in options.items()}


def load_prompt_config(path) -> PromptConfig:
    """
    读取并校验一个模型调用配置。

    必须包含 `model` 和 `generationConfig`，`systemInstruction` 可选。
    """
    path = Path(path)
    data = _read_yaml(path)
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping.")

    if not data.get("model"):
        raise ConfigError("Configuration file must include a 'model' property.")
    if not data.get("generationConfig"):
        raise ConfigError("Configuration file must include a 'generationConfig' property.")

    generation_config = data["generationConfig"]
    if not isinstance(generation_config, dict):
        raise ConfigError("'generationConfig' must be a mapping.")

    system_instruction = data.get("systemInstruction")
    if system_instruction is not None and not isinstance(system_instruction, str):
        raise ConfigError("'systemInstruction' must be a string.")

    return PromptConfig(
        model=str(data["model"]),
        generation_config=snake_case_keys(generation_config),
        system_instruction=system_instruction,
        source=str(path),
    )


DEFAULT_BASE_BRANCH = "remotes/origin/main"
DEFAULT_TRACKING_BRANCH = "gen-commits"


@dataclass(frozen=True)
class Settings:
    """项目级设置，所有字段都有默认值"""
    base_branch: str = DEFAULT_BASE_BRANCH
    tracking_branch: str = DEFAULT_TRACKING_BRANCH
    docs_dir: str = "docs"
    suggest_config: str = str(SUGGEST_CONFIG)
    update_config: str = str(UPDATE_CONFIG)
    api_key_env: str = "GEMINI_API_KEY"

    def with_overrides(self, **overrides) -> "Settings":
        """返回应用了非 None 覆盖项的新设置（CLI 选项优先于配置文件）"""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def load_settings(path: Optional[Path] = None) -> Settings:
    """加载 .chatdocs/config.yaml；文件不存在时返回默认设置"""
    path = Path(path) if path else SETTINGS_FILE
    if not path.exists():
        return Settings()

    data = _read_yaml(path) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping.")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown keys in {path}: {', '.join(unknown)}")

    # 相对路径的配置文件以设置文件所在目录的上级（项目根）为基准
    project_root = path.resolve().parent.parent
    for key in ("suggest_config", "update_config"):
        if data.get(key):
            config_path = Path(data[key])
            if not config_path.is_absolute():
                config_path = project_root / config_path
            data[key] = str(config_path)

    return Settings(**{k: str(v) for k, v in data.items() if v is not None})
