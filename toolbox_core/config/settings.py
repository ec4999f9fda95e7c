"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置，优先级依次降低。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("TOOLBOX_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


def _env_alias(name: str) -> AliasChoices:
    """同时接受 NAME 与前端遗留的 VITE_NAME 两种环境变量。"""

    return AliasChoices(name.lower(), name, f"VITE_{name}")


class Settings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- Gemini ----
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=_env_alias("GEMINI_API_KEY"),
        description="Gemini API 密钥",
    )
    gemini_model: Optional[str] = Field(
        default=None,
        validation_alias=_env_alias("GEMINI_MODEL"),
        description="覆盖 Gemini 默认模型",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini API 基础URL",
    )

    # ---- OpenAI ----
    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=_env_alias("OPENAI_API_KEY"),
        description="OpenAI API 密钥",
    )
    openai_model: Optional[str] = Field(
        default=None,
        validation_alias=_env_alias("OPENAI_MODEL"),
        description="覆盖 OpenAI 默认模型",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI API 基础URL",
    )

    # ---- Anthropic ----
    anthropic_api_key: Optional[str] = Field(
        default=None,
        validation_alias=_env_alias("ANTHROPIC_API_KEY"),
        description="Anthropic API 密钥",
    )
    anthropic_model: Optional[str] = Field(
        default=None,
        validation_alias=_env_alias("ANTHROPIC_MODEL"),
        description="覆盖 Anthropic 默认模型",
    )
    anthropic_base_url: str = Field(
        default="https://api.anthropic.com/v1",
        description="Anthropic API 基础URL",
    )

    http_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="HTTP 超时时间（秒），为空表示不设超时",
    )
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator(
        "gemini_api_key",
        "gemini_model",
        "openai_api_key",
        "openai_model",
        "anthropic_api_key",
        "anthropic_model",
        "http_timeout",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = Settings()
