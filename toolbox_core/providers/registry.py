"""Provider 默认配置与选择顺序。

每个 Provider 的基础 URL、默认模型和 .env 模板里的占位密钥集中在这里，
选择器与各 Client 都只从本模块读取，避免常量散落在多个文件。"""

from dataclasses import dataclass
from typing import Mapping, Tuple

from toolbox_core.domain.models import ProviderName


DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_OUTPUT_TOKENS = 2048


@dataclass(frozen=True)
class ProviderDefaults:
    """单个 Provider 的静态配置。"""

    name: ProviderName
    display_name: str
    base_url: str
    default_model: str
    placeholder_key: str


GEMINI_DEFAULTS = ProviderDefaults(
    name="gemini",
    display_name="Gemini",
    base_url="https://generativelanguage.googleapis.com/v1beta",
    default_model="gemini-1.5-flash",
    placeholder_key="your_gemini_api_key_here",
)

OPENAI_DEFAULTS = ProviderDefaults(
    name="openai",
    display_name="OpenAI",
    base_url="https://api.openai.com/v1",
    default_model="gpt-3.5-turbo",
    placeholder_key="your_openai_api_key_here",
)

ANTHROPIC_DEFAULTS = ProviderDefaults(
    name="anthropic",
    display_name="Anthropic",
    base_url="https://api.anthropic.com/v1",
    default_model="claude-3-haiku-20240307",
    placeholder_key="your_anthropic_api_key_here",
)


PROVIDER_REGISTRY: Mapping[str, ProviderDefaults] = {
    "gemini": GEMINI_DEFAULTS,
    "openai": OPENAI_DEFAULTS,
    "anthropic": ANTHROPIC_DEFAULTS,
}

# 选择顺序：第一个配置了有效密钥的 Provider 胜出
PROVIDER_PRIORITY: Tuple[ProviderName, ...] = ("gemini", "openai", "anthropic")


def get_provider_defaults(name: str) -> ProviderDefaults:
    """根据名称获取 ProviderDefaults，名称不区分大小写。"""

    key = name.lower()
    for k, cfg in PROVIDER_REGISTRY.items():
        if k.lower() == key:
            return cfg
    raise KeyError(f"Unknown provider: {name!r}")
