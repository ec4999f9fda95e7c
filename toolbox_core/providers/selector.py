"""启动时的 Provider 选择。

按固定顺序（Gemini → OpenAI → Anthropic）检查凭证，第一个配置了有效密钥的
Provider 胜出。只读取配置，不发起任何网络请求。
"""

import re
from typing import Optional

from toolbox_core.config.settings import settings
from toolbox_core.domain.exceptions import NoProviderConfigured
from toolbox_core.domain.models import ProviderConfig
from toolbox_core.infrastructure.logging.logger import logger
from toolbox_core.providers.registry import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_TEMPERATURE,
    PROVIDER_PRIORITY,
    PROVIDER_REGISTRY,
)


# .env.example 里的模板值，例如 your_gemini_api_key_here
PLACEHOLDER_PATTERN = re.compile(r"^your_[a-z0-9_]*api_key_here$", re.IGNORECASE)


def is_configured(api_key: Optional[str], placeholder: str) -> bool:
    """密钥存在且不是模板占位值。"""

    if not api_key or not api_key.strip():
        return False
    key = api_key.strip()
    return key != placeholder and not PLACEHOLDER_PATTERN.match(key)


def select_provider(cfg=settings) -> ProviderConfig:
    """返回优先级最高的已配置 Provider，均未配置时抛出 NoProviderConfigured。"""

    for name in PROVIDER_PRIORITY:
        defaults = PROVIDER_REGISTRY[name]
        if not is_configured(getattr(cfg, f"{name}_api_key", None), defaults.placeholder_key):
            continue
        model = getattr(cfg, f"{name}_model", None) or defaults.default_model
        selected = ProviderConfig(
            provider=name,
            model=model,
            temperature=DEFAULT_TEMPERATURE,
            max_output_tokens=DEFAULT_MAX_OUTPUT_TOKENS,
        )
        logger.info(
            "Selected provider",
            extra={"extra": {"provider": name, "model": model}},
        )
        return selected
    logger.error("No provider configured")
    raise NoProviderConfigured(
        code="NO_PROVIDER_CONFIGURED",
        message="No AI API key configured. Please add at least one API key to your .env file.",
    )


class ProviderSelector:
    """缓存选择结果；失败不缓存，补齐配置后可再次尝试。"""

    def __init__(self, cfg=settings):
        self._settings = cfg
        self._selected: Optional[ProviderConfig] = None

    def select(self) -> ProviderConfig:
        if self._selected is None:
            self._selected = select_provider(self._settings)
        return self._selected
