"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口与公共 HTTP 流程 (base)。
- 维护 Provider 默认配置与选择顺序 (registry)。
- 启动时选择 Provider (selector)。
- 提供各厂商的具体实现 (gemini_client、openai_client、anthropic_client)。
"""

from typing import Dict, Type

from toolbox_core.config.settings import settings
from toolbox_core.domain.models import ProviderConfig
from toolbox_core.providers.anthropic_client import AnthropicClient
from toolbox_core.providers.base import HttpProviderClient, ProviderClient
from toolbox_core.providers.gemini_client import GeminiClient
from toolbox_core.providers.openai_client import OpenAIClient


PROVIDER_CLIENTS: Dict[str, Type[HttpProviderClient]] = {
    "gemini": GeminiClient,
    "openai": OpenAIClient,
    "anthropic": AnthropicClient,
}


def create_provider(config: ProviderConfig, cfg=None) -> ProviderClient:
    """根据选定的 ProviderConfig 创建对应的 Client 实例。"""

    client_cls = PROVIDER_CLIENTS[config.provider]
    return client_cls(config, cfg if cfg is not None else settings)
