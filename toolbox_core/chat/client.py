"""统一的对话客户端。

ChatClient 持有启动时选定的 ProviderConfig 与对应的 ProviderClient，
两者在构造后只读，因此同一个实例可以被整个进程复用。
"""

from typing import Optional, Sequence

from toolbox_core.config.settings import settings
from toolbox_core.domain.exceptions import BusinessError
from toolbox_core.domain.models import ChatResult, Message, ProviderConfig
from toolbox_core.infrastructure.logging.logger import logger
from toolbox_core.providers import create_provider
from toolbox_core.providers.base import ProviderClient
from toolbox_core.providers.selector import ProviderSelector


class ChatClient:
    def __init__(self, provider_client: ProviderClient, config: ProviderConfig):
        self._provider = provider_client
        self._config = config

    @classmethod
    def from_settings(cls, cfg=settings) -> "ChatClient":
        """选择 Provider 并构造客户端；未配置任何密钥时抛出 NoProviderConfigured。"""

        config = ProviderSelector(cfg).select()
        return cls(create_provider(config, cfg), config)

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def provider_name(self) -> str:
        return self._provider.display_name

    @property
    def model_name(self) -> str:
        return self._config.model

    def send(self, history: Sequence[Message], system_prompt: Optional[str] = None) -> ChatResult:
        """发送对话历史，返回统一的 ChatResult，不向调用方抛出 Provider 异常。"""

        try:
            text = self._provider.complete(history, system_prompt)
        except BusinessError as e:
            logger.warning(
                f"Chat request failed: {e.message}",
                extra={"extra": {
                    "provider": self._config.provider,
                    "model": self._config.model,
                    "code": e.code,
                    "http_status": e.http_status,
                }},
            )
            return ChatResult.failure(e)
        return ChatResult(text=text)
