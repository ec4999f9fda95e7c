"""Provider 抽象接口。

上层 ChatClient 不直接依赖具体厂商的 HTTP 细节，而是依赖此协议：

- 每个厂商实现一个 ProviderClient（如 GeminiClient）。
- 负责：将对话历史转成具体 API 请求，并把响应 JSON 解析为一段文本。

三家的请求流程相同，只有 URL、请求头、请求体和响应结构不同，
公共流程放在 HttpProviderClient，子类只实现差异部分。
"""

from typing import Any, Dict, Optional, Protocol, Sequence

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as SchemaError

from toolbox_core.config.settings import settings
from toolbox_core.domain.exceptions import ProviderError, TransportFailure, ValidationError
from toolbox_core.domain.models import Message, ProviderConfig
from toolbox_core.infrastructure.logging.logger import logger
from toolbox_core.providers.registry import ProviderDefaults


NO_RESPONSE_TEXT = "No response generated"


class ProviderClient(Protocol):
    """LLM Provider 客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志/统计。
    - display_name: 展示给用户的名称。
    - complete(history, system_prompt): 执行一次非流式对话调用，返回回答文本。
    """

    name: str
    display_name: str

    def complete(self, history: Sequence[Message], system_prompt: Optional[str] = None) -> str:
        ...


class Envelope(BaseModel):
    """厂商响应结构的基类，忽略未建模的字段。"""

    model_config = ConfigDict(extra="ignore")


class ErrorDetail(Envelope):
    message: Optional[str] = None


class ErrorEnvelope(Envelope):
    """三家通用的错误结构：{"error": {"message": ...}}。"""

    error: Optional[ErrorDetail] = None


class HttpProviderClient:
    """基于 httpx 的 Provider 客户端公共实现。

    子类需要定义 defaults，并实现：
    - build_payload: 对话历史 -> 请求 JSON。
    - extract_text: 响应 JSON -> 文本（纯函数，缺失路径返回占位文本）。
    - _endpoint / _headers / _params: 请求地址与认证方式。
    """

    defaults: ProviderDefaults

    def __init__(self, config: ProviderConfig, cfg=settings):
        if config.provider != self.defaults.name:
            raise ValidationError(
                code="PROVIDER_MISMATCH",
                message=f"{type(self).__name__} cannot serve provider {config.provider!r}",
            )
        self._config = config
        self._settings = cfg

    @property
    def name(self) -> str:
        return self.defaults.name

    @property
    def display_name(self) -> str:
        return self.defaults.display_name

    @property
    def config(self) -> ProviderConfig:
        return self._config

    def complete(self, history: Sequence[Message], system_prompt: Optional[str] = None) -> str:
        """执行一次对话调用。

        步骤：
        1. 构造请求体。
        2. 发送一次 POST，网络错误包装为 TransportFailure。
        3. 非 2xx 状态码解析错误结构，包装为 ProviderError。
        4. 从响应 JSON 中提取文本。
        """

        api_key = self._api_key()
        payload = self.build_payload(history, system_prompt)
        logger.info(
            "Dispatching chat request",
            extra={"extra": {
                "provider": self.name,
                "model": self._config.model,
                "messages": len(history),
                "has_system_prompt": bool(system_prompt),
            }},
        )
        try:
            with httpx.Client(timeout=getattr(self._settings, "http_timeout", None), trust_env=False) as client:
                resp = client.post(
                    self._endpoint(),
                    json=payload,
                    headers=self._headers(api_key),
                    params=self._params(api_key),
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接被拒绝、超时等
            raise TransportFailure(code="NETWORK_ERROR", message=str(e), provider=self.name)
        if not 200 <= resp.status_code < 300:
            raise ProviderError(
                code="API_ERROR",
                message=self.parse_error(resp),
                http_status=resp.status_code,
                provider=self.name,
            )
        try:
            data = resp.json()
        except ValueError:
            raise ProviderError(
                code="INVALID_RESPONSE",
                message=self.fallback_error_message,
                http_status=resp.status_code,
                provider=self.name,
            )
        return self.extract_text(data)

    @property
    def fallback_error_message(self) -> str:
        return f"{self.display_name} API request failed"

    def parse_error(self, resp: Any) -> str:
        """从错误响应中提取可读信息，解析失败时返回通用提示。"""

        try:
            envelope = ErrorEnvelope.model_validate(resp.json())
        except (ValueError, SchemaError):
            return self.fallback_error_message
        if envelope.error and envelope.error.message:
            return envelope.error.message
        return self.fallback_error_message

    # ---- 子类实现 ----

    def build_payload(self, history: Sequence[Message], system_prompt: Optional[str] = None) -> Dict[str, Any]:
        raise NotImplementedError

    def extract_text(self, data: Any) -> str:
        raise NotImplementedError

    def _endpoint(self) -> str:
        raise NotImplementedError

    def _headers(self, api_key: str) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def _params(self, api_key: str) -> Dict[str, str]:
        return {}

    # ---- 辅助方法 ----

    def _api_key(self) -> str:
        key = getattr(self._settings, f"{self.name}_api_key", None)
        if not key:
            # 配置缺失走 ValidationError，方便上层统一处理
            raise ValidationError(code="MISSING_API_KEY", message=f"{self.name.upper()}_API_KEY not set")
        return key

    def _base_url(self) -> str:
        base = getattr(self._settings, f"{self.name}_base_url", None) or self.defaults.base_url
        return base.rstrip("/")

    @staticmethod
    def _validate(schema: type, data: Any) -> Optional[Envelope]:
        """按响应结构校验，不符合时返回 None，由调用方回退到占位文本。"""

        try:
            return schema.model_validate(data if data is not None else {})
        except SchemaError:
            return None
