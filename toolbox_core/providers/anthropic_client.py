"""Anthropic Provider 适配器。

Messages API 的约定：
- URL: {base_url}/messages
- 认证: x-api-key 请求头，外加固定的 anthropic-version。
- messages 只接受 user / assistant，system prompt 放在顶层 system 字段。
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import Field

from toolbox_core.domain.models import Message, Role
from toolbox_core.providers.base import NO_RESPONSE_TEXT, Envelope, HttpProviderClient
from toolbox_core.providers.registry import ANTHROPIC_DEFAULTS


ANTHROPIC_VERSION = "2023-06-01"

# 历史中间出现的 system 消息折叠为 user
ROLE_MAP: Dict[Role, str] = {
    "user": "user",
    "assistant": "assistant",
    "system": "user",
}


class AnthropicContentBlock(Envelope):
    type: Optional[str] = None
    text: Optional[str] = None


class AnthropicResponse(Envelope):
    content: List[AnthropicContentBlock] = Field(default_factory=list)


class AnthropicClient(HttpProviderClient):
    """Anthropic 提供方客户端实现。"""

    defaults = ANTHROPIC_DEFAULTS

    def build_payload(self, history: Sequence[Message], system_prompt: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self._config.model,
            "messages": [{"role": ROLE_MAP[m.role], "content": m.content} for m in history],
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_output_tokens,
        }
        if system_prompt:
            payload["system"] = system_prompt
        return payload

    def extract_text(self, data: Any) -> str:
        resp = self._validate(AnthropicResponse, data)
        if resp is None or not resp.content:
            return NO_RESPONSE_TEXT
        return resp.content[0].text or NO_RESPONSE_TEXT

    def _endpoint(self) -> str:
        return f"{self._base_url()}/messages"

    def _headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }
