"""OpenAI Provider 适配器。

使用 chat/completions 端点：
- URL: {base_url}/chat/completions
- 认证: Authorization: Bearer <api_key>
- 角色原样透传，system prompt 作为首条 system 消息。
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import Field

from toolbox_core.domain.models import Message
from toolbox_core.providers.base import NO_RESPONSE_TEXT, Envelope, HttpProviderClient
from toolbox_core.providers.registry import OPENAI_DEFAULTS


class OpenAIMessage(Envelope):
    content: Optional[str] = None


class OpenAIChoice(Envelope):
    message: Optional[OpenAIMessage] = None


class OpenAIResponse(Envelope):
    choices: List[OpenAIChoice] = Field(default_factory=list)


class OpenAIClient(HttpProviderClient):
    """OpenAI 提供方客户端实现。"""

    defaults = OPENAI_DEFAULTS

    def build_payload(self, history: Sequence[Message], system_prompt: Optional[str] = None) -> Dict[str, Any]:
        msgs = [{"role": m.role, "content": m.content} for m in history]
        if system_prompt:
            msgs.insert(0, {"role": "system", "content": system_prompt})
        return {
            "model": self._config.model,
            "messages": msgs,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_output_tokens,
        }

    def extract_text(self, data: Any) -> str:
        resp = self._validate(OpenAIResponse, data)
        if resp is None or not resp.choices:
            return NO_RESPONSE_TEXT
        message = resp.choices[0].message
        if message is None:
            return NO_RESPONSE_TEXT
        return message.content or NO_RESPONSE_TEXT

    def _endpoint(self) -> str:
        return f"{self._base_url()}/chat/completions"

    def _headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
