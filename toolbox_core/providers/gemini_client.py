"""Gemini Provider 适配器。

Gemini 的 generateContent 接口与 OpenAI 风格差异较大：
- URL: {base_url}/models/{model}:generateContent?key=<api_key>
- 角色只有 user / model，没有 system 角色，system prompt 作为首条 user 消息。
- 生成参数放在 generationConfig 对象里。
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import Field

from toolbox_core.domain.models import Message, Role
from toolbox_core.providers.base import NO_RESPONSE_TEXT, Envelope, HttpProviderClient
from toolbox_core.providers.registry import GEMINI_DEFAULTS


ROLE_MAP: Dict[Role, str] = {
    "user": "user",
    "assistant": "model",
    "system": "user",
}


class GeminiPart(Envelope):
    text: Optional[str] = None


class GeminiContent(Envelope):
    parts: List[GeminiPart] = Field(default_factory=list)


class GeminiCandidate(Envelope):
    content: Optional[GeminiContent] = None


class GeminiResponse(Envelope):
    candidates: List[GeminiCandidate] = Field(default_factory=list)


class GeminiClient(HttpProviderClient):
    """Gemini 提供方客户端实现。"""

    defaults = GEMINI_DEFAULTS

    def build_payload(self, history: Sequence[Message], system_prompt: Optional[str] = None) -> Dict[str, Any]:
        contents = [self._message_to_payload(m) for m in history]
        if system_prompt:
            contents.insert(0, {"role": "user", "parts": [{"text": system_prompt}]})
        return {
            "contents": contents,
            "generationConfig": {
                "temperature": self._config.temperature,
                "maxOutputTokens": self._config.max_output_tokens,
            },
        }

    def extract_text(self, data: Any) -> str:
        """取第一个候选的第一段文本。"""

        resp = self._validate(GeminiResponse, data)
        if resp is None or not resp.candidates:
            return NO_RESPONSE_TEXT
        content = resp.candidates[0].content
        if content is None or not content.parts:
            return NO_RESPONSE_TEXT
        return content.parts[0].text or NO_RESPONSE_TEXT

    def _endpoint(self) -> str:
        return f"{self._base_url()}/models/{self._config.model}:generateContent"

    def _params(self, api_key: str) -> Dict[str, str]:
        return {"key": api_key}

    @staticmethod
    def _message_to_payload(message: Message) -> Dict[str, Any]:
        return {"role": ROLE_MAP[message.role], "parts": [{"text": message.content}]}
