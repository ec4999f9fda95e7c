"""单个工具的一次对话会话。

会话只在内存中维护只追加的消息历史，不做跨会话持久化。
同一会话同一时间只允许一个请求在途。
"""

import threading
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from toolbox_core.chat.attachments import flatten_attachments
from toolbox_core.chat.client import ChatClient
from toolbox_core.domain.exceptions import ValidationError
from toolbox_core.domain.models import Attachment, Message
from toolbox_core.infrastructure.logging.logger import logger


DEFAULT_ATTACHMENT_PROMPT = "Please analyze the uploaded files."


class ChatSession:
    def __init__(self, client: ChatClient, system_prompt: Optional[str] = None, tool_id: Optional[str] = None):
        self._client = client
        self._system_prompt = system_prompt
        self._tool_id = tool_id
        self._history: List[Message] = []
        self._busy = threading.Lock()

    @property
    def history(self) -> Tuple[Message, ...]:
        return tuple(self._history)

    @property
    def system_prompt(self) -> Optional[str]:
        return self._system_prompt

    @property
    def tool_id(self) -> Optional[str]:
        return self._tool_id

    @property
    def is_busy(self) -> bool:
        return self._busy.locked()

    def clear(self) -> None:
        self._history = []

    def send_message(self, text: str, attachments: Sequence[Attachment] = ()) -> Message:
        """追加一条用户消息并请求回答，返回追加到历史中的助手消息。

        历史中保存用户的原始输入；发给 Provider 的副本带有展开后的附件文本。
        请求失败时，错误信息同样作为一条助手消息追加。
        """

        content = (text or "").strip()
        if not content and not attachments:
            raise ValidationError(code="EMPTY_MESSAGE", message="Message is empty")
        if not self._busy.acquire(blocking=False):
            raise ValidationError(code="SESSION_BUSY", message="A previous message is still being answered")
        try:
            user_msg = Message.create("user", content or DEFAULT_ATTACHMENT_PROMPT, tuple(attachments))
            prompt_msg = replace(user_msg, content=flatten_attachments(user_msg.content, user_msg.attachments))
            outgoing = [*self._history, prompt_msg]
            self._history.append(user_msg)

            result = self._client.send(outgoing, self._system_prompt)
            if not result.ok:
                logger.info(
                    "Rendering failed reply as assistant message",
                    extra={"extra": {"tool_id": self._tool_id, "code": result.error.code}},
                )
            assistant_msg = Message.create("assistant", result.display_text)
            self._history.append(assistant_msg)
            return assistant_msg
        finally:
            self._busy.release()
