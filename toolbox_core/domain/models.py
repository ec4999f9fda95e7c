"""统一的对话与结果数据模型。

本模块定义了在不同 Provider 之间共享的标准数据结构：

- Attachment: 用户随消息上传的文件（文本或 base64）。
- Message: 一条对话消息（system/user/assistant），追加到历史后不可变。
- ProviderConfig: 启动时选定的 Provider 与生成参数，整个进程只读共享。
- ChatResult: 一次对话调用的统一结果，成功为文本，失败携带 BusinessError。

Provider 适配器只依赖这些模型，并负责在各自的 API JSON 和它们之间做转换。
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal, Optional, Tuple
from uuid import uuid4

from toolbox_core.domain.exceptions import BusinessError, ValidationError


Role = Literal["user", "assistant", "system"]
ProviderName = Literal["gemini", "openai", "anthropic"]
PayloadEncoding = Literal["text", "base64"]

MAX_ATTACHMENT_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class Attachment:
    """用户上传的单个文件。

    - payload: 文本类 MIME 为 UTF-8 文本，其余为 base64 文本；缺失时为 None。
    - encoding: 标记 payload 的编码方式。
    """

    name: str
    size_bytes: int
    mime_type: str
    payload: Optional[str]
    encoding: PayloadEncoding = "text"

    @property
    def is_text(self) -> bool:
        return self.mime_type.startswith("text/")

    @property
    def is_usable(self) -> bool:
        """payload 缺失或超限的附件在拼接 prompt 时视为不存在。"""

        return self.payload is not None and self.size_bytes <= MAX_ATTACHMENT_BYTES


@dataclass(frozen=True)
class Message:
    """一条对话消息。

    content 是最终发给 Provider 的文本；附件信息已由调用方展开到 content 中，
    attachments 只保留给 UI 展示与日志使用。
    """

    id: str
    role: Role
    content: str
    timestamp: datetime
    attachments: Tuple[Attachment, ...] = ()

    @classmethod
    def create(cls, role: Role, content: str, attachments: Tuple[Attachment, ...] = ()) -> "Message":
        return cls(
            id=f"m-{uuid4().hex}",
            role=role,
            content=content,
            timestamp=datetime.now(timezone.utc),
            attachments=tuple(attachments),
        )


@dataclass(frozen=True)
class ProviderConfig:
    """选定的 Provider 与固定生成参数。"""

    provider: ProviderName
    model: str
    temperature: float = 0.7
    max_output_tokens: int = 2048

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 1.0:
            raise ValidationError(
                code="INVALID_TEMPERATURE",
                message=f"temperature must be within [0, 1], got {self.temperature}",
            )
        if self.max_output_tokens < 1:
            raise ValidationError(
                code="INVALID_MAX_TOKENS",
                message=f"max_output_tokens must be positive, got {self.max_output_tokens}",
            )


@dataclass
class ChatResult:
    """一次 ChatClient.send 的结果。

    - text: 成功时的回答文本（无内容时为占位文本）。
    - error: 失败时的业务异常，成功时为 None。
    """

    text: str = ""
    error: Optional[BusinessError] = field(default=None)

    @classmethod
    def failure(cls, error: BusinessError) -> "ChatResult":
        return cls(text="", error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def display_text(self) -> str:
        """失败时渲染为一条普通的助手消息。"""

        if self.error is None:
            return self.text
        return f"Error: {self.error.message}"
