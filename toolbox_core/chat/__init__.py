"""对话层。

- client: ChatClient，统一的 send 入口，把 Provider 异常转换为失败结果。
- attachments: 附件读取、大小限制与拼接到 prompt 的文本。
- session: 单个工具的一次会话，维护只追加的消息历史。
"""

from toolbox_core.chat.client import ChatClient
from toolbox_core.chat.session import ChatSession

__all__ = ["ChatClient", "ChatSession"]
