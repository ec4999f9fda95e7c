"""对外 API 服务模块。

提供简化的函数接口供上层展示层调用。Provider 选择只在第一次
获取客户端时执行一次，之后整个进程复用同一个 ChatClient。
"""

from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from toolbox_core.chat.attachments import load_attachments
from toolbox_core.chat.client import ChatClient
from toolbox_core.chat.session import ChatSession
from toolbox_core.config.settings import settings
from toolbox_core.infrastructure.logging.logger import logger
from toolbox_core.prompts import DEFAULT_TOOL_ID, get_system_prompt


_client: Optional[ChatClient] = None


def get_default_client() -> ChatClient:
    """获取默认的 ChatClient 实例（单例）。

    Raises:
        NoProviderConfigured: 没有任何可用的 API 密钥。
    """
    global _client
    if _client is None:
        _client = ChatClient.from_settings(settings)
    return _client


def reset_default_client() -> None:
    global _client
    _client = None


def describe_backend() -> Dict[str, str]:
    """返回当前 Provider 与模型，用于 "Powered by X (model)" 展示。"""
    client = get_default_client()
    return {
        "provider": client.provider_name,
        "model": client.model_name,
        "label": f"Powered by {client.provider_name} ({client.model_name})",
    }


def open_session(tool_id: str = DEFAULT_TOOL_ID) -> ChatSession:
    """为指定工具打开一个新会话。"""
    return ChatSession(
        client=get_default_client(),
        system_prompt=get_system_prompt(tool_id),
        tool_id=tool_id,
    )


def send_message(
    session: ChatSession,
    text: str,
    paths: Iterable[str | Path] = (),
) -> Dict[str, Any]:
    """读取附件并发送一条消息。

    Args:
        session: open_session 返回的会话
        text: 用户输入内容
        paths: 待上传的文件路径，超限文件不会中断发送

    Returns:
        包含助手回复、附件警告与当前历史长度的字典

    Raises:
        ValidationError: 消息为空或会话仍有请求在途
    """
    attachments, warnings = load_attachments(paths)
    try:
        reply = session.send_message(text, attachments)
    except Exception as e:
        logger.error(f"Send message failed: {e}", extra={"extra": {
            "tool_id": session.tool_id,
            "error": str(e),
        }})
        raise
    return {
        "reply": {
            "id": reply.id,
            "content": reply.content,
            "created_at": reply.timestamp.isoformat(),
        },
        "attachments": [a.name for a in attachments],
        "warnings": warnings,
        "history_length": len(session.history),
    }
