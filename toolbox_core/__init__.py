"""Toolbox Core 顶层包。

该包为工具目录中的 AI 工具提供统一的对话后端，
包括配置加载、Provider 选择、三家 LLM 的请求适配、
附件处理与会话管理。
"""

from toolbox_core.chat import ChatClient, ChatSession

__all__ = ["ChatClient", "ChatSession"]
