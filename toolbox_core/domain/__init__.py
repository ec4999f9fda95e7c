"""领域层模型与异常。

包含：
- models: Message / Attachment / ProviderConfig / ChatResult。
- exceptions: 业务异常类型定义。
"""
