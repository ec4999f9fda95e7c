"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError，
ChatClient 在边界处统一捕获并转换为失败的 ChatResult，
上层只需要渲染 message，不需要区分具体类型。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "API_ERROR"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NoProviderConfigured(BusinessError):
    """没有任何可用的 Provider 凭证，会话无法开始。"""


class TransportFailure(BusinessError):
    """网络层错误，例如 DNS 失败、连接被拒绝、超时等。"""


class ProviderError(BusinessError):
    """Provider 返回非 2xx 状态码时抛出。"""


class ValidationError(BusinessError):
    """参数或配置校验失败。"""


class AttachmentTooLarge(ValidationError):
    """附件超过大小上限。"""
