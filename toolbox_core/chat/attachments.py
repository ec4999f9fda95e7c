"""附件读取与展开。

文件读取按文件并发执行，每个成功读取的文件恰好产出一个 Attachment；
超过 10 MiB 的文件不会报错中断，而是作为提示返回给用户。
"""

from __future__ import annotations

import base64
import mimetypes
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from toolbox_core.domain.exceptions import AttachmentTooLarge
from toolbox_core.domain.models import MAX_ATTACHMENT_BYTES, Attachment
from toolbox_core.infrastructure.logging.logger import logger


PREVIEW_CHARS = 500
TEXT_LIKE_TYPES = {"application/json", "application/xml", "application/pdf"}
DEFAULT_MIME_TYPE = "application/octet-stream"


def is_text_like(mime_type: str) -> bool:
    return mime_type.startswith("text/") or mime_type in TEXT_LIKE_TYPES


def check_attachment_size(name: str, size_bytes: int) -> None:
    if size_bytes > MAX_ATTACHMENT_BYTES:
        raise AttachmentTooLarge(
            code="ATTACHMENT_TOO_LARGE",
            message=f"File {name} is too large. Maximum size is 10MB.",
            name=name,
            size_bytes=size_bytes,
        )


def build_attachment(name: str, data: bytes, mime_type: str | None = None) -> Attachment:
    """把原始字节转换为 Attachment，文本类按 UTF-8 解码，其余 base64。"""

    check_attachment_size(name, len(data))
    mime = mime_type or mimetypes.guess_type(name)[0] or DEFAULT_MIME_TYPE
    if is_text_like(mime):
        return Attachment(
            name=name,
            size_bytes=len(data),
            mime_type=mime,
            payload=data.decode("utf-8", errors="replace"),
            encoding="text",
        )
    return Attachment(
        name=name,
        size_bytes=len(data),
        mime_type=mime,
        payload=base64.b64encode(data).decode("ascii"),
        encoding="base64",
    )


def read_attachment(path: str | Path) -> Attachment:
    p = Path(path)
    # 先看文件大小，超限文件不读入内存
    check_attachment_size(p.name, p.stat().st_size)
    return build_attachment(p.name, p.read_bytes())


def load_attachments(paths: Iterable[str | Path], max_workers: int = 4) -> Tuple[List[Attachment], List[str]]:
    """并发读取多个文件。

    Returns:
        (按完成顺序排列的附件列表, 面向用户的警告列表)
    """

    attachments: List[Attachment] = []
    warnings: List[str] = []
    path_list = list(paths)
    if not path_list:
        return attachments, warnings
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {pool.submit(read_attachment, p): Path(p) for p in path_list}
        for future in as_completed(futures):
            try:
                attachments.append(future.result())
            except AttachmentTooLarge as e:
                logger.warning(e.message, extra={"extra": {"code": e.code, **e.extra}})
                warnings.append(e.message)
            except OSError as e:
                # 读取失败的文件不产出附件，其余文件照常发送
                name = futures[future].name
                message = f"File {name} could not be read."
                logger.warning(message, extra={"extra": {"code": "ATTACHMENT_UNREADABLE", "name": name, "error": str(e)}})
                warnings.append(message)
    return attachments, warnings


def flatten_attachments(content: str, attachments: Sequence[Attachment]) -> str:
    """把附件元数据拼接到消息文本后面，文本类附件附带前 500 个字符的预览。"""

    usable = [a for a in attachments if a.is_usable]
    if not usable:
        return content
    prompt = content + "\n\nAttached files:\n"
    for a in usable:
        prompt += f"\n- {a.name} ({a.size_bytes / 1024:.2f} KB)"
        if a.is_text:
            prompt += f"\nContent preview: {a.payload[:PREVIEW_CHARS]}..."
    return prompt
