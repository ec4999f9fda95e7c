import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from toolbox_core.config.settings import settings


# Gemini 把密钥放在查询参数里，OpenAI 用 Bearer，Anthropic 用 x-api-key
SECRET_PATTERNS = [
    (re.compile(r"([?&]key=)[^&\s\"']+"), r"\1***"),
    (re.compile(r"(Bearer\s+)[^\s\"']+", re.IGNORECASE), r"\1***"),
    (re.compile(r"(x-api-key[\"']?\s*[:=]\s*[\"']?)[^\s\"',}]+", re.IGNORECASE), r"\1***"),
]


def redact_secrets(text: str) -> str:
    for pattern, repl in SECRET_PATTERNS:
        text = pattern.sub(repl, text)
    return text


def _scrub(value: Any) -> Any:
    if isinstance(value, str):
        return redact_secrets(value)
    return value


class JsonFormatter(logging.Formatter):
    """一行一条 JSON，provider/model 等字段来自 extra={"extra": {...}}。"""

    def format(self, record: logging.LogRecord) -> str:
        msg = redact_secrets(record.getMessage() or "")
        if settings.log_redact_content:
            msg = msg[:64]
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update({k: _scrub(v) for k, v in extra.items()})
        if record.exc_info:
            payload["exc"] = redact_secrets(self.formatException(record.exc_info))
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("toolbox_core")
    logger.setLevel(logging.INFO)
    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / "toolbox.log", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()
