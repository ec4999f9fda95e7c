"""系统提示词加载工具。

按工具 id 从 prompts/system_prompts.yaml 读取 system prompt。
未登记的工具回退到通用的 ai-chat 提示词，并记录一条警告，
便于发现新增工具忘记登记提示词的情况。
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict

import yaml

from toolbox_core.infrastructure.logging.logger import logger


PROMPTS_DIR = Path(__file__).resolve().parent
PROMPTS_FILE = PROMPTS_DIR / "system_prompts.yaml"
DEFAULT_TOOL_ID = "ai-chat"


@lru_cache(maxsize=1)
def load_system_prompts() -> Dict[str, str]:
    data = yaml.safe_load(PROMPTS_FILE.read_text(encoding="utf-8")) or {}
    return {str(k): str(v).strip() for k, v in data.items()}


def get_system_prompt(tool_id: str) -> str:
    prompts = load_system_prompts()
    prompt = prompts.get(tool_id)
    if prompt is None:
        logger.warning(
            f"No system prompt registered for tool {tool_id!r}, using {DEFAULT_TOOL_ID!r}",
            extra={"extra": {"tool_id": tool_id}},
        )
        return prompts[DEFAULT_TOOL_ID]
    return prompt
