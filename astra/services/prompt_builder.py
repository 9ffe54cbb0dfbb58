# astra/services/prompt_builder.py
from __future__ import annotations

from typing import Dict, Iterable, List

from astra.core.prompt import SYSTEM_PROMPT
from astra.models.workshop import Message


def build_model_messages(history: Iterable[Message]) -> List[Dict[str, str]]:
    messages: List[Dict[str, str]] = [{"role": "system", "content": SYSTEM_PROMPT}]

    for m in history:
        role = (m.role or "").strip().lower()
        if role not in ("system", "user", "assistant"):
            role = "user"
        messages.append({"role": role, "content": m.content or ""})

    return messages
