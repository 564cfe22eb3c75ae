# utilities.py
from __future__ import annotations

from typing import List


# ────────────────────────────────────────────────────────────────────────
#  Text preprocessing
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str) -> str:
    """Drop every whitespace character; anything else is left for the
    machine to accept or reject."""
    return "".join(msg.split())


def group_message(msg: str, block: int = 5) -> str:
    """Print-ready MSG in groups of BLOCK symbols (the last may be short)."""
    if block <= 0:
        return msg
    blocks: List[str] = [msg[i : i + block] for i in range(0, len(msg), block)]
    return " ".join(blocks)


__all__ = [
    "preprocess_message",
    "group_message",
]
