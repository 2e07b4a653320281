"""Non-fatal notices returned alongside analytics results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

NoticeKind = Literal[
    "empty_result",
    "cluster_count_adjusted",
    "sampled",
    "normalization_failure",
]


class Notice(BaseModel):
    """A transient, user-facing message. Never an error."""

    kind: NoticeKind
    title: str
    message: str = ""
