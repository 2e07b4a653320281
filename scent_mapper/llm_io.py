from __future__ import annotations

import json
import os
import re
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from .config import DEFAULT_LLM_MODEL
from .errors import NormalizationFailure


# Optional OpenAI client -----------------------------------------------------
OPENAI_AVAILABLE = False
try:  # pragma: no cover - dependency is optional at runtime
    from openai import OpenAI  # type: ignore

    OPENAI_AVAILABLE = True
except ImportError:  # pragma: no cover
    OpenAI = None  # type: ignore


class NormalizedLabels(BaseModel):
    normalized_labels: List[str] = Field(default_factory=list)


_WHITESPACE_RUN = re.compile(r"\s+")


def structural_normalize(label: str) -> str:
    """Collapse whitespace runs, hyphenate spaces, trim."""
    return _WHITESPACE_RUN.sub(" ", label).replace(" ", "-").strip()


def _strip_json_fences(text: str) -> str:
    if not text:
        return text
    # Remove ```json ... ``` or ``` ... ``` fences
    fenced = re.findall(r"```(?:json)?\n([\s\S]*?)```", text)
    if fenced:
        return fenced[0].strip()
    return text.strip()


def _extract_json_fragment(text: str) -> Optional[str]:
    # First balanced {...} or [...] block
    stack = []
    start = None
    for i, ch in enumerate(text):
        if ch in "[{":
            if not stack:
                start = i
            stack.append(ch)
        elif ch in "]}":
            if not stack:
                continue
            stack.pop()
            if not stack and start is not None:
                return text[start : i + 1]
    return None


def parse_normalized_labels(text: str) -> NormalizedLabels:
    """Parse the assistant reply into NormalizedLabels.

    Accepts a bare JSON list as well as the ``{"normalized_labels": [...]}``
    object, with or without code fences.
    """
    raw = _strip_json_fences(text)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        frag = _extract_json_fragment(raw) or _extract_json_fragment(text)
        if frag is None:
            raise NormalizationFailure("Normalization service returned no JSON")
        try:
            data = json.loads(frag)
        except json.JSONDecodeError as e:
            raise NormalizationFailure(f"Normalization service returned invalid JSON: {e}") from e

    if isinstance(data, list):
        data = {"normalized_labels": data}
    elif isinstance(data, dict) and "normalized_labels" not in data:
        for alias in ("normalizedLabels", "labels"):
            if alias in data:
                data = {"normalized_labels": data[alias]}
                break

    try:
        return NormalizedLabels.model_validate(data)
    except ValidationError as e:
        raise NormalizationFailure(f"Normalization service returned an unexpected shape: {e}") from e


def make_normalize_messages(labels: List[str], should_normalize: bool) -> List[Dict[str, str]]:
    system = (
        "You are a data normalization expert specializing in accord labels for perfumes.\n"
        "Normalization involves the following steps:\n"
        "1. Replace multiple spaces with a single space.\n"
        "2. Replace a single space with a dash.\n"
        "3. Trim leading/trailing whitespace.\n"
        "If the user wants you to normalize, apply these steps to each label. "
        "Otherwise, return the labels as they are.\n"
        'Return strict JSON: {"normalized_labels": [...]} with exactly one entry per input label, in order.'
    )
    user = (
        f"Here are the accord labels: {json.dumps(labels, ensure_ascii=False)}\n"
        f"Should normalize: {str(should_normalize).lower()}"
    )
    return [{"role": "system", "content": system}, {"role": "user", "content": user}]


def call_normalization_service(
    labels: List[str],
    should_normalize: bool,
    *,
    model: str = DEFAULT_LLM_MODEL,
) -> List[str]:
    """Ask the LLM to normalize labels; returns its raw label list."""
    if not (OPENAI_AVAILABLE and os.environ.get("OPENAI_API_KEY")):
        raise NormalizationFailure("OpenAI API key not configured; cannot normalize labels")

    try:
        client = OpenAI()
        resp = client.chat.completions.create(
            model=model,
            messages=make_normalize_messages(labels, should_normalize),
            temperature=0,
        )
        text = (resp.choices[0].message.content or "").strip()
    except Exception as e:
        raise NormalizationFailure(f"Normalization service unreachable: {e}") from e

    result = parse_normalized_labels(text)
    return result.normalized_labels


def normalize_accord_labels(
    labels: List[str],
    should_normalize: bool,
    *,
    model: str = DEFAULT_LLM_MODEL,
) -> List[str]:
    """Normalize distinct labels, preserving length and order.

    With ``should_normalize=False`` the labels come back unchanged and no
    service is called. Otherwise the service output is passed through
    :func:`structural_normalize` once more.

    Raises:
        NormalizationFailure: service unavailable, unparsable reply, or a
            reply whose length differs from the input.
    """
    if not should_normalize:
        return list(labels)
    if not labels:
        return []

    normalized = call_normalization_service(labels, should_normalize, model=model)
    if len(normalized) != len(labels):
        raise NormalizationFailure(
            f"Normalization service returned {len(normalized)} labels for {len(labels)} inputs"
        )
    return [structural_normalize(label) for label in normalized]


__all__ = [
    "NormalizedLabels",
    "call_normalization_service",
    "make_normalize_messages",
    "normalize_accord_labels",
    "parse_normalized_labels",
    "structural_normalize",
]
