"""Turning the raw HTTP body into response text plus token usage."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Usage:
    total: int = 0
    prompt: int = 0
    completion: int = 0


@dataclass(frozen=True)
class ResponseResult:
    text: str
    usage: Usage
    status_code: int
    raw_body: str

    @property
    def ok(self) -> bool:
        return is_success(self.status_code)


@dataclass(frozen=True)
class ParseOutcome:
    """Either a decoded JSON value or a malformed marker."""

    value: Any = None
    malformed: bool = False
    error: Optional[str] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return not self.malformed


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def parse_json_body(raw: str) -> ParseOutcome:
    try:
        return ParseOutcome(value=json.loads(raw))
    except (TypeError, ValueError) as e:
        return ParseOutcome(malformed=True, error=str(e))


def _text_of_parts(parts: list, part_types=("text",)) -> str:
    out = []
    for part in parts:
        if isinstance(part, dict) and part.get("type") in part_types:
            txt = part.get("text")
            if isinstance(txt, str):
                out.append(txt)
    return "".join(out)


def _choice_content(data: dict) -> Optional[str]:
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    msg = first.get("message") if isinstance(first, dict) else None
    if not isinstance(msg, dict):
        return ""
    content = msg.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return _text_of_parts(content)
    return ""


def _responses_output(data: dict) -> str:
    # /v1/responses replies carry output_text or output[].content[] instead of choices
    if isinstance(data.get("output_text"), str):
        return data["output_text"]
    output = data.get("output")
    if not isinstance(output, list):
        return ""
    out = []
    for item in output:
        if isinstance(item, dict) and isinstance(item.get("content"), list):
            out.append(_text_of_parts(item["content"], part_types=("output_text", "text")))
    return "".join(out)


def _as_int(v: Any) -> int:
    if isinstance(v, bool):
        return 0
    if isinstance(v, int):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return 0


def extract_usage(data: dict) -> Usage:
    usage = data.get("usage")
    if not isinstance(usage, dict):
        return Usage()
    prompt = usage.get("prompt_tokens", usage.get("input_tokens"))
    completion = usage.get("completion_tokens", usage.get("output_tokens"))
    return Usage(
        total=_as_int(usage.get("total_tokens")),
        prompt=_as_int(prompt),
        completion=_as_int(completion),
    )


def extract_text(data: Any) -> str:
    if not isinstance(data, dict):
        return ""
    text = _choice_content(data)
    if text is None:
        text = _responses_output(data)
    return text


def extract_response(status_code: int, raw_body: str) -> ResponseResult:
    """Build a ResponseResult; only successful bodies are parsed.

    A 2xx body that is not valid JSON yields empty text and zero usage.
    """
    text, usage = "", Usage()
    if is_success(status_code):
        parsed = parse_json_body(raw_body)
        if parsed.ok and isinstance(parsed.value, dict):
            text = extract_text(parsed.value)
            usage = extract_usage(parsed.value)
    return ResponseResult(text=text, usage=usage, status_code=status_code, raw_body=raw_body)
