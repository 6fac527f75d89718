"""Extract structured data from free-form model output.

Each strategy takes the raw text and returns a result or None. Strategies
never raise and never depend on each other, so callers chain them and take
the first non-None result.
"""

import json
import re
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

T = TypeVar("T")
Strategy = Callable[[str], T | None]

CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
JSON_ARRAY = re.compile(r"\[.*\]", re.DOTALL)
LIST_MARKER = re.compile(r"^(?:\d+[.)]\s*|[-*•]\s+)")
QUOTES = str.maketrans("", "", "\"“”")


def first_success(text: str, strategies: Iterable[Strategy[T]]) -> T | None:
    """Run ``strategies`` in order and return the first non-None result."""
    for strategy in strategies:
        result = strategy(text)
        if result is not None:
            return result
    return None


def _loads(text: str) -> Any | None:
    try:
        return json.loads(text)
    except ValueError:
        return None


def strip_code_fences(text: str) -> str:
    return CODE_FENCE.sub("", text).strip()


# Arrays


def parse_json_array(text: str) -> list | None:
    """The whole text, minus Markdown fences, is a non-empty JSON array."""
    value = _loads(strip_code_fences(text))
    if isinstance(value, list) and value:
        return value
    return None


def search_json_array(text: str) -> list | None:
    """The first ``[ ... ]`` span (greedy, across lines) is a non-empty JSON array."""
    match = JSON_ARRAY.search(text)
    if not match:
        return None
    value = _loads(match.group(0))
    if isinstance(value, list) and value:
        return value
    return None


def _strings(items: list | None) -> list[str] | None:
    if items is None:
        return None
    strings = [item.strip() for item in items if isinstance(item, str) and item.strip()]
    return strings or None


def strings_from_json(text: str) -> list[str] | None:
    return _strings(parse_json_array(text))


def strings_from_embedded_array(text: str) -> list[str] | None:
    return _strings(search_json_array(text))


def strings_from_list_lines(text: str) -> list[str] | None:
    """Numbered or bulleted lines, with markers and quote characters removed.

    Text without any list-marked line yields None so that prose (refusals,
    error pages) is not mistaken for a list.
    """
    items = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        marker = LIST_MARKER.match(line)
        if marker is None:
            continue
        item = line[marker.end():].translate(QUOTES).strip()
        if item:
            items.append(item)
    return items or None


STRING_LIST_STRATEGIES: tuple[Strategy[list[str]], ...] = (
    strings_from_json,
    strings_from_embedded_array,
    strings_from_list_lines,
)


def extract_string_list(text: str, count: int) -> list[str] | None:
    """Extract up to ``count`` strings, or None when no strategy matches."""
    if not text:
        return None
    items = first_success(text, STRING_LIST_STRATEGIES)
    return items[:count] if items else None


# Objects


def _objects(items: list | None) -> list[dict] | None:
    if items is None:
        return None
    objects = [item for item in items if isinstance(item, dict)]
    return objects or None


def objects_from_json(text: str) -> list[dict] | None:
    return _objects(parse_json_array(text))


def objects_from_embedded_array(text: str) -> list[dict] | None:
    return _objects(search_json_array(text))


def extract_object_list(text: str) -> list[dict] | None:
    if not text:
        return None
    return first_success(text, (objects_from_json, objects_from_embedded_array))


def _balanced_span(text: str, start: int) -> str | None:
    """Return ``text[start:end]`` where the brace opened at ``start`` closes."""
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:index + 1]
    return None


def extract_json_object(text: str) -> dict | None:
    """Find the first brace-balanced span that parses as a JSON object."""
    if not text:
        return None
    start = text.find("{")
    while start != -1:
        span = _balanced_span(text, start)
        if span is not None:
            value = _loads(span)
            if isinstance(value, dict):
                return value
        start = text.find("{", start + 1)
    return None
