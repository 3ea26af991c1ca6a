"""
Extraction of the structured result from the model's final answer.

The model is asked for strict JSON, but in practice the object may come
wrapped in prose or a markdown fence. Every JSON object found in the text is
tried against the mode's schema, outermost first and then the objects nested
inside it, and the first one that validates wins.
"""

import json
from collections import deque
from typing import Any, Iterator

from pydantic import BaseModel, ValidationError

from ..core.errors import ParseError
from ..core.models import ActionPayload, CrawlerReport, ExplorerReport, RunMode, TestVerdict


SCHEMAS: dict[RunMode, type[BaseModel]] = {
    RunMode.TEST: TestVerdict,
    RunMode.EXPLORER: ExplorerReport,
    RunMode.CRAWLER: CrawlerReport,
    RunMode.NONE: TestVerdict,
}


def extract_json_objects(text: str) -> list[dict[str, Any]]:
    """
    Find every top-level JSON object embedded in a piece of text.

    Text too deeply nested to decode is skipped like any other malformed
    fragment.

    Args:
        text: Free-form model output

    Returns:
        Decoded objects in order of appearance
    """
    decoder = json.JSONDecoder()
    objects: list[dict[str, Any]] = []
    index = text.find("{")

    while index != -1:
        try:
            value, end = decoder.raw_decode(text, index)
        except (json.JSONDecodeError, RecursionError):
            index = text.find("{", index + 1)
            continue
        if isinstance(value, dict):
            objects.append(value)
        index = text.find("{", end)

    return objects


def iter_nested_objects(value: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """
    Yield `value` and then every object nested in it, breadth first.

    Args:
        value: Decoded JSON object

    Yields:
        Objects, outermost first
    """
    queue: deque[Any] = deque([value])
    while queue:
        item = queue.popleft()
        if isinstance(item, dict):
            yield item
            queue.extend(item.values())
        elif isinstance(item, list):
            queue.extend(item)


def extract_json_payload(text: str) -> dict[str, Any]:
    """
    Return the first JSON object in `text`.

    Raises:
        ParseError: If the text contains no JSON object
    """
    objects = extract_json_objects(text)
    if not objects:
        raise ParseError(f"No JSON object found in model response: {text[:200]!r}")
    return objects[0]


class ResultExtractor:
    """Parses and validates the final answer for one run mode."""

    def __init__(self, mode: RunMode):
        self.mode = mode
        self.schema = SCHEMAS[mode]

    def extract(self, text: str) -> ActionPayload:
        """
        Parse the model's final text into the mode's payload.

        Args:
            text: Final assistant message

        Returns:
            Validated payload model

        Raises:
            ParseError: If no JSON object in the text matches the schema
        """
        candidates = extract_json_objects(text or "")
        if not candidates:
            raise ParseError(f"No JSON object found in model response: {(text or '')[:200]!r}")

        errors = []
        for candidate in candidates:
            first_error: ValidationError | None = None
            for obj in iter_nested_objects(candidate):
                try:
                    return self.schema.model_validate(obj)
                except ValidationError as e:
                    first_error = first_error or e
            if first_error is not None:
                errors.append(f"{first_error.error_count()} validation error(s)")

        raise ParseError(
            f"Model response does not match the {self.mode.value} result schema "
            f"({'; '.join(errors)})"
        )
