"""Decodes the model's JSON into a DocumentAnalysis.

All field-name fallbacks and defaults live here so that the rest of the
pipeline only ever sees a fully populated DocumentAnalysis.
"""

import json
from typing import Any

from document_analyzer.exceptions import MalformedResponseError
from document_analyzer.processor.models import DocumentAnalysis, Risk, RiskLevel

NO_SUMMARY = "No summary available"
UNSPECIFIED_RISK = "Unspecified risk"

_SUMMARY_KEYS = ("executiveSummary", "executive_summary")
_KEY_POINT_KEYS = ("keyPoints", "key_points")
_NEXT_ACTION_KEYS = ("nextActions", "next_actions", "actions")
_RISK_DESCRIPTION_KEYS = ("description", "desc")


def parse_json_object(raw: str) -> dict[str, Any]:
    """Parse completion content, tolerating a surrounding markdown code fence.

    Raises:
        MalformedResponseError: if the content is not a JSON object.
    """
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise MalformedResponseError("JSON response must be an object")
    return parsed


def decode_analysis(data: dict[str, Any]) -> DocumentAnalysis:
    """Build a DocumentAnalysis, applying key fallbacks and defaults.

    Raises:
        MalformedResponseError: if a collection field is present but not a list.
    """
    summary = _first_present(data, _SUMMARY_KEYS)
    return DocumentAnalysis(
        executive_summary=_to_text(summary) if summary else NO_SUMMARY,
        key_points=_decode_strings(data, _KEY_POINT_KEYS),
        risks=tuple(_decode_risk(item) for item in _decode_list(data, ("risks",))),
        next_actions=_decode_strings(data, _NEXT_ACTION_KEYS),
    )


def _first_present(data: dict[str, Any], keys: tuple[str, ...]) -> Any:
    # An empty value under the first key falls through to the next one.
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return None


def _decode_list(data: dict[str, Any], keys: tuple[str, ...]) -> list[Any]:
    value = _first_present(data, keys)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedResponseError(
            f"'{keys[0]}' must be a list, got {type(value).__name__}"
        )
    return value


def _decode_strings(data: dict[str, Any], keys: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(_to_text(item) for item in _decode_list(data, keys))


def _decode_risk(raw: Any) -> Risk:
    if isinstance(raw, dict):
        level = RiskLevel.parse(raw.get("level"))
        description = _first_present(raw, _RISK_DESCRIPTION_KEYS)
        text = _to_text(description) if description else _to_text(raw)
    else:
        level = RiskLevel.MEDIUM
        text = _to_text(raw)
    return Risk(level=level, description=text.strip() or UNSPECIFIED_RISK)


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
