import json
from typing import Annotated, Any

from pydantic import BeforeValidator


def decode_flag(value: Any) -> bool:
    """Decode a boolean that may arrive as 0/1, "0"/"1", true/false or null."""
    if value is None or value == "":
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "false"):
            return text == "true"
        try:
            return float(text) != 0
        except ValueError:
            return False
    try:
        return float(value) != 0
    except (TypeError, ValueError):
        return False


def _none_as(default: Any):
    def convert(value: Any) -> Any:
        return default if value is None else value

    return convert


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_benefits(value: Any) -> list[str]:
    """Benefits arrive as a list, a JSON array string, or newline-separated text."""
    if isinstance(value, list):
        return [str(item) for item in value if str(item).strip()]
    if isinstance(value, str):
        trimmed = value.strip()
        if not trimmed:
            return []
        if trimmed.startswith("[") and trimmed.endswith("]"):
            try:
                parsed = json.loads(trimmed)
            except ValueError:
                parsed = None
            if isinstance(parsed, list):
                return [str(item) for item in parsed if str(item).strip()]
        return [line.strip() for line in trimmed.split("\n") if line.strip()]
    return []


def normalize_hour(value: Any) -> str:
    """Trim seconds from an HH:MM:SS hour; other text is returned unchanged."""
    text = str(value).strip()
    parts = text.split(":")
    if len(parts) >= 2 and parts[0].isdigit() and parts[1].isdigit():
        return f"{int(parts[0]):02d}:{parts[1]}"
    return text


WireBool = Annotated[bool, BeforeValidator(decode_flag)]
Text = Annotated[str, BeforeValidator(_text)]
IntOrZero = Annotated[int, BeforeValidator(_none_as(0))]
FloatOrZero = Annotated[float, BeforeValidator(_none_as(0))]
Hour = Annotated[str, BeforeValidator(normalize_hour)]
Benefits = Annotated[list[str], BeforeValidator(parse_benefits)]
