# foodprint/parsers.py — model reply cleanup + shape checks, image payload helpers
import json
import math
import numbers
from typing import Any, Dict, List

from .schemas import AnalysisType


class ResultParseError(ValueError):
    pass


class InvalidResultError(ValueError):
    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__("missing or empty keys: " + ", ".join(missing))


class MissingImageError(ValueError):
    pass


# ------------------ Reply text ------------------
def strip_code_fences(text: str) -> str:
    """Drop a ```json / ``` wrapper the model sometimes adds despite being told not to."""
    clean = (text or "").strip()
    if clean.startswith("```json"):
        clean = clean[7:]
    if clean.startswith("```"):
        clean = clean[3:]
    if clean.endswith("```"):
        clean = clean[:-3]
    return clean.strip()


def _reject_constant(name: str):
    # NaN / Infinity are not JSON and cannot be sent back to the client
    raise ResultParseError(f"reply contains non-JSON number {name}")


def parse_model_json(text: str) -> Dict[str, Any]:
    clean = strip_code_fences(text)
    try:
        data = json.loads(clean, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ResultParseError(f"reply is not JSON: {e}") from e
    if not isinstance(data, dict):
        raise ResultParseError(f"expected a JSON object, got {type(data).__name__}")
    return data


# ------------------ Shape checks ------------------
def _is_number(v: Any) -> bool:
    # bool is an int subclass; "true" is not a footprint
    return isinstance(v, numbers.Real) and not isinstance(v, bool) and math.isfinite(v)


def _non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and bool(v.strip())


REQUIRED_KEYS = {
    AnalysisType.FOOD: {
        "name": _non_empty_str,
        "kgCO2": _is_number,
        "label": _non_empty_str,
    },
    AnalysisType.WASTE: {
        "wastePercentage": _is_number,
        "kgCO2Lost": _is_number,
    },
}


def validate_result(result: Dict[str, Any], analysis_type: AnalysisType) -> Dict[str, Any]:
    missing = [k for k, ok in REQUIRED_KEYS[analysis_type].items() if not ok(result.get(k))]
    if missing:
        raise InvalidResultError(missing)
    return result


# ------------------ Image payload ------------------
def to_data_url(image: str | None, mime: str = "image/jpeg") -> str:
    image = (image or "").strip()
    if not image:
        raise MissingImageError("No image provided")
    if image.startswith("data:"):
        return image
    return f"data:{mime};base64,{image}"
