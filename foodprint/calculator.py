# foodprint/calculator.py — meter values, bands and confidence gates for the score card
from __future__ import annotations
from typing import Any, Dict, Optional

from .config import Settings, get_settings
from .schemas import AnalysisType

MILES_PER_KG_CO2 = 4.0

# label -> progress bar %
METER_VALUES = {"Low": 25, "Medium": 55, "High": 85}

# label -> colour used by the card
LABEL_COLORS = {"Low": "green", "Medium": "orange", "High": "red"}


def meter_value(label: str) -> int:
    return METER_VALUES.get(label, METER_VALUES["High"])


def label_for_kg(kg: float) -> str:
    if kg < 1:
        return "Low"
    if kg <= 4:
        return "Medium"
    return "High"


def miles_for_kg(kg: float) -> float:
    return round(kg * MILES_PER_KG_CO2, 1)


def percent_value(value: Any) -> int:
    """0-100 score (waste %, quality score) -> progress bar value."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0
    return int(round(min(100.0, max(0.0, value))))


def min_confidence(analysis_type: AnalysisType, settings: Optional[Settings] = None) -> float:
    settings = settings or get_settings()
    if analysis_type is AnalysisType.WASTE:
        return settings.waste_min_confidence
    return settings.food_min_confidence


def accept_result(
    result: Dict[str, Any],
    analysis_type: AnalysisType,
    settings: Optional[Settings] = None,
) -> bool:
    """Whether a result is confident enough to show. No confidence means no."""
    try:
        confidence = float(result.get("confidence"))
    except (TypeError, ValueError):
        return False
    return confidence >= min_confidence(analysis_type, settings)
