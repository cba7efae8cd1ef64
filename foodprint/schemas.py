from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AnalysisType(str, Enum):
    FOOD = "food"
    WASTE = "waste"


LABELS = ("Low", "Medium", "High")


class AnalyzeRequest(BaseModel):
    imageBase64: Optional[str] = None
    analysisType: Optional[str] = None
    mealContext: Optional[dict] = None


class ModelReply(BaseModel):
    """Base for shapes filled from model output: a null means "use the default"."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        out = {}
        for k, v in data.items():
            if v is None:
                continue
            if isinstance(v, list):
                v = [item for item in v if item is not None]
            out[k] = v
        return out


class ResourceUsage(ModelReply):
    waterLiters: float = 0.0
    landM2: float = 0.0
    energyKwh: float = 0.0


class PotentialWaste(ModelReply):
    kgCO2: float = 0.0
    waterLiters: float = 0.0
    message: str = ""


class Nutrition(ModelReply):
    calories: float = 0.0
    proteinG: float = 0.0
    carbsG: float = 0.0
    fatG: float = 0.0
    fiberG: float = 0.0
    healthLabel: str = ""


class FoodResult(ModelReply):
    """What the card renders for a meal. Model output is loose, so most fields default."""
    model_config = ConfigDict(extra="allow")

    name: str
    ingredients: List[str] = Field(default_factory=list)
    estimatedWeightGrams: Optional[float] = None
    kgCO2: float
    label: Literal["Low", "Medium", "High"]
    comparison: str = ""
    resourceUsage: ResourceUsage = Field(default_factory=ResourceUsage)
    potentialWaste: Optional[PotentialWaste] = None
    nutrition: Optional[Nutrition] = None
    qualityScore: Optional[float] = None
    tip: str = ""
    confidence: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _normalize_label(cls, data: Any) -> Any:
        # "low", "HIGH", "Medium impact" -> band name; anything else falls back to the kg bands
        if not isinstance(data, dict):
            return data
        label = str(data.get("label") or "").strip().lower().removesuffix(" impact").capitalize()
        kg = data.get("kgCO2")
        if label not in LABELS and isinstance(kg, (int, float)) and not isinstance(kg, bool):
            from .calculator import label_for_kg
            label = label_for_kg(kg)
        return {**data, "label": label}


class WasteResult(ModelReply):
    model_config = ConfigDict(extra="allow")

    wastedItems: List[str] = Field(default_factory=list)
    wasteGrams: float = 0.0
    wastePercentage: float
    kgCO2Lost: float
    resourcesLost: ResourceUsage = Field(default_factory=ResourceUsage)
    comparison: str = ""
    tip: str = ""
    confidence: float = 0.0
