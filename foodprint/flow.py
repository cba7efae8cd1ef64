# foodprint/flow.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Stage(str, Enum):
    INITIAL = "initial"
    FOOD_ANALYZED = "food_analyzed"
    WASTE_ANALYZED = "waste_analyzed"


class FlowError(RuntimeError):
    pass


@dataclass
class ScanSession:
    """
    One scan: meal photo -> food result -> (optional) leftovers photo -> waste result.

    Lives in the UI session only; nothing is stored.
    """
    image: Optional[str] = None
    meal_image: Optional[str] = None
    food: Optional[Dict[str, Any]] = None
    waste: Optional[Dict[str, Any]] = None
    busy: bool = False

    @property
    def stage(self) -> Stage:
        if self.waste is not None:
            return Stage.WASTE_ANALYZED
        if self.food is not None:
            return Stage.FOOD_ANALYZED
        return Stage.INITIAL

    def set_image(self, image: str) -> None:
        if self.stage is Stage.WASTE_ANALYZED:
            raise FlowError("Scan finished; start a new scan first")
        self.image = image

    def clear_image(self) -> None:
        if not self.busy:
            self.image = None

    def record_food(self, result: Dict[str, Any]) -> None:
        if self.stage is not Stage.INITIAL:
            raise FlowError(f"Cannot record a meal in stage {self.stage.value}")
        self.food = result
        # the next photo is the leftovers
        self.meal_image, self.image = self.image, None

    def record_waste(self, result: Dict[str, Any]) -> None:
        if self.stage is not Stage.FOOD_ANALYZED:
            raise FlowError(f"Cannot record waste in stage {self.stage.value}")
        self.waste = result
        self.image = None

    def begin_request(self) -> None:
        if self.busy:
            raise FlowError("An analysis is already running")
        if not self.image:
            raise FlowError("No image to analyze")
        self.busy = True

    def end_request(self) -> None:
        self.busy = False

    def reset(self) -> None:
        self.image = None
        self.meal_image = None
        self.food = None
        self.waste = None
        self.busy = False
