# foodprint/prompts.py — system/user prompts for the two analysis modes
import json
from typing import Any, Dict, List, Optional

from .schemas import AnalysisType

CARBON_GUIDELINES = """Carbon footprint guidelines per kg of food:
- Beef: 27 kg CO2e
- Lamb: 22 kg CO2e
- Cheese: 13.5 kg CO2e
- Pork: 7 kg CO2e
- Chicken: 4.5 kg CO2e
- Fish: 3-6 kg CO2e
- Eggs: 4.5 kg CO2e
- Rice: 2.7 kg CO2e
- Pasta/Bread: 1.2 kg CO2e
- Vegetables: 0.5-2 kg CO2e
- Fruits: 0.3-1 kg CO2e
- Wine (per glass): 0.2-0.5 kg CO2e
- Beer (per pint): 0.3 kg CO2e

Comparison formula: 1 kg CO2 ≈ 4 miles of driving"""

FOOD_SYSTEM_PROMPT = f"""You are an expert food analyst specializing in carbon footprint, resource use and nutrition estimation. Analyze the food image and provide accurate data.

You MUST respond with ONLY valid JSON in this exact format (no markdown, no code blocks, just raw JSON):
{{
  "name": "Name of the dish/food",
  "ingredients": ["ingredient1", "ingredient2", "ingredient3"],
  "estimatedWeightGrams": 450,
  "kgCO2": 2.5,
  "label": "Medium",
  "comparison": "Driving 10 miles in an average car",
  "resourceUsage": {{"waterLiters": 800, "landM2": 3.2, "energyKwh": 1.5}},
  "potentialWaste": {{"kgCO2": 2.5, "waterLiters": 800, "message": "If thrown away, this meal wastes the same as driving 10 miles"}},
  "nutrition": {{"calories": 650, "proteinG": 30, "carbsG": 70, "fatG": 22, "fiberG": 8, "healthLabel": "Balanced"}},
  "qualityScore": 72,
  "tip": "A helpful eco-friendly tip about this food choice",
  "confidence": 95
}}

{CARBON_GUIDELINES}

Label thresholds:
- Low: < 1 kg CO2
- Medium: 1-4 kg CO2
- High: > 4 kg CO2

potentialWaste is the impact if the whole portion ended up in the bin (production emissions plus landfill methane).
qualityScore is 0-100 and reflects nutritional balance and environmental impact together.

Be precise and identify ALL items in the image including drinks. If you see multiple items, calculate the total. Only set confidence above 90 if you can clearly identify the food."""

WASTE_SYSTEM_PROMPT = f"""You are an expert in food waste and its environmental cost. The image shows a plate or container AFTER a meal. Identify what was left uneaten and estimate the carbon footprint and resources lost with it.

You MUST respond with ONLY valid JSON in this exact format (no markdown, no code blocks, just raw JSON):
{{
  "wastedItems": ["item1", "item2"],
  "wasteGrams": 120,
  "wastePercentage": 25,
  "kgCO2Lost": 0.6,
  "resourcesLost": {{"waterLiters": 200, "landM2": 0.8, "energyKwh": 0.4}},
  "comparison": "Driving 2.4 miles in an average car",
  "tip": "A practical tip to waste less next time",
  "confidence": 90
}}

{CARBON_GUIDELINES}

wastePercentage is the share (0-100) of the original meal left on the plate. If the plate is clean, return an empty wastedItems list and zeros.
Only set confidence above 85 if you can clearly see the leftovers."""

SYSTEM_PROMPTS: Dict[AnalysisType, str] = {
    AnalysisType.FOOD: FOOD_SYSTEM_PROMPT,
    AnalysisType.WASTE: WASTE_SYSTEM_PROMPT,
}

USER_PROMPTS: Dict[AnalysisType, str] = {
    AnalysisType.FOOD: (
        "Analyze this food image. Identify what food and drinks are shown, estimate the carbon "
        "footprint, resource use and nutrition, and provide the response in the exact JSON format specified."
    ),
    AnalysisType.WASTE: (
        "Analyze this image of the leftovers. Identify what was not eaten, estimate how much "
        "was wasted and its carbon footprint, and provide the response in the exact JSON format specified."
    ),
}


def _describe_meal(meal: Dict[str, Any]) -> str:
    # only the fields that help the model size the leftovers
    keep = {k: meal[k] for k in ("name", "ingredients", "estimatedWeightGrams", "kgCO2") if k in meal}
    return json.dumps(keep, ensure_ascii=False)


def build_messages(
    image_url: str,
    analysis_type: AnalysisType,
    meal_context: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    text = USER_PROMPTS[analysis_type]
    if analysis_type is AnalysisType.WASTE and meal_context:
        text += "\nThe original meal before eating was: " + _describe_meal(meal_context)

    return [
        {"role": "system", "content": SYSTEM_PROMPTS[analysis_type]},
        {"role": "user", "content": [
            {"type": "text", "text": text},
            {"type": "image_url", "image_url": {"url": image_url}},
        ]},
    ]
