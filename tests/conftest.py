import json
import os
from unittest.mock import MagicMock, patch

import pytest

from foodprint.config import Settings

FOOD_REPLY = {
    "name": "Beef Burger",
    "ingredients": ["Beef patty", "Brioche bun", "Lettuce", "Cheese"],
    "estimatedWeightGrams": 320,
    "kgCO2": 6.8,
    "label": "High",
    "comparison": "Driving 28 miles in an average car",
    "resourceUsage": {"waterLiters": 2400, "landM2": 12.5, "energyKwh": 3.1},
    "potentialWaste": {"kgCO2": 6.8, "waterLiters": 2400, "message": "Finish it or save it for later"},
    "nutrition": {"calories": 780, "proteinG": 38, "carbsG": 45, "fatG": 44, "fiberG": 3, "healthLabel": "Heavy"},
    "qualityScore": 41,
    "tip": "Try a plant-based patty next time to reduce emissions by up to 90%!",
    "confidence": 96,
}

WASTE_REPLY = {
    "wastedItems": ["Brioche bun"],
    "wasteGrams": 60,
    "wastePercentage": 20,
    "kgCO2Lost": 0.1,
    "resourcesLost": {"waterLiters": 50, "landM2": 0.2, "energyKwh": 0.1},
    "comparison": "Driving 0.4 miles",
    "tip": "Ask for a smaller bun.",
    "confidence": 88,
}

TEST_ENV = {
    "AI_GATEWAY_API_KEY": "test-key",
    "AI_GATEWAY_URL": "https://gateway.test/v1",
    "MODEL": "test/vision-model",
}


@pytest.fixture
def env():
    """Clean environment with an API key set."""
    with patch.dict(os.environ, TEST_ENV, clear=True):
        yield


@pytest.fixture
def settings(env):
    return Settings()


@pytest.fixture
def food_reply():
    return json.loads(json.dumps(FOOD_REPLY))


@pytest.fixture
def waste_reply():
    return json.loads(json.dumps(WASTE_REPLY))


def completion(content):
    """Shape of an OpenAI chat.completions response with one choice."""
    rsp = MagicMock()
    rsp.choices = [MagicMock()]
    rsp.choices[0].message.content = content
    return rsp


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create.return_value = completion(json.dumps(FOOD_REPLY))
    return client
