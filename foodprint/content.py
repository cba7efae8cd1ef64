# foodprint/content.py — static copy for the Global Plan / Why It Works tabs and the scan tab examples
from typing import Dict, List

TABS = [
    ("scan", "Food Scan"),
    ("global", "Global Plan"),
    ("why", "Why It Works"),
]

QUICK_EXAMPLES: List[Dict] = [
    {"icon": "🥩", "name": "Beef Steak", "kg_co2": 14.2, "level": "High"},
    {"icon": "🍔", "name": "Burger", "kg_co2": 6.8, "level": "High"},
    {"icon": "🍕", "name": "Pizza", "kg_co2": 1.8, "level": "Medium"},
    {"icon": "🥗", "name": "Salad", "kg_co2": 0.3, "level": "Low"},
    {"icon": "☕", "name": "Oat Latte", "kg_co2": 0.4, "level": "Low"},
]

# the 5–60–15–20 model; shares must add up to 100
DIET_BREAKDOWN: List[Dict] = [
    {"label": "Meat Eaters", "percentage": 5},
    {"label": "Flexitarian", "percentage": 60},
    {"label": "Vegetarian", "percentage": 15},
    {"label": "Vegan", "percentage": 20},
]

IMPACT_DATA: List[Dict] = [
    {
        "icon": "🌡️",
        "title": "Global Temperature Rise",
        "current": {"value": "+3.0°C to +3.5°C", "label": "Current Path"},
        "improved": {"value": "+2.0°C to +2.2°C", "label": "With Diversified Diet"},
        "reduction": "~1.0°C reduction",
    },
    {
        "icon": "🏭",
        "title": "CO₂ Emissions (Food Sector)",
        "current": {"value": "22 billion", "label": "tons/year"},
        "improved": {"value": "11 billion", "label": "tons/year"},
        "reduction": "50% reduction",
    },
    {
        "icon": "🌳",
        "title": "Land Use",
        "current": {"value": "Deforestation", "label": "Accelerating"},
        "improved": {"value": "Regeneration", "label": "Forest Recovery"},
        "reduction": "Net positive by 2060",
    },
    {
        "icon": "💧",
        "title": "Water Consumption",
        "current": {"value": "High Stress", "label": "Aquifer Depletion"},
        "improved": {"value": "Sustainable", "label": "Balanced Usage"},
        "reduction": "40% reduction",
    },
    {
        "icon": "🐟",
        "title": "Ecosystem Health",
        "current": {"value": "Dead Zones", "label": "Runoff & Pollution"},
        "improved": {"value": "Recovery", "label": "Ecosystem Healing"},
        "reduction": "Marine life rebounds",
    },
]

BOTTOM_LINE = (
    "Small individual changes in food choices scale into **massive global impact**. "
    "Food is one of the fastest climate levers we have, and it's in our hands every day."
)

WHY_SECTIONS: List[Dict] = [
    {
        "icon": "👁️",
        "title": "Visibility Creates Change",
        "points": [
            "People vastly underestimate food emissions; most have no idea their steak equals a 60-mile drive",
            "Visual feedback (photos → carbon scores) makes the abstract impact tangible and real",
            "When you see the numbers, behavior naturally shifts toward awareness",
        ],
        "highlight": "Seeing is believing",
    },
    {
        "icon": "📅",
        "title": "Food Is a Daily Decision",
        "points": [
            "Unlike energy or transport choices, food decisions happen 3+ times per day",
            "Small reductions compound quickly: 1 less meat meal per week = 200 kg CO₂/year saved",
            "No major lifestyle change required, just informed choices at each meal",
        ],
        "highlight": "3 opportunities every day",
    },
    {
        "icon": "👥",
        "title": "Collective Action Scales",
        "points": [
            "One person switching diets has minimal global impact, and that's true",
            "But 1 million people making small shifts creates measurable change",
            "8 billion people slightly adjusting = planetary transformation",
        ],
        "highlight": "Together, we're unstoppable",
    },
    {
        "icon": "⚖️",
        "title": "The 5–60–15–20 Model Works",
        "points": [
            "Not everyone needs to become vegan; that's unrealistic and unnecessary",
            "The majority (60%) simply reduces meat consumption slightly",
            "System-level change without forcing extremes on anyone",
        ],
        "highlight": "Realistic, not radical",
    },
]

KEY_FACTS: List[Dict] = [
    {"stat": "14.5%", "label": "of global emissions come from livestock"},
    {"stat": "70%", "label": "of farmland is used for animal agriculture"},
    {"stat": "100x", "label": "less land needed for plant vs beef protein"},
    {"stat": "2,500L", "label": "water saved per skipped beef burger"},
]

CLOSING = (
    "Every scan, every informed choice, every slightly-smaller carbon footprint adds up. "
    "You're not just eating; you're voting for the future with every bite."
)
