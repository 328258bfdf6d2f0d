"""Option lists offered when logging entries and editing the profile."""

from services.risk_scorer import MEAL_SIZES, TIMES_OF_DAY

SYMPTOMS = [
    "Stomach Pain",
    "Nausea",
    "Bloating",
    "Heartburn",
    "Acid Reflux",
    "Indigestion",
    "Cramping",
    "Gas",
    "Diarrhea",
    "Constipation",
    "Loss of Appetite",
    "Vomiting",
    "Belching",
    "Fullness",
]

TRIGGERS = [
    "Spicy Food",
    "Fatty Food",
    "Acidic Food",
    "Dairy",
    "Gluten",
    "Alcohol",
    "Caffeine",
    "Stress",
    "Lack of Sleep",
    "Medication",
    "Large Meal",
    "Eating Late",
    "Smoking",
    "NSAIDs",
]

REMEDIES = [
    "Antacid",
    "PPI",
    "H2 Blocker",
    "Probiotics",
    "Ginger Tea",
    "Chamomile Tea",
    "Rest",
    "Light Walk",
    "Heat Pad",
    "Deep Breathing",
    "Small Meals",
    "Bland Diet",
    "Hydration",
    "Meditation",
]

CONDITIONS = ["Gastritis", "GERD", "IBS", "Dyspepsia", "Food Sensitivities", "IBD"]
WEATHER = ["Sunny", "Cloudy", "Rainy", "Stormy", "Hot", "Cold", "Humid", "Dry"]
GENDERS = ["Male", "Female", "Non-binary", "Prefer not to say", "AMAB", "AFAB"]


def reference_lists() -> dict:
    return {
        "symptoms": SYMPTOMS,
        "triggers": TRIGGERS,
        "remedies": REMEDIES,
        "conditions": CONDITIONS,
        "weather": WEATHER,
        "genders": GENDERS,
        "meal_sizes": list(MEAL_SIZES),
        "times_of_day": list(TIMES_OF_DAY),
    }
