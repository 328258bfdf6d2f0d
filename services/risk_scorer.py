"""Food risk simulator ("what if I eat X").

Scores a hypothetical meal 0-10 from the user's own history: past entries
that mention the food (or whose triggers are named in the query) set the
baseline, then portion size and time of day nudge it.

Heuristic only; not medical advice.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from services.entries import as_labels, as_level, clamp, round_half_up

MEAL_SIZES = ("small", "medium", "large")
TIMES_OF_DAY = ("breakfast", "lunch", "dinner", "late-night")

NEUTRAL_BASELINE = 5
TRIGGER_PENALTY = 3

HIGH_RISK = 7
MODERATE_RISK = 4

HIGH_RISK_RECOMMENDATIONS = [
    "Consider avoiding this food today",
    "Have antacids ready if you decide to eat it",
    "Reduce the portion size significantly",
    "Avoid lying down for at least 3 hours after eating",
]
MODERATE_RISK_RECOMMENDATIONS = [
    "Eat slowly and chew thoroughly",
    "Consider a smaller portion than usual",
    "Pair it with bland, easy-to-digest foods",
    "Monitor your symptoms over the next few hours",
]
LOW_RISK_RECOMMENDATIONS = [
    "This food appears to be well tolerated",
    "Continue to eat mindfully",
    "Log how you feel afterwards to improve future predictions",
]

CONDITION_RECOMMENDATIONS = {
    "gerd": "GERD: stay upright after eating and avoid large evening meals",
    "ibs": "IBS: check whether this food is high-FODMAP before eating it",
    "gastritis": "Gastritis: avoid eating this on an empty stomach",
    "dyspepsia": "Dyspepsia: eat slowly and stop before you feel full",
}

_TIME_ALIASES = {
    "late night": "late-night",
    "late_night": "late-night",
    "latenight": "late-night",
}


def _normalize_choice(value: str, choices: tuple[str, ...], field: str) -> str:
    v = (value or "").strip().lower()
    v = _TIME_ALIASES.get(v, v)
    if v not in choices:
        raise ValueError(f"{field} must be one of {', '.join(choices)}; got {value!r}")
    return v


def notes_mention_food(entry: dict[str, Any], query: str) -> bool:
    """True when the entry's free text (notes or meal) contains the query."""
    q = query.lower()
    for field in ("notes", "meal"):
        text = entry.get(field)
        if isinstance(text, str) and q in text.lower():
            return True
    return False


def query_names_trigger(query: str, trigger: str) -> bool:
    """True when the query contains the trigger string (not the other way round)."""
    t = (trigger or "").strip().lower()
    return bool(t) and t in query.lower()


def find_relevant_entries(query: str, history: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    relevant = []
    for entry in history or []:
        if notes_mention_food(entry, query) or any(
            query_names_trigger(query, t) for t in as_labels(entry.get("triggers"))
        ):
            relevant.append(entry)
    return relevant


def top_symptoms(entries: list[dict[str, Any]], n: int = 3) -> list[str]:
    counts: Counter[str] = Counter()
    for e in entries:
        counts.update(as_labels(e.get("symptoms")))
    # most_common keeps first-encountered order for equal counts
    return [label for label, _ in counts.most_common(n)]


def risk_level_for(score: int) -> str:
    if score >= HIGH_RISK:
        return "High Risk"
    if score >= MODERATE_RISK:
        return "Moderate Risk"
    return "Low Risk"


def recommendations_for(score: int, conditions: Iterable[str] = ()) -> list[str]:
    if score >= HIGH_RISK:
        recs = list(HIGH_RISK_RECOMMENDATIONS)
    elif score >= MODERATE_RISK:
        recs = list(MODERATE_RISK_RECOMMENDATIONS)
    else:
        recs = list(LOW_RISK_RECOMMENDATIONS)

    for cond in as_labels(conditions):
        line = CONDITION_RECOMMENDATIONS.get(cond.lower())
        if line and line not in recs:
            recs.append(line)
    return recs


def score_food_risk(
    food_query: str,
    meal_size: str,
    time_of_day: str,
    history: Iterable[dict[str, Any]],
    known_triggers: Iterable[str] = (),
    conditions: Iterable[str] = (),
) -> dict[str, Any]:
    """Score how likely a meal is to cause symptoms.

    Args:
        food_query: non-empty food/meal description (callers validate).
        meal_size: small | medium | large
        time_of_day: breakfast | lunch | dinner | late-night
        history: past log entries (read only)
        known_triggers: the profile's trigger list
        conditions: the profile's condition tags (GERD, IBS, ...)

    Returns:
        dict with risk_score (0-10), raw_score (before clamping), risk_level,
        predictions, recommendations and relevant_entries.
    """
    query = food_query.strip()
    size = _normalize_choice(meal_size, MEAL_SIZES, "meal_size")
    when = _normalize_choice(time_of_day, TIMES_OF_DAY, "time_of_day")

    predictions: list[str] = []
    relevant = find_relevant_entries(query, history)

    if relevant:
        avg_pain = sum(as_level(e.get("pain_level")) for e in relevant) / len(relevant)
        avg_stress = sum(as_level(e.get("stress_level")) for e in relevant) / len(relevant)
        score = round_half_up((avg_pain + avg_stress) / 2)

        noun = "entry" if len(relevant) == 1 else "entries"
        predictions.append(f"Based on {len(relevant)} similar past {noun}")
        predictions.append(f"Average pain level: {avg_pain:.1f}/10")
        predictions.append(f"Average stress level: {avg_stress:.1f}/10")

        likely = top_symptoms(relevant)
        if likely:
            predictions.append(f"Likely symptoms: {', '.join(likely)}")
    else:
        score = NEUTRAL_BASELINE
        predictions.append("No historical data found for this food")
        predictions.append("Prediction is based on general patterns only")

        matched = [t for t in as_labels(known_triggers) if query_names_trigger(query, t)]
        if matched:
            score += TRIGGER_PENALTY
            predictions.append(f"Contains known triggers: {', '.join(matched)}")

    if size == "large":
        score += 1
        predictions.append("Large portions increase the chance of symptoms")
    elif size == "small":
        score -= 1
        predictions.append("A small portion lowers the chance of symptoms")

    if when == "late-night":
        score += 2
        predictions.append("Late-night eating raises the risk of reflux")
    elif when == "breakfast":
        score -= 1
        predictions.append("Breakfast is usually better tolerated")

    raw_score = score
    score = int(clamp(score))

    return {
        "food": query,
        "risk_score": score,
        "raw_score": raw_score,
        "risk_level": risk_level_for(score),
        "predictions": predictions,
        "recommendations": recommendations_for(score, conditions),
        "relevant_entries": len(relevant),
    }
