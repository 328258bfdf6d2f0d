"""Personalized day-to-day recommendations from current pain/stress and the profile."""

from __future__ import annotations

from typing import Any

from services.entries import as_labels, as_level

PAIN_DESCRIPTIONS = [
    "No pain",
    "Very mild discomfort",
    "Mild pain, barely noticeable",
    "Moderate pain, noticeable but manageable",
    "Moderate pain, interferes with some activities",
    "Moderately severe pain, interferes with most activities",
    "Severe pain, difficult to ignore",
    "Very severe pain, dominates your senses",
    "Intense pain, unable to do most activities",
    "Excruciating pain, unable to function",
    "Unbearable pain, seek immediate medical attention",
]

DEFAULT_RECOMMENDATIONS = [
    "Stay hydrated throughout the day",
    "Eat smaller, more frequent meals",
    "Keep a consistent sleep schedule",
]


def pain_description(level: Any) -> str:
    if isinstance(level, bool) or not isinstance(level, int):
        return "Unknown"
    if 0 <= level < len(PAIN_DESCRIPTIONS):
        return PAIN_DESCRIPTIONS[level]
    return "Unknown"


def personalized_recommendations(current_pain: Any, current_stress: Any, profile: dict[str, Any] | None) -> list[str]:
    """
    Build recommendations for how the user feels right now.

    Args:
        current_pain: pain level 0-10
        current_stress: stress level 0-10
        profile: user profile dict (may be empty)

    Returns:
        List of recommendation strings
    """
    profile = profile or {}
    if not (profile.get("name") or "").strip():
        return ["Please complete your profile first to get personalized recommendations."]

    pain = as_level(current_pain)
    stress = as_level(current_stress)
    recs: list[str] = []

    if pain >= 7:
        recs.append("Consider taking your prescribed PPI or antacid")
        recs.append("Try gentle breathing exercises to manage severe pain")
        recs.append("Avoid solid foods until pain subsides")
    elif pain >= 4:
        recs.append("Consider a light, bland meal if you haven't eaten")
        recs.append("Try chamomile or ginger tea for relief")

    if stress >= 6:
        recs.append("Practice stress reduction techniques like meditation")
        recs.append("Consider a short walk or gentle exercise")

    conditions = {c.lower() for c in as_labels(profile.get("conditions"))}
    if "gerd" in conditions:
        recs.append("Avoid lying down for 2-3 hours after eating")
        recs.append("Keep your head elevated while sleeping")
    if "ibs" in conditions:
        recs.append("Consider following a low-FODMAP diet")
        recs.append("Track fiber intake and adjust accordingly")

    allergies = as_labels(profile.get("allergies"))
    if allergies:
        recs.append(f"Remember your allergies: {', '.join(allergies)}")

    return recs or list(DEFAULT_RECOMMENDATIONS)
