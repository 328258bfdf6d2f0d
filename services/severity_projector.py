"""Symptom severity projection.

Forward-Euler integration of a first-order decay/forcing model:

    dS/dt = -k*S + stress_term + food_term + circadian(t)

Illustrative only; not a validated clinical model.
"""

from __future__ import annotations

import math
from typing import Any

from services.entries import clamp

HEALING_RATE = 0.05
STRESS_WEIGHT = 0.03
FOOD_WEIGHT = 0.02
CIRCADIAN_AMPLITUDE = 0.01
CIRCADIAN_PERIOD_H = 24.0

DT = 0.1
# One retained sample per simulated hour; keep coupled to DT.
SAMPLE_STRIDE = int(round(1.0 / DT))
# Longest projection accepted; keeps the step loop short enough to run inline.
MAX_HORIZON_HOURS = 24 * 365

OUTCOME_MESSAGES = (
    (2.0, "Positive outlook: symptoms are projected to settle to a mild level."),
    (4.0, "Good trajectory: symptoms should keep easing if you stay on track."),
    (6.0, "Moderate improvement expected; keep managing stress and irritating foods."),
)
CONSULT_MESSAGE = "Symptoms may persist; consider consulting a healthcare provider."


def _finite(name: str, value: Any) -> float:
    try:
        n = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number; got {value!r}") from None
    if not math.isfinite(n):
        raise ValueError(f"{name} must be finite; got {value!r}")
    return n


def severity_rate(severity: float, t: float, stress_level: float, food_irritation: float) -> float:
    stress_term = (stress_level / 10.0) * STRESS_WEIGHT
    food_term = (food_irritation / 10.0) * FOOD_WEIGHT
    circadian = CIRCADIAN_AMPLITUDE * math.sin(2 * math.pi * t / CIRCADIAN_PERIOD_H)
    return -HEALING_RATE * severity + stress_term + food_term + circadian


def outcome_message(final_severity: float) -> str:
    for upper, message in OUTCOME_MESSAGES:
        if final_severity < upper:
            return message
    return CONSULT_MESSAGE


def project_severity(
    initial_severity: float,
    stress_level: float,
    food_irritation: float,
    horizon_hours: float,
) -> dict[str, Any]:
    """Project severity over `horizon_hours`.

    Returns hourly samples (starting at t=0), the last sample as
    final_severity, and an outcome message.

    Raises ValueError when the horizon is not a positive finite number
    or exceeds MAX_HORIZON_HOURS.
    """
    horizon = _finite("horizon_hours", horizon_hours)
    if horizon <= 0:
        raise ValueError(f"horizon_hours must be a positive number; got {horizon_hours!r}")
    if horizon > MAX_HORIZON_HOURS:
        raise ValueError(f"horizon_hours must be at most {MAX_HORIZON_HOURS}; got {horizon_hours!r}")

    initial = clamp(_finite("initial_severity", initial_severity))
    stress = clamp(_finite("stress_level", stress_level))
    food = clamp(_finite("food_irritation", food_irritation))
    s = initial

    steps = int(round(horizon / DT))
    samples: list[dict[str, float]] = []
    for i in range(steps + 1):
        t = i * DT
        if i % SAMPLE_STRIDE == 0:
            samples.append({"time": round(t, 4), "severity": s})
        if i == steps:
            break
        s = clamp(s + severity_rate(s, t, stress, food) * DT)

    final = samples[-1]["severity"]
    return {
        "samples": samples,
        "final_severity": final,
        "message": outcome_message(final),
        "parameters": {
            "initial_severity": initial,
            "stress_level": stress,
            "food_irritation": food,
            "horizon_hours": horizon,
        },
    }
