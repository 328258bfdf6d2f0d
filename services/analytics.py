"""Symptom log analytics: daily summary, frequencies, weekly stats and trends."""

from collections import Counter

from services.entries import as_labels, as_level, as_number, round_half_up


def _newest_first(entries):
    return sorted(
        entries,
        key=lambda e: (str(e.get("date") or ""), str(e.get("time") or ""), as_number(e.get("id"))),
        reverse=True,
    )


def daily_summary(entries, date):
    """
    Summarize one day of entries.

    Args:
        entries: List of log entry dictionaries
        date: Day to summarize, YYYY-MM-DD

    Returns:
        Dictionary with entry count, rounded average pain/stress and remedies used
    """
    day = [e for e in entries if e.get("date") == date]
    if not day:
        return {"date": date, "entries": 0, "avg_pain": 0, "avg_stress": 0, "remedies_used": 0}

    return {
        "date": date,
        "entries": len(day),
        "avg_pain": round_half_up(sum(as_level(e.get("pain_level")) for e in day) / len(day)),
        "avg_stress": round_half_up(sum(as_level(e.get("stress_level")) for e in day) / len(day)),
        "remedies_used": sum(len(as_labels(e.get("remedies"))) for e in day),
    }


def recent_entries(entries, limit=5):
    """Latest entries first."""
    return _newest_first(entries)[:limit]


def _frequency(entries, field):
    counts = Counter()
    for e in entries:
        counts.update(as_labels(e.get(field)))
    return counts.most_common()


def symptom_frequency(entries):
    return _frequency(entries, "symptoms")


def trigger_frequency(entries):
    return _frequency(entries, "triggers")


def remedy_frequency(entries):
    return _frequency(entries, "remedies")


def weekly_stats(entries):
    """
    Calculate summary statistics over a set of entries.

    Args:
        entries: List of log entry dictionaries

    Returns:
        Dictionary with weekly stats
    """
    if not entries:
        return {
            "entries_logged": 0,
            "days_logged": 0,
            "avg_pain": 0.0,
            "avg_stress": 0.0,
            "max_pain": 0.0,
            "avg_sleep_quality": 0.0,
            "most_common_symptom": None,
            "most_common_trigger": None,
        }

    n = len(entries)
    symptoms = symptom_frequency(entries)
    triggers = trigger_frequency(entries)
    return {
        "entries_logged": n,
        "days_logged": len(set(e.get("date") for e in entries if e.get("date"))),
        "avg_pain": round(sum(as_level(e.get("pain_level")) for e in entries) / n, 1),
        "avg_stress": round(sum(as_level(e.get("stress_level")) for e in entries) / n, 1),
        "max_pain": max(as_level(e.get("pain_level")) for e in entries),
        "avg_sleep_quality": round(sum(as_level(e.get("sleep_quality", 5)) for e in entries) / n, 1),
        "most_common_symptom": symptoms[0][0] if symptoms else None,
        "most_common_trigger": triggers[0][0] if triggers else None,
    }


def pain_trend(entries):
    """
    Compare the older half of the log with the recent half.

    Args:
        entries: List of log entry dictionaries

    Returns:
        Dictionary with a list of trend insights
    """
    if len(entries) < 2:
        return {"trends": []}

    ordered = list(reversed(_newest_first(entries)))
    mid = len(ordered) // 2
    older, recent = ordered[:mid], ordered[mid:]

    trends = []
    for metric, field in (("Pain Level", "pain_level"), ("Stress Level", "stress_level")):
        old_avg = sum(as_level(e.get(field)) for e in older) / len(older)
        new_avg = sum(as_level(e.get(field)) for e in recent) / len(recent)
        change = ((new_avg - old_avg) / old_avg) * 100 if old_avg > 0 else 0
        if abs(change) > 10:
            direction = "increasing" if change > 0 else "decreasing"
            trends.append({
                "metric": metric,
                "direction": direction,
                "change": abs(round(change)),
                "message": f"Your {metric.lower()} is {direction} by {abs(round(change))}%",
            })

    return {"trends": trends}


def pain_points(entries):
    """(hours since eating, pain) pairs for entries that recorded timing."""
    points = []
    for e in entries:
        hours = e.get("time_since_eating")
        if hours is None or hours == "":
            continue
        h = as_number(hours, default=-1.0)
        if h < 0:
            continue
        points.append({"time_since_eating": h, "pain_level": as_level(e.get("pain_level"))})
    return points
