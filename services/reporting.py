"""PDF exports (weekly symptom report).

Uses reportlab (pure python). Generates bytes.
"""

from __future__ import annotations

from datetime import date as date_cls, datetime, timedelta
from io import BytesIO
from typing import Any

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from services.analytics import symptom_frequency, trigger_frequency, weekly_stats
from services.entries import as_labels


def _date(s: str) -> date_cls | None:
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return None


def build_weekly_pdf(profile: dict[str, Any], entries: list[dict[str, Any]], *, today: date_cls | None = None) -> bytes:
    """Create a 7-day PDF summary from stored entries."""

    # Filter last 7 days (including today)
    today = today or datetime.now().date()
    start = today - timedelta(days=6)
    week = [e for e in entries if _date(e.get("date")) and start <= _date(e["date"]) <= today]

    by_day: dict[str, list[dict[str, Any]]] = {}
    for e in week:
        by_day.setdefault(e["date"], []).append(e)
    days_sorted = sorted(by_day.keys())

    stats = weekly_stats(week)

    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    w, h = letter

    y = h - 0.8 * inch
    c.setFont("Helvetica-Bold", 16)
    c.drawString(0.8 * inch, y, "GastroGuard - Weekly Symptom Report")

    y -= 0.35 * inch
    c.setFont("Helvetica", 10)
    c.drawString(0.8 * inch, y, f"Period: {start.isoformat()} to {today.isoformat()}")
    y -= 0.18 * inch
    conditions = ", ".join(as_labels(profile.get("conditions"))) or "-"
    c.drawString(0.8 * inch, y, f"Profile: {profile.get('name') or '-'}, {profile.get('age') or '-'}y, conditions={conditions}")

    y -= 0.35 * inch
    c.setFont("Helvetica-Bold", 12)
    c.drawString(0.8 * inch, y, "Weekly Summary")
    y -= 0.22 * inch
    c.setFont("Helvetica", 10)
    c.drawString(0.8 * inch, y, f"Entries logged: {stats['entries_logged']} over {stats['days_logged']} day(s)")
    y -= 0.16 * inch
    c.drawString(0.8 * inch, y, f"Average pain: {stats['avg_pain']}/10   Average stress: {stats['avg_stress']}/10")

    y -= 0.32 * inch
    c.setFont("Helvetica-Bold", 12)
    c.drawString(0.8 * inch, y, "Daily breakdown")
    y -= 0.18 * inch
    c.setFont("Helvetica", 9)

    c.drawString(0.8 * inch, y, "Date")
    c.drawString(2.0 * inch, y, "Entries")
    c.drawString(3.0 * inch, y, "Avg pain")
    c.drawString(4.0 * inch, y, "Avg stress")
    c.drawString(5.1 * inch, y, "Top symptom")

    y -= 0.12 * inch
    c.line(0.8 * inch, y, 7.6 * inch, y)
    y -= 0.15 * inch

    for d in days_sorted:
        day_stats = weekly_stats(by_day[d])
        top = symptom_frequency(by_day[d])
        c.drawString(0.8 * inch, y, d)
        c.drawString(2.0 * inch, y, str(day_stats["entries_logged"]))
        c.drawString(3.0 * inch, y, f"{day_stats['avg_pain']}")
        c.drawString(4.0 * inch, y, f"{day_stats['avg_stress']}")
        c.drawString(5.1 * inch, y, top[0][0] if top else "-")
        y -= 0.18 * inch
        if y < 1.2 * inch:
            c.showPage()
            y = h - 0.8 * inch
            c.setFont("Helvetica", 9)

    if y < 2.0 * inch:
        c.showPage()
        y = h - 0.8 * inch

    y -= 0.15 * inch
    c.setFont("Helvetica-Bold", 12)
    c.drawString(0.8 * inch, y, "Frequent triggers")
    y -= 0.2 * inch
    c.setFont("Helvetica", 10)
    triggers = trigger_frequency(week)[:5]
    if triggers:
        for label, count in triggers:
            c.drawString(0.8 * inch, y, f"• {label}: {count}")
            y -= 0.16 * inch
    else:
        c.drawString(0.8 * inch, y, "• No triggers logged this week.")
        y -= 0.16 * inch

    y -= 0.15 * inch
    c.setFont("Helvetica-Bold", 12)
    c.drawString(0.8 * inch, y, "Notes")
    y -= 0.2 * inch
    c.setFont("Helvetica", 10)
    c.drawString(0.8 * inch, y, "• Levels are self-reported on a 0-10 scale.")
    y -= 0.16 * inch
    c.drawString(0.8 * inch, y, "• This report is for personal tracking, not a diagnosis. Share it with your clinician.")

    c.showPage()
    c.save()
    return buf.getvalue()
