"""Main FastAPI application for GastroGuard.

Local, single-user symptom tracker:
 - Symptom/meal log + health profile (SQLite)
 - Dashboard summary + personalized recommendations
 - Analytics (frequencies, weekly stats, pain trend)
 - Food risk simulator ("what if I eat X") over the user's own history
 - Symptom severity projection
 - Weekly PDF report
"""

from fastapi import FastAPI, Request, Form
from fastapi.responses import JSONResponse, Response
from datetime import datetime
import logging
import sys
import uvicorn

from config import (
    DEBUG,
    ENABLE_FOOD_SIMULATOR,
    ENABLE_SEVERITY_SIMULATOR,
    ENABLE_WEEKLY_REPORT,
    HOST,
    LOG_LEVEL,
    PORT,
)
from database import (
    init_database,
    get_user_profile,
    save_user_profile,
    get_symptom_logs,
    get_symptom_log,
    save_symptom_log,
    delete_symptom_log,
)
from services.analytics import (
    daily_summary,
    recent_entries,
    symptom_frequency,
    trigger_frequency,
    remedy_frequency,
    weekly_stats,
    pain_trend,
    pain_points,
)
from services.catalog import reference_lists
from services.entries import as_level
from services.recommendations import personalized_recommendations, pain_description
from services.reporting import build_weekly_pdf
from services.risk_scorer import score_food_risk
from services.severity_projector import project_severity

logger = logging.getLogger(__name__)


def configure_logging(log_level: str) -> None:
    """Configure application logging to stdout."""
    level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


app = FastAPI(title="GastroGuard", version="1.0.0", debug=DEBUG)


def _bad_request(error: str, **extra):
    return JSONResponse({"ok": False, "error": error, **extra}, status_code=400)


def _not_found(error: str = "not_found"):
    return JSONResponse({"ok": False, "error": error}, status_code=404)


ENTRY_TEXT_FIELDS = ("date", "time", "notes", "meal", "meal_size", "weather_condition", "ingestion_time")
PROFILE_TEXT_FIELDS = ("name", "gender")


def _non_text_fields(data: dict, fields) -> list[str]:
    return [f for f in fields if data.get(f) is not None and not isinstance(data.get(f), str)]


async def _json_body(request: Request):
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


@app.on_event("startup")
async def startup_event():
    init_database()
    logger.info("Database initialized")


@app.get("/api/dashboard")
async def dashboard(pain: int = 0, stress: int = 0):
    """Today's summary, recent entries and recommendations for how the user feels now."""
    profile = get_user_profile() or {}
    entries = get_symptom_logs()
    today = datetime.now().strftime("%Y-%m-%d")
    return {
        "today": daily_summary(entries, today),
        "recent": recent_entries(entries, limit=5),
        "current": {
            "pain_level": int(as_level(pain)),
            "stress_level": int(as_level(stress)),
            "pain_description": pain_description(int(as_level(pain))),
        },
        "recommendations": personalized_recommendations(pain, stress, profile),
    }


@app.get("/api/entries")
async def list_entries(date: str | None = None, limit: int | None = None):
    return {"entries": get_symptom_logs(date=date, limit=limit)}


@app.post("/api/entries")
async def create_entry(request: Request):
    """Log a symptom entry (JSON body)."""
    data = await _json_body(request)
    if data is None:
        return _bad_request("invalid_json")
    bad = _non_text_fields(data, ENTRY_TEXT_FIELDS)
    if bad:
        return _bad_request("invalid_field", fields=bad)
    entry_id = save_symptom_log(data)
    return JSONResponse({"ok": True, "entry": get_symptom_log(entry_id)}, status_code=201)


@app.get("/api/entries/{entry_id}")
async def read_entry(entry_id: int):
    entry = get_symptom_log(entry_id)
    if not entry:
        return _not_found()
    return {"entry": entry}


@app.delete("/api/entries/{entry_id}")
async def remove_entry(entry_id: int):
    if not delete_symptom_log(entry_id):
        return _not_found()
    return {"ok": True}


@app.get("/api/profile")
async def read_profile():
    return {"profile": get_user_profile()}


@app.put("/api/profile")
async def update_profile(request: Request):
    data = await _json_body(request)
    if data is None:
        return _bad_request("invalid_json")
    bad = _non_text_fields(data, PROFILE_TEXT_FIELDS)
    if bad:
        return _bad_request("invalid_field", fields=bad)
    save_user_profile(data)
    return {"ok": True, "profile": get_user_profile()}


@app.get("/api/analytics")
async def analytics():
    entries = get_symptom_logs()
    return {
        "weekly_stats": weekly_stats(entries),
        "symptoms": symptom_frequency(entries),
        "triggers": trigger_frequency(entries),
        "remedies": remedy_frequency(entries),
        "trend": pain_trend(entries),
        "pain_points": pain_points(entries),
    }


@app.post("/api/simulate/food")
async def simulate_food(
    food: str = Form(""),
    meal_size: str = Form("medium"),
    time_of_day: str = Form("lunch"),
):
    """Predict how a meal is likely to go, based on past entries."""
    if not ENABLE_FOOD_SIMULATOR:
        return _not_found("disabled")
    food = (food or "").strip()
    if not food:
        return _bad_request("missing_food")

    profile = get_user_profile() or {}
    try:
        assessment = score_food_risk(
            food,
            meal_size,
            time_of_day,
            get_symptom_logs(),
            profile.get("triggers") or [],
            profile.get("conditions") or [],
        )
    except ValueError as e:
        logger.warning("Rejected food simulation: %s", e)
        return _bad_request("invalid_input", detail=str(e))

    logger.info("Food simulation for %r: %s", food, assessment["risk_level"])
    return {"ok": True, "assessment": assessment}


@app.post("/api/simulate/severity")
async def simulate_severity(
    initial_severity: float = Form(5.0),
    stress_level: float = Form(5.0),
    food_irritation: float = Form(5.0),
    horizon_hours: float = Form(24.0),
):
    """Project symptom severity over the next hours."""
    if not ENABLE_SEVERITY_SIMULATOR:
        return _not_found("disabled")
    try:
        result = project_severity(initial_severity, stress_level, food_irritation, horizon_hours)
    except ValueError as e:
        logger.warning("Rejected severity projection: %s", e)
        return _bad_request("invalid_input", detail=str(e))

    logger.info("Severity projection over %sh ends at %.2f", horizon_hours, result["final_severity"])
    return {"ok": True, "simulation": result}


@app.get("/api/reports/weekly.pdf")
async def weekly_report_pdf():
    """Download weekly PDF report."""
    if not ENABLE_WEEKLY_REPORT:
        return _not_found("disabled")
    pdf_bytes = build_weekly_pdf(get_user_profile() or {}, get_symptom_logs())
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": "inline; filename=gastroguard-weekly-report.pdf"},
    )


@app.get("/api/reference")
async def reference():
    return reference_lists()


# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "GastroGuard"}


if __name__ == "__main__":
    configure_logging(LOG_LEVEL)
    uvicorn.run("main:app", host=HOST, port=PORT, reload=DEBUG)
