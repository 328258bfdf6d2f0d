import sqlite3

import database


def test_save_and_read_entry(db_path, entry):
    entry_id = database.save_symptom_log(entry(
        pain_level=15,
        stress_level="n/a",
        symptoms=["Nausea", "Nausea", "Gas"],
        triggers="Dairy, Caffeine",
        notes="ice cream",
        meal_size="Large",
        time_since_eating="2.5",
    ))

    stored = database.get_symptom_log(entry_id)

    assert stored["pain_level"] == 10
    assert stored["stress_level"] == 0
    assert stored["sleep_quality"] == 5
    assert stored["symptoms"] == ["Nausea", "Gas"]
    assert stored["triggers"] == ["Dairy", "Caffeine"]
    assert stored["remedies"] == []
    assert stored["notes"] == "ice cream"
    assert stored["meal_size"] == "large"
    assert stored["time_since_eating"] == 2.5


def test_date_and_time_default_to_now(db_path):
    entry_id = database.save_symptom_log({"pain_level": 3})
    stored = database.get_symptom_log(entry_id)
    assert len(stored["date"]) == 10
    assert len(stored["time"]) == 8


def test_logs_filter_and_order(db_path, entry):
    database.save_symptom_log(entry(date="2026-10-17", time="09:00:00"))
    database.save_symptom_log(entry(date="2026-10-18", time="08:00:00"))
    database.save_symptom_log(entry(date="2026-10-18", time="20:00:00"))

    all_logs = database.get_symptom_logs()
    assert [(e["date"], e["time"]) for e in all_logs] == [
        ("2026-10-18", "20:00:00"),
        ("2026-10-18", "08:00:00"),
        ("2026-10-17", "09:00:00"),
    ]
    assert len(database.get_symptom_logs(date="2026-10-18")) == 2
    assert len(database.get_symptom_logs(limit=1)) == 1
    assert database.get_symptom_logs(limit=0) == []


def test_non_text_values_are_stored_as_text(db_path, entry):
    entry_id = database.save_symptom_log(entry(notes=["a"], meal=42, weather_condition=None))

    stored = database.get_symptom_log(entry_id)
    assert stored["notes"] == "['a']"
    assert stored["meal"] == "42"
    assert stored["weather_condition"] == ""

    database.save_user_profile({"name": 7, "gender": ["x"], "height": 170})
    profile = database.get_user_profile()
    assert profile["name"] == "7"
    assert profile["height"] == "170"


def test_corrupt_list_column_reads_as_empty(db_path, entry):
    entry_id = database.save_symptom_log(entry(symptoms=["Gas"]))
    conn = sqlite3.connect(db_path)
    conn.execute("UPDATE symptom_logs SET symptoms = ? WHERE id = ?", ("{not json", entry_id))
    conn.commit()
    conn.close()

    assert database.get_symptom_log(entry_id)["symptoms"] == []


def test_delete_entry(db_path, entry):
    entry_id = database.save_symptom_log(entry())
    assert database.delete_symptom_log(entry_id) is True
    assert database.get_symptom_log(entry_id) is None
    assert database.delete_symptom_log(entry_id) is False


def test_profile_latest_row_wins(db_path):
    assert database.get_user_profile() is None

    database.save_user_profile({"name": "Sam", "conditions": ["GERD"]})
    database.save_user_profile({"name": " Sam ", "age": "41", "conditions": "GERD, IBS", "triggers": ["Spicy Food"]})

    profile = database.get_user_profile()
    assert profile["name"] == "Sam"
    assert profile["age"] == 41
    assert profile["conditions"] == ["GERD", "IBS"]
    assert profile["triggers"] == ["Spicy Food"]
    assert profile["allergies"] == []


def test_init_database_is_idempotent(db_path):
    database.init_database()
    database.init_database()
