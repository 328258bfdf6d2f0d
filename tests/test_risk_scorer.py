"""Tests for the food risk simulator."""

import copy

import pytest

from services.risk_scorer import (
    HIGH_RISK_RECOMMENDATIONS,
    LOW_RISK_RECOMMENDATIONS,
    MEAL_SIZES,
    MODERATE_RISK_RECOMMENDATIONS,
    TIMES_OF_DAY,
    notes_mention_food,
    query_names_trigger,
    risk_level_for,
    score_food_risk,
)


def test_empty_history_uses_neutral_baseline():
    result = score_food_risk("anything new", "medium", "lunch", [], [])

    assert result["risk_score"] == 5
    assert result["risk_level"] == "Moderate Risk"
    assert result["predictions"] == [
        "No historical data found for this food",
        "Prediction is based on general patterns only",
    ]
    assert result["recommendations"] == MODERATE_RISK_RECOMMENDATIONS
    assert result["relevant_entries"] == 0


def test_meal_size_moves_score_in_expected_direction():
    medium = score_food_risk("toast", "medium", "lunch", [], [])["risk_score"]
    large = score_food_risk("toast", "large", "lunch", [], [])
    small = score_food_risk("toast", "small", "lunch", [], [])

    assert large["risk_score"] == medium + 1
    assert small["risk_score"] == medium - 1
    assert "Large portions increase the chance of symptoms" in large["predictions"]
    assert "A small portion lowers the chance of symptoms" in small["predictions"]


def test_time_of_day_adjustments():
    lunch = score_food_risk("toast", "medium", "lunch", [], [])
    dinner = score_food_risk("toast", "medium", "dinner", [], [])
    late = score_food_risk("toast", "medium", "late-night", [], [])
    breakfast = score_food_risk("toast", "medium", "breakfast", [], [])

    assert lunch["risk_score"] == dinner["risk_score"] == 5
    assert late["risk_score"] == 7
    assert late["risk_level"] == "High Risk"
    assert breakfast["risk_score"] == 4
    assert "Late-night eating raises the risk of reflux" in late["predictions"]
    assert "Breakfast is usually better tolerated" in breakfast["predictions"]


def test_late_night_aliases_are_accepted():
    assert score_food_risk("toast", "medium", "Late Night", [], [])["risk_score"] == 7
    assert score_food_risk("toast", "MEDIUM", "late_night", [], [])["risk_score"] == 7


def test_unknown_choices_raise():
    with pytest.raises(ValueError):
        score_food_risk("toast", "huge", "lunch", [], [])
    with pytest.raises(ValueError):
        score_food_risk("toast", "medium", "brunch", [], [])


def test_known_trigger_in_query_raises_risk():
    with_trigger = score_food_risk("spicy curry", "medium", "lunch", [], ["spicy"])
    without = score_food_risk("spicy curry", "medium", "lunch", [], [])

    assert with_trigger["raw_score"] > without["raw_score"]
    assert with_trigger["raw_score"] == 8
    assert "Contains known triggers: spicy" in with_trigger["predictions"]
    assert not any(p.startswith("Contains known triggers") for p in without["predictions"])


def test_trigger_match_is_case_insensitive():
    result = score_food_risk("Spicy Curry", "medium", "lunch", [], ["SPICY", "dairy"])
    assert "Contains known triggers: SPICY" in result["predictions"]


def test_historical_average_sets_initial_score(entry):
    history = [
        entry(notes="Pasta for dinner", pain_level=4, stress_level=2),
        entry(meal="pasta again", pain_level=8, stress_level=6),
        entry(notes="rice and beans", pain_level=10, stress_level=10),
    ]

    result = score_food_risk("pasta", "medium", "lunch", history, [])

    assert result["raw_score"] == 5
    assert result["relevant_entries"] == 2
    assert result["predictions"][:3] == [
        "Based on 2 similar past entries",
        "Average pain level: 6.0/10",
        "Average stress level: 4.0/10",
    ]


def test_history_ignores_known_triggers_branch(entry):
    history = [entry(notes="spicy curry night", pain_level=2, stress_level=2, symptoms=["Heartburn"])]

    result = score_food_risk("spicy curry", "medium", "lunch", history, ["spicy"])

    assert result["raw_score"] == 2
    assert not any(p.startswith("Contains known triggers") for p in result["predictions"])
    assert "Likely symptoms: Heartburn" in result["predictions"]


def test_half_values_round_up(entry):
    history = [entry(notes="coffee", pain_level=4, stress_level=5)]
    assert score_food_risk("coffee", "medium", "lunch", history, [])["raw_score"] == 5


def test_top_symptoms_ties_keep_first_seen_order(entry):
    history = [
        entry(notes="pizza", symptoms=["Bloating", "Gas"]),
        entry(notes="pizza", symptoms=["Nausea", "Gas", "Gas"]),
        entry(notes="pizza", symptoms=["Heartburn"]),
    ]

    result = score_food_risk("pizza", "medium", "lunch", history, [])

    assert "Likely symptoms: Gas, Bloating, Nausea" in result["predictions"]


def test_no_symptoms_means_no_likely_symptoms_line(entry):
    history = [entry(notes="pizza", pain_level=3, stress_level=3)]
    result = score_food_risk("pizza", "medium", "lunch", history, [])
    assert not any(p.startswith("Likely symptoms") for p in result["predictions"])
    assert "Based on 1 similar past entry" in result["predictions"]


def test_entry_trigger_contained_in_query_is_relevant(entry):
    history = [entry(triggers=["Spicy Food"], pain_level=9, stress_level=7)]

    hit = score_food_risk("spicy food curry", "medium", "lunch", history, [])
    miss = score_food_risk("spicy", "medium", "lunch", history, [])

    assert hit["relevant_entries"] == 1
    assert hit["raw_score"] == 8
    assert miss["relevant_entries"] == 0


def test_query_names_trigger_direction():
    assert query_names_trigger("spicy food curry", "Spicy Food")
    assert not query_names_trigger("spicy", "Spicy Food")
    assert not query_names_trigger("anything", "")
    assert not query_names_trigger("anything", "   ")


def test_notes_mention_food_direction():
    assert notes_mention_food({"notes": "Had a big Pizza"}, "pizza")
    assert notes_mention_food({"meal": "PIZZA slice"}, "pizza")
    assert not notes_mention_food({"notes": "pizza"}, "pizza with olives")
    assert not notes_mention_food({"notes": None}, "pizza")
    assert not notes_mention_food({}, "pizza")


def test_malformed_levels_count_as_zero(entry):
    history = [
        entry(notes="bread", pain_level="abc", stress_level=None),
        entry(notes="bread", pain_level=8, stress_level=float("nan")),
    ]

    result = score_food_risk("bread", "medium", "lunch", history, [])

    assert "Average pain level: 4.0/10" in result["predictions"]
    assert "Average stress level: 0.0/10" in result["predictions"]
    assert result["raw_score"] == 2


def test_out_of_range_levels_are_clamped(entry):
    history = [entry(notes="chili", pain_level=50, stress_level=-3)]
    result = score_food_risk("chili", "medium", "lunch", history, [])
    assert "Average pain level: 10.0/10" in result["predictions"]
    assert "Average stress level: 0.0/10" in result["predictions"]


def test_score_is_clamped_high(entry):
    history = [entry(notes="fried chicken", pain_level=10, stress_level=10)]

    result = score_food_risk("fried chicken", "large", "late-night", history, [])

    assert result["raw_score"] == 13
    assert result["risk_score"] == 10
    assert result["recommendations"] == HIGH_RISK_RECOMMENDATIONS


def test_score_is_clamped_low(entry):
    history = [entry(notes="oatmeal", pain_level=0, stress_level=0)]

    result = score_food_risk("oatmeal", "small", "breakfast", history, [])

    assert result["raw_score"] == -2
    assert result["risk_score"] == 0
    assert result["risk_level"] == "Low Risk"
    assert result["recommendations"] == LOW_RISK_RECOMMENDATIONS


def test_condition_lines_are_appended():
    result = score_food_risk("toast", "medium", "lunch", [], [], ["GERD", "IBS", "Food Sensitivities"])

    recs = result["recommendations"]
    assert recs[:4] == MODERATE_RISK_RECOMMENDATIONS
    assert "GERD: stay upright after eating and avoid large evening meals" in recs
    assert "IBS: check whether this food is high-FODMAP before eating it" in recs
    assert len(recs) == 6


def test_conditions_accept_comma_separated_string():
    result = score_food_risk("toast", "medium", "lunch", [], [], "gerd, gastritis")
    assert "GERD: stay upright after eating and avoid large evening meals" in result["recommendations"]
    assert "Gastritis: avoid eating this on an empty stomach" in result["recommendations"]


def test_history_is_not_mutated(entry):
    history = [entry(notes="pasta", pain_level=4, stress_level=2, symptoms=["Gas", "Gas"])]
    snapshot = copy.deepcopy(history)

    score_food_risk("pasta", "large", "dinner", history, ["pasta"])

    assert history == snapshot


@pytest.mark.parametrize("meal_size", MEAL_SIZES)
@pytest.mark.parametrize("time_of_day", TIMES_OF_DAY)
@pytest.mark.parametrize("levels", [(0, 0), (3, 9), (10, 10), None])
def test_score_bounds_and_level_agree(entry, meal_size, time_of_day, levels):
    history = [] if levels is None else [entry(notes="soup", pain_level=levels[0], stress_level=levels[1])]

    result = score_food_risk("soup", meal_size, time_of_day, history, ["soup"])

    assert 0 <= result["risk_score"] <= 10
    assert result["risk_level"] == risk_level_for(result["risk_score"])


@pytest.mark.parametrize("score,level", [(0, "Low Risk"), (3, "Low Risk"), (4, "Moderate Risk"), (6, "Moderate Risk"), (7, "High Risk"), (10, "High Risk")])
def test_risk_level_thresholds(score, level):
    assert risk_level_for(score) == level
