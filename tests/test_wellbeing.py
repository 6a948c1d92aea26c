from datetime import date

from timeledger.schema import DEFAULT_ACTIVITY_TYPES, DEFAULT_SATISFACTION_TAGS, TimeLog
from timeledger.wellbeing import (
    build_training_table,
    explain_model,
    fit_happiness_model,
    happiness_drivers,
    happy_rate_by_type,
)


def sample_logs():
    return [
        TimeLog("a1", "u1", date(2025, 3, 10), "09:00", "10:00", "act_1", "sat_1"),
        TimeLog("a2", "u1", date(2025, 3, 10), "10:00", "10:30", "act_1", "sat_2"),
        TimeLog("a3", "u1", date(2025, 3, 11), "08:00", "09:00", "act_1", "sat_3"),
        TimeLog("b1", "u1", date(2025, 3, 11), "18:00", "20:00", "act_2", "sat_1"),
        TimeLog("b2", "u1", date(2025, 3, 12), "19:00", "21:00", "act_2", "sat_1"),
        TimeLog("c1", "u1", date(2025, 3, 13), "21:00", "22:00", "act_3", "sat_2"),
        TimeLog("c2", "u1", date(2025, 3, 14), "06:00", "07:00", "act_3", "sat_1"),
        TimeLog("x1", "u1", date(2025, 3, 14), "12:00", "12:30", "act_gone", "sat_3"),
    ]


def test_happy_rate_by_type():
    rows = {row["id"]: row for row in happy_rate_by_type(sample_logs(), DEFAULT_ACTIVITY_TYPES, DEFAULT_SATISFACTION_TAGS)}
    assert rows["act_1"]["happy_hours"] == 1.0
    assert rows["act_1"]["total_hours"] == 2.5
    assert rows["act_1"]["happy_rate"] == 40.0
    assert rows["act_2"]["happy_rate"] == 100.0
    assert rows["act_3"]["happy_rate"] == 50.0
    assert "act_gone" not in rows


def test_build_training_table_smoke():
    X, y, feature_names = build_training_table(sample_logs(), DEFAULT_ACTIVITY_TYPES, DEFAULT_SATISFACTION_TAGS)
    assert X.shape == (8, len(feature_names))
    assert feature_names[:3] == ["start_hour", "weekday", "duration"]
    assert "activity=act_gone" in feature_names
    assert y.tolist() == [1, 0, 0, 1, 1, 0, 1, 0]
    assert X[0, 0] == 9.0


def test_build_training_table_empty():
    X, y, feature_names = build_training_table([], DEFAULT_ACTIVITY_TYPES, DEFAULT_SATISFACTION_TAGS)
    assert X.shape == (0, 0)
    assert len(y) == 0
    assert feature_names == []


def test_fit_and_explain():
    X, y, feature_names = build_training_table(sample_logs(), DEFAULT_ACTIVITY_TYPES, DEFAULT_SATISFACTION_TAGS)
    model = fit_happiness_model(X, y)
    report = explain_model(model, feature_names)
    assert report["type"] == "coefficients"
    assert 1 <= len(report["top_features"]) <= 10
    weights = [abs(item["weight"]) for item in report["top_features"]]
    assert weights == sorted(weights, reverse=True)


def test_happiness_drivers_needs_both_classes():
    happy_only = [log for log in sample_logs() if log.satisfaction_tag_id == "sat_1"]
    report = happiness_drivers(happy_only, DEFAULT_ACTIVITY_TYPES, DEFAULT_SATISFACTION_TAGS)
    assert report["type"] == "insufficient_data"
    assert report["n_samples"] == len(happy_only)

    report = happiness_drivers(sample_logs(), DEFAULT_ACTIVITY_TYPES, DEFAULT_SATISFACTION_TAGS)
    assert report["type"] == "coefficients"
    assert report["n_samples"] == 8
