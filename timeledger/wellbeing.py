"""How time spent relates to satisfaction."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Iterable

import numpy as np
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from timeledger.aggregation import happy_rate, round_half_up
from timeledger.clock import to_slot
from timeledger.schema import ActivityType, SatisfactionTag, TimeLog, in_display_order

logger = logging.getLogger(__name__)

_BASE_FEATURES = ("start_hour", "weekday", "duration")


def happy_rate_by_type(
    logs: list[TimeLog],
    types: Iterable[ActivityType],
    tags: Iterable[SatisfactionTag],
) -> list[dict]:
    """Share of each visible activity type's hours tagged happy."""

    happy_tag_ids = {tag.id for tag in tags if tag.is_happy}
    totals: dict[str, float] = defaultdict(float)
    happy: dict[str, float] = defaultdict(float)
    for log in logs:
        totals[log.activity_type_id] += log.duration
        if log.satisfaction_tag_id in happy_tag_ids:
            happy[log.activity_type_id] += log.duration

    return [
        {
            "id": activity.id,
            "name": activity.name,
            "happy_hours": round_half_up(happy[activity.id]),
            "total_hours": totals[activity.id],
            "happy_rate": happy_rate(happy[activity.id], totals[activity.id]),
        }
        for activity in in_display_order(types)
    ]


def build_training_table(
    logs: list[TimeLog],
    types: Iterable[ActivityType],
    tags: Iterable[SatisfactionTag],
) -> tuple[np.ndarray, np.ndarray, list[str]]:
    """One row per log: start hour, weekday, duration and a one-hot activity type."""

    if not logs:
        return np.empty((0, 0)), np.array([], dtype=int), []

    happy_tag_ids = {tag.id for tag in tags if tag.is_happy}
    type_ids = [activity.id for activity in sorted(types, key=lambda item: (item.order, item.id))]
    # logs may reference types no longer in the catalog
    type_ids.extend(sorted({log.activity_type_id for log in logs} - set(type_ids)))

    feature_names = list(_BASE_FEATURES) + [f"activity={type_id}" for type_id in type_ids]

    rows: list[list[float]] = []
    labels: list[int] = []
    for log in sorted(logs, key=lambda item: (item.date, to_slot(item.start_time), item.id)):
        row = [to_slot(log.start_time) / 2.0, float(log.date.weekday()), float(log.duration)]
        row.extend(1.0 if log.activity_type_id == type_id else 0.0 for type_id in type_ids)
        rows.append(row)
        labels.append(1 if log.satisfaction_tag_id in happy_tag_ids else 0)

    return np.asarray(rows, dtype=float), np.asarray(labels, dtype=int), feature_names


def fit_happiness_model(X: np.ndarray, y: np.ndarray, seed: int = 42) -> Pipeline:
    """Fit a scaled logistic regression predicting the happy label."""

    if len(X) == 0 or len(y) == 0:
        raise ValueError("Cannot fit happiness model on empty dataset")
    if len(np.unique(y)) < 2:
        raise ValueError("Cannot fit happiness model: need both happy and non-happy entries")

    model = Pipeline(
        [
            ("scaler", StandardScaler()),
            ("clf", LogisticRegression(max_iter=1000, random_state=seed)),
        ]
    )
    model.fit(X, y)
    logger.debug("Fitted happiness model on %d entries", len(y))
    return model


def _extract_estimator(model: Any) -> Any:
    if isinstance(model, Pipeline):
        return model.steps[-1][1]
    return model


def explain_model(model: Any, feature_names: list[str]) -> dict:
    """Return the top-10 features by absolute coefficient."""

    estimator = _extract_estimator(model)
    if not hasattr(estimator, "coef_"):
        return {"type": "unsupported", "top_features": []}

    values = np.asarray(estimator.coef_).ravel()
    pairs = sorted(zip(feature_names, values), key=lambda item: abs(item[1]), reverse=True)[:10]
    return {
        "type": "coefficients",
        "top_features": [{"feature": feature, "weight": float(weight)} for feature, weight in pairs],
    }


def happiness_drivers(
    logs: list[TimeLog],
    types: Iterable[ActivityType],
    tags: Iterable[SatisfactionTag],
    seed: int = 42,
) -> dict:
    """Fit and explain the happiness model, or report that the data is too thin."""

    types, tags = list(types), list(tags)
    X, y, feature_names = build_training_table(logs, types, tags)
    try:
        model = fit_happiness_model(X, y, seed=seed)
    except ValueError as exc:
        logger.info("Skipping happiness drivers: %s", exc)
        return {"type": "insufficient_data", "top_features": [], "n_samples": int(len(y))}

    report = explain_model(model, feature_names)
    report["n_samples"] = int(len(y))
    return report
