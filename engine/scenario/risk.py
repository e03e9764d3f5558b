"""
Summary statistics and tail-risk metrics over simulated scenario outcomes.

Max drawdown is measured across the outcome sequence sorted ascending, where a
running peak never exceeds the current value, so it evaluates to 0.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from config import settings
from engine.scenario.models import Percentiles, RiskMetrics, Scenario, ScenarioStatistics


def _sorted_outcomes(scenarios: Sequence[Scenario], metric: str) -> np.ndarray:
    return np.sort(np.array([s.outputs[metric] for s in scenarios], dtype=float))


def _at(values: np.ndarray, fraction: float) -> float:
    return float(values[min(values.size - 1, int(values.size * fraction))])


def scenario_statistics(scenarios: Sequence[Scenario], metrics: Sequence[str]) -> ScenarioStatistics:
    stats = ScenarioStatistics()
    for metric in metrics:
        values = _sorted_outcomes(scenarios, metric)
        stats.mean[metric] = float(values.mean())
        stats.std_dev[metric] = float(values.std())
        stats.percentiles[metric] = Percentiles(
            p10=_at(values, 0.1),
            p50=_at(values, 0.5),
            p90=_at(values, 0.9),
        )
    return stats


def max_drawdown(values: Sequence[float]) -> float:
    worst = 0.0
    peak = None
    for value in values:
        if peak is None or value > peak:
            peak = value
        if peak <= 0:
            continue
        worst = max(worst, (peak - value) / peak)
    return worst


def risk_metrics(scenarios: Sequence[Scenario], primary_metric: str) -> RiskMetrics:
    values = _sorted_outcomes(scenarios, primary_metric)
    index = min(values.size - 1, int(values.size * settings.scenario_var_percentile))
    var = float(values[index])
    tail: List[float] = values[:index].tolist()
    return RiskMetrics(
        value_at_risk=var,
        conditional_var=float(sum(tail) / len(tail)) if tail else var,
        max_drawdown=max_drawdown(values.tolist()),
    )
