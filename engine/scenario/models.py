"""
Data models for Monte Carlo scenario simulation: declared input variables, sampled scenarios, per-metric statistics and tail-risk metrics.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from engine.enums import Distribution


@dataclass(frozen=True)
class ScenarioVariable:
    name: str
    base_value: float
    min_value: float
    max_value: float
    distribution: Distribution = Distribution.uniform


@dataclass(frozen=True)
class Scenario:
    id: str
    inputs: Dict[str, float]
    outputs: Dict[str, float]
    probability: float


@dataclass(frozen=True)
class Percentiles:
    p10: float
    p50: float
    p90: float


@dataclass(frozen=True)
class ScenarioStatistics:
    mean: Dict[str, float] = field(default_factory=dict)
    std_dev: Dict[str, float] = field(default_factory=dict)
    percentiles: Dict[str, Percentiles] = field(default_factory=dict)


@dataclass(frozen=True)
class RiskMetrics:
    value_at_risk: float
    conditional_var: float
    max_drawdown: float


@dataclass(frozen=True)
class SimulationResult:
    scenarios: List[Scenario]
    statistics: ScenarioStatistics
    risk_metrics: RiskMetrics
