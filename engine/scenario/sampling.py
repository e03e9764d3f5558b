"""
Per-iteration sampling for scenario simulation: distribution draws for each declared variable, clamping to its range and linear correlation nudges between sampled inputs.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import Dict, Mapping, Optional, Sequence

import numpy as np

from config import settings
from engine.enums import Distribution
from engine.scenario.models import ScenarioVariable


def sample_normal(rng: np.random.Generator, mean: float, std: float) -> float:
    # Box-Muller; 1 - random() keeps u1 in (0, 1] so log never sees zero
    u1 = 1.0 - rng.random()
    u2 = rng.random()
    z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + std * z


def sample_uniform(rng: np.random.Generator, low: float, high: float) -> float:
    return low + rng.random() * (high - low)


def sample_triangular(rng: np.random.Generator, low: float, mode: float, high: float) -> float:
    if high == low:
        return low
    u = rng.random()
    split = (mode - low) / (high - low)
    if u < split:
        return low + math.sqrt(u * (high - low) * (mode - low))
    return high - math.sqrt((1 - u) * (high - low) * (high - mode))


def sample_variable(rng: np.random.Generator, variable: ScenarioVariable) -> float:
    low, high = variable.min_value, variable.max_value
    if variable.distribution == Distribution.normal:
        value = sample_normal(rng, variable.base_value, (high - low) / 4.0)
    elif variable.distribution == Distribution.triangular:
        mode = min(high, max(low, variable.base_value))
        value = sample_triangular(rng, low, mode, high)
    else:
        value = sample_uniform(rng, low, high)
    return min(high, max(low, value))


def sample_inputs(
    rng: np.random.Generator,
    variables: Sequence[ScenarioVariable],
    correlations: Optional[Mapping[str, Mapping[str, float]]] = None,
) -> Dict[str, float]:
    inputs = {v.name: sample_variable(rng, v) for v in variables}
    if not correlations:
        return inputs

    base = {v.name: v.base_value for v in variables}
    nudge = settings.scenario_correlation_nudge
    # nudges run after clamping and are not re-clamped
    for first, related in correlations.items():
        for second, coefficient in related.items():
            if first in inputs and second in inputs:
                inputs[second] += coefficient * (inputs[first] - base[first]) * nudge
    return inputs
