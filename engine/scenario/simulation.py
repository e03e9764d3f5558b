"""
Monte Carlo scenario simulation: draws N input scenarios, derives each output metric as a noisy normalized weighted combination of the inputs, then summarizes outcomes and tail risk.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import time
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from config import settings
from engine.envelope import AnalysisResult, build_result
from engine.exceptions import InvalidInputError
from engine.rng import resolve_rng
from engine.scenario.models import Scenario, ScenarioVariable, SimulationResult
from engine.scenario.risk import risk_metrics, scenario_statistics
from engine.scenario.sampling import sample_inputs

log = logging.getLogger(__name__)


def _validate(variables: Sequence[ScenarioVariable], iterations: int, output_metrics: Sequence[str]) -> None:
    if not variables:
        raise InvalidInputError("At least one scenario variable is required")
    if not output_metrics:
        raise InvalidInputError("At least one output metric is required")
    if iterations < 1 or iterations > settings.max_iterations:
        raise InvalidInputError(f"iterations must be between 1 and {settings.max_iterations}, got {iterations}")
    for variable in variables:
        if variable.min_value > variable.max_value:
            raise InvalidInputError(
                f"variable {variable.name!r} has min_value {variable.min_value} above max_value {variable.max_value}"
            )


def _outputs(rng: np.random.Generator, inputs: Dict[str, float], metrics: Sequence[str]) -> Dict[str, float]:
    low_weight = settings.scenario_input_weight_min
    noise_low, noise_high = settings.scenario_noise_low, settings.scenario_noise_high
    sampled = list(inputs.values())
    outputs: Dict[str, float] = {}
    for metric in metrics:
        combined = sum(x * (low_weight + rng.random() * (1.0 - low_weight)) for x in sampled) / len(sampled)
        outputs[metric] = combined * (noise_low + rng.random() * (noise_high - noise_low))
    return outputs


def simulate_scenario(
    variables: Sequence[ScenarioVariable],
    iterations: Optional[int] = None,
    output_metrics: Sequence[str] = (),
    correlations: Optional[Mapping[str, Mapping[str, float]]] = None,
    rng: Optional[np.random.Generator] = None,
) -> AnalysisResult[SimulationResult]:
    started = time.perf_counter()
    if iterations is None:
        iterations = settings.scenario_default_iterations
    _validate(variables, iterations, output_metrics)
    rng = resolve_rng(rng)

    probability = 1.0 / iterations
    scenarios: List[Scenario] = []
    for i in range(iterations):
        inputs = sample_inputs(rng, variables, correlations)
        scenarios.append(Scenario(
            id=f"scenario-{i}",
            inputs=inputs,
            outputs=_outputs(rng, inputs, output_metrics),
            probability=probability,
        ))

    result = SimulationResult(
        scenarios=scenarios,
        statistics=scenario_statistics(scenarios, output_metrics),
        risk_metrics=risk_metrics(scenarios, output_metrics[0]),
    )
    log.info("simulated %d scenario(s) over %d variable(s)", iterations, len(variables))
    return build_result(result, settings.scenario_confidence, started)
