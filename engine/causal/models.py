"""
Data models for causal reasoning: variables, directed relationships, discovered graphs and the results of intervention, counterfactual and root-cause analyses.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from engine.enums import VariableType


@dataclass(frozen=True)
class CausalVariable:
    name: str
    type: VariableType
    values: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class CausalRelationship:
    source: str
    target: str
    strength: float
    confidence: float
    mechanism: str = ""
    is_confounded: bool = False
    confounders: List[str] = field(default_factory=list)
    lag: int = 1


@dataclass(frozen=True)
class CausalGraph:
    variables: List[CausalVariable]
    relationships: List[CausalRelationship]
    root_causes: List[str] = field(default_factory=list)
    terminal_effects: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CausalOptions:
    significance_level: Optional[float] = None
    max_lag: Optional[int] = None
    include_confounders: bool = True


@dataclass(frozen=True)
class Intervention:
    variable: str
    value: float


@dataclass(frozen=True)
class InterventionEffect:
    variable: str
    before_intervention: float
    after_intervention: float
    change_percent: float
    confidence: float


@dataclass(frozen=True)
class SideEffect:
    variable: str
    effect: float
    is_positive: bool


@dataclass(frozen=True)
class InterventionAnalysis:
    intervention: Intervention
    effects: List[InterventionEffect] = field(default_factory=list)
    side_effects: List[SideEffect] = field(default_factory=list)


@dataclass(frozen=True)
class CounterfactualAnalysis:
    actual_outcome: Dict[str, float]
    counterfactual_scenario: Dict[str, float]
    counterfactual_outcome: Dict[str, float]
    difference: Dict[str, float]
    explanation: str


@dataclass(frozen=True)
class RootCauseCandidate:
    variable: str
    contribution: float
    confidence: float
    mechanism: str
