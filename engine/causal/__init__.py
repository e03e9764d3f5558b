"""
Causal reasoning: lagged-correlation discovery of a causal graph, intervention and counterfactual propagation over it, and root-cause ranking.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.causal.discovery import discover_causal_graph, lagged_correlation
from engine.causal.graph import GraphIndex, build_graph
from engine.causal.intervention import analyze_counterfactual, analyze_intervention, rank_root_causes
from engine.causal.models import (
    CausalGraph,
    CausalOptions,
    CausalRelationship,
    CausalVariable,
    CounterfactualAnalysis,
    InterventionAnalysis,
    RootCauseCandidate,
)
from engine.causal.variables import infer_variable_type

__all__ = [
    "discover_causal_graph", "lagged_correlation", "infer_variable_type",
    "analyze_intervention", "analyze_counterfactual", "rank_root_causes",
    "GraphIndex", "build_graph",
    "CausalGraph", "CausalOptions", "CausalRelationship", "CausalVariable",
    "CounterfactualAnalysis", "InterventionAnalysis", "RootCauseCandidate",
]
