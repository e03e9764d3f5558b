"""
Constants and configuration for the Stratum Analysis Engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, Optional

from pydantic_settings import BaseSettings


STRATUM_HOST: str = os.getenv("STRATUM_HOST", "0.0.0.0")
STRATUM_PORT: int = int(os.getenv("STRATUM_PORT", "4330"))
STRATUM_LOG_LEVEL: str = os.getenv("STRATUM_LOG_LEVEL", "info").lower()

SERVICE_NAME = "stratum-analysis-engine"
SERVICE_VERSION = "1.0.0"

# seasonal periods expressed as a number of observations
SEASONAL_PERIODS: Dict[str, int] = {
    "daily": 1,
    "weekly": 7,
    "monthly": 30,
    "yearly": 365,
}


class Settings(BaseSettings):
    host: str = STRATUM_HOST
    port: int = STRATUM_PORT
    log_level: str = STRATUM_LOG_LEVEL

    # randomness; None means a fresh OS-seeded generator per call
    random_seed: Optional[int] = None

    # http boundary
    max_concurrent_analyses: int = int(os.getenv("STRATUM_MAX_CONCURRENT_ANALYSES", "4"))
    analysis_timeout_seconds: float = float(os.getenv("STRATUM_ANALYSIS_TIMEOUT_SECONDS", "60"))
    max_points: int = 50_000
    max_iterations: int = 200_000
    max_horizon: int = 3650

    # point analyzer: clustering
    kmeans_default_k: int = 3
    kmeans_max_iterations: int = 100
    elbow_max_k: int = 10
    elbow_min_points: int = 3
    dbscan_eps: float = 0.5
    dbscan_min_samples: int = 2
    hierarchical_linkage: str = "average"

    # point analyzer: correlation and outliers
    correlation_significance_cutoff: float = 0.5
    correlation_p_threshold: float = 0.05
    outlier_zscore_threshold: float = 3.0
    outlier_iqr_multiplier: float = 1.5
    outlier_iso_contamination: float = 0.05
    outlier_iso_n_estimators: int = 100
    outlier_iso_random_state: int = 42

    # point analyzer: reduction and confidence blend
    reduction_target_dimensions: int = 2
    points_confidence_cohesion_weight: float = 0.4
    points_confidence_significance_weight: float = 0.3
    points_confidence_outlier_weight: float = 0.3
    points_outlier_penalty_factor: float = 2.0
    similarity_top_k: int = 5

    # forecast: method selection
    forecast_min_history: int = 3
    forecast_default_confidence_level: float = 0.95
    forecast_trend_strength_threshold: float = 0.7
    forecast_cv_threshold: float = 0.3
    forecast_ma_max_window: int = 5

    # forecast: holt smoothing
    forecast_holt_alpha: float = 0.3
    forecast_holt_beta: float = 0.1
    forecast_holt_interval_growth: float = 0.2

    # forecast: per-step confidence decay and floor
    forecast_ma_confidence_decay: float = 0.05
    forecast_holt_confidence_decay: float = 0.03
    forecast_linreg_confidence_decay: float = 0.02
    forecast_min_point_confidence: float = 0.5

    # forecast: evaluation
    forecast_backtest_min_length: int = 5
    forecast_backtest_train_ratio: float = 0.8
    forecast_volatility_threshold: float = 0.3
    forecast_stable_slope_ratio: float = 0.01
    forecast_confidence_mape_weight: float = 0.6
    forecast_confidence_trend_weight: float = 0.4
    forecast_trend_score_volatile: float = 0.5
    forecast_trend_score_default: float = 0.8
    seasonal_periods: Dict[str, int] = SEASONAL_PERIODS

    # scenario simulation
    scenario_default_iterations: int = 1000
    scenario_correlation_nudge: float = 0.1
    scenario_input_weight_min: float = 0.5
    scenario_noise_low: float = 0.9
    scenario_noise_high: float = 1.1
    scenario_var_percentile: float = 0.05
    scenario_confidence: float = 0.85

    # causal discovery
    causal_max_lag: int = 3
    causal_significance_level: float = 0.05
    causal_min_strength: float = 0.3
    causal_confounder_threshold: float = 0.3
    causal_categorical_max_levels: int = 10
    causal_mechanism_strong: float = 0.7
    causal_mechanism_moderate: float = 0.4
    causal_confounded_penalty: float = 0.2
    causal_min_graph_confidence: float = 0.3
    causal_empty_graph_confidence: float = 0.5
    causal_default_edge_confidence: float = 0.5
    causal_counterfactual_confidence: float = 0.7
    causal_explanation_max_effects: int = 3
    causal_explanation_min_delta: float = 0.01
    causal_round_precision: int = 4

    model_config = {
        "env_prefix": "STRATUM_",
        "extra": "ignore",
    }


settings = Settings()
