from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from config import settings
from engine.enums import (
    ClusteringMethod,
    DistanceMetric,
    Distribution,
    ForecastMethod,
    OutlierMethod,
    ReductionMethod,
    Seasonality,
    VariableType,
)


class PointModel(BaseModel):
    id: str
    dimensions: Dict[str, float]
    label: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ClusteringSettings(BaseModel):
    method: ClusteringMethod = ClusteringMethod.kmeans
    k: Optional[int] = Field(default=None, ge=1, le=1000)
    min_cluster_size: Optional[int] = Field(default=None, ge=1)
    distance_metric: DistanceMetric = DistanceMetric.euclidean


class ReductionSettings(BaseModel):
    method: ReductionMethod = ReductionMethod.pca
    target_dimensions: Optional[int] = Field(default=None, ge=1)


class OutlierSettings(BaseModel):
    method: OutlierMethod = OutlierMethod.zscore
    threshold: Optional[float] = Field(default=None, gt=0.0)


class DimensionWeightModel(BaseModel):
    dimension: str
    weight: float = Field(default=1.0, ge=0.0)
    description: Optional[str] = None


class PointsAnalyzeRequest(BaseModel):
    points: List[PointModel] = Field(default_factory=list, max_length=settings.max_points)
    clustering: ClusteringSettings = Field(default_factory=ClusteringSettings)
    dimension_reduction: Optional[ReductionSettings] = None
    outlier_detection: OutlierSettings = Field(default_factory=OutlierSettings)
    weights: List[DimensionWeightModel] = Field(default_factory=list)


class SimilarPointsRequest(BaseModel):
    target: PointModel
    candidates: List[PointModel] = Field(default_factory=list, max_length=settings.max_points)
    top_k: int = Field(default=settings.similarity_top_k, ge=1, le=1000)


class TimeSeriesPointModel(BaseModel):
    timestamp: datetime
    value: float


class ForecastRequest(BaseModel):
    history: List[TimeSeriesPointModel]
    horizon: int = Field(ge=1, le=settings.max_horizon)
    method: ForecastMethod = ForecastMethod.auto
    confidence_level: Optional[float] = Field(default=None, gt=0.0, lt=1.0)
    seasonality: Seasonality = Seasonality.none


class ScenarioVariableModel(BaseModel):
    name: str
    base_value: float
    min_value: float
    max_value: float
    distribution: Distribution = Distribution.uniform


class ScenarioRequest(BaseModel):
    variables: List[ScenarioVariableModel] = Field(min_length=1)
    iterations: int = Field(default=settings.scenario_default_iterations, ge=1, le=settings.max_iterations)
    output_metrics: List[str] = Field(min_length=1)
    correlations: Optional[Dict[str, Dict[str, float]]] = None


class CausalDiscoveryRequest(BaseModel):
    series: Dict[str, List[float]]
    significance_level: Optional[float] = Field(default=None, gt=0.0, lt=1.0)
    max_lag: Optional[int] = Field(default=None, ge=1, le=100)
    include_confounders: bool = True


class CausalVariableModel(BaseModel):
    name: str
    type: Optional[VariableType] = None
    values: List[float] = Field(default_factory=list)


class CausalRelationshipModel(BaseModel):
    source: str
    target: str
    strength: float = Field(ge=-1.0, le=1.0)
    confidence: float = Field(default=settings.causal_default_edge_confidence, ge=0.0, le=1.0)
    mechanism: str = ""
    is_confounded: bool = False
    confounders: List[str] = Field(default_factory=list)
    lag: int = Field(default=1, ge=0)


class CausalGraphModel(BaseModel):
    variables: List[CausalVariableModel] = Field(default_factory=list)
    relationships: List[CausalRelationshipModel] = Field(default_factory=list)


class InterventionRequest(BaseModel):
    graph: CausalGraphModel
    variable: str
    value: float
    data: Optional[Dict[str, List[float]]] = None


class CounterfactualRequest(BaseModel):
    graph: CausalGraphModel
    actual_outcome: Dict[str, float]
    scenario: Dict[str, float] = Field(min_length=1)


class RootCauseRequest(BaseModel):
    graph: CausalGraphModel
    target: str
