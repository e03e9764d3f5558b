"""
Response models for API endpoints and conversion of engine results into JSON-ready payloads.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict

import numpy as np
from pydantic import BaseModel, model_serializer

from engine.envelope import AnalysisResult


def _coerce(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return _coerce(asdict(obj))
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class AnalysisEnvelope(NpModel):

    data: Any
    confidence: float
    timestamp: datetime
    processing_time_ms: float


class HealthResponse(BaseModel):

    status: str
    service: str
    version: str


def envelope(result: AnalysisResult[Any]) -> Dict[str, Any]:
    return AnalysisEnvelope(
        data=_coerce(result.data),
        confidence=result.confidence,
        timestamp=result.timestamp,
        processing_time_ms=result.processing_time_ms,
    ).model_dump(mode="json")


def to_payload(obj: Any) -> Any:
    return _coerce(obj)
