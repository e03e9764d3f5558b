"""
Uniform result envelope returned by every analysis operation: the payload, a confidence score in [0, 1], the completion timestamp and the elapsed processing time.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class AnalysisResult(Generic[T]):
    data: T
    confidence: float
    timestamp: datetime
    processing_time_ms: float


def build_result(data: T, confidence: float, started: float) -> AnalysisResult[T]:
    """Wrap ``data`` in an envelope; ``started`` is a ``time.perf_counter()`` reading."""
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    return AnalysisResult(
        data=data,
        confidence=round(min(1.0, max(0.0, float(confidence))), 4),
        timestamp=datetime.now(timezone.utc),
        processing_time_ms=round(elapsed_ms, 3),
    )
