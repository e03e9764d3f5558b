"""
Forecast routes for projecting a historical series forward with confidence bands.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from api.requests import ForecastRequest
from api.responses import envelope
from api.routes.common import run_analysis
from api.routes.exception import handle_exceptions
from engine.forecast import ForecastOptions, TimeSeriesPoint, forecast

router = APIRouter(tags=["Forecast"])


@router.post("/forecast", summary="Forecast a series with confidence intervals, accuracy and trend")
@handle_exceptions
async def forecast_series(req: ForecastRequest) -> Dict[str, Any]:
    history = [TimeSeriesPoint(timestamp=p.timestamp, value=p.value) for p in req.history]
    options = ForecastOptions(
        method=req.method,
        confidence_level=req.confidence_level,
        seasonality=req.seasonality,
    )
    result = await run_analysis(forecast, history, req.horizon, options)
    return envelope(result)
