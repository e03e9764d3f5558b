"""
Health check route to verify the service is up.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from api.responses import HealthResponse
from api.routes.exception import handle_exceptions
from config import SERVICE_NAME, SERVICE_VERSION

router = APIRouter(tags=["Health"])


@router.get("/health")
@handle_exceptions
async def health() -> Dict[str, Any]:
    return HealthResponse(status="ok", service=SERVICE_NAME, version=SERVICE_VERSION).model_dump()
