"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from backend.services.analysis_service import EnclosureAllocationAnalyzer


def get_analysis_service(request: Request) -> EnclosureAllocationAnalyzer:
    service = getattr(request.app.state, "analysis_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Analysis service is not initialized",
        )
    return service
