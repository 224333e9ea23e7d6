"""HTTP controller layer for enclosure allocation analysis."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, StrictFloat, StrictInt

from backend.controllers.dependencies import get_analysis_service
from backend.domain.models import ErrorKind
from backend.services.analysis_service import EnclosureAllocationAnalyzer
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["analysis"])


_ERROR_STATUS = {
    ErrorKind.INVALID_ANIMAL: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_QUANTITY: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NO_VIABLE_ENCLOSURE: status.HTTP_409_CONFLICT,
}


class AnalyzeEnclosuresRequest(BaseModel):
    """Input DTO; quantity semantics are checked by the service layer."""

    species: str
    quantity: StrictInt | StrictFloat


class EnclosureOfferResponse(BaseModel):
    enclosure_id: int = Field(gt=0)
    free_space: int = Field(ge=0)
    capacity: int = Field(ge=0)


class AnalyzeEnclosuresResponse(BaseModel):
    viable_enclosures: list[str]
    offers: list[EnclosureOfferResponse]


class EnclosureResponse(BaseModel):
    enclosure_id: int
    biome: str
    capacity: int
    current_occupancy: int
    residents: list[str]


class SpeciesResponse(BaseModel):
    species_id: str
    unit_size: int
    compatible_biomes: list[str]


class HealthResponse(BaseModel):
    status: str
    enclosures: int = Field(ge=0)
    species: int = Field(ge=0)


@router.post(
    "/analyze_enclosures",
    response_model=AnalyzeEnclosuresResponse,
    status_code=status.HTTP_200_OK,
)
async def analyze_enclosures(
    payload: AnalyzeEnclosuresRequest,
    service: EnclosureAllocationAnalyzer = Depends(get_analysis_service),
) -> AnalyzeEnclosuresResponse:
    """Rank the enclosures that can house the requested animals."""
    try:
        result = service.analyze(payload.species, payload.quantity)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected analysis failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to analyze enclosures",
        ) from exc

    if result.error is not None:
        raise HTTPException(
            status_code=_ERROR_STATUS[result.error],
            detail={"error": result.error.name, "message": result.error.value},
        )

    return AnalyzeEnclosuresResponse(
        viable_enclosures=result.viable_enclosures,
        offers=[
            EnclosureOfferResponse(
                enclosure_id=offer.enclosure_id,
                free_space=offer.free_space,
                capacity=offer.capacity,
            )
            for offer in result.offers
        ],
    )


@router.get("/enclosures", response_model=list[EnclosureResponse])
async def list_enclosures(
    service: EnclosureAllocationAnalyzer = Depends(get_analysis_service),
) -> list[EnclosureResponse]:
    return [
        EnclosureResponse(
            enclosure_id=enclosure.enclosure_id,
            biome=enclosure.biome,
            capacity=enclosure.capacity,
            current_occupancy=enclosure.current_occupancy,
            residents=sorted(enclosure.residents),
        )
        for enclosure in service.reference_data.enclosures
    ]


@router.get("/species", response_model=list[SpeciesResponse])
async def list_species(
    service: EnclosureAllocationAnalyzer = Depends(get_analysis_service),
) -> list[SpeciesResponse]:
    return [
        SpeciesResponse(
            species_id=species.species_id,
            unit_size=species.unit_size,
            compatible_biomes=list(species.compatible_biomes),
        )
        for species in service.reference_data.species.values()
    ]


@router.get("/health", response_model=HealthResponse)
async def health(
    service: EnclosureAllocationAnalyzer = Depends(get_analysis_service),
) -> HealthResponse:
    reference_data = service.reference_data
    return HealthResponse(
        status="ok",
        enclosures=len(reference_data.enclosures),
        species=len(reference_data.species),
    )
