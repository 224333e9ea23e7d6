"""Enclosure allocation analysis: biome, capacity and ranking rules."""

from __future__ import annotations

import math
import numbers
from typing import Iterable, Optional

from backend.domain.constraints import (
    AnalysisConfig,
    compute_free_space,
    is_biome_compatible,
    validate_analysis_config,
)
from backend.domain.models import (
    AnalysisResult,
    Enclosure,
    EnclosureOffer,
    ErrorKind,
    ReferenceData,
    Species,
)
from backend.repository.reference_data import ReferenceDataRepository
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class AnalysisValidationError(Exception):
    """Raised when an analysis request fails input validation."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


def _validate_species(reference_data: ReferenceData, species_id: object) -> Species:
    species = reference_data.find_species(species_id)
    if species is None:
        raise AnalysisValidationError(ErrorKind.INVALID_ANIMAL)
    return species


def _validate_quantity(quantity: object) -> int:
    if isinstance(quantity, bool):
        raise AnalysisValidationError(ErrorKind.INVALID_QUANTITY)
    if isinstance(quantity, numbers.Integral):
        value = int(quantity)
    elif isinstance(quantity, float) and math.isfinite(quantity) and quantity.is_integer():
        value = int(quantity)
    else:
        raise AnalysisValidationError(ErrorKind.INVALID_QUANTITY)
    if value <= 0:
        raise AnalysisValidationError(ErrorKind.INVALID_QUANTITY)
    return value


def evaluate_enclosure(
    enclosure: Enclosure,
    species: Species,
    quantity: int,
    config: AnalysisConfig,
) -> Optional[EnclosureOffer]:
    """Return an offer when the enclosure can take the animals, else None."""
    if not is_biome_compatible(enclosure, species):
        logger.debug(
            "Enclosure skipped | enclosure_id=%s | reason=biome | biome=%s",
            enclosure.enclosure_id,
            enclosure.biome,
        )
        return None

    free_space = compute_free_space(enclosure, species, quantity, config)
    if free_space < 0:
        logger.debug(
            "Enclosure skipped | enclosure_id=%s | reason=capacity | free_space=%s",
            enclosure.enclosure_id,
            free_space,
        )
        return None

    return EnclosureOffer(
        enclosure_id=enclosure.enclosure_id,
        free_space=free_space,
        capacity=enclosure.capacity,
    )


def rank_offers(offers: Iterable[EnclosureOffer]) -> tuple[EnclosureOffer, ...]:
    """Most free space first; lower enclosure id wins ties."""
    return tuple(sorted(offers, key=lambda offer: (-offer.free_space, offer.enclosure_id)))


class EnclosureAllocationAnalyzer:
    """Decides which enclosures can house a requested group of one species."""

    def __init__(
        self,
        reference_data: Optional[ReferenceData] = None,
        settings: Optional[Settings] = None,
        repository: Optional[ReferenceDataRepository] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._config = AnalysisConfig(
            cohabitation_penalty=self._settings.analysis_cohabitation_penalty,
        )
        validate_analysis_config(self._config)
        if reference_data is None:
            repository = repository or ReferenceDataRepository(self._settings)
            reference_data = repository.load_reference_data()
        self._reference_data = reference_data

    @property
    def reference_data(self) -> ReferenceData:
        return self._reference_data

    def analyze(self, species: object, quantity: object) -> AnalysisResult:
        try:
            species_record = _validate_species(self._reference_data, species)
            requested_quantity = _validate_quantity(quantity)
        except AnalysisValidationError as exc:
            logger.info(
                "Enclosure analysis rejected | species=%r | quantity=%r | reason=%s",
                species,
                quantity,
                exc.kind.name,
            )
            return AnalysisResult.failure(exc.kind)

        offers = []
        for enclosure in self._reference_data.enclosures:
            offer = evaluate_enclosure(
                enclosure,
                species_record,
                requested_quantity,
                self._config,
            )
            if offer is not None:
                offers.append(offer)

        if not offers:
            logger.info(
                "Enclosure analysis found no viable enclosure | species=%s | quantity=%s",
                species_record.species_id,
                requested_quantity,
            )
            return AnalysisResult.failure(ErrorKind.NO_VIABLE_ENCLOSURE)

        ranked = rank_offers(offers)
        logger.info(
            "Enclosure analysis completed | species=%s | quantity=%s | viable=%s",
            species_record.species_id,
            requested_quantity,
            [offer.enclosure_id for offer in ranked],
        )
        return AnalysisResult.success(ranked)
