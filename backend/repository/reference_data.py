"""Repository layer supplying the read-only enclosure and species tables."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from backend.domain.models import Enclosure, ReferenceData, Species
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


DEFAULT_ENCLOSURES: tuple[Enclosure, ...] = (
    Enclosure(1, "savanna", 10, 3, frozenset({"MONKEY"})),
    Enclosure(2, "forest", 5, 0),
    Enclosure(3, "savanna-and-river", 7, 2, frozenset({"GAZELLE"})),
    Enclosure(4, "river", 8, 0),
    Enclosure(5, "savanna", 9, 3, frozenset({"LION"})),
)

DEFAULT_SPECIES: tuple[Species, ...] = (
    Species("LION", 3, ("savanna",)),
    Species("LEOPARD", 2, ("savanna",)),
    Species("CROCODILE", 3, ("river",)),
    Species("MONKEY", 1, ("savanna", "forest")),
    Species("GAZELLE", 2, ("savanna",)),
    Species("HIPPO", 4, ("savanna", "river")),
)


class ReferenceDataError(Exception):
    """Raised when a reference data document cannot be loaded."""


class EnclosureRecord(BaseModel):
    enclosure_id: int = Field(gt=0)
    biome: str = Field(min_length=1)
    capacity: int = Field(ge=0)
    current_occupancy: int = Field(ge=0)
    residents: list[str] = Field(default_factory=list)


class SpeciesRecord(BaseModel):
    species_id: str = Field(min_length=1)
    unit_size: int = Field(ge=1)
    compatible_biomes: list[str] = Field(default_factory=list)


class ReferenceDataDocument(BaseModel):
    enclosures: list[EnclosureRecord]
    species: list[SpeciesRecord]

    @model_validator(mode="after")
    def validate_unique_identifiers(self) -> "ReferenceDataDocument":
        enclosure_ids = [record.enclosure_id for record in self.enclosures]
        if len(enclosure_ids) != len(set(enclosure_ids)):
            raise ValueError("enclosure_id values must be unique")
        species_ids = [record.species_id for record in self.species]
        if len(species_ids) != len(set(species_ids)):
            raise ValueError("species_id values must be unique")
        return self

    def to_reference_data(self) -> ReferenceData:
        return ReferenceData(
            enclosures=tuple(
                Enclosure(
                    enclosure_id=record.enclosure_id,
                    biome=record.biome,
                    capacity=record.capacity,
                    current_occupancy=record.current_occupancy,
                    residents=frozenset(record.residents),
                )
                for record in self.enclosures
            ),
            species={
                record.species_id: Species(
                    species_id=record.species_id,
                    unit_size=record.unit_size,
                    compatible_biomes=tuple(record.compatible_biomes),
                )
                for record in self.species
            },
        )


def build_default_reference_data() -> ReferenceData:
    return ReferenceData(
        enclosures=DEFAULT_ENCLOSURES,
        species={species.species_id: species for species in DEFAULT_SPECIES},
    )


class ReferenceDataRepository:
    """Loads reference tables once so services never touch storage details."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._reference_data: Optional[ReferenceData] = None

    @property
    def source_path(self) -> Optional[Path]:
        return self._settings.reference_data_path

    def load_reference_data(self) -> ReferenceData:
        if self._reference_data is None:
            if self.source_path is None:
                self._reference_data = build_default_reference_data()
                logger.info(
                    "Reference data loaded | source=built-in | enclosures=%s | species=%s",
                    len(self._reference_data.enclosures),
                    len(self._reference_data.species),
                )
            else:
                self._reference_data = self._load_document(Path(self.source_path))
        return self._reference_data

    def _load_document(self, path: Path) -> ReferenceData:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ReferenceDataError(f"Cannot read reference data file {path}") from exc
        except json.JSONDecodeError as exc:
            raise ReferenceDataError(f"Reference data file {path} is not valid JSON") from exc

        try:
            document = ReferenceDataDocument.model_validate(payload)
        except ValidationError as exc:
            raise ReferenceDataError(
                f"Reference data file {path} failed validation: {exc}"
            ) from exc

        reference_data = document.to_reference_data()
        logger.info(
            "Reference data loaded | source=%s | enclosures=%s | species=%s",
            path,
            len(reference_data.enclosures),
            len(reference_data.species),
        )
        return reference_data

    def list_enclosures(self) -> list[Enclosure]:
        return list(self.load_reference_data().enclosures)

    def list_species(self) -> list[Species]:
        return list(self.load_reference_data().species.values())

    def get_species(self, species_id: str) -> Optional[Species]:
        return self.load_reference_data().find_species(species_id)
