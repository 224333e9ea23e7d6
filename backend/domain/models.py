"""Domain models for enclosure allocation analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ErrorKind(str, Enum):
    INVALID_ANIMAL = "Invalid animal"
    INVALID_QUANTITY = "Invalid quantity"
    NO_VIABLE_ENCLOSURE = "No viable enclosure"


@dataclass(frozen=True)
class Enclosure:
    enclosure_id: int
    biome: str
    capacity: int
    current_occupancy: int
    residents: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "residents", frozenset(self.residents))
        if not _is_integer(self.enclosure_id) or self.enclosure_id <= 0:
            raise ValueError("enclosure_id must be a positive integer")
        if not _is_integer(self.capacity) or self.capacity < 0:
            raise ValueError("capacity must be an integer >= 0")
        if not _is_integer(self.current_occupancy) or self.current_occupancy < 0:
            raise ValueError("current_occupancy must be an integer >= 0")


@dataclass(frozen=True)
class Species:
    species_id: str
    unit_size: int
    compatible_biomes: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "compatible_biomes", tuple(self.compatible_biomes))
        if not isinstance(self.species_id, str) or not self.species_id:
            raise ValueError("species_id must be a non-empty string")
        if not _is_integer(self.unit_size) or self.unit_size < 1:
            raise ValueError("unit_size must be an integer >= 1")


@dataclass(frozen=True)
class ReferenceData:
    """Read-only enclosure inventory and species table."""

    enclosures: tuple[Enclosure, ...]
    species: Mapping[str, Species] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Detach from the caller's dict so later edits cannot leak in.
        object.__setattr__(self, "enclosures", tuple(self.enclosures))
        object.__setattr__(self, "species", MappingProxyType(dict(self.species)))

        enclosure_ids = [enclosure.enclosure_id for enclosure in self.enclosures]
        if len(enclosure_ids) != len(set(enclosure_ids)):
            raise ValueError("enclosure_id values must be unique")
        for species_id, species in self.species.items():
            if species_id != species.species_id:
                raise ValueError(
                    f"species key {species_id!r} does not match species_id {species.species_id!r}"
                )

    def find_species(self, species_id: object) -> Optional[Species]:
        if not isinstance(species_id, str):
            return None
        return self.species.get(species_id)


@dataclass(frozen=True)
class EnclosureOffer:
    enclosure_id: int
    free_space: int
    capacity: int

    @property
    def display_text(self) -> str:
        return (
            f"Enclosure {self.enclosure_id} "
            f"(free space: {self.free_space} total: {self.capacity})"
        )


@dataclass(frozen=True)
class AnalysisResult:
    """Either ranked viable offers or a failure kind, never both."""

    offers: tuple[EnclosureOffer, ...] = ()
    error: Optional[ErrorKind] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "offers", tuple(self.offers))
        if self.error is None and not self.offers:
            raise ValueError("AnalysisResult requires offers or an error")
        if self.error is not None and self.offers:
            raise ValueError("AnalysisResult cannot carry both offers and an error")

    @classmethod
    def success(cls, offers: tuple[EnclosureOffer, ...]) -> "AnalysisResult":
        return cls(offers=offers)

    @classmethod
    def failure(cls, error: ErrorKind) -> "AnalysisResult":
        return cls(error=error)

    @property
    def is_viable(self) -> bool:
        return self.error is None

    @property
    def viable_enclosures(self) -> list[str]:
        return [offer.display_text for offer in self.offers]
