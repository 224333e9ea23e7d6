"""Domain-level capacity and compatibility rules for enclosure analysis."""

from __future__ import annotations

from dataclasses import dataclass

from backend.domain.models import Enclosure, Species


@dataclass(frozen=True)
class AnalysisConfig:
    cohabitation_penalty: int = 1


def validate_analysis_config(config: AnalysisConfig) -> None:
    if isinstance(config.cohabitation_penalty, bool) or not isinstance(
        config.cohabitation_penalty, int
    ):
        raise ValueError("cohabitation_penalty must be an integer")
    if config.cohabitation_penalty < 0:
        raise ValueError("cohabitation_penalty must be >= 0")


def is_biome_compatible(enclosure: Enclosure, species: Species) -> bool:
    """Exact label match; composite labels are never split into parts."""
    return enclosure.biome in species.compatible_biomes


def cohabitation_penalty(
    enclosure: Enclosure,
    species: Species,
    config: AnalysisConfig,
) -> int:
    distinct_species = enclosure.residents | {species.species_id}
    if len(distinct_species) > 1:
        return config.cohabitation_penalty
    return 0


def compute_free_space(
    enclosure: Enclosure,
    species: Species,
    quantity: int,
    config: AnalysisConfig,
) -> int:
    projected_occupancy = enclosure.current_occupancy + quantity * species.unit_size
    penalty = cohabitation_penalty(enclosure, species, config)
    return enclosure.capacity - projected_occupancy - penalty
