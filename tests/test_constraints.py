"""Tests for the capacity and compatibility rules in backend.domain.constraints."""

from __future__ import annotations

import pytest

from backend.domain.constraints import (
    AnalysisConfig,
    cohabitation_penalty,
    compute_free_space,
    is_biome_compatible,
    validate_analysis_config,
)
from backend.domain.models import Enclosure, Species


MONKEY = Species("MONKEY", 1, ("savanna", "forest"))
HIPPO = Species("HIPPO", 4, ("savanna", "river"))


# --- validate_analysis_config ---

def test_default_config_passes() -> None:
    validate_analysis_config(AnalysisConfig())


def test_zero_penalty_passes() -> None:
    validate_analysis_config(AnalysisConfig(cohabitation_penalty=0))


def test_negative_penalty_raises() -> None:
    with pytest.raises(ValueError):
        validate_analysis_config(AnalysisConfig(cohabitation_penalty=-1))


def test_non_integer_penalty_raises() -> None:
    with pytest.raises(ValueError):
        validate_analysis_config(AnalysisConfig(cohabitation_penalty=1.5))


def test_boolean_penalty_raises() -> None:
    with pytest.raises(ValueError):
        validate_analysis_config(AnalysisConfig(cohabitation_penalty=True))


# --- is_biome_compatible ---

def test_listed_biome_is_compatible() -> None:
    assert is_biome_compatible(Enclosure(1, "forest", 5, 0), MONKEY)


def test_unlisted_biome_is_not_compatible() -> None:
    assert not is_biome_compatible(Enclosure(1, "river", 5, 0), MONKEY)


def test_composite_label_is_not_split_into_constituents() -> None:
    """'savanna-and-river' is its own label, even for a savanna+river species."""
    assert not is_biome_compatible(Enclosure(1, "savanna-and-river", 7, 0), HIPPO)


def test_composite_label_matches_when_listed_verbatim() -> None:
    species = Species("OTTER", 1, ("savanna-and-river",))
    assert is_biome_compatible(Enclosure(1, "savanna-and-river", 7, 0), species)


# --- cohabitation_penalty / compute_free_space ---

def test_no_penalty_for_empty_enclosure() -> None:
    enclosure = Enclosure(2, "forest", 5, 0)
    assert cohabitation_penalty(enclosure, MONKEY, AnalysisConfig()) == 0


def test_no_penalty_when_only_same_species_resident() -> None:
    enclosure = Enclosure(1, "savanna", 10, 3, frozenset({"MONKEY"}))
    assert cohabitation_penalty(enclosure, MONKEY, AnalysisConfig()) == 0


def test_penalty_when_other_species_resident() -> None:
    enclosure = Enclosure(5, "savanna", 9, 3, frozenset({"LION"}))
    assert cohabitation_penalty(enclosure, MONKEY, AnalysisConfig()) == 1


def test_penalty_applied_once_for_many_resident_species() -> None:
    enclosure = Enclosure(5, "savanna", 20, 3, frozenset({"LION", "GAZELLE", "MONKEY"}))
    assert cohabitation_penalty(enclosure, MONKEY, AnalysisConfig()) == 1


def test_penalty_follows_configured_units() -> None:
    enclosure = Enclosure(5, "savanna", 9, 3, frozenset({"LION"}))
    assert cohabitation_penalty(enclosure, MONKEY, AnalysisConfig(cohabitation_penalty=3)) == 3


def test_free_space_single_species() -> None:
    enclosure = Enclosure(1, "savanna", 10, 3, frozenset({"MONKEY"}))
    assert compute_free_space(enclosure, MONKEY, 1, AnalysisConfig()) == 6


def test_free_space_mixed_species_includes_penalty() -> None:
    enclosure = Enclosure(1, "savanna", 10, 3, frozenset({"MONKEY"}))
    assert compute_free_space(enclosure, HIPPO, 1, AnalysisConfig()) == 2


def test_free_space_can_go_negative() -> None:
    enclosure = Enclosure(2, "forest", 5, 0)
    assert compute_free_space(enclosure, MONKEY, 6, AnalysisConfig()) == -1
