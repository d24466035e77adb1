"""Tests for citation key allocation."""

import pytest

from bibunify.models import Collection
from bibunify.unify import allocate_identifier


@pytest.mark.unit
def test_free_identifier_is_returned_unchanged(make_record) -> None:
    """Test a key absent from the collection is kept."""
    collection = Collection([make_record("Frege1884")])

    assert allocate_identifier("Carnap1942", collection) == "Carnap1942"


@pytest.mark.unit
def test_taken_identifier_gets_first_free_suffix(make_record) -> None:
    """Test suffixes _1, _2, ... are probed in order."""
    collection = Collection([make_record("Carnap1942")])
    assert allocate_identifier("Carnap1942", collection) == "Carnap1942_1"

    collection.insert(make_record("Carnap1942_1"))
    assert allocate_identifier("Carnap1942", collection) == "Carnap1942_2"


@pytest.mark.unit
def test_gaps_are_filled_first(make_record) -> None:
    """Test the lowest free suffix wins even when higher ones exist."""
    collection = Collection([make_record("K"), make_record("K_2"), make_record("K_3")])

    assert allocate_identifier("K", collection) == "K_1"


@pytest.mark.unit
def test_counter_is_unbounded(make_record) -> None:
    """Test the probe counter keeps going past small integer limits."""
    collection = Collection([make_record("K")] + [make_record(f"K_{i}") for i in range(1, 300)])

    assert allocate_identifier("K", collection) == "K_300"


@pytest.mark.unit
def test_allocation_does_not_modify_collection(make_record) -> None:
    """Test allocation only reads the collection."""
    collection = Collection([make_record("K")])

    allocate_identifier("K", collection)

    assert collection.identifiers() == ["K"]
