"""Tests for title similarity scoring."""

import pytest

from bibunify.scoring import Algorithm, score, sorensen_dice

ALL_ALGORITHMS = list(Algorithm)


@pytest.mark.unit
@pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
def test_identical_strings_score_one(algorithm: Algorithm) -> None:
    """Test every algorithm returns 1.0 on equal input, empty included."""
    assert score("On Denoting", "On Denoting", algorithm) == 1.0
    assert score("", "", algorithm) == 1.0


@pytest.mark.unit
@pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
def test_empty_against_non_empty_scores_zero(algorithm: Algorithm) -> None:
    """Test an empty string shares nothing with a non-empty one."""
    assert score("", "abc", algorithm) == 0.0
    assert score("abc", "", algorithm) == 0.0


@pytest.mark.unit
@pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
@pytest.mark.parametrize(
    ("a", "b"),
    [
        ("Introduction to Semantics", "Introduction to Semantic"),
        ("Two Dogmas of Empiricism", "Die Grundlagen der Arithmetik"),
        ("a", "b"),
        ("Schließen", "Schliessen"),
    ],
)
def test_scores_within_unit_interval(algorithm: Algorithm, a: str, b: str) -> None:
    """Test scores stay in [0, 1] and are symmetric."""
    value = score(a, b, algorithm)

    assert 0.0 <= value <= 1.0
    assert value == pytest.approx(score(b, a, algorithm))


@pytest.mark.unit
def test_levenshtein_normalized_by_longest() -> None:
    """Test Levenshtein similarity is 1 - distance / max length."""
    assert score("kitten", "sitting", Algorithm.LEVENSHTEIN) == pytest.approx(4 / 7)
    assert score("ab", "ba", Algorithm.LEVENSHTEIN) == pytest.approx(0.0)


@pytest.mark.unit
def test_damerau_levenshtein_counts_transposition_once() -> None:
    """Test adjacent transposition costs a single edit."""
    assert score("ab", "ba", Algorithm.DAMERAU_LEVENSHTEIN) == pytest.approx(0.5)


@pytest.mark.unit
def test_jaro_and_jaro_winkler_reference_values() -> None:
    """Test the classic MARTHA/MARHTA example."""
    jaro = score("MARTHA", "MARHTA", Algorithm.JARO)
    jaro_winkler = score("MARTHA", "MARHTA", Algorithm.JARO_WINKLER)

    assert jaro == pytest.approx(17 / 18)
    assert jaro_winkler == pytest.approx(17 / 18 + 3 * 0.1 * (1 - 17 / 18))
    assert jaro_winkler > jaro


@pytest.mark.unit
def test_sorensen_dice_bigram_overlap() -> None:
    """Test Dice coefficient over character bigrams."""
    # ni ig gh ht / na ac ch ht -> one shared bigram out of eight
    assert sorensen_dice("night", "nacht") == pytest.approx(0.25)
    assert score("night", "nacht", Algorithm.SORENSEN_DICE) == pytest.approx(0.25)


@pytest.mark.unit
def test_sorensen_dice_ignores_whitespace_and_short_strings() -> None:
    """Test whitespace is removed and single characters share no bigram."""
    assert sorensen_dice("on denoting", "ondenoting") == 1.0
    assert sorensen_dice("a", "b") == 0.0
    assert sorensen_dice("a", "ab") == 0.0


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("levenshtein", Algorithm.LEVENSHTEIN),
        ("damerau-levenshtein", Algorithm.DAMERAU_LEVENSHTEIN),
        ("DAMERAU_LEVENSHTEIN", Algorithm.DAMERAU_LEVENSHTEIN),
        ("jaro_winkler", Algorithm.JARO_WINKLER),
        ("Sorensen-Dice", Algorithm.SORENSEN_DICE),
        (Algorithm.JARO, Algorithm.JARO),
    ],
)
def test_algorithm_from_name(name: str | Algorithm, expected: Algorithm) -> None:
    """Test algorithm names resolve from CLI and enum spellings."""
    assert Algorithm.from_name(name) is expected


@pytest.mark.unit
def test_algorithm_from_name_rejects_unknown() -> None:
    """Test unknown algorithm names raise ValueError listing the choices."""
    with pytest.raises(ValueError, match="levenshtein"):
        Algorithm.from_name("hamming")


@pytest.mark.unit
def test_score_accepts_algorithm_name() -> None:
    """Test the single entry point accepts names as well as members."""
    assert score("kitten", "sitting", "levenshtein") == score(
        "kitten", "sitting", Algorithm.LEVENSHTEIN
    )
