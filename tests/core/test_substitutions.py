"""Tests for substitution extraction."""

import pytest

from convergraph.core.substitutions import Substitution, extract_substitutions


def test_substitution_value_semantics():
    """Equality and hashing are structural."""
    a = Substitution(2, "D", "E")
    b = Substitution(2, "D", "E")
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != Substitution(2, "D", "G")
    assert a != Substitution(3, "D", "E")


def test_substitution_ordering_and_label():
    subs = [Substitution(10, "A", "V"), Substitution(2, "D", "G"), Substitution(2, "D", "E")]
    assert sorted(subs) == [
        Substitution(2, "D", "E"),
        Substitution(2, "D", "G"),
        Substitution(10, "A", "V"),
    ]
    assert Substitution(613, "D", "G").label == "D614G"
    assert str(Substitution(0, "M", "-")) == "M1-"


def test_substitution_from_bytes():
    assert Substitution.from_bytes(4, ord("K"), ord("*")) == Substitution(4, "K", "*")


def test_substitution_validation():
    with pytest.raises(ValueError):
        Substitution(-1, "A", "C")
    with pytest.raises(ValueError):
        Substitution(0, "AB", "C")


def test_extract_only_at_variable_positions():
    reference = b"MADKL"
    sequence = b"VAEKR"
    subs = extract_substitutions(sequence, reference, (2, 4))
    assert subs == (Substitution(2, "D", "E"), Substitution(4, "L", "R"))


def test_extract_identical_residues_yield_nothing():
    assert extract_substitutions(b"MAD", b"MAD", (0, 1, 2)) == ()


def test_extract_skips_out_of_range_positions():
    """Truncated sequences and short references are tolerated."""
    reference = b"MADK"
    assert extract_substitutions(b"MA", reference, (1, 2, 3)) == ()
    assert extract_substitutions(b"MADKLE", reference, (3, 4, 5)) == ()
    assert extract_substitutions(b"MAEKLE", reference, (2, 5)) == (Substitution(2, "D", "E"),)


def test_extract_is_case_sensitive():
    assert extract_substitutions(b"MAd", b"MAD", (2,)) == (Substitution(2, "D", "d"),)


def test_extract_includes_gaps_and_stops():
    subs = extract_substitutions(b"M-*", b"MAD", (1, 2))
    assert [s.label for s in subs] == ["A2-", "D3*"]
