"""Rounding helper checks."""

from arena.utils import round_half_away


def test_round_half_away_from_zero():
    assert round_half_away(62.5) == 63
    assert round_half_away(2.5) == 3
    assert round_half_away(2.4) == 2
    assert round_half_away(-2.5) == -3
    assert round_half_away(0.0) == 0
