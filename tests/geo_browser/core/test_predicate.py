from __future__ import annotations

import pytest

from geo_browser.core.format_detection import ScoreKind
from geo_browser.core.predicate import retain
from geo_browser.core.selector import Selector


@pytest.mark.parametrize("kind", list(ScoreKind))
def test_blank_values_are_never_retained(kind):
    assert not retain("", kind, Selector())
    assert not retain("   ", kind, Selector())


def test_boolean_values_follow_include_flags():
    sel = Selector(include_true=True, include_false=False)
    kind = ScoreKind.BOOLEAN_PAIR

    assert retain("Yes", kind, sel)
    assert retain("true", kind, sel)
    assert not retain("no", kind, sel)
    assert not retain("maybe", kind, sel)


def test_numeric_bounds_are_inclusive():
    sel = Selector(min=3.0, max=7.0)
    kind = ScoreKind.NUMERIC_BOUNDED

    assert retain("3", kind, sel)
    assert retain("7", kind, sel)
    assert retain("7.0 points", kind, sel)
    assert not retain("2.99", kind, sel)
    assert not retain("7.01", kind, sel)
    assert not retain("n/a", kind, sel)


def test_open_bounds_accept_any_number():
    sel = Selector(min=None, max=None)
    assert retain("-1000", ScoreKind.NUMERIC_UNBOUNDED, sel)
    assert retain("1e6", ScoreKind.NUMERIC_UNBOUNDED, sel)


def test_categorical_values_are_retained():
    sel = Selector(include_true=False, include_false=False, min=9.0, max=9.0)
    assert retain("anything", ScoreKind.CATEGORICAL, sel)
