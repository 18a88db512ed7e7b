from __future__ import annotations

from geo_browser.core.format_detection import ScoreKind
from geo_browser.core.naming import display_name


def test_display_name_title_cases_words():
    assert display_name("tree_health-survey.csv") == "Tree Health Survey"
    assert display_name("AIR_quality.CSV") == "Air Quality"


def test_display_name_adds_kind_suffix():
    assert display_name("lights.csv", ScoreKind.BOOLEAN_PAIR) == "Lights (Yes/No)"
    assert display_name("parks.csv", ScoreKind.NUMERIC_BOUNDED) == "Parks (1-10)"
    assert display_name("noise.csv", ScoreKind.NUMERIC_UNBOUNDED) == "Noise (numeric_unbounded)"
