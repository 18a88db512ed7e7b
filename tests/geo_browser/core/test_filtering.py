from __future__ import annotations

from geo_browser.core.csv_parser import parse_csv
from geo_browser.core.filtering import (
    COMBINED_NAME,
    filter_combined,
    filter_dataset,
    filter_records,
)
from geo_browser.core.selector import Selector


def _numeric(name="num.csv"):
    return parse_csv("lat,lng,score\n1,1,2\n2,2,9\n3,3,\n4,4,5\n5,5,x", name=name)


def _boolean(name="bool.csv"):
    return parse_csv("lat,lng,score\n1,1,yes\n2,2,no\n3,3,yes", name=name)


def test_filter_dataset_preserves_order():
    ds = _numeric()
    out = filter_dataset(ds, {ds.name: Selector(min=2.0, max=9.0)})
    assert [r["score"] for r in out.records] == ["2", "9", "5"]


def test_filter_dataset_is_idempotent():
    ds = _numeric()
    selectors = {ds.name: Selector(min=3.0, max=9.0)}

    once = filter_dataset(ds, selectors)
    twice = filter_dataset(once, selectors)

    assert twice.records == once.records


def test_filter_dataset_does_not_mutate_input():
    ds = _boolean()
    before = ds.records

    filter_dataset(ds, {ds.name: Selector(include_true=False)})

    assert ds.records == before


def test_dataset_without_selector_passes_through():
    ds = _numeric()
    assert filter_dataset(ds, {}) is ds


def test_unsupported_dataset_passes_through():
    ds = parse_csv("a,b\n1,2", name="odd.csv")
    assert ds.descriptor is None
    assert filter_dataset(ds, {ds.name: Selector(min=5.0)}) is ds


def test_unknown_kind_passes_through():
    ds = parse_csv("lat,lng,score\n1,1,\n2,2,", name="blank.csv")
    assert len(filter_dataset(ds, {ds.name: Selector()})) == 2


def test_filter_records_matches_filter_dataset():
    ds = _boolean()
    sel = Selector(include_false=False)

    assert filter_records(ds.records, ds.descriptor, sel) == filter_dataset(ds, {ds.name: sel}).records


def test_filter_combined_concatenates_in_insertion_order():
    num, boo = _numeric(), _boolean()
    selectors = {num.name: Selector(min=5.0, max=10.0), boo.name: Selector(include_true=False)}

    combined = filter_combined({boo.name: boo, num.name: num}, selectors)

    assert combined.name == COMBINED_NAME
    assert [r["score"] for r in combined.records] == ["no", "9", "5"]
