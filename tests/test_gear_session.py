# -*- coding: utf-8 -*-
"""Tests for per-session selection state."""

import pytest

from core.gear.session import QuerySession


def test_search_is_explicit(records):
    s = QuerySession()
    s.toggle("rarity", 5)
    assert s.results == ()
    out = s.search(records)
    assert [r.name for r in out] == ["烈焰長劍", "暗影指環"]
    assert s.results == tuple(out)

    # changing the selection does not touch the last results
    s.toggle("rarity", 5, on=False)
    assert len(s.results) == 2


def test_toggle_coerces_rarity():
    s = QuerySession()
    s.toggle("rarity", "4")
    assert s.selection.rarities == {4}


def test_clear_all(records):
    s = QuerySession()
    s.select("slot", ["武器"])
    s.select("basic", ["攻擊力"])
    s.select("attr", ["火"])
    s.select("class", ["智慧型"])
    s.set_basic_mode("and")
    s.search(records)
    s.clear_all()
    assert s.selection.is_empty()
    assert s.results == ()
    assert s.selection.basic_mode == "AND"


def test_results_replaced_wholesale(records):
    s = QuerySession()
    s.select("slot", ["防具"])
    s.search(records)
    s.clear_all()
    s.select("slot", ["飾品"])
    s.search(records)
    assert [r.name for r in s.results] == ["暗影指環"]


def test_unknown_facet():
    with pytest.raises(KeyError):
        QuerySession().toggle("colour", "red")
