# -*- coding: utf-8 -*-
"""Tests for facet extraction."""

from core.gear.facets import basic_effect_key_universe, record_trigger_tags, trigger_tags
from core.gear.models import EquipmentRecord


class TestBasicEffectUniverse:
    def test_sorted_distinct(self, records):
        keys = basic_effect_key_universe(records)
        assert keys == sorted({"攻擊力", "暴擊率", "防禦力", "生命值", "閃避率"})

    def test_empty(self):
        assert basic_effect_key_universe([]) == []
        assert basic_effect_key_universe([EquipmentRecord()]) == []


class TestTriggerTags:
    def test_attr_and_class(self):
        attrs, classes = trigger_tags("裝備者為火屬性的智慧型Ranger")
        assert attrs == {"火"}
        assert classes == {"智慧型"}

    def test_no_match(self):
        assert trigger_tags("隊伍人數達到5人") == (set(), set())

    def test_attr_needs_suffix(self):
        # bare "火" without "屬性" is not an attribute tag
        attrs, _ = trigger_tags("火焰傷害提升")
        assert attrs == set()

    def test_multiple(self):
        attrs, classes = trigger_tags("水屬性或光屬性的敏捷型、力量型")
        assert attrs == {"水", "光"}
        assert classes == {"敏捷型", "力量型"}

    def test_non_text(self):
        assert trigger_tags(None) == (set(), set())
        assert trigger_tags(12) == (set(), set())

    def test_record_union(self, records):
        assert record_trigger_tags(records[0]) == {"火", "力量型"}
        assert record_trigger_tags(records[2]) == set()
