# -*- coding: utf-8 -*-
"""Tests for summaries and max-level scaling."""

from core.gear.models import EquipmentRecord
from core.gear.text import (
    NONE_MARK,
    extract_skill_phrase,
    normalize_range_text,
    scale_numbers,
    skill_plus_summary,
    trigger_summary,
)


class TestScaleNumbers:
    def test_range_with_symbols(self):
        assert scale_numbers("12~34%", 6) == "72.0~204.0%"

    def test_numbers(self):
        assert scale_numbers(12, 6) == "72.0"
        assert scale_numbers(1.5, 6) == "9.0"
        assert scale_numbers(0.1, 6) == "0.6"

    def test_signed_and_decimal_text(self):
        assert scale_numbers("+10", 6) == "+60.0"
        assert scale_numbers("-3 秒", 2) == "-6.0 秒"
        assert scale_numbers("1.5%", 6) == "9.0%"

    def test_passthrough(self):
        assert scale_numbers("無", 6) == "無"
        assert scale_numbers(None, 6) == ""
        assert scale_numbers(float("inf"), 6) == "inf"

    def test_default_factor(self):
        assert scale_numbers("2~4%") == "12.0~24.0%"

    def test_negative_zero(self):
        assert scale_numbers("-0%", 6) == "0.0%"
        assert scale_numbers(-0.0, 6) == "0.0"
        assert scale_numbers("-0.001", 6) == "0.0"
        assert scale_numbers("-1", 6) == "-6.0"


class TestSkillPlusSummary:
    def test_structured(self):
        rec = EquipmentRecord.from_raw({"Skill+": {"觸發條件": "持有技能「猛攻」的Ranger", "強化幅度": "5~10"}})
        assert skill_plus_summary(rec) == "猛攻 +5~10"

    def test_structured_normalizes_magnitude(self):
        rec = EquipmentRecord.from_raw({"Skill+": {"條件": "「猛攻」", "幅度": " 5 ～ 10 "}})
        assert skill_plus_summary(rec) == "猛攻 +5~10"

    def test_structured_magnitude_only(self):
        rec = EquipmentRecord.from_raw({"Skill+": {"強化幅度": "3%"}})
        assert skill_plus_summary(rec) == "+3%"

    def test_structured_empty(self):
        rec = EquipmentRecord.from_raw({"Skill+": {"觸發條件": "", "備註": "x"}})
        assert skill_plus_summary(rec) == NONE_MARK

    def test_text(self):
        assert skill_plus_summary(EquipmentRecord.from_raw({"Skill+": " 暗影突襲 +3 "})) == "暗影突襲 +3"
        assert skill_plus_summary(EquipmentRecord.from_raw({"Skill+": "   "})) == NONE_MARK

    def test_absent(self):
        assert skill_plus_summary(EquipmentRecord()) == NONE_MARK


class TestHelpers:
    def test_extract_without_brackets(self):
        assert extract_skill_phrase("持有技能迅捷的Ranger：") == "迅捷"
        assert extract_skill_phrase(None) == ""

    def test_normalize_range(self):
        assert normalize_range_text("5 ～ 10") == "5~10"
        assert normalize_range_text(5) == ""

    def test_trigger_summary(self):
        assert trigger_summary(EquipmentRecord()) == NONE_MARK
        rec = EquipmentRecord.from_raw({"高級效果": {"觸發條件": "  火屬性 "}})
        assert trigger_summary(rec) == "火屬性"
        rec = EquipmentRecord.from_raw({"高級效果": {"觸發條件": "   "}})
        assert trigger_summary(rec) == NONE_MARK
