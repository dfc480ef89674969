#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Display text helpers: summaries + max-level number scaling."""

from __future__ import annotations

import math
import re
from typing import Any

from core.gear.models import EquipmentRecord, SkillPlusStructured, SkillPlusText


NONE_MARK = "無"
MAX_LEVEL_FACTOR = 6

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
_BRACKET_RE = re.compile(r"「([^」]+)」")
_SKILL_BOILERPLATE_RE = re.compile(r"持有技能|的Ranger|Ranger|：")
_WS_RE = re.compile(r"\s+")


def normalize_range_text(s: Any) -> str:
    """Fullwidth tilde -> '~', drop all whitespace."""
    if not isinstance(s, str):
        return ""
    return _WS_RE.sub("", s.replace("～", "~"))


def extract_skill_phrase(condition: Any) -> str:
    if not isinstance(condition, str):
        return ""
    m = _BRACKET_RE.search(condition)
    if m:
        return m.group(1)
    return _SKILL_BOILERPLATE_RE.sub("", condition).strip()


def trigger_summary(record: EquipmentRecord) -> str:
    t = record.trigger_text.strip()
    return t or NONE_MARK


def skill_plus_summary(record: EquipmentRecord) -> str:
    sp = record.skill_plus
    if sp is None:
        return NONE_MARK
    if isinstance(sp, SkillPlusText):
        return sp.text.strip() or NONE_MARK
    if isinstance(sp, SkillPlusStructured):
        parts = []
        skill = extract_skill_phrase(sp.condition)
        mag = normalize_range_text(sp.magnitude)
        if skill:
            parts.append(skill)
        if mag:
            parts.append("+" + mag)
        return " ".join(parts) if parts else NONE_MARK
    raise TypeError(f"unknown Skill+ variant: {type(sp).__name__}")


def _fixed1(x: float) -> str:
    # no "-0.0"
    return f"{round(x, 1) or 0.0:.1f}"


def scale_numbers(value: Any, factor: float = MAX_LEVEL_FACTOR) -> str:
    """Multiply numbers by factor and show them with one decimal.

    Strings keep every non-numeric character (units, '%', '~', '+').
    """
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return str(value)
        return _fixed1(value * factor)

    def _sub(m: "re.Match[str]") -> str:
        try:
            num = float(m.group(0))
        except ValueError:
            return m.group(0)
        scaled = num * factor
        if not math.isfinite(scaled):
            return m.group(0)
        return _fixed1(scaled)

    return _NUMBER_RE.sub(_sub, str(value))
