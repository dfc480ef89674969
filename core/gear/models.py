#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Equipment data model.

The dataset is a JSON array of objects keyed by the source labels below.
Records are coerced leniently: a missing or wrong-typed field becomes the
empty value of its type, so one malformed entry never blocks the others.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union


# dataset key labels
KEY_NAME = "裝備名稱"
KEY_RARITY = "裝備星級"
KEY_SLOT = "裝備種類"
KEY_BASIC = "基本效果"
KEY_ADVANCED = "高級效果"
KEY_TRIGGER = "觸發條件"
KEY_TOGGLES = "可切換的效果"
KEY_SKILL_PLUS = "Skill+"

# structured Skill+ uses a few alternate labels; first present wins
SKILL_CONDITION_KEYS = ("觸發條件", "條件", "目標")
SKILL_MAGNITUDE_KEYS = ("強化幅度", "幅度", "加成", "效果")


def _first_present(raw: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for k in keys:
        v = raw.get(k)
        if v:
            return v
    return None


Rarity = Union[int, float]


def coerce_rarity(value: Any) -> Rarity:
    """Star tier; anything unparseable is 0.

    Whole numbers come back as int. A fractional tier is kept as is so it
    matches no star selection.
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        num = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(num):
        return 0
    return int(num) if num.is_integer() else num


@dataclass(frozen=True)
class SkillPlusText:
    text: str


@dataclass(frozen=True)
class SkillPlusStructured:
    condition: str
    magnitude: str


SkillPlus = Union[SkillPlusText, SkillPlusStructured]


def parse_skill_plus(raw: Any) -> Optional[SkillPlus]:
    if not raw:
        return None
    if isinstance(raw, str):
        return SkillPlusText(text=raw)
    if isinstance(raw, dict):
        cond = _first_present(raw, SKILL_CONDITION_KEYS)
        mag = _first_present(raw, SKILL_MAGNITUDE_KEYS)
        return SkillPlusStructured(
            condition=cond if isinstance(cond, str) else "",
            magnitude=mag if isinstance(mag, str) else "",
        )
    return None


@dataclass(frozen=True)
class AdvancedEffect:
    trigger_condition: str = ""
    toggles: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["AdvancedEffect"]:
        if not isinstance(raw, dict) or not raw:
            return None
        trig = raw.get(KEY_TRIGGER)
        toggles = raw.get(KEY_TOGGLES)
        return cls(
            trigger_condition=trig if isinstance(trig, str) else "",
            toggles=dict(toggles) if isinstance(toggles, dict) else {},
        )


@dataclass(frozen=True)
class EquipmentRecord:
    """One catalog entry (immutable after load)."""

    name: str = ""
    rarity: Rarity = 0
    slot_type: str = ""
    basic_effects: Dict[str, Any] = field(default_factory=dict)
    advanced: Optional[AdvancedEffect] = None
    skill_plus: Optional[SkillPlus] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_raw(cls, raw: Any) -> "EquipmentRecord":
        if not isinstance(raw, dict):
            return cls()
        name = raw.get(KEY_NAME)
        slot = raw.get(KEY_SLOT)
        basic = raw.get(KEY_BASIC)
        return cls(
            name=str(name) if name else "",
            rarity=coerce_rarity(raw.get(KEY_RARITY)),
            slot_type=str(slot) if slot else "",
            basic_effects=dict(basic) if isinstance(basic, dict) else {},
            advanced=AdvancedEffect.from_raw(raw.get(KEY_ADVANCED)),
            skill_plus=parse_skill_plus(raw.get(KEY_SKILL_PLUS)),
            raw=dict(raw),
        )

    @property
    def basic_keys(self) -> frozenset:
        return frozenset(self.basic_effects.keys())

    @property
    def trigger_text(self) -> str:
        return self.advanced.trigger_condition if self.advanced else ""
