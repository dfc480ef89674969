#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Facet vocabularies and extraction."""

from __future__ import annotations

from typing import Any, Iterable, List, Set, Tuple

from core.gear.models import EquipmentRecord


RARITY_OPTIONS = list(range(1, 9))
SLOT_OPTIONS = ["武器", "防具", "飾品"]

# trigger tags: attributes are written as "<term>屬性" in the condition text
ATTR_OPTIONS = ["火", "水", "木", "光", "暗"]
ATTR_SUFFIX = "屬性"
TYPECLASS_OPTIONS = ["智慧型", "敏捷型", "力量型"]

MODE_OR = "OR"
MODE_AND = "AND"
MODES = [MODE_OR, MODE_AND]


def basic_effect_key_universe(records: Iterable[EquipmentRecord]) -> List[str]:
    keys: Set[str] = set()
    for rec in records or []:
        keys.update(rec.basic_effects.keys())
    return sorted(keys)


def trigger_tags(text: Any) -> Tuple[Set[str], Set[str]]:
    """Return (attribute tags, class tags) found in a trigger condition.

    Plain substring matching over free text. Non-text input gives two empty sets.
    """
    attrs: Set[str] = set()
    classes: Set[str] = set()
    if not isinstance(text, str) or not text:
        return attrs, classes
    for a in ATTR_OPTIONS:
        if (a + ATTR_SUFFIX) in text:
            attrs.add(a)
    for t in TYPECLASS_OPTIONS:
        if t in text:
            classes.add(t)
    return attrs, classes


def record_trigger_tags(record: EquipmentRecord) -> Set[str]:
    """Union of attribute and class tags for one record."""
    attrs, classes = trigger_tags(record.trigger_text)
    return attrs | classes
