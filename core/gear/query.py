#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Facet filtering + result ordering.

Facets are combined with AND. Inside a facet:
- rarity / slot type: membership (OR)
- basic effects: OR (any selected key) or AND (all selected keys)
- trigger tags: attribute + class selections merged, always OR
An empty selection never filters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, Any, Iterable, List, Set

from core.gear.facets import MODE_AND, MODE_OR, record_trigger_tags
from core.gear.models import EquipmentRecord


def normalize_mode(mode: Any) -> str:
    m = str(mode or "").strip().upper()
    return MODE_AND if m == MODE_AND else MODE_OR


@dataclass
class FacetSelection:
    rarities: Set[int] = field(default_factory=set)
    slot_types: Set[str] = field(default_factory=set)
    basic_effects: Set[str] = field(default_factory=set)
    basic_mode: str = MODE_OR
    trigger_attrs: Set[str] = field(default_factory=set)
    trigger_classes: Set[str] = field(default_factory=set)

    def trigger_tags(self) -> Set[str]:
        return set(self.trigger_attrs) | set(self.trigger_classes)

    def is_empty(self) -> bool:
        return not (
            self.rarities or self.slot_types or self.basic_effects or self.trigger_attrs or self.trigger_classes
        )

    def clear(self) -> None:
        self.rarities.clear()
        self.slot_types.clear()
        self.basic_effects.clear()
        self.trigger_attrs.clear()
        self.trigger_classes.clear()


def match_category_value(value: Any, selected: AbstractSet[Any], mode: str = MODE_OR) -> bool:
    """Single-valued facet check.

    In AND mode the facet behaves as single-select: exactly one value may be
    selected and it must equal the record's value.
    """
    if not selected:
        return True
    if normalize_mode(mode) == MODE_OR:
        return value in selected
    return len(selected) == 1 and value in selected


def match_effect_keys(keys: AbstractSet[str], selected: AbstractSet[str], mode: str = MODE_OR) -> bool:
    if not selected:
        return True
    inter = set(selected) & set(keys)
    if normalize_mode(mode) == MODE_AND:
        return len(inter) == len(selected)
    return len(inter) > 0


def matches(record: EquipmentRecord, selection: FacetSelection) -> bool:
    if not match_category_value(record.rarity, selection.rarities, MODE_OR):
        return False
    if not match_category_value(record.slot_type, selection.slot_types, MODE_OR):
        return False
    if not match_effect_keys(record.basic_keys, selection.basic_effects, selection.basic_mode):
        return False
    tags = selection.trigger_tags()
    if tags and not match_effect_keys(record_trigger_tags(record), tags, MODE_OR):
        return False
    return True


def _text_key(s: str):
    # case-insensitive first; on a tie lowercase sorts before uppercase
    return (s.casefold(), s.swapcase())


def sort_key(record: EquipmentRecord):
    return (-record.rarity, _text_key(record.slot_type), _text_key(record.name))


def sort_records(records: Iterable[EquipmentRecord]) -> List[EquipmentRecord]:
    """Rarity desc, then slot type, then name (case-insensitive)."""
    return sorted(records, key=sort_key)


def search(records: Iterable[EquipmentRecord], selection: FacetSelection) -> List[EquipmentRecord]:
    return sort_records(r for r in (records or []) if matches(r, selection))
