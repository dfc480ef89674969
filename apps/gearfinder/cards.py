# -*- coding: utf-8 -*-
"""JSON payloads for result cards and the detail view."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from core.gear.facets import record_trigger_tags
from core.gear.models import EquipmentRecord
from core.gear.text import MAX_LEVEL_FACTOR, scale_numbers, skill_plus_summary, trigger_summary


UNNAMED = "（未命名）"


def _value_text(v: Any) -> str:
    return "" if v is None else str(v)


def basic_rows(record: EquipmentRecord, factor: float = MAX_LEVEL_FACTOR) -> List[Dict[str, str]]:
    """One row per basic effect, with the max-level text precomputed."""
    return [
        {"key": str(k), "value": _value_text(v), "value_max": scale_numbers(v, factor)}
        for k, v in record.basic_effects.items()
    ]


def advanced_payload(record: EquipmentRecord) -> Optional[Dict[str, Any]]:
    adv = record.advanced
    if adv is None:
        return None
    return {
        "trigger_condition": adv.trigger_condition,
        "toggles": [{"name": str(k), "description": _value_text(v)} for k, v in adv.toggles.items()],
    }


def card(
    record: EquipmentRecord,
    icon_url: Optional[str] = None,
    factor: float = MAX_LEVEL_FACTOR,
    position: Optional[int] = None,
) -> Dict[str, Any]:
    """Card payload; carries everything the detail dialog shows.

    `id` is the record's position in the equipment document (names may repeat).
    """
    return {
        "id": position,
        "name": record.name,
        "display_name": record.name or UNNAMED,
        "rarity": record.rarity,
        "rarity_label": f"{record.rarity}★",
        "slot_type": record.slot_type,
        "icon_url": icon_url,
        "basic": basic_rows(record, factor),
        "trigger": trigger_summary(record),
        "skill_plus": skill_plus_summary(record),
        "tags": sorted(record_trigger_tags(record)),
        "advanced": advanced_payload(record),
    }


def detail(
    record: EquipmentRecord,
    icon_url: Optional[str] = None,
    factor: float = MAX_LEVEL_FACTOR,
    position: Optional[int] = None,
) -> Dict[str, Any]:
    out = card(record, icon_url, factor, position)
    out["raw"] = record.raw
    return out
