#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Per-session query state.

Selections change only through toggles; results change only on `search()`.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Set, Tuple

from core.gear.models import EquipmentRecord
from core.gear.query import FacetSelection, normalize_mode, search


class QuerySession:
    def __init__(self) -> None:
        self.selection = FacetSelection()
        self.results: Tuple[EquipmentRecord, ...] = ()

    def _facet_set(self, facet: str) -> Set[Any]:
        sel = self.selection
        table = {
            "rarity": sel.rarities,
            "slot": sel.slot_types,
            "basic": sel.basic_effects,
            "attr": sel.trigger_attrs,
            "class": sel.trigger_classes,
        }
        if facet not in table:
            raise KeyError(f"unknown facet: {facet}")
        return table[facet]

    def toggle(self, facet: str, value: Any, on: bool = True) -> None:
        target = self._facet_set(facet)
        if facet == "rarity":
            value = int(value)
        if on:
            target.add(value)
        else:
            target.discard(value)

    def select(self, facet: str, values: Iterable[Any]) -> None:
        for v in values or []:
            self.toggle(facet, v, True)

    def set_basic_mode(self, mode: str) -> None:
        self.selection.basic_mode = normalize_mode(mode)

    def clear_all(self) -> None:
        """Reset every selection and drop the last results.

        The basic-effects mode is a separate toggle and survives.
        """
        self.selection.clear()
        self.results = ()

    def search(self, records: Iterable[EquipmentRecord]) -> List[EquipmentRecord]:
        out = search(records, self.selection)
        self.results = tuple(out)
        return out
