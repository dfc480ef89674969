# -*- coding: utf-8 -*-
"""Equipment catalog query engine (pure, no I/O)."""

from .facets import (  # noqa: F401
    ATTR_OPTIONS,
    MODE_AND,
    MODE_OR,
    RARITY_OPTIONS,
    SLOT_OPTIONS,
    TYPECLASS_OPTIONS,
    basic_effect_key_universe,
    trigger_tags,
)
from .models import EquipmentRecord, SkillPlusStructured, SkillPlusText  # noqa: F401
from .query import FacetSelection, search  # noqa: F401
from .session import QuerySession  # noqa: F401
from .text import scale_numbers, skill_plus_summary, trigger_summary  # noqa: F401
