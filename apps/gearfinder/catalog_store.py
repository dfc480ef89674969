# -*- coding: utf-8 -*-
from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from core.gear.facets import basic_effect_key_universe
from core.gear.models import EquipmentRecord


logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    pass


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CatalogError(f"Data file not found: {path}") from e
    except OSError as e:
        raise CatalogError(f"Data file unreadable: {path} ({e})") from e
    try:
        return json.loads(text)
    except ValueError as e:
        raise CatalogError(f"Invalid JSON in {path}: {e}") from e


class GearCatalogStore:
    """Load + index the equipment dataset and icon index (thread-safe).

    Data source (both required):
      - <data_dir>/裝備資料庫.json : array of equipment objects
      - <data_dir>/id_dict.json    : {equipment name: icon id}

    A failed load leaves the store empty; callers check `loaded`.
    """

    def __init__(self, equipment_path: Path, icon_index_path: Path, *, load: bool = True):
        self._equipment_path = Path(equipment_path)
        self._icon_index_path = Path(icon_index_path)
        self._lock = threading.RLock()
        self._mtime: Tuple[float, float] = (-1.0, -1.0)

        self._loaded = False
        self._records: Tuple[EquipmentRecord, ...] = ()
        self._by_name: Dict[str, EquipmentRecord] = {}
        self._positions: Dict[int, int] = {}
        self._icon_index: Dict[str, str] = {}
        self._basic_keys: List[str] = []

        if load:
            self.load(force=True)

    @property
    def equipment_path(self) -> Path:
        return self._equipment_path

    @property
    def icon_index_path(self) -> Path:
        return self._icon_index_path

    @property
    def loaded(self) -> bool:
        with self._lock:
            return self._loaded

    def mtime(self) -> float:
        with self._lock:
            return float(max(self._mtime))

    # ----------------- load / reload -----------------

    def _stat(self) -> Tuple[float, float]:
        out = []
        for p in (self._equipment_path, self._icon_index_path):
            try:
                out.append(p.stat().st_mtime)
            except FileNotFoundError as e:
                raise CatalogError(f"Data file not found: {p}") from e
        return out[0], out[1]

    def load(self, force: bool = False) -> bool:
        """Load both documents if changed.

        Returns True if reload occurred. Raises CatalogError when either
        document is missing or has the wrong shape; the previous state is kept.
        """
        with self._lock:
            mtime = self._stat()
            if (not force) and self._loaded and self._mtime == mtime:
                return False

            equip_doc = _read_json(self._equipment_path)
            icon_doc = _read_json(self._icon_index_path)
            self._validate(equip_doc, icon_doc)

            self._build_indexes(equip_doc, icon_doc)
            self._mtime = mtime
            self._loaded = True
            logger.info(
                "Loaded %d equipment records, %d icon ids from %s",
                len(self._records), len(self._icon_index), self._equipment_path.parent,
            )
            return True

    def _validate(self, equip_doc: Any, icon_doc: Any) -> None:
        if not isinstance(equip_doc, list):
            raise CatalogError(f"Equipment document must be a JSON array: {self._equipment_path}")
        if not isinstance(icon_doc, dict):
            raise CatalogError(f"Icon index must be a JSON object: {self._icon_index_path}")

    def _build_indexes(self, equip_doc: List[Any], icon_doc: Dict[str, Any]) -> None:
        records: List[EquipmentRecord] = []
        by_name: Dict[str, EquipmentRecord] = {}
        for i, raw in enumerate(equip_doc):
            if not isinstance(raw, dict):
                logger.warning("Equipment entry #%d is not an object; using empty record", i)
            rec = EquipmentRecord.from_raw(raw)
            records.append(rec)
            # first entry wins for detail lookup
            if rec.name and rec.name not in by_name:
                by_name[rec.name] = rec

        self._records = tuple(records)
        self._by_name = by_name
        # keyed by object identity: equal-looking duplicates keep distinct positions
        self._positions = {id(r): i for i, r in enumerate(self._records)}
        self._icon_index = {str(k): str(v) for k, v in icon_doc.items() if k and v}
        self._basic_keys = basic_effect_key_universe(self._records)

    # ----------------- queries -----------------

    def records(self) -> Tuple[EquipmentRecord, ...]:
        with self._lock:
            return self._records

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def get(self, name: str) -> Optional[EquipmentRecord]:
        if not name:
            return None
        with self._lock:
            return self._by_name.get(str(name))

    def basic_keys(self) -> List[str]:
        with self._lock:
            return list(self._basic_keys)

    def icon_id(self, name: str) -> Optional[str]:
        if not name:
            return None
        with self._lock:
            return self._icon_index.get(str(name))

    def get_at(self, position: int) -> Optional[EquipmentRecord]:
        """Record by its position in the equipment document."""
        with self._lock:
            if 0 <= int(position) < len(self._records):
                return self._records[int(position)]
            return None

    def position(self, record: EquipmentRecord) -> Optional[int]:
        with self._lock:
            return self._positions.get(id(record))
