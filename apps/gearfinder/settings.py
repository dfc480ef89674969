# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from core.gear.text import MAX_LEVEL_FACTOR


@dataclass(frozen=True)
class GearFinderSettings:
    """Runtime settings for the GearFinder server.

    Notes
    - data_dir holds the equipment array, the name->icon id mapping and icon_dir/.
    - icon files are addressed as <icon_dir>/<icon id><icon_suffix>.
    - root_path is for reverse-proxy mount (e.g. '/gear')
    """

    data_dir: Path
    equipment_file: str = "裝備資料庫.json"
    icon_index_file: str = "id_dict.json"
    icon_dir: str = "gear_icon"
    icon_suffix: str = "_icon.png"
    root_path: str = ""
    max_level_factor: float = MAX_LEVEL_FACTOR
    cors_allow_origins: Optional[List[str]] = None
    gzip_minimum_size: int = 800
    auto_reload: bool = False

    @property
    def equipment_path(self) -> Path:
        return Path(self.data_dir) / self.equipment_file

    @property
    def icon_index_path(self) -> Path:
        return Path(self.data_dir) / self.icon_index_file

    @property
    def icon_root(self) -> Path:
        return Path(self.data_dir) / self.icon_dir

    @staticmethod
    def normalize_root_path(root_path: str) -> str:
        rp = (root_path or "").strip()
        if not rp:
            return ""
        if not rp.startswith("/"):
            rp = "/" + rp
        rp = rp.rstrip("/")
        return rp
