# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from PIL import Image


logger = logging.getLogger(__name__)

_SAFE_ID_RE = re.compile(r"^[A-Za-z0-9_\-]+$")

THUMB_SIZES = (48, 64, 96, 128, 144)


@dataclass(frozen=True)
class IconConfig:
    """Runtime icon configuration.

    mode:
      - off    : UI shows no icons (always the "no icon" placeholder)
      - static : icon PNGs are served as-is from the static data mount

    icon_root:
      - directory that contains <icon id><suffix> files, e.g. gear_icon/1001_icon.png

    static_base:
      - URL prefix of the static data mount; icon_dir is appended to it

    cache_dir:
      - where resized thumbnails are written (defaults to <icon_root>/.thumbs)
    """

    mode: str = "static"
    icon_root: Path = Path("data/public/gear_icon")
    icon_dir: str = "gear_icon"
    suffix: str = "_icon.png"
    static_base: str = "/static/data/"
    cache_dir: Optional[Path] = None

    def normalized_mode(self) -> str:
        m = (self.mode or "").strip().lower()
        if m in ("off", "0", "false", "none"):
            return "off"
        return "static"

    def to_public_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.normalized_mode(),
            "static_base": self.static_base,
            "icon_dir": self.icon_dir,
            "suffix": self.suffix,
            "api_base": "/api/v1/icon",
            "thumb_sizes": list(THUMB_SIZES),
        }


class IconService:
    """Icon URL + thumbnail helper.

    The service is safe for concurrent requests.
    """

    def __init__(self, cfg: IconConfig):
        self.cfg = cfg
        self._lock = threading.RLock()

    @staticmethod
    def is_safe_id(icon_id: str) -> bool:
        return bool(icon_id) and bool(_SAFE_ID_RE.match(icon_id))

    def _cache_dir(self) -> Path:
        return self.cfg.cache_dir or (self.cfg.icon_root / ".thumbs")

    def icon_path(self, icon_id: str) -> Path:
        return self.cfg.icon_root / f"{icon_id}{self.cfg.suffix}"

    def icon_url(self, icon_id: Optional[str], app_root: str = "") -> Optional[str]:
        """<static_base><icon_dir>/<id><suffix>, or None when there is no icon id."""
        if not icon_id or self.cfg.normalized_mode() == "off":
            return None
        if not self.is_safe_id(icon_id):
            return None
        base = self.cfg.static_base
        if not base.endswith("/"):
            base += "/"
        return f"{app_root or ''}{base}{self.cfg.icon_dir}/{icon_id}{self.cfg.suffix}"

    def resolve_existing(self, icon_id: Optional[str]) -> Optional[Path]:
        if not icon_id or not self.is_safe_id(icon_id):
            return None
        if self.cfg.normalized_mode() == "off":
            return None
        p = self.icon_path(icon_id)
        return p if p.exists() else None

    def ensure_icon(self, icon_id: Optional[str], size: Optional[int] = None) -> Optional[Path]:
        """Return the icon PNG path, or a cached square thumbnail when size is given.

        Unknown sizes snap to the nearest allowed one so the cache stays bounded.
        """
        src = self.resolve_existing(icon_id)
        if src is None:
            return None
        if not size:
            return src

        snap = min(THUMB_SIZES, key=lambda s: abs(s - int(size)))
        out = self._cache_dir() / f"{icon_id}_{snap}.png"
        with self._lock:
            try:
                if out.exists() and out.stat().st_mtime >= src.stat().st_mtime:
                    return out
            except OSError:
                pass
            if self._build_thumb(src, out, snap):
                return out
        return src

    # ----------------- internals -----------------

    def _build_thumb(self, src: Path, out: Path, size: int) -> bool:
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            with Image.open(src) as im:
                im = im.convert("RGBA")
                im.thumbnail((size, size), Image.LANCZOS)
                canvas = Image.new("RGBA", (size, size), (0, 0, 0, 0))
                canvas.paste(im, ((size - im.width) // 2, (size - im.height) // 2), im)
                canvas.save(out, format="PNG")
            return True
        except (OSError, ValueError) as e:
            logger.warning("Thumbnail failed for %s: %s", src, e)
            return False
