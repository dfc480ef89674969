# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, Field

from core.gear.facets import ATTR_OPTIONS, MODES, RARITY_OPTIONS, SLOT_OPTIONS, TYPECLASS_OPTIONS
from core.gear.query import FacetSelection, normalize_mode, search
from core.gear.text import MAX_LEVEL_FACTOR

from . import __version__
from .cards import card, detail
from .catalog_store import CatalogError, GearCatalogStore
from .icon_service import IconService


logger = logging.getLogger(__name__)


def get_store(request: Request) -> GearCatalogStore:
    """Resolve the catalog store from app state (with optional auto-reload)."""

    store: GearCatalogStore = request.app.state.store  # type: ignore[attr-defined]
    if bool(getattr(request.app.state, "auto_reload", False)):
        try:
            if store.load(force=False):
                request.app.state.load_error = ""
        except CatalogError as e:
            # keep serving the last good data
            logger.warning("Reload failed: %s", e)
            if not store.loaded:
                request.app.state.load_error = str(e)
    return store


def require_loaded(request: Request, store: GearCatalogStore = Depends(get_store)) -> GearCatalogStore:
    if not store.loaded:
        msg = str(getattr(request.app.state, "load_error", "") or "data not loaded")
        raise HTTPException(status_code=503, detail=msg)
    return store


def _icon_service(request: Request) -> Optional[IconService]:
    return getattr(request.app.state, "icon_service", None)


def _factor(request: Request) -> float:
    return float(getattr(request.app.state, "max_level_factor", MAX_LEVEL_FACTOR))


def _icon_url(request: Request, store: GearCatalogStore, name: str) -> Optional[str]:
    svc = _icon_service(request)
    if svc is None:
        return None
    root = request.scope.get("root_path") or ""
    return svc.icon_url(store.icon_id(name), app_root=str(root))


def _cache_headers(request: Request, *, max_age: int, etag: Optional[str] = None) -> Dict[str, str]:
    if max_age <= 0:
        return {}
    if bool(getattr(request.app.state, "auto_reload", False)):
        return {}
    headers = {"Cache-Control": f"public, max-age={int(max_age)}"}
    if etag:
        headers["ETag"] = str(etag)
    return headers


def _json(data: Dict[str, Any], *, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(content=data, headers=headers or {})


router = APIRouter(prefix="/api/v1")


class SearchRequest(BaseModel):
    rarities: List[int] = Field(default_factory=list)
    slot_types: List[str] = Field(default_factory=list)
    basic_effects: List[str] = Field(default_factory=list)
    basic_mode: str = "OR"
    trigger_attrs: List[str] = Field(default_factory=list)
    trigger_classes: List[str] = Field(default_factory=list)

    def to_selection(self) -> FacetSelection:
        return FacetSelection(
            rarities=set(self.rarities),
            slot_types=set(self.slot_types),
            basic_effects=set(self.basic_effects),
            basic_mode=normalize_mode(self.basic_mode),
            trigger_attrs=set(self.trigger_attrs),
            trigger_classes=set(self.trigger_classes),
        )


@router.get("/meta")
def meta(request: Request, store: GearCatalogStore = Depends(get_store)):
    m: Dict[str, Any] = {
        "version": __version__,
        "loaded": store.loaded,
        "load_error": str(getattr(request.app.state, "load_error", "") or ""),
        "count": store.count(),
        "max_level_factor": _factor(request),
    }
    svc = _icon_service(request)
    if svc is not None:
        m["icon"] = svc.cfg.to_public_dict()
    return m


@router.get("/facets")
def facets(request: Request, store: GearCatalogStore = Depends(require_loaded)):
    keys = store.basic_keys()
    etag = f'W/"facets-{int(store.mtime())}-{len(keys)}"'
    headers = _cache_headers(request, max_age=300, etag=etag)
    return _json(
        {
            "rarities": RARITY_OPTIONS,
            "slot_types": SLOT_OPTIONS,
            "basic_effects": keys,
            "trigger_attrs": ATTR_OPTIONS,
            "trigger_classes": TYPECLASS_OPTIONS,
            "modes": MODES,
        },
        headers=headers,
    )


@router.post("/search")
def run_search(req: SearchRequest, request: Request, store: GearCatalogStore = Depends(require_loaded)):
    selection = req.to_selection()
    out = search(store.records(), selection)
    factor = _factor(request)
    items = [card(r, _icon_url(request, store, r.name), factor, store.position(r)) for r in out]
    return {"items": items, "count": len(items), "basic_mode": selection.basic_mode}


@router.get("/items/{item_id}")
def item_detail(item_id: int, request: Request, store: GearCatalogStore = Depends(require_loaded)):
    """Detail view by record position (the `id` of a search card)."""
    rec = store.get_at(item_id)
    if rec is None:
        raise HTTPException(status_code=404, detail=f"Equipment not found: #{item_id}")
    return {"item": detail(rec, _icon_url(request, store, rec.name), _factor(request), item_id)}


@router.get("/icon/{name}.png")
def icon_png(
    name: str,
    request: Request,
    store: GearCatalogStore = Depends(get_store),
    size: Optional[int] = Query(None, ge=16, le=512),
):
    """Return an equipment icon as PNG, optionally as a square thumbnail."""

    svc = _icon_service(request)
    if svc is None:
        raise HTTPException(status_code=503, detail="Icon service not configured")

    icon_id = store.icon_id(name)
    if not icon_id:
        raise HTTPException(status_code=404, detail=f"No icon for: {name}")
    p = svc.ensure_icon(icon_id, size=size)
    if not p:
        raise HTTPException(status_code=404, detail=f"Icon file missing: {icon_id}")

    return FileResponse(path=str(p), media_type="image/png")
