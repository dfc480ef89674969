# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .api import router as api_router
from .catalog_store import CatalogError, GearCatalogStore
from .icon_service import IconConfig, IconService
from .settings import GearFinderSettings
from .ui import render_index_html


logger = logging.getLogger(__name__)


def create_app(
    data_dir: Path,
    *,
    root_path: str = "",
    cors_allow_origins: Optional[Sequence[str]] = None,
    gzip_minimum_size: int = 800,
    auto_reload: bool = False,
    icons_mode: str = "static",
    settings: Optional[GearFinderSettings] = None,
) -> FastAPI:
    """FastAPI app factory.

    A dataset that fails to load does not stop the app: the UI shows the error
    and data endpoints answer 503.
    """

    cfg = settings or GearFinderSettings(
        data_dir=Path(data_dir),
        root_path=root_path,
        cors_allow_origins=list(cors_allow_origins) if cors_allow_origins else None,
        gzip_minimum_size=gzip_minimum_size,
        auto_reload=auto_reload,
    )
    rp = GearFinderSettings.normalize_root_path(cfg.root_path)

    app = FastAPI(
        title="GearFinder API",
        version=__version__,
        root_path=rp,
        docs_url="/docs",
        redoc_url=None,
    )

    # static: dataset directory (icons live under icon_dir/)
    app.mount("/static/data", StaticFiles(directory=str(cfg.data_dir), check_dir=False), name="static-data")

    # state
    app.state.settings = cfg
    app.state.store = GearCatalogStore(cfg.equipment_path, cfg.icon_index_path, load=False)
    app.state.load_error = ""
    try:
        app.state.store.load(force=True)
    except CatalogError as e:
        logger.error("Data load failed: %s", e)
        app.state.load_error = str(e)
    app.state.auto_reload = bool(cfg.auto_reload)
    app.state.max_level_factor = float(cfg.max_level_factor)

    app.state.icon_service = IconService(
        IconConfig(
            mode=str(icons_mode or "static"),
            icon_root=cfg.icon_root,
            icon_dir=cfg.icon_dir,
            suffix=cfg.icon_suffix,
            static_base="/static/data/",
        )
    )

    # middleware
    if cfg.gzip_minimum_size and cfg.gzip_minimum_size > 0:
        app.add_middleware(GZipMiddleware, minimum_size=int(cfg.gzip_minimum_size))

    if cfg.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(cfg.cors_allow_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # routes
    app.include_router(api_router)

    @app.get("/healthz")
    def healthz():
        return {"ok": True, "loaded": app.state.store.loaded}

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        # root_path is already applied by FastAPI; still need it for frontend URL prefixing
        root = request.scope.get("root_path") or ""
        return HTMLResponse(render_index_html(app_root=str(root)))

    return app
