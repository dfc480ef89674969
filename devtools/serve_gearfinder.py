#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Run GearFinder server (FastAPI + Uvicorn).

Usage:
  python3 devtools/serve_gearfinder.py --host 0.0.0.0 --port 20000 --no-open
"""

from __future__ import annotations

import argparse
import logging
import os
import socket
import sys
import webbrowser
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import uvicorn  # type: ignore

from apps.gearfinder.app import create_app  # noqa: E402
from core.config.loader import ConfigLoader  # noqa: E402


def _detect_lan_ip() -> str:
    """Best-effort LAN IP discovery (no external network required)."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        # doesn't need to be reachable; used to pick outbound interface
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"


def build_parser() -> argparse.ArgumentParser:
    cfg = ConfigLoader()
    parser = argparse.ArgumentParser(description="GearFinder (FastAPI) server.")
    parser.add_argument("--data-dir", default=str(cfg.data_dir()), help="Directory with 裝備資料庫.json, id_dict.json, gear_icon/")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--root-path",
        default=os.environ.get("GEARFINDER_ROOT_PATH", cfg.get("GEARFINDER", "ROOT_PATH", fallback="") or ""),
        help="Reverse proxy mount path, e.g. /gear",
    )
    parser.add_argument("--reload-data", action="store_true", help="Auto-reload dataset when files change")
    parser.add_argument("--no-open", action="store_true", help="Do not open browser")
    parser.add_argument("--log-level", default="info", choices=["critical", "error", "warning", "info", "debug", "trace"])
    parser.add_argument("--cors-allow-origin", action="append", default=[], help="CORS allow origin (repeatable)")
    parser.add_argument(
        "--icons",
        default=os.environ.get("GEARFINDER_ICONS_MODE", "static"),
        choices=["off", "static"],
        help="Icon mode: off|static (png)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.log_level in ("debug", "trace") else getattr(logging, args.log_level.upper()),
        format="%(levelname)s:     %(name)s - %(message)s",
    )

    data_dir = Path(args.data_dir).expanduser().resolve()
    if not data_dir.is_dir():
        print(f"❌ Data directory not found: {data_dir}")
        sys.exit(2)

    app = create_app(
        data_dir=data_dir,
        root_path=args.root_path,
        cors_allow_origins=(args.cors_allow_origin or None),
        gzip_minimum_size=800,
        auto_reload=bool(args.reload_data),
        icons_mode=str(args.icons),
    )

    host = str(args.host)
    port = int(args.port)

    # Print useful addresses
    rp = (args.root_path or "").rstrip("/")
    local_url = f"http://127.0.0.1:{port}{rp}/"
    if host == "0.0.0.0":
        lan_ip = _detect_lan_ip()
        open_url = f"http://{lan_ip}:{port}{rp}/"
        print(f"GearFinder: {open_url}")
        print(f"Open (local): {local_url}")
    else:
        open_url = f"http://{host}:{port}{rp}/"
        print(f"GearFinder: {open_url}")
    print(f"Data: {data_dir}")

    if not args.no_open:
        try:
            webbrowser.open(open_url)
        except webbrowser.Error:
            pass

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=args.log_level,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
