#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Terminal front-end for the equipment catalog.

Notes
- Thin UI layer: loading lives in apps/gearfinder/catalog_store.py, filtering in core/gear.
- Usage:
    gearfinder facets
    gearfinder search --rarity 5 --slot 武器 --effect 攻擊力 --mode AND --tag 火 --max
    gearfinder show <裝備名稱>
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from apps.gearfinder.catalog_store import CatalogError, GearCatalogStore  # noqa: E402
from apps.gearfinder.settings import GearFinderSettings  # noqa: E402
from core.config.loader import ConfigLoader  # noqa: E402
from core.gear.facets import ATTR_OPTIONS, TYPECLASS_OPTIONS  # noqa: E402
from core.gear.models import EquipmentRecord  # noqa: E402
from core.gear.session import QuerySession  # noqa: E402
from core.gear.text import scale_numbers, skill_plus_summary, trigger_summary  # noqa: E402

console = Console()


def _split_tags(tags: List[str]):
    attrs = [t for t in tags if t in ATTR_OPTIONS]
    classes = [t for t in tags if t in TYPECLASS_OPTIONS]
    unknown = [t for t in tags if t not in ATTR_OPTIONS and t not in TYPECLASS_OPTIONS]
    return attrs, classes, unknown


def _basic_text(rec: EquipmentRecord, show_max: bool, factor: float) -> str:
    if not rec.basic_effects:
        return "（無）"
    lines = []
    for k, v in rec.basic_effects.items():
        val = scale_numbers(v, factor) if show_max else ("" if v is None else str(v))
        lines.append(f"{k}: {val}")
    return "\n".join(lines)


class GearLookup:
    def __init__(self, settings: GearFinderSettings):
        self.settings = settings
        try:
            self.store = GearCatalogStore(settings.equipment_path, settings.icon_index_path)
        except CatalogError as e:
            console.print(f"[red]自動載入失敗: {e}[/red]")
            sys.exit(1)
        self.session = QuerySession()

    def facets(self) -> None:
        table = Table(title="篩選條件", border_style="blue")
        table.add_column("Facet", style="cyan")
        table.add_column("Values", style="white")
        table.add_row("星數", " ".join(f"{i}★" for i in range(1, 9)))
        table.add_row("類型", "武器 防具 飾品")
        table.add_row("基礎效果", ", ".join(self.store.basic_keys()) or "-")
        table.add_row("觸發條件 (屬性)", " ".join(ATTR_OPTIONS))
        table.add_row("觸發條件 (類型)", " ".join(TYPECLASS_OPTIONS))
        console.print(table)

    def search(self, args: argparse.Namespace) -> int:
        attrs, classes, unknown = _split_tags(args.tag or [])
        if unknown:
            console.print(f"[yellow]忽略未知觸發條件: {', '.join(unknown)}[/yellow]")

        s = self.session
        s.clear_all()
        s.select("rarity", args.rarity or [])
        s.select("slot", args.slot or [])
        s.select("basic", args.effect or [])
        s.select("attr", attrs)
        s.select("class", classes)
        s.set_basic_mode(args.mode)
        out = s.search(self.store.records())

        if not out:
            console.print("[dim]沒有符合條件的裝備[/dim]")
            return 0

        factor = float(self.settings.max_level_factor)
        table = Table(title=f"符合條件的裝備：{len(out)} 件", border_style="blue", show_lines=True)
        table.add_column("裝備名稱", style="bold")
        table.add_column("星數", style="yellow", justify="right")
        table.add_column("類型", style="cyan")
        table.add_column("基本效果", style="white")
        table.add_column("觸發條件", style="dim")
        table.add_column("Skill+", style="green")
        for rec in out:
            table.add_row(
                rec.name or "（未命名）",
                f"{rec.rarity}★",
                rec.slot_type,
                _basic_text(rec, bool(args.max), factor),
                trigger_summary(rec),
                skill_plus_summary(rec),
            )
        console.print(table)
        return len(out)

    def show(self, name: str, show_max: bool = False) -> bool:
        rec = self.store.get(name)
        if rec is None:
            console.print(f"[red]未找到裝備: {name}[/red]")
            return False

        icon = self.store.icon_id(rec.name)
        lines = [
            f"[yellow]{rec.rarity}★[/yellow] | [cyan]{rec.slot_type}[/cyan]",
            f"圖示: {icon}" if icon else "圖示: 無圖",
            "",
            "[bold]基本效果[/bold]",
            _basic_text(rec, show_max, float(self.settings.max_level_factor)),
            "",
            "[bold]Skill+[/bold]",
            skill_plus_summary(rec),
            "",
            "[bold]高級效果[/bold]",
        ]
        adv = rec.advanced
        if adv is None:
            lines.append("（無高級效果）")
        else:
            lines.append(f"觸發條件：{adv.trigger_condition or '（無）'}")
            for k, v in adv.toggles.items():
                lines.append(f"・{k}：{v}")
        console.print(Panel("\n".join(lines), title=rec.name or "（未命名）", border_style="blue"))
        return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gearfinder", description="裝備查詢 (terminal)")
    parser.add_argument("--data-dir", default=None, help="Directory with 裝備資料庫.json and id_dict.json")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("facets", help="List filter values")

    p_search = sub.add_parser("search", help="Filter equipment")
    p_search.add_argument("--rarity", type=int, action="append", choices=range(1, 9), metavar="N")
    p_search.add_argument("--slot", action="append")
    p_search.add_argument("--effect", action="append", help="Basic effect key (repeatable)")
    p_search.add_argument("--mode", default="OR", choices=["OR", "AND", "or", "and"], help="Basic effect mode")
    p_search.add_argument("--tag", action="append", help="Trigger tag: 火/水/木/光/暗/智慧型/敏捷型/力量型")
    p_search.add_argument("--max", action="store_true", help="Show max-level values")

    p_show = sub.add_parser("show", help="Show one equipment")
    p_show.add_argument("name")
    p_show.add_argument("--max", action="store_true", help="Show max-level values")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    data_dir = Path(args.data_dir).expanduser() if args.data_dir else ConfigLoader().data_dir()
    app = GearLookup(GearFinderSettings(data_dir=data_dir))

    if args.command == "facets":
        app.facets()
    elif args.command == "search":
        app.search(args)
    elif args.command == "show":
        if not app.show(args.name, bool(args.max)):
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
