# -*- coding: utf-8 -*-
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from core.gear.models import EquipmentRecord


RAW_RECORDS: List[Dict[str, Any]] = [
    {
        "裝備名稱": "烈焰長劍",
        "裝備星級": 5,
        "裝備種類": "武器",
        "基本效果": {"攻擊力": "+10", "暴擊率": "2~4%"},
        "高級效果": {
            "觸發條件": "隊伍中有3名以上火屬性的力量型Ranger",
            "可切換的效果": {"灼燒": "攻擊時有機率使目標灼燒"},
        },
        "Skill+": {"觸發條件": "持有技能「猛攻」的Ranger", "強化幅度": "5 ～ 10"},
    },
    {
        "裝備名稱": "清泉護甲",
        "裝備星級": 4,
        "裝備種類": "防具",
        "基本效果": {"防禦力": 12, "生命值": "+150"},
        "高級效果": {"觸發條件": "裝備者為水屬性智慧型"},
    },
    {
        "裝備名稱": "暗影指環",
        "裝備星級": 5,
        "裝備種類": "飾品",
        "基本效果": {"攻擊力": "+6", "閃避率": "1.5%"},
        "Skill+": "暗影突襲 +3",
    },
    {
        "裝備名稱": "木靈短弓",
        "裝備星級": 3,
        "裝備種類": "武器",
        "基本效果": {"攻擊力": "+4"},
        "高級效果": {"觸發條件": "木屬性敏捷型Ranger出戰時"},
    },
]

ICON_INDEX = {"烈焰長劍": "1001", "清泉護甲": "2004", "暗影指環": "3007"}


@pytest.fixture
def raw_records() -> List[Dict[str, Any]]:
    return json.loads(json.dumps(RAW_RECORDS, ensure_ascii=False))


@pytest.fixture
def records(raw_records) -> List[EquipmentRecord]:
    return [EquipmentRecord.from_raw(r) for r in raw_records]


def write_data_dir(root: Path, equipment: Any = None, icon_index: Any = None) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "裝備資料庫.json").write_text(
        json.dumps(RAW_RECORDS if equipment is None else equipment, ensure_ascii=False), encoding="utf-8"
    )
    (root / "id_dict.json").write_text(
        json.dumps(ICON_INDEX if icon_index is None else icon_index, ensure_ascii=False), encoding="utf-8"
    )
    return root


@pytest.fixture
def data_dir(tmp_path) -> Path:
    return write_data_dir(tmp_path / "public")


@pytest.fixture
def make_data_dir(tmp_path):
    def _make(name: str = "custom", equipment: Any = None, icon_index: Any = None) -> Path:
        return write_data_dir(tmp_path / name, equipment, icon_index)

    return _make
