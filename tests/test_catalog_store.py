# -*- coding: utf-8 -*-
"""Tests for dataset loading."""

import json
import os

import pytest

from apps.gearfinder.catalog_store import CatalogError, GearCatalogStore


def _store(root, **kw):
    return GearCatalogStore(root / "裝備資料庫.json", root / "id_dict.json", **kw)


class TestLoad:
    def test_loads_both_documents(self, data_dir):
        store = _store(data_dir)
        assert store.loaded
        assert store.count() == 4
        assert store.get("清泉護甲").slot_type == "防具"
        assert store.get("nope") is None
        assert store.icon_id("烈焰長劍") == "1001"
        assert store.icon_id("木靈短弓") is None
        assert store.basic_keys() == sorted({"攻擊力", "暴擊率", "防禦力", "生命值", "閃避率"})

    def test_missing_equipment(self, tmp_path):
        (tmp_path / "id_dict.json").write_text("{}", encoding="utf-8")
        with pytest.raises(CatalogError, match="not found"):
            _store(tmp_path)

    def test_missing_icon_index(self, make_data_dir):
        root = make_data_dir("x")
        (root / "id_dict.json").unlink()
        store = _store(root, load=False)
        with pytest.raises(CatalogError):
            store.load(force=True)
        assert not store.loaded
        assert store.records() == ()

    def test_invalid_json(self, make_data_dir):
        root = make_data_dir("bad")
        (root / "裝備資料庫.json").write_text("[{", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid JSON"):
            _store(root)

    def test_wrong_root_types(self, make_data_dir):
        with pytest.raises(CatalogError, match="array"):
            _store(make_data_dir("a", equipment={"x": 1}))
        with pytest.raises(CatalogError, match="object"):
            _store(make_data_dir("b", icon_index=["x"]))

    def test_malformed_entries_are_kept(self, make_data_dir):
        root = make_data_dir("m", equipment=[{"裝備名稱": "ok", "裝備星級": 2}, "junk", None])
        store = _store(root)
        assert store.count() == 3
        assert store.get("ok").rarity == 2

    def test_duplicate_name_first_wins(self, make_data_dir):
        root = make_data_dir("d", equipment=[{"裝備名稱": "dup", "裝備星級": 1}, {"裝備名稱": "dup", "裝備星級": 2}])
        store = _store(root)
        assert store.count() == 2
        assert store.get("dup").rarity == 1

    def test_positions_tell_duplicates_apart(self, make_data_dir):
        same = {"裝備名稱": "dup", "裝備星級": 1}
        root = make_data_dir("p", equipment=[same, dict(same), {"裝備名稱": "dup", "裝備星級": 2}])
        store = _store(root)
        recs = store.records()
        assert [store.position(r) for r in recs] == [0, 1, 2]
        assert store.get_at(2).rarity == 2
        assert store.get_at(1) is recs[1]
        assert store.get_at(3) is None
        assert store.get_at(-1) is None


class TestReload:
    def test_unchanged_is_noop(self, data_dir):
        store = _store(data_dir)
        assert store.load(force=False) is False

    def test_changed_file_reloads(self, data_dir):
        store = _store(data_dir)
        path = data_dir / "裝備資料庫.json"
        path.write_text(json.dumps([{"裝備名稱": "new", "裝備星級": 8}], ensure_ascii=False), encoding="utf-8")
        st = path.stat()
        os.utime(path, (st.st_atime, st.st_mtime + 10))
        assert store.load(force=False) is True
        assert store.count() == 1
        assert store.get("new").rarity == 8

    def test_failed_reload_keeps_previous(self, data_dir):
        store = _store(data_dir)
        path = data_dir / "裝備資料庫.json"
        path.write_text("oops", encoding="utf-8")
        st = path.stat()
        os.utime(path, (st.st_atime, st.st_mtime + 10))
        with pytest.raises(CatalogError):
            store.load(force=False)
        assert store.loaded
        assert store.count() == 4
