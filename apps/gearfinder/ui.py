# -*- coding: utf-8 -*-
from __future__ import annotations

from html import escape

# NOTE:
# - Keep HTML/JS as a normal triple-quoted string.
# - Do NOT use Python f-strings here: the template contains many `{}` (CSS/JS/template literals).

_INDEX_TEMPLATE = r"""<!doctype html>
<html lang="zh-Hant">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <meta name="app-root" content="__GEARFINDER_APP_ROOT__" />
  <title>裝備查詢系統</title>
  <style>
    :root {
      --bg: #09090b;
      --panel: #18181b;
      --panel2: #27272a;
      --text: #f4f4f5;
      --muted: #a1a1aa;
      --border: #3f3f46;
      --accent: #6366f1;
      --bad: #fca5a5;
    }
    html { font-size: 18px; }
    @media (min-width: 768px) { html { font-size: 19px; } }
    @media (min-width: 1280px) { html { font-size: 20px; } }
    body {
      margin: 0;
      background: var(--bg);
      color: var(--text);
      font-family: ui-sans-serif, system-ui, -apple-system, "Noto Sans TC", "Microsoft JhengHei", sans-serif;
    }
    .topbar {
      position: sticky;
      top: 0;
      z-index: 10;
      display: flex;
      align-items: center;
      gap: 12px;
      padding: 10px 16px;
      border-bottom: 1px solid var(--border);
      background: rgba(24, 24, 27, 0.92);
    }
    .topbar h1 { font-size: 1rem; margin: 0; }
    .topbar .hint { margin-left: auto; font-size: 0.65rem; color: var(--muted); }
    .layout {
      display: grid;
      grid-template-columns: 18rem 1fr;
      gap: 16px;
      padding: 16px;
      max-width: 80rem;
      margin: 0 auto;
    }
    @media (max-width: 767px) { .layout { grid-template-columns: 1fr; } }
    .box {
      border: 1px solid var(--border);
      border-radius: 14px;
      padding: 10px 12px;
      background: rgba(24, 24, 27, 0.4);
      margin-bottom: 12px;
    }
    .box.scroll { max-height: 16rem; overflow-y: auto; }
    .box-head { display: flex; align-items: center; justify-content: space-between; }
    .box-title { font-size: 0.75rem; font-weight: 600; }
    .grid { display: grid; gap: 0 8px; margin-top: 4px; }
    .g3 { grid-template-columns: repeat(3, 1fr); }
    .g4 { grid-template-columns: repeat(4, 1fr); }
    .g5 { grid-template-columns: repeat(5, 1fr); }
    .gauto { grid-template-columns: repeat(auto-fill, minmax(6rem, 1fr)); }
    label.chk { display: flex; align-items: center; gap: 6px; padding: 3px 0; font-size: 0.7rem; user-select: none; }
    .mode { display: inline-flex; border: 1px solid var(--border); border-radius: 8px; overflow: hidden; }
    .mode button { border: 0; border-radius: 0; padding: 3px 10px; font-size: 0.6rem; font-weight: 600; }
    .mode button.on { background: var(--border); color: #fff; }
    button {
      background: var(--panel2);
      color: var(--text);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 8px 10px;
      cursor: pointer;
    }
    button:disabled { opacity: 0.5; cursor: not-allowed; }
    button.primary { background: var(--accent); border-color: var(--accent); }
    .actions { display: flex; gap: 8px; margin-bottom: 12px; }
    .actions button { flex: 1; }
    .err {
      max-width: 80rem;
      margin: 16px auto 0;
      padding: 10px 12px;
      border: 1px solid #991b1b;
      border-radius: 12px;
      background: rgba(127, 29, 29, 0.2);
      color: var(--bad);
      font-size: 0.7rem;
      white-space: pre-wrap;
    }
    .status { font-size: 0.7rem; color: var(--muted); margin-bottom: 10px; }
    .cards { display: grid; grid-template-columns: repeat(auto-fill, minmax(16rem, 1fr)); gap: 12px; }
    .card { border: 1px solid var(--panel2); border-radius: 12px; padding: 12px; background: rgba(24, 24, 27, 0.4); }
    .thumb {
      width: 6rem; height: 6rem; margin: 0 auto;
      border-radius: 10px; background: var(--panel2);
      display: flex; align-items: center; justify-content: center; overflow: hidden;
    }
    .thumb img { width: 5rem; height: 5rem; object-fit: contain; }
    .thumb.big { width: 9rem; height: 9rem; }
    .thumb.big img { width: 8rem; height: 8rem; }
    .noimg { font-size: 0.5rem; color: var(--muted); }
    .center { text-align: center; }
    .name { font-weight: 700; margin-top: 10px; white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }
    .sub { font-size: 0.7rem; color: #d4d4d8; }
    .sec { margin-top: 10px; font-size: 0.7rem; }
    .sec .lbl { color: var(--muted); }
    .sec ul { margin: 4px 0 0; padding: 0; list-style: none; }
    .sec li { margin: 2px 0; }
    .pill { display: inline-block; padding: 1px 6px; font-size: 0.55rem; border: 1px solid var(--border); border-radius: 4px; }
    .overlay {
      position: fixed; inset: 0; z-index: 50;
      display: none; align-items: center; justify-content: center;
      background: rgba(0, 0, 0, 0.6); padding: 16px;
    }
    .overlay.open { display: flex; }
    .dialog { background: var(--panel); width: 100%; max-width: 48rem; border-radius: 16px; }
    .dialog-head { display: flex; gap: 16px; padding: 16px; border-bottom: 1px solid var(--panel2); }
    .dialog-body {
      max-height: 60vh; overflow-y: auto; padding: 16px;
      display: grid; grid-template-columns: 1fr 1fr; gap: 16px;
    }
    @media (max-width: 767px) { .dialog-body { grid-template-columns: 1fr; } }
    .dialog h3 { font-size: 0.8rem; margin: 0 0 8px; }
  </style>
</head>
<body>
  <header class="topbar">
    <h1>裝備查詢系統</h1>
    <div class="hint">四組條件（星數／類型／基礎效果／觸發條件）</div>
  </header>

  <div id="err" class="err" style="display:none"></div>

  <main class="layout">
    <aside>
      <div class="box">
        <div class="box-title">星數</div>
        <div id="f-rarity" class="grid g4"></div>
      </div>
      <div class="box">
        <div class="box-title">類型</div>
        <div id="f-slot" class="grid g3"></div>
      </div>
      <div class="box scroll">
        <div class="box-head">
          <div class="box-title">基礎效果</div>
          <div id="basic-mode" class="mode"></div>
        </div>
        <div id="f-basic" class="grid gauto"></div>
      </div>
      <div class="box">
        <div class="box-title">觸發條件</div>
        <div id="f-attr" class="grid g5"></div>
        <div id="f-class" class="grid g3"></div>
      </div>
      <div class="actions">
        <button id="btn-search" class="primary" disabled>搜尋</button>
        <button id="btn-clear">全部清空</button>
      </div>
      <div class="box">
        <div class="box-title">額外設置</div>
        <label class="chk"><input type="checkbox" id="show-max" /> 顯示滿等數值</label>
      </div>
    </aside>

    <section>
      <div id="status" class="status">正在載入資料…</div>
      <div id="cards" class="cards"></div>
    </section>
  </main>

  <div id="overlay" class="overlay">
    <div class="dialog" id="dialog"></div>
  </div>

  <script>
    const APP_ROOT = (document.querySelector('meta[name="app-root"]')?.content || '').replace(/\/$/, '');
    const api = (p) => APP_ROOT + p;
    const el = (id) => document.getElementById(id);

    const FACETS = ['rarity', 'slot', 'basic', 'attr', 'class'];
    const state = {
      loaded: false,
      facets: null,
      sel: { rarity: new Set(), slot: new Set(), basic: new Set(), attr: new Set(), class: new Set() },
      basicMode: 'OR',
      showMax: false,
      results: [],
    };

    function escHtml(s) {
      return String(s ?? '').replace(/[&<>"']/g, (c) => ({
        '&': '&amp;',
        '<': '&lt;',
        '>': '&gt;',
        '"': '&quot;',
        "'": '&#39;',
      }[c]));
    }

    async function fetchJson(url, opts) {
      const r = await fetch(url, Object.assign({ cache: 'no-cache' }, opts || {}));
      if (!r.ok) {
        let detail = '';
        try { detail = (await r.json()).detail || ''; } catch (e) { detail = r.statusText; }
        throw new Error(`HTTP ${r.status} ${detail}`);
      }
      return await r.json();
    }

    function setError(msg) {
      const box = el('err');
      if (!msg) { box.style.display = 'none'; box.textContent = ''; return; }
      box.style.display = 'block';
      box.textContent = '自動載入失敗，請確認資料目錄內是否包含「裝備資料庫.json」「id_dict.json」與「gear_icon/」。\n錯誤：' + msg;
    }

    function checkboxes(containerId, facet, values, labelFn) {
      const box = el(containerId);
      box.innerHTML = values.map((v) => `
        <label class="chk">
          <input type="checkbox" data-facet="${facet}" data-value="${escHtml(v)}" />
          <span>${escHtml(labelFn ? labelFn(v) : v)}</span>
        </label>`).join('');
      box.querySelectorAll('input').forEach((inp) => {
        inp.addEventListener('change', () => {
          const raw = inp.dataset.value;
          const v = facet === 'rarity' ? Number(raw) : raw;
          if (inp.checked) state.sel[facet].add(v); else state.sel[facet].delete(v);
        });
      });
    }

    function renderMode() {
      el('basic-mode').innerHTML = ['OR', 'AND'].map((m) =>
        `<button data-mode="${m}" class="${state.basicMode === m ? 'on' : ''}">${m}</button>`).join('');
      el('basic-mode').querySelectorAll('button').forEach((b) => {
        b.addEventListener('click', () => { state.basicMode = b.dataset.mode; renderMode(); });
      });
    }

    function renderFilters() {
      const f = state.facets;
      checkboxes('f-rarity', 'rarity', f.rarities, (s) => `${s}★`);
      checkboxes('f-slot', 'slot', f.slot_types);
      checkboxes('f-basic', 'basic', f.basic_effects);
      checkboxes('f-attr', 'attr', f.trigger_attrs);
      checkboxes('f-class', 'class', f.trigger_classes);
      renderMode();
    }

    function thumbHtml(url, big) {
      const cls = big ? 'thumb big' : 'thumb';
      if (!url) return `<div class="${cls}"><span class="noimg">無圖</span></div>`;
      return `<div class="${cls}"><img src="${escHtml(url)}" alt="eq" /></div>`;
    }

    function basicHtml(rows) {
      if (!rows || !rows.length) return '<div class="lbl">（無）</div>';
      return '<ul>' + rows.map((r) =>
        `<li>${escHtml(r.key)}: ${escHtml(state.showMax ? r.value_max : r.value)}</li>`).join('') + '</ul>';
    }

    function renderResults() {
      const status = el('status');
      if (!state.loaded) status.textContent = '正在載入資料…';
      else if (state.results.length) status.textContent = `符合條件的裝備：${state.results.length} 件`;
      else status.textContent = '請設定條件後按「搜尋」。';

      el('cards').innerHTML = state.results.map((it, i) => `
        <div class="card">
          ${thumbHtml(it.icon_url, false)}
          <div class="center"><button class="sub" data-detail="${i}" style="margin-top:8px">查看詳情</button></div>
          <div class="name center">${escHtml(it.display_name)}</div>
          <div class="sub center">${escHtml(it.rarity_label)} <span>|</span> ${escHtml(it.slot_type)}</div>
          <div class="sec"><div class="lbl">基本效果：</div>${basicHtml(it.basic)}</div>
          <div class="sec"><div class="lbl">高級效果觸發條件：</div><div>${escHtml(it.trigger)}</div></div>
          <div class="sec"><div class="lbl">Skill+：</div><div>${escHtml(it.skill_plus)}</div></div>
        </div>`).join('');
      el('cards').querySelectorAll('button[data-detail]').forEach((b) => {
        b.addEventListener('click', () => openDetail(state.results[Number(b.dataset.detail)]));
      });
    }

    function openDetail(d) {
      // the card already carries the detail fields; names may repeat
      const adv = d.advanced;
      let advHtml = '<div class="lbl">（無高級效果）</div>';
      if (adv) {
        advHtml = `<div><span class="lbl">觸發條件：</span>${escHtml(adv.trigger_condition || '（無）')}</div>`;
        if (adv.toggles && adv.toggles.length) {
          advHtml += '<div class="lbl" style="margin-top:8px">可切換的效果：</div><ul>' +
            adv.toggles.map((t) => `<li>・${escHtml(t.name)}：${escHtml(t.description)}</li>`).join('') + '</ul>';
        }
      }
      el('dialog').innerHTML = `
        <div class="dialog-head">
          ${thumbHtml(d.icon_url, true)}
          <div style="flex:1;min-width:0">
            <div class="name" style="margin-top:0">${escHtml(d.display_name)}</div>
            <div class="sub" style="margin-top:4px">
              <span class="pill">${escHtml(d.rarity_label)}</span> | <span class="pill">${escHtml(d.slot_type)}</span>
            </div>
          </div>
          <button id="btn-close">關閉</button>
        </div>
        <div class="dialog-body">
          <section class="sec">
            <h3>基本效果</h3>${basicHtml(d.basic)}
            <h3 style="margin-top:16px">Skill+</h3><div>${escHtml(d.skill_plus)}</div>
          </section>
          <section class="sec"><h3>高級效果</h3>${advHtml}</section>
        </div>`;
      el('btn-close').addEventListener('click', closeDetail);
      el('overlay').classList.add('open');
    }

    function closeDetail() {
      el('overlay').classList.remove('open');
      el('dialog').innerHTML = '';
    }

    async function doSearch() {
      if (!state.loaded) return;
      const body = {
        rarities: [...state.sel.rarity],
        slot_types: [...state.sel.slot],
        basic_effects: [...state.sel.basic],
        basic_mode: state.basicMode,
        trigger_attrs: [...state.sel.attr],
        trigger_classes: [...state.sel.class],
      };
      try {
        const res = await fetchJson(api('/api/v1/search'), {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body),
        });
        state.results = res.items || [];
      } catch (e) {
        setError(String(e.message || e));
        state.results = [];
      }
      renderResults();
    }

    function clearAll() {
      FACETS.forEach((f) => state.sel[f].clear());
      document.querySelectorAll('aside input[data-facet]').forEach((inp) => { inp.checked = false; });
      state.results = [];
      renderResults();
    }

    async function init() {
      el('btn-search').addEventListener('click', doSearch);
      el('btn-clear').addEventListener('click', clearAll);
      el('show-max').addEventListener('change', (e) => { state.showMax = e.target.checked; renderResults(); });
      el('overlay').addEventListener('click', (e) => { if (e.target === el('overlay')) closeDetail(); });

      try {
        const meta = await fetchJson(api('/api/v1/meta'));
        if (!meta.loaded) throw new Error(meta.load_error || 'data not loaded');
        state.facets = await fetchJson(api('/api/v1/facets'));
        state.loaded = true;
        el('btn-search').disabled = false;
        renderFilters();
      } catch (e) {
        console.error(e);
        setError(String(e.message || e));
      }
      renderResults();
    }

    init();
  </script>
</body>
</html>
"""


def render_index_html(app_root: str = "") -> str:
    """Render the UI page.

    app_root:
      - ""       normal direct serving
      - "/xxx"   reverse proxy mount path
    """
    return _INDEX_TEMPLATE.replace("__GEARFINDER_APP_ROOT__", escape(app_root or ""))
