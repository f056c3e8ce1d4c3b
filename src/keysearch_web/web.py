from __future__ import annotations
import argparse
import logging

from flask import Flask, Response, jsonify, request

from keysearch import config as CFG
from keysearch.engine import Engine

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: Engine | None = None


def _require_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized")
    return _engine


@app.errorhandler(ValueError)
def _bad_request(exc: ValueError):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(RuntimeError)
def _unavailable(exc: RuntimeError):
    log.warning("Request failed: %s", exc)
    return jsonify({"error": str(exc)}), 503


# ---------- API ----------
@app.get("/api/search")
def api_search():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", CFG.TOP_K, type=int)
    min_score = request.args.get("min_score", CFG.MIN_SCORE, type=float)
    eng = _require_engine()
    if not q:
        return jsonify([])
    rows = eng.text_search(q, limit=k, min_score=min_score)
    return jsonify([r._asdict() for r in rows])


@app.get("/api/score")
def api_score():
    a = request.args.get("a", "", type=str)
    b = request.args.get("b", "", type=str)
    return jsonify({"a": a, "b": b, "score": _require_engine().score(a, b)})


@app.post("/api/keys")
def api_insert():
    body = request.get_json(silent=True) or {}
    key = body.get("key")
    if not isinstance(key, str) or not key:
        raise ValueError("body must be JSON with a non-empty string 'key'")
    eng = _require_engine()
    eng.insert(key, body.get("value"))
    return jsonify({"ok": True, "keys": eng.count()}), 201


@app.delete("/api/keys/<path:key>")
def api_delete(key: str):
    eng = _require_engine()
    eng.delete(key)
    return jsonify({"ok": True, "keys": eng.count()})


@app.get("/health")
def health():
    return jsonify({"ok": True, "keys": _require_engine().count()})


# ---------- UI ----------
@app.get("/")
def home():
    # Single page, no external JS/CSS.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Key Search • Flask UI</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial; }
.container{ max-width:860px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 8px 0; }
.controls{ display:flex; gap:12px; align-items:center; margin:12px 0 4px 0; }
.controls input{ padding:10px 12px; border-radius:10px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px; }
#q{ flex:1 }
#k{ width:72px; text-align:center }
.row{ display:grid; grid-template-columns:3rem 6rem 1fr 1fr; gap:10px; padding:10px 12px;
  border-top:1px solid var(--border); }
.head{ color:var(--muted); font-weight:600; border-top:none }
.small{ color:var(--muted); font-variant-numeric:tabular-nums }
.empty{ padding:24px; text-align:center; color:var(--muted); }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Fuzzy key search</h1>
      <div class="controls">
        <input id="q" type="text" placeholder="Type a key…" autocomplete="off" autofocus />
        <input id="k" type="number" min="1" max="50" value="10" />
      </div>
      <div id="stats" class="small">Ready.</div>
      <div class="row head"><div>#</div><div>Score</div><div>Key</div><div>Value</div></div>
      <div id="out" class="empty">Start typing to see results.</div>
    </div>
  </div>
<script>
const $ = (s) => document.querySelector(s);
const q = $("#q"), k = $("#k"), out = $("#out"), stats = $("#stats");
const esc = (s) => String(s).replace(/[&<>"]/g, (c) => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c]));
let t;
async function search(){
  const query = q.value;
  if(!query.trim()){ out.className = "empty"; out.innerHTML = "Start typing to see results."; stats.textContent = "Ready."; return; }
  const resp = await fetch(`/api/search?q=${encodeURIComponent(query)}&k=${parseInt(k.value || "10", 10)}`);
  const data = await resp.json();
  if(!resp.ok){ stats.textContent = `Error: ${data.error ?? resp.status}`; return; }
  stats.textContent = `Results: ${data.length}`;
  if(data.length === 0){ out.className = "empty"; out.innerHTML = "No matches."; return; }
  out.className = "";
  out.innerHTML = data.map((r, i) => `
    <div class="row"><div class="small">${i+1}</div><div class="small">${r.score.toFixed(3)}</div>
    <div>${esc(r.key)}</div><div class="small">${esc(JSON.stringify(r.value))}</div></div>`).join("");
}
q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(search, 150); });
k.addEventListener("change", search);
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--roots", nargs="+", required=True, help="Files/folders with .txt/.tsv keys")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    _engine.build(roots=args.roots, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
        _engine = None
    return 0
