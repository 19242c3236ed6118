# ratboard/pages.py — the browser side of the lab
# -------------------------------------------------------------
# One page, no templates folder: HTML and JS are embedded for easy
# drop-in. The page talks to /api/* on the same origin unless
# window.RATBOARD_API points it somewhere else.
# -------------------------------------------------------------

from flask import Blueprint, current_app, render_template_string

bp = Blueprint('pages', __name__)

# ------------------------ HTML Shell ------------------------

BASE = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{{ title or app_name }}</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <style>
      body { font-family: system-ui, -apple-system, Segoe UI, Roboto, 'Helvetica Neue', Arial, sans-serif; }
      .hidden { display: none; }
      .task { background: #fff; border: 1px solid #e2e8f0; border-radius: 0.75rem; padding: 0.75rem; margin-bottom: 0.5rem; }
      .task .title { font-weight: 600; }
      .task .desc { color: #475569; font-size: 0.875rem; margin: 0.25rem 0 0.5rem; word-break: break-word; }
      .bar { display: flex; gap: 0.5rem; }
      .ghost { border: 1px solid #cbd5e1; border-radius: 0.5rem; padding: 0 0.5rem; }
      .error { color: #b91c1c; }
      .ok { color: #047857; }
      .muted { color: #64748b; }
    </style>
  </head>
  <body class="min-h-screen bg-gradient-to-b from-slate-50 to-slate-100">
    <header class="sticky top-0 backdrop-blur bg-white/70 border-b border-slate-200 z-10">
      <div class="max-w-5xl mx-auto px-4 py-4 flex items-center justify-between">
        <a href="{{ url_for('pages.index') }}" class="text-xl font-extrabold tracking-tight">🐀 {{ app_name }} <span id="who" class="text-sm font-normal text-slate-500"></span></a>
        <nav class="flex items-center gap-3 text-sm">
          <a href="{{ url_for('pages.guide') }}" class="px-3 py-1 rounded-lg border border-slate-300 hover:bg-white">Exploitation Guide</a>
        </nav>
      </div>
    </header>

    <main class="max-w-5xl mx-auto px-4 py-8">
      {{ body|safe }}
    </main>

    <footer class="py-8 text-center text-xs text-slate-500">Built for teaching. Do not use in production.</footer>
  </body>
</html>
"""

BOARD_HTML = """
<section id="loginCard" class="max-w-md mx-auto bg-white p-6 rounded-2xl shadow space-y-4">
  <h1 class="text-3xl font-bold">Log in</h1>
  <input id="u" class="w-full rounded-xl border border-slate-300 px-3 py-2" placeholder="alice" />
  <input id="p" type="password" class="w-full rounded-xl border border-slate-300 px-3 py-2" placeholder="password" />
  <div class="flex gap-3">
    <button id="loginBtn" class="flex-1 rounded-xl bg-slate-900 text-white py-2 font-semibold">Log in</button>
    <button id="loginVulnBtn" class="flex-1 rounded-xl border border-red-300 text-red-700 py-2 font-semibold">Log in (vulnerable)</button>
  </div>
  <p id="msg"></p>
</section>

<section id="appCard" class="hidden space-y-6">
  <div class="flex items-center justify-between">
    <label class="flex items-center gap-2 text-sm">
      <input type="checkbox" id="safeToggle" class="rounded border-slate-300" /> Safe render (descriptions as text)
    </label>
    <button id="logoutBtn" class="px-3 py-1 rounded-lg bg-slate-900 text-white">Logout</button>
  </div>

  <div class="bg-white p-4 rounded-2xl shadow grid gap-3 md:grid-cols-4">
    <input id="tTitle" class="rounded-xl border border-slate-300 px-3 py-2" placeholder="Title" />
    <input id="tDesc" class="md:col-span-2 rounded-xl border border-slate-300 px-3 py-2" placeholder="Description (try <img src=x onerror=alert(1)>)" />
    <div class="flex gap-2">
      <select id="tStatus" class="rounded-xl border border-slate-300 px-2">
        <option value="todo">todo</option>
        <option value="doing">doing</option>
        <option value="done">done</option>
      </select>
      <button id="addTaskBtn" class="flex-1 rounded-xl bg-slate-900 text-white px-4 py-2 font-semibold">Add</button>
    </div>
    <span id="saveMsg" class="muted"></span>
  </div>

  <div class="grid gap-4 md:grid-cols-3">
    <div><h2 class="font-bold mb-2">todo</h2><div id="col-todo"></div></div>
    <div><h2 class="font-bold mb-2">doing</h2><div id="col-doing"></div></div>
    <div><h2 class="font-bold mb-2">done</h2><div id="col-done"></div></div>
  </div>
</section>
"""

# Kept out of Jinja's way: inserted as a value, never parsed as a template.
BOARD_JS = """
<script>
const API = window.RATBOARD_API || "";
const ORDER = ["todo", "doing", "done"];
const USERNAME_RE = /^[a-z0-9_]{3,32}$/i;

// Application state: loaded from localStorage, changed only by the actions below.
const state = {
  currentUser: localStorage.getItem("token"),
  safeRender: localStorage.getItem("safeRender") === "1",
  tasks: [],
};

const el = (id) => document.getElementById(id);

function msg(text, bad = false) {
  const m = el("msg");
  m.textContent = text;
  m.className = bad ? "error" : "ok";
}

function setSaveMsg(text, bad = false) {
  const m = el("saveMsg");
  m.textContent = text;
  m.className = bad ? "error" : "muted";
  setTimeout(() => { m.textContent = ""; }, 1500);
}

async function call(method, path, body) {
  const opts = { method, headers: { "Content-Type": "application/json" } };
  if (body !== undefined) opts.body = JSON.stringify(body);
  const res = await fetch(API + path, opts);
  const data = await res.json();
  return { ok: res.ok, data };
}

function nextStatus(status, dir) {
  const idx = ORDER.indexOf(status);
  if (idx === -1) return null;
  return ORDER[idx + dir] || null;
}

// ----- Rendering (unsafe vs safe) -----
function renderCard(task, safeRender) {
  const card = document.createElement("div");
  card.className = "task";

  const title = document.createElement("div");
  title.className = "title";
  title.textContent = task.title;

  const desc = document.createElement("div");
  desc.className = "desc";
  if (safeRender) {
    // ✅ SAFE: description is text, not HTML
    desc.textContent = task.description;
  } else {
    // ❌ VULNERABLE: description is parsed as HTML (DOM-based XSS)
    desc.innerHTML = task.description;
  }

  const bar = document.createElement("div");
  bar.className = "bar";
  const left = document.createElement("button");
  left.className = "ghost";
  left.textContent = "\\u2190";
  left.onclick = () => move(task, -1);
  const right = document.createElement("button");
  right.className = "ghost";
  right.textContent = "\\u2192";
  right.onclick = () => move(task, +1);
  bar.append(left, right);

  card.append(title, desc, bar);
  return card;
}

function renderColumns(tasks, safeRender) {
  const view = { todo: [], doing: [], done: [] };
  tasks.forEach((t) => (view[t.status] || view.todo).push(renderCard(t, safeRender)));
  return view;
}

function paint() {
  const view = renderColumns(state.tasks, state.safeRender);
  ORDER.forEach((s) => el("col-" + s).replaceChildren(...view[s]));
}

function showApp() {
  el("who").textContent = "\\u2014 logged in as " + state.currentUser;
  el("loginCard").classList.add("hidden");
  el("appCard").classList.remove("hidden");
}

function showLogin() {
  el("appCard").classList.add("hidden");
  el("loginCard").classList.remove("hidden");
  el("who").textContent = "";
}

// ----- Actions -----
async function refreshTasks() {
  if (!state.currentUser) return;
  try {
    const { ok, data } = await call("GET", "/api/tasks?username=" + encodeURIComponent(state.currentUser));
    if (!ok) return msg(data.message || "Could not load tasks", true);
    state.tasks = data.tasks || [];
    paint();
  } catch (e) {
    msg("Network error", true);
  }
}

async function doLogin(path) {
  const u = el("u").value.trim();
  const p = el("p").value;
  if (!USERNAME_RE.test(u)) return msg("Bad username", true);
  try {
    const { ok, data } = await call("POST", path, { username: u, password: p });
    if (!ok) return msg(data.message || "Login failed", true);
    state.currentUser = data.token || u;
    localStorage.setItem("token", state.currentUser);
    msg(data.message || "");
    showApp();
    await refreshTasks();
  } catch (e) {
    msg("Network error", true);
  }
}

function doLogout() {
  localStorage.removeItem("token");
  state.currentUser = null;
  state.tasks = [];
  paint();
  showLogin();
}

async function addTask() {
  const payload = {
    username: state.currentUser,
    title: el("tTitle").value.trim(),
    description: el("tDesc").value, // intentionally un-sanitized
    status: el("tStatus").value,
  };
  if (!payload.title) return setSaveMsg("Title required", true);
  try {
    const { ok, data } = await call("POST", "/api/tasks", payload);
    if (!ok) return setSaveMsg(data.message || "Error", true);
    state.tasks.unshift(data.task);
    paint();
    el("tTitle").value = "";
    el("tDesc").value = "";
    setSaveMsg("Saved");
  } catch (e) {
    setSaveMsg("Network error", true);
  }
}

async function move(task, dir) {
  const next = nextStatus(task.status, dir);
  if (!next) return;
  try {
    const { ok, data } = await call("PATCH", "/api/tasks/" + task.id, { status: next });
    if (!ok) msg(data.message || "Update failed", true);
  } catch (e) {
    return msg("Network error", true);
  }
  await refreshTasks();
}

function toggleSafeRender(e) {
  state.safeRender = e.target.checked;
  localStorage.setItem("safeRender", state.safeRender ? "1" : "0");
  refreshTasks();
}

window.addEventListener("DOMContentLoaded", () => {
  el("safeToggle").checked = state.safeRender;
  el("safeToggle").addEventListener("change", toggleSafeRender);
  el("loginBtn").addEventListener("click", () => doLogin("/api/login"));
  el("loginVulnBtn").addEventListener("click", () => doLogin("/api/login-vulnerable"));
  el("logoutBtn").addEventListener("click", doLogout);
  el("addTaskBtn").addEventListener("click", addTask);
  if (state.currentUser) {
    showApp();
    refreshTasks();
  }
});
</script>
"""

GUIDE_HTML = """<h1 class='text-3xl font-extrabold mb-4'>RatBoard – Student Exploit Guide</h1>

<blockquote class='border-l-4 pl-4 italic text-slate-600'>Educational use only. Run this lab on your own machine.</blockquote>

<h2 class='text-2xl font-bold mt-6 mb-3'>0) Setup</h2>
<pre class="bg-slate-100 p-4 rounded overflow-x-auto"><code>pip install -e .
python -m ratboard</code></pre>
<p>Open <strong>http://127.0.0.1:5000</strong>. Demo users: <code>alice / wonderland</code> (admin), <code>bob / builder</code>, <code>charlie / chocolate</code>.</p>

<h2 class='text-2xl font-bold mt-6 mb-3'>1) DOM-based XSS in the task description</h2>
<p>With <strong>Safe render</strong> unchecked, descriptions are written with <code>innerHTML</code>. Add a task whose description is:</p>
<pre class="bg-slate-100 p-4 rounded overflow-x-auto"><code>&lt;img src=x onerror=alert(&#x27;XSS&#x27;)&gt;</code></pre>
<p>The alert fires as soon as the card is painted. Tick <strong>Safe render</strong>: the board refetches and the same payload shows up as inert text.</p>
<p><strong>Fix:</strong> use <code>textContent</code> (or escape) for anything that came from a user.</p>

<h2 class='text-2xl font-bold mt-6 mb-3'>2) SQL injection in the vulnerable login</h2>
<p><code>/api/login-vulnerable</code> builds <code>WHERE username='…' AND password='…'</code> by pasting your input in. Log in with username <code>alice</code> and password:</p>
<pre class="bg-slate-100 p-4 rounded overflow-x-auto"><code>' OR '1'='1</code></pre>
<p>Or with curl:</p>
<pre class="bg-slate-100 p-4 rounded overflow-x-auto"><code>curl -i -H 'Content-Type: application/json' \\
  -d "{\\"username\\": \\"x\\", \\"password\\": \\"' OR '1'='1\\"}" \\
  http://127.0.0.1:5000/api/login-vulnerable</code></pre>
<p>A stray quote (<code>'</code>) returns the raw SQLite error text, handy for error-based probing. The same payloads against <code>/api/login</code> get a plain 400 or 401.</p>
<p><strong>Fix:</strong> bind parameters (<code>WHERE username = ? AND password = ?</code>) and validate input shape first.</p>
"""

# ------------------------ Routes ------------------------

def _page(title, body):
    app_name = current_app.config['APP_NAME']
    return render_template_string(BASE, title=f"{title} • {app_name}", body=body, app_name=app_name)


@bp.route('/')
def index():
    return _page("Board", BOARD_HTML + BOARD_JS)


@bp.route('/guide')
def guide():
    return _page("Exploitation Guide", GUIDE_HTML)
