# ratboard/db.py — users + tasks tables
# -------------------------------------------------------------
# Every query in this module binds its parameters. The one query that
# does not lives in ratboard/vulnerable.py and nowhere else.
# -------------------------------------------------------------

import logging
import sqlite3
from datetime import datetime, timezone

from flask import current_app, g

logger = logging.getLogger(__name__)

STATUSES = ("todo", "doing", "done")

# Largest rowid SQLite can store (signed 64-bit).
MAX_ROWID = 2**63 - 1

TASK_COLUMNS = "id, username, title, description, status, created_at"

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL,
    password TEXT NOT NULL,
    role TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'todo' CHECK (status IN ('todo', 'doing', 'done')),
    created_at TEXT NOT NULL
);
"""

# ------------------------ Connections ------------------------

def connect(database):
    conn = sqlite3.connect(database, uri=True, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def get_db():
    if 'db' not in g:
        g.db = connect(current_app.config['DATABASE'])
    return g.db


def close_db(_=None):
    db = g.pop('db', None)
    if db is not None:
        db.close()


def init_db(app):
    """Create the schema and seed demo users once per database.

    The caller must keep the returned connection open: an in-memory
    shared-cache database disappears as soon as its last connection closes.
    """
    keeper = connect(app.config['DATABASE'])
    keeper.executescript(SCHEMA)
    already = keeper.execute('SELECT COUNT(*) FROM users').fetchone()[0]
    if not already:
        keeper.executemany(
            'INSERT INTO users (username, password, role) VALUES (?, ?, ?)',
            app.config['SEED_USERS'],
        )
        logger.info("Seeded %d demo users", len(app.config['SEED_USERS']))
    keeper.commit()
    return keeper

# ------------------------ Users ------------------------

def find_user(username, password):
    return get_db().execute(
        'SELECT id, username, role FROM users WHERE username = ? AND password = ?',
        (username, password),
    ).fetchone()

# ------------------------ Tasks ------------------------

def task_to_dict(row):
    return {key: row[key] for key in row.keys()}


def list_tasks(username):
    rows = get_db().execute(
        f'SELECT {TASK_COLUMNS} FROM tasks WHERE username = ? ORDER BY created_at DESC, id DESC',
        (username,),
    ).fetchall()
    return [task_to_dict(r) for r in rows]


def create_task(username, title, description, status='todo'):
    db = get_db()
    cur = db.execute(
        'INSERT INTO tasks (username, title, description, status, created_at) VALUES (?, ?, ?, ?, ?)',
        (username, title, description, status, datetime.now(timezone.utc).isoformat()),
    )
    db.commit()
    row = db.execute(f'SELECT {TASK_COLUMNS} FROM tasks WHERE id = ?', (cur.lastrowid,)).fetchone()
    return task_to_dict(row)


def update_task_status(task_id, status):
    """Returns the number of rows changed (0 when the id does not exist)."""
    if task_id > MAX_ROWID:
        # SQLite cannot even bind it, so no row can have it.
        return 0
    db = get_db()
    cur = db.execute('UPDATE tasks SET status = ? WHERE id = ?', (status, task_id))
    db.commit()
    return cur.rowcount
