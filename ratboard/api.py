# ratboard/api.py — JSON API for the board
# -------------------------------------------------------------
# ⚠️ /api/login-vulnerable is injectable on purpose (SQLi demo).
# Descriptions are stored as-is; the XSS sink is the client render.
# -------------------------------------------------------------

import logging
import sqlite3

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from . import db
from .schemas import LoginRequest, NewTask, StatusUpdate, is_valid_username
from .vulnerable import find_users_interpolated

logger = logging.getLogger(__name__)

bp = Blueprint('api', __name__, url_prefix='/api')


def fail(message, status):
    return jsonify({'message': message}), status

# ------------------------ Routes: Auth ------------------------

@bp.route('/login', methods=['POST'])
def login():
    try:
        creds = LoginRequest.model_validate(request.get_json(silent=True))
    except ValidationError:
        return fail('Invalid input', 400)

    row = db.find_user(creds.username, creds.password)
    if not row:
        logger.info("Safe login rejected for %r", creds.username)
        return fail('Invalid credentials', 401)

    logger.info("Safe login ok for %s", row['username'])
    # Demo token: NOT a credential, just the username echoed back.
    return jsonify({
        'message': f"Welcome {row['username']}",
        'role': row['role'],
        'token': row['username'],
    })


@bp.route('/login-vulnerable', methods=['POST'])
def login_vulnerable():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    username = body.get('username', '')
    password = body.get('password', '')

    try:
        rows = find_users_interpolated(db.get_db(), username, password)
    except (sqlite3.Error, sqlite3.Warning) as e:
        # Raw store text goes back to the caller, error-based SQLi included.
        logger.warning("Vulnerable login query failed: %s", e)
        return fail(f'Query error: {e}', 400)

    if not rows:
        return fail('Invalid credentials', 401)

    first = rows[0]
    logger.info("Vulnerable login matched %d row(s), using %s", len(rows), first['username'])
    return jsonify({
        'message': f"Logged in as {first['username']} ({first['role']})",
        'token': first['username'],
    })

# ------------------------ Routes: Tasks ------------------------

@bp.route('/tasks', methods=['GET'])
def list_tasks():
    username = request.args.get('username', '')
    if not is_valid_username(username):
        return fail('Invalid user', 400)
    return jsonify({'tasks': db.list_tasks(username)})


@bp.route('/tasks', methods=['POST'])
def create_task():
    try:
        new = NewTask.model_validate(request.get_json(silent=True))
    except ValidationError:
        return fail('Invalid input', 400)

    task = db.create_task(new.username, new.title, new.description, new.status)
    logger.info("Task %s created for %s", task['id'], task['username'])
    return jsonify({'task': task}), 201


@bp.route('/tasks/<task_id>', methods=['PATCH'])
def update_task(task_id):
    try:
        task_id = int(task_id)
    except ValueError:
        return fail('Bad id', 400)
    if task_id < 1:
        return fail('Bad id', 400)

    try:
        update = StatusUpdate.model_validate(request.get_json(silent=True))
    except ValidationError:
        return fail('Invalid status', 400)

    if db.update_task_status(task_id, update.status) == 0:
        return fail('Not found', 404)

    logger.info("Task %s moved to %s", task_id, update.status)
    return jsonify({'message': 'Updated'})
