# ratboard — Flask task board for the XSS + SQLi lab
# -------------------------------------------------------------
# ⚠️ This is intentionally vulnerable for teaching purposes.
#
# Included vulnerabilities you can demonstrate:
#  - DOM-based XSS: task descriptions are written with innerHTML while
#    "safe render" is off (see ratboard/pages.py and ratboard/board.py).
#  - SQL injection: /api/login-vulnerable pastes input into the query
#    text (see ratboard/vulnerable.py). /api/login is the safe twin.
#
# Notes:
#  - SQLite, shared in-memory by default (gone when the process exits).
#  - The "token" is just the username. There are no sessions.
# -------------------------------------------------------------

import logging
import sqlite3

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from . import api, pages
from .config import load_settings
from .db import close_db, init_db

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.update(load_settings(overrides))

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config['ALLOWED_ORIGINS']}},
        methods=['GET', 'POST', 'PATCH', 'OPTIONS'],
        allow_headers=['Content-Type'],
    )

    @app.before_request
    def reject_foreign_origins():
        origin = request.headers.get('Origin')
        if not origin:
            return None
        if origin in app.config['ALLOWED_ORIGINS'] or origin == request.host_url.rstrip('/'):
            return None
        logger.warning("Rejected %s %s from origin %s", request.method, request.path, origin)
        return jsonify({'message': 'Not allowed by CORS'}), 403

    @app.after_request
    def security_headers(response):
        # No CSP on purpose: it would block the DOM-XSS demo.
        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('X-Frame-Options', 'SAMEORIGIN')
        response.headers.setdefault('Referrer-Policy', 'no-referrer')
        return response

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'message': e.description}), e.code

    @app.errorhandler(sqlite3.Error)
    def store_error(e):
        logger.exception("Store error on %s %s", request.method, request.path)
        return jsonify({'message': 'Server error'}), 500

    @app.errorhandler(Exception)
    def unexpected_error(e):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({'message': 'Server error'}), 500

    app.register_blueprint(api.bp)
    app.register_blueprint(pages.bp)

    app.teardown_appcontext(close_db)
    app.extensions['ratboard.keeper'] = init_db(app)
    return app
