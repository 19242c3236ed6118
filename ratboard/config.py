# ratboard/config.py — settings for the RatBoard lab
# -------------------------------------------------------------
# Plain module constants, overridable from RATBOARD_* environment
# variables. create_app() feeds the result into app.config.update().
# -------------------------------------------------------------

import os

APP_NAME = "RatBoard"
ENV_PREFIX = "RATBOARD"

# Named shared-cache in-memory database: every connection opened with the
# same URI sees the same tables while at least one of them stays open.
DATABASE = "file:ratboard?mode=memory&cache=shared"

# Live Server style front-end origins allowed to call the API cross-origin.
ALLOWED_ORIGINS = ["http://127.0.0.1:5500", "http://localhost:5500"]

# Demo credentials, stored in clear text on purpose.
SEED_USERS = [
    ("alice", "wonderland", "admin"),
    ("bob", "builder", "user"),
    ("charlie", "chocolate", "user"),
]

MAX_CONTENT_LENGTH = 64 * 1024
HOST = "127.0.0.1"
PORT = 5000
LOG_LEVEL = "INFO"
LOG_DIR = ""


def _env(name, default=None):
    value = os.getenv(f"{ENV_PREFIX}_{name}")
    if value is None or value.strip() == "":
        return default
    return value


def _env_int(name, default):
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name, default):
    raw = _env(name)
    if raw is None:
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def load_settings(overrides=None):
    """Collect Flask config keys from defaults, env and explicit overrides."""
    settings = {
        "APP_NAME": APP_NAME,
        "DATABASE": _env("DATABASE", DATABASE),
        "ALLOWED_ORIGINS": _env_list("ALLOWED_ORIGINS", ALLOWED_ORIGINS),
        "SEED_USERS": list(SEED_USERS),
        "MAX_CONTENT_LENGTH": _env_int("MAX_CONTENT_LENGTH", MAX_CONTENT_LENGTH),
        "HOST": _env("HOST", HOST),
        "PORT": _env_int("PORT", PORT),
        "LOG_LEVEL": _env("LOG_LEVEL", LOG_LEVEL).upper(),
        "LOG_DIR": _env("LOG_DIR", LOG_DIR),
    }
    if overrides:
        settings.update(overrides)
    return settings
