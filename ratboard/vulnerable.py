# ratboard/vulnerable.py
# -------------------------------------------------------------
# ⚠️ INTENTIONALLY UNSAFE. This is the SQL injection sink of the lab.
# Input is pasted straight into the query text; do not "fix" it and do
# not call it from anywhere except the /api/login-vulnerable route.
# -------------------------------------------------------------


def find_users_interpolated(db, username, password):
    """Look users up by string-building the WHERE clause.

    Try a password of ``' OR '1'='1`` to log in as the first user.
    Store errors are not caught: the caller shows their raw text.
    """
    sql = f"SELECT id, username, role FROM users WHERE username='{username}' AND password='{password}'"  # ❌ injectable
    return db.execute(sql).fetchall()
