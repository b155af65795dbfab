# routes_auth.py
import os
from functools import wraps

from flask import (
    Blueprint, request, session, jsonify, g, current_app, send_from_directory
)

import gateway
from errors import ApiError
from models import password_matches
from schemas import LoginIn
from sessions import SessionStoreError, destroy_session, load_identity

bp = Blueprint("auth", __name__)

bp.before_app_request(load_identity)


def wants_json():
    return 'application/json' in (request.headers.get('Accept') or '')


def request_data():
    return request.get_json(silent=True) or request.form


def _reject(message, status=401):
    if wants_json():
        return jsonify({"error": message}), status
    return f"<h2>{message}</h2>", status


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if g.get("identity") is None:
            return _reject("Access denied, please log in")
        return view(*args, **kwargs)
    return wrapped


def admin_page():
    # kept outside the static folder so only this guarded route serves it
    return send_from_directory(os.path.join(current_app.root_path, "pages"), "admin.html")


@bp.post("/login")
def login():
    try:
        creds = LoginIn.parse(request_data())
    except ApiError as e:
        return _reject(e.message, e.status)
    admin = gateway.admins.select_one(username=creds.username)

    if admin is None:
        current_app.logger.info(f"Login failed for {creds.username!r}: unknown user")
        return _reject("User not found")
    if not password_matches(admin["password"], creds.password):
        current_app.logger.info(f"Login failed for {creds.username!r}: wrong password")
        return _reject("Wrong password")

    session["authenticated"] = True
    session["admin_user"] = creds.username
    current_app.logger.info(f"Admin {creds.username!r} logged in")
    if wants_json():
        return jsonify({"message": "Logged in", "username": creds.username})
    return admin_page()


@bp.post("/logout")
def logout():
    user = session.get("admin_user")
    try:
        destroy_session()
    except SessionStoreError as e:
        current_app.logger.exception(f"Logout failed: {e}")
        return jsonify({"error": "Logout failed"}), 500
    if user:
        current_app.logger.info(f"Admin {user!r} logged out")
    return jsonify({"message": "Logged out"})


@bp.get("/admin")
@login_required
def admin():
    return admin_page()
