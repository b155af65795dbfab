from flask import Blueprint, current_app, send_from_directory

from services import upload_folder

bp = Blueprint("storefront", __name__)


@bp.get("/")
def index():
    return send_from_directory(current_app.static_folder, "index.html")


@bp.get("/uploads/<path:filename>")
def uploaded_file(filename):
    return send_from_directory(upload_folder(), filename)
