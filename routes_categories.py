from flask import Blueprint, jsonify

import gateway
from routes_auth import login_required, request_data
from schemas import CategoryIn

bp = Blueprint("categories", __name__, url_prefix="/categories")


@bp.get("")
def list_categories():
    return jsonify(gateway.categories.select(order_by="name"))


@bp.post("")
@login_required
def create_category():
    body = CategoryIn.parse(request_data())
    return jsonify(gateway.categories.insert({"name": body.name}))


@bp.put("/<int:category_id>")
@login_required
def update_category(category_id):
    body = CategoryIn.parse(request_data())
    gateway.categories.update({"name": body.name}, id=category_id)
    return jsonify({"message": "Category updated"})


@bp.delete("/<int:category_id>")
@login_required
def delete_category(category_id):
    # products keep their category_id
    gateway.categories.delete(id=category_id)
    return jsonify({"message": "Category deleted"})
