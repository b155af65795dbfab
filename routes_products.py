from flask import Blueprint, current_app, jsonify, request

import gateway
from errors import ApiError
from gateway import GatewayError
from models import Category
from routes_auth import login_required
from schemas import ProductForm
from services import dump_images, parse_images, remove_uploads, save_upload

bp = Blueprint("products", __name__, url_prefix="/products")


def _uploaded_images():
    files = [f for f in request.files.getlist("images") if f and f.filename]
    limit = current_app.config["MAX_PRODUCT_IMAGES"]
    if len(files) > limit:
        raise ApiError(f"At most {limit} images per product", 400)
    return files


def _columns(form: ProductForm) -> dict:
    return {
        "name": form.name,
        "description": form.description,
        "price": form.price,
        "category_id": form.category_id,
        "colors": form.colors,
        "sizes": form.sizes,
    }


def _write(op, paths):
    """Run a gateway write, dropping freshly saved uploads if it fails."""
    try:
        return op()
    except GatewayError:
        remove_uploads(paths)
        raise


def _present(row: dict) -> dict:
    return {**row, "images": parse_images(row)}


@bp.post("")
@login_required
def create_product():
    form = ProductForm.parse(request.form)
    paths = [save_upload(f) for f in _uploaded_images()]

    values = _columns(form)
    values["image"] = paths[0] if paths else None
    values["images"] = dump_images(paths)
    row = _write(lambda: gateway.products.insert(values), paths)

    current_app.logger.info(f"Product {row['id']} created with {len(paths)} images")
    return jsonify({**row, "images": paths})


@bp.get("")
def list_products():
    rows = gateway.products.select_joined(Category, on="category_id", order_by="id")
    return jsonify([
        {**_present(r.row), "category_name": r.joined["name"] if r.joined else None}
        for r in rows
    ])


@bp.get("/<int:product_id>")
def get_product(product_id):
    row = gateway.products.select_one(id=product_id)
    if row is None:
        raise ApiError("Product not found", 404)
    return jsonify(_present(row))


@bp.put("/<int:product_id>")
@login_required
def update_product(product_id):
    old = gateway.products.select_one(columns=["image", "images"], id=product_id)
    if old is None:
        raise ApiError("Product not found", 404)

    form = ProductForm.parse(request.form)
    values = _columns(form)
    values["image"] = old["image"]
    values["images"] = old["images"]

    paths = [save_upload(f) for f in _uploaded_images()]
    if paths:
        # new uploads replace the whole set
        values["image"] = paths[0]
        values["images"] = dump_images(paths)

    _write(lambda: gateway.products.update(values, id=product_id), paths)
    return jsonify({"message": "Product updated"})


@bp.delete("/<int:product_id>")
@login_required
def delete_product(product_id):
    gateway.products.delete(id=product_id)
    return jsonify({"message": "Product deleted"})
