from flask import Blueprint, current_app, jsonify

import gateway
from errors import ApiError
from gateway import GatewayError
from models import ORDER_CONFIRMED, Product
from routes_auth import login_required, request_data
from schemas import OrderIn
from services import line_total

bp = Blueprint("orders", __name__, url_prefix="/orders")

DELETED_PRODUCT_NAME = "Deleted product"


@bp.post("")
def create_order():
    body = OrderIn.parse(request_data())

    product = gateway.products.select_one(columns=["name", "price"], id=body.product_id)
    if product is None or product["price"] is None:
        raise ApiError("Product not found", 400)

    # price and total are frozen on the order
    total_price = line_total(product["price"], body.quantity)
    try:
        order = gateway.orders.insert({
            "product_id": body.product_id,
            "customer_name": body.customer_name,
            "customer_phone": body.customer_phone,
            "customer_address": body.customer_address,
            "customer_notes": body.customer_notes,
            "quantity": body.quantity,
            "product_price": product["price"],
            "total_price": total_price,
            "customer_color": body.color,
            "customer_size": body.size,
        })
    except GatewayError as e:
        raise ApiError(f"Failed to create order: {e.message}", 500) from e

    current_app.logger.info(f"Order {order['id']} placed for product {body.product_id}")
    return jsonify({
        "message": "Order created",
        "order_id": order["id"],
        "product_name": product["name"],
        "product_price": product["price"],
        "total_price": total_price,
    })


@bp.get("")
@login_required
def list_orders():
    rows = gateway.orders.select_joined(
        Product, on="product_id", order_by="created_at", ascending=False
    )
    return jsonify([
        {**r.row, "product_name": r.joined["name"] if r.joined else DELETED_PRODUCT_NAME}
        for r in rows
    ])


@bp.put("/<int:order_id>/confirm")
@login_required
def confirm_order(order_id):
    gateway.orders.update({"status": ORDER_CONFIRMED}, id=order_id)
    return jsonify({"message": "Order confirmed"})


@bp.delete("/<int:order_id>")
@login_required
def delete_order(order_id):
    gateway.orders.delete(id=order_id)
    return jsonify({"message": "Order deleted"})
