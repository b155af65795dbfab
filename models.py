import hmac

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import Numeric, func

db = SQLAlchemy()

ORDER_PENDING = "pending"
ORDER_CONFIRMED = "confirmed"


def password_matches(stored, supplied):
    # plain equality against the stored value; no hashing
    return hmac.compare_digest((stored or "").encode(), (supplied or "").encode())


class Admin(db.Model):
    __tablename__ = "admin"
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False)
    # stored as given; seeded outside the app
    password = db.Column(db.String(128), nullable=False)


class Category(db.Model):
    __tablename__ = "categories"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)


# category_id / product_id carry no FK constraint: deleting the referenced
# row leaves the reference dangling instead of failing or cascading.
class Product(db.Model):
    __tablename__ = "products"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    price = db.Column(Numeric(10, 2), nullable=False)
    category_id = db.Column(db.Integer, index=True)
    colors = db.Column(db.String(300))
    sizes = db.Column(db.String(300))
    image = db.Column(db.String(300))
    images = db.Column(db.Text)  # JSON array of paths


class Order(db.Model):
    __tablename__ = "orders"
    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, nullable=False, index=True)
    customer_name = db.Column(db.String(200), nullable=False)
    customer_phone = db.Column(db.String(50), nullable=False)
    customer_address = db.Column(db.String(500), nullable=False)
    customer_notes = db.Column(db.Text)
    customer_color = db.Column(db.String(100))
    customer_size = db.Column(db.String(100))
    quantity = db.Column(db.Integer, nullable=False)
    product_price = db.Column(Numeric(10, 2), nullable=False)
    total_price = db.Column(Numeric(12, 2), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=ORDER_PENDING)
    created_at = db.Column(db.DateTime, server_default=func.now(), nullable=False)
