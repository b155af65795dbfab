import io

import pytest

from app import create_app
from config import TestConfig
from models import db, Admin, Category, Product

ADMIN_USER = "admin"
ADMIN_PASSWORD = "s3cret"


@pytest.fixture
def app(tmp_path):
    class Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / "uploads")

    app = create_app(Config)
    with app.app_context():
        db.session.add(Admin(username=ADMIN_USER, password=ADMIN_PASSWORD))
        db.session.commit()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    client = app.test_client()
    client.environ_base["HTTP_ACCEPT"] = "application/json"
    return client


@pytest.fixture
def admin_client(client):
    resp = client.post("/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return client


@pytest.fixture
def make_category(app):
    def _make(name):
        with app.app_context():
            category = Category(name=name)
            db.session.add(category)
            db.session.commit()
            return category.id
    return _make


@pytest.fixture
def make_product(app):
    def _make(name="Scarf", price=50, **extra):
        with app.app_context():
            product = Product(name=name, price=price, **extra)
            db.session.add(product)
            db.session.commit()
            return product.id
    return _make


def image(name="photo.png", content=b"\x89PNG fake"):
    return (io.BytesIO(content), name)
