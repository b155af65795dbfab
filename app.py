import click
from pathlib import Path
from flask import Flask
from flask.cli import with_appcontext
from config import DevConfig
from models import db, Admin
from errors import register_error_handlers
from sessions import MemorySessionInterface
from routes_auth import bp as auth_bp
from routes_categories import bp as categories_bp
from routes_products import bp as products_bp
from routes_orders import bp as orders_bp
from routes_storefront import bp as storefront_bp


@click.command("create-admin")
@click.argument("username")
@click.argument("password")
@with_appcontext
def create_admin(username, password):
    """Seed an admin login."""
    if Admin.query.filter_by(username=username).first():
        raise click.ClickException(f"Admin {username!r} already exists")
    db.session.add(Admin(username=username, password=password))
    db.session.commit()
    click.echo(f"Created admin {username!r}")


def create_app(config_object=DevConfig):
    app = Flask(__name__, static_folder="static")
    app.config.from_object(config_object)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    Path(app.config["UPLOAD_FOLDER"]).mkdir(parents=True, exist_ok=True)
    app.session_interface = MemorySessionInterface.from_config(app.config)

    db.init_app(app)
    register_error_handlers(app)

    app.register_blueprint(storefront_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(orders_bp)
    app.cli.add_command(create_admin)

    with app.app_context():
        db.create_all()
    app.logger.info("Database ready")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=3000, debug=True)
