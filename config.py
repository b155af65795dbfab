import os
from dotenv import load_dotenv
load_dotenv()  # fine locally; real deployments set the env directly

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

class BaseConfig:
    SECRET_KEY = os.getenv("SESSION_SECRET", "fallback_secret")
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL", "sqlite:///" + os.path.join(BASE_DIR, "store.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(BASE_DIR, "uploads"))
    MAX_PRODUCT_IMAGES = 10
    # idle window, refreshed on every request that carries the session
    SESSION_IDLE_MINUTES = int(os.getenv("SESSION_IDLE_MINUTES", "120"))
    SESSION_SWEEP_SECONDS = 60
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

class DevConfig(BaseConfig):
    DEBUG = True

class TestConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SESSION_SWEEP_SECONDS = 0
