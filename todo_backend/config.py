import os
from datetime import timedelta

from dotenv import load_dotenv

# Load .env from project root so local development DATABASE_URL is picked up
load_dotenv()


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET", "change-this-jwt-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=int(os.environ.get("JWT_EXPIRES_DAYS", "7")))

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///todo.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # bcrypt cost factor; 10 is the floor outside of tests
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "10"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    FRONTEND_DIR = os.environ.get(
        "FRONTEND_DIR",
        os.path.join(os.path.dirname(os.path.dirname(__file__)), "frontend"),
    )

    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"
    TESTING = False
