import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration class"""

    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    FLASK_ENV = os.getenv("FLASK_ENV", "development")
    DEBUG = os.getenv("DEBUG", "True") == "True"

    # SQLAlchemy configuration
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI", "sqlite:///lexiconic.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Translation service
    TRANSLATION_API_URL = os.getenv("TRANSLATION_API_URL", "http://127.0.0.1:5000/process_dictionary")
    TRANSLATION_API_TIMEOUT = int(os.getenv("TRANSLATION_API_TIMEOUT", "60"))  # seconds
    TRANSLATION_SOURCE_LANGUAGE = os.getenv("TRANSLATION_SOURCE_LANGUAGE", "en")
    TRANSLATION_TARGET_LANGUAGE = os.getenv("TRANSLATION_TARGET_LANGUAGE", "da")
    TRANSLATION_SOURCE_TRANSLATOR = os.getenv("TRANSLATION_SOURCE_TRANSLATOR", "Helsinki-NLP")

    # Import transactions: lock wait and overall statement budget (PostgreSQL only)
    TRANSACTION_MAX_WAIT_MS = int(os.getenv("TRANSACTION_MAX_WAIT_MS", "60000"))
    TRANSACTION_TIMEOUT_MS = int(os.getenv("TRANSACTION_TIMEOUT_MS", "200000"))

    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Development environment configuration"""

    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    """Production environment configuration"""

    DEBUG = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": 20,
        "max_overflow": 10,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
    }


class TestingConfig(Config):
    """Testing environment configuration"""

    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    TRANSLATION_API_URL = "http://translation.test/process_dictionary"


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
