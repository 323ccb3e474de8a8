# assetverse/config/settings.py
# Runtime configuration for the AssetVerse API

import os
from dotenv import load_dotenv

load_dotenv()


def _default_sqlite_url() -> str:
    return "sqlite:///./assetverse.db"


class Settings:
    """Application settings read from the environment"""

    DATABASE_URL = os.getenv("DATABASE_URL") or _default_sqlite_url()

    # Identity verification
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))

    CLIENT_DOMAIN = os.getenv("CLIENT_DOMAIN", "http://localhost:5173")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Launcher (start_server.py)
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", 8000))
    RELOAD = os.getenv("RELOAD", "false").lower() in ("1", "true", "yes")

    # Checkout provider (Stripe-compatible REST API)
    PAYMENTS = {
        'api_base': os.getenv('PAYMENT_API_BASE', 'https://api.stripe.com/v1'),
        'secret_key': os.getenv('PAYMENT_SECRET_KEY', ''),
        'currency': os.getenv('PAYMENT_CURRENCY', 'usd'),
        'timeout': float(os.getenv('PAYMENT_TIMEOUT', 10)),
    }

    # Every HR starts on this tier and falls back to it on downgrade
    FREE_PACKAGE = {
        'name': 'Default Free Package',
        'employees_limit': 5,
        'price': 0,
    }

    DEFAULT_PACKAGES = [
        {'name': 'Basic', 'employees_limit': 5, 'price': 5},
        {'name': 'Standard', 'employees_limit': 10, 'price': 8},
        {'name': 'Premium', 'employees_limit': 20, 'price': 15},
    ]

    @classmethod
    def get_cors_origins(cls) -> list:
        """CLIENT_DOMAIN may hold several comma separated origins"""
        return [o.strip() for o in cls.CLIENT_DOMAIN.split(",") if o.strip()]

    @classmethod
    def checkout_success_url(cls, tracking_id: str) -> str:
        base = cls.get_cors_origins()[0] if cls.get_cors_origins() else ""
        return f"{base}/payment-success?tracking_id={tracking_id}"

    @classmethod
    def checkout_cancel_url(cls) -> str:
        base = cls.get_cors_origins()[0] if cls.get_cors_origins() else ""
        return f"{base}/payment-cancelled"


settings = Settings()
