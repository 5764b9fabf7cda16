import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///motoparts.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False

    # Comma-separated list
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", os.getenv("PORT", "3000")))

    # sql | memory
    STORE_BACKEND = os.getenv("STORE_BACKEND", "sql")

    # Storefront
    PAGE_SIZE = int(os.getenv("PAGE_SIZE", "9"))
    AUTOCOMPLETE_LIMIT = int(os.getenv("AUTOCOMPLETE_LIMIT", "6"))
    NEW_PRODUCT_DAYS = int(os.getenv("NEW_PRODUCT_DAYS", "30"))
    LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
    ADD_NOTICE_MS = int(os.getenv("ADD_NOTICE_MS", "900"))
    CURRENCY = os.getenv("CURRENCY", "KES")

    # Picks up catalog writes from other processes sharing the database
    CATALOG_SYNC_ENABLED = _flag("CATALOG_SYNC_ENABLED", "true")
    CATALOG_SYNC_INTERVAL = float(os.getenv("CATALOG_SYNC_INTERVAL", "1.4"))
