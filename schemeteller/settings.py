import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    APP_VERSION: str = "0.4.0"
    RULESET_VERSION: str = "v2-structured-policy"
    SCHEMA_VERSION: str = "v1-vector-camel"

    # --- CONFIG ---
    ENV = os.getenv("SCHEMETELLER_ENV", "production")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./schemeteller.db")
    SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"
    ADMIN_KEY = os.getenv("ADMIN_KEY", "123456")

    # --- SEEDING ---
    SEED_CATALOG = os.getenv("SEED_CATALOG", "1") == "1"


@lru_cache
def get_settings():
    return Settings()
