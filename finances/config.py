import os  # lets us read environment variables (from the OS)
from functools import (
    lru_cache,  # tiny built-in cache; we use it to reuse one Settings object
)

from dotenv import load_dotenv  # loads variables from a local .env file
from pydantic import BaseModel  # Pydantic gives us a typed, validated settings class

load_dotenv()  # read .env and put those key=value pairs into environment variables


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):  # our typed container for config values
    # signs the session cookie; change effect: every signed-in user is logged out
    secret_key: str = os.getenv("SECRET_KEY", "dev-secret-change")

    # database connection string; default is a SQLite file in the project folder
    # change effect: point to a different DB (e.g., Postgres) or file path
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./finances.db")

    # the cookie name used to store the session ID in the browser
    # change effect: renames the cookie (harmless); users will be logged out on rename
    session_cookie: str = os.getenv("SESSION_COOKIE_NAME", "finances_session")

    # seconds until a sign-in expires (default 72h)
    session_max_age: int = int(os.getenv("SESSION_MAX_AGE", str(72 * 3600)))

    # create missing tables at startup; turn off when Alembic owns the schema
    create_tables: bool = _env_flag("CREATE_TABLES", "true")


@lru_cache  # make sure Settings() is created once and reused (fast + consistent)
def get_settings() -> Settings:
    return Settings()  # build from env (already loaded by load_dotenv())
