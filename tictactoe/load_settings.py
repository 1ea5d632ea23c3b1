import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./tictactoe.sqlite3"


def normalize_database_url(url: str) -> str:
    """Point plain postgres URLs at the asyncpg driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


database_url = normalize_database_url(os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL))
db_pool_size = int(os.getenv("DB_POOL_SIZE", "5"))
db_echo = os.getenv("DB_ECHO", "false").lower() in ("1", "true", "yes")
host = os.getenv("HOST", "127.0.0.1")
port = int(os.getenv("PORT", "3001"))
log_level = os.getenv("LOG_LEVEL", "INFO").upper()

if __name__ == "__main__":
    print(database_url, db_pool_size, db_echo, host, port, log_level)
