# backend/app/config.py
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """
    Process configuration read from the environment.
    DATABASE_URL switches persistence from the local JSON file to SQL.
    """

    def __init__(self):
        self.database_url = os.getenv("DATABASE_URL") or None
        self.data_path = os.getenv("DATA_PATH", "backend/data/db.json")
        self.static_dir = os.getenv("STATIC_DIR", "public")
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", "3001"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def use_database(self) -> bool:
        return bool(self.database_url)


def get_settings() -> Settings:
    return Settings()
