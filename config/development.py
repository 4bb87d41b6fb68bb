import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_SECRET = os.getenv("JWT_SECRET", "dev-jwt-secret-change-me")
JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "24"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "meeting_tracker"),
}

# Any SQLAlchemy URL; takes precedence over DB_CONFIG (e.g. sqlite:///database.sqlite)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///database.sqlite")

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
PORT = int(os.getenv("PORT", "3001"))
DEBUG = True

# Optional: insert ten sample groups (projects 1..10) into an empty directory
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
