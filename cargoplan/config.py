import os

from dotenv import load_dotenv

load_dotenv()  # read .env before anything else looks at the environment

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cargoplan.db")
DB_CONNECT_RETRIES = int(os.getenv("DB_CONNECT_RETRIES", "10"))
DB_RETRY_INTERVAL = int(os.getenv("DB_RETRY_INTERVAL", "2"))

LOG_FILE = os.getenv("LOG_FILE", "logs/app.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

SEED_CATALOG = os.getenv("SEED_CATALOG", "0") == "1"
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]
