import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///recall.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    RATELIMIT_DEFAULT = "200 per hour; 50 per minute"
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")

    # --- name recall ---
    RECALL_DISPLAY_COUNT = 20
    RECALL_STORE_TTL = int(os.environ.get("RECALL_STORE_TTL", "60"))  # seconds; 0 = reload every request
    RECALL_JSON_FALLBACK = True        # use static/names.json when memory_names is empty
    RECALL_STORE_WARMUP = True
    RECALL_RESULTS_RATE_LIMIT = "30 per minute"

    # client pacing (used by `flask recall-play`)
    RECALL_API_BASE = os.environ.get("RECALL_API_BASE", "http://127.0.0.1:5000")
    RECALL_FETCH_FLOOR = 2.5
    RECALL_SCORING_FLOOR = 2.5
    RECALL_RESET_SECONDS = 10
