import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "internship_portal"),
}

# Empty SMTP host: invitation links are written to the log instead of mailed.
SMTP_CONFIG = {
    "host": os.getenv("SMTP_HOST", ""),
    "port": int(os.getenv("SMTP_PORT", "587")),
    "user": os.getenv("SMTP_USER", ""),
    "password": os.getenv("SMTP_PASSWORD", ""),
    "sender": os.getenv("SMTP_FROM", "no-reply@localhost"),
    "use_tls": bool(int(os.getenv("SMTP_USE_TLS", "1"))),
}

INVITE_BASE_URL = os.getenv("INVITE_BASE_URL", "http://localhost:5000")
INVITE_TTL_HOURS = int(os.getenv("INVITE_TTL_HOURS", "72"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed roles and a demo institute on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
