import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "internship_portal_test"),
}

SMTP_CONFIG = {
    "host": "",
    "port": 587,
    "user": "",
    "password": "",
    "sender": "no-reply@test.local",
    "use_tls": False,
}

INVITE_BASE_URL = "http://testserver"
INVITE_TTL_HOURS = 72

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
