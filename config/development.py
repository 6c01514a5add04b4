import os

from config import env_flag, env_json, env_time

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrm_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo accounts on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

# Working day: check-in after WORK_START is late, check-out after WORK_END is overtime
WORK_START = env_time("WORK_START", "09:00:00")
WORK_END = env_time("WORK_END", "18:00:00")
FLAG_EARLY_LEAVE = env_flag("FLAG_EARLY_LEAVE", "0")

# Yearly paid leave per contract (employee status); "default" covers the rest
LEAVE_ENTITLEMENTS = env_json(
    "LEAVE_ENTITLEMENTS",
    {
        "default": {"annual": 15, "sick": 10},
        "probation": {"annual": 0, "sick": 5},
    },
)
