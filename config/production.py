import os

from config import env_flag, env_json, env_time

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrm_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

WORK_START = env_time("WORK_START", "09:00:00")
WORK_END = env_time("WORK_END", "18:00:00")
FLAG_EARLY_LEAVE = env_flag("FLAG_EARLY_LEAVE", "0")

LEAVE_ENTITLEMENTS = env_json("LEAVE_ENTITLEMENTS", {"default": {"annual": 15, "sick": 10}})
