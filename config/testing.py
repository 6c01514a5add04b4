import os
from datetime import time

SECRET_KEY = "test-secret"
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrm_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

WORK_START = time(9, 0, 0)
WORK_END = time(18, 0, 0)
FLAG_EARLY_LEAVE = False

LEAVE_ENTITLEMENTS = {"default": {"annual": 15, "sick": 10}}
