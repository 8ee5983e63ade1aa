import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# DEV default secret. Set SECRET_KEY in the environment for anything real.
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE = timedelta(minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE", "60")))

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/peer_grading.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Late policy defaults (used when an assignment has no late policy attached)
GRACE_PERIOD_MINUTES = int(os.getenv("GRACE_PERIOD_MINUTES", "0"))
DEFAULT_PENALTY_UNIT = os.getenv("DEFAULT_PENALTY_UNIT", "hour")  # minute | hour | day
DEFAULT_PENALTY_PER_UNIT = int(os.getenv("DEFAULT_PENALTY_PER_UNIT", "1"))

STAFF_ROLES = ("ta", "instructor")
