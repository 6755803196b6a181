from __future__ import annotations

import os

# ---- Safe defaults so importing config.settings
# won't explode during mypy ----
os.environ.setdefault("DJANGO_SECRET_KEY", "mypy-only-not-for-prod")
os.environ.setdefault("DATABASE_URL", "sqlite:///mypy.sqlite3")
os.environ.setdefault("DJANGO_APE_KEY_PEPPER", "mypy-only-pepper")
os.environ.setdefault("APE_KEYS_ENDPOINTS_ENABLED", "true")

from .settings import *  # noqa: F401,F403

# Optional hard overrides for mypy environment:
DEBUG = False
USE_TZ = True
