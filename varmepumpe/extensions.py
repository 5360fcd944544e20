"""
Shared Flask extension instances.

Kept apart from the application factory so blueprints can decorate routes
with rate limits at import time; init_app() is called in create_app().
"""

import os

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Redis when available (production), otherwise per-process memory.
_storage_uri = os.environ.get("REDIS_URL") or "memory://"

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=_storage_uri,
    default_limits=["200 per minute"],
)
