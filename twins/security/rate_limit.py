from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

# In-memory buckets keyed by client address; one process per deployment.
limiter = Limiter(key_func=get_remote_address)
