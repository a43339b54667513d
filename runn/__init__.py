# =============================================================================
# runn/__init__.py
# =============================================================================
# The Runn REST API boundary: configuration (config.py) and the async httpx
# client (client.py).  It turns HTTP responses into core/ dataclasses and HTTP
# failures into core.errors.RunnAPIError; it does no aggregation itself.
# =============================================================================

from runn.client import RunnClient
from runn.config import RunnConfig

__all__ = ["RunnClient", "RunnConfig"]
