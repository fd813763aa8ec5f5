"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from scholar_collector.api import app

    uvicorn scholar_collector.api:app --reload
"""

from scholar_collector.api.app import app

__all__ = ["app"]
