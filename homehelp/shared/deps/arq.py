# homehelp/shared/deps/arq.py
from typing import Optional

from fastapi import Request
from arq.connections import ArqRedis

def get_arq_pool(request: Request) -> Optional[ArqRedis]:
    """
    FastAPI dependency returning the arq pool stored on app.state,
    or None when the task queue is disabled.
    """
    return getattr(request.app.state, "arq_pool", None)
