"""Ordered request interceptors.

Each interceptor either lets the request continue (returns None) or
short-circuits it by raising HTTPException. ``intercept`` folds an ordered
list of them into a single FastAPI dependency that yields the request
context handlers read from.
"""

from dataclasses import dataclass
from typing import Protocol

from fastapi import Request


@dataclass
class RequestContext:
    client_ip: str
    user_id: str | None = None


class Interceptor(Protocol):
    async def __call__(self, request: Request, ctx: RequestContext) -> None: ...


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def intercept(*interceptors: Interceptor):
    """Build a dependency running ``interceptors`` in order."""
    async def run_interceptors(request: Request) -> RequestContext:
        ctx = RequestContext(client_ip=client_ip(request))
        for interceptor in interceptors:
            await interceptor(request, ctx)
        return ctx

    return run_interceptors
