"""Port for object storage of uploaded files."""

from typing import Protocol


class ObjectStore(Protocol):
    def put(self, key: str, data: bytes, content_type: str, metadata: dict[str, str] | None = None) -> str:
        """Store ``data`` under ``key`` and return its public URL.

        Raise UpstreamError on failure.
        """
        ...

    def delete(self, key: str) -> None:
        """Remove the object at ``key``. Raise UpstreamError on failure."""
        ...
