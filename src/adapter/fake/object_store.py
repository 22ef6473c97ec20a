"""In-memory ObjectStore for testing."""

from domain.model.errors import UpstreamError

FAKE_PUBLIC_URL = 'https://cdn.example.test'


class FakeObjectStore:
    def __init__(self, fail_on: set[str] | None = None):
        self.objects: dict[str, dict] = {}
        self.put_calls: list[str] = []
        self.deleted: list[str] = []
        # Substrings of keys whose upload should fail
        self.fail_on = fail_on or set()

    def put(self, key: str, data: bytes, content_type: str, metadata: dict[str, str] | None = None) -> str:
        self.put_calls.append(key)
        if any(marker in key for marker in self.fail_on):
            raise UpstreamError(f"Upload rejected for {key}")
        self.objects[key] = {
            'data': data,
            'content_type': content_type,
            'metadata': metadata or {},
        }
        return f"{FAKE_PUBLIC_URL}/{key}"

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)
        self.deleted.append(key)
