"""Upload value objects."""

from dataclasses import dataclass
from enum import Enum

from domain.model.property import DocumentField


class ResourceCategory(str, Enum):
    """Storage handling class of an uploaded file."""
    IMAGE = 'image'
    RAW = 'raw'


@dataclass(frozen=True)
class UploadedFile:
    """A file received from the client, fully buffered in memory."""
    field: DocumentField
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class StoredObject:
    """Result of putting one file to the object store."""
    key: str
    url: str
