"""Upload pipeline — file validation and fan-out to the object store.

Validation happens before any byte leaves the process; uploads for all
document fields run concurrently and are awaited together.
"""

import asyncio
import logging
import re
import secrets
import time
from collections.abc import Mapping, Sequence

from domain.model.errors import (
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    UpstreamError,
    ValidationError,
)
from domain.model.property import MAX_FILES_PER_FIELD, DocumentField, Documents
from domain.model.upload import ResourceCategory, StoredObject, UploadedFile
from port.object_store import ObjectStore

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "application/pdf"})
MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024
KEY_PREFIX = "rentsetu"

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def validate_file(file: UploadedFile) -> None:
    """Reject files outside the accepted types or above the size ceiling.

    Raises:
        UnsupportedMediaTypeError: type not JPEG, PNG or PDF
        PayloadTooLargeError: more than 5 MiB
    """
    if (file.content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
        raise UnsupportedMediaTypeError(
            f"Invalid file type for '{file.filename}'. Only JPEG, PNG, PDF allowed."
        )
    if file.size > MAX_FILE_SIZE_BYTES:
        raise PayloadTooLargeError(f"File '{file.filename}' exceeds the 5MB limit.")


def validate_files(files: Mapping[DocumentField, Sequence[UploadedFile]]) -> None:
    """Check per-field counts, then every file. Raises on the first problem."""
    for field, field_files in files.items():
        limit = MAX_FILES_PER_FIELD[field]
        if len(field_files) > limit:
            raise ValidationError(
                f"Too many files for {field.value}",
                errors=[{"field": field.value, "message": f"At most {limit} files allowed"}],
            )
    for field_files in files.values():
        for file in field_files:
            validate_file(file)


def resource_category(content_type: str) -> ResourceCategory:
    return ResourceCategory.IMAGE if content_type.lower().startswith("image/") else ResourceCategory.RAW


def object_key(field: DocumentField, filename: str, now_ms: int | None = None) -> str:
    """Key ``rentsetu/<field>/<epoch-ms>-<nonce>-<filename>``; the nonce separates same-named files."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    safe_name = _UNSAFE_KEY_CHARS.sub("_", filename or "file").strip("_") or "file"
    return f"{KEY_PREFIX}/{field.value}/{now_ms}-{secrets.token_hex(4)}-{safe_name}"


async def upload_file(store: ObjectStore, file: UploadedFile) -> StoredObject:
    """Put one file to the object store off the event loop."""
    key = object_key(file.field, file.filename)
    category = resource_category(file.content_type)
    url = await asyncio.to_thread(
        store.put,
        key,
        file.data,
        file.content_type,
        {"resource-type": category.value, "original-filename": file.filename},
    )
    return StoredObject(key=key, url=url)


async def discard(store: ObjectStore, stored: Sequence[StoredObject]) -> None:
    """Best-effort removal of objects orphaned by a failed registration."""
    for obj in stored:
        try:
            await asyncio.to_thread(store.delete, obj.key)
        except UpstreamError as e:
            logger.warning("Failed to remove orphaned upload", extra={"key": obj.key, "error": str(e)})


async def upload_all(
    store: ObjectStore,
    files: Mapping[DocumentField, Sequence[UploadedFile]],
) -> tuple[Documents, list[StoredObject]]:
    """Upload every file of every field concurrently.

    Returns the Documents block (URLs in input order per field) and the list
    of stored objects. If any upload fails, the ones that succeeded are
    removed and UpstreamError is raised.
    """
    fields = list(DocumentField)
    plan = [(field, file) for field in fields for file in files.get(field, [])]

    results = await asyncio.gather(
        *(upload_file(store, file) for _, file in plan),
        return_exceptions=True,
    )

    stored = [r for r in results if isinstance(r, StoredObject)]
    failures = [r for r in results if isinstance(r, BaseException)]
    if failures:
        await discard(store, stored)
        first = failures[0]
        logger.error("Upload failed", extra={"failed": len(failures), "total": len(plan), "error": str(first)})
        if isinstance(first, UpstreamError):
            raise first
        raise UpstreamError(str(first)) from first

    urls: dict[DocumentField, list[str]] = {field: [] for field in fields}
    for (field, _), obj in zip(plan, results):
        urls[field].append(obj.url)

    documents = Documents(
        identity_proof=urls[DocumentField.IDENTITY_PROOF],
        ownership_proof=urls[DocumentField.OWNERSHIP_PROOF],
        property_photos=urls[DocumentField.PROPERTY_PHOTOS],
        floor_plan=urls[DocumentField.FLOOR_PLAN],
    )
    return documents, stored
