"""Property service — listing registration and lookup.

Pure business logic with no HTTP dependencies.
"""

import logging
from collections.abc import Mapping, Sequence

from domain.model.errors import PersistenceError
from domain.model.property import DocumentField, PersonalDetails, Property, PropertyDetails
from domain.model.upload import UploadedFile
from port.object_store import ObjectStore
from port.property_repository import PropertyRepository
from services.upload_service import discard, upload_all, validate_files

logger = logging.getLogger(__name__)


async def register_property(
    repo: PropertyRepository,
    store: ObjectStore,
    user_id: str,
    personal_details: PersonalDetails,
    property_details: PropertyDetails,
    files: Mapping[DocumentField, Sequence[UploadedFile]],
) -> Property:
    """Validate and upload the files, then persist one Property.

    Nothing is uploaded unless every file passes validation. Uploaded
    objects are removed again if saving the record fails.

    Raises:
        ValidationError, UnsupportedMediaTypeError, PayloadTooLargeError: bad files
        UpstreamError: an upload failed
        PersistenceError: the record could not be saved
    """
    validate_files(files)

    documents, stored = await upload_all(store, files)

    prop = Property.create(
        user_id=user_id,
        personal_details=personal_details,
        property_details=property_details,
        documents=documents,
    )
    try:
        repo.save(prop)
    except PersistenceError:
        await discard(store, stored)
        raise

    logger.info("Property registered", extra={
        "propertyId": prop.id,
        "userId": user_id,
        "files": len(stored),
    })
    return prop


def list_user_properties(repo: PropertyRepository, user_id: str) -> list[Property]:
    """All listings owned by ``user_id``."""
    return repo.find_by_user(user_id)
