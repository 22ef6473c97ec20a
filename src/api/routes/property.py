"""Property listing routes.

- POST /api/property/register: multipart registration with document uploads
- GET /api/property/my-properties: listings owned by the caller

Flow:
    Client → bearer guard → upload limiter → field validation → file validation
           → concurrent uploads → save Property → 201
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import ValidationError as PydanticValidationError

from api.dependencies import get_object_store, get_property_repo
from api.errors import to_http_exception
from api.interceptors import RequestContext, intercept
from api.models import PersonalDetailsRequest, PropertyDetailsRequest
from api.rate_limit import upload_limiter
from api.security import require_user
from domain.model.errors import DomainError
from domain.model.property import DocumentField
from domain.model.upload import UploadedFile
from port.object_store import ObjectStore
from port.property_repository import PropertyRepository
from services import property_service
from services.upload_service import MAX_FILE_SIZE_BYTES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/property", tags=["property"])


def _field_errors(prefix: str, error: PydanticValidationError) -> list[dict]:
    """Flatten pydantic errors into ``{"field", "message"}`` entries."""
    errors = []
    for item in error.errors():
        path = ".".join(str(part) for part in item.get("loc", ()))
        errors.append({
            "field": f"{prefix}.{path}" if path else prefix,
            "message": item.get("msg", "Invalid value"),
        })
    return errors


def _parse_details(personal_raw: str, property_raw: str):
    """Validate both JSON blocks, collecting every field error before failing."""
    errors: list[dict] = []
    personal = details = None

    try:
        personal = PersonalDetailsRequest.model_validate_json(personal_raw or "")
    except PydanticValidationError as e:
        errors.extend(_field_errors("personalDetails", e))

    try:
        details = PropertyDetailsRequest.model_validate_json(property_raw or "")
    except PydanticValidationError as e:
        errors.extend(_field_errors("propertyDetails", e))

    if errors:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Validation failed", "errors": errors},
        )
    return personal.to_domain(), details.to_domain()


async def _read_files(field: DocumentField, uploads: Optional[list[UploadFile]]) -> list[UploadedFile]:
    files = []
    for upload in uploads or []:
        # One byte past the ceiling is enough to detect an oversized file
        data = await upload.read(MAX_FILE_SIZE_BYTES + 1)
        files.append(UploadedFile(
            field=field,
            filename=upload.filename or "file",
            content_type=upload.content_type or "",
            data=data,
        ))
    return files


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_property(
    ctx: RequestContext = Depends(intercept(require_user, upload_limiter)),
    personal_details: str = Form("", alias="personalDetails"),
    property_details: str = Form("", alias="propertyDetails"),
    identity_proof: Optional[list[UploadFile]] = File(None, alias="identityProof"),
    ownership_proof: Optional[list[UploadFile]] = File(None, alias="ownershipProof"),
    property_photos: Optional[list[UploadFile]] = File(None, alias="propertyPhotos"),
    floor_plan: Optional[list[UploadFile]] = File(None, alias="floorPlan"),
    repo: PropertyRepository = Depends(get_property_repo),
    store: ObjectStore = Depends(get_object_store),
):
    """Register a property listing with its identity, ownership, photo and floor-plan files."""
    personal, details = _parse_details(personal_details, property_details)

    files = {
        DocumentField.IDENTITY_PROOF: await _read_files(DocumentField.IDENTITY_PROOF, identity_proof),
        DocumentField.OWNERSHIP_PROOF: await _read_files(DocumentField.OWNERSHIP_PROOF, ownership_proof),
        DocumentField.PROPERTY_PHOTOS: await _read_files(DocumentField.PROPERTY_PHOTOS, property_photos),
        DocumentField.FLOOR_PLAN: await _read_files(DocumentField.FLOOR_PLAN, floor_plan),
    }

    try:
        prop = await property_service.register_property(
            repo=repo,
            store=store,
            user_id=ctx.user_id,
            personal_details=personal,
            property_details=details,
            files=files,
        )
    except DomainError as e:
        logger.error("Error during property registration", extra={"userId": ctx.user_id, "error": str(e)})
        raise to_http_exception(e)

    return {"message": "Property registered successfully", "property": prop.to_dict()}


@router.get("/my-properties")
async def my_properties(
    ctx: RequestContext = Depends(intercept(require_user)),
    repo: PropertyRepository = Depends(get_property_repo),
):
    """List every property owned by the authenticated user."""
    try:
        properties = property_service.list_user_properties(repo, ctx.user_id)
    except DomainError as e:
        logger.error("Error fetching properties", extra={"userId": ctx.user_id, "error": str(e)})
        raise to_http_exception(e)

    return [prop.to_dict() for prop in properties]
