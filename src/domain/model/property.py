"""Property listing domain models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class DocumentField(str, Enum):
    """Multipart field names under which listing files are uploaded."""
    IDENTITY_PROOF = 'identityProof'
    OWNERSHIP_PROOF = 'ownershipProof'
    PROPERTY_PHOTOS = 'propertyPhotos'
    FLOOR_PLAN = 'floorPlan'


# Maximum number of files accepted per field
MAX_FILES_PER_FIELD = {
    DocumentField.IDENTITY_PROOF: 2,
    DocumentField.OWNERSHIP_PROOF: 2,
    DocumentField.PROPERTY_PHOTOS: 10,
    DocumentField.FLOOR_PLAN: 2,
}


@dataclass(frozen=True)
class PersonalDetails:
    """Owner contact block."""
    full_name: str
    contact_no: str
    email: str
    current_address_line1: str
    current_city: str
    current_state: str
    current_pincode: str
    alternate_contact_no: str | None = None
    current_address_line2: str | None = None
    communication_mode: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'fullName': self.full_name,
            'contactNo': self.contact_no,
            'alternateContactNo': self.alternate_contact_no,
            'email': self.email,
            'currentAddressLine1': self.current_address_line1,
            'currentAddressLine2': self.current_address_line2,
            'currentCity': self.current_city,
            'currentState': self.current_state,
            'currentPincode': self.current_pincode,
            'communicationMode': list(self.communication_mode),
        }

    @staticmethod
    def from_dict(data: dict) -> 'PersonalDetails':
        return PersonalDetails(
            full_name=data['fullName'],
            contact_no=data['contactNo'],
            alternate_contact_no=data.get('alternateContactNo'),
            email=data['email'],
            current_address_line1=data['currentAddressLine1'],
            current_address_line2=data.get('currentAddressLine2'),
            current_city=data['currentCity'],
            current_state=data['currentState'],
            current_pincode=data['currentPincode'],
            communication_mode=list(data.get('communicationMode') or []),
        )


@dataclass(frozen=True)
class PropertyDetails:
    """Listed property block."""
    property_address_line1: str
    property_city: str
    property_state: str
    property_pincode: str
    property_name: str
    property_type: str
    bhk_type: str
    furnishing_status: str
    property_price: float
    security_deposit: float
    property_address_line2: str | None = None
    amenities: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'propertyAddressLine1': self.property_address_line1,
            'propertyAddressLine2': self.property_address_line2,
            'propertyCity': self.property_city,
            'propertyState': self.property_state,
            'propertyPincode': self.property_pincode,
            'propertyName': self.property_name,
            'propertyType': self.property_type,
            'bhkType': self.bhk_type,
            'furnishingStatus': self.furnishing_status,
            'propertyPrice': self.property_price,
            'securityDeposit': self.security_deposit,
            'amenities': list(self.amenities),
        }

    @staticmethod
    def from_dict(data: dict) -> 'PropertyDetails':
        return PropertyDetails(
            property_address_line1=data['propertyAddressLine1'],
            property_address_line2=data.get('propertyAddressLine2'),
            property_city=data['propertyCity'],
            property_state=data['propertyState'],
            property_pincode=data['propertyPincode'],
            property_name=data['propertyName'],
            property_type=data['propertyType'],
            bhk_type=data['bhkType'],
            furnishing_status=data['furnishingStatus'],
            property_price=float(data['propertyPrice']),
            security_deposit=float(data['securityDeposit']),
            amenities=list(data.get('amenities') or []),
        )


@dataclass(frozen=True)
class Documents:
    """Stored-file URLs per document field. Every list is always present."""
    identity_proof: list[str] = field(default_factory=list)
    ownership_proof: list[str] = field(default_factory=list)
    property_photos: list[str] = field(default_factory=list)
    floor_plan: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            DocumentField.IDENTITY_PROOF.value: list(self.identity_proof),
            DocumentField.OWNERSHIP_PROOF.value: list(self.ownership_proof),
            DocumentField.PROPERTY_PHOTOS.value: list(self.property_photos),
            DocumentField.FLOOR_PLAN.value: list(self.floor_plan),
        }

    @staticmethod
    def from_dict(data: dict | None) -> 'Documents':
        data = data or {}
        return Documents(
            identity_proof=list(data.get(DocumentField.IDENTITY_PROOF.value) or []),
            ownership_proof=list(data.get(DocumentField.OWNERSHIP_PROOF.value) or []),
            property_photos=list(data.get(DocumentField.PROPERTY_PHOTOS.value) or []),
            floor_plan=list(data.get(DocumentField.FLOOR_PLAN.value) or []),
        )


@dataclass
class Property:
    """A registered rental listing. Immutable once saved."""
    id: str
    user_id: str
    personal_details: PersonalDetails
    property_details: PropertyDetails
    documents: Documents
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def create(
        user_id: str,
        personal_details: PersonalDetails,
        property_details: PropertyDetails,
        documents: Documents | None = None,
    ) -> 'Property':
        now = datetime.now(timezone.utc)
        return Property(
            id=uuid.uuid4().hex,
            user_id=user_id,
            personal_details=personal_details,
            property_details=property_details,
            documents=documents or Documents(),
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict:
        """Wire representation (camelCase, as returned by the API)."""
        return {
            'id': self.id,
            'userId': self.user_id,
            'personalDetails': self.personal_details.to_dict(),
            'propertyDetails': self.property_details.to_dict(),
            'documents': self.documents.to_dict(),
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
        }
