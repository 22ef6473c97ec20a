"""Pydantic models for API request/response."""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints
from pydantic.alias_generators import to_camel

from domain.model.property import PersonalDetails, PropertyDetails

RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# ── Auth ─────────────────────────────────────────────────

class SignupRequest(BaseModel):
    """Request model for signup. Format checks run in the auth service."""
    email: str = ""
    password: str = ""


class VerifyOtpRequest(BaseModel):
    email: str = ""
    otp: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class RefreshTokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: Optional[str] = Field(None, alias="refreshToken")


class MessageResponse(BaseModel):
    message: str


class TokenPairResponse(BaseModel):
    """Access and refresh tokens issued after verification or login."""
    model_config = ConfigDict(populate_by_name=True)

    token: str
    refresh_token: str = Field(..., alias="refreshToken")


class AccessTokenResponse(BaseModel):
    token: str


# ── Property ─────────────────────────────────────────────

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalDetailsRequest(_CamelModel):
    """personalDetails multipart field (JSON string)."""
    full_name: RequiredStr
    contact_no: RequiredStr
    alternate_contact_no: Optional[str] = None
    email: EmailStr
    current_address_line1: RequiredStr
    current_address_line2: Optional[str] = None
    current_city: RequiredStr
    current_state: RequiredStr
    current_pincode: RequiredStr
    communication_mode: list[str] = Field(default_factory=list)

    def to_domain(self) -> PersonalDetails:
        return PersonalDetails(
            full_name=self.full_name,
            contact_no=self.contact_no,
            alternate_contact_no=self.alternate_contact_no,
            email=str(self.email),
            current_address_line1=self.current_address_line1,
            current_address_line2=self.current_address_line2,
            current_city=self.current_city,
            current_state=self.current_state,
            current_pincode=self.current_pincode,
            communication_mode=list(self.communication_mode),
        )


class PropertyDetailsRequest(_CamelModel):
    """propertyDetails multipart field (JSON string)."""
    property_address_line1: RequiredStr
    property_address_line2: Optional[str] = None
    property_city: RequiredStr
    property_state: RequiredStr
    property_pincode: RequiredStr
    property_name: RequiredStr
    property_type: RequiredStr
    bhk_type: RequiredStr
    furnishing_status: RequiredStr
    property_price: float = Field(..., ge=0)
    security_deposit: float = Field(..., ge=0)
    amenities: list[str] = Field(default_factory=list)

    def to_domain(self) -> PropertyDetails:
        return PropertyDetails(
            property_address_line1=self.property_address_line1,
            property_address_line2=self.property_address_line2,
            property_city=self.property_city,
            property_state=self.property_state,
            property_pincode=self.property_pincode,
            property_name=self.property_name,
            property_type=self.property_type,
            bhk_type=self.bhk_type,
            furnishing_status=self.furnishing_status,
            property_price=self.property_price,
            security_deposit=self.security_deposit,
            amenities=list(self.amenities),
        )
