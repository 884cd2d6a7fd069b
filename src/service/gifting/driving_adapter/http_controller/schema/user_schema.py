from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Base64Bytes, BaseModel, SecretStr

from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.enum.user_enum import ReviewDecision


class SenderSignUpRequest(BaseModel):
    email: str
    password: SecretStr
    full_name: str
    phone_number: str

    model_config = {
        'json_schema_extra': {
            'example': {
                'email': 'sender@example.com',
                'password': 'P@ssw0rd',
                'full_name': 'Ali Raza',
                'phone_number': '03001234567',
            }
        }
    }


class RiderRegisterRequest(BaseModel):
    email: str
    password: SecretStr
    full_name: str
    phone_number: str
    cnic: str
    city: str
    otp_id: UUID
    profile_image: Optional[Base64Bytes] = None


class LoginRequest(BaseModel):
    email: str
    password: SecretStr

    model_config = {
        'json_schema_extra': {'example': {'email': 'sender@example.com', 'password': 'P@ssw0rd'}}
    }


class ProfileUpdateRequest(BaseModel):
    full_name: str
    phone_number: str
    city: Optional[str] = None
    profile_image: Optional[Base64Bytes] = None


class RiderReviewRequest(BaseModel):
    decision: ReviewDecision
    reason: Optional[str] = None


class BlockUserRequest(BaseModel):
    reason: str


class UserResponse(BaseModel):
    id: int
    email: str
    full_name: str
    phone_number: str
    user_type: str
    city: Optional[str] = None
    rider_status: Optional[str] = None
    status_reason: Optional[str] = None
    profile_image_url: Optional[str] = None
    average_rating: Decimal
    total_deliveries: int
    is_email_verified: bool
    is_phone_verified: bool
    is_blocked: bool
    is_admin: bool

    @classmethod
    def from_entity(cls, user: UserEntity) -> 'UserResponse':
        return cls(
            id=user.id or 0,
            email=user.email,
            full_name=user.full_name,
            phone_number=user.phone_number,
            user_type=user.user_type.value,
            city=user.city,
            rider_status=user.rider_status.value if user.rider_status else None,
            status_reason=user.status_reason,
            profile_image_url=user.profile_image_url,
            average_rating=user.average_rating,
            total_deliveries=user.total_deliveries,
            is_email_verified=user.is_email_verified,
            is_phone_verified=user.is_phone_verified,
            is_blocked=user.is_blocked,
            is_admin=user.is_admin,
        )
