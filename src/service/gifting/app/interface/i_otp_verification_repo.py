from abc import ABC, abstractmethod
from uuid import UUID

from src.service.gifting.domain.entity.otp_verification_entity import (
    ContactBundle,
    OtpVerification,
)
from src.service.gifting.domain.enum.otp_enum import OtpStatus, OtpType


class IOtpVerificationRepo(ABC):
    @abstractmethod
    async def create(self, *, otp: OtpVerification) -> OtpVerification:
        pass

    @abstractmethod
    async def get_by_id(self, *, otp_id: UUID) -> OtpVerification | None:
        pass

    @abstractmethod
    async def delete(self, *, otp_id: UUID) -> bool:
        """Returns True when a row was removed."""
        pass

    @abstractmethod
    async def delete_pending_for_bundle(self, *, bundle: ContactBundle, otp_type: OtpType) -> int:
        """Remove pending records for the same channels and type; returns the count removed."""
        pass

    @abstractmethod
    async def transition_status(
        self, *, otp: OtpVerification, status: OtpStatus
    ) -> OtpVerification | None:
        """
        Move a pending record to `status` (stamping `verified_at` for VERIFIED).

        Returns None when the record is no longer pending.
        """
        pass

    @abstractmethod
    async def register_failed_attempt(self, *, otp_id: UUID) -> OtpVerification | None:
        """
        Increment `attempts` in place; the record becomes FAILED in the same
        write when the increment reaches `max_attempts`.

        Returns None when the record is missing, no longer pending, or already capped.
        """
        pass
