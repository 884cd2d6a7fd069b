import asyncpg

from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.enum.user_enum import RiderStatus, UserType


USER_COLUMNS = """
    id, email, phone_number, full_name, user_type, hashed_password, cnic, city,
    rider_status, status_reason, profile_image_url, average_rating, total_deliveries,
    is_email_verified, is_phone_verified, login_attempts, is_blocked, blocked_reason,
    last_login_at, is_admin, created_at, updated_at
"""


def row_to_user(row: asyncpg.Record) -> UserEntity:
    """Convert asyncpg Record to UserEntity"""
    return UserEntity(
        id=row['id'],
        email=row['email'],
        phone_number=row['phone_number'],
        full_name=row['full_name'],
        user_type=UserType(row['user_type']),
        hashed_password=row['hashed_password'],
        cnic=row['cnic'],
        city=row['city'],
        rider_status=RiderStatus(row['rider_status']) if row['rider_status'] else None,
        status_reason=row['status_reason'],
        profile_image_url=row['profile_image_url'],
        average_rating=row['average_rating'],
        total_deliveries=row['total_deliveries'],
        is_email_verified=row['is_email_verified'],
        is_phone_verified=row['is_phone_verified'],
        login_attempts=row['login_attempts'],
        is_blocked=row['is_blocked'],
        blocked_reason=row['blocked_reason'],
        last_login_at=row['last_login_at'],
        is_admin=row['is_admin'],
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )
