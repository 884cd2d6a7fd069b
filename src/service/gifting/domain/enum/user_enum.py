from enum import StrEnum


class UserType(StrEnum):
    SENDER = 'sender'
    RIDER = 'rider'


class RiderStatus(StrEnum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    BANNED = 'banned'


class ReviewDecision(StrEnum):
    APPROVE = 'approve'
    REJECT = 'reject'
    BAN = 'ban'
