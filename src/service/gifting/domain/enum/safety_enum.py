from enum import StrEnum


class ReportType(StrEnum):
    MISCONDUCT = 'misconduct'
    SAFETY = 'safety'
    FRAUD = 'fraud'
    HARASSMENT = 'harassment'
    OTHER = 'other'


class ReportStatus(StrEnum):
    PENDING = 'pending'
    UNDER_REVIEW = 'underReview'
    RESOLVED = 'resolved'
    DISMISSED = 'dismissed'


class SafetyAlertType(StrEnum):
    PANIC = 'panic'
    SUSPICIOUS = 'suspicious'
    DELAY = 'delay'
    DISPUTE = 'dispute'


class SecuritySeverity(StrEnum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    CRITICAL = 'critical'

    def and_above(self) -> list['SecuritySeverity']:
        levels = list(SecuritySeverity)
        return levels[levels.index(self) :]


class SecurityAction(StrEnum):
    LOGIN_FAILED = 'login_failed'
    ACCOUNT_LOCKED = 'account_locked'
    USER_BLOCKED = 'user_blocked'
    USER_UNBLOCKED = 'user_unblocked'
    REPORT_SUBMITTED = 'report_submitted'
    SAFETY_ALERT_CREATED = 'safety_alert_created'
    PROFILE_UPDATED = 'profile_updated'
