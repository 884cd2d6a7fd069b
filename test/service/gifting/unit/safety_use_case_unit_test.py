"""
Unit tests for reports, safety alerts, the security audit trail and profile edits

Test Focus:
1. Reports: no self-reports, both users must be on the linked order, review moves are one-way
2. Safety alerts: only order parties may raise one, and it can be resolved once
3. Audit trail: events are filtered by severity and a store outage does not fail the caller
4. Profile edits: a new phone clears verification, riders keep a city, photos are stored
"""

from unittest.mock import AsyncMock, Mock

import pytest
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotEligibleError,
    NotFoundError,
    UnavailableError,
    ValidationFailedError,
)
from src.service.gifting.app.command.create_safety_alert_use_case import (
    CreateSafetyAlertUseCase,
)
from src.service.gifting.app.command.resolve_safety_alert_use_case import (
    ResolveSafetyAlertUseCase,
)
from src.service.gifting.app.command.review_report_use_case import ReviewReportUseCase
from src.service.gifting.app.command.security_audit import record_security_event
from src.service.gifting.app.command.submit_report_use_case import SubmitReportUseCase
from src.service.gifting.app.command.update_profile_use_case import UpdateProfileUseCase
from src.service.gifting.app.query.list_reports_use_case import ListReportsUseCase
from src.service.gifting.app.query.list_security_events_use_case import (
    ListSecurityEventsUseCase,
)
from src.service.gifting.domain.enum.safety_enum import (
    ReportStatus,
    ReportType,
    SafetyAlertType,
    SecurityAction,
    SecuritySeverity,
)
from src.service.gifting.domain.value_object.geo_point import GeoPoint
from test.service.gifting.factory import (
    OTHER_RIDER_ID,
    RIDER_ID,
    SENDER_ID,
    make_order,
    make_rider,
    make_sender,
)
from test.service.gifting.in_memory_repo import (
    InMemoryOrderRepo,
    InMemorySafetyAlertRepo,
    InMemorySecurityEventRepo,
    InMemoryUserReportRepo,
    InMemoryUserRepo,
)


DESCRIPTION = 'Rider was rude at the door and refused to hand over the gift'


async def _accepted_order(order_repo: InMemoryOrderRepo):
    order = make_order().accept(rider_id=RIDER_ID, rider_name='Rider 2', rider_phone='3111234567')
    return await order_repo.create(order=order)


@pytest.fixture
def submit_report(
    report_repo: InMemoryUserReportRepo,
    user_repo: InMemoryUserRepo,
    order_repo: InMemoryOrderRepo,
    security_event_repo: InMemorySecurityEventRepo,
) -> SubmitReportUseCase:
    return SubmitReportUseCase(
        user_report_repo=report_repo,
        user_query_repo=user_repo,
        order_query_repo=order_repo,
        security_event_repo=security_event_repo,
    )


@pytest.fixture
def create_alert(
    safety_alert_repo: InMemorySafetyAlertRepo,
    order_repo: InMemoryOrderRepo,
    security_event_repo: InMemorySecurityEventRepo,
) -> CreateSafetyAlertUseCase:
    return CreateSafetyAlertUseCase(
        safety_alert_repo=safety_alert_repo,
        order_query_repo=order_repo,
        security_event_repo=security_event_repo,
    )


@pytest.mark.unit
class TestReports:
    @pytest.mark.asyncio
    async def test_sender_reports_rider_on_their_order(
        self,
        submit_report: SubmitReportUseCase,
        order_repo: InMemoryOrderRepo,
        security_event_repo: InMemorySecurityEventRepo,
    ) -> None:
        order = await _accepted_order(order_repo)

        report = await submit_report.execute(
            reporter=make_sender(),
            reported_user_id=RIDER_ID,
            report_type=ReportType.MISCONDUCT,
            description=f'  {DESCRIPTION}  ',
            order_id=order.id,
            evidence=['https://cdn.test/photo.jpg', '  '],
        )

        assert report.status == ReportStatus.PENDING
        assert report.description == DESCRIPTION
        assert report.reported_user_name == 'Rider 2'
        assert report.evidence == ['https://cdn.test/photo.jpg']
        assert security_event_repo.actions() == [SecurityAction.REPORT_SUBMITTED]
        assert security_event_repo.events[0].severity == SecuritySeverity.MEDIUM

    @pytest.mark.asyncio
    async def test_self_report_is_refused(self, submit_report: SubmitReportUseCase) -> None:
        with pytest.raises(ValidationFailedError, match='cannot report yourself'):
            await submit_report.execute(
                reporter=make_sender(),
                reported_user_id=SENDER_ID,
                report_type=ReportType.FRAUD,
                description=DESCRIPTION,
            )

    @pytest.mark.parametrize(
        'description,evidence',
        [
            ('too short', None),
            (DESCRIPTION, ['ftp://files.test/photo.jpg']),
            (DESCRIPTION, [f'https://cdn.test/{i}.jpg' for i in range(6)]),
        ],
    )
    @pytest.mark.asyncio
    async def test_invalid_report_body(
        self,
        description: str,
        evidence: list[str] | None,
        submit_report: SubmitReportUseCase,
        report_repo: InMemoryUserReportRepo,
    ) -> None:
        with pytest.raises(ValidationFailedError):
            await submit_report.execute(
                reporter=make_sender(),
                reported_user_id=RIDER_ID,
                report_type=ReportType.OTHER,
                description=description,
                evidence=evidence,
            )
        assert report_repo.rows == {}

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_found(self, submit_report: SubmitReportUseCase) -> None:
        with pytest.raises(NotFoundError, match='Reported user not found'):
            await submit_report.execute(
                reporter=make_sender(),
                reported_user_id=404,
                report_type=ReportType.OTHER,
                description=DESCRIPTION,
            )

    @pytest.mark.asyncio
    async def test_order_must_link_both_users(
        self,
        submit_report: SubmitReportUseCase,
        order_repo: InMemoryOrderRepo,
        security_event_repo: InMemorySecurityEventRepo,
    ) -> None:
        """
        Given: an order between the sender and RIDER_ID
        When: the sender reports a different rider against that order
        Then: the report is refused and nothing is audited
        """
        order = await _accepted_order(order_repo)

        with pytest.raises(NotEligibleError, match='Both users'):
            await submit_report.execute(
                reporter=make_sender(),
                reported_user_id=OTHER_RIDER_ID,
                report_type=ReportType.MISCONDUCT,
                description=DESCRIPTION,
                order_id=order.id,
            )
        assert security_event_repo.events == []

    @pytest.mark.asyncio
    async def test_review_moves_forward_only(
        self, submit_report: SubmitReportUseCase, report_repo: InMemoryUserReportRepo
    ) -> None:
        report = await submit_report.execute(
            reporter=make_sender(),
            reported_user_id=RIDER_ID,
            report_type=ReportType.HARASSMENT,
            description=DESCRIPTION,
        )
        review = ReviewReportUseCase(user_report_repo=report_repo)

        in_review = await review.execute(report_id=report.id, status=ReportStatus.UNDER_REVIEW)
        resolved = await review.execute(
            report_id=report.id, status=ReportStatus.RESOLVED, admin_notes=' Rider warned '
        )

        assert in_review.status == ReportStatus.UNDER_REVIEW
        assert resolved.status == ReportStatus.RESOLVED
        assert resolved.admin_notes == 'Rider warned'
        with pytest.raises(InvalidStateError):
            await review.execute(report_id=report.id, status=ReportStatus.PENDING)
        with pytest.raises(InvalidStateError):
            await review.execute(report_id=report.id, status=ReportStatus.DISMISSED)
        with pytest.raises(NotFoundError):
            await review.execute(report_id=uuid7(), status=ReportStatus.DISMISSED)

    @pytest.mark.asyncio
    async def test_concurrent_review_conflicts(
        self, submit_report: SubmitReportUseCase, report_repo: InMemoryUserReportRepo
    ) -> None:
        """
        Given: a pending report
        When: two admins review it from the same pending read
        Then: the second write is refused with ConflictError
        """
        report = await submit_report.execute(
            reporter=make_sender(),
            reported_user_id=RIDER_ID,
            report_type=ReportType.SAFETY,
            description=DESCRIPTION,
        )
        stale = await report_repo.get_by_id(report_id=report.id)
        assert stale is not None
        await ReviewReportUseCase(user_report_repo=report_repo).execute(
            report_id=report.id, status=ReportStatus.DISMISSED
        )

        racing = Mock()
        racing.get_by_id = AsyncMock(return_value=stale)
        racing.update_review = report_repo.update_review
        with pytest.raises(ConflictError):
            await ReviewReportUseCase(user_report_repo=racing).execute(
                report_id=report.id, status=ReportStatus.RESOLVED
            )

        stored = await report_repo.get_by_id(report_id=report.id)
        assert stored is not None
        assert stored.status == ReportStatus.DISMISSED

    @pytest.mark.asyncio
    async def test_listings(
        self, submit_report: SubmitReportUseCase, report_repo: InMemoryUserReportRepo
    ) -> None:
        first = await submit_report.execute(
            reporter=make_sender(),
            reported_user_id=RIDER_ID,
            report_type=ReportType.OTHER,
            description=DESCRIPTION,
        )
        await submit_report.execute(
            reporter=make_rider(),
            reported_user_id=SENDER_ID,
            report_type=ReportType.FRAUD,
            description='Sender gave a fake receiver address twice',
        )
        listing = ListReportsUseCase(user_report_repo=report_repo)

        mine = await listing.mine(user=make_sender())
        pending = await listing.by_status(status=ReportStatus.PENDING)

        assert [r.id for r in mine] == [first.id]
        assert len(pending) == 2
        assert await listing.by_status(status=ReportStatus.RESOLVED) == []


@pytest.mark.unit
class TestSafetyAlerts:
    @pytest.mark.asyncio
    async def test_rider_raises_alert_on_own_order(
        self,
        create_alert: CreateSafetyAlertUseCase,
        order_repo: InMemoryOrderRepo,
        security_event_repo: InMemorySecurityEventRepo,
    ) -> None:
        order = await _accepted_order(order_repo)

        alert = await create_alert.execute(
            user=make_rider(),
            alert_type=SafetyAlertType.PANIC,
            description='Followed by a car since the pickup',
            order_id=order.id,
            location=GeoPoint(31.5204, 74.3587),
        )

        assert alert.is_resolved is False
        assert alert.location == GeoPoint(31.5204, 74.3587)
        assert security_event_repo.actions() == [SecurityAction.SAFETY_ALERT_CREATED]
        assert security_event_repo.events[0].severity == SecuritySeverity.CRITICAL

    @pytest.mark.asyncio
    async def test_outsider_cannot_alert_on_order(
        self,
        create_alert: CreateSafetyAlertUseCase,
        order_repo: InMemoryOrderRepo,
        safety_alert_repo: InMemorySafetyAlertRepo,
    ) -> None:
        order = await _accepted_order(order_repo)

        with pytest.raises(ForbiddenError):
            await create_alert.execute(
                user=make_rider(id=OTHER_RIDER_ID, email='rider2@test.com'),
                alert_type=SafetyAlertType.SUSPICIOUS,
                description='Strange package',
                order_id=order.id,
            )
        assert safety_alert_repo.rows == {}

    @pytest.mark.asyncio
    async def test_blank_description_is_refused(
        self, create_alert: CreateSafetyAlertUseCase
    ) -> None:
        with pytest.raises(ValidationFailedError):
            await create_alert.execute(
                user=make_sender(), alert_type=SafetyAlertType.DELAY, description='   '
            )

    @pytest.mark.asyncio
    async def test_alert_is_resolved_once(
        self, create_alert: CreateSafetyAlertUseCase, safety_alert_repo: InMemorySafetyAlertRepo
    ) -> None:
        alert = await create_alert.execute(
            user=make_sender(), alert_type=SafetyAlertType.DISPUTE, description='Gift damaged'
        )
        resolve = ResolveSafetyAlertUseCase(safety_alert_repo=safety_alert_repo)

        with pytest.raises(ValidationFailedError):
            await resolve.execute(alert_id=alert.id, admin_response=' ')
        resolved = await resolve.execute(alert_id=alert.id, admin_response='Refund issued')

        assert resolved.is_resolved is True
        assert resolved.resolved_at is not None
        with pytest.raises(InvalidStateError):
            await resolve.execute(alert_id=alert.id, admin_response='Again')
        with pytest.raises(NotFoundError):
            await resolve.execute(alert_id=uuid7(), admin_response='Refund issued')

    @pytest.mark.asyncio
    async def test_lost_resolve_race_is_invalid_state(
        self, create_alert: CreateSafetyAlertUseCase, safety_alert_repo: InMemorySafetyAlertRepo
    ) -> None:
        alert = await create_alert.execute(
            user=make_sender(), alert_type=SafetyAlertType.DELAY, description='Two hours late'
        )
        await ResolveSafetyAlertUseCase(safety_alert_repo=safety_alert_repo).execute(
            alert_id=alert.id, admin_response='Rider reached'
        )

        racing = Mock()
        racing.get_by_id = AsyncMock(return_value=alert)
        racing.resolve = safety_alert_repo.resolve
        with pytest.raises(InvalidStateError):
            await ResolveSafetyAlertUseCase(safety_alert_repo=racing).execute(
                alert_id=alert.id, admin_response='Late reply'
            )

        stored = await safety_alert_repo.get_by_id(alert_id=alert.id)
        assert stored is not None
        assert stored.admin_response == 'Rider reached'


@pytest.mark.unit
class TestSecurityAudit:
    @pytest.mark.asyncio
    async def test_events_filtered_by_severity(
        self, security_event_repo: InMemorySecurityEventRepo
    ) -> None:
        for action, severity in [
            (SecurityAction.LOGIN_FAILED, SecuritySeverity.LOW),
            (SecurityAction.ACCOUNT_LOCKED, SecuritySeverity.HIGH),
            (SecurityAction.SAFETY_ALERT_CREATED, SecuritySeverity.CRITICAL),
        ]:
            await record_security_event(
                security_event_repo, action=action, details='x', severity=severity, user_id=1
            )
        listing = ListSecurityEventsUseCase(security_event_repo=security_event_repo, max_limit=2)

        serious = await listing.execute(limit=2, min_severity=SecuritySeverity.HIGH)
        latest = await listing.execute(limit=1)

        assert {e.action for e in serious} == {
            SecurityAction.ACCOUNT_LOCKED,
            SecurityAction.SAFETY_ALERT_CREATED,
        }
        assert len(latest) == 1
        with pytest.raises(ValidationFailedError):
            await listing.execute(limit=3)
        with pytest.raises(ValidationFailedError):
            await listing.execute(limit=0)

    @pytest.mark.asyncio
    async def test_store_outage_does_not_fail_caller(self) -> None:
        repo = Mock()
        repo.create = AsyncMock(side_effect=UnavailableError())

        event = await record_security_event(
            repo,
            action=SecurityAction.USER_BLOCKED,
            details='User blocked: spam',
            severity=SecuritySeverity.HIGH,
            user_id=SENDER_ID,
        )

        assert event is None
        repo.create.assert_awaited_once()


@pytest.mark.unit
class TestUpdateProfile:
    @pytest.fixture
    def use_case(
        self,
        user_repo: InMemoryUserRepo,
        mock_media_storage: Mock,
        security_event_repo: InMemorySecurityEventRepo,
    ) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(
            user_command_repo=user_repo,
            media_storage=mock_media_storage,
            security_event_repo=security_event_repo,
        )

    @pytest.mark.asyncio
    async def test_new_phone_clears_verification(
        self,
        use_case: UpdateProfileUseCase,
        user_repo: InMemoryUserRepo,
        security_event_repo: InMemorySecurityEventRepo,
    ) -> None:
        """
        Given: a sender whose phone is verified
        When: they save a different phone number
        Then: the number is normalized, verification is cleared and the change is audited
        """
        sender = await user_repo.get_by_id(user_id=SENDER_ID)
        assert sender is not None
        sender.is_phone_verified = True
        await user_repo.update(user=sender)

        saved = await use_case.execute(
            user=sender, full_name=' Ali Raza Khan ', phone_number='+92 300 7654321'
        )

        assert saved.full_name == 'Ali Raza Khan'
        assert saved.phone_number == '3007654321'
        assert saved.is_phone_verified is False
        assert security_event_repo.actions() == [SecurityAction.PROFILE_UPDATED]

    @pytest.mark.asyncio
    async def test_same_phone_keeps_verification(
        self,
        use_case: UpdateProfileUseCase,
        user_repo: InMemoryUserRepo,
        security_event_repo: InMemorySecurityEventRepo,
    ) -> None:
        sender = await user_repo.get_by_id(user_id=SENDER_ID)
        assert sender is not None
        sender.is_phone_verified = True
        await user_repo.update(user=sender)

        saved = await use_case.execute(
            user=sender, full_name='Ali Raza', phone_number='0300-1234567', city='Multan'
        )

        assert saved.is_phone_verified is True
        assert saved.city == 'Multan'
        assert security_event_repo.events == []

    @pytest.mark.asyncio
    async def test_rider_needs_city(
        self, use_case: UpdateProfileUseCase, user_repo: InMemoryUserRepo
    ) -> None:
        rider = await user_repo.get_by_id(user_id=RIDER_ID)
        assert rider is not None

        with pytest.raises(ValidationFailedError, match='City is required'):
            await use_case.execute(user=rider, full_name='Bilal Khan', phone_number='03111234567')

    @pytest.mark.asyncio
    async def test_photo_is_stored(
        self, use_case: UpdateProfileUseCase, user_repo: InMemoryUserRepo, mock_media_storage: Mock
    ) -> None:
        rider = await user_repo.get_by_id(user_id=RIDER_ID)
        assert rider is not None

        saved = await use_case.execute(
            user=rider,
            full_name='Bilal Khan',
            phone_number='03111234567',
            city='Lahore',
            profile_image=b'jpeg',
        )

        assert saved.profile_image_url == f'/static/media/profile_images/{RIDER_ID}.jpg'
        mock_media_storage.store.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_block_is_not_undone_by_profile_save(
        self, use_case: UpdateProfileUseCase, user_repo: InMemoryUserRepo
    ) -> None:
        """
        Given: a session user loaded before an admin blocked the account
        When: the stale session saves a profile edit
        Then: the account stays blocked
        """
        stale = await user_repo.get_by_id(user_id=SENDER_ID)
        assert stale is not None
        blocked = await user_repo.get_by_id(user_id=SENDER_ID)
        assert blocked is not None
        await user_repo.update(user=blocked.block(reason='Chargeback abuse'))

        saved = await use_case.execute(
            user=stale, full_name='Ali Raza', phone_number='03001234567'
        )

        assert saved.is_blocked is True
        assert saved.blocked_reason == 'Chargeback abuse'
