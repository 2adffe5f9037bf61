"""Tests for the registration status tables and flag toggles"""

import pytest

from rides.models import RegistrationStatus as S
from rides.workflow import TransitionNotAllowed, apply_status, can_transition, set_flag

from .base import BaseTestCase


@pytest.mark.parametrize('current', S.values)
@pytest.mark.parametrize('target', S.values)
def test_staff_may_set_any_status(current, target):
    assert can_transition(current, target, as_staff=True)


def test_owner_may_only_request_cancellation():
    assert can_transition(S.PENDING, S.CANCELLATION_REQUESTED, as_staff=False)
    assert can_transition(S.APPROVED, S.CANCELLATION_REQUESTED, as_staff=False)
    assert not can_transition(S.PENDING, S.APPROVED, as_staff=False)
    assert not can_transition(S.REJECTED, S.CANCELLATION_REQUESTED, as_staff=False)
    assert not can_transition(S.CANCELLATION_REQUESTED, S.CANCELLED, as_staff=False)


class TestApplyStatus(BaseTestCase):

    def test_writes_audit_fields(self):
        admin = self.admin()
        registration = self.create_registration()

        apply_status(registration, S.APPROVED, admin)
        registration.refresh_from_db()

        assert registration.status == S.APPROVED
        assert registration.status_last_updated_by == admin
        assert registration.status_last_updated_at is not None

    def test_owner_transition_refused(self):
        registration = self.create_registration(status=S.REJECTED)
        with pytest.raises(TransitionNotAllowed):
            apply_status(registration, S.CANCELLATION_REQUESTED, registration.user, as_staff=False)
        registration.refresh_from_db()
        assert registration.status == S.REJECTED

    def test_extra_fields_saved(self):
        registration = self.create_registration(status=S.APPROVED)
        apply_status(
            registration, S.CANCELLATION_REQUESTED, registration.user,
            as_staff=False, cancellation_reason='Bike broke down last week',
        )
        registration.refresh_from_db()
        assert registration.cancellation_reason == 'Bike broke down last week'


class TestFlags(BaseTestCase):

    def test_set_flag_is_idempotent(self):
        registration = self.create_registration()
        assert set_flag(registration, 'certificate_granted', True) is True
        assert set_flag(registration, 'certificate_granted', True) is False
        registration.refresh_from_db()
        assert registration.certificate_granted is True

    def test_flags_do_not_touch_status(self):
        registration = self.create_registration(status=S.APPROVED)
        set_flag(registration, 'rider1_checked_in', True)
        set_flag(registration, 'rider1_finished', True)
        registration.refresh_from_db()
        assert registration.status == S.APPROVED
        assert registration.rider1_checked_in and registration.rider1_finished

    def test_unknown_flag(self):
        registration = self.create_registration()
        with pytest.raises(ValueError):
            set_flag(registration, 'status', True)
