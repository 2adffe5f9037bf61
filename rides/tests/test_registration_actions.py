"""Tests for signup, the admin review workflow and rider deletion"""

import pytest
from django.contrib.auth import get_user_model

from rides.actions import run_action
from rides.models import EventSettings, Profile, Registration, RegistrationStatus, UserRole, VehicleType

from .base import BaseTestCase, account_payload, rider_payload

User = get_user_model()


class TestCreateAccountAndRegister(BaseTestCase):

    def test_creates_user_profile_and_pending_registration(self):
        result = run_action('create_account_and_register_rider', account_payload())

        assert result.success, result.message
        assert result.message == "Registration successful! Your application is pending review."
        user = User.objects.get(pk=result.data['uid'])
        assert user.email == 'asha@example.com'
        assert user.profile.role == UserRole.USER
        assert user.profile.display_name == 'Asha Rider'

        registration = Registration.objects.get(pk=user.pk)
        assert registration.status == RegistrationStatus.PENDING
        assert registration.consent is True
        assert registration.registration_type == VehicleType.BIKE
        assert registration.email == 'asha@example.com'

    def test_returns_working_credential(self):
        result = run_action('create_account_and_register_rider', account_payload())
        follow_up = run_action('request_organizer_access', {}, result.data['credential'])
        assert follow_up.success, follow_up.message

    def test_underage_rider_creates_nothing(self):
        result = run_action('create_account_and_register_rider', account_payload(age=17))

        assert not result.success
        assert result.error_type == 'VALIDATION'
        assert 'age' in result.data['errors']
        assert not User.objects.exists()
        assert not Registration.objects.exists()

    def test_missing_rule_rejected(self):
        result = run_action('create_account_and_register_rider', account_payload(rule4=False))
        assert result.error_type == 'VALIDATION'
        assert 'rule4' in result.data['errors']
        assert not User.objects.exists()

    def test_password_mismatch(self):
        result = run_action('create_account_and_register_rider', account_payload(confirm_password='other123'))
        assert result.error_type == 'VALIDATION'
        assert 'confirm_password' in result.data['errors']

    def test_bad_phone_number(self):
        result = run_action('create_account_and_register_rider', account_payload(phone_number='call me'))
        assert result.error_type == 'VALIDATION'
        assert 'phone_number' in result.data['errors']

    def test_existing_email(self):
        self.create_user(email='asha@example.com')

        result = run_action('create_account_and_register_rider', account_payload(email='Asha@Example.com'))

        assert not result.success
        assert result.error_type == 'EMAIL_EXISTS'
        assert result.http_status == 409
        assert User.objects.count() == 1
        assert not Registration.objects.exists()

    def test_registrations_closed(self):
        event_settings = EventSettings.load()
        event_settings.registrations_open = False
        event_settings.save()

        result = run_action('create_account_and_register_rider', account_payload())

        assert result.error_type == 'CLOSED'
        assert not User.objects.exists()


class TestRegisterExistingUser(BaseTestCase):

    def test_registers_signed_in_user(self):
        user = self.create_user()
        result = run_action('register_existing_user', rider_payload(user_id=user.pk), self.credential(user))

        assert result.success, result.message
        registration = Registration.objects.get(pk=user.pk)
        assert registration.full_name == 'Asha Rider'
        assert registration.email == user.email

    def test_creates_missing_profile(self):
        user = self.create_user(with_profile=False)
        result = run_action('register_existing_user', rider_payload(), self.credential(user))

        assert result.success
        assert Profile.objects.get(pk=user.pk).display_name == 'Asha Rider'

    def test_mismatched_user_id(self):
        user = self.create_user()
        other = self.create_user()

        result = run_action('register_existing_user', rider_payload(user_id=other.pk), self.credential(user))

        assert result.error_type == 'AUTH_MISMATCH'
        assert not Registration.objects.exists()

    def test_requires_credential(self):
        result = run_action('register_existing_user', rider_payload())
        assert result.error_type == 'PERMISSION_DENIED'
        assert result.message == "Permission denied."

    def test_second_registration_conflicts(self):
        registration = self.create_registration()
        result = run_action('register_existing_user', rider_payload(), self.credential(registration.user))

        assert result.error_type == 'CONFLICT'
        registration.refresh_from_db()
        assert registration.full_name == 'Ravi Kumar'

    def test_concurrent_submission_conflicts(self, monkeypatch):
        registration = self.create_registration()
        # The other request's row lands after the existence check has run
        monkeypatch.setattr(Registration.objects, 'filter', lambda **kwargs: Registration.objects.none())

        result = run_action('register_existing_user', rider_payload(), self.credential(registration.user))

        assert result.error_type == 'CONFLICT'
        assert result.http_status == 409
        assert result.message == "You have already registered for this ride."
        monkeypatch.undo()
        registration.refresh_from_db()
        assert registration.full_name == 'Ravi Kumar'


class TestStatusWorkflow(BaseTestCase):

    def test_admin_approves(self):
        admin = self.admin()
        registration = self.create_registration()

        result = run_action(
            'update_registration_status',
            {'registration_id': registration.pk, 'status': 'approved', 'admin_id': admin.pk},
            self.credential(admin),
        )

        assert result.success
        assert result.message == "Registration status updated to approved."
        assert result.data['registration']['statusLastUpdatedBy'] == admin.pk
        registration.refresh_from_db()
        assert registration.status == RegistrationStatus.APPROVED
        assert registration.status_last_updated_by == admin

    @pytest.mark.parametrize('role', [UserRole.USER, UserRole.VIEWER])
    def test_non_admin_cannot_change_status(self, role):
        user = self.create_user(role=role)
        registration = self.create_registration()

        result = run_action(
            'update_registration_status',
            {'registration_id': registration.pk, 'status': 'approved'},
            self.credential(user),
        )

        assert result.message == "Permission denied."
        registration.refresh_from_db()
        assert registration.status == RegistrationStatus.PENDING

    def test_admin_id_must_match_caller(self):
        admin = self.admin()
        other_admin = self.admin()
        registration = self.create_registration()

        result = run_action(
            'update_registration_status',
            {'registration_id': registration.pk, 'status': 'approved', 'admin_id': other_admin.pk},
            self.credential(admin),
        )

        assert result.error_type == 'AUTH_MISMATCH'
        assert result.http_status == 403

    def test_unknown_status(self):
        admin = self.admin()
        registration = self.create_registration()
        result = run_action(
            'update_registration_status',
            {'registration_id': registration.pk, 'status': 'archived'},
            self.credential(admin),
        )
        assert result.error_type == 'VALIDATION'

    def test_unknown_registration(self):
        admin = self.admin()
        result = run_action(
            'update_registration_status',
            {'registration_id': 9999, 'status': 'approved'},
            self.credential(admin),
        )
        assert result.error_type == 'NOT_FOUND'
        assert result.http_status == 404


class TestFlagActions(BaseTestCase):

    def test_grant_certificate_twice(self):
        admin = self.admin()
        registration = self.create_registration(status=RegistrationStatus.APPROVED)
        payload = {'registration_id': registration.pk}

        first = run_action('grant_certificate', payload, self.credential(admin))
        second = run_action('grant_certificate', payload, self.credential(admin))

        assert first.success and second.success
        assert first.data['changed'] is True
        assert second.data['changed'] is False
        registration.refresh_from_db()
        assert registration.certificate_granted is True
        assert registration.status == RegistrationStatus.APPROVED

    def test_check_in_and_revert(self):
        admin = self.admin()
        registration = self.create_registration(status=RegistrationStatus.APPROVED)
        payload = {'registration_id': registration.pk}

        assert run_action('check_in_rider', payload, self.credential(admin)).message == "Rider checked in successfully."
        run_action('check_in_rider', payload, self.credential(admin))
        registration.refresh_from_db()
        assert registration.rider1_checked_in is True

        run_action('revert_check_in', payload, self.credential(admin))
        registration.refresh_from_db()
        assert registration.rider1_checked_in is False

    def test_finish_and_revoke(self):
        admin = self.admin()
        registration = self.create_registration(certificate_granted=True)
        payload = {'registration_id': registration.pk}

        run_action('finish_rider', payload, self.credential(admin))
        run_action('revoke_certificate', payload, self.credential(admin))

        registration.refresh_from_db()
        assert registration.rider1_finished is True
        assert registration.certificate_granted is False

    def test_viewer_cannot_check_in(self):
        viewer = self.create_user(role=UserRole.VIEWER)
        registration = self.create_registration()
        result = run_action('check_in_rider', {'registration_id': registration.pk}, self.credential(viewer))

        assert result.error_type == 'PERMISSION_DENIED'
        registration.refresh_from_db()
        assert registration.rider1_checked_in is False


ADMIN_ONLY_ACTIONS = [
    ('update_registration_details', {
        'full_name': 'Someone Else', 'age': 50, 'phone_number': '9000000000', 'registration_type': 'car',
    }),
    ('update_registration_status', {'status': 'approved'}),
    ('check_in_rider', {}),
    ('revert_check_in', {}),
    ('finish_rider', {}),
    ('revert_finish', {}),
    ('grant_certificate', {}),
    ('revoke_certificate', {}),
    ('delete_registration', {}),
]


class TestAdminOnlyActions(BaseTestCase):

    @pytest.mark.parametrize('role', [UserRole.USER, UserRole.VIEWER])
    @pytest.mark.parametrize('name,extra', ADMIN_ONLY_ACTIONS)
    def test_non_admin_leaves_registration_untouched(self, role, name, extra):
        caller = self.create_user(role=role)
        registration = self.create_registration(rider1_checked_in=True, rider1_finished=False, certificate_granted=True)
        before = Registration.objects.filter(pk=registration.pk).values().get()

        result = run_action(name, {'registration_id': registration.pk, **extra}, self.credential(caller))

        assert result.success is False
        assert result.error_type == 'PERMISSION_DENIED'
        assert Registration.objects.filter(pk=registration.pk).values().get() == before

    @pytest.mark.parametrize('name,extra', ADMIN_ONLY_ACTIONS)
    def test_owner_cannot_act_on_own_registration(self, name, extra):
        registration = self.create_registration()
        before = Registration.objects.filter(pk=registration.pk).values().get()

        result = run_action(name, {'registration_id': registration.pk, **extra}, self.credential(registration.user))

        assert result.error_type == 'PERMISSION_DENIED'
        assert Registration.objects.filter(pk=registration.pk).values().get() == before


class TestUpdateDetails(BaseTestCase):

    def test_vehicle_change_leaves_other_fields(self):
        admin = self.admin()
        registration = self.create_registration(photo_url='https://img.example.com/ravi.png')

        result = run_action(
            'update_registration_details',
            {
                'registration_id': registration.pk,
                'full_name': 'Ravi Kumar',
                'age': 34,
                'phone_number': '9876543210',
                'registration_type': 'car',
            },
            self.credential(admin),
        )

        assert result.success
        assert result.message == "Rider details updated successfully."
        registration.refresh_from_db()
        assert registration.registration_type == VehicleType.CAR
        assert registration.full_name == 'Ravi Kumar'
        assert registration.age == 34
        assert registration.photo_url == 'https://img.example.com/ravi.png'
        assert registration.status == RegistrationStatus.PENDING

    def test_invalid_age(self):
        admin = self.admin()
        registration = self.create_registration()
        result = run_action(
            'update_registration_details',
            {
                'registration_id': registration.pk, 'full_name': 'Ravi Kumar', 'age': 101,
                'phone_number': '9876543210', 'registration_type': 'jeep',
            },
            self.credential(admin),
        )
        assert result.error_type == 'VALIDATION'
        registration.refresh_from_db()
        assert registration.age == 34


class TestDeletion(BaseTestCase):

    def test_admin_deletes_registration_only(self):
        admin = self.admin()
        registration = self.create_registration()
        user_id = registration.pk

        result = run_action('delete_registration', {'registration_id': user_id}, self.credential(admin))

        assert result.success
        assert result.message == "Registration has been deleted."
        assert not Registration.objects.filter(pk=user_id).exists()
        assert User.objects.filter(pk=user_id).exists()

    def test_non_admin_cannot_delete(self):
        user = self.create_user()
        registration = self.create_registration()

        result = run_action('delete_registration', {'registration_id': registration.pk}, self.credential(user))

        assert not result.success
        assert result.message == "Permission denied."
        assert Registration.objects.filter(pk=registration.pk).exists()

    def test_superadmin_deletes_account(self):
        superadmin = self.superadmin()
        registration = self.create_registration()
        user_id = registration.pk

        result = run_action('delete_user_account', {'user_id': user_id}, self.credential(superadmin))

        assert result.success
        assert not User.objects.filter(pk=user_id).exists()
        assert not Profile.objects.filter(pk=user_id).exists()
        assert not Registration.objects.filter(pk=user_id).exists()

    def test_admin_cannot_delete_account(self):
        admin = self.admin()
        registration = self.create_registration()

        result = run_action('delete_user_account', {'user_id': registration.pk}, self.credential(admin))

        assert result.error_type == 'PERMISSION_DENIED'
        assert User.objects.filter(pk=registration.pk).exists()

    def test_superadmin_cannot_delete_self(self):
        superadmin = self.superadmin()
        result = run_action('delete_user_account', {'user_id': superadmin.pk}, self.credential(superadmin))
        assert result.error_type == 'CONFLICT'
        assert User.objects.filter(pk=superadmin.pk).exists()


class TestCancellation(BaseTestCase):

    def test_owner_requests_cancellation(self):
        registration = self.create_registration(status=RegistrationStatus.APPROVED)

        result = run_action(
            'cancel_registration',
            {'registration_id': registration.pk, 'reason': 'I cannot make it on that date.'},
            self.credential(registration.user),
        )

        assert result.success
        registration.refresh_from_db()
        assert registration.status == RegistrationStatus.CANCELLATION_REQUESTED
        assert registration.cancellation_reason == 'I cannot make it on that date.'
        assert registration.status_last_updated_by == registration.user

    def test_other_user_cannot_cancel(self):
        registration = self.create_registration()
        stranger = self.create_user()

        result = run_action(
            'cancel_registration',
            {'registration_id': registration.pk, 'reason': 'I cannot make it on that date.'},
            self.credential(stranger),
        )

        assert result.message == "Permission denied."
        registration.refresh_from_db()
        assert registration.status == RegistrationStatus.PENDING

    def test_rejected_registration_cannot_be_cancelled(self):
        registration = self.create_registration(status=RegistrationStatus.REJECTED)
        result = run_action(
            'cancel_registration',
            {'registration_id': registration.pk, 'reason': 'I cannot make it on that date.'},
            self.credential(registration.user),
        )
        assert result.error_type == 'CONFLICT'

    def test_reason_too_short(self):
        registration = self.create_registration()
        result = run_action(
            'cancel_registration',
            {'registration_id': registration.pk, 'reason': 'nope'},
            self.credential(registration.user),
        )
        assert result.error_type == 'VALIDATION'


class TestDashboard(BaseTestCase):

    def test_viewer_lists_registrations(self):
        viewer = self.create_user(role=UserRole.VIEWER)
        self.create_registration(status=RegistrationStatus.APPROVED)
        self.create_registration()

        result = run_action('list_registrations', {'status': 'approved'}, self.credential(viewer))

        assert result.success
        assert [r['status'] for r in result.data['registrations']] == ['approved']

    def test_user_cannot_list(self):
        user = self.create_user()
        assert run_action('list_registrations', {}, self.credential(user)).error_type == 'PERMISSION_DENIED'

    def test_stats(self):
        admin = self.admin()
        self.create_registration(status=RegistrationStatus.APPROVED, rider1_checked_in=True)
        self.create_registration(registration_type=VehicleType.BIKE)
        self.create_registration(status=RegistrationStatus.REJECTED, certificate_granted=True)

        stats = run_action('dashboard_stats', {}, self.credential(admin)).data['stats']

        assert stats['totalRegistrations'] == 2
        assert stats['byVehicleType'] == {'bike': 1, 'jeep': 1, 'car': 0}
        assert stats['byStatus']['rejected'] == 1
        assert stats['checkedIn'] == 1
        assert stats['certificatesGranted'] == 1
