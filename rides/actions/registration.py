import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from ..auth import (
    ADMIN_ROLES, STAFF_READ_ROLES, SUPERADMIN_ROLES, authorize, ensure_same_identity,
    issue_credential, verify_credential,
)
from ..forms import (
    AccountRegistrationForm, CancellationForm, EditRegistrationForm, RegistrationRefForm,
    RiderRegistrationForm, StatusUpdateForm,
)
from ..models import EventSettings, Profile, Registration, RegistrationStatus, UserRole, VehicleType
from ..workflow import TransitionNotAllowed, apply_status, set_flag
from .base import ActionFailed, action, fail, get_or_fail, get_registration, ok, validate

logger = logging.getLogger(__name__)

User = get_user_model()


def registration_to_dict(registration):
    return {
        'id': registration.pk,
        'ticketId': str(registration.uuid),
        'registrationType': registration.registration_type,
        'fullName': registration.full_name,
        'age': registration.age,
        'phoneNumber': registration.phone_number,
        'whatsappNumber': registration.whatsapp_number,
        'photoURL': registration.photo_url,
        'email': registration.email,
        'status': registration.status,
        'rider1CheckedIn': registration.rider1_checked_in,
        'rider1Finished': registration.rider1_finished,
        'certificateGranted': registration.certificate_granted,
        'cancellationReason': registration.cancellation_reason,
        'statusLastUpdatedAt': registration.status_last_updated_at,
        'statusLastUpdatedBy': registration.status_last_updated_by_id,
        'createdAt': registration.created_at,
    }


def email_in_use(email):
    return User.objects.filter(Q(username__iexact=email) | Q(email__iexact=email)).exists()


def _ensure_registrations_open():
    if not EventSettings.load().registrations_open:
        raise ActionFailed(fail("Registrations are currently closed.", 'CLOSED'))


@action('create_account_and_register_rider', public=True)
def create_account_and_register_rider(values):
    # 1. Validate everything before touching the database
    form = validate(AccountRegistrationForm, values)
    _ensure_registrations_open()

    email = form.cleaned_data['email'].lower()
    if email_in_use(email):
        logger.info("Signup refused, %s already has an account", email)
        return fail(
            "An account with this email already exists. Please log in to register.",
            'EMAIL_EXISTS',
        )

    registration_data = form.registration_data()

    # 2. Identity, profile and registration are written together or not at all
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email, email=email, password=form.cleaned_data['password'],
            )
            Profile.objects.create(
                user=user,
                display_name=registration_data['full_name'],
                photo_url=registration_data['photo_url'],
                role=UserRole.USER,
            )
            registration = Registration.objects.create(
                user=user, email=email, status=RegistrationStatus.PENDING, **registration_data
            )
    except IntegrityError:
        logger.warning("Signup for %s collided with an existing account", email)
        return fail(
            "An account with this email already exists. Please log in to register.",
            'EMAIL_EXISTS',
        )

    logger.info("Registration %s created for new account", registration.pk)
    return ok(
        "Registration successful! Your application is pending review.",
        uid=user.pk,
        credential=issue_credential(user),
    )


@action('register_existing_user')
def register_existing_user(values, credential):
    user = verify_credential(credential)
    if values.get('user_id') not in (None, '') and str(values['user_id']) != str(user.pk):
        logger.warning("User %s tried to register as %s", user.pk, values['user_id'])
        return fail("The supplied user does not match the signed-in account.", 'AUTH_MISMATCH')

    form = validate(RiderRegistrationForm, values)
    _ensure_registrations_open()

    if Registration.objects.filter(pk=user.pk).exists():
        return fail("You have already registered for this ride.", 'CONFLICT')

    registration_data = form.registration_data()
    try:
        with transaction.atomic():
            profile, created = Profile.objects.get_or_create(
                user=user,
                defaults={
                    'display_name': registration_data['full_name'],
                    'photo_url': registration_data['photo_url'],
                },
            )
            if not created and not profile.display_name:
                profile.display_name = registration_data['full_name']
                profile.save(update_fields=['display_name'])

            registration = Registration.objects.create(
                user=user, email=user.email, status=RegistrationStatus.PENDING, **registration_data
            )
    except IntegrityError:
        logger.warning("Registration for user %s collided with a concurrent submission", user.pk)
        return fail("You have already registered for this ride.", 'CONFLICT')

    logger.info("Registration %s created for existing account", registration.pk)
    return ok("Registration successful! Your application is pending review.", uid=user.pk)


@action('update_registration_details')
def update_registration_details(values, credential):
    identity = authorize(credential, ADMIN_ROLES)
    ensure_same_identity(identity, values.get('admin_id'))

    form = validate(EditRegistrationForm, values)
    registration = get_registration(form.cleaned_data['registration_id'])

    fields = ['full_name', 'age', 'phone_number', 'registration_type']
    if form.cleaned_data['photo_url']:
        fields.append('photo_url')
    for name in fields:
        setattr(registration, name, form.cleaned_data[name])
    registration.save(update_fields=fields)

    logger.info("Admin %s edited registration %s", identity.uid, registration.pk)
    return ok("Rider details updated successfully.", registration=registration_to_dict(registration))


@action('update_registration_status')
def update_registration_status(values, credential):
    identity = authorize(credential, ADMIN_ROLES)
    ensure_same_identity(identity, values.get('admin_id'))

    form = validate(StatusUpdateForm, values)
    registration = get_registration(form.cleaned_data['registration_id'])
    status = form.cleaned_data['status']

    apply_status(registration, status, identity.user, as_staff=True)

    logger.info("Admin %s set registration %s to %s", identity.uid, registration.pk, status)
    return ok(f"Registration status updated to {status}.", registration=registration_to_dict(registration))


def _flag_action(name, field, value, message):
    @action(name)
    def run(values, credential):
        identity = authorize(credential, ADMIN_ROLES)
        ensure_same_identity(identity, values.get('admin_id'))

        form = validate(RegistrationRefForm, values)
        registration = get_registration(form.cleaned_data['registration_id'])
        changed = set_flag(registration, field, value)

        logger.info("Admin %s set %s=%s on registration %s", identity.uid, field, value, registration.pk)
        return ok(message, changed=changed, registration=registration_to_dict(registration))

    run.__name__ = name
    return run


check_in_rider = _flag_action('check_in_rider', 'rider1_checked_in', True, "Rider checked in successfully.")
revert_check_in = _flag_action('revert_check_in', 'rider1_checked_in', False, "Rider check-in has been reverted.")
finish_rider = _flag_action('finish_rider', 'rider1_finished', True, "Rider marked as finished!")
revert_finish = _flag_action('revert_finish', 'rider1_finished', False, "Rider finish status has been reverted.")
grant_certificate = _flag_action('grant_certificate', 'certificate_granted', True, "Certificate granted to rider.")
revoke_certificate = _flag_action('revoke_certificate', 'certificate_granted', False, "Certificate revoked.")


@action('delete_registration')
def delete_registration(values, credential):
    identity = authorize(credential, ADMIN_ROLES)
    ensure_same_identity(identity, values.get('admin_id'))

    form = validate(RegistrationRefForm, values)
    registration = get_registration(form.cleaned_data['registration_id'])
    registration_id = registration.pk
    registration.delete()

    logger.info("Admin %s deleted registration %s", identity.uid, registration_id)
    return ok("Registration has been deleted.")


@action('delete_user_account')
def delete_user_account(values, credential):
    """Remove an identity together with its profile and any registration."""
    identity = authorize(credential, SUPERADMIN_ROLES)
    target = get_or_fail(User, values.get('user_id'), "User not found.")

    if target.pk == identity.uid:
        return fail("You cannot delete your own account.", 'CONFLICT')

    target_id = target.pk
    target.delete()

    logger.info("Superadmin %s deleted account %s", identity.uid, target_id)
    return ok("Registration and user data have been deleted.")


@action('cancel_registration')
def cancel_registration(values, credential):
    identity = authorize(credential)

    form = validate(CancellationForm, values)
    registration = get_registration(form.cleaned_data['registration_id'])
    if registration.pk != identity.uid:
        logger.warning("User %s tried to cancel registration %s", identity.uid, registration.pk)
        return fail("Permission denied.", 'PERMISSION_DENIED')

    try:
        apply_status(
            registration, RegistrationStatus.CANCELLATION_REQUESTED, identity.user,
            as_staff=False, cancellation_reason=form.cleaned_data['reason'],
        )
    except TransitionNotAllowed as exc:
        return fail(str(exc), 'CONFLICT')

    logger.info("Cancellation requested for registration %s", registration.pk)
    return ok("Your cancellation request has been submitted.")


@action('list_registrations')
def list_registrations(values, credential):
    authorize(credential, STAFF_READ_ROLES)

    registrations = Registration.objects.all()
    status = values.get('status')
    if status and status != 'all':
        registrations = registrations.filter(status=status)

    return ok(
        f"{registrations.count()} registrations.",
        registrations=[registration_to_dict(r) for r in registrations],
    )


@action('dashboard_stats')
def dashboard_stats(values, credential):
    authorize(credential, STAFF_READ_ROLES)

    active = Registration.objects.filter(
        status__in=[RegistrationStatus.APPROVED, RegistrationStatus.PENDING]
    )
    by_type = {vehicle: 0 for vehicle in VehicleType.values}
    for row in active.values('registration_type').annotate(total=Count('pk')):
        by_type[row['registration_type']] = row['total']

    by_status = {status: 0 for status in RegistrationStatus.values}
    for row in Registration.objects.values('status').annotate(total=Count('pk')):
        by_status[row['status']] = row['total']

    totals = Registration.objects.aggregate(
        checked_in=Count('pk', filter=Q(rider1_checked_in=True)),
        finished=Count('pk', filter=Q(rider1_finished=True)),
        certificates=Count('pk', filter=Q(certificate_granted=True)),
    )

    return ok(
        "Dashboard statistics.",
        stats={
            'totalRegistrations': active.count(),
            'byVehicleType': by_type,
            'byStatus': by_status,
            'checkedIn': totals['checked_in'],
            'finished': totals['finished'],
            'certificatesGranted': totals['certificates'],
        },
    )
