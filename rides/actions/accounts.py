import logging
from smtplib import SMTPException
from urllib.parse import urlparse

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.forms import PasswordResetForm
from django.db import IntegrityError, transaction
from django.utils import timezone

from ..auth import ADMIN_ROLES, SUPERADMIN_ROLES, authorize, ensure_same_identity, issue_credential
from ..forms import AccessRequestForm, LoginForm, OrganizerSignupForm, RoleChangeForm
from ..models import AccessRequestStatus, Profile, UserRole
from .base import action, fail, get_or_fail, ok, validate
from .registration import email_in_use

logger = logging.getLogger(__name__)

User = get_user_model()

RESET_MESSAGE = "If an account exists for this email, a password reset link has been sent."


@action('login', public=True)
def login(values):
    form = validate(LoginForm, values)
    user = authenticate(
        username=form.cleaned_data['email'].lower(),
        password=form.cleaned_data['password'],
    )
    if user is None:
        return fail("Invalid email or password.", 'PERMISSION_DENIED')

    profile = Profile.objects.filter(pk=user.pk).first()
    return ok(
        "Signed in.",
        uid=user.pk,
        role=profile.role if profile else None,
        credential=issue_credential(user),
    )


@action('request_organizer_access')
def request_organizer_access(values, credential):
    identity = authorize(credential)
    form = validate(AccessRequestForm, values)
    ensure_same_identity(identity, form.cleaned_data['user_id'])

    profile = identity.profile
    if profile.has_access_request:
        return fail("You have already submitted a request.", 'CONFLICT')

    profile.access_request_status = AccessRequestStatus.PENDING_REVIEW
    profile.access_requested_at = timezone.now()
    profile.save(update_fields=['access_request_status', 'access_requested_at'])

    logger.info("User %s requested organizer access", identity.uid)
    return ok("Your request for organizer access has been submitted.")


@action('create_and_request_organizer_access', public=True)
def create_and_request_organizer_access(values):
    form = validate(OrganizerSignupForm, values)
    email = form.cleaned_data['email'].lower()

    if email_in_use(email):
        return fail(
            "An account with this email already exists. Please log in and request access from your dashboard.",
            'EMAIL_EXISTS',
        )

    try:
        with transaction.atomic():
            user = User.objects.create_user(username=email, email=email, password=form.cleaned_data['password'])
            Profile.objects.create(
                user=user,
                display_name=email.split('@')[0],
                role=UserRole.USER,
                access_request_status=AccessRequestStatus.PENDING_REVIEW,
                access_requested_at=timezone.now(),
            )
    except IntegrityError:
        logger.warning("Organizer signup for %s collided with an existing account", email)
        return fail(
            "An account with this email already exists. Please log in and request access from your dashboard.",
            'EMAIL_EXISTS',
        )

    logger.info("Organizer account %s created with a pending access request", user.pk)
    return ok(
        "Your account has been created and your request has been submitted. An admin will review it shortly.",
        uid=user.pk,
        credential=issue_credential(user),
    )


@action('update_user_role')
def update_user_role(values, credential):
    identity = authorize(credential, SUPERADMIN_ROLES)
    ensure_same_identity(identity, values.get('admin_id'))

    form = validate(RoleChangeForm, values, message="Invalid data.")
    target = get_or_fail(Profile, form.cleaned_data['target_user_id'], "User not found.")
    new_role = form.cleaned_data['new_role']

    if target.pk == identity.uid and new_role != identity.role:
        return fail("Superadmins cannot change their own role.", 'CONFLICT')

    target.role = new_role
    fields = ['role']
    # Granting or withholding staff access settles any open request
    if target.access_request_status == AccessRequestStatus.PENDING_REVIEW:
        if new_role in ADMIN_ROLES or new_role == UserRole.VIEWER:
            target.access_request_status = AccessRequestStatus.APPROVED
        else:
            target.access_request_status = AccessRequestStatus.REJECTED
        fields.append('access_request_status')
    target.save(update_fields=fields)

    logger.info("Superadmin %s set role of %s to %s", identity.uid, target.pk, new_role)
    return ok(f"User role updated to {new_role}.")


@action('send_password_reset_link', public=True)
def send_password_reset_link(values):
    form = PasswordResetForm(data={'email': values.get('email', '')})
    if not form.is_valid():
        return fail("Invalid email provided.", 'VALIDATION')

    base = urlparse(settings.RIDES_PUBLIC_BASE_URL)
    try:
        form.save(
            domain_override=base.netloc,
            use_https=base.scheme == 'https',
            from_email=settings.DEFAULT_FROM_EMAIL,
        )
    except (SMTPException, OSError):
        # The reply never reveals whether the account exists
        logger.exception("Password reset mail could not be sent")

    return ok(RESET_MESSAGE)
