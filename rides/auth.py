"""
Identity and role resolution.

A caller proves who they are with an opaque bearer credential: a value
signed with the project SECRET_KEY that embeds the user id and the time it
was issued. Every protected action resolves the credential afresh and
reads the role from the Profile record; nothing is cached between calls.
"""
import logging
from dataclasses import dataclass

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing

from .models import Profile, UserRole

logger = logging.getLogger(__name__)

CREDENTIAL_SALT = 'rides.credential'

ADMIN_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPERADMIN})
SUPERADMIN_ROLES = frozenset({UserRole.SUPERADMIN})
STAFF_READ_ROLES = frozenset({UserRole.VIEWER, UserRole.ADMIN, UserRole.SUPERADMIN})


class AuthError(Exception):
    """Base class for every reason a caller is refused."""

    error_type = 'PERMISSION_DENIED'
    message = 'Permission denied.'


class MissingCredential(AuthError):
    pass


class InvalidCredential(AuthError):
    pass


class ProfileMissing(AuthError):
    pass


class RoleNotAllowed(AuthError):
    pass


class IdentityMismatch(AuthError):
    error_type = 'AUTH_MISMATCH'
    message = 'The supplied user does not match the signed-in account.'


@dataclass(frozen=True)
class Identity:
    user: object
    profile: Profile

    @property
    def uid(self):
        return self.user.pk

    @property
    def role(self):
        return self.profile.role

    @property
    def is_admin(self):
        return self.role in ADMIN_ROLES

    @property
    def is_superadmin(self):
        return self.role in SUPERADMIN_ROLES

    def display_name(self, fallback=''):
        return self.profile.display_name or fallback or self.user.get_username()


def _signer():
    return signing.TimestampSigner(salt=CREDENTIAL_SALT)


def issue_credential(user):
    """Return a bearer credential for ``user``."""
    return _signer().sign(str(user.pk))


def verify_credential(credential):
    """Resolve a bearer credential to an active user, or raise."""
    if not credential:
        raise MissingCredential()

    try:
        uid = _signer().unsign(credential, max_age=settings.RIDES_TOKEN_MAX_AGE)
    except signing.SignatureExpired:
        logger.info("Rejected expired credential")
        raise InvalidCredential()
    except signing.BadSignature:
        logger.warning("Rejected credential with bad signature")
        raise InvalidCredential()

    User = get_user_model()
    try:
        user = User.objects.get(pk=uid, is_active=True)
    except (User.DoesNotExist, ValueError):
        raise InvalidCredential()
    return user


def authorize(credential, roles=None):
    """
    The single authorization policy used by every action.

    Resolves ``credential`` to an Identity and, when ``roles`` is given,
    requires the profile role to be one of them.
    """
    user = verify_credential(credential)

    try:
        profile = Profile.objects.get(pk=user.pk)
    except Profile.DoesNotExist:
        logger.warning("Credential for user %s has no profile", user.pk)
        raise ProfileMissing()

    if roles is not None and profile.role not in roles:
        logger.warning("User %s with role %s denied (needs one of %s)", user.pk, profile.role, sorted(roles))
        raise RoleNotAllowed()

    return Identity(user=user, profile=profile)


def ensure_same_identity(identity, claimed_id):
    """Refuse when a payload names a different user than the verified one."""
    if claimed_id in (None, ''):
        return
    if str(claimed_id) != str(identity.uid):
        logger.warning("User %s claimed to act as %s", identity.uid, claimed_id)
        raise IdentityMismatch()


def credential_from_request(request):
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer':
        return ''
    return token.strip()
