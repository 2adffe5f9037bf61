"""
Registration status workflow.

Who may move a registration from one status to another is held in explicit
tables. Staff may overwrite the status with any value; the owning rider may
only ask for a cancellation.
"""
from django.utils import timezone

from .models import RegistrationStatus

S = RegistrationStatus

ALL_STATUSES = frozenset(S.values)

STAFF_TRANSITIONS = {status: ALL_STATUSES for status in ALL_STATUSES}

OWNER_TRANSITIONS = {
    S.PENDING: frozenset({S.CANCELLATION_REQUESTED}),
    S.APPROVED: frozenset({S.CANCELLATION_REQUESTED}),
}

FLAG_FIELDS = ('rider1_checked_in', 'rider1_finished', 'certificate_granted')


class TransitionNotAllowed(Exception):
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move a registration from {current} to {target}.")


def allowed_targets(current, as_staff):
    table = STAFF_TRANSITIONS if as_staff else OWNER_TRANSITIONS
    return table.get(current, frozenset())


def can_transition(current, target, as_staff):
    return target in allowed_targets(current, as_staff)


def apply_status(registration, target, actor, as_staff=True, **extra_fields):
    """Move ``registration`` to ``target`` and stamp the audit fields."""
    if not can_transition(registration.status, target, as_staff):
        raise TransitionNotAllowed(registration.status, target)

    registration.status = target
    registration.status_last_updated_at = timezone.now()
    registration.status_last_updated_by = actor
    for field, value in extra_fields.items():
        setattr(registration, field, value)

    registration.save(update_fields=[
        'status', 'status_last_updated_at', 'status_last_updated_by', *extra_fields
    ])
    return registration


def set_flag(registration, field, value):
    """
    Set one of the independent boolean sub-states.

    Returns True when the stored value changed. Setting a flag to the value it
    already has writes nothing.
    """
    if field not in FLAG_FIELDS:
        raise ValueError(f"Unknown registration flag: {field}")

    if getattr(registration, field) == value:
        return False

    setattr(registration, field, value)
    registration.save(update_fields=[field])
    return True
