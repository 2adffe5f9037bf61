"""
Shared plumbing for actions.

Every action receives the JSON payload of the request and, when it is not a
public action, the caller's bearer credential. It answers with an
ActionResult; failures never escape as exceptions.
"""
import functools
import logging
from dataclasses import dataclass, field

from django.db import DatabaseError

from ..auth import AuthError
from ..models import Registration

logger = logging.getLogger(__name__)

ACTIONS = {}

GENERIC_FAILURE = "Something went wrong. Please try again."

HTTP_STATUS = {
    None: 200,
    'VALIDATION': 400,
    'PERMISSION_DENIED': 403,
    'AUTH_MISMATCH': 403,
    'NOT_FOUND': 404,
    'EMAIL_EXISTS': 409,
    'CONFLICT': 409,
    'UPSTREAM': 500,
}


@dataclass
class ActionResult:
    success: bool
    message: str
    error_type: str = None
    data: dict = field(default_factory=dict)

    @property
    def http_status(self):
        if self.success:
            return 200
        return HTTP_STATUS.get(self.error_type, 400)

    def to_dict(self):
        payload = {'success': self.success, 'message': self.message}
        if self.error_type:
            payload['errorType'] = self.error_type
        payload.update(self.data)
        return payload


def ok(message, **data):
    return ActionResult(True, message, data=data)


def fail(message, error_type=None, **data):
    return ActionResult(False, message, error_type=error_type, data=data)


class ActionFailed(Exception):
    """Raised inside an action to stop it with a ready-made result."""

    def __init__(self, result):
        self.result = result
        super().__init__(result.message)


def validate(form_class, values, message="Invalid data provided.", **form_kwargs):
    """Bind ``values`` to ``form_class`` and return the form, or stop the action."""
    form = form_class(data=values or {}, **form_kwargs)
    if not form.is_valid():
        logger.info("%s rejected: %s", form_class.__name__, form.errors.get_json_data())
        raise ActionFailed(fail(message, 'VALIDATION', errors=form.errors.get_json_data()))
    return form


def get_or_fail(model, pk, message=None):
    try:
        return model.objects.get(pk=pk)
    except (model.DoesNotExist, ValueError, TypeError):
        raise ActionFailed(fail(message or f"{model._meta.verbose_name.capitalize()} not found.", 'NOT_FOUND'))


def get_registration(pk):
    return get_or_fail(Registration, pk, "Registration not found.")


def action(name, public=False):
    """
    Register an action under ``name``.

    Authorization failures become the permission-denied result, database
    failures are logged and reported generically, and ActionFailed carries
    its own result out.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(values=None, credential=None):
            values = values or {}
            try:
                if public:
                    return func(values)
                return func(values, credential)
            except ActionFailed as exc:
                return exc.result
            except AuthError as exc:
                return fail(exc.message, exc.error_type)
            except DatabaseError:
                logger.exception("Database failure in action %s", name)
                return fail(GENERIC_FAILURE, 'UPSTREAM')

        wrapper.action_name = name
        wrapper.public = public
        ACTIONS[name] = wrapper
        return wrapper
    return decorator
