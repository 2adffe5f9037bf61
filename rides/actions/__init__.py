"""
Server actions.

Importing this package registers every action in ``ACTIONS`` so the HTTP
layer can dispatch on the action name.
"""
from . import accounts, content, qna, registration  # noqa: F401
from .base import ACTIONS, ActionResult

__all__ = ['ACTIONS', 'ActionResult', 'run_action']


def run_action(name, values=None, credential=None):
    return ACTIONS[name](values, credential)
