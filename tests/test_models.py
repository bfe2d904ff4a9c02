"""Tests for the Registration model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from minibus.domain.models import WILDCARD, Registration


def _handler(payload):
    pass


class _Listener:
    def handle(self, payload):
        pass


def test_registration_defaults():
    reg = Registration(callback=_handler)
    assert reg.callback is _handler
    assert reg.context is None
    assert reg.once is False


def test_registration_rejects_non_callable():
    """A callback must be callable; anything else fails model validation."""
    with pytest.raises(ValidationError):
        Registration(callback="not a function")


def test_matches_requires_same_callback_and_context():
    ctx = object()
    reg = Registration(callback=_handler, context=ctx)

    assert reg.matches(_handler, ctx)
    assert not reg.matches(_handler)
    assert not reg.matches(_handler, object())
    assert not reg.matches(lambda payload: None, ctx)


def test_matches_compares_context_by_equality():
    """Contexts built separately but equal still match."""
    user_id = 7
    reg = Registration(callback=_handler, context="user-" + str(user_id))
    assert reg.matches(_handler, f"user-{user_id}")
    assert not reg.matches(_handler, "user-8")


def test_matches_plain_object_context_by_identity():
    """Objects without ``__eq__`` only match themselves."""
    reg = Registration(callback=_handler, context=object())
    assert not reg.matches(_handler, object())


def test_matches_bound_method_accessed_twice():
    """Bound methods are fresh objects on each access but still match."""
    listener = _Listener()
    reg = Registration(callback=listener.handle, context=listener)
    assert reg.matches(listener.handle, listener)
    assert not reg.matches(_Listener().handle, listener)


def test_registrations_compare_field_for_field():
    assert Registration(callback=_handler, once=True) == Registration(
        callback=_handler, context=None, once=True
    )
    assert Registration(callback=_handler) != Registration(callback=_handler, once=True)


def test_wildcard_key_is_star():
    assert WILDCARD == "*"
