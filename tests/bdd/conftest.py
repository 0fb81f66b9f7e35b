"""Shared BDD fixtures and step definitions for the campus domain."""

import pytest
from campus.exceptions import InvalidStateTransition, PermissionDenied
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the error raised by the last action."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a student with a profile", target_fixture="student_id")
def student_with_profile(register_profile):
    return register_profile("student-100", email="riley@campus.edu", name="Riley")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the action is refused as an invalid transition")
def action_is_invalid_transition(error):
    assert error["exc"] is not None, "Expected an invalid transition but none was raised"
    assert isinstance(error["exc"], InvalidStateTransition)


@then("the action is refused for lack of permission")
def action_is_not_permitted(error):
    assert error["exc"] is not None, "Expected a permission error but none was raised"
    assert isinstance(error["exc"], PermissionDenied)


@then(parsers.cfparse('the checkout fails with "{error_type}"'))
def checkout_fails_with(error, error_type):
    assert error["exc"] is not None, f"Expected {error_type} but checkout succeeded"
    assert error["exc"].__class__.__name__ == error_type
