import pytest
from campus.exceptions import ExternalStoreError, InvalidStateTransition, PermissionDenied


@pytest.mark.parametrize("error_class", [InvalidStateTransition, PermissionDenied, ExternalStoreError])
def test_errors_carry_their_messages(error_class):
    error = error_class({"status": ["Cannot move order from confirmed to completed"]})

    assert error.messages == {"status": ["Cannot move order from confirmed to completed"]}
    assert str(error) == "{'status': ['Cannot move order from confirmed to completed']}"


def test_store_errors_default_to_not_retry_safe():
    assert ExternalStoreError({"store": ["timeout"]}).retry_safe is False
    assert ExternalStoreError({"store": ["timeout"]}, retry_safe=True).retry_safe is True
