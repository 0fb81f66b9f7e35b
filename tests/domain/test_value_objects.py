import pytest
from campus.shared.email import EmailAddress
from campus.shared.phone import PhoneNumber
from protean.exceptions import ValidationError


def test_email_address_element_type():
    from protean.utils import DomainObjects

    assert EmailAddress.element_type == DomainObjects.VALUE_OBJECT


@pytest.mark.parametrize(
    "email",
    ["student@campus.edu", "first.last@campus.edu", "owner+cafe@mail.campus.edu", "a@b.cc"],
)
def test_valid_email_addresses(email):
    assert EmailAddress(address=email).address == email


@pytest.mark.parametrize(
    "email",
    [
        "no-at-sign.campus.edu",
        "two@@campus.edu",
        "@campus.edu",
        "student@localhost",
        "student@campus..edu",
        "stu dent@campus.edu",
        ".student@campus.edu",
    ],
    ids=["missing_at", "double_at", "empty_local", "undotted_domain", "double_dot", "whitespace", "leading_dot"],
)
def test_invalid_email_addresses(email):
    with pytest.raises(ValidationError) as exc:
        EmailAddress(address=email)
    assert "email" in exc.value.messages


def test_email_address_is_required():
    with pytest.raises(ValidationError):
        EmailAddress()


@pytest.mark.parametrize("number", ["+1 555 0101", "(02) 9876-5432", "0412345678"])
def test_valid_phone_numbers(number):
    assert PhoneNumber(number=number).number == number


@pytest.mark.parametrize("number", ["call me", "+-()", "555-CAFE"])
def test_invalid_phone_numbers(number):
    with pytest.raises(ValidationError) as exc:
        PhoneNumber(number=number)
    assert "contact_number" in exc.value.messages
