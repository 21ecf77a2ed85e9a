"""Tests for user request validation and normalization."""

import pytest
from pydantic import ValidationError

from app.schemas.user import Address, UserCreate, UserRole, UserStatus, UserUpdate


def _create(**overrides) -> UserCreate:
    data = {
        "name": "Jane Roe",
        "email": "jane@example.com",
        "address": {"street": "2 Oak Ave", "city": "Austin"},
    }
    data.update(overrides)
    return UserCreate(**data)


class TestDefaults:
    def test_defaults_applied(self):
        user = _create()
        assert user.age == 18
        assert user.status is UserStatus.ACTIVE
        assert user.role is UserRole.USER
        assert user.address.country == "USA"
        assert user.address.state is None
        assert user.address.zip_code is None


class TestNormalization:
    def test_email_trimmed_and_lower_cased(self):
        assert _create(email="  Jane.Roe@Example.COM ").email == "jane.roe@example.com"

    def test_name_trimmed(self):
        assert _create(name="  Jane  ").name == "Jane"

    def test_camel_case_zip_code_accepted(self):
        user = _create(address={"street": "2 Oak Ave", "city": "Austin", "zipCode": "73301"})
        assert user.address.zip_code == "73301"

    def test_update_email_normalized(self):
        assert UserUpdate(email=" NEW@Example.com").email == "new@example.com"


class TestValidation:
    @pytest.mark.parametrize("name", ["J", " J ", "x" * 51])
    def test_name_length(self, name):
        with pytest.raises(ValidationError):
            _create(name=name)

    @pytest.mark.parametrize("age", [17, 121, -1])
    def test_age_range(self, age):
        with pytest.raises(ValidationError):
            _create(age=age)

    @pytest.mark.parametrize("age", [18, 120])
    def test_age_bounds_inclusive(self, age):
        assert _create(age=age).age == age

    @pytest.mark.parametrize("zip_code", ["1234", "123456", "12345-67", "abcde"])
    def test_invalid_zip_code(self, zip_code):
        with pytest.raises(ValidationError):
            Address(street="1 St", city="X", zip_code=zip_code)

    @pytest.mark.parametrize("zip_code", ["12345", "12345-6789"])
    def test_valid_zip_code(self, zip_code):
        assert Address(street="1 St", city="X", zip_code=zip_code).zip_code == zip_code

    def test_street_and_city_required(self):
        with pytest.raises(ValidationError):
            Address(street="", city="X")
        with pytest.raises(ValidationError):
            Address(street="1 St")

    def test_street_length(self):
        with pytest.raises(ValidationError):
            Address(street="x" * 101, city="X")

    def test_status_enumeration(self):
        with pytest.raises(ValidationError):
            _create(status="banned")

    def test_role_enumeration(self):
        with pytest.raises(ValidationError):
            _create(role="root")
        assert _create(role="moderator").role is UserRole.MODERATOR

    def test_update_is_re_validated(self):
        with pytest.raises(ValidationError):
            UserUpdate(age=10)
        with pytest.raises(ValidationError):
            UserUpdate(status="deleted")

    def test_empty_update_allowed(self):
        assert UserUpdate().model_dump(exclude_unset=True) == {}

    def test_update_phone_may_be_cleared(self):
        update = UserUpdate.model_validate({"phone": None})
        assert update.model_fields_set == {"phone"}
        assert update.phone is None

    @pytest.mark.parametrize("field", ["name", "email", "age", "address", "avatar", "status", "role"])
    def test_update_rejects_null_required_field(self, field):
        with pytest.raises(ValidationError, match="Cannot clear required field"):
            UserUpdate.model_validate({field: None})
