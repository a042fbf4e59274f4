"""Unit tests for request assertions."""

import pytest

from aroma.domain.entities import (
    Application,
    AuthenticationToken,
    Event,
    Image,
    Message,
    MobileDevice,
    Organization,
    User,
)
from aroma.domain.value_objects import DevicePlatform, Dimension, LengthOfTime, TimeUnit
from aroma.ports.assertions import (
    check_app_id,
    check_application,
    check_dimension,
    check_event,
    check_image,
    check_lifetime,
    check_message,
    check_mobile_device,
    check_organization,
    check_token,
    check_user,
    is_null_or_empty,
    is_valid_uuid,
)
from aroma.ports.exceptions import InvalidArgumentError
from tests.unit.ids import APP_ID as VALID_ID
from tests.unit.ids import OWNER_ID


class TestPrimitives:
    """Tests for the primitive predicates."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_null_or_empty(self, value):
        """None and the empty string are both empty."""
        assert is_null_or_empty(value)

    def test_non_empty_string(self):
        """A string with content is not empty."""
        assert not is_null_or_empty(" ")

    def test_accepts_canonical_uuid(self):
        """A canonical 8-4-4-4-12 UUID is valid, in either case."""
        assert is_valid_uuid(VALID_ID)
        assert is_valid_uuid("ABCDEF01-2345-6789-ABCD-EF0123456789")

    @pytest.mark.parametrize(
        "value",
        [None, "", "not-a-uuid", "11111111111111111111111111111111", 42, f"{{{VALID_ID}}}"],
    )
    def test_rejects_non_canonical_uuid(self, value):
        """Anything other than the canonical string form is invalid."""
        assert not is_valid_uuid(value)


class TestIdChecks:
    """Tests for id checks."""

    @pytest.mark.parametrize("value", [None, "", "not-a-uuid"])
    def test_invalid_ids_raise(self, value):
        """Invalid ids should raise InvalidArgumentError naming the field."""
        with pytest.raises(InvalidArgumentError, match="application_id"):
            check_app_id(value)

    def test_valid_id_passes(self):
        """A valid id should not raise."""
        check_app_id(VALID_ID)


class TestCheckApplication:
    """Tests for Application validation."""

    def _application(self, **overrides):
        fields = {"application_id": VALID_ID, "name": "Canary", "owners": {OWNER_ID}}
        fields.update(overrides)
        return Application(**fields)

    def test_valid_application_passes(self):
        """A complete Application should pass."""
        check_application(self._application())

    def test_none_fails(self):
        """None should fail as a missing argument."""
        with pytest.raises(InvalidArgumentError, match="application"):
            check_application(None)

    def test_missing_name_fails(self):
        """Name is required."""
        with pytest.raises(InvalidArgumentError, match="name"):
            check_application(self._application(name=""))

    def test_missing_owners_fails(self):
        """At least one owner is required."""
        with pytest.raises(InvalidArgumentError, match="owners"):
            check_application(self._application(owners=set()))

    def test_invalid_owner_fails(self):
        """Every owner must be a valid UUID."""
        with pytest.raises(InvalidArgumentError, match="owners"):
            check_application(self._application(owners={"bob"}))

    def test_invalid_organization_fails(self):
        """An organization id, when present, must be valid."""
        with pytest.raises(InvalidArgumentError, match="organization_id"):
            check_application(self._application(organization_id="acme"))


class TestEntityChecks:
    """Tests for the remaining entity checks."""

    def test_user_requires_valid_id(self):
        """A User must carry a valid user_id."""
        check_user(User(user_id=VALID_ID))
        with pytest.raises(InvalidArgumentError):
            check_user(User(user_id="nope"))

    def test_message_requires_title(self):
        """A Message needs a title."""
        with pytest.raises(InvalidArgumentError, match="title"):
            check_message(
                Message(message_id=VALID_ID, application_id=OWNER_ID, title="")
            )

    def test_organization_requires_name(self):
        """An Organization needs a name."""
        with pytest.raises(InvalidArgumentError, match="organization_name"):
            check_organization(Organization(organization_id=VALID_ID))

    def test_token_requires_owner_and_id(self):
        """Tokens need both an owner and an id."""
        check_token(AuthenticationToken(token_id=VALID_ID, owner_id=OWNER_ID))
        with pytest.raises(InvalidArgumentError, match="owner_id"):
            check_token(AuthenticationToken(token_id=VALID_ID))
        with pytest.raises(InvalidArgumentError, match="token_id"):
            check_token(AuthenticationToken(owner_id=OWNER_ID))

    def test_event_requires_id(self):
        """Events need a valid id."""
        with pytest.raises(InvalidArgumentError, match="event_id"):
            check_event(Event())

    def test_mobile_device_requires_token(self):
        """Devices need a non-empty token."""
        check_mobile_device(MobileDevice(DevicePlatform.IOS, "abc"))
        with pytest.raises(InvalidArgumentError, match="device_token"):
            check_mobile_device(MobileDevice(DevicePlatform.IOS, ""))


class TestCheckLifetime:
    """Tests for lifetime validation."""

    def test_positive_lifetime_passes(self):
        """A positive lifetime is accepted."""
        check_lifetime(LengthOfTime(1, TimeUnit.SECONDS))

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_lifetime_fails(self, value):
        """Zero and negative lifetimes are rejected."""
        with pytest.raises(InvalidArgumentError, match="lifetime"):
            check_lifetime(LengthOfTime(value, TimeUnit.DAYS))

    def test_missing_lifetime_fails(self):
        """None is rejected."""
        with pytest.raises(InvalidArgumentError):
            check_lifetime(None)


class TestMediaChecks:
    """Tests for image and dimension validation."""

    def test_image_within_bound_passes(self):
        """Images up to the bound are accepted."""
        check_image(Image(data=b"x" * 10), max_size_bytes=10)

    def test_image_over_bound_fails(self):
        """Images over the bound are rejected."""
        with pytest.raises(InvalidArgumentError, match="exceeds"):
            check_image(Image(data=b"x" * 11), max_size_bytes=10)

    def test_empty_image_fails(self):
        """Empty images are rejected."""
        with pytest.raises(InvalidArgumentError, match="empty"):
            check_image(Image(data=b""), max_size_bytes=10)

    def test_dimension_must_be_positive(self):
        """Zero-sized dimensions are rejected."""
        with pytest.raises(InvalidArgumentError, match="dimension"):
            check_dimension(Dimension(0, 10))
