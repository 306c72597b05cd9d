"""Tests for masking utility functions."""

from abha_sdk.utils.masking import (
    mask_aadhaar,
    mask_abha_number,
    mask_email,
    mask_mobile,
    mask_sensitive_dict,
)


class TestMaskABHANumber:
    """Tests for ABHA number masking."""

    def test_mask_display_form(self):
        assert mask_abha_number("12-3456-7890-1234") == "XX-XXXX-XXXX-1234"

    def test_mask_is_idempotent(self):
        once = mask_abha_number("12-3456-7890-1234")
        assert mask_abha_number(once) == once

    def test_invalid_input_unchanged(self):
        assert mask_abha_number("12345678901234") == "12345678901234"
        assert mask_abha_number("") == ""


class TestMaskMobile:
    """Tests for mobile number masking."""

    def test_mask_plain(self):
        assert mask_mobile("9876543210") == "XXXXXX3210"

    def test_mask_with_separator(self):
        assert mask_mobile("98765 43210") == "XXXXXX3210"

    def test_mask_is_idempotent(self):
        once = mask_mobile("9876543210")
        assert mask_mobile(once) == once

    def test_invalid_input_unchanged(self):
        assert mask_mobile("123") == "123"


class TestMaskAadhaar:
    """Tests for Aadhaar masking."""

    def test_mask(self):
        assert mask_aadhaar("1234 5678 9012") == "XXXXXXXX9012"

    def test_invalid_input_unchanged(self):
        assert mask_aadhaar("1234") == "1234"


class TestMaskEmail:
    """Tests for email masking."""

    def test_mask_standard_email(self):
        assert mask_email("user@example.com") == "u***@e***.com"

    def test_mask_invalid_email_no_at(self):
        assert mask_email("notanemail") == "***"

    def test_mask_empty_email(self):
        assert mask_email("") == "***"


class TestMaskSensitiveDict:
    """Tests for payload masking."""

    def test_masks_secrets(self):
        data = {"clientId": "id", "clientSecret": "secret", "grantType": "client_credentials"}
        masked = mask_sensitive_dict(data)
        assert masked["clientSecret"] == "********"
        assert masked["clientId"] == "id"

    def test_masks_nested_otp(self):
        data = {"authData": {"otp": {"txnId": "t1", "otpValue": "cipher"}}}
        masked = mask_sensitive_dict(data)
        # "otp" key itself is sensitive
        assert masked["authData"]["otp"] == "********"

    def test_masks_identifiers_in_lists(self):
        data = {"accounts": [{"ABHANumber": "12-3456-7890-1234", "name": "John"}]}
        masked = mask_sensitive_dict(data)
        assert masked["accounts"][0]["ABHANumber"] == "XX-XXXX-XXXX-1234"
        assert masked["accounts"][0]["name"] == "John"

    def test_does_not_mutate_input(self):
        data = {"token": "abc", "nested": {"loginId": "x"}}
        mask_sensitive_dict(data)
        assert data == {"token": "abc", "nested": {"loginId": "x"}}

    def test_custom_keys(self):
        assert mask_sensitive_dict({"a": 1, "b": 2}, {"a"}) == {"a": "********", "b": 2}
