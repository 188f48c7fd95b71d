import pytest

from config.settings import MASK, mask_sensitive_data

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "text, secret",
    [
        ("login failed password='s3cret123'", "s3cret123"),
        ("header token=abc123xyz", "abc123xyz"),
        ("resend otp: 493021", "493021"),
        ('{"Authorization": "Bearer-eyJhbGci"}', "Bearer-eyJhbGci"),
        ("upstream sent Authorization: Bearer eyJ0eXAi", "eyJ0eXAi"),
        ("retry with {'token': 'tok-991'}", "tok-991"),
    ],
)
def test_inline_secrets_are_masked(text, secret):
    result = mask_sensitive_data(None, None, {"event": "auth", "detail": text})
    assert secret not in result["detail"]
    assert MASK in result["detail"]


def test_sensitive_keys_are_masked_whatever_the_value():
    result = mask_sensitive_data(
        None, None, {"event": "auth", "otp": 493021, "Refresh": "eyJhbGciOi"}
    )
    assert result["otp"] == MASK
    assert result["Refresh"] == MASK


def test_order_fields_pass_through():
    event_dict = {"event": "order.created", "claim_code": "AB12CD34", "order_id": 7}
    assert mask_sensitive_data(None, None, dict(event_dict)) == event_dict
