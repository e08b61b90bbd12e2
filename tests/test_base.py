"""Pipeline stage tests: request validation, partner authentication,
timestamp policy and item/total reconciliation.
"""

from base64 import b64encode
from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from partner_gateway.base import ItemValidator, PartnerAuthenticator, RequestValidator, TimestampPolicy
from partner_gateway.dto import LineItem, TransactionRequest
from partner_gateway.errors import (
    BadTimestampFormat,
    CredentialMismatch,
    ExpiredTimestamp,
    InvalidItem,
    MalformedCredential,
    MissingField,
    TotalAmountMismatch,
    UnknownPartner,
)
from partner_gateway.registry import PartnerRegistry


def _encode(text: str) -> str:
    return b64encode(text.encode('utf-8')).decode()


def _request(**overrides) -> TransactionRequest:
    data = dict(
        partnerkey='FAKEGOOGLE',
        partnerrefno='FG-00001',
        partnerpassword=_encode('FAKEPASSWORD1234'),
        totalamount=1000,
        timestamp='2024-08-15T02:11:22.0000000Z',
        sig='c2lnbmF0dXJl',
        items=None,
    )
    data.update(overrides)
    return TransactionRequest(**data)


# -- RequestValidator -----------------------------------------------------------

def test_request_validator_accepts_complete_request():
    assert RequestValidator().validate_request(_request())


@pytest.mark.parametrize('field', ['partnerkey', 'partnerrefno', 'partnerpassword', 'timestamp', 'sig'])
@pytest.mark.parametrize('value', ['', '   ', None])
def test_request_validator_rejects_blank_fields(field, value):
    with pytest.raises(MissingField):
        RequestValidator().validate_request(_request(**{field: value}))


@pytest.mark.parametrize('amount', [0, -1, None])
def test_request_validator_rejects_non_positive_amount(amount):
    with pytest.raises(MissingField):
        RequestValidator().validate_request(_request(totalamount=amount))


def test_request_validator_without_raise_returns_false():
    assert RequestValidator().validate_request(_request(sig=''), raise_exc=False) is False


def test_missing_field_message_is_generic():
    with pytest.raises(MissingField) as exc_info:
        RequestValidator().validate_request(_request(partnerrefno=''))
    assert str(exc_info.value.detail) == 'Missing or invalid required fields.'


# -- PartnerAuthenticator -------------------------------------------------------

@pytest.fixture
def authenticator():
    return PartnerAuthenticator(PartnerRegistry({'FAKEGOOGLE': 'FAKEPASSWORD1234'}))


def test_authenticator_accepts_known_partner(authenticator):
    assert authenticator.authenticate('FAKEGOOGLE', _encode('FAKEPASSWORD1234')) == 'FAKEGOOGLE'


def test_authenticator_rejects_unknown_partner(authenticator):
    with pytest.raises(UnknownPartner) as exc_info:
        authenticator.authenticate('FAKEAMAZON', _encode('FAKEPASSWORD1234'))
    assert exc_info.value.status_code == 401
    assert str(exc_info.value.detail) == 'Access Denied!'


@pytest.mark.parametrize('password', ['not base64!', 'RkFLRQ', _encode('x')[:-1] + '*', '/w=='])
def test_authenticator_rejects_malformed_password(authenticator, password):
    with pytest.raises(MalformedCredential) as exc_info:
        authenticator.authenticate('FAKEGOOGLE', password)
    assert not isinstance(exc_info.value, CredentialMismatch)


def test_authenticator_rejects_wrong_password(authenticator):
    with pytest.raises(CredentialMismatch) as exc_info:
        authenticator.authenticate('FAKEGOOGLE', _encode('FAKEPASSWORD9999'))
    assert str(exc_info.value.detail) == 'Invalid Partner Password.'


def test_authenticator_ignores_whitespace_in_password(authenticator):
    encoded = _encode('FAKEPASSWORD1234')
    wrapped = '%s\r\n%s ' % (encoded[:8], encoded[8:])
    assert authenticator.authenticate('FAKEGOOGLE', wrapped) == 'FAKEGOOGLE'


def test_password_failures_share_one_message(authenticator):
    with pytest.raises(MalformedCredential) as malformed:
        authenticator.authenticate('FAKEGOOGLE', '%%%')
    with pytest.raises(MalformedCredential) as mismatch:
        authenticator.authenticate('FAKEGOOGLE', _encode('nope'))
    assert str(malformed.value.detail) == str(mismatch.value.detail)
    assert malformed.value.status_code == mismatch.value.status_code


def test_registry_is_read_only():
    source = {'FAKEGOOGLE': 'FAKEPASSWORD1234'}
    registry = PartnerRegistry(source)
    source['FAKEPEOPLE'] = 'FAKEPASSWORD4578'
    assert 'FAKEPEOPLE' not in registry
    with pytest.raises(TypeError):
        registry._partners['FAKEPEOPLE'] = 'FAKEPASSWORD4578'
    assert 'FAKEPASSWORD1234' not in repr(registry)


# -- TimestampPolicy --------------------------------------------------------------

NOW = datetime(2024, 8, 15, 2, 11, 22, tzinfo=dt_timezone.utc)


def _policy(**kwargs):
    return TimestampPolicy(clock=lambda: NOW, **kwargs)


def test_parse_utc_timestamp():
    assert _policy().parse('2024-08-15T02:11:22.0000000Z') == NOW


def test_parse_offset_timestamp_converts_to_utc():
    assert _policy().parse('2024-08-15T10:11:22+08:00') == NOW


def test_parse_naive_timestamp_uses_project_time_zone():
    # Tests run with TIME_ZONE = Asia/Kuala_Lumpur (UTC+8)
    assert _policy().parse('2024-08-15T10:11:22') == NOW


def test_parse_date_only_timestamp():
    parsed = _policy().parse('2024-08-15')
    assert parsed == datetime(2024, 8, 14, 16, 0, tzinfo=dt_timezone.utc)


@pytest.mark.parametrize('value', ['yesterday', '2024-13-45T00:00:00Z', '', None, '15/08/2024 10:11'])
def test_parse_rejects_bad_format(value):
    with pytest.raises(BadTimestampFormat) as exc_info:
        _policy().parse(value)
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize('value', ['0001-01-01T00:00:00+01:00', '9999-12-31T23:59:59-05:00', '0001-01-01T00:00:00'])
def test_parse_rejects_out_of_range_instants(value):
    with pytest.raises(BadTimestampFormat):
        _policy().parse(value)


def test_skew_minutes_is_absolute():
    policy = _policy()
    assert policy.skew_minutes(NOW - timedelta(minutes=3)) == 3
    assert policy.skew_minutes(NOW + timedelta(minutes=3)) == 3


def test_expiration_within_window_is_valid():
    assert _policy(enforce=True).validate_expiration(NOW - timedelta(minutes=5))


def test_expiration_enforced_rejects_old_timestamp():
    with pytest.raises(ExpiredTimestamp):
        _policy(enforce=True).validate_expiration(NOW - timedelta(minutes=6))


def test_expiration_honours_custom_threshold():
    policy = _policy(enforce=True, max_skew_minutes=10)
    assert policy.validate_expiration(NOW - timedelta(minutes=6))


def test_expiration_not_enforced_only_reports():
    assert _policy(enforce=False).validate_expiration(NOW - timedelta(days=365)) is False


# -- ItemValidator ----------------------------------------------------------------

def _item(**overrides) -> LineItem:
    data = dict(partneritemref='i-00001', name='Pen', qty=2, unitprice=500)
    data.update(overrides)
    return LineItem(**data)


def test_items_matching_total_are_valid():
    items = [_item(), _item(partneritemref='i-00002', name='Ruler', qty=1, unitprice=1000)]
    assert ItemValidator().validate_items(items, 2000)


@pytest.mark.parametrize('overrides', [
    {'qty': 0},
    {'qty': -1},
    {'unitprice': 0},
    {'unitprice': -100},
    {'name': ''},
    {'partneritemref': '  '},
])
def test_invalid_item_is_rejected(overrides):
    with pytest.raises(InvalidItem):
        ItemValidator().validate_items([_item(**overrides)], 1000)


def test_invalid_item_is_reported_before_total():
    items = [_item(), _item(qty=0)]
    with pytest.raises(InvalidItem):
        ItemValidator().validate_items(items, 999999)


def test_one_cent_mismatch_is_rejected():
    with pytest.raises(TotalAmountMismatch) as exc_info:
        ItemValidator().validate_items([_item()], 1001)
    assert str(exc_info.value.detail) == 'Invalid Total Amount.'


def test_items_are_skipped_when_absent():
    assert ItemValidator().validate_items(None, 123)


def test_empty_item_list_is_reconciled():
    with pytest.raises(TotalAmountMismatch):
        ItemValidator().validate_items([], 123)


def test_max_quantity_is_disabled_by_default():
    assert ItemValidator().validate_item(_item(qty=50, unitprice=1))


def test_max_quantity_when_configured():
    validator = ItemValidator(max_quantity=5)
    assert validator.validate_item(_item(qty=5))
    with pytest.raises(InvalidItem):
        validator.validate_item(_item(qty=6))
