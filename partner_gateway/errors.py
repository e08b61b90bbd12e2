from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException


class TransactionError(APIException):
    default_code = 'transaction_error'


class MissingField(TransactionError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Missing or invalid required fields.')
    default_code = 'missing_field'


class UnknownPartner(TransactionError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _('Access Denied!')
    default_code = 'unknown_partner'


class MalformedCredential(TransactionError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _('Invalid Partner Password.')
    default_code = 'malformed_credential'


class CredentialMismatch(MalformedCredential):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _('Invalid Partner Password.')
    default_code = 'credential_mismatch'


class BadTimestampFormat(TransactionError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Invalid timestamp format')
    default_code = 'bad_timestamp_format'


class ExpiredTimestamp(TransactionError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _('Expired.')
    default_code = 'expired_timestamp'


class InvalidItem(TransactionError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Invalid item detail provided.')
    default_code = 'invalid_item'


class TotalAmountMismatch(TransactionError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Invalid Total Amount.')
    default_code = 'total_amount_mismatch'


class SignatureMismatch(TransactionError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _('Invalid Signature.')
    default_code = 'signature_mismatch'
