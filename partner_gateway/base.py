import binascii
import logging
from base64 import b64decode
from datetime import datetime, time, timezone as dt_timezone
from typing import Callable, Iterable

from django.utils import timezone
from django.utils.crypto import constant_time_compare
from django.utils.dateparse import parse_date, parse_datetime

from partner_gateway.dto import LineItem, TransactionRequest
from partner_gateway.errors import MissingField, UnknownPartner, MalformedCredential, CredentialMismatch, \
    BadTimestampFormat, ExpiredTimestamp, InvalidItem, TotalAmountMismatch
from partner_gateway.registry import PartnerRegistry

logger = logging.getLogger(__name__)


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


class RequestValidator(object):
    required_fields = ('partnerkey', 'partnerrefno', 'partnerpassword', 'timestamp', 'sig')

    def validate_request(self, request: TransactionRequest, raise_exc: bool = True) -> bool:
        valid = all(not _is_blank(getattr(request, field)) for field in self.required_fields)
        valid = valid and request.totalamount is not None and request.totalamount > 0
        if not valid and raise_exc:
            raise MissingField()
        return valid


class PartnerAuthenticator(object):

    def __init__(self, registry: PartnerRegistry):
        self.registry = registry

    def decode_password(self, partnerpassword: str) -> str:
        # Whitespace and line breaks inside the encoded text are ignored
        try:
            return b64decode(''.join(partnerpassword.split()), validate=True).decode('utf-8')
        except (binascii.Error, ValueError):
            raise MalformedCredential()

    def authenticate(self, partnerkey: str, partnerpassword: str) -> str:
        try:
            secret = self.registry[partnerkey]
        except KeyError:
            raise UnknownPartner()
        if not constant_time_compare(self.decode_password(partnerpassword), secret):
            raise CredentialMismatch()
        return partnerkey


class TimestampPolicy(object):

    def __init__(self, enforce: bool = False, max_skew_minutes: float = 5,
                 clock: Callable[[], datetime] = timezone.now):
        self.enforce = enforce
        self.max_skew_minutes = max_skew_minutes
        self.clock = clock

    def parse(self, value: str) -> datetime:
        try:
            parsed = parse_datetime(value)
            if parsed is None:
                date = parse_date(value)
                parsed = datetime.combine(date, time()) if date is not None else None
            if parsed is None:
                raise BadTimestampFormat()
            # Naive stamps are taken as wall time in the project time zone
            if timezone.is_naive(parsed):
                parsed = timezone.make_aware(parsed)
            return parsed.astimezone(dt_timezone.utc)
        except (TypeError, ValueError, OverflowError):
            raise BadTimestampFormat()

    def skew_minutes(self, instant: datetime) -> float:
        return abs((self.clock() - instant).total_seconds()) / 60

    def validate_expiration(self, instant: datetime, raise_exc: bool = True) -> bool:
        skew = self.skew_minutes(instant)
        valid = skew <= self.max_skew_minutes
        if not valid:
            if self.enforce and raise_exc:
                raise ExpiredTimestamp()
            logger.warning('Transaction timestamp is outside the allowed window.',
                           extra={'skew_minutes': skew, 'enforced': self.enforce})
        return valid


class ItemValidator(object):

    def __init__(self, max_quantity: int = None):
        self.max_quantity = max_quantity

    def validate_item(self, item: LineItem, raise_exc: bool = True) -> bool:
        valid = not _is_blank(item.partneritemref) and not _is_blank(item.name)
        valid = valid and item.qty is not None and item.qty >= 1
        valid = valid and item.unitprice is not None and item.unitprice > 0
        if valid and self.max_quantity is not None:
            valid = item.qty <= self.max_quantity
        if not valid and raise_exc:
            raise InvalidItem()
        return valid

    def validate_total(self, items: Iterable[LineItem], total_amount: int, raise_exc: bool = True) -> bool:
        valid = sum(item.subtotal for item in items) == total_amount
        if not valid and raise_exc:
            raise TotalAmountMismatch()
        return valid

    def validate_items(self, items: Iterable[LineItem], total_amount: int, raise_exc: bool = True) -> bool:
        if items is None:
            return True
        valid = True
        for item in items:
            valid = valid and self.validate_item(item, raise_exc=raise_exc)
        valid = valid and self.validate_total(items, total_amount, raise_exc=raise_exc)
        return valid
