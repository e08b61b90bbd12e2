import hashlib
import logging
from base64 import b64encode
from datetime import datetime, timezone as dt_timezone

from django.utils.crypto import constant_time_compare

from partner_gateway.dto import TransactionRequest
from partner_gateway.errors import SignatureMismatch

logger = logging.getLogger(__name__)


class TransactionSignEncoder(object):
    timestamp_format = '%Y%m%d%H%M%S'

    def _get_signature_string(self, timestamp: datetime, partnerkey: str, partnerrefno: str, totalamount: int,
                              partnerpassword: str) -> str:
        sig_timestamp = timestamp.astimezone(dt_timezone.utc).strftime(self.timestamp_format)
        return '%s%s%s%d%s' % (sig_timestamp, partnerkey, partnerrefno, totalamount, partnerpassword)

    def get_signature(self, timestamp: datetime, partnerkey: str, partnerrefno: str, totalamount: int,
                      partnerpassword: str) -> str:
        message = self._get_signature_string(timestamp, partnerkey, partnerrefno, totalamount, partnerpassword)
        # The partner protocol signs the hex text of the digest, not the raw digest bytes
        hex_digest = hashlib.sha256(message.encode('utf-8')).hexdigest()
        return b64encode(hex_digest.encode('utf-8')).decode()


class SignatureVerifier(TransactionSignEncoder):

    def __init__(self, enforce: bool = False):
        self.enforce = enforce

    def validate_signature(self, request: TransactionRequest, timestamp: datetime, raise_exc: bool = True) -> bool:
        expected = self.get_signature(timestamp, request.partnerkey, request.partnerrefno, request.totalamount,
                                      request.partnerpassword)
        valid = constant_time_compare(request.sig, expected)
        if not valid:
            if self.enforce and raise_exc:
                raise SignatureMismatch()
            logger.warning('Transaction signature does not match.',
                           extra={'partner_key': request.partnerkey, 'partner_ref_no': request.partnerrefno,
                                  'enforced': self.enforce})
        return valid
