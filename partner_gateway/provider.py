import logging

from partner_gateway import discount
from partner_gateway.base import RequestValidator, PartnerAuthenticator, TimestampPolicy, ItemValidator
from partner_gateway.dto import TransactionRequest, TransactionResult
from partner_gateway.errors import TransactionError
from partner_gateway.registry import PartnerRegistry
from partner_gateway.response import TransactionResponseBuilder
from partner_gateway.settings import api_settings
from partner_gateway.signature import SignatureVerifier

logger = logging.getLogger(__name__)


def get_transaction_provider(registry: PartnerRegistry = None):
    return PartnerTransactionProvider(
        request_validator=RequestValidator(),
        authenticator=PartnerAuthenticator(registry if registry is not None else PartnerRegistry.from_settings()),
        timestamp_policy=TimestampPolicy(enforce=api_settings.TIMESTAMP_CHECK_ENABLED,
                                         max_skew_minutes=api_settings.TIMESTAMP_MAX_SKEW_MINUTES),
        item_validator=ItemValidator(max_quantity=api_settings.MAX_ITEM_QUANTITY),
        signature_verifier=SignatureVerifier(enforce=api_settings.SIGNATURE_CHECK_ENABLED),
        response_builder=TransactionResponseBuilder()
    )


class PartnerTransactionProvider(object):

    def __init__(self, request_validator: RequestValidator, authenticator: PartnerAuthenticator,
                 timestamp_policy: TimestampPolicy, item_validator: ItemValidator,
                 signature_verifier: SignatureVerifier, response_builder: TransactionResponseBuilder):
        self.request_validator = request_validator
        self.authenticator = authenticator
        self.timestamp_policy = timestamp_policy
        self.item_validator = item_validator
        self.signature_verifier = signature_verifier
        self.response_builder = response_builder

    def submit(self, request: TransactionRequest) -> TransactionResult:
        extra = {'partner_key': request.partnerkey, 'partner_ref_no': request.partnerrefno}
        logger.info('Processing partner transaction.', extra=extra)
        try:
            result = self.try_submit(request)
        except TransactionError as e:
            logger.info('Partner transaction rejected.', extra=dict(extra, code=e.default_code, detail=str(e.detail)))
            return self.reject(e)
        logger.info('Partner transaction accepted.',
                    extra=dict(extra, totalamount=result.totalamount, totaldiscount=result.totaldiscount))
        return result

    def try_submit(self, request: TransactionRequest) -> TransactionResult:
        self.request_validator.validate_request(request, raise_exc=True)
        self.authenticator.authenticate(request.partnerkey, request.partnerpassword)
        timestamp = self.timestamp_policy.parse(request.timestamp)
        self.timestamp_policy.validate_expiration(timestamp, raise_exc=True)
        self.item_validator.validate_items(request.items, request.totalamount, raise_exc=True)
        self.signature_verifier.validate_signature(request, timestamp, raise_exc=True)
        return self.response_builder.success(request.totalamount, discount.calculate_discount(request.totalamount))

    def reject(self, error: TransactionError) -> TransactionResult:
        return self.response_builder.failure(error)
