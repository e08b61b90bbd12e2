import logging

from rest_framework.exceptions import ParseError
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from partner_gateway.errors import MissingField
from partner_gateway.provider import get_transaction_provider
from .serializers import TransactionRequestSerializer, TransactionResultSerializer

logger = logging.getLogger(__name__)

MASKED_FIELDS = ('partnerpassword', 'sig')


def _masked(data):
    if not isinstance(data, dict):
        return data
    return {key: '***' if key in MASKED_FIELDS and value else value for key, value in data.items()}


class SubmitTrxMessageAPIView(GenericAPIView):
    serializer_class = TransactionRequestSerializer
    authentication_classes = ()
    permission_classes = ()

    def get_provider(self):
        return get_transaction_provider()

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['provider'] = self.get_provider()
        return context

    def post(self, request, *args, **kwargs):
        try:
            data = request.data
        except ParseError:
            logger.info('Unparsable partner transaction payload.', exc_info=True)
            data = None
        logger.info('Incoming partner transaction request.', extra={'request': _masked(data)})

        serializer = self.get_serializer(data=data)
        if data is not None and serializer.is_valid():
            result = serializer.save()
        else:
            logger.info('Partner transaction payload failed parsing.',
                        extra={'errors': serializer.errors if data is not None else None})
            result = serializer.provider.reject(MissingField())

        payload = TransactionResultSerializer(result).data
        logger.info('Outgoing partner transaction response.',
                    extra={'response': payload, 'status_code': result.status_code})
        return Response(data=payload, status=result.status_code)
