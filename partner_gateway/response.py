from django.utils.translation import gettext_lazy as _
from rest_framework import status

from partner_gateway.dto import Discount, TransactionResult
from partner_gateway.errors import TransactionError

RESULT_SUCCESS = 1
RESULT_FAILURE = 0


class TransactionResponseBuilder(object):
    success_message = _('Transaction submitted successfully')

    def success(self, total_amount: int, discount: Discount) -> TransactionResult:
        return TransactionResult(
            result=RESULT_SUCCESS,
            resultmessage=str(self.success_message),
            totalamount=total_amount,
            totaldiscount=discount.amount,
            finalamount=discount.final_amount,
            status_code=status.HTTP_200_OK
        )

    def failure(self, error: TransactionError) -> TransactionResult:
        return TransactionResult(
            result=RESULT_FAILURE,
            resultmessage=str(error.detail),
            status_code=error.status_code
        )
