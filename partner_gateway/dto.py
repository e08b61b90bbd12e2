from dataclasses import dataclass
from typing import List

from rest_framework import status


@dataclass
class LineItem:
    partneritemref: str
    name: str
    qty: int
    unitprice: int

    @property
    def subtotal(self) -> int:
        return self.qty * self.unitprice


@dataclass
class TransactionRequest:
    partnerkey: str
    partnerrefno: str
    partnerpassword: str
    totalamount: int
    timestamp: str
    sig: str
    items: List[LineItem] = None


@dataclass(frozen=True)
class Discount:
    percent: int
    amount: int
    final_amount: int


@dataclass(frozen=True)
class TransactionResult:
    result: int
    resultmessage: str
    totalamount: int = None
    totaldiscount: int = None
    finalamount: int = None
    status_code: int = status.HTTP_200_OK
