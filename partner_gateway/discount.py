"""Discount rules for partner transactions.

Every function here is pure and works on amounts in minor currency units.
Tier boundaries are expressed in major units.
"""
from decimal import Decimal

from partner_gateway.dto import Discount

MAX_DISCOUNT_PERCENT = 20

# (lowest, highest) in major units, both inclusive; None means unbounded
BASE_TIERS = (
    (Decimal('200'), Decimal('500'), 5),
    (Decimal('501'), Decimal('800'), 7),
    (Decimal('801'), Decimal('1200'), 10),
)
TOP_TIER_PERCENT = 15

PRIME_BONUS_THRESHOLD = 50000
PRIME_BONUS_PERCENT = 8
FIVE_ENDING_BONUS_THRESHOLD = 90000
FIVE_ENDING_BONUS_PERCENT = 10


def is_prime(number: int) -> bool:
    if number <= 1:
        return False
    if number <= 3:
        return True
    if number % 2 == 0 or number % 3 == 0:
        return False
    i = 5
    while i * i <= number:
        if number % i == 0 or number % (i + 2) == 0:
            return False
        i += 6
    return True


def to_major_units(total_amount: int) -> Decimal:
    return Decimal(total_amount) / 100


def base_discount_percent(total_amount: int) -> int:
    major = to_major_units(total_amount)
    for lowest, highest, percent in BASE_TIERS:
        if lowest <= major <= highest:
            return percent
    if major > BASE_TIERS[-1][1]:
        return TOP_TIER_PERCENT
    return 0


def conditional_discount_percent(total_amount: int) -> int:
    percent = 0
    if total_amount > PRIME_BONUS_THRESHOLD and is_prime(total_amount):
        percent += PRIME_BONUS_PERCENT
    if total_amount > FIVE_ENDING_BONUS_THRESHOLD and total_amount % 10 == 5:
        percent += FIVE_ENDING_BONUS_PERCENT
    return percent


def discount_percent(total_amount: int) -> int:
    percent = base_discount_percent(total_amount) + conditional_discount_percent(total_amount)
    return min(percent, MAX_DISCOUNT_PERCENT)


def calculate_discount(total_amount: int) -> Discount:
    percent = discount_percent(total_amount)
    amount = total_amount * percent // 100
    return Discount(percent=percent, amount=amount, final_amount=total_amount - amount)
