# app/domain/pricing.py
"""
Liczenie cen koszyka.

Wszystko na Decimal, nigdy float. Sumy liczone raz przy zapisie linii
(snapshot ceny), pozniej tylko sumujemy zapisane total_price.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Any

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Any) -> Decimal:
    #float przez str, zeby 0.1 nie zamienilo sie w 0.1000000000000000055...
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        amount = Decimal(str(value))
    else:
        amount = Decimal(value)
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price: Any, quantity: int) -> Decimal:
    return to_money(to_money(unit_price) * quantity)


def cart_total(lines: Iterable[Any]) -> Decimal:
    return to_money(sum((to_money(line.total_price) for line in lines), ZERO))
