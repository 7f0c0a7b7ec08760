from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from ..db.models import TaxType

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def line_tax(subtotal: Decimal, tax, tax_type: TaxType, quantity: int) -> Decimal:
    tax = to_money(tax)
    if TaxType(tax_type) == TaxType.fixed:
        return to_money(tax * quantity)
    return to_money(subtotal * tax / Decimal(100))


def extra_charges_total(charges: Iterable[dict]) -> Decimal:
    total = Decimal("0.00")
    for charge in charges or []:
        total += to_money(charge.get("amount")) * int(charge.get("quantity") or 1)
    return to_money(total)


def derive_conference_payment_status(advance_paid, amount) -> str:
    advance = to_money(advance_paid)
    if advance >= to_money(amount):
        return "paid"
    if advance > 0:
        return "partial"
    return "pending"
