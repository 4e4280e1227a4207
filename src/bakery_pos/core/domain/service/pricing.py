from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence, Tuple

from returns.result import Failure, Result, Success

from bakery_pos.core.domain.model.errors import OrderError, ValidationError
from bakery_pos.core.domain.model.order import Money, OrderLine, fold_money
from bakery_pos.core.ports.inbound.create_order import OrderDraft, OrderLineDraft


@dataclass(frozen=True)
class Totals:
    subtotal: Money
    tax_amount: Money
    total: Money


def price_lines(
    lines: Sequence[OrderLineDraft], currency: str
) -> Result[Tuple[OrderLine, ...], OrderError]:
    priced = []
    for i, ln in enumerate(lines):
        unit = Money.of(ln.unit_price, currency)
        line_total = unit * ln.quantity
        if ln.line_total is not None and not Money.of(ln.line_total, currency).close_to(
            line_total
        ):
            return Failure(
                ValidationError(
                    f"lines[{i}].line_total must equal quantity x unit_price ({line_total.amount})"
                )
            )
        priced.append(
            OrderLine(
                product_id=ln.product_id,
                product_name=ln.product_name.strip(),
                unit_price=unit,
                quantity=ln.quantity,
                line_total=line_total,
            )
        )
    return Success(tuple(priced))


def derive_totals(
    draft: OrderDraft,
    lines: Sequence[OrderLine],
    tax_rate: Decimal,
    currency: str,
) -> Result[Totals, OrderError]:
    """Fills in whatever money fields the draft left out and checks the ones it sent."""
    lines_sum = fold_money((ln.line_total for ln in lines), currency=currency)

    if draft.subtotal is None:
        subtotal = lines_sum
    else:
        subtotal = Money.of(draft.subtotal, currency)
        if not subtotal.close_to(lines_sum):
            return Failure(
                ValidationError(
                    f"subtotal must equal the sum of line totals ({lines_sum.amount})"
                )
            )

    if draft.tax_amount is None:
        tax = subtotal.percent(tax_rate)
    else:
        tax = Money.of(draft.tax_amount, currency)

    expected_total = subtotal + tax
    if draft.total is None:
        total = expected_total
    else:
        total = Money.of(draft.total, currency)
        if not total.close_to(expected_total):
            return Failure(
                ValidationError(
                    f"total must equal subtotal + tax_amount ({expected_total.amount})"
                )
            )

    return Success(Totals(subtotal=subtotal, tax_amount=tax, total=total))
