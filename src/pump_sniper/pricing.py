"""Fixed-point price arithmetic.

Prices are lamports per base unit of token, scaled by ``PRICE_BASE``. Every
quantity is a Python ``int``; division truncates toward zero rather than
flooring, so negative intermediates round the same way as positive ones.
"""

from typing import Tuple

from .errors import InvalidOrderError

PRICE_BASE = 1_000_000_000


def div_trunc(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def derive_amounts(amount: int, is_buy: bool, limit_price: int) -> Tuple[int, int]:
    """Return ``(sol_amount, token_amount)`` for a limit order.

    ``amount`` is lamports for a buy and token base units for a sell.
    """
    if limit_price <= 0:
        raise InvalidOrderError(f"limit price must be positive, got {limit_price}")
    if amount < 0:
        raise InvalidOrderError(f"order amount must not be negative, got {amount}")

    if is_buy:
        return amount, div_trunc(amount * PRICE_BASE, limit_price)
    return div_trunc(amount * limit_price, PRICE_BASE), amount


def implied_price(sol_amount: int, token_amount: int) -> int:
    if token_amount == 0:
        return 0
    return div_trunc(sol_amount * PRICE_BASE, token_amount)


def implied_limit_price(sol_amount: int, token_amount: int) -> int:
    """Recover the limit price stored in an order's derived amounts."""
    return implied_price(sol_amount, token_amount)


def quote_value(token_amount: int, price: int) -> int:
    """Lamports needed to trade ``token_amount`` at ``price``."""
    return div_trunc(token_amount * price, PRICE_BASE)
