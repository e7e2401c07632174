"""Decoding of launchpad SDK event payloads into model objects.

The SDK may hand over decoded Anchor events as mappings with camelCase keys,
plain attribute objects, or snake_case dicts built by hand.
"""

from collections.abc import Mapping
from typing import Any, Optional, Sequence

from solders.pubkey import Pubkey

from .errors import EventDecodeError
from .models import CreateEvent, TradeEvent

_MISSING = object()


def _field(raw: Any, names: Sequence[str], default: Any = _MISSING) -> Any:
    for name in names:
        if isinstance(raw, Mapping):
            if name in raw:
                return raw[name]
        elif hasattr(raw, name):
            return getattr(raw, name)
    if default is _MISSING:
        raise EventDecodeError(f"event payload missing {names[0]!r}")
    return default


def _pubkey(value: Any, name: str) -> Pubkey:
    if isinstance(value, Pubkey):
        return value
    try:
        return Pubkey.from_string(str(value))
    except ValueError:
        raise EventDecodeError(f"{name} is not a valid public key: {value!r}") from None


def _optional_pubkey(value: Any, name: str) -> Optional[Pubkey]:
    return None if value is None else _pubkey(value, name)


def _amount(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise EventDecodeError(f"{name} is not an integer amount: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise EventDecodeError(f"{name} is not an integer amount: {value!r}")
    try:
        amount = int(value)
    except (TypeError, ValueError):
        raise EventDecodeError(f"{name} is not an integer amount: {value!r}") from None
    if amount < 0:
        raise EventDecodeError(f"{name} must not be negative: {amount}")
    return amount


def _symbol(value: Any) -> str:
    if value is None:
        raise EventDecodeError("event payload missing 'symbol'")
    return str(value)


def parse_create_event(raw: Any) -> CreateEvent:
    if isinstance(raw, CreateEvent):
        return raw
    return CreateEvent(
        mint=_pubkey(_field(raw, ("mint",)), "mint"),
        symbol=_symbol(_field(raw, ("symbol",))),
        name=str(_field(raw, ("name",), "")),
        uri=str(_field(raw, ("uri",), "")),
        bonding_curve=_optional_pubkey(_field(raw, ("bondingCurve", "bonding_curve"), None), "bonding_curve"),
        user=_optional_pubkey(_field(raw, ("user",), None), "user"),
    )


def parse_trade_event(raw: Any) -> TradeEvent:
    if isinstance(raw, TradeEvent):
        return raw
    is_buy = _field(raw, ("isBuy", "is_buy"), None)
    timestamp = _field(raw, ("timestamp",), None)
    return TradeEvent(
        mint=_pubkey(_field(raw, ("mint",)), "mint"),
        sol_amount=_amount(_field(raw, ("solAmount", "sol_amount")), "sol_amount"),
        token_amount=_amount(_field(raw, ("tokenAmount", "token_amount")), "token_amount"),
        is_buy=None if is_buy is None else bool(is_buy),
        user=_optional_pubkey(_field(raw, ("user",), None), "user"),
        timestamp=None if timestamp is None else _amount(timestamp, "timestamp"),
    )
