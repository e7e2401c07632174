"""Surface of the launchpad trading SDK that the sniper core drives.

The SDK owns the RPC connection, transaction building and signing. Buy and
sell return a result whose ``success`` field (mapping key or attribute)
reports whether the transaction landed.

Listeners must be invoked on the event loop thread that started the
dispatcher; they enqueue with a non thread-safe put. The SDK may pass extra
arguments such as slot and signature to any listener.
"""

from typing import Any, Callable, Hashable, Protocol

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .models import PriorityFee

CreateEventHandler = Callable[[Any, int, str], Any]
TradeEventHandler = Callable[[Any], Any]


class TradingClient(Protocol):
    def add_create_event_listener(self, handler: CreateEventHandler) -> Hashable:
        ...

    def add_trade_event_listener(self, handler: TradeEventHandler) -> Hashable:
        ...

    def remove_event_listener(self, listener_id: Hashable) -> None:
        ...

    async def buy(self, keypair: Keypair, mint: Pubkey, sol_amount: int, slippage_bps: int, priority_fee: PriorityFee) -> Any:
        ...

    async def sell(self, keypair: Keypair, mint: Pubkey, token_amount: int, slippage_bps: int, priority_fee: PriorityFee) -> Any:
        ...
