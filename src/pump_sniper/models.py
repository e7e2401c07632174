from dataclasses import dataclass
from typing import Any, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey


@dataclass(frozen=True)
class PriorityFee:
    unit_limit: int = 1000
    unit_price: int = 1_000_000


@dataclass(frozen=True)
class SniperTask:
    task_id: str
    ticker: Optional[str]
    keypair: Keypair
    buy_amount_sol: int


@dataclass(frozen=True)
class LimitOrder:
    order_id: str
    mint: Pubkey
    is_buy: bool
    sol_amount: int
    token_amount: int
    keypair: Keypair


@dataclass(frozen=True)
class CreateEvent:
    mint: Pubkey
    symbol: str
    name: str = ""
    uri: str = ""
    bonding_curve: Optional[Pubkey] = None
    user: Optional[Pubkey] = None


@dataclass(frozen=True)
class TradeEvent:
    mint: Pubkey
    sol_amount: int
    token_amount: int
    is_buy: Optional[bool] = None
    user: Optional[Pubkey] = None
    timestamp: Optional[int] = None


@dataclass(frozen=True)
class ExecutionOutcome:
    entry_id: str
    mint: Pubkey
    is_buy: bool
    amount: int
    success: bool
    error: Optional[str] = None
    result: Any = None
