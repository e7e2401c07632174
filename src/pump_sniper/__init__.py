from .agent import SniperAgent
from .config import AgentConfig, ExecutionConfig, LimitOrderConfig, SniperTaskConfig, load_config
from .dispatcher import EventDispatcher
from .errors import ConfigError, EventDecodeError, InvalidOrderError, PumpSniperError
from .executor import OrderExecutor
from .models import CreateEvent, ExecutionOutcome, LimitOrder, PriorityFee, SniperTask, TradeEvent
from .pricing import PRICE_BASE, derive_amounts, implied_price
from .store import TaskStore

__all__ = [
    "AgentConfig",
    "ExecutionConfig",
    "LimitOrderConfig",
    "SniperTaskConfig",
    "load_config",
    "SniperAgent",
    "EventDispatcher",
    "OrderExecutor",
    "TaskStore",
    "CreateEvent",
    "TradeEvent",
    "ExecutionOutcome",
    "LimitOrder",
    "PriorityFee",
    "SniperTask",
    "PRICE_BASE",
    "derive_amounts",
    "implied_price",
    "ConfigError",
    "EventDecodeError",
    "InvalidOrderError",
    "PumpSniperError",
]
