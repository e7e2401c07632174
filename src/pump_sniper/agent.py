from typing import List, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .client import TradingClient
from .config import ExecutionConfig
from .dispatcher import EventDispatcher
from .executor import OrderExecutor
from .models import LimitOrder, SniperTask
from .store import TaskStore


class SniperAgent:
    def __init__(self, client: TradingClient, execution_config: ExecutionConfig = ExecutionConfig()) -> None:
        self.client = client
        self.store = TaskStore()
        self.executor = OrderExecutor(client, execution_config)
        self.dispatcher = EventDispatcher(client, self.store, self.executor)

    @property
    def sniper_tasks(self) -> List[SniperTask]:
        return self.store.sniper_tasks

    @property
    def limit_orders(self) -> List[LimitOrder]:
        return self.store.limit_orders

    def register_sniper_task(self, buy_amount_sol: int, keypair: Keypair, ticker: Optional[str] = None) -> str:
        return self.store.add_sniper_task(buy_amount_sol, keypair, ticker)

    def unregister_sniper_task(self, task_id: str) -> bool:
        return self.store.remove_sniper_task(task_id)

    def register_limit_order(self, mint: Pubkey, amount: int, is_buy: bool, limit_price: int, keypair: Keypair) -> str:
        return self.store.add_limit_order(mint, amount, is_buy, limit_price, keypair)

    def cancel_limit_order(self, order_id: str) -> bool:
        return self.store.remove_limit_order(order_id)

    async def start(self) -> None:
        await self.dispatcher.start()

    async def stop(self) -> None:
        await self.dispatcher.stop()

    async def join(self) -> None:
        await self.dispatcher.join()
