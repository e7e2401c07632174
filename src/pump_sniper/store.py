import uuid
from typing import Dict, Iterable, List, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .models import LimitOrder, SniperTask
from .pricing import derive_amounts


class TaskStore:
    """Owns the registered sniper tasks and open limit orders.

    Not safe for concurrent readers: callers mutate and iterate from the
    dispatcher's single processing sequence.
    """

    def __init__(self) -> None:
        self._sniper_tasks: Dict[str, SniperTask] = {}
        self._limit_orders: Dict[str, LimitOrder] = {}

    @property
    def sniper_tasks(self) -> List[SniperTask]:
        return list(self._sniper_tasks.values())

    @property
    def limit_orders(self) -> List[LimitOrder]:
        return list(self._limit_orders.values())

    def add_sniper_task(self, buy_amount_sol: int, keypair: Keypair, ticker: Optional[str] = None) -> str:
        task = SniperTask(task_id=str(uuid.uuid4()), ticker=ticker, keypair=keypair, buy_amount_sol=buy_amount_sol)
        self._sniper_tasks[task.task_id] = task
        return task.task_id

    def remove_sniper_task(self, task_id: str) -> bool:
        return self._sniper_tasks.pop(task_id, None) is not None

    def add_limit_order(self, mint: Pubkey, amount: int, is_buy: bool, limit_price: int, keypair: Keypair) -> str:
        sol_amount, token_amount = derive_amounts(amount, is_buy, limit_price)
        order = LimitOrder(
            order_id=str(uuid.uuid4()),
            mint=mint,
            is_buy=is_buy,
            sol_amount=sol_amount,
            token_amount=token_amount,
            keypair=keypair,
        )
        self._limit_orders[order.order_id] = order
        return order.order_id

    def get_limit_order(self, order_id: str) -> Optional[LimitOrder]:
        return self._limit_orders.get(order_id)

    def remove_limit_order(self, order_id: str) -> bool:
        return self._limit_orders.pop(order_id, None) is not None

    def remove_limit_orders(self, order_ids: Iterable[str]) -> None:
        for order_id in set(order_ids):
            self._limit_orders.pop(order_id, None)
