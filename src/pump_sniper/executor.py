import logging
from collections.abc import Mapping
from typing import Any, List, Sequence

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .client import TradingClient
from .config import ExecutionConfig
from .models import CreateEvent, ExecutionOutcome, LimitOrder, SniperTask

LOG = logging.getLogger(__name__)


def result_succeeded(result: Any) -> bool:
    if isinstance(result, Mapping):
        return bool(result.get("success", False))
    return bool(getattr(result, "success", False))


class OrderExecutor:
    """Runs buys and sells one at a time against the trading client.

    A failed or raising call is logged and recorded; it never stops the rest
    of the batch.
    """

    def __init__(self, client: TradingClient, config: ExecutionConfig = ExecutionConfig()) -> None:
        self.client = client
        self.config = config

    async def execute_orders(self, orders: Sequence[LimitOrder]) -> List[ExecutionOutcome]:
        outcomes: List[ExecutionOutcome] = []
        for order in orders:
            amount = order.sol_amount if order.is_buy else order.token_amount
            outcome = await self._execute(order.order_id, order.keypair, order.mint, order.is_buy, amount)
            if outcome.success:
                LOG.info(f"Execute success for orderId: {order.order_id}")
            else:
                LOG.warning(f"Execute failed for orderId: {order.order_id}: {outcome.error or 'unsuccessful result'}")
            outcomes.append(outcome)
        return outcomes

    async def execute_snipes(self, tasks: Sequence[SniperTask], event: CreateEvent) -> List[ExecutionOutcome]:
        outcomes: List[ExecutionOutcome] = []
        for task in tasks:
            outcome = await self._execute(task.task_id, task.keypair, event.mint, True, task.buy_amount_sol)
            if outcome.success:
                LOG.info(f"Buy success for taskId: {task.task_id} mint={event.mint} symbol={event.symbol}")
            else:
                LOG.warning(f"Buy failed for taskId: {task.task_id} mint={event.mint}: {outcome.error or 'unsuccessful result'}")
            outcomes.append(outcome)
        return outcomes

    async def _execute(self, entry_id: str, keypair: Keypair, mint: Pubkey, is_buy: bool, amount: int) -> ExecutionOutcome:
        try:
            if is_buy:
                result = await self.client.buy(keypair, mint, amount, self.config.slippage_bps, self.config.priority_fee)
            else:
                result = await self.client.sell(keypair, mint, amount, self.config.slippage_bps, self.config.priority_fee)
        except Exception as exc:
            LOG.error(f"{'Buy' if is_buy else 'Sell'} call raised for {entry_id}: {exc!r}")
            return ExecutionOutcome(entry_id=entry_id, mint=mint, is_buy=is_buy, amount=amount, success=False, error=repr(exc))

        return ExecutionOutcome(
            entry_id=entry_id,
            mint=mint,
            is_buy=is_buy,
            amount=amount,
            success=result_succeeded(result),
            result=result,
        )
