"""Routes SDK events through matching, execution and store updates.

SDK listeners only enqueue. A single consumer task handles one event to
completion before taking the next, so the store is only ever touched from one
logical sequence and needs no lock. Execution calls have no timeout: a hung
SDK call stalls the queue.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Hashable, List, Optional

from .client import TradingClient
from .events import parse_create_event, parse_trade_event
from .executor import OrderExecutor
from .matcher import triggered_orders, triggered_tasks
from .models import CreateEvent, ExecutionOutcome, TradeEvent
from .store import TaskStore

LOG = logging.getLogger(__name__)

CREATE = "create"
TRADE = "trade"


@dataclass(frozen=True)
class QueuedEvent:
    kind: str
    payload: Any
    slot: Optional[int] = None
    signature: Optional[str] = None


class EventDispatcher:
    def __init__(self, client: TradingClient, store: TaskStore, executor: OrderExecutor) -> None:
        self.client = client
        self.store = store
        self.executor = executor
        self.queue: "asyncio.Queue[QueuedEvent]" = asyncio.Queue()
        self._listener_ids: List[Hashable] = []
        self._consumer: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._consumer is not None and not self._consumer.done()

    async def start(self) -> None:
        if self.running:
            LOG.warning("Event dispatcher already running")
            return
        self._consumer = asyncio.create_task(self._consume())
        self._listener_ids.append(self.client.add_create_event_listener(self._on_create_event))
        self._listener_ids.append(self.client.add_trade_event_listener(self._on_trade_event))
        LOG.info(f"Subscribed to create and trade events: listeners={self._listener_ids}")

    async def stop(self) -> None:
        for listener_id in self._listener_ids:
            try:
                self.client.remove_event_listener(listener_id)
            except Exception as exc:
                LOG.error(f"Failed to remove event listener {listener_id}: {exc!r}")
        self._listener_ids.clear()

        if self._consumer is not None:
            self._consumer.cancel()
            try:
                await self._consumer
            except asyncio.CancelledError:
                pass
            self._consumer = None

        dropped = 0
        while not self.queue.empty():
            self.queue.get_nowait()
            self.queue.task_done()
            dropped += 1
        if dropped:
            LOG.warning(f"Dropped {dropped} queued event(s) on stop")
        LOG.info("Event dispatcher stopped")

    async def join(self) -> None:
        await self.queue.join()

    def _on_create_event(self, event: Any, slot: Optional[int] = None, signature: Optional[str] = None) -> None:
        self.queue.put_nowait(QueuedEvent(CREATE, event, slot, signature))

    def _on_trade_event(self, event: Any, *_: Any) -> None:
        self.queue.put_nowait(QueuedEvent(TRADE, event))

    async def _consume(self) -> None:
        while True:
            queued = await self.queue.get()
            try:
                await self.process(queued)
            finally:
                self.queue.task_done()

    async def process(self, queued: QueuedEvent) -> None:
        """Handle one queued event; errors are logged, never raised."""
        try:
            if queued.kind == CREATE:
                event = parse_create_event(queued.payload)
                LOG.info(f"createEvent mint={event.mint} symbol={event.symbol} slot={queued.slot} signature={queued.signature}")
                await self.handle_create_event(event)
            elif queued.kind == TRADE:
                await self.handle_trade_event(parse_trade_event(queued.payload))
            else:
                LOG.error(f"Dropping event of unknown kind {queued.kind!r}")
        except Exception:
            LOG.exception(f"Failed to handle {queued.kind} event")

    async def handle_create_event(self, event: CreateEvent) -> List[ExecutionOutcome]:
        tasks = triggered_tasks(self.store.sniper_tasks, event)
        if not tasks:
            return []
        LOG.info(f"{len(tasks)} sniper task(s) triggered by {event.symbol} ({event.mint})")
        return await self.executor.execute_snipes(tasks, event)

    async def handle_trade_event(self, event: TradeEvent) -> List[ExecutionOutcome]:
        orders = triggered_orders(self.store.limit_orders, event)
        if not orders:
            return []
        LOG.info(f"{len(orders)} limit order(s) triggered on {event.mint}")
        try:
            return await self.executor.execute_orders(orders)
        finally:
            # attempted orders leave the book whether or not they filled
            self.store.remove_limit_orders(order.order_id for order in orders)
