from typing import Iterable, List, Optional

from .models import CreateEvent, LimitOrder, SniperTask, TradeEvent
from .pricing import implied_price, quote_value


def matches_create_event(task: SniperTask, event: CreateEvent) -> bool:
    if task.ticker is None:
        return True
    return task.ticker == event.symbol


def trade_price(event: TradeEvent) -> int:
    return implied_price(event.sol_amount, event.token_amount)


def matches_trade_event(order: LimitOrder, event: TradeEvent, price: Optional[int] = None) -> bool:
    if price is None:
        price = trade_price(event)
    # both sides of the comparison are lamports for the order's token amount
    cost = quote_value(order.token_amount, price)
    if order.is_buy:
        price_matched = order.sol_amount >= cost
    else:
        price_matched = order.sol_amount < cost
    return order.mint == event.mint and price_matched


def triggered_tasks(tasks: Iterable[SniperTask], event: CreateEvent) -> List[SniperTask]:
    return [task for task in tasks if matches_create_event(task, event)]


def triggered_orders(orders: Iterable[LimitOrder], event: TradeEvent) -> List[LimitOrder]:
    price = trade_price(event)
    return [order for order in orders if matches_trade_event(order, event, price)]
