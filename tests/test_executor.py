import unittest
from types import SimpleNamespace

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from pump_sniper.config import ExecutionConfig
from pump_sniper.executor import OrderExecutor, result_succeeded
from pump_sniper.models import CreateEvent, LimitOrder, PriorityFee, SniperTask

from .fakes import FakeTradingClient


class ResultSucceededTests(unittest.TestCase):
    def test_reads_mapping_and_attribute_results(self) -> None:
        self.assertTrue(result_succeeded({"success": True, "signature": "abc"}))
        self.assertFalse(result_succeeded({"success": False}))
        self.assertFalse(result_succeeded({}))
        self.assertTrue(result_succeeded(SimpleNamespace(success=True)))
        self.assertFalse(result_succeeded(SimpleNamespace(error="boom")))
        self.assertFalse(result_succeeded(None))


class OrderExecutorTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.mint = Pubkey.new_unique()
        self.keypair = Keypair()
        self.buy = LimitOrder(order_id="buy", mint=self.mint, is_buy=True, sol_amount=1_000_000, token_amount=10_000_000, keypair=self.keypair)
        self.sell = LimitOrder(order_id="sell", mint=self.mint, is_buy=False, sol_amount=2_000_000, token_amount=20_000_000, keypair=self.keypair)

    async def test_buy_spends_sol_and_sell_spends_tokens(self) -> None:
        client = FakeTradingClient()
        executor = OrderExecutor(client)

        outcomes = await executor.execute_orders([self.buy, self.sell])

        self.assertEqual([call["side"] for call in client.calls], ["buy", "sell"])
        self.assertEqual(client.calls[0]["amount"], 1_000_000)
        self.assertEqual(client.calls[1]["amount"], 20_000_000)
        for call in client.calls:
            self.assertEqual(call["slippage_bps"], 500)
            self.assertEqual(call["priority_fee"], PriorityFee(unit_limit=1000, unit_price=1_000_000))
            self.assertEqual(call["mint"], self.mint)
            self.assertIs(call["keypair"], self.keypair)
        self.assertTrue(all(outcome.success for outcome in outcomes))

    async def test_failures_do_not_stop_the_batch(self) -> None:
        third = LimitOrder(order_id="third", mint=self.mint, is_buy=True, sol_amount=5, token_amount=50, keypair=self.keypair)
        client = FakeTradingClient(results=[RuntimeError("rpc down"), {"success": False}])
        executor = OrderExecutor(client)

        with self.assertLogs("pump_sniper.executor", level="WARNING") as logs:
            outcomes = await executor.execute_orders([self.buy, self.sell, third])

        self.assertEqual(len(client.calls), 3)
        self.assertEqual([outcome.success for outcome in outcomes], [False, False, True])
        self.assertIn("rpc down", outcomes[0].error)
        self.assertIsNone(outcomes[1].error)
        self.assertTrue(any("Execute failed for orderId: sell" in line for line in logs.output))

    async def test_snipes_buy_the_created_mint(self) -> None:
        client = FakeTradingClient(results=[{"success": False}])
        executor = OrderExecutor(client, ExecutionConfig(slippage_bps=100, priority_fee=PriorityFee(unit_limit=5, unit_price=7)))
        tasks = [
            SniperTask(task_id="t1", ticker=None, keypair=self.keypair, buy_amount_sol=1_000),
            SniperTask(task_id="t2", ticker="X", keypair=self.keypair, buy_amount_sol=2_000),
        ]
        created = Pubkey.new_unique()

        outcomes = await executor.execute_snipes(tasks, CreateEvent(mint=created, symbol="X"))

        self.assertEqual([call["amount"] for call in client.calls], [1_000, 2_000])
        self.assertTrue(all(call["side"] == "buy" and call["mint"] == created for call in client.calls))
        self.assertEqual(client.calls[0]["slippage_bps"], 100)
        self.assertEqual(client.calls[0]["priority_fee"], PriorityFee(unit_limit=5, unit_price=7))
        self.assertEqual([(o.entry_id, o.success) for o in outcomes], [("t1", False), ("t2", True)])


if __name__ == "__main__":
    unittest.main()
