import unittest

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from pump_sniper.errors import InvalidOrderError
from pump_sniper.store import TaskStore


class TaskStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = TaskStore()
        self.keypair = Keypair()
        self.mint = Pubkey.new_unique()

    def test_limit_order_is_stored_with_derived_amounts(self) -> None:
        order_id = self.store.add_limit_order(self.mint, 1_000_000, True, 100_000_000, self.keypair)

        order = self.store.get_limit_order(order_id)
        self.assertIsNotNone(order)
        self.assertEqual(order.mint, self.mint)
        self.assertTrue(order.is_buy)
        self.assertEqual(order.sol_amount, 1_000_000)
        self.assertEqual(order.token_amount, 10_000_000)

    def test_ids_are_unique(self) -> None:
        ids = {self.store.add_limit_order(self.mint, 1_000, True, 1_000, self.keypair) for _ in range(20)}
        ids |= {self.store.add_sniper_task(1_000, self.keypair) for _ in range(20)}

        self.assertEqual(len(ids), 40)

    def test_invalid_order_is_not_stored(self) -> None:
        with self.assertRaises(InvalidOrderError):
            self.store.add_limit_order(self.mint, 1_000, True, 0, self.keypair)

        self.assertEqual(self.store.limit_orders, [])

    def test_remove_limit_orders_ignores_absent_ids(self) -> None:
        keep = self.store.add_limit_order(self.mint, 1_000, True, 1_000, self.keypair)
        drop = self.store.add_limit_order(self.mint, 2_000, False, 1_000, self.keypair)
        kept_before = self.store.get_limit_order(keep)

        self.store.remove_limit_orders({drop, "missing"})
        self.store.remove_limit_orders([drop])

        self.assertEqual([order.order_id for order in self.store.limit_orders], [keep])
        self.assertIs(self.store.get_limit_order(keep), kept_before)

    def test_remove_single_order_reports_presence(self) -> None:
        order_id = self.store.add_limit_order(self.mint, 1_000, True, 1_000, self.keypair)

        self.assertTrue(self.store.remove_limit_order(order_id))
        self.assertFalse(self.store.remove_limit_order(order_id))

    def test_sniper_tasks_persist_until_removed(self) -> None:
        first = self.store.add_sniper_task(1_000, self.keypair, "GREENZ")
        second = self.store.add_sniper_task(2_000, self.keypair)

        self.assertEqual([task.task_id for task in self.store.sniper_tasks], [first, second])
        self.assertEqual(self.store.sniper_tasks[0].ticker, "GREENZ")
        self.assertIsNone(self.store.sniper_tasks[1].ticker)

        self.assertTrue(self.store.remove_sniper_task(first))
        self.assertFalse(self.store.remove_sniper_task(first))
        self.assertEqual([task.task_id for task in self.store.sniper_tasks], [second])

    def test_accessors_return_snapshots(self) -> None:
        self.store.add_limit_order(self.mint, 1_000, True, 1_000, self.keypair)
        snapshot = self.store.limit_orders
        snapshot.clear()

        self.assertEqual(len(self.store.limit_orders), 1)


if __name__ == "__main__":
    unittest.main()
