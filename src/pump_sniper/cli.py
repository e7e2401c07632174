import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from solders.pubkey import Pubkey

from .agent import SniperAgent
from .config import LOG_LEVELS, AgentConfig, load_config, resolve_factory
from .errors import ConfigError, InvalidOrderError
from .keys import load_keypair
from .log import configure_logging

LOG = logging.getLogger(__name__)


def build_agent(config: AgentConfig) -> SniperAgent:
    factory = resolve_factory(config.client_factory)
    client = factory(config.rpc_url, config.commitment)
    keypair = load_keypair(config.keypair_path)
    agent = SniperAgent(client, config.execution)

    for task in config.sniper_tasks:
        task_id = agent.register_sniper_task(task.buy_amount_sol, keypair, task.ticker)
        LOG.info(f"Registered sniper task {task_id} ticker={task.ticker or '*'} amount={task.buy_amount_sol}")

    for order in config.limit_orders:
        try:
            mint = Pubkey.from_string(order.mint)
        except ValueError:
            raise ConfigError(f"limit order mint is not a valid public key: {order.mint!r}") from None
        try:
            order_id = agent.register_limit_order(mint, order.amount, order.is_buy, order.limit_price, keypair)
        except InvalidOrderError as exc:
            raise ConfigError(f"limit order on {order.mint} rejected: {exc}") from exc
        LOG.info(
            f"Registered limit order {order_id} {'BUY' if order.is_buy else 'SELL'} "
            f"mint={order.mint} amount={order.amount} limit_price={order.limit_price}"
        )
    return agent


async def run(agent: SniperAgent) -> None:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    await agent.start()
    LOG.info("Sniper agent online")
    try:
        await stop.wait()
    finally:
        LOG.info("Shutting down sniper agent...")
        await agent.stop()


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Launchpad sniper and limit order agent")
    parser.add_argument("--config", type=Path, default=Path("config/sniper.yaml"))
    parser.add_argument("--env-file", type=Path, default=Path(".env"), help="Optional dotenv file to load")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Overrides log_level from the config file",
    )
    args = parser.parse_args(argv)

    load_dotenv(args.env_file)
    configure_logging(args.log_level or "INFO")
    try:
        config = load_config(args.config)
        configure_logging(args.log_level or config.log_level, config.log_file)
        agent = build_agent(config)
    except ConfigError as exc:
        LOG.error(str(exc))
        return 1

    asyncio.run(run(agent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
