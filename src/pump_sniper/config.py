import importlib
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError
from .models import PriorityFee
from .pricing import PRICE_BASE

SLIPPAGE_BASIS_POINTS = 500
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
RPC_URL_ENV = "HELIUS_RPC_URL"
RPC_URL_HELP = (
    f"Please set {RPC_URL_ENV} in .env file or rpc_url in the config file. "
    f"Example: {RPC_URL_ENV}=https://mainnet.helius-rpc.com/?api-key=<your api key> "
    "(get one at https://www.helius.dev)"
)


@dataclass(frozen=True)
class ExecutionConfig:
    slippage_bps: int = SLIPPAGE_BASIS_POINTS
    priority_fee: PriorityFee = field(default_factory=PriorityFee)


@dataclass(frozen=True)
class SniperTaskConfig:
    buy_amount_sol: int
    ticker: Optional[str] = None


@dataclass(frozen=True)
class LimitOrderConfig:
    mint: str
    amount: int
    is_buy: bool
    limit_price: int


@dataclass(frozen=True)
class AgentConfig:
    rpc_url: str
    client_factory: str
    keypair_path: Path
    commitment: str = "finalized"
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    sniper_tasks: Tuple[SniperTaskConfig, ...] = ()
    limit_orders: Tuple[LimitOrderConfig, ...] = ()
    log_level: str = "INFO"
    log_file: Optional[Path] = None


def _int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _limit_price(entry: Mapping[str, Any], name: str) -> int:
    if "limit_price" in entry:
        return _int(entry["limit_price"], f"{name}.limit_price")
    if "price" not in entry:
        raise ConfigError(f"{name} needs limit_price (scaled by {PRICE_BASE}) or price (SOL per token)")
    try:
        price = Decimal(str(entry["price"]))
    except InvalidOperation:
        raise ConfigError(f"{name}.price is not a decimal number: {entry['price']!r}") from None
    if not price.is_finite():
        raise ConfigError(f"{name}.price must be a finite decimal number, got {entry['price']!r}")
    return int(price * PRICE_BASE)


def _side(value: Any, name: str) -> bool:
    side = str(value).lower()
    if side not in ("buy", "sell"):
        raise ConfigError(f"{name}.side must be 'buy' or 'sell', got {value!r}")
    return side == "buy"


def parse_execution(raw: Optional[Mapping[str, Any]]) -> ExecutionConfig:
    raw = raw or {}
    fee = raw.get("priority_fee") or {}
    defaults = PriorityFee()
    return ExecutionConfig(
        slippage_bps=_int(raw.get("slippage_bps", SLIPPAGE_BASIS_POINTS), "execution.slippage_bps"),
        priority_fee=PriorityFee(
            unit_limit=_int(fee.get("unit_limit", defaults.unit_limit), "execution.priority_fee.unit_limit"),
            unit_price=_int(fee.get("unit_price", defaults.unit_price), "execution.priority_fee.unit_price"),
        ),
    )


def parse_config(raw: Optional[Mapping[str, Any]], environ: Optional[Mapping[str, str]] = None) -> AgentConfig:
    raw = raw or {}
    environ = os.environ if environ is None else environ

    rpc_url = environ.get(RPC_URL_ENV) or raw.get("rpc_url")
    if not rpc_url:
        raise ConfigError(RPC_URL_HELP)
    if not raw.get("client_factory"):
        raise ConfigError("client_factory is required, e.g. client_factory: my_sdk.factory:build_client")
    if not raw.get("keypair_path"):
        raise ConfigError("keypair_path is required and must point at a Solana keypair JSON file")

    tasks = []
    for index, entry in enumerate(raw.get("sniper_tasks") or []):
        name = f"sniper_tasks[{index}]"
        if "buy_amount_sol" not in entry:
            raise ConfigError(f"{name}.buy_amount_sol is required (lamports)")
        ticker = entry.get("ticker")
        tasks.append(
            SniperTaskConfig(
                buy_amount_sol=_int(entry["buy_amount_sol"], f"{name}.buy_amount_sol"),
                ticker=None if ticker is None else str(ticker),
            )
        )

    orders = []
    for index, entry in enumerate(raw.get("limit_orders") or []):
        name = f"limit_orders[{index}]"
        for key in ("mint", "amount", "side"):
            if key not in entry:
                raise ConfigError(f"{name}.{key} is required")
        orders.append(
            LimitOrderConfig(
                mint=str(entry["mint"]),
                amount=_int(entry["amount"], f"{name}.amount"),
                is_buy=_side(entry["side"], name),
                limit_price=_limit_price(entry, name),
            )
        )

    log_level = str(raw.get("log_level", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {raw['log_level']!r}")

    log_file = raw.get("log_file")
    return AgentConfig(
        rpc_url=str(rpc_url),
        client_factory=str(raw["client_factory"]),
        keypair_path=Path(raw["keypair_path"]),
        commitment=str(raw.get("commitment", "finalized")),
        execution=parse_execution(raw.get("execution")),
        sniper_tasks=tuple(tasks),
        limit_orders=tuple(orders),
        log_level=log_level,
        log_file=Path(log_file) if log_file else None,
    )


def load_config(config_path: Path, environ: Optional[Mapping[str, str]] = None) -> AgentConfig:
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            raw: Dict[str, Any] = yaml.safe_load(fh) or {}
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {config_path}") from None
    except yaml.YAMLError as exc:
        raise ConfigError(f"config file {config_path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"config file {config_path} must contain a mapping")
    return parse_config(raw, environ)


def resolve_factory(spec: str) -> Callable[..., Any]:
    """Import ``package.module:callable`` and return the callable."""
    module_name, _, attr = spec.partition(":")
    if not module_name or not attr:
        raise ConfigError(f"client_factory must look like 'module:callable', got {spec!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"cannot import client factory module {module_name!r}: {exc}") from exc
    try:
        factory = getattr(module, attr)
    except AttributeError:
        raise ConfigError(f"{module_name!r} has no attribute {attr!r}") from None
    if not callable(factory):
        raise ConfigError(f"client factory {spec!r} is not callable")
    return factory
