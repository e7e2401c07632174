import json
from pathlib import Path

from solders.keypair import Keypair

from .errors import ConfigError


def parse_keypair(raw: str) -> Keypair:
    """Accept a Solana CLI JSON byte array or a base58 secret key."""
    raw = raw.strip()
    try:
        if raw.startswith("["):
            return Keypair.from_bytes(bytes(json.loads(raw)))
        return Keypair.from_base58_string(raw)
    except (ValueError, TypeError) as exc:
        raise ConfigError(f"keypair is neither a JSON byte array nor a base58 secret: {exc}") from exc


def load_keypair(path: Path) -> Keypair:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"keypair file not found: {path}") from None
    return parse_keypair(raw)
