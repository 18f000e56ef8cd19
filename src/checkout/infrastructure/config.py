"""Runtime settings read from the environment.

Nothing in the domain or application layers reads the environment;
only the composition root does, through ``load_settings()``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_ENDPOINT = "http://localhost/backend/payments.php"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float | None = None  # None waits for the backend indefinitely
    cart_file: Path = _DATA_DIR / "cart.json"


def _parse_timeout(raw: str) -> float | None:
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"CHECKOUT_TIMEOUT must be a number of seconds, got {raw!r}")
    if value <= 0:
        raise ValueError(f"CHECKOUT_TIMEOUT must be positive, got {raw!r}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ

    endpoint = env.get("CHECKOUT_ENDPOINT", "").strip() or DEFAULT_ENDPOINT
    timeout = _parse_timeout(env.get("CHECKOUT_TIMEOUT", ""))
    cart_file = env.get("CHECKOUT_CART_FILE", "").strip()

    return Settings(
        endpoint=endpoint,
        timeout=timeout,
        cart_file=Path(cart_file) if cart_file else Settings.cart_file,
    )
