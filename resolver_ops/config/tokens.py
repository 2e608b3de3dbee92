"""
Token configurations for the Resolver tooling.

Known tokens per chain (symbol -> address/decimals) and helpers that convert
human amounts to on-chain integer units.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext

from eth_utils import is_address, to_checksum_address

# Addresses are stored lowercase and checksummed on lookup
TOKEN_CONFIG: dict[str, dict[str, dict]] = {
    "polygon": {
        "USDC": {
            "name": "USD Coin (PoS)",
            "address": "0x2791bca1f2de4661ed88a30c99a7a9449aa84174",
            "decimals": 6,
        },
        "USDT": {
            "name": "Tether USD (PoS)",
            "address": "0xc2132d05d31c914a87c6611c10748aeb04b58e8f",
            "decimals": 6,
        },
        "DAI": {
            "name": "Dai Stablecoin (PoS)",
            "address": "0x8f3cf7ad23cd3cadbd9735aff958023239c6a063",
            "decimals": 18,
        },
        "LINK": {
            "name": "ChainLink Token",
            "address": "0x53e0bca35ec356bd5dddfebbd1fc0fd03fabad39",
            "decimals": 18,
        },
        "WMATIC": {
            "name": "Wrapped Matic",
            "address": "0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270",
            "decimals": 18,
        },
        "WETH": {
            "name": "Wrapped Ether",
            "address": "0x7ceb23fd6bc0add59e62ac25578270cff1b9f619",
            "decimals": 18,
        },
    },
}

# Quote used by the resolver script when no tokens are given
DEFAULT_QUOTE = {
    "from": "USDC",
    "to": "USDT",
    "amount": "10",
}


@dataclass(frozen=True)
class TokenInfo:
    address: str
    symbol: str | None = None
    decimals: int | None = None


def resolve_token(token: str, chain: str) -> TokenInfo:
    """Resolve a token symbol or address for a chain.

    Known symbols (case-insensitive) return their configured address and
    decimals. A raw address returns the configured entry when known, otherwise
    a TokenInfo with unknown decimals.

    Raises:
        ValueError: If the value is neither a known symbol nor an address.
    """
    tokens = TOKEN_CONFIG.get(chain, {})
    symbol = token.upper()
    if symbol in tokens:
        info = tokens[symbol]
        return TokenInfo(to_checksum_address(info["address"]), symbol, info["decimals"])

    if not is_address(token):
        raise ValueError(f"Unknown token {token!r} on {chain}; pass a symbol from {sorted(tokens)} or an address")

    for sym, info in tokens.items():
        if info["address"].lower() == token.lower():
            return TokenInfo(to_checksum_address(info["address"]), sym, info["decimals"])
    return TokenInfo(to_checksum_address(token))


def parse_units(amount: str | int | Decimal, decimals: int) -> int:
    """Scale a human amount to integer token units.

    ``parse_units("10", 6) == 10_000000``. Amounts with more fractional
    digits than ``decimals`` and negative amounts are rejected.
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as err:
        raise ValueError(f"Invalid amount: {amount!r}") from err
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    if value < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")

    with localcontext() as ctx:
        # wide enough that scaling never rounds
        ctx.prec = max(100, len(value.as_tuple().digits) + decimals)
        scaled = value.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"Amount {amount} has more than {decimals} decimal places")
        return int(scaled)


def format_units(amount: int, decimals: int) -> str:
    """Format integer token units as a plain decimal string."""
    with localcontext() as ctx:
        ctx.prec = 100
        value = Decimal(int(amount)).scaleb(-decimals)
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
