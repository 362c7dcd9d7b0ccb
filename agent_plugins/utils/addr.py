# agent_plugins/utils/addr.py
from web3 import Web3

from agent_plugins.chains import is_evm_chain


def normalize_evm_address(raw: str) -> str:
    """Strictly validate & checksum an EVM address."""
    s = (raw or "").strip()
    if "..." in s:
        raise ValueError("Ellipses ('...') are not allowed. Provide the full 42-char 0x address.")
    if not s.startswith("0x") or len(s) != 42:
        raise ValueError("Invalid address: must be 0x-prefixed and 42 characters long (0x + 40 hex).")
    try:
        return Web3.to_checksum_address(s)
    except (ValueError, TypeError):
        raise ValueError("Invalid address: not a valid hex string.")


def normalize_token_address(chain_id: str, raw: str) -> str:
    """
    EVM chains: checksum address. Solana/Tron: stripped base58 string, untouched.
    """
    if is_evm_chain(chain_id):
        return normalize_evm_address(raw)
    s = (raw or "").strip()
    if not s:
        raise ValueError("Invalid address: token address is empty.")
    if "..." in s:
        raise ValueError("Ellipses ('...') are not allowed. Provide the full token address.")
    return s


def shorten_address(address: str | None) -> str:
    """0x1234...abcd style display form."""
    a = address or ""
    if len(a) <= 10:
        return a or "n/a"
    return f"{a[:6]}...{a[-4:]}"
