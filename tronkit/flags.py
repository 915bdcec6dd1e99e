"""Command-line flag value holding a Tron base58 address."""

from __future__ import annotations

from tronkit.address import Address, base58_to_address


class TronAddressFlag:
    """A flag value that only accepts valid base58 addresses."""

    def __init__(self, address: str = "") -> None:
        self.address = address

    def __str__(self) -> str:
        return self.address

    def set(self, value: str) -> None:
        """Validate and store an address; the old value is kept on error."""
        try:
            base58_to_address(value)
        except ValueError as exc:
            raise ValueError(f"not a valid one address: {exc}") from exc
        self.address = value

    def get_address(self) -> Address | None:
        """Return the decoded address, or None when unset or invalid."""
        try:
            return base58_to_address(self.address)
        except ValueError:
            return None

    def type(self) -> str:
        return "tron-address"