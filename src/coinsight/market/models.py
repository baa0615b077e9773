from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class AssetQuote(BaseModel):
    """A single tracked asset's latest price."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Provider identifier, e.g. 'bitcoin'")
    name: str = Field(description="Human readable name, e.g. 'Bitcoin'")
    symbol: str = Field(description="Ticker symbol as reported by the provider, e.g. 'btc'")
    price: Decimal = Field(description="Current price in USD")

    @property
    def display_symbol(self) -> str:
        """Upper-cased ticker symbol."""
        return self.symbol.upper()

    @property
    def display_price(self) -> str:
        """Price in plain positional notation with no trailing zeros.

        ``65000.0`` renders as ``65000`` and ``1.2e-7`` as ``0.00000012``;
        exponent notation is never shown.
        """
        return format(self.price.normalize(), "f")

    def label(self) -> str:
        """Format as ``Name (SYM): $price``."""
        return f"{self.name} ({self.display_symbol}): ${self.display_price}"


# Wholesale-replaced on every poll; an empty tuple means "no data".
MarketSnapshot = tuple[AssetQuote, ...]
