"""Product definitions: options, cash flows and swaps."""

from gridpricer.products.instruments import CashFlow, Option, Swap

__all__ = [
    "CashFlow",
    "Option",
    "Swap",
]
