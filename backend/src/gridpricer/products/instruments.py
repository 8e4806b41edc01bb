"""
Parameters of traded instruments.

Times are absolute year fractions on the same axis as the initial time of
the model.
"""

from dataclasses import dataclass
from typing import List


@dataclass
class Option:
    """
    Plain option.

    Attributes:
        number: Number of options
        maturity: Absolute maturity
        strike: Strike price
    """

    number: float
    maturity: float
    strike: float


@dataclass
class CashFlow:
    """
    Fixed cash flow paid in regular periods.

    Attributes:
        notional: Notional amount
        rate: Fixed interest rate
        period: Interval between two payments as a year fraction
        number_of_payments: Total number of payments
    """

    notional: float
    rate: float
    period: float
    number_of_payments: int

    def __post_init__(self):
        if self.period <= 0:
            raise ValueError(f"Period must be positive: {self.period}")
        if self.number_of_payments < 1:
            raise ValueError(f"At least one payment required: {self.number_of_payments}")

    def reset_times(self, initial_time: float) -> List[float]:
        """Start of every period: t0 + i period for i = 0, ..., n - 1."""
        return [initial_time + i * self.period for i in range(self.number_of_payments)]

    def payment_times(self, initial_time: float) -> List[float]:
        """End of every period: t0 + i period for i = 1, ..., n."""
        return [initial_time + (i + 1) * self.period for i in range(self.number_of_payments)]


@dataclass
class Swap(CashFlow):
    """
    Interest rate swap exchanging the fixed rate for the float rate.

    Attributes:
        pay_float: If True we pay float and receive fixed, otherwise we pay
            fixed and receive float
    """

    pay_float: bool = True

    @classmethod
    def from_cash_flow(cls, cash_flow: CashFlow, pay_float: bool = True) -> "Swap":
        return cls(
            cash_flow.notional,
            cash_flow.rate,
            cash_flow.period,
            cash_flow.number_of_payments,
            pay_float,
        )
