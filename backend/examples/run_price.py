#!/usr/bin/env python3
"""
Example: Price options on the Gaussian grid and compare with closed forms.

Usage:
    python examples/run_price.py [--step-quality Q] [--width-quality R] [--scheme S] [--verbose]
"""

import sys
from pathlib import Path
import argparse
import logging
import traceback

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gridpricer.core.config import BlackParams, GridConfig, HullWhiteParams
from gridpricer.engines.closed_form import black_price, hw_bond_option_price
from gridpricer.models.black import black_model
from gridpricer.models.hull_white import hull_white_model
from gridpricer.pricers import american_put, bond_option, european, european_put, swap
from gridpricer.products.instruments import CashFlow, Option, Swap


def print_line(name: str, grid_value: float, exact: float = None, time_ms: float = 0.0) -> None:
    """Print one row of the report."""
    if exact is None:
        print(f"  {name:<28} {grid_value:>12.6f} {'':>12} {'':>10} {time_ms:>8.1f}")
    else:
        error = grid_value - exact
        print(f"  {name:<28} {grid_value:>12.6f} {exact:>12.6f} {error:>10.2e} {time_ms:>8.1f}")


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Price options with Black and Hull-White grid models"
    )
    parser.add_argument(
        "--step-quality", "-q",
        type=float,
        default=200.0,
        help="Inverse of the largest step of the grid"
    )
    parser.add_argument(
        "--width-quality", "-w",
        type=float,
        default=100.0,
        help="Tail quality of the width of the grid"
    )
    parser.add_argument(
        "--scheme", "-s",
        type=str,
        default="fft2",
        choices=["crankNicolson", "fft2", "fft"],
        help="Fast layer of the rollback chain"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print debug logging of the grid"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    print("=" * 78)
    print("GAUSSIAN GRID PRICER")
    print("=" * 78)

    try:
        config = GridConfig(
            step_quality=args.step_quality,
            width_quality=args.width_quality,
            scheme=args.scheme,
            power_of_two=args.scheme != "fft",
        )
        print(f"\n  {'Instrument':<28} {'Grid':>12} {'Closed form':>12} {'Error':>10} {'ms':>8}")

        # 1. Black model
        black = BlackParams()
        model = black_model(black.data(), 0.2, factory=config.brownian(uniform_steps=1))
        option = Option(number=1.0, maturity=1.0, strike=100.0)
        data = black.data()
        black_args = (data.discount(1.0), data.forward(1.0), option.strike, black.sigma)

        result = european(option, model)
        print_line("European call", result.value, black_price(*black_args), result.computation_time_ms)
        result = european_put(option, model)
        exact = black_price(*black_args, is_call=False)
        print_line("European put", result.value, exact, result.computation_time_ms)
        result = american_put(option, [0.25 * i for i in range(1, 5)], model)
        print_line("Bermudan put (4 dates)", result.value, time_ms=result.computation_time_ms)

        # 2. Hull-White model
        hw = HullWhiteParams()
        model = hull_white_model(hw.data(), 0.2, factory=config.brownian(uniform_steps=5))
        bond_call = Option(number=1.0, maturity=1.0, strike=0.92)
        result = bond_option(bond_call, 2.0, model)
        exact = hw_bond_option_price(
            hw.data().discount, hw.sigma, hw.lambda_, hw.initial_time, 1.0, 2.0, 0.92
        )
        print_line("Bond call", result.value, exact, result.computation_time_ms)

        for pay_float in (True, False):
            swap_ = Swap.from_cash_flow(CashFlow(100.0, 0.07, 0.5, 6), pay_float)
            result = swap(swap_, model)
            side = "pay float" if pay_float else "pay fixed"
            print_line(f"Swap ({side})", result.value, time_ms=result.computation_time_ms)

        return 0

    except Exception as e:
        print(f"\nERROR: {type(e).__name__}: {e}")
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
