#!/usr/bin/env python3
"""Print how long it takes to reach a savings goal with monthly deposits."""

from __future__ import annotations

import argparse
import logging
import math
from typing import List, Optional

from famfinance import calculations as calc
from famfinance import config
from famfinance import formatters as fmt

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("target", type=float, help="Goal amount in reais")
    parser.add_argument("--current", type=float, default=0.0, help="Amount already saved")
    parser.add_argument("--deposit", type=float, default=0.0, help="Monthly deposit")
    parser.add_argument("--rate", type=float, default=0.0, help="Monthly interest rate in percent")
    parser.add_argument("--log-level", default=None, help="Logging level (default from FAMFINANCE_LOG_LEVEL)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config.configure_logging(args.log_level)

    months = calc.calculate_time_to_goal(args.current, args.target, args.deposit, args.rate)
    if math.isinf(months):
        print(f"Goal of {fmt.format_currency(args.target)} is unreachable with these values.")
        return 1

    balance = calc.calculate_compound_interest(args.current, args.rate, int(months), args.deposit)
    logger.debug("Simulated %d months", months)
    print(f"Months to goal: {int(months)}")
    print(f"Projected balance: {fmt.format_currency(balance)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
