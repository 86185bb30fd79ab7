#!/usr/bin/env python3
"""
Trip Comparison Example

This example demonstrates:
- Resolving a distance from the packaged route catalog
- Ranking every transport mode against the car baseline
- Pricing the carbon credits that offset the chosen mode
- Falling back to a manual distance for unknown routes
"""

import asyncio

from trip_carbon.config_loader import load_config
from trip_carbon.errors import NotFoundError
from trip_carbon.trip import TripCalculator


def print_estimate(estimate):
    """Print a trip estimate in a compact, readable layout."""
    print(f"{estimate.origin} -> {estimate.destination}")
    print(f"  distance: {estimate.distance_km:.0f} km ({estimate.distance_source})")
    print(f"  {estimate.mode_label}: {estimate.emission_kg:.2f} kg CO2")
    print(f"  saved vs car: {estimate.savings.saved_kg:.2f} kg", end="")
    if estimate.savings.percentage is not None:
        print(f" ({estimate.savings.percentage:.2f}%)")
    else:
        print()

    print("  ranking:")
    for entry in estimate.comparison:
        pct = entry.percentage_vs_baseline
        pct_text = f"{pct:.2f}% of car" if pct is not None else "n/a"
        print(f"    {entry.mode:<8} {entry.emission_kg:>8.2f} kg  {pct_text}")

    credits = estimate.credits
    print(
        f"  credits: {credits.credits:.4f} "
        f"(R$ {credits.price_min:.2f} - R$ {credits.price_max:.2f}, "
        f"avg R$ {credits.price_average:.2f})"
    )


async def main():
    calculator = TripCalculator.from_config(load_config())

    print("Known locations:", ", ".join(calculator.resolver.list_all_locations()[:5]), "...")
    print()

    estimate = await calculator.calculate_async(
        "São Paulo, SP", "rio de janeiro, rj", "bus", delay_seconds=0.5
    )
    print_estimate(estimate)
    print()

    try:
        calculator.calculate("Gramado, RS", "Canela, RS", "bicycle")
    except NotFoundError as exc:
        print(f"{exc}; using a manual distance instead")
        print_estimate(calculator.calculate("Gramado, RS", "Canela, RS", "bicycle", 8))


if __name__ == "__main__":
    asyncio.run(main())
