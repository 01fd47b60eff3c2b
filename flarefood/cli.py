"""CLI commands for Flare Food."""

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from flarefood.config import settings
from flarefood.database import SessionLocal
from flarefood.services.correlation_service import CorrelationService
from flarefood.services.data import DataAccessError, SqlDataSource


def analyze() -> None:
    """Run correlation analysis and store the results."""
    db: Session = SessionLocal()

    try:
        service = CorrelationService.from_settings(SqlDataSource(db))
        try:
            results = service.run_analysis()
        except DataAccessError as e:
            print(f"Error: Correlation analysis failed: {e}")
            sys.exit(1)

        significant = [r for r in results if r.is_significant]
        print(
            f"Analysis complete: {len(results)} correlations, "
            f"{len(significant)} significant."
        )
        for result in sorted(significant, key=lambda r: r.correlation_coefficient, reverse=True):
            print(
                f"  {result.food.name} -> {result.symptom_type.value}: "
                f"{result.correlation_coefficient:+.2f} (p={result.p_value:.3f}, "
                f"n={result.sample_size}, {result.strength.value.lower()})"
            )

    finally:
        db.close()


def list_significant() -> None:
    """Print stored significant correlations."""
    db: Session = SessionLocal()

    try:
        try:
            correlations = SqlDataSource(db).fetch_significant_correlations(
                settings.significance_threshold
            )
        except DataAccessError as e:
            print(f"Error: {e}")
            sys.exit(1)

        if not correlations:
            print("No significant correlations found.")
            return

        for correlation in correlations:
            print(f"{correlation.food.name}: {correlation.formatted_description}")

    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Flare Food CLI")
    parser.add_argument(
        "--log-level", default=settings.log_level, help="Logging level (default: %(default)s)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "analyze", help="Run food-symptom correlation analysis"
    )
    subparsers.add_parser(
        "significant", help="List stored significant correlations"
    )

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    if args.command == "analyze":
        analyze()
    elif args.command == "significant":
        list_significant()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
