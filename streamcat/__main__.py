"""Entry point of the streamcat package. Enables python -m streamcat."""

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from streamcat.etl.pipeline import AnalysisResult


def positive_int(value: str) -> int:
    """Argparse type accepting integers >= 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def run_pipeline(
    output_dir: Path | None,
    fmt: str | None,
    top: int | None,
    min_year: int | None,
    export: bool,
) -> None:
    """Run the full pipeline and print every result relation."""
    from streamcat.etl.analytics import AnalyticsEngine, DivisivePolicy
    from streamcat.etl.loaders import ReportWriter
    from streamcat.etl.pipeline import run_analysis
    from streamcat.settings import settings

    analysis = settings.analysis
    policy = DivisivePolicy(
        min_count=analysis.divisive_min_count,
        prior_weight=analysis.divisive_prior_weight,
        top_n=top if top is not None else analysis.divisive_top_n,
    )
    engine = AnalyticsEngine(min_year=min_year, policy=policy)
    writer = ReportWriter(output_dir=output_dir, fmt=fmt) if export else None

    result = run_analysis(analytics=engine, writer=writer)

    print_quality(result)
    for name, frame in result.analytics.frames().items():
        print(f"\n{name.upper()}")
        print(frame)

    if result.written:
        print("\nWritten files:")
        for name, path in result.written.items():
            print(f"  - {name}: {path}")


def run_audit_only() -> None:
    """Load, unify and print the quality audit."""
    from streamcat.etl.pipeline import run_audit

    print_quality(run_audit())


def print_quality(result: "AnalysisResult") -> None:
    """Print the quality audit of an analysis result."""
    summary = result.quality.to_dict()
    print("\nQUALITY AUDIT")
    print("-" * 40)
    for key, value in summary.items():
        print(f"  {key:<16} {value:>8}")
    print("-" * 40)
    print(result.missing_by_service)


def show_sources() -> None:
    """Print the configured sources."""
    from streamcat.settings import print_sources_status

    print_sources_status()


def main() -> None:
    """Main CLI."""
    parser = argparse.ArgumentParser(
        description="Streaming catalog analytics - union, audit and score divergence",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m streamcat run                         # Full pipeline, CSV reports
  python -m streamcat run --format parquet --top 20
  python -m streamcat audit                       # Missing-value audit only
  python -m streamcat sources                     # Configured sources
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    run_parser = subparsers.add_parser("run", help="Full pipeline")
    run_parser.add_argument("--output-dir", type=Path)
    run_parser.add_argument("--format", choices=["csv", "parquet", "json"])
    run_parser.add_argument("--top", type=positive_int, help="Keep the N most divisive titles")
    run_parser.add_argument("--min-year", type=int, help="First year for divergence queries")
    run_parser.add_argument("--no-export", action="store_true", help="Print only")

    subparsers.add_parser("audit", help="Quality audit only")
    subparsers.add_parser("sources", help="Show configured sources")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    from streamcat.etl.extractors import LoadError

    try:
        if args.command == "run":
            run_pipeline(
                args.output_dir,
                args.format,
                args.top,
                args.min_year,
                export=not args.no_export,
            )
        elif args.command == "audit":
            run_audit_only()
        elif args.command == "sources":
            show_sources()
    except LoadError as e:
        print(f"Load failed: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()
