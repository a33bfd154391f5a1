"""
Command-line driver.

Reads an id,treatment,outcome,covariate CSV, fits the treatment
regression, writes the summary to a results file and logs progress and
memory usage to a log file.

Usage:
    python -m pytreatreg --data data.csv --output results.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
import tracemalloc
from pathlib import Path

from pytreatreg import __version__
from pytreatreg.core.compute.timing import Timer
from pytreatreg.core.datasource import DataSource
from pytreatreg.core.exceptions import PyTreatRegError
from pytreatreg.regression.design import Design
from pytreatreg.regression.inference import RSS_METHODS
from pytreatreg.regression.solvers import fit

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pytreatreg",
        description="Fit outcome ~ treatment + covariate and report OLS inference "
                    "with counterfactual means.",
    )
    parser.add_argument("--data", type=Path, default=Path("data.csv"),
                        help="input CSV with a header row (default: data.csv)")
    parser.add_argument("--output", type=Path, default=Path("results.txt"),
                        help="results file to write (default: results.txt)")
    parser.add_argument("--log-file", type=Path, default=Path("app.log"),
                        help="log file, appended to (default: app.log)")
    parser.add_argument("--treatment", default="treatment", help="treatment column name")
    parser.add_argument("--outcome", default="outcome", help="outcome column name")
    parser.add_argument("--covariate", default="covariate", help="covariate column name")
    parser.add_argument("--solver", choices=("inverse", "cholesky"), default="inverse",
                        help="normal-equations solver (default: inverse)")
    parser.add_argument("--rss-method", choices=RSS_METHODS, default="reference",
                        help="residual sum of squares formula (default: reference)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug records from the library")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(log_file: Path, verbose: bool = False) -> logging.Handler:
    """Attach a file handler to the root logger and set the package log level."""
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    logging.getLogger("pytreatreg").setLevel(logging.DEBUG if verbose else logging.INFO)
    logging.getLogger().addHandler(handler)
    return handler


def log_memory_usage(stage: str) -> None:
    """Report current and peak traced allocations in MiB to the log and stdout."""
    current, peak = tracemalloc.get_traced_memory()
    message = (
        f"{stage}: current = {current / 1024 / 1024:.2f} MiB, "
        f"peak = {peak / 1024 / 1024:.2f} MiB"
    )
    logger.info(message)
    print(message)


def run(args: argparse.Namespace) -> int:
    """Execute one fit. Returns the process exit status."""
    with Timer() as timer:
        logger.info("Starting application")
        log_memory_usage("Initial memory usage")

        try:
            source = DataSource.from_file(args.data)
            logger.info("Read %d rows from %s", source.n_observations, args.data)
            log_memory_usage("Memory usage after reading CSV")

            design = Design.from_datasource(
                source,
                treatment=args.treatment,
                outcome=args.outcome,
                covariate=args.covariate,
            )
            log_memory_usage("Memory usage after parsing CSV")

            solution = fit(design, solver=args.solver)
            log_memory_usage("Memory usage after fitting model")

            report = solution.analyze(rss_method=args.rss_method)
            for w in report.warnings:
                logger.warning(w)

            args.output.write_text(report.summary(), encoding="utf-8")
            logger.info("Wrote results to %s", args.output)
        # pandas' EmptyDataError and ParserError are ValueErrors
        except (PyTreatRegError, KeyError, OSError, ValueError) as e:
            logger.error("Fit failed: %s", e)
            print(f"error: {e}", file=sys.stderr)
            return 1

        logger.info("Application finished")
        log_memory_usage("Final memory usage")

    print(f"Execution time: {timer.total_seconds:.6f}s")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    handler = configure_logging(args.log_file, args.verbose)
    tracemalloc.start()
    try:
        return run(args)
    finally:
        tracemalloc.stop()
        logging.getLogger().removeHandler(handler)
        handler.close()
