#!/usr/bin/env python3
"""
Vinyl Chart - Main CLI Entry Point
==================================

Runs the four-phase pipeline once and writes the chart:

    Phase 1: Data Loading       -- read the ranked song table (CSV file or URL)
    Phase 2: Geometry Transform -- ordinal within release year + glyph size
    Phase 3: Layer Composition  -- ordered drawing primitives (12 layers)
    Phase 4: Render & Export    -- matplotlib polar figure written to disk

Usage:
    python run.py --file songs.csv                 # Local input file
    python run.py --url https://example.org/x.csv  # Fetch the table over HTTP
    python run.py --file songs.csv --output chart.pdf --scale 2.0

Exit status is 0 on success and 1 on any data, config or render error.
"""

import logging
import sys
import argparse
import tempfile
import time
from pathlib import Path

from vinyl_chart.core.config import OUTPUT_FILE, GLYPH_SCALE, FIGURE_DPI
from vinyl_chart.core.exceptions import VinylChartError


# ==========================================
# PATH VALIDATION
# ==========================================
# User-supplied paths are resolved and checked against an allowlist of
# directories (project root, home directory, system temp directory).

def validate_file_path(path: str, must_exist: bool = False) -> Path:
    """
    Validate a file path from the command line.

    Args:
        path: Raw file path string from a CLI argument.
        must_exist: When True, raise ValueError unless the resolved path is
                    an existing file (used for the input table).

    Returns:
        A fully-resolved Path object within the allowed directories.

    Raises:
        ValueError: If the path is malformed, outside allowed directories,
                    or is not an existing file when must_exist is True.
    """
    try:
        resolved = Path(path).resolve()

        if must_exist and not resolved.exists():
            raise ValueError(f"File not found: {path}")
        if must_exist and not resolved.is_file():
            raise ValueError(f"Not a file: {path}")

        allowed_roots = [
            Path(__file__).parent.resolve(),
            Path.home().resolve(),
            Path(tempfile.gettempdir()).resolve(),
        ]
        if not any(resolved == root or root in resolved.parents for root in allowed_roots):
            raise ValueError(f"Path outside allowed directories: {path}")

        return resolved

    except Exception as e:
        raise ValueError(f"Invalid file path '{path}': {e}")


# ==========================================
# LOGGING
# ==========================================
# A DEBUG-level log file per run under logs/, plus a console handler that
# shows warnings (or info with --verbose).

def setup_logging(verbose: bool = False, log_dir: Path = None):
    """
    Configure the root logger with file and console handlers.

    Args:
        verbose: When True, lower the console handler to INFO level.
        log_dir: Directory for the log file (defaults to ./logs next to run.py).

    Returns:
        Path: Absolute path to the newly created log file.
    """
    log_dir = Path(log_dir) if log_dir else Path(__file__).parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = time.strftime('%Y%m%d_%H%M%S')
    log_file = log_dir / f"vinyl_chart_{timestamp}.log"

    file_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # setup_logging may run more than once per process
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # matplotlib's font manager is very chatty at DEBUG
    logging.getLogger('matplotlib').setLevel(logging.WARNING)

    return log_file


logger = logging.getLogger(__name__)


# ==========================================
# CLI
# ==========================================

def parse_args(argv=None):
    """
    Parse and return command-line arguments.

    Returns:
        argparse.Namespace with the parsed flags.
    """
    parser = argparse.ArgumentParser(
        description='Vinyl Chart - ranked songs drawn as a vinyl record',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py --file songs.csv             Local input file
  python run.py --url https://host/top.csv   Download the table
  python run.py -f songs.csv -o chart.svg    Vector output
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--file', '-f',
        type=str,
        help='Input CSV file'
    )
    source.add_argument(
        '--url',
        type=str,
        help='Download the input CSV from this URL'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default=OUTPUT_FILE,
        help='Output file; the suffix selects the format (png, pdf, svg)'
    )

    parser.add_argument(
        '--scale',
        type=float,
        default=GLYPH_SCALE,
        help=f'Glyph scale divisor (default: {GLYPH_SCALE})'
    )

    parser.add_argument(
        '--dpi',
        type=int,
        default=FIGURE_DPI,
        help=f'Resolution for raster output (default: {FIGURE_DPI})'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed logging output'
    )

    return parser.parse_args(argv)


def run_pipeline(source, output_file, scale=GLYPH_SCALE, dpi=FIGURE_DPI):
    """
    Run the chart pipeline.

    Returns:
        bool: True if the chart was written, False on any pipeline error.
    """
    from vinyl_chart.pipeline import main_pipeline

    try:
        path = main_pipeline(source, output_file, scale=scale, dpi=dpi)
    except VinylChartError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"\n❌ {type(e).__name__}: {e}")
        return False

    logger.info(f"Chart written to {path}")
    return True


def main(argv=None):
    """Parse CLI args, validate paths and run the pipeline."""
    args = parse_args(argv)
    log_file = setup_logging(verbose=args.verbose)
    logger.debug(f"Logging to {log_file}")

    try:
        if args.url:
            source = args.url
        else:
            source = validate_file_path(args.file, must_exist=True)
        output = validate_file_path(args.output)
    except ValueError as e:
        logger.error(str(e))
        print(f"❌ {e}")
        sys.exit(1)

    try:
        success = run_pipeline(source, output, scale=args.scale, dpi=args.dpi)
    except KeyboardInterrupt:
        print("\n\n\U0001f44b Cancelled by user.")
        sys.exit(0)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
