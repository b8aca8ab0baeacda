#!/usr/bin/env python3
# src/molseqkit/presentation/cli/convert.py

"""Command-line interface for all format converters."""

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Dict, List, Optional

from tqdm import tqdm

from ...core.exceptions import ConfigurationError, ConversionError
from ...core.services import CONVERTERS, BaseConverter

logger = logging.getLogger(__name__)

STDIN = "-"


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="molseqkit",
        description="Convert sequence and structure files between formats",
    )
    parser.add_argument("tool", choices=sorted(CONVERTERS), help="Conversion to run")
    parser.add_argument("inputs", nargs="+", help="Input files ('-' reads standard input)")
    parser.add_argument(
        "-o",
        "--output",
        help="Output file for a single input, or output directory for several inputs",
    )
    parser.add_argument(
        "--option",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Converter option, e.g. --option reading_frame=-1 (repeatable)",
    )
    parser.add_argument("--seed", type=int, help="Seed for random codon choice and 3D embedding")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser


def parse_options(pairs: List[str]) -> Dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a mapping."""
    options = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(f"Option '{pair}' is not of the form KEY=VALUE")
        options[key.strip()] = value.strip()
    return options


def output_path(input_path: str, output: Optional[str], extension: str, batch: bool) -> Optional[Path]:
    """Where to write the result of one input; ``None`` means stdout."""
    if not batch:
        return Path(output) if output else None
    source = Path(input_path)
    directory = Path(output) if output else source.parent
    return directory / f"{source.stem}{extension}"


def read_input(input_path: str) -> str:
    if input_path == STDIN:
        return sys.stdin.read()
    return Path(input_path).read_text()


def convert_file(converter: BaseConverter, input_path: str, destination: Optional[Path]) -> None:
    result = converter.convert(read_input(input_path))
    if destination is None:
        sys.stdout.write(result if result.endswith("\n") or not result else result + "\n")
        return
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(result)
    logger.info("Wrote %s", destination)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the converter CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    converter_class = CONVERTERS[args.tool]
    try:
        options = converter_class.options_class.from_dict(parse_options(args.option))
    except ConfigurationError as e:
        parser.error(str(e))
    rng = random.Random(args.seed) if args.seed is not None else None
    converter = converter_class(options, rng)

    batch = len(args.inputs) > 1
    failures = 0
    for input_path in tqdm(args.inputs, desc=f"Running {args.tool}", unit="file", disable=not batch):
        destination = output_path(input_path, args.output, converter_class.output_extension, batch)
        try:
            convert_file(converter, input_path, destination)
        except (ConversionError, OSError) as e:
            failures += 1
            logger.error("Error converting %s: %s", input_path, e)

    if failures:
        logger.error("%d of %d inputs failed", failures, len(args.inputs))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
