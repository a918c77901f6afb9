"""Command-line entry point for chordchart.

Renders one chord diagram from fingering shorthand (and optionally a YAML or
JSON config file) to an SVG file or stdout.
"""

import logging
import sys
from argparse import ArgumentParser, Namespace
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import yaml

from chordchart.base import ChordChartException, ConfigError
from chordchart.config import FretboardConfig, parse_tuning, resolve_config
from chordchart.instruments import Instrument, parse_instrument, tuning_for
from chordchart.layout import layout_fretboard
from chordchart.parser import parse_fingering
from chordchart.printer import print_fingering
from chordchart.svg import render_svg, save_svg


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        An ArgumentParser configured with all the command-line options.
    """
    parser = ArgumentParser(prog="chordchart", description=__doc__)
    parser.add_argument(
        "fingering",
        nargs="?",
        help='fingering shorthand, e.g. "1:0 2:1@1 3-5:2@2 6:x" or "#x32010"',
    )
    parser.add_argument("-o", "--output", help="SVG file to write (default stdout)")
    parser.add_argument("--config", help="YAML or JSON file with diagram settings")
    parser.add_argument("--strings", type=int)
    parser.add_argument("--frets", type=int)
    tuning = parser.add_mutually_exclusive_group()
    tuning.add_argument(
        "--instrument",
        help="tuning preset: " + ", ".join(inst.slug for inst in Instrument),
    )
    tuning.add_argument("--tuning", help='pitch names low to high, e.g. "E,A,D,G,B,E"')
    parser.add_argument("--show-fret-labels", action="store_true", default=None)
    parser.add_argument("--show-notes", action="store_true", default=None)
    parser.add_argument("--starting-fret", type=int)
    parser.add_argument("--log-level", default="WARNING")
    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def load_config_file(path: str) -> FretboardConfig:
    """Read a YAML (or JSON) mapping and resolve it against the defaults.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse config {path}: {e}") from e
    return resolve_config(raw if raw is not None else {})


def build_config(args: Namespace) -> FretboardConfig:
    """Combine the config file and command-line flags into one config.

    Flags override file settings. An instrument preset sets both tuning
    and string count unless --strings is also given.
    """
    config = load_config_file(args.config) if args.config else FretboardConfig()
    if args.instrument is not None:
        config = config.with_instrument(parse_instrument(args.instrument))
    elif args.tuning is not None:
        config = replace(config, tuning=parse_tuning(args.tuning))
    changes = {
        "strings": args.strings,
        "frets": args.frets,
        "show_fret_labels": args.show_fret_labels,
        "show_notes": args.show_notes,
        "starting_fret": args.starting_fret,
    }
    config = resolve_config(
        {k: v for k, v in changes.items() if v is not None}, defaults=config
    )
    if args.fingering is not None:
        config = replace(
            config, fingering=parse_fingering(args.fingering, config.strings)
        )
    if config.show_notes and config.tuning is None:
        # Fall back to the standard tuning for the guitar default
        if config.strings == len(tuning_for(Instrument.StandardGuitar)):
            config = replace(config, tuning=tuning_for(Instrument.StandardGuitar))
    logging.info("Fingering: %s", print_fingering(config.fingering))
    return config


def run(argv: Optional[List[str]] = None) -> int:
    """Run the command line and return the process exit status."""
    parser = make_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    try:
        config = build_config(args)
        drawing = layout_fretboard(config)
        if args.output:
            save_svg(drawing, Path(args.output))
        else:
            sys.stdout.write(render_svg(drawing))
            sys.stdout.write("\n")
    except ChordChartException as e:
        logging.error("%s", e)
        return 2
    return 0


def main() -> None:
    """Main entry point for the chordchart command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
