"""
Command-line interface for the WebVTT Subtitle Suite.

This module provides CLI functionality for rewriting and retiming WebVTT
files and for printing file statistics.
"""

import argparse
import logging
import re
import sys
from datetime import timedelta
from pathlib import Path
from typing import List, Optional, Sequence
from vttsuite.core.errors import WebVTTError
from vttsuite.core.timing_utils import TimeConverter
from vttsuite.core.vtt_reader import WebVTTReader
from vttsuite.core.vtt_writer import WebVTTWriter
from vttsuite.processors.timing_adjuster import TimingAdjuster
from vttsuite.utils.constants import APP_NAME, APP_VERSION, APP_DESCRIPTION
from vttsuite.utils.file_operations import FileHandler
from vttsuite.utils.logging_config import level_from_flags, setup_logging

logger = None  # Will be initialized in setup_cli_logging

# Options whose values may start with '-', e.g. "--offset -1500ms"
SIGNED_VALUE_OPTIONS = ('--offset', '--to')
_SIGNED_VALUE = re.compile(r'-[0-9.:]')


def setup_cli_logging(verbose: bool = False, debug: bool = False,
                      log_file: Optional[Path] = None) -> logging.Logger:
    """Set up logging for CLI operations."""
    global logger

    level = level_from_flags(verbose, debug)
    logger = setup_logging(level=level, log_file=log_file, use_colors=True)
    return logger


def attach_signed_values(argv: Sequence[str]) -> List[str]:
    """
    Join signed option values to their option, "--offset -2s" -> "--offset=-2s".

    argparse reads any argument starting with '-' as an option unless it is a
    plain negative number, so offsets like "-1500ms" need the joined form.
    """
    args = list(argv)
    joined = []
    i = 0
    while i < len(args):
        arg = args[i]
        if (arg in SIGNED_VALUE_OPTIONS and i + 1 < len(args)
                and _SIGNED_VALUE.match(args[i + 1])):
            joined.append(f"{arg}={args[i + 1]}")
            i += 2
            continue
        joined.append(arg)
        i += 1
    return joined


class SignedValueArgumentParser(argparse.ArgumentParser):
    """ArgumentParser accepting negative offsets as separate arguments."""

    def parse_known_args(self, args=None, namespace=None):
        if args is None:
            args = sys.argv[1:]
        return super().parse_known_args(attach_signed_values(args), namespace)


class CLIHandler:
    """Handles command-line interface operations."""

    def __init__(self):
        """Initialize the CLI handler."""
        self.reader = WebVTTReader()
        self.writer = WebVTTWriter()

    def create_parser(self) -> argparse.ArgumentParser:
        """
        Create the main argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = SignedValueArgumentParser(
            prog='vttsuite',
            description=APP_DESCRIPTION,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Rewrite a file canonically
  vttsuite convert episode.vtt -o clean.vtt

  # Delay every cue by 2.5 seconds
  vttsuite sync episode.vtt --offset 2.5s

  # Show every cue 1.5 seconds earlier
  vttsuite sync episode.vtt --offset -1500ms

  # Move the first cue to 00:00:50.983
  vttsuite shift-start episode.vtt --to 00:00:50.983

  # Show cue, region and style counts for a directory
  vttsuite info /media/subtitles
            """
        )

        parser.add_argument('--version', action='version', version=f'{APP_NAME} {APP_VERSION}')
        parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
        parser.add_argument('-d', '--debug', action='store_true', help='Enable debug output')
        parser.add_argument('--log-file', type=Path, help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        self._add_convert_parser(subparsers)
        self._add_sync_parser(subparsers)
        self._add_shift_start_parser(subparsers)
        self._add_info_parser(subparsers)

        return parser

    def _add_convert_parser(self, subparsers):
        """Add convert command parser."""
        convert_parser = subparsers.add_parser(
            'convert',
            help='Rewrite a WebVTT file canonically',
            description='Parse a WebVTT file and write it back in canonical form'
        )

        convert_parser.add_argument('input', type=Path, help='VTT file to convert')
        convert_parser.add_argument('-o', '--output', type=Path,
                                    help='Output file (default: overwrite input)')
        convert_parser.add_argument('--webvtt-offset', type=float, default=0.0, metavar='SECONDS',
                                    help='Write an X-TIMESTAMP-MAP header for this MPEG-TS offset')

    def _add_sync_parser(self, subparsers):
        """Add sync command parser."""
        sync_parser = subparsers.add_parser(
            'sync',
            help='Shift all cues by a fixed offset',
            description='Shift every cue of a WebVTT file by a fixed offset'
        )

        sync_parser.add_argument('input', type=Path, help='VTT file to adjust')
        sync_parser.add_argument('--offset', required=True,
                                 help="Offset, e.g. '2.5s', '-1500ms', '00:00:02.500'")
        sync_parser.add_argument('-o', '--output', type=Path,
                                 help='Output file (default: overwrite input)')
        sync_parser.add_argument('--no-backup', action='store_true',
                                 help='Do not back up the input before overwriting it')

    def _add_shift_start_parser(self, subparsers):
        """Add shift-start command parser."""
        shift_parser = subparsers.add_parser(
            'shift-start',
            help='Move the first cue to a timestamp',
            description='Shift all cues so the first one starts at the given timestamp'
        )

        shift_parser.add_argument('input', type=Path, help='VTT file to adjust')
        shift_parser.add_argument('--to', required=True, dest='target', metavar='TIMESTAMP',
                                  help="Start time for the first cue, e.g. '00:00:50.983'")
        shift_parser.add_argument('-o', '--output', type=Path,
                                  help='Output file (default: overwrite input)')
        shift_parser.add_argument('--no-backup', action='store_true',
                                  help='Do not back up the input before overwriting it')

    def _add_info_parser(self, subparsers):
        """Add info command parser."""
        info_parser = subparsers.add_parser(
            'info',
            help='Show WebVTT file statistics',
            description='Print cue, region and style counts and total duration'
        )

        info_parser.add_argument('input', type=Path, help='VTT file or directory')
        info_parser.add_argument('--no-recursive', action='store_true',
                                 help='Do not search subdirectories when INPUT is a directory')

    def handle_command(self, args) -> int:
        """
        Handle the parsed command-line arguments.

        Args:
            args: Parsed arguments from argparse

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        setup_cli_logging(args.verbose, args.debug, args.log_file)

        if not args.command:
            logger.error("No command specified. Use --help for usage information.")
            return 1

        try:
            if args.command == 'convert':
                return self._handle_convert(args)
            elif args.command == 'sync':
                return self._handle_sync(args)
            elif args.command == 'shift-start':
                return self._handle_shift_start(args)
            elif args.command == 'info':
                return self._handle_info(args)
            else:
                logger.error(f"Unknown command: {args.command}")
                return 1

        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 1
        except Exception as e:
            logger.error(f"Unexpected error: {e}")
            if args.debug:
                import traceback
                traceback.print_exc()
            return 1

    def _handle_convert(self, args) -> int:
        """Handle convert command."""
        if not args.input.exists():
            logger.error(f"Input file not found: {args.input}")
            return 1

        try:
            document = self.reader.parse_file(args.input)
        except (OSError, WebVTTError) as e:
            logger.error(f"Cannot convert {args.input}: {e}")
            return 1

        output_path = args.output or args.input
        offset = timedelta(seconds=args.webvtt_offset)
        self.writer.write_file(document, output_path, offset,
                               create_backup=output_path == args.input)

        logger.info(f"Successfully converted: {args.input} -> {output_path}")
        return 0

    def _handle_sync(self, args) -> int:
        """Handle sync command."""
        if not args.input.exists():
            logger.error(f"Input file not found: {args.input}")
            return 1

        adjuster = TimingAdjuster(create_backup=not args.no_backup)
        try:
            offset = adjuster.parse_offset_string(args.offset)
        except ValueError as e:
            logger.error(str(e))
            return 1

        success = adjuster.adjust_by_offset(args.input, offset, args.output)
        return 0 if success else 1

    def _handle_shift_start(self, args) -> int:
        """Handle shift-start command."""
        if not args.input.exists():
            logger.error(f"Input file not found: {args.input}")
            return 1

        adjuster = TimingAdjuster(create_backup=not args.no_backup)
        success = adjuster.adjust_first_cue_to(args.input, args.target, args.output)
        return 0 if success else 1

    def _handle_info(self, args) -> int:
        """Handle info command."""
        if args.input.is_dir():
            files = FileHandler.find_subtitle_files(args.input, recursive=not args.no_recursive)
            if not files:
                logger.error(f"No VTT files found in {args.input}")
                return 1
        elif args.input.exists():
            files = [args.input]
        else:
            logger.error(f"Input not found: {args.input}")
            return 1

        failures = 0
        for file_path in files:
            if not self._print_file_info(file_path):
                failures += 1

        return 1 if failures else 0

    def _print_file_info(self, file_path: Path) -> bool:
        try:
            document = self.reader.parse_file(file_path)
        except (OSError, WebVTTError) as e:
            logger.error(f"Cannot read {file_path}: {e}")
            return False

        duration = document.duration()
        print(f"{file_path}")
        print(f"  Cues: {len(document.cues)}")
        print(f"  Regions: {len(document.regions)}")
        print(f"  Styles: {len(document.styles)}")
        print(f"  Duration: {TimeConverter.format_timestamp(duration)} "
              f"({TimeConverter.format_duration(duration.total_seconds())})")
        return True


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    cli = CLIHandler()
    parser = cli.create_parser()
    args = parser.parse_args(argv)

    exit_code = cli.handle_command(args)
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
