#!/usr/bin/env python3
"""
================================================================================
CLI - Command Line Interface
================================================================================

Runs the cost basis engine over a CoinTracking trade history export.

Commands:
    run <file>                  Classify the history and compute sales
    run <file> summary          ... and print bucket/error/gain summary
    run <file> export           ... and write SALES.csv plus the cost basis
                                    records for unmatched deposits to outputs/
    run <file> summary 500      Only process the first 500 transactions

Exit Status:
    0 - run completed (recoverable problems are reported, not fatal)
    1 - missing/unreadable input or an unclassifiable transaction

Usage:
    python cli.py run trades.csv summary
    python cli.py --help

Author: Crypto Transaction Tracker Team
Last Modified: December 2025
================================================================================
"""

import sys
import argparse
from pathlib import Path

from cost_basis.core.classifier import UnknownTransactionTypeError, calculate
from cost_basis.core.report import build_summary, export_results, format_summary
from cost_basis.processors.ingestor import IngestError, read_transactions
from cost_basis.processors.price_fetcher import PriceFetcher
from cost_basis.utils.config import EngineSettings, PricingSettings, load_config
from cost_basis.utils.constants import OUTPUT_DIR
from cost_basis.utils.logger import set_run_context

USAGE = """Please specify a file.

Usage:
  python cli.py run [transactions.csv] [summary|export] [sample_size]"""


# ANSI color codes
class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def print_header(text):
    """Print formatted header"""
    print(f"\n{Colors.BOLD}{Colors.BLUE}{'=' * 70}{Colors.ENDC}")
    print(f"{Colors.BOLD}{Colors.CYAN}{text:^70}{Colors.ENDC}")
    print(f"{Colors.BOLD}{Colors.BLUE}{'=' * 70}{Colors.ENDC}\n")


def print_success(text):
    """Print success message"""
    print(f"{Colors.GREEN}✓{Colors.ENDC} {text}")


def print_error(text):
    """Print error message"""
    print(f"{Colors.RED}✗{Colors.ENDC} {text}", file=sys.stderr)


def print_warning(text):
    """Print warning message"""
    print(f"{Colors.YELLOW}!{Colors.ENDC} {text}")


def _sample_size(value):
    try:
        size = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"sample size must be a whole number, got {value!r}")
    if size <= 0:
        raise argparse.ArgumentTypeError("sample size must be positive")
    return size


def cmd_run(args):
    """Classify a history; optionally print the summary or export reports"""
    if not args.file:
        print_error(USAGE)
        return False

    config = load_config(Path(args.config) if args.config else None)
    settings = EngineSettings.from_config(config)
    fetcher = PriceFetcher(PricingSettings.from_config(config))

    try:
        txs = read_transactions(args.file, sample_size=args.sample_size)
    except IngestError as e:
        print_error(str(e))
        return False

    try:
        result = calculate(txs, fetcher, settings)
    except UnknownTransactionTypeError as e:
        print_error(str(e))
        return False

    if args.report == 'summary':
        print_header("COST BASIS SUMMARY")
        print(format_summary(build_summary(result, len(txs))))
    elif args.report == 'export':
        out_dir = Path(args.output) if args.output else OUTPUT_DIR
        for path in export_results(result, out_dir):
            print_success(f"Wrote {path}")

    problems = (len(result.no_available_purchases) + len(result.no_matching_withdrawals) +
                len(result.price_errors))
    if problems:
        print_warning(f"{problems} transaction(s) need manual review (see log)")
    return True


def build_parser():
    parser = argparse.ArgumentParser(
        description='Crypto Cost Basis - realized gains from a trade history export',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  %(prog)s run trades.csv                # Classify only
  %(prog)s run trades.csv summary        # Print bucket counts and gains
  %(prog)s run trades.csv summary 100    # Summarize the first 100 transactions
  %(prog)s run trades.csv export         # Write reports to outputs/
        '''
    )
    parser.add_argument('--config', help='Path to config.json (default: configs/config.json)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    parser_run = subparsers.add_parser('run', help='Process a transaction export')
    parser_run.add_argument('file', nargs='?', help='CoinTracking CSV export')
    parser_run.add_argument('report', nargs='?', choices=['summary', 'export'],
                            help='Print a summary or export reports')
    parser_run.add_argument('sample_size', nargs='?', type=_sample_size,
                            help='Only process the first N transactions')
    parser_run.add_argument('--output', help='Export directory (default: outputs/)')
    parser_run.set_defaults(func=cmd_run)
    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, show help
    if not args.command:
        parser.print_help()
        return 1

    set_run_context('cli')
    try:
        success = args.func(args)
        return 0 if success else 1
    except KeyboardInterrupt:
        print_error("\nOperation cancelled by user")
        return 130


if __name__ == '__main__':
    sys.exit(main())
