#!/usr/bin/env python3
"""
Main CLI for the dataset analysis service.
Usage: python cli.py COMMAND DATASET [options]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from analysis.dataset_service import create_default_service
from analysis.errors import AnalysisError, InvalidPayload
from ingestion.synthetic import CatalogError
from utils.config import ConfigError, load_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Statistics, trends and correlation over time-indexed datasets',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py list
  python cli.py summary marine_weather --param temperature --from 2024-01-03 --to 2024-01-05
  python cli.py trends marine_weather --param wave_height --window 14
  python cli.py correlation chemical_oceanographic --param1 salinity --param2 pH
  python cli.py export marine_weather --param wind_speed --output wind.csv
  python cli.py --payload my_dataset.json summary my_dataset --param level
        """
    )
    parser.add_argument('--payload',
                        action='append',
                        default=[],
                        help='JSON dataset file to register before running (repeatable)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('list', help='List registered datasets')

    def add_range(sub):
        sub.add_argument('dataset', help='Dataset id (e.g., marine_weather)')
        sub.add_argument('--from', dest='start', help='First date, inclusive (YYYY-MM-DD)')
        sub.add_argument('--to', dest='end', help='Last date, inclusive (YYYY-MM-DD)')

    data = subparsers.add_parser('data', help='Raw records, optionally for one parameter')
    add_range(data)
    data.add_argument('--param', help='Parameter to project')

    summary = subparsers.add_parser('summary', help='Descriptive statistics for a parameter')
    add_range(summary)
    summary.add_argument('--param', help='Parameter name')

    trends = subparsers.add_parser('trends', help='Series with trailing moving average')
    add_range(trends)
    trends.add_argument('--param', help='Parameter name')
    trends.add_argument('--window', help='Moving average window in points (default: 7)')

    correlation = subparsers.add_parser('correlation', help='Pearson correlation of two parameters')
    add_range(correlation)
    correlation.add_argument('--param1', help='First parameter')
    correlation.add_argument('--param2', help='Second parameter')

    export = subparsers.add_parser('export', help='CSV export of one parameter')
    add_range(export)
    export.add_argument('--param', help='Parameter name')
    export.add_argument('--output', help='Output file (default: stdout)')

    return parser


def run(args: argparse.Namespace, service) -> int:
    """Dispatch one command and print its result."""
    for payload_path in args.payload:
        _register_payload(service, Path(payload_path))

    if args.command == 'list':
        result = service.list_datasets()
    elif args.command == 'data':
        result = service.get_data(args.dataset, args.param, args.start, args.end)
    elif args.command == 'summary':
        result = service.summary(args.dataset, args.param, args.start, args.end)
    elif args.command == 'trends':
        result = service.trends(args.dataset, args.param, args.window, args.start, args.end)
    elif args.command == 'correlation':
        result = service.correlation(args.dataset, args.param1, args.param2, args.start, args.end)
    elif args.command == 'export':
        filename, csv_text = service.export_csv(args.dataset, args.param, args.start, args.end)
        if args.output:
            Path(args.output).write_text(csv_text + '\n', encoding='utf-8')
            logger.info(f"Wrote {filename} to {args.output}")
        else:
            print(csv_text)
        return 0
    else:
        raise ValueError(f"Unknown command: {args.command}")

    print(json.dumps(result, indent=2))
    return 0


def _register_payload(service, payload_path: Path) -> None:
    try:
        with open(payload_path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidPayload(f"Could not read payload {payload_path}: {e}") from e

    result = service.upload(payload)
    logger.info(f"Registered dataset {result['id']} from {payload_path}")


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config()
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr
    )

    try:
        service = create_default_service(config)
        return run(args, service)
    except AnalysisError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    except CatalogError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
