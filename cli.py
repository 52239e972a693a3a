#!/usr/bin/env python3
"""
Main CLI for the hedge story dashboard.
Usage: python cli.py story [FILE] [options]
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import Any, Dict, List

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from hedge_analytics.config import load_story_config, ConfigError
from hedge_analytics.records import Record
from hedge_analytics.story import build_story_from_config
from ingestion.delimited_reader import read_records, DelimitedReadError
from ingestion.demo_data import demo_records
from reports.atomic_writer import write_story_outputs
from reports.chart_specs import build_chart_specs
from reports.formatters import format_index_level, format_kpi_value
from reports.kpi_cards import render_kpi_cards

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        description='Derive the hedge story views from a strategy CSV/TSV file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py story
  python cli.py story data/hedges.csv --output-dir ./out
  python cli.py story data/hedges.tsv --format json
  python cli.py kpis data/hedges.csv
        """
    )
    parser.add_argument('--config', help='Path to story YAML config (default: ./config/story.yml)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    story = subparsers.add_parser('story', help='Build every view and write story.json + kpis.md')
    story.add_argument('file', nargs='?', help='CSV or TSV file (default: built-in demo data)')
    story.add_argument('--output-dir', help='Output directory (default: from config)')
    story.add_argument('--format',
                       choices=['summary', 'json'],
                       default='summary',
                       help='Console output format (default: summary)')
    story.add_argument('--quiet', '-q', action='store_true', help='Minimal output')

    kpis = subparsers.add_parser('kpis', help='Print KPI cards as Markdown')
    kpis.add_argument('file', nargs='?', help='CSV or TSV file (default: built-in demo data)')

    return parser


def main(argv: List[str] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        config = load_story_config(args.config)
        records = _load_records(args.file)
    except (ConfigError, DelimitedReadError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    story = build_story_from_config(records, config)

    if args.command == 'kpis':
        print(render_kpi_cards(story['kpis']))
        return 0

    return _run_story(args, config, story)


def _load_records(file_arg: str) -> List[Record]:
    if file_arg is None:
        logger.info("No data file given; using built-in demo data")
        return demo_records()
    return read_records(file_arg)


def _run_story(args: argparse.Namespace, config: Dict[str, Any], story: Dict[str, Any]) -> int:
    charts = build_chart_specs(story, palette=config['palette'])
    output_dir = Path(args.output_dir or config['output_dir'])

    result = write_story_outputs(
        story=story,
        charts=charts,
        kpi_markdown=render_kpi_cards(story['kpis']),
        output_dir=output_dir
    )

    if result['status'] != 'completed':
        print(f"ERROR: Write failed: {result['error']}", file=sys.stderr)
        return 1

    if args.format == 'json':
        print(json.dumps(story, indent=2))
    elif args.quiet:
        print(f"Story written: {result['story_path']}")
    else:
        _show_summary(story)
        print(f"Story: {result['story_path']}")
        print(f"KPIs:  {result['kpi_path']}")

    return 0


def _show_summary(story: Dict[str, Any]):
    """Show a concise console summary of the story."""
    print(f"Hedge story ({story['record_count']} records)")
    print("=" * 50)

    for curve in story['equity_curves']:
        final = curve['data'][-1] if curve['data'] else None
        print(f"  {curve['label']:<12} final index {format_index_level(final)} "
              f"({len(curve['data'])} points)")

    print()
    for kpi in story['kpis']:
        print(f"  {kpi['strategy']:<12} CAGR {format_kpi_value(kpi['cagr'])}  "
              f"Vol {format_kpi_value(kpi['vol'])}  "
              f"Max DD {format_kpi_value(kpi['max_drawdown'])}")

    print()
    print(f"  Rolling correlation points: {len(story['correlation']['values'])}")
    print()


if __name__ == '__main__':
    sys.exit(main())
