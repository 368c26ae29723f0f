# roach/cli.py

import argparse
import logging
import sys
from typing import List, Optional

from roach import __version__, config
from roach.batch import OUTPUT_FORMATS, BatchError, BatchProcessor
from roach.client import IRRExplorerClient, IRRExplorerError
from roach.colors import ColorPalette
from roach.interactive import InteractiveSession
from roach.logger import BatchReporter, setup_logging
from roach.render import records_to_json, render_results

logger = logging.getLogger("roach.cli")


def build_parser() -> argparse.ArgumentParser:
    description = (
        "Roach - Route Origin Authorization Checker.\n"
        "Look up BGP origins, IRR route objects and RPKI status via IRRexplorer."
    )
    epilog = (
        "Examples:\n"
        "  roach                                # interactive mode\n"
        "  roach query AS13335\n"
        "  roach query 1.1.1.0/24 --json\n"
        "  roach batch prefixes.txt results.csv\n"
        "  roach --delay 0.5 batch prefixes.txt results.json --format json\n"
        "\n"
        "Interactive mode:\n"
        "  Enter ASNs (AS1), IP addresses (1.1.1.1), or CIDRs (1.1.1.0/24).\n"
        "  Page through results with n/p, q returns to the prompt.\n"
        "\n"
        "Batch mode:\n"
        "  <input>   File with IP prefixes in CIDR notation, one per line\n"
        "  <output>  Output file with subnet,origin,rpki columns\n"
        "  Note:     Only CIDR subnets are supported (no ASNs, no bare addresses)\n"
    )
    parser = argparse.ArgumentParser(
        prog="roach",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--timeout", type=float, default=config.REQUEST_TIMEOUT,
                        help=f"HTTP timeout seconds. Default: {config.REQUEST_TIMEOUT:g}")
    parser.add_argument("--delay", type=float, default=config.BATCH_DELAY,
                        help=f"Pause between batch requests in seconds. Default: {config.BATCH_DELAY:g}")
    parser.add_argument("--api-base", default=config.API_BASE,
                        help=f"IRRexplorer prefixes API base URL. Default: {config.API_BASE}")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--version", action="version", version=f"roach {__version__}")

    sub = parser.add_subparsers(dest="command", metavar="{batch,query}")

    batch = sub.add_parser("batch", help="Check a file of CIDR subnets and write a report.")
    batch.add_argument("input", help="Input file, one IPv4/IPv6 subnet in CIDR notation per line.")
    batch.add_argument("output", help="Output file.")
    batch.add_argument("--format", choices=sorted(OUTPUT_FORMATS), default="csv",
                       help="Output format. Default: csv")

    query = sub.add_parser("query", help="Run a single query and print the result.")
    query.add_argument("resource", help="ASN (AS13335), address (1.1.1.1) or prefix (1.1.1.0/24).")
    query.add_argument("--json", action="store_true", help="Output results in JSON format.")

    return parser


def run_batch(args: argparse.Namespace, client: IRRExplorerClient) -> int:
    processor = BatchProcessor(client, reporter=BatchReporter(), delay=args.delay)
    try:
        processor.process_file(args.input, args.output, output_format=args.format)
    except BatchError as e:
        logger.error(f"Batch processing failed: {e}")
        return 1
    return 0


def run_query(args: argparse.Namespace, client: IRRExplorerClient, palette: ColorPalette) -> int:
    try:
        records = client.lookup(args.resource)
    except (IRRExplorerError, ValueError) as e:
        logger.error(str(e))
        return 1
    if args.json:
        print(records_to_json(records))
    else:
        print(render_results(records, palette))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    color = not (args.no_color or config.NO_COLOR)
    setup_logging(debug=args.debug, color=color and sys.stderr.isatty())
    palette = ColorPalette(enabled=color and sys.stdout.isatty())
    client = IRRExplorerClient(base_url=args.api_base, timeout=args.timeout)

    try:
        if args.command == "batch":
            return run_batch(args, client)
        if args.command == "query":
            return run_query(args, client, palette)
        return InteractiveSession(client, palette=palette).run()
    except KeyboardInterrupt:
        print("Interrupted by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
