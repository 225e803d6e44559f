#!/usr/bin/env python3
"""
Offline Subscription Merge Script

Runs the same fetch / normalize / merge / health-check flow as the
/api/merge-subscriptions endpoint and writes the merged config to a file.

Usage:
    python -m submerge.scripts.merge_subscriptions URL [URL ...] --output merged.json
    python -m submerge.scripts.merge_subscriptions "URL1,URL2" --no-health
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from submerge.services.aggregator import SubscriptionAggregator, parse_source_urls

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_summary(config: dict):
    """
    Print a human-readable summary of the merged config.
    """
    sites = config["api_site"]
    ok = sum(1 for s in sites.values() if s.get("healthy") == "ok")
    checked = sum(1 for s in sites.values() if "healthy" in s)

    print("\n" + "=" * 60, file=sys.stderr)
    print("MERGED SUBSCRIPTION", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Sites':20} {len(sites):5}", file=sys.stderr)
    print(f"{'Parses':20} {len(config['parse_site']):5}", file=sys.stderr)
    print(f"{'Lives':20} {len(config['live_site']):5}", file=sys.stderr)
    if checked:
        print(f"{'Healthy sites':20} {ok:5} / {checked}", file=sys.stderr)

        failed = [(k, s["healthy"]) for k, s in sites.items() if s.get("healthy") != "ok"][:10]
        if failed:
            print("\nUNHEALTHY SITES (sample):", file=sys.stderr)
            for key, status in failed:
                print(f"   - {key}: {status}", file=sys.stderr)

    print("=" * 60, file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Merge subscription configs")
    parser.add_argument(
        "urls",
        nargs="+",
        help="Subscription URLs (comma-separated values are split too)"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout)"
    )
    parser.add_argument(
        "--no-health",
        action="store_true",
        help="Skip the site health probe"
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    urls = [u for raw in args.urls for u in parse_source_urls(raw)]
    if not urls:
        print("No subscription URLs given", file=sys.stderr)
        return 2

    aggregator = SubscriptionAggregator()
    config = await aggregator.aggregate(urls, check_health=not args.no_health)

    print_summary(config)

    body = json.dumps(config, ensure_ascii=False, indent=2)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(body, encoding="utf-8")
        print(f"\nMerged config saved to: {output_path}", file=sys.stderr)
    else:
        print(body)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
