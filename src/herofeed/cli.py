"""Command-line interface for the event feed."""

from __future__ import annotations

import argparse
import sys

from herofeed.config import NETWORKS, Settings
from herofeed.runtime import run


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description="Recent hero marketplace and arena events")
    parser.add_argument("--network", choices=list(NETWORKS), help="Sui network")
    parser.add_argument("--package-id", type=str, help="Deployed package id")
    parser.add_argument("--rpc-url", type=str, help="Full-node JSON-RPC endpoint")
    parser.add_argument("--data-source", choices=["rpc", "fixture"], help="Event source")
    parser.add_argument("--fixture", type=str, help="JSON file of recorded events")
    parser.add_argument("--timezone", type=str, help="IANA zone used for timestamps")
    parser.add_argument("--report", type=str, help="Write an HTML timeline report here")
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings."""
    overrides: dict[str, object] = {}
    if args.network:
        overrides["network"] = args.network
    if args.package_id:
        overrides["package_id"] = args.package_id.strip()
    if args.rpc_url:
        overrides["rpc_url"] = args.rpc_url.strip()
    if args.fixture:
        overrides["fixture_path"] = args.fixture
        if not args.data_source:
            overrides["data_source"] = "fixture"
    if args.data_source:
        overrides["data_source"] = args.data_source
    if args.timezone:
        overrides["display_timezone"] = args.timezone
    if args.report:
        overrides["report_path"] = args.report
    return settings.with_overrides(**overrides)


def main() -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args()
    try:
        settings = apply_cli_overrides(Settings.from_env(), args)
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        return 2
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
