#!/usr/bin/env python3
"""
Postbox CLI - command-line interface for the mail account store.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    accounts     Manage accounts
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli accounts list
    python -m cli accounts show alice@example.com
    python -m cli accounts export alice@example.com > alice.json
    python -m cli accounts import alice.json
"""

import sys
import argparse
from cli import accounts, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Postbox - mail account store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    accounts.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            if args.command == "accounts":
                args.func(args, Services(config))
            elif args.command == "migrate":
                args.func(args, DatabaseManager(config))
            else:
                args.func(args)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
