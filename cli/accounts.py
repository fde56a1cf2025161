#!/usr/bin/env python3

import sys
from pathlib import Path

from models.account import Account
from provider.contract import AccountCapabilities
from logger import get_logger

logger = get_logger()


def _capability_names(account: Account):
    return [
        name
        for name, flag in vars(AccountCapabilities).items()
        if not name.startswith("_") and account.supports_capability(flag)
    ]


def cmd_list(args, services):
    """List all accounts in the store."""
    accounts = services.accounts.find_all()

    if not accounts:
        logger.info("No accounts found.")
        return

    logger.info("\nAccounts:")
    logger.info("=" * 80)
    for account in accounts:
        logger.info(f"Name: {account.name}")
        logger.info(f"URI: {account.uri}")
        logger.info(f"Provider version: {account.provider_version}")
        logger.info(f"Capabilities: {', '.join(_capability_names(account)) or 'none'}")
        logger.info("-" * 80)

    logger.info(f"\nTotal accounts: {len(accounts)}")


def cmd_show(args, services):
    """Print every field of one account."""
    account = services.accounts.find_by_name(args.name)
    if account is None:
        logger.error(f"Account '{args.name}' not found.")
        sys.exit(1)

    for part in str(account).split(","):
        logger.info(part)


def cmd_export(args, services):
    """Print the serialized form of one account."""
    account = services.accounts.find_by_name(args.name)
    if account is None:
        logger.error(f"Account '{args.name}' not found.")
        sys.exit(1)

    print(account.serialize())


def cmd_import(args, services):
    """Store an account read from a serialized account file."""
    serialized = Path(args.file).read_text(encoding="utf-8")

    account = Account.new_instance(serialized, logger=logger)
    if account is None:
        logger.error(f"{args.file} does not contain a valid account.")
        sys.exit(1)

    stored = services.accounts.create(account)
    logger.info(f"\n✓ Imported account {stored.name}")


def cmd_delete(args, services):
    """Delete an account by name."""
    if not services.accounts.delete(args.name):
        logger.error(f"Account '{args.name}' not found.")
        sys.exit(1)

    logger.info(f"✓ Deleted account {args.name}")


def setup_parser(subparsers):
    """Setup accounts subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "accounts",
        help="Manage accounts",
        description="List, inspect, import and export mail accounts",
    )

    accounts_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available account commands",
        dest="subcommand",
        required=True,
    )

    list_parser = accounts_subparsers.add_parser("list", help="List all accounts")
    list_parser.set_defaults(func=cmd_list)

    show_parser = accounts_subparsers.add_parser("show", help="Show one account")
    show_parser.add_argument("name", help="Account name")
    show_parser.set_defaults(func=cmd_show)

    export_parser = accounts_subparsers.add_parser(
        "export", help="Print an account in its serialized form"
    )
    export_parser.add_argument("name", help="Account name")
    export_parser.set_defaults(func=cmd_export)

    import_parser = accounts_subparsers.add_parser(
        "import", help="Import an account from a serialized account file"
    )
    import_parser.add_argument("file", help="Path to a file written by 'export'")
    import_parser.set_defaults(func=cmd_import)

    delete_parser = accounts_subparsers.add_parser("delete", help="Delete an account")
    delete_parser.add_argument("name", help="Account name")
    delete_parser.set_defaults(func=cmd_delete)
