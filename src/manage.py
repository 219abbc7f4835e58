"""Academy database management CLI.

Creates and drops the database schema of the academy domain using
``academy.utils.db``. Only SQL providers (sqlite, postgresql) have a schema;
with the in-memory default the commands are no-ops.

Usage:
    python src/manage.py setup-db                  # Create all tables
    python src/manage.py drop-db                   # Drop all tables
    python src/manage.py setup-db --env production # Use the production overlay
"""

import argparse
import os
import sys


def _domain(env):
    if env:
        os.environ["PROTEAN_ENV"] = env

    from academy.domain import academy

    academy.init()
    return academy


def setup_database(env=None):
    """Create the database schema for every SQL provider of the domain."""
    from academy.utils.db import setup_db

    domain = _domain(env)
    print(f"Creating {domain.name} database schema...")
    setup_db(domain)
    print("Done.")


def drop_database(env=None):
    """Drop the database schema for every SQL provider of the domain."""
    from academy.utils.db import drop_db

    domain = _domain(env)
    print(f"Dropping {domain.name} database schema...")
    drop_db(domain)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Academy database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--env", help="Config overlay to apply (sets PROTEAN_ENV)")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database(args.env)
    elif args.command == "drop-db":
        drop_database(args.env)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
