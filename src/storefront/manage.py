"""Storefront management CLI.

Creates and drops database schemas for the storefront domains, and
registers administrator accounts (which cannot be created over HTTP).

Usage:
    python -m storefront.manage setup-db             # Create all tables
    python -m storefront.manage drop-db              # Drop all tables
    python -m storefront.manage create-admin --name Ada --email ada@example.com [--password ...]
"""

import argparse
import getpass
import sys
from datetime import timedelta

from storefront.config import Settings
from storefront.db import drop_db, setup_db
from storefront.domains import DOMAINS, init_domains


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    for name, domain in init_domains(domains).items():
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    for name, domain in init_domains(domains).items():
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def create_admin(name, email, password, settings=None):
    """Register an administrator and print a bearer token for it."""
    from identity.access.passwords import BcryptPasswordHasher
    from identity.access.tokens import JwtAccessTokens
    from identity.customer.customer import Role
    from identity.customer.registration import RegisterCustomer

    settings = settings or Settings.from_env()
    identity = init_domains(["identity"])["identity"]
    with identity.domain_context():
        admin_id = identity.process(
            RegisterCustomer(
                name=name,
                email=email,
                password_hash=BcryptPasswordHasher(rounds=settings.password_hash_rounds).hash(password),
                role=Role.ADMIN.value,
            ),
            asynchronous=False,
        )

    tokens = JwtAccessTokens(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.token_ttl_hours),
    )
    print(f"Administrator {admin_id} registered.")
    print(f"Token: {tokens.issue(admin_id)}")
    return admin_id


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=list(DOMAINS),
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=list(DOMAINS),
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    admin_parser = subparsers.add_parser("create-admin", help="Register an administrator account")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", help="Prompted for when omitted")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "create-admin":
        create_admin(args.name, args.email, args.password or getpass.getpass("Password: "))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
