"""Campus Eats management CLI.

Usage:
    python src/manage.py setup-db                  # Create all tables
    python src/manage.py drop-db                   # Drop all tables
    python src/manage.py seed-owner --email owner@campus.edu --password ... --business-name "Taco Corner"
    python src/manage.py seed-admins --admin admin@campus.edu:Admin --password ...
    python src/manage.py reconcile                 # Repair half-finished approvals
"""

import argparse
import sys


def _campus():
    from campus.domain import campus

    campus.init()
    return campus


def setup_database():
    from campus.utils.db import setup_db

    campus = _campus()
    print("Creating campus database schema...")
    setup_db(campus)
    print("Done.")


def drop_database():
    from campus.utils.db import drop_db

    campus = _campus()
    print("Dropping campus database schema...")
    drop_db(campus)
    print("Done.")


def seed_owner(email, password, business_name, business_address):
    from campus.seeding import seed_owner as _seed_owner

    campus = _campus()
    with campus.domain_context():
        seeded = _seed_owner(email, password, business_name, business_address=business_address)
    print(f"Owner {email} ready: user {seeded.user_id}, cafeteria {seeded.cafeteria_id}")


def _parse_admin(value):
    email, _, name = value.partition(":")
    if not email:
        raise argparse.ArgumentTypeError(f"Expected EMAIL[:NAME], got {value!r}")
    return email, name or None


def seed_admins(admins, password):
    from campus.seeding import seed_admins as _seed_admins

    campus = _campus()
    with campus.domain_context():
        user_ids = _seed_admins(admins, password)
    for (email, _), user_id in zip(admins, user_ids, strict=True):
        print(f"Admin {email} ready: user {user_id}")


def reconcile():
    from campus.cafeteria.provisioning import reconcile_provisioning

    campus = _campus()
    with campus.domain_context():
        provisioned = reconcile_provisioning()
    print(f"Reconciled {len(provisioned)} approved owner(s).")


def main():
    parser = argparse.ArgumentParser(description="Campus Eats management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    owner_parser = subparsers.add_parser("seed-owner", help="Create an approved owner with a cafeteria")
    owner_parser.add_argument("--email", required=True)
    owner_parser.add_argument("--password", required=True)
    owner_parser.add_argument("--business-name", required=True)
    owner_parser.add_argument("--business-address", default="Main Campus")

    admins_parser = subparsers.add_parser("seed-admins", help="Create admin accounts")
    admins_parser.add_argument("--admin", dest="admins", type=_parse_admin, action="append", required=True)
    admins_parser.add_argument("--password", required=True)

    subparsers.add_parser("reconcile", help="Re-run promotion and provisioning for approved registrations")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-owner":
        seed_owner(args.email, args.password, args.business_name, args.business_address)
    elif args.command == "seed-admins":
        seed_admins(args.admins, args.password)
    elif args.command == "reconcile":
        reconcile()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
