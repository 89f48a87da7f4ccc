#!/usr/bin/env python3
"""
Seed demo cooks, menus and a customer account.

Usage:
    python scripts/seed_catalog.py [--reset] [--file cooks.json]

The optional JSON file is a list of {"user": {...}, "profile": {...}, "menu": [...]}
entries in the same shape as homebite.services.seed_service.DEMO_COOKS.
"""
import argparse
import json
import logging

from homebite.db import SessionLocal, init_db
from homebite.services.seed_service import DEMO_PASSWORD, seed_demo_data


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--reset", action="store_true", help="drop and recreate all tables first")
    parser.add_argument("--file", help="JSON file with cooks to seed instead of the built-in demo set")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    init_db(reset=args.reset)

    cooks = None
    if args.file:
        with open(args.file, "r", encoding="utf-8") as fh:
            cooks = json.load(fh)

    db = SessionLocal()
    try:
        created = seed_demo_data(db, cooks)
    finally:
        db.close()
    print(f"Seeded {created}. Demo accounts use password '{DEMO_PASSWORD}'.")


if __name__ == "__main__":
    main()
