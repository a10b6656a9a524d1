#!/usr/bin/env python3
"""Store reset script for Studio Portal.

Replaces every collection with the bundled seed data. Useful for
resetting to a known state during development and testing.

Usage:
    python scripts/reset_db.py
    python scripts/reset_db.py --yes    # skip the confirmation prompt

WARNING: This will replace ALL existing data, client projects included!
"""
import argparse
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from studio_portal import create_app
from studio_portal.services import data_service


def main():
    """Main entry point for reset script."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--yes', action='store_true', help='do not ask for confirmation')
    args = parser.parse_args()

    app = create_app()

    with app.app_context():
        before = {name: len(records) for name, records in data_service.export_data().items()}
        total = sum(before.values())
        print(f"Store currently holds {total} records across {len(before)} collections.")

        if total > 0 and not args.yes:
            answer = input("Replace everything with seed data? [y/N]: ")
            if answer.strip().lower() != 'y':
                print("Aborted.")
                return

        after = data_service.reset_data()
        for name, records in after.items():
            print(f"  - {name}: {before.get(name, 0)} -> {len(records)}")

        print("\nReset complete!")


if __name__ == "__main__":
    main()
