#!/usr/bin/env python3
"""Seed data script for Studio Portal.

Writes the bundled starter content into every collection that is still
empty, then optionally adds randomly generated demo client projects so
the dashboard has enough data to show (one per deadline band: overdue,
due within three days, comfortably ahead).

Usage:
    python scripts/seed_data.py [--demo N]

The script is idempotent for the bundled content: collections that
already hold records are left alone. Use reset_db.py to start over.
"""
import argparse
import random
import sys
from datetime import date, timedelta
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from studio_portal import create_app
from studio_portal.models import TaskStatus
from studio_portal.seed import seed_collections
from studio_portal.services import report_service
from studio_portal.store import store


# Sample data constants
CLIENTS = [
    "Harbor City Council",
    "Brightline Energy",
    "Orchid Health",
    "Summit Outdoor Co",
    "Meridian Museum Trust",
]

TASK_TITLES = [
    "Kickoff workshop",
    "Content inventory",
    "Wireframes review",
    "API integration",
    "Accessibility audit",
    "Load testing",
    "Stakeholder demo",
    "Launch checklist",
]

OWNERS = ["Sarah Chen", "James Wilson", "Elena Rodriguez", "Yuki Tanaka"]


def generate_tasks(count: int) -> list[dict]:
    """Generate a random task list."""
    titles = random.sample(TASK_TITLES, k=min(count, len(TASK_TITLES)))
    today = date.today()
    return [
        {
            'title': title,
            'status': random.choice(TaskStatus.ALL),
            'owner': random.choice(OWNERS),
            'due_date': (today + timedelta(days=random.randint(-10, 30))).isoformat(),
        }
        for title in titles
    ]


def create_demo_client_projects(count: int, project_ids: list[str]) -> list[dict]:
    """Generate demo client project data dictionaries.

    End dates cycle through overdue, due soon and comfortably ahead so
    every derived status shows up.
    """
    today = date.today()
    end_offsets = [-5, 2, 45]
    projects = []
    for i in range(count):
        client = random.choice(CLIENTS)
        projects.append({
            'name': f"{client} Engagement {i + 1}",
            'client_name': client,
            'project_id': random.choice(project_ids),
            'budget_used': random.randint(10, 95),
            'start_date': (today - timedelta(days=random.randint(30, 120))).isoformat(),
            'end_date': (today + timedelta(days=end_offsets[i % len(end_offsets)])).isoformat(),
            'tasks': generate_tasks(random.randint(3, 6)),
        })
    return projects


def seed_empty_collections() -> dict[str, int]:
    """Write seed records into collections that have none persisted.

    Returns:
        Collection name -> number of records written (skipped ones omitted).
    """
    written = {}
    for name, records in seed_collections().items():
        if store.backend.load(name) or not records:
            continue
        store.collection(name).replace_all(records)
        written[name] = len(records)
    return written


def main():
    """Main entry point for seed script."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--demo', type=int, default=0,
                        help='number of random demo client projects to add')
    args = parser.parse_args()

    app = create_app()

    with app.app_context():
        print(f"Seeding the {store.backend.name} store...")
        written = seed_empty_collections()
        if not written:
            print("Every collection already has data.")
            print("To reseed, run: python scripts/reset_db.py")
        for name, count in written.items():
            print(f"  - {name}: {count}")

        if args.demo > 0:
            project_ids = [p['id'] for p in store.collection('projects').list()] or ['p1']
            client_projects = store.collection('client_projects')
            for data in create_demo_client_projects(args.demo, project_ids):
                client_projects.create(data)
            print(f"Created {args.demo} demo client projects.")

        # Print summary
        stats = report_service.get_portfolio_stats()
        print(f"  - Client projects: {stats['total_projects']}")
        print(f"  - Average progress: {stats['average_progress']}%")
        print(f"  - Completion rate: {stats['completion_rate']}%")

        print("\nSeed complete!")


if __name__ == "__main__":
    main()
