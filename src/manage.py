"""Film Catalog database management CLI.

Creates and drops the database schema, and loads users and movies from a JSON
file into the directories the catalog reads from.

Usage:
    python src/manage.py setup-db                 # Create all tables
    python src/manage.py drop-db                  # Drop all tables
    python src/manage.py seed-directory data.json # Load users and movies
"""

import argparse
import json
import sys


def setup_databases():
    """Create the film catalog database schema."""
    from filmcatalog.domain import filmcatalog
    from filmcatalog.utils.db import setup_db

    print("Initializing filmcatalog domain...")
    filmcatalog.init()
    print("Creating filmcatalog database schema...")
    setup_db(filmcatalog)
    print("Done.")


def drop_databases():
    """Drop the film catalog database schema."""
    from filmcatalog.domain import filmcatalog
    from filmcatalog.utils.db import drop_db

    print("Initializing filmcatalog domain...")
    filmcatalog.init()
    print("Dropping filmcatalog database schema...")
    drop_db(filmcatalog)
    print("Done.")


def seed_directory(path):
    """Load ``{"users": [...], "movies": [...]}`` from a JSON file.

    Entries carrying an ``id`` that already exists are skipped.
    """
    from protean.exceptions import ObjectNotFoundError
    from protean.utils.globals import current_domain

    from filmcatalog.directory.movie import Movie
    from filmcatalog.directory.user import User
    from filmcatalog.domain import filmcatalog

    with open(path) as fh:
        data = json.load(fh)

    filmcatalog.init()
    created = {"users": 0, "movies": 0}

    with filmcatalog.domain_context():
        for kind, cls in (("users", User), ("movies", Movie)):
            repo = current_domain.repository_for(cls)
            for entry in data.get(kind, []):
                if kind == "movies" and isinstance(entry.get("genres"), list):
                    entry = {**entry, "genres": json.dumps(entry["genres"])}
                if entry.get("id"):
                    try:
                        repo.get(str(entry["id"]))
                        continue
                    except ObjectNotFoundError:
                        pass
                repo.add(cls(**entry))
                created[kind] += 1

    print(f"Loaded {created['users']} users and {created['movies']} movies.")


def main():
    parser = argparse.ArgumentParser(description="Film Catalog database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-directory", help="Load users and movies from a JSON file")
    seed_parser.add_argument("path", help="JSON file with `users` and `movies` arrays")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    elif args.command == "seed-directory":
        seed_directory(args.path)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
