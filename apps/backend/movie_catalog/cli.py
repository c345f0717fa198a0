"""
Command-line interface for the movie catalog.

Provides commands for:
- setup: Create the indexes the API relies on
- status: Show document counts per collection
- seed: Load movies from a JSON file
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from pymongo.errors import PyMongoError

from .config import Config
from .database import DatabaseManager
from .models import MovieData, movie_from_fields
from .utils import format_number, print_header, print_status_table, progress_bar


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    parser = argparse.ArgumentParser(
        prog="movie_catalog",
        description="Movie catalog admin tools - set up, inspect and seed the document store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Setup (run first)
  python -m movie_catalog setup

  # Check status
  python -m movie_catalog status

  # Load movies from a JSON array
  python -m movie_catalog seed data/movies.json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "setup",
        help="Create missing indexes (unique usernames, titles, review lookups)",
    )

    subparsers.add_parser(
        "status",
        help="Show document counts",
    )

    seed_parser = subparsers.add_parser(
        "seed",
        help="Insert movies from a JSON file",
    )
    seed_parser.add_argument(
        "file",
        type=Path,
        help="JSON file containing an array of movie objects",
    )
    seed_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )

    return parser


def load_movies(path: Path) -> Tuple[List[MovieData], List[str]]:
    """
    Read and validate movies from a JSON file.

    Returns:
        Tuple of (valid movies, error messages for rejected entries)
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of movies")

    movies = []
    errors = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            errors.append(f"#{index}: not an object")
            continue
        try:
            movies.append(movie_from_fields(
                title=entry.get("title"),
                release_date=entry.get("releaseDate"),
                genre=entry.get("genre"),
                actors=entry.get("actors"),
                image_url=entry.get("imageUrl"),
                avg_rating=entry.get("avgRating"),
            ))
        except (TypeError, ValueError) as e:
            errors.append(f"#{index} ({entry.get('title', '?')}): {e}")
    return movies, errors


def cmd_setup(db: DatabaseManager) -> int:
    """Run setup command."""
    print_header("Movie Catalog Setup")

    result = db.check_and_create_indexes()

    print("\nIndexes:")
    for label in result["existing"]:
        print(f"  {label:<30} EXISTS")
    for label in result["created"]:
        print(f"  {label:<30} CREATED")

    print(f"\n{len(result['created'])} created, {len(result['existing'])} already present")
    return 0


def cmd_status(db: DatabaseManager) -> int:
    """Run status command."""
    print_header("Movie Catalog Status")
    counts = db.get_status()
    print_status_table(
        {name: format_number(count) for name, count in counts.items()},
        title="Documents",
    )
    return 0


def cmd_seed(db: DatabaseManager, args) -> int:
    """Run seed command."""
    print_header("Seed Movies")

    movies, errors = load_movies(args.file)
    for error in errors:
        print(f"  Skipped {error}")

    inserted = 0
    for movie in progress_bar(movies, total=len(movies), desc="Inserting", disable=args.no_progress):
        db.insert_movie(movie)
        inserted += 1

    print_status_table(
        {
            "inserted": format_number(inserted),
            "skipped": format_number(len(errors)),
        },
        title="Seed results",
    )
    return 0


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 0

    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}")
        print("\nMake sure your .env file contains:")
        print("  DB=<mongodb connection string>")
        print("  SECRET_KEY=<token signing secret>")
        return 1

    db = DatabaseManager(config)
    try:
        if parsed_args.command == "setup":
            return cmd_setup(db)
        elif parsed_args.command == "status":
            return cmd_status(db)
        elif parsed_args.command == "seed":
            return cmd_seed(db, parsed_args)
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        return 130
    except (OSError, ValueError, PyMongoError) as e:
        print(f"\nError: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
