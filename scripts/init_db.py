"""
Database Initialization Script

Creates the catalog tables and optionally loads a small sample catalog.

Usage:
    python scripts/init_db.py [--drop] [--seed] [--database-url URL]
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.exc import IntegrityError

from config.config import Config
from movie_catalog.database import Database
from movie_catalog.models import Actor, Genre, Movie

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SAMPLE_GENRES = [
    ("Comedy", 1),
    ("Drama", 2),
    ("Science Fiction", 3),
    ("Animation", 4),
    ("Action", 5),
]

# title, rating, awards, release_date, length, genre
SAMPLE_MOVIES = [
    ("Avatar", "7.9", 3, date(2010, 10, 4), 120, "Science Fiction"),
    ("Titanic", "7.7", 11, date(1997, 9, 4), 320, "Drama"),
    ("The Lord of the Rings: The Fellowship of the Ring", "8.8", 4, date(2001, 12, 19), 178, "Action"),
    ("Toy Story", "8.3", 1, date(1995, 11, 22), 81, "Animation"),
    ("Back to the Future", "8.5", 1, date(1985, 7, 3), 116, "Science Fiction"),
    ("The Intouchables", "8.5", 2, date(2011, 11, 2), 112, "Comedy"),
]

# first_name, last_name, rating, movies, favorite
SAMPLE_ACTORS = [
    ("Sam", "Worthington", "7.5", ["Avatar"], "Avatar"),
    ("Leonardo", "DiCaprio", "9.0", ["Titanic"], "Titanic"),
    ("Kate", "Winslet", "8.1", ["Titanic"], None),
    ("Elijah", "Wood", "8.3", ["The Lord of the Rings: The Fellowship of the Ring"], None),
    ("Tom", "Hanks", "8.6", ["Toy Story"], "Toy Story"),
    ("Michael J.", "Fox", "8.4", ["Back to the Future"], "Back to the Future"),
    ("Omar", "Sy", "8.0", ["The Intouchables"], None),
]


def seed(database: Database) -> None:
    """Insert the sample catalog unless movies already exist"""
    session = database.session()
    try:
        if session.query(Movie).count():
            logger.info("Catalog already has movies, skipping seed")
            return

        genres = {name: Genre(name=name, ranking=ranking) for name, ranking in SAMPLE_GENRES}
        session.add_all(genres.values())

        movies = {}
        for title, rating, awards, released, length, genre_name in SAMPLE_MOVIES:
            movies[title] = Movie(
                title=title,
                rating=rating,
                awards=awards,
                release_date=released,
                length=length,
                genre=genres[genre_name],
            )
        session.add_all(movies.values())

        for first_name, last_name, rating, titles, favorite in SAMPLE_ACTORS:
            actor = Actor(
                first_name=first_name,
                last_name=last_name,
                rating=rating,
                favorite_movie=movies.get(favorite),
            )
            actor.movies.extend(movies[title] for title in titles)
            session.add(actor)

        session.commit()
        logger.info(
            f"Seeded {len(genres)} genres, {len(movies)} movies, {len(SAMPLE_ACTORS)} actors"
        )
    except IntegrityError as e:
        session.rollback()
        logger.error(f"Seeding failed: {e}")
        raise
    finally:
        session.close()


def main():
    parser = argparse.ArgumentParser(description="Create the movie catalog tables")
    parser.add_argument("--database-url", default=Config.DATABASE_URL)
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    parser.add_argument("--seed", action="store_true", help="Load the sample catalog")
    args = parser.parse_args()

    database = Database(args.database_url)
    try:
        if args.drop:
            database.drop_all()
        database.create_all()
        if args.seed:
            seed(database)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
