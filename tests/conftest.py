"""
Pytest configuration and fixtures for testing
"""

from datetime import date

import pytest

from config.config import TestingConfig
from movie_catalog.app import create_app
from movie_catalog.database import Database
from movie_catalog.models import Actor, Genre, Movie


@pytest.fixture(scope="function")
def database(tmp_path):
    """Fresh SQLite database file for each test"""
    database = Database(f"sqlite:///{tmp_path / 'test.db'}")
    database.create_all()

    yield database

    database.drop_all()
    database.dispose()


@pytest.fixture(scope="function")
def app(database):
    """Create application for testing"""
    flask_app = create_app(TestingConfig, database=database)
    flask_app.config.update({"TESTING": True})

    yield flask_app


@pytest.fixture(scope="function")
def db_session(database):
    """Session for arranging and inspecting test data"""
    session = database.session()

    yield session

    session.close()


@pytest.fixture(scope="function")
def client(app, db_session):
    """Create test client - depends on db_session to ensure proper setup"""
    return app.test_client()


@pytest.fixture(scope="function")
def sample_genre(db_session):
    """Create a sample genre"""
    genre = Genre(name="Action", ranking=5)
    db_session.add(genre)
    db_session.commit()
    return genre


@pytest.fixture(scope="function")
def sample_genres(db_session):
    """Create several genres with distinct rankings"""
    genres = [
        Genre(name="Drama", ranking=3),
        Genre(name="Comedy", ranking=1),
        Genre(name="Science Fiction", ranking=2),
        Genre(name="Animation", ranking=4),
    ]
    db_session.add_all(genres)
    db_session.commit()
    return genres


@pytest.fixture(scope="function")
def sample_movie(db_session, sample_genre):
    """Create a sample movie"""
    movie = Movie(
        title="Fight Club",
        rating="8.8",
        awards=0,
        release_date=date(1999, 10, 15),
        length=139,
        genre=sample_genre,
    )
    db_session.add(movie)
    db_session.commit()
    return movie


@pytest.fixture(scope="function")
def sample_movies(db_session, sample_genre):
    """Create twelve movies, ratings 6.0 through 9.3"""
    movies = []
    for i in range(12):
        movie = Movie(
            title=f"Test Movie {i}",
            rating=f"{6.0 + i * 0.3:.1f}",
            awards=i % 4,
            release_date=date(2000 + i, 1, 1),
            length=90 + i,
            genre=sample_genre,
        )
        movies.append(movie)

    db_session.add_all(movies)
    db_session.commit()
    return movies


@pytest.fixture(scope="function")
def sample_actor(db_session, sample_movie):
    """Actor cast in the sample movie who also lists it as favorite"""
    actor = Actor(
        first_name="Brad",
        last_name="Pitt",
        rating="8.5",
        favorite_movie=sample_movie,
    )
    actor.movies.append(sample_movie)
    db_session.add(actor)
    db_session.commit()
    return actor
