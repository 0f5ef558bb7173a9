"""
Tests for the maintenance scripts
"""
from unittest.mock import Mock, patch

import requests

from movie_catalog.models import Actor, ActorMovie, Genre, Movie
from scripts.init_db import SAMPLE_ACTORS, SAMPLE_GENRES, SAMPLE_MOVIES, seed
from scripts.smoke_api import check_movies, main as smoke_main


class TestSeed:
    """Tests for the sample catalog loader"""

    def test_seed_loads_catalog(self, database, db_session):
        """Test loading the sample catalog"""
        seed(database)

        assert db_session.query(Genre).count() == len(SAMPLE_GENRES)
        assert db_session.query(Movie).count() == len(SAMPLE_MOVIES)
        assert db_session.query(Actor).count() == len(SAMPLE_ACTORS)
        assert db_session.query(ActorMovie).count() == len(SAMPLE_ACTORS)

        hanks = db_session.query(Actor).filter_by(last_name="Hanks").one()
        assert hanks.favorite_movie.title == "Toy Story"
        assert hanks.movies[0].genre.name == "Animation"

    def test_seed_is_idempotent(self, database, db_session):
        """Test seeding twice adds nothing"""
        seed(database)
        seed(database)

        assert db_session.query(Movie).count() == len(SAMPLE_MOVIES)

    def test_seeded_catalog_is_served(self, client, database):
        """Test the API serves the seeded catalog"""
        seed(database)

        movies = client.get("/api/v1/movies/recommended?limit=10").get_json()["data"]["movies"]
        assert [m["title"] for m in movies][:1] == [
            "The Lord of the Rings: The Fellowship of the Ring"
        ]


class TestSmokeApi:
    """Tests for the HTTP smoke check"""

    @patch("scripts.smoke_api.requests.get")
    def test_check_movies(self, mock_get, capsys):
        """Test the movie list check"""
        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.json.return_value = {
            "ok": True,
            "meta": {"status": 200},
            "data": {"total": 1, "perPage": 1, "movies": [{"id": 1, "title": "Avatar"}]},
        }
        mock_get.return_value = mock_response

        check_movies("http://api.test/api/v1")

        mock_get.assert_called_once()
        assert mock_get.call_args[0][0] == "http://api.test/api/v1/movies"
        assert "Avatar" in capsys.readouterr().out

    @patch("scripts.smoke_api.requests.get")
    def test_connection_error(self, mock_get, monkeypatch, capsys):
        """Test the exit code when the server is down"""
        mock_get.side_effect = requests.exceptions.ConnectionError()
        monkeypatch.setattr("sys.argv", ["smoke_api.py"])

        assert smoke_main() == 1
        assert "Could not connect" in capsys.readouterr().out
