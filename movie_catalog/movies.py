import logging
from datetime import datetime, time

from flask import Blueprint, current_app, request, url_for
from sqlalchemy import desc
from sqlalchemy.orm import joinedload

from movie_catalog.database import get_db_session
from movie_catalog.errors import NotFound
from movie_catalog.models import AUDIT_COLUMNS, Actor, ActorMovie, Movie
from movie_catalog.params import order_field, page_limit, page_offset, positive_id
from movie_catalog.responses import success

logger = logging.getLogger(__name__)

movies_bp = Blueprint("movies", __name__)

ORDER_FIELDS = ("title", "rating", "id", "release_date", "length", "awards")
UPDATABLE_FIELDS = ("rating", "awards", "release_date", "length", "genre_id")
DETAIL_EXCLUDE = AUDIT_COLUMNS + ("genre_id",)


def _query_movies(session):
    """Movie query with genre and actors loaded in the same statement"""
    return session.query(Movie).options(joinedload(Movie.genre), joinedload(Movie.actors))


def _serialize_movie(movie, exclude=AUDIT_COLUMNS):
    data = movie.to_dict(exclude=exclude)
    data["genre"] = movie.genre.to_dict(exclude=AUDIT_COLUMNS) if movie.genre else None
    data["actors"] = [actor.to_dict(exclude=AUDIT_COLUMNS) for actor in movie.actors]
    return data


def _serialize_with_link(movie, exclude=AUDIT_COLUMNS):
    data = _serialize_movie(movie, exclude)
    data["link"] = url_for("movies.get_movie", movie_id=movie.id, _external=True)
    return data


def _request_payload():
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def _trimmed(value):
    return value.strip() if isinstance(value, str) else value


@movies_bp.route("/", methods=["GET"])
def list_movies():
    """Page of movies with ?limit=, ?offset= and ?order="""
    order = order_field(ORDER_FIELDS)
    limit = page_limit()
    offset = page_offset()

    session = get_db_session()
    try:
        total = session.query(Movie).count()
        movies = (
            _query_movies(session)
            .order_by(getattr(Movie, order))
            .limit(limit)
            .offset(offset)
            .all()
        )

        movies_data = [_serialize_with_link(movie) for movie in movies]

        return success({"perPage": len(movies_data), "total": total, "movies": movies_data})
    finally:
        session.close()


@movies_bp.route("/new", methods=["GET"])
def newest_movies():
    """Most recently released movies first"""
    limit = page_limit()

    session = get_db_session()
    try:
        movies = (
            _query_movies(session)
            .order_by(desc(Movie.release_date), Movie.id)
            .limit(limit)
            .all()
        )

        return success({"movies": [_serialize_with_link(m, DETAIL_EXCLUDE) for m in movies]})
    finally:
        session.close()


@movies_bp.route("/recommended", methods=["GET"])
def recommended_movies():
    """Best rated movies above the recommendation threshold"""
    limit = page_limit()
    min_rating = current_app.config["RECOMMENDED_MIN_RATING"]

    session = get_db_session()
    try:
        movies = (
            _query_movies(session)
            .filter(Movie.rating >= min_rating)
            .order_by(desc(Movie.rating), Movie.id)
            .limit(limit)
            .all()
        )

        return success({"movies": [_serialize_with_link(m, DETAIL_EXCLUDE) for m in movies]})
    finally:
        session.close()


@movies_bp.route("/<movie_id>", methods=["GET"])
def get_movie(movie_id):
    movie_id = positive_id(movie_id)

    session = get_db_session()
    try:
        movie = _query_movies(session).filter(Movie.id == movie_id).first()

        if not movie:
            raise NotFound("No movie found with that ID.")

        movie_data = _serialize_movie(movie, DETAIL_EXCLUDE)
        # Full timestamp at local midnight, e.g. 1999-10-15T00:00:00-03:00
        movie_data["release_date"] = (
            datetime.combine(movie.release_date, time()).astimezone().isoformat()
        )

        return success({"movie": movie_data})
    finally:
        session.close()


@movies_bp.route("/create", methods=["POST"])
def create_movie():
    """Create a movie. Field rules are enforced by the model on flush."""
    payload = _request_payload()

    movie = Movie(
        title=_trimmed(payload.get("title")),
        rating=payload.get("rating"),
        awards=payload.get("awards"),
        release_date=payload.get("release_date"),
        length=payload.get("length"),
        genre_id=payload.get("genre_id"),
    )

    session = get_db_session()
    try:
        session.add(movie)
        session.commit()
        logger.info(f"Created movie {movie.id}: {movie.title}")

        return success({"movie": movie.to_dict()}, 201)
    finally:
        session.close()


@movies_bp.route("/<int:movie_id>", methods=["PUT"])
def update_movie(movie_id):
    """Overwrite the fields given in the body.

    Empty or falsy values (``""``, ``0``, ``null``) keep the stored value.
    """
    payload = _request_payload()

    session = get_db_session()
    try:
        movie = session.query(Movie).filter_by(id=movie_id).first()

        if not movie:
            raise NotFound("No movie found with that ID.")

        movie.title = _trimmed(payload.get("title")) or movie.title
        for field in UPDATABLE_FIELDS:
            setattr(movie, field, payload.get(field) or getattr(movie, field))

        session.commit()
        logger.info(f"Updated movie {movie.id}")

        return success({"movie": movie.to_dict()})
    finally:
        session.close()


@movies_bp.route("/<int:movie_id>", methods=["DELETE"])
def delete_movie(movie_id):
    """Delete a movie after detaching everything that points at it"""
    session = get_db_session()
    try:
        movie = session.query(Movie).filter_by(id=movie_id).first()

        if not movie:
            raise NotFound("No movie found with that ID.")

        deleted_movie = movie.to_dict()

        # Order matters: actor favorites, then cast rows, then the movie itself
        try:
            session.query(Actor).filter(Actor.favorite_movie_id == movie_id).update(
                {Actor.favorite_movie_id: None}, synchronize_session=False
            )
            session.query(ActorMovie).filter(ActorMovie.movie_id == movie_id).delete(
                synchronize_session=False
            )
            session.query(Movie).filter(Movie.id == movie_id).delete(synchronize_session=False)
            session.commit()
        except Exception:
            session.rollback()
            raise

        logger.info(f"Deleted movie {movie_id}: {deleted_movie['title']}")

        return success({"deletedMovie": deleted_movie})
    finally:
        session.close()
