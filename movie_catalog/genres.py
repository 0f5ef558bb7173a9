from flask import Blueprint

from movie_catalog.database import get_db_session
from movie_catalog.errors import InvalidParameter, NotFound
from movie_catalog.models import AUDIT_COLUMNS, Genre
from movie_catalog.params import order_field, page_limit, positive_id
from movie_catalog.responses import success

genres_bp = Blueprint("genres", __name__)

ORDER_FIELDS = ("name", "ranking", "id")


@genres_bp.route("/", methods=["GET"])
def list_genres():
    """Page of genres, ordered by ?order= (name, ranking or id)"""
    order = order_field(ORDER_FIELDS)
    limit = page_limit()

    session = get_db_session()
    try:
        total = session.query(Genre).count()
        genres = session.query(Genre).order_by(getattr(Genre, order)).limit(limit).all()

        genres_data = [genre.to_dict(exclude=AUDIT_COLUMNS) for genre in genres]

        return success({"total": total, "perPage": len(genres_data), "genres": genres_data})
    finally:
        session.close()


@genres_bp.route("/name/", defaults={"name": None}, methods=["GET"])
@genres_bp.route("/name/<name>", methods=["GET"])
def get_genre_by_name(name):
    """First genre whose name contains ``name``"""
    if not name:
        raise InvalidParameter("A name to search for is required.")

    session = get_db_session()
    try:
        genre = (
            session.query(Genre)
            .filter(Genre.name.contains(name, autoescape=True))
            .order_by(Genre.id)
            .first()
        )

        if not genre:
            raise NotFound("No genre found with that name.")

        return success({"genre": genre.to_dict(), "total": 1})
    finally:
        session.close()


@genres_bp.route("/<genre_id>", methods=["GET"])
def get_genre(genre_id):
    genre_id = positive_id(genre_id)

    session = get_db_session()
    try:
        genre = session.query(Genre).filter_by(id=genre_id).first()

        if not genre:
            raise NotFound("No genre found with that ID.")

        return success({"genre": genre.to_dict(), "total": 1})
    finally:
        session.close()
