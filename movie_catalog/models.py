from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    DECIMAL,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    inspect,
)
from sqlalchemy.orm import declarative_base, relationship, validates

from movie_catalog.validators import (
    DEFAULT_VALIDATE,
    IS_BEFORE_TODAY,
    IS_DATE,
    IS_DECIMAL,
    IS_INT,
    IS_UNSIGNED,
    attach_validation,
    coerce_date,
    coerce_decimal,
    coerce_int,
)

Base = declarative_base()

AUDIT_COLUMNS = ("created_at", "updated_at")


def _serialize_value(value):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class SerializerMixin:
    """Column attributes as a JSON-ready dict"""

    def to_dict(self, exclude=()):
        data = {}
        for attr in inspect(self).mapper.column_attrs:
            if attr.key in exclude:
                continue
            data[attr.key] = _serialize_value(getattr(self, attr.key))
        return data


class Genre(SerializerMixin, Base):
    __tablename__ = "genre"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    ranking = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    movies = relationship("Movie", back_populates="genre")

    def __repr__(self):
        return f"<Genre(name='{self.name}', ranking={self.ranking})>"


class ActorMovie(SerializerMixin, Base):
    """One cast-membership fact. Rows go away with their movie."""

    __tablename__ = "actor_movie"

    id = Column(Integer, primary_key=True, autoincrement=True)
    movie_id = Column(Integer, ForeignKey("movie.id"), nullable=False)
    actor_id = Column(Integer, ForeignKey("actor.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_actor_movie_movie", "movie_id"),
        Index("idx_actor_movie_actor", "actor_id"),
    )

    def __repr__(self):
        return f"<ActorMovie(movie_id={self.movie_id}, actor_id={self.actor_id})>"


class Movie(SerializerMixin, Base):
    __tablename__ = "movie"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False, info={"validate": DEFAULT_VALIDATE})
    rating = Column(
        DECIMAL(3, 1),
        nullable=False,
        info={"validate": DEFAULT_VALIDATE + (IS_DECIMAL, IS_UNSIGNED)},
    )
    awards = Column(
        Integer, nullable=False, info={"validate": DEFAULT_VALIDATE + (IS_INT, IS_UNSIGNED)}
    )
    release_date = Column(
        Date, nullable=False, info={"validate": DEFAULT_VALIDATE + (IS_DATE, IS_BEFORE_TODAY)}
    )
    length = Column(Integer, info={"validate": (IS_INT, IS_UNSIGNED)})
    genre_id = Column(Integer, ForeignKey("genre.id"), info={"validate": (IS_INT,)})
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    genre = relationship("Genre", back_populates="movies")
    actors = relationship("Actor", secondary="actor_movie", back_populates="movies")

    __table_args__ = (
        CheckConstraint("rating >= 0", name="check_movie_rating_unsigned"),
        CheckConstraint("awards >= 0", name="check_movie_awards_unsigned"),
        Index("idx_movie_release_date", "release_date"),
    )

    @validates("rating")
    def _coerce_rating(self, key, value):
        return coerce_decimal(value)

    @validates("awards", "length", "genre_id")
    def _coerce_integers(self, key, value):
        return coerce_int(value)

    @validates("release_date")
    def _coerce_release_date(self, key, value):
        return coerce_date(value)

    def __repr__(self):
        year = self.release_date.year if isinstance(self.release_date, date) else "N/A"
        return f"<Movie(title='{self.title}', year={year})>"


class Actor(SerializerMixin, Base):
    __tablename__ = "actor"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False, info={"validate": DEFAULT_VALIDATE})
    last_name = Column(String(100), nullable=False, info={"validate": DEFAULT_VALIDATE})
    rating = Column(DECIMAL(3, 1))
    favorite_movie_id = Column(Integer, ForeignKey("movie.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    movies = relationship("Movie", secondary="actor_movie", back_populates="actors")
    favorite_movie = relationship("Movie", foreign_keys=[favorite_movie_id])

    @validates("rating")
    def _coerce_rating(self, key, value):
        return coerce_decimal(value)

    def __repr__(self):
        return f"<Actor(name='{self.first_name} {self.last_name}')>"


attach_validation(Movie)
attach_validation(Actor)
