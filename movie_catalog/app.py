import logging
from typing import Optional

from flask import Flask, current_app
from sqlalchemy import func
from werkzeug.exceptions import HTTPException

from config.config import get_config
from movie_catalog.database import Database, get_db_session
from movie_catalog.errors import ApiError, ValidationFailure
from movie_catalog.genres import genres_bp
from movie_catalog.models import Movie
from movie_catalog.movies import movies_bp
from movie_catalog.responses import failure, success

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Setup logging"""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def create_app(config=None, database: Optional[Database] = None) -> Flask:
    """Build the Flask app around an explicitly constructed Database"""
    config = config or get_config()

    app = Flask(__name__)
    app.config.from_object(config)
    app.json.sort_keys = False

    configure_logging(app.config["LOG_LEVEL"], app.config.get("LOG_FILE"))

    if database is None:
        database = Database(app.config["DATABASE_URL"], echo=app.config["SQLALCHEMY_ECHO"])
    app.extensions["database"] = database

    if app.config.get("CREATE_TABLES"):
        database.create_all()

    app.register_blueprint(genres_bp, url_prefix=f"{API_PREFIX}/genres")
    app.register_blueprint(movies_bp, url_prefix=f"{API_PREFIX}/movies")
    app.add_url_rule(f"{API_PREFIX}/health", view_func=api_health, methods=["GET"])
    app.add_url_rule(f"{API_PREFIX}/docs", view_func=api_docs, methods=["GET"])

    register_error_handlers(app)

    return app


def register_error_handlers(app: Flask):
    @app.errorhandler(ValidationFailure)
    def handle_validation_failure(err):
        logger.warning(f"Validation failed: {err.errors}")
        status = current_app.config.get("VALIDATION_ERROR_STATUS", err.status)
        return failure(err.errors, status)

    @app.errorhandler(ApiError)
    def handle_api_error(err):
        logger.warning(f"{err.status} {err.message}")
        return failure(err.message, err.status)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        return failure(err.description, err.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        logger.exception(f"Unhandled error: {err}")
        return failure(str(err), 500)


def api_health():
    """Health check endpoint"""
    session = get_db_session()
    try:
        movie_count = session.query(func.count(Movie.id)).scalar()

        return success({"status": "healthy", "database": "connected", "movies": movie_count})
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return failure(str(e), 500)
    finally:
        session.close()


def api_docs():
    """API documentation"""
    docs = {
        "version": "1.0",
        "endpoints": {
            "genres": {
                f"GET {API_PREFIX}/genres": {
                    "description": "Get a page of genres",
                    "parameters": {
                        "limit": "Results per page (default: 5, max: 100)",
                        "order": "Order by: name, ranking, id (default: id)",
                    },
                },
                f"GET {API_PREFIX}/genres/name/<name>": {
                    "description": "First genre whose name contains <name>"
                },
                f"GET {API_PREFIX}/genres/<id>": {"description": "Get a genre by ID"},
            },
            "movies": {
                f"GET {API_PREFIX}/movies": {
                    "description": "Get a page of movies with genre and actors",
                    "parameters": {
                        "limit": "Results per page (default: 5, max: 100)",
                        "offset": "Rows to skip (default: 0)",
                        "order": "Order by: title, rating, id, release_date, length, awards",
                    },
                },
                f"GET {API_PREFIX}/movies/new": {
                    "description": "Newest movies by release date",
                    "parameters": {"limit": "Number of results (default: 5)"},
                },
                f"GET {API_PREFIX}/movies/recommended": {
                    "description": "Movies rated 8 or higher, best first",
                    "parameters": {"limit": "Number of results (default: 5)"},
                },
                f"GET {API_PREFIX}/movies/<id>": {"description": "Get a movie by ID"},
                f"POST {API_PREFIX}/movies/create": {
                    "description": "Create a movie",
                    "body": ["title", "rating", "awards", "release_date", "length", "genre_id"],
                },
                f"PUT {API_PREFIX}/movies/<id>": {
                    "description": "Update a movie; empty values keep the stored value"
                },
                f"DELETE {API_PREFIX}/movies/<id>": {
                    "description": "Delete a movie and its cast rows"
                },
            },
            "system": {
                f"GET {API_PREFIX}/health": {"description": "Health check endpoint"},
                f"GET {API_PREFIX}/docs": {"description": "API documentation"},
            },
        },
    }

    return success(docs)


def main():
    app = create_app()
    try:
        app.run(debug=app.config.get("DEBUG", False))
    finally:
        app.extensions["database"].dispose()


if __name__ == "__main__":
    main()
