"""
API Smoke Check

Calls every read endpoint of a running server and prints a short summary.

Usage:
    python scripts/smoke_api.py [--base-url http://127.0.0.1:5000/api/v1]
"""

import argparse
import json
import sys

import requests

DEFAULT_BASE_URL = "http://127.0.0.1:5000/api/v1"


def check_health(base_url):
    print("Checking /health...")
    response = requests.get(f"{base_url}/health", timeout=10)
    print(f"Status: {response.status_code}")
    print(json.dumps(response.json(), indent=2))
    print()


def check_genres(base_url):
    print("Checking /genres...")
    response = requests.get(f"{base_url}/genres", params={"order": "ranking"}, timeout=10)
    print(f"Status: {response.status_code}")
    data = response.json()["data"]
    print(f"Total genres: {data['total']}, on this page: {data['perPage']}")
    print()


def check_movies(base_url):
    print("Checking /movies...")
    response = requests.get(f"{base_url}/movies", params={"limit": 3}, timeout=10)
    print(f"Status: {response.status_code}")
    data = response.json()["data"]
    print(f"Total movies: {data['total']}")
    if data["movies"]:
        print(f"First movie: {json.dumps(data['movies'][0], indent=2)}")
    print()


def check_movie_detail(base_url):
    print("Checking /movies/<id>...")
    response = requests.get(f"{base_url}/movies/1", timeout=10)
    print(f"Status: {response.status_code}")
    if response.status_code == 200:
        movie = response.json()["data"]["movie"]
        print(f"Title: {movie['title']}, released {movie['release_date']}")
        print(f"Actors: {len(movie['actors'])}")
    print()


def check_newest(base_url):
    print("Checking /movies/new...")
    response = requests.get(f"{base_url}/movies/new", timeout=10)
    print(f"Status: {response.status_code}")
    titles = [m["title"] for m in response.json()["data"]["movies"]]
    print(f"Newest: {titles}")
    print()


def check_recommended(base_url):
    print("Checking /movies/recommended...")
    response = requests.get(f"{base_url}/movies/recommended", timeout=10)
    print(f"Status: {response.status_code}")
    movies = response.json()["data"]["movies"]
    print(f"Recommended: {[(m['title'], m['rating']) for m in movies]}")
    print()


def main():
    parser = argparse.ArgumentParser(description="Smoke check a running movie catalog API")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    args = parser.parse_args()

    print("=" * 60)
    print("API Smoke Check")
    print("=" * 60)
    print()

    try:
        check_health(args.base_url)
        check_genres(args.base_url)
        check_movies(args.base_url)
        check_movie_detail(args.base_url)
        check_newest(args.base_url)
        check_recommended(args.base_url)

        print("=" * 60)
        print("All checks completed!")
        print("=" * 60)
    except requests.exceptions.ConnectionError:
        print("ERROR: Could not connect to API. Make sure the server is running.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
