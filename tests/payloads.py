"""Catalog provider JSON payloads for tests"""


def track_json(track_id, name, artist, popularity=50, release_date="2020-01-01"):
    return {
        "id": track_id,
        "name": name,
        "popularity": popularity,
        "duration_ms": 200000,
        "artists": [{"id": f"{track_id}-artist", "name": artist}],
        "album": {
            "name": f"{name} (album)",
            "release_date": release_date,
            "images": [{"url": f"https://img.test/{track_id}.jpg"}],
        },
        "external_urls": {"spotify": f"https://open.test/track/{track_id}"},
    }


def album_json(album_id, name, artist, release_date="2024-03-01"):
    return {
        "id": album_id,
        "name": name,
        "release_date": release_date,
        "artists": [{"name": artist}],
        "images": [{"url": f"https://img.test/{album_id}.jpg"}],
        "external_urls": {"spotify": f"https://open.test/album/{album_id}"},
    }


def artist_json(artist_id, name, genres=None, popularity=70):
    return {
        "id": artist_id,
        "name": name,
        "genres": genres or [],
        "popularity": popularity,
        "images": [{"url": f"https://img.test/{artist_id}.jpg"}],
        "external_urls": {"spotify": f"https://open.test/artist/{artist_id}"},
    }

