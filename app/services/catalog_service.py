# ============================================================================
# FILE: app/services/catalog_service.py
# ============================================================================
import random
from datetime import date
from typing import List, Optional
from app.core.cache import cache, RedisCache
from app.core.catalog_client import catalog_client, CatalogClient, SEARCH_TYPES
from app.schemas.catalog import (
    CatalogAlbum,
    CatalogArtist,
    CatalogCategory,
    CatalogPlaylist,
    LibraryItem,
)
import logging

logger = logging.getLogger(__name__)

# Shown on the library page when nothing is searched yet
POPULAR_ARTIST_IDS = [
    "06HL4z0CvFAxyc27GXpf02",
    "1Xyo4u8uXC1ZmMpatF05PJ",
    "3Nrfpe0tUJi4K4DXYWgMUX",
    "66CXWjxzNUsdJxJ2JdwvnR",
    "1uNFoZAHBGtllmzznpCI3s",
    "3TVXtAsR1Inumwj472S9r4",
    "7dGJo4pcD2V6oG8kP0tJRR",
    "246dkjvS1zLTtiykXe5h60",
]

def _album_item(album: CatalogAlbum) -> LibraryItem:
    return LibraryItem(
        kind="album",
        id=album.id,
        name=album.name,
        subtitle=f"by {album.artist}" if album.artist else None,
        image_url=album.image_url,
        external_url=album.external_url,
        popularity=album.popularity,
        release_date=album.release_date,
    )

def _playlist_item(playlist: CatalogPlaylist) -> LibraryItem:
    return LibraryItem(
        kind="playlist",
        id=playlist.id,
        name=playlist.name,
        subtitle=playlist.description or playlist.owner,
        image_url=playlist.image_url,
        external_url=playlist.external_url,
    )

class CatalogService:
    """Library browsing on top of the catalog client"""

    def __init__(self, client: CatalogClient = None, response_cache: RedisCache = None):
        self.client = client or catalog_client
        self.cache = response_cache or cache

    def get_genres(self) -> List[CatalogCategory]:
        """Browse categories, used as the genre filter"""
        raw = self.cache.cached(
            "categories",
            lambda: [c.model_dump(mode="json") for c in self.client.get_categories()],
        )
        return [CatalogCategory(**item) for item in raw or []]

    def get_new_releases(self, offset: int = 0) -> List[CatalogAlbum]:
        raw = self.cache.cached(
            f"new-releases:{offset}",
            lambda: [a.model_dump(mode="json") for a in self.client.get_new_releases(offset)],
        )
        return [CatalogAlbum(**item) for item in raw or []]

    def get_artist(self, artist_id: str) -> Optional[CatalogArtist]:
        raw = self.cache.cached(
            f"artist:{artist_id}",
            lambda: self._dump(self.client.get_artist(artist_id)),
        )
        return CatalogArtist(**raw) if raw else None

    def get_related_artists(self, artist_id: str) -> List[CatalogArtist]:
        raw = self.cache.cached(
            f"related:{artist_id}",
            lambda: [a.model_dump(mode="json") for a in self.client.get_related_artists(artist_id)],
        )
        return [CatalogArtist(**item) for item in raw or []]

    def popular_artists(self, count: int = 5) -> List[CatalogArtist]:
        """A random handful of well-known artists"""
        picks = random.sample(POPULAR_ARTIST_IDS, min(max(count, 0), len(POPULAR_ARTIST_IDS)))
        artists = (self.get_artist(artist_id) for artist_id in picks)
        return [artist for artist in artists if artist is not None]

    def _dump(self, model):
        return model.model_dump(mode="json") if model is not None else None

    def _category_id(self, genre: str) -> Optional[str]:
        for category in self.get_genres():
            if genre in (category.id, category.name) or category.name.lower() == genre.lower():
                return category.id
        return None

    def browse(
        self,
        query: Optional[str] = None,
        search_type: str = "track",
        min_popularity: Optional[int] = None,
        released_from: Optional[date] = None,
        released_to: Optional[date] = None,
        genre: Optional[str] = None,
        offset: int = 0,
    ) -> List[LibraryItem]:
        """
        Library listing

        A genre selects that category's playlists and ignores the other
        filters. Otherwise a query searches by type and applies the
        popularity and release-date filters. With neither, new releases are
        listed.
        """
        if genre:
            category_id = self._category_id(genre)
            if not category_id:
                logger.info(f"Unknown genre filter: {genre}")
                return []
            return [_playlist_item(p) for p in self.client.get_category_playlists(category_id)]

        if not query or not query.strip():
            return [_album_item(a) for a in self.get_new_releases(offset)]

        if search_type not in SEARCH_TYPES:
            search_type = "track"
        results = self.client.search(query, search_type)
        items = self._search_items(results, search_type)
        return self._filter(items, min_popularity, released_from, released_to)

    def _search_items(self, results, search_type: str) -> List[LibraryItem]:
        if search_type == "artist":
            return [
                LibraryItem(
                    kind="artist",
                    id=a.id,
                    name=a.name,
                    subtitle=", ".join(a.genres[:3]) or None,
                    image_url=a.image_url,
                    external_url=a.external_url,
                    popularity=a.popularity,
                )
                for a in results.artists
            ]
        if search_type == "album":
            return [_album_item(a) for a in results.albums]
        return [
            LibraryItem(
                kind="track",
                id=t.id,
                name=t.name,
                subtitle=f"by {t.artist}" if t.artist else None,
                image_url=t.image_url,
                external_url=t.external_url,
                popularity=t.popularity,
                release_date=t.release_date,
            )
            for t in results.tracks
        ]

    def _filter(
        self,
        items: List[LibraryItem],
        min_popularity: Optional[int],
        released_from: Optional[date],
        released_to: Optional[date],
    ) -> List[LibraryItem]:
        filtered = []
        for item in items:
            if min_popularity is not None and (item.popularity or 0) < min_popularity:
                continue
            if released_from or released_to:
                if item.release_date is None:
                    continue
                if released_from and item.release_date < released_from:
                    continue
                if released_to and item.release_date > released_to:
                    continue
            filtered.append(item)
        return filtered

# Create singleton instance
catalog_service = CatalogService()
