# ============================================================================
# FILE: app/core/catalog_client.py
# Catalog provider Web API client (client credentials flow)
# ============================================================================
import threading
import time
import httpx
from typing import Any, Callable, Dict, List, Optional
from app.config import settings
from app.schemas.catalog import (
    CatalogAlbum,
    CatalogArtist,
    CatalogCategory,
    CatalogPlaylist,
    CatalogTrack,
    SearchResults,
    convert_items,
    paged_items,
)
import logging

logger = logging.getLogger(__name__)

SEARCH_TYPES = ("track", "album", "artist")

# Tokens are treated as expired this many seconds before the provider says so
EXPIRY_SKEW_SECONDS = 60

# After a failed exchange no new one is attempted for this long
EXCHANGE_BACKOFF_SECONDS = 30


class CatalogCredentials:
    """
    Holds the bearer token for the catalog provider

    The token is exchanged lazily and refreshed when it expires or when the
    API rejects it. All reads and writes happen under one lock, so a burst of
    requests arriving with an expired token triggers a single exchange.
    A failed exchange is logged and leaves the token unset; it never raises.
    Callers then get no token until EXCHANGE_BACKOFF_SECONDS have passed, so
    a provider outage costs one exchange attempt per backoff window rather
    than one per API call.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str,
        http: httpx.Client,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.http = http
        self.clock = clock
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        self._expires_at = 0.0
        self._retry_after = 0.0

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def get_token(self) -> Optional[str]:
        """Current bearer token, exchanging a new one if needed"""
        with self._lock:
            if self._token and self.clock() < self._expires_at:
                return self._token
            self._token = None
            if self.clock() < self._retry_after:
                return None
            self._exchange()
            if self._token is None:
                self._retry_after = self.clock() + EXCHANGE_BACKOFF_SECONDS
            return self._token

    def invalidate(self, token: Optional[str]):
        """Drop `token` if it is still the current one"""
        with self._lock:
            if token is not None and self._token == token:
                self._token = None
                self._expires_at = 0.0

    def _exchange(self):
        if not self.configured:
            logger.warning("Catalog client credentials not configured")
            return

        try:
            response = self.http.post(
                self.token_url,
                auth=(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
            )
            response.raise_for_status()
            token_data = response.json()
            token = token_data["access_token"]
            expires_in = int(token_data.get("expires_in", 3600))
        except httpx.HTTPError as e:
            logger.error(f"Catalog token request failed: {e}")
            return
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Catalog token response unreadable: {e}")
            return

        self._token = token
        self._expires_at = self.clock() + max(expires_in - EXPIRY_SKEW_SECONDS, 0)
        logger.info("Catalog access token refreshed")


class CatalogClient:
    """Read-only wrapper around the catalog provider's REST API"""

    def __init__(
        self,
        client_id: str = None,
        client_secret: str = None,
        token_url: str = None,
        api_url: str = None,
        timeout: float = None,
        http_client: httpx.Client = None,
    ):
        self.api_url = (api_url or settings.CATALOG_API_URL).rstrip("/")
        self.http = http_client or httpx.Client(
            timeout=timeout or settings.CATALOG_TIMEOUT_SECONDS
        )
        self.credentials = CatalogCredentials(
            client_id if client_id is not None else settings.CATALOG_CLIENT_ID,
            client_secret if client_secret is not None else settings.CATALOG_CLIENT_SECRET,
            token_url or settings.CATALOG_TOKEN_URL,
            self.http,
        )
        # Initial exchange; a failure only gets logged
        self.credentials.get_token()

    def _send(self, path: str, params: Optional[Dict], token: str) -> Optional[httpx.Response]:
        try:
            return self.http.get(
                f"{self.api_url}{path}",
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Catalog request {path} failed: {e}")
            return None

    def get_json(self, path: str, params: Optional[Dict] = None) -> Optional[Dict[str, Any]]:
        """
        GET an API path with the bearer token and return the decoded JSON object

        A 401 invalidates the token and the call is retried once with a fresh
        one. Every failure is logged and returns None.
        """
        token = self.credentials.get_token()
        if not token:
            logger.error(f"Catalog request {path} skipped: no access token")
            return None

        response = self._send(path, params, token)
        if response is not None and response.status_code == 401:
            logger.info("Catalog access token rejected, refreshing")
            self.credentials.invalidate(token)
            token = self.credentials.get_token()
            if not token:
                return None
            response = self._send(path, params, token)

        if response is None:
            return None
        if response.status_code >= 400:
            logger.warning(f"Catalog request {path} returned {response.status_code}")
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Catalog response for {path} is not JSON: {e}")
            return None
        return data if isinstance(data, dict) else None

    def search(self, query: str, search_type: str = "track", limit: int = None) -> SearchResults:
        """Search the catalog; `search_type` is one of track, album, artist"""
        if not query or not query.strip():
            return SearchResults()
        if search_type not in SEARCH_TYPES:
            logger.warning(f"Unsupported search type: {search_type}")
            return SearchResults()

        data = self.get_json("/search", {
            "q": query.strip(),
            "type": search_type,
            "limit": limit or settings.CATALOG_SEARCH_LIMIT,
        })
        return SearchResults.from_api(data)

    def get_categories(self, limit: int = None) -> List[CatalogCategory]:
        data = self.get_json("/browse/categories", {"limit": limit or settings.CATALOG_CATEGORIES_LIMIT})
        return convert_items(CatalogCategory, paged_items(data, "categories"))

    def get_category_playlists(self, category_id: str) -> List[CatalogPlaylist]:
        if not category_id:
            return []
        data = self.get_json(f"/browse/categories/{category_id}/playlists")
        return convert_items(CatalogPlaylist, paged_items(data, "playlists"))

    def get_new_releases(self, offset: int = 0, limit: int = None) -> List[CatalogAlbum]:
        data = self.get_json("/browse/new-releases", {
            "limit": limit or settings.CATALOG_NEW_RELEASES_LIMIT,
            "offset": max(offset, 0),
        })
        return convert_items(CatalogAlbum, paged_items(data, "albums"))

    def get_featured_playlists(self, limit: int = None) -> List[CatalogPlaylist]:
        data = self.get_json("/browse/featured-playlists", {"limit": limit or settings.CATALOG_FEATURED_LIMIT})
        return convert_items(CatalogPlaylist, paged_items(data, "playlists"))

    def get_artist(self, artist_id: str) -> Optional[CatalogArtist]:
        if not artist_id:
            return None
        return CatalogArtist.from_api(self.get_json(f"/artists/{artist_id}"))

    def get_related_artists(self, artist_id: str) -> List[CatalogArtist]:
        if not artist_id:
            return []
        data = self.get_json(f"/artists/{artist_id}/related-artists") or {}
        artists = data.get("artists")
        return convert_items(CatalogArtist, artists if isinstance(artists, list) else [])

    def search_artist(self, name: str) -> Optional[CatalogArtist]:
        """Best match for an artist name"""
        results = self.search(name, "artist", limit=1)
        return results.artists[0] if results.artists else None

    def search_artist_id(self, name: str) -> Optional[str]:
        artist = self.search_artist(name)
        return artist.id if artist else None

    def get_track_by_title_and_artist(self, title: str, artist: str) -> Optional[CatalogTrack]:
        if not title:
            return None
        query = f"track:{title} artist:{artist}" if artist else f"track:{title}"
        results = self.search(query, "track", limit=1)
        return results.tracks[0] if results.tracks else None

    def close(self):
        self.http.close()


# Singleton instance
catalog_client = CatalogClient()
