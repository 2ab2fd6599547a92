# ============================================================================
# FILE: app/schemas/catalog.py
# Typed views over catalog provider responses
# ============================================================================
"""
Every raw JSON payload from the catalog provider is converted here, once.
The provider nests most useful fields ("first artist", "first image",
"external_urls.spotify") and any of them may be missing or null, so each
`from_api` resolves them explicitly into optional fields instead of letting
callers index into the tree.
"""
import re
from datetime import date
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

_YEAR_MONTH = re.compile(r"^\d{4}-\d{2}$")
_YEAR = re.compile(r"^\d{4}$")

def _obj(value: Any) -> Dict:
    return value if isinstance(value, dict) else {}

def _first(value: Any) -> Dict:
    if isinstance(value, list) and value:
        return _obj(value[0])
    return {}

def _first_image_url(item: Dict) -> Optional[str]:
    return _first(item.get("images")).get("url")

def _external_url(item: Dict) -> Optional[str]:
    return _obj(item.get("external_urls")).get("spotify")

def _int_or_none(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None

def parse_release_date(raw: Optional[str]) -> Optional[date]:
    """
    Parse a provider release date. Precision varies per album:
    "2020-05-17", "2020-05" (first of month) or "2020" (first of year).
    Anything else is treated as unknown.
    """
    if not raw or not isinstance(raw, str):
        return None
    raw = raw.strip()
    try:
        if _YEAR_MONTH.match(raw):
            return date.fromisoformat(f"{raw}-01")
        if _YEAR.match(raw):
            return date.fromisoformat(f"{raw}-01-01")
        return date.fromisoformat(raw)
    except ValueError:
        return None

class CatalogArtist(BaseModel):
    id: Optional[str] = None
    name: str = ""
    genres: List[str] = []
    popularity: Optional[int] = None
    image_url: Optional[str] = None
    external_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: Any) -> Optional["CatalogArtist"]:
        item = _obj(data)
        if not item:
            return None
        return cls(
            id=item.get("id"),
            name=item.get("name") or "",
            genres=[g for g in item.get("genres") or [] if isinstance(g, str)],
            popularity=_int_or_none(item.get("popularity")),
            image_url=_first_image_url(item),
            external_url=_external_url(item),
        )

class CatalogAlbum(BaseModel):
    id: Optional[str] = None
    name: str = ""
    artist: Optional[str] = None
    image_url: Optional[str] = None
    external_url: Optional[str] = None
    release_date: Optional[date] = None
    popularity: Optional[int] = None

    @classmethod
    def from_api(cls, data: Any) -> Optional["CatalogAlbum"]:
        item = _obj(data)
        if not item:
            return None
        return cls(
            id=item.get("id"),
            name=item.get("name") or "",
            artist=_first(item.get("artists")).get("name"),
            image_url=_first_image_url(item),
            external_url=_external_url(item),
            release_date=parse_release_date(item.get("release_date")),
            popularity=_int_or_none(item.get("popularity")),
        )

class CatalogTrack(BaseModel):
    id: Optional[str] = None
    name: str = ""
    artist: Optional[str] = None
    album: Optional[str] = None
    image_url: Optional[str] = None
    external_url: Optional[str] = None
    release_date: Optional[date] = None
    popularity: Optional[int] = None
    duration_ms: Optional[int] = None

    @classmethod
    def from_api(cls, data: Any) -> Optional["CatalogTrack"]:
        item = _obj(data)
        if not item:
            return None
        album = _obj(item.get("album"))
        return cls(
            id=item.get("id"),
            name=item.get("name") or "",
            artist=_first(item.get("artists")).get("name"),
            album=album.get("name"),
            image_url=_first_image_url(album),
            external_url=_external_url(item),
            release_date=parse_release_date(album.get("release_date")),
            popularity=_int_or_none(item.get("popularity")),
            duration_ms=_int_or_none(item.get("duration_ms")),
        )

class CatalogPlaylist(BaseModel):
    id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    owner: Optional[str] = None
    image_url: Optional[str] = None
    external_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: Any) -> Optional["CatalogPlaylist"]:
        item = _obj(data)
        if not item:
            return None
        return cls(
            id=item.get("id"),
            name=item.get("name") or "",
            description=item.get("description") or None,
            owner=_obj(item.get("owner")).get("display_name"),
            image_url=_first_image_url(item),
            external_url=_external_url(item),
        )

class CatalogCategory(BaseModel):
    id: Optional[str] = None
    name: str = ""
    icon_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: Any) -> Optional["CatalogCategory"]:
        item = _obj(data)
        if not item:
            return None
        return cls(
            id=item.get("id"),
            name=item.get("name") or "",
            icon_url=_first(item.get("icons")).get("url"),
        )

class SearchResults(BaseModel):
    tracks: List[CatalogTrack] = []
    albums: List[CatalogAlbum] = []
    artists: List[CatalogArtist] = []

    @classmethod
    def from_api(cls, data: Any) -> "SearchResults":
        payload = _obj(data)
        return cls(
            tracks=convert_items(CatalogTrack, paged_items(payload, "tracks")),
            albums=convert_items(CatalogAlbum, paged_items(payload, "albums")),
            artists=convert_items(CatalogArtist, paged_items(payload, "artists")),
        )

def paged_items(payload: Any, key: str) -> List[Any]:
    """Items of a `{key: {"items": [...]}}` paging object, or [] when absent"""
    items = _obj(_obj(payload).get(key)).get("items")
    return items if isinstance(items, list) else []

def convert_items(model, items: List[Any]) -> List[Any]:
    """Convert raw items with `model.from_api`, dropping null entries"""
    converted = (model.from_api(item) for item in items)
    return [item for item in converted if item is not None]

class LibraryItem(BaseModel):
    """A card in the library view: any catalog entity reduced to display fields"""
    kind: str
    id: Optional[str] = None
    name: str
    subtitle: Optional[str] = None
    image_url: Optional[str] = None
    external_url: Optional[str] = None
    popularity: Optional[int] = None
    release_date: Optional[date] = None
