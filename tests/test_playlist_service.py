import pytest
from fastapi import HTTPException

from app.db.models.playlist import Playlist, PlaylistSong
from app.schemas.playlist import PlaylistCreate, PlaylistSongAdd, PlaylistUpdate
from app.services.playlist_service import playlist_service


@pytest.fixture
def owner(make_user):
    return make_user("alice")


@pytest.fixture
def make_playlist(db_session, owner):
    def factory(titles=(), name="Road trip", user_id=None):
        playlist = playlist_service.create_playlist(db_session, user_id or owner.id, PlaylistCreate(name=name))
        for title in titles:
            playlist_service.add_song_to_playlist(
                db_session, playlist.id, user_id or owner.id,
                PlaylistSongAdd(title=title, artist=f"{title} artist"),
            )
        return playlist
    return factory


def titles_in_order(db_session, playlist, owner):
    songs = playlist_service.get_songs(db_session, playlist.id, owner.id)
    return [s.title for s in songs], [s.track_order for s in songs]


def song_id(db_session, playlist, title):
    return db_session.query(PlaylistSong).filter_by(playlist_id=playlist.id, title=title).one().id


def test_add_song_appends_in_order(db_session, owner, make_playlist):
    playlist = make_playlist()

    first = playlist_service.add_song_to_playlist(
        db_session, playlist.id, owner.id, PlaylistSongAdd(title="One", artist="A")
    )
    assert first.track_order == 0

    second = playlist_service.add_song_to_playlist(
        db_session, playlist.id, owner.id, PlaylistSongAdd(title="Two", artist="B")
    )
    assert second.track_order == 1


def test_reorder_to_front(db_session, owner, make_playlist):
    playlist = make_playlist(["One", "Two", "Three"])

    playlist_service.reorder_song(db_session, playlist.id, owner.id, song_id(db_session, playlist, "Three"), 0)

    assert titles_in_order(db_session, playlist, owner) == (["Three", "One", "Two"], [0, 1, 2])


def test_reorder_to_last_index(db_session, owner, make_playlist):
    playlist = make_playlist(["One", "Two", "Three"])

    playlist_service.reorder_song(db_session, playlist.id, owner.id, song_id(db_session, playlist, "One"), 2)

    assert titles_in_order(db_session, playlist, owner) == (["Two", "Three", "One"], [0, 1, 2])


@pytest.mark.parametrize("position,expected", [
    (-5, ["Two", "One", "Three"]),
    (99, ["One", "Three", "Two"]),
])
def test_reorder_clamps_out_of_range_positions(db_session, owner, make_playlist, position, expected):
    playlist = make_playlist(["One", "Two", "Three"])

    playlist_service.reorder_song(db_session, playlist.id, owner.id, song_id(db_session, playlist, "Two"), position)

    assert titles_in_order(db_session, playlist, owner) == (expected, [0, 1, 2])


def test_track_order_stays_contiguous_after_many_moves(db_session, owner, make_playlist):
    titles = ["A", "B", "C", "D", "E"]
    playlist = make_playlist(titles)
    ids = {t: song_id(db_session, playlist, t) for t in titles}

    for title, position in [("E", 0), ("A", 3), ("C", -1), ("B", 10), ("D", 2), ("E", 4)]:
        playlist_service.reorder_song(db_session, playlist.id, owner.id, ids[title], position)
        _, orders = titles_in_order(db_session, playlist, owner)
        assert orders == list(range(len(titles)))


def test_reorder_unknown_song_is_not_found(db_session, owner, make_playlist):
    playlist = make_playlist(["One"])

    with pytest.raises(HTTPException) as exc:
        playlist_service.reorder_song(db_session, playlist.id, owner.id, 12345, 0)
    assert exc.value.status_code == 404


def test_reorder_in_empty_playlist_is_not_found(db_session, owner, make_playlist):
    playlist = make_playlist()

    with pytest.raises(HTTPException) as exc:
        playlist_service.reorder_song(db_session, playlist.id, owner.id, 1, 0)
    assert exc.value.status_code == 404


def test_reorder_rejects_song_from_another_playlist(db_session, owner, make_playlist):
    mine = make_playlist(["One"])
    other = make_playlist(["Elsewhere"], name="Other")

    with pytest.raises(HTTPException) as exc:
        playlist_service.reorder_song(db_session, mine.id, owner.id, song_id(db_session, other, "Elsewhere"), 0)
    assert exc.value.status_code == 404


def test_remove_song_closes_the_gap(db_session, owner, make_playlist):
    playlist = make_playlist(["One", "Two", "Three"])

    remaining = playlist_service.remove_song(db_session, playlist.id, owner.id, song_id(db_session, playlist, "Two"))

    assert [s.title for s in remaining] == ["One", "Three"]
    assert titles_in_order(db_session, playlist, owner) == (["One", "Three"], [0, 1])


def test_delete_playlist_removes_its_songs(db_session, owner, make_playlist):
    playlist = make_playlist(["One", "Two"])
    keep = make_playlist(["Stay"], name="Keep")

    assert playlist_service.delete_playlist(db_session, playlist.id, owner.id) is True

    assert db_session.query(Playlist).filter_by(id=playlist.id).first() is None
    assert db_session.query(PlaylistSong).filter_by(playlist_id=playlist.id).count() == 0
    assert db_session.query(PlaylistSong).filter_by(playlist_id=keep.id).count() == 1


def test_delete_song_by_title_and_artist_is_scoped_to_user(db_session, owner, make_user, make_playlist):
    bob = make_user("bob")
    first = make_playlist(["One", "Hit", "Two"])
    second = make_playlist(["Hit"], name="Second")
    bobs = make_playlist(["Hit"], name="Bob's", user_id=bob.id)

    removed = playlist_service.delete_song_by_title_and_artist(db_session, owner.id, "Hit", "Hit artist")

    assert removed == 2
    assert titles_in_order(db_session, first, owner) == (["One", "Two"], [0, 1])
    assert playlist_service.get_songs(db_session, second.id, owner.id) == []
    assert [s.title for s in playlist_service.get_songs(db_session, bobs.id, bob.id)] == ["Hit"]


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_playlist_name_is_rejected(db_session, owner, name):
    with pytest.raises(HTTPException) as exc:
        playlist_service.create_playlist(db_session, owner.id, PlaylistCreate(name=name))
    assert exc.value.status_code == 400
    assert db_session.query(Playlist).count() == 0


def test_rename_playlist(db_session, owner, make_playlist):
    playlist = make_playlist()

    renamed = playlist_service.update_playlist(db_session, playlist.id, owner.id, PlaylistUpdate(name="  Chill  "))
    assert renamed.name == "Chill"

    with pytest.raises(HTTPException):
        playlist_service.update_playlist(db_session, playlist.id, owner.id, PlaylistUpdate(name=" "))


def test_playlists_are_private_to_their_owner(db_session, make_user, make_playlist):
    intruder = make_user("mallory")
    playlist = make_playlist(["One"])

    assert playlist_service.get_playlist(db_session, playlist.id, intruder.id) is None
    assert playlist_service.delete_playlist(db_session, playlist.id, intruder.id) is False
    with pytest.raises(HTTPException) as exc:
        playlist_service.reorder_song(db_session, playlist.id, intruder.id, song_id(db_session, playlist, "One"), 0)
    assert exc.value.status_code == 404


def test_user_playlists_carry_songs_in_track_order(db_session, owner, make_playlist):
    playlist = make_playlist(["One", "Two", "Three"])
    playlist_service.reorder_song(db_session, playlist.id, owner.id, song_id(db_session, playlist, "Three"), 0)
    db_session.expire_all()

    playlists = playlist_service.get_user_playlists(db_session, owner.id)

    assert [s.title for s in playlists[0].songs] == ["Three", "One", "Two"]
