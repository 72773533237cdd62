"""
Device-resident store: device id, content-hashed favorites and ratings.
"""

import pytest

from excusegen.core.errors import ExcuseValidationError
from excusegen.core.local_store import DEVICE_ID_KEY, FAVORITES_KEY, LocalStore, excuse_key


@pytest.fixture
def store(tmp_path):
    return LocalStore(str(tmp_path / "device.db"), max_favorites=3)


def test_excuse_key_is_sha256_of_stripped_text():
    assert excuse_key("My car broke down.") == excuse_key("  My car broke down.\n")
    assert excuse_key("My car broke down.") != excuse_key("My car broke down!")
    assert len(excuse_key("x")) == 64


def test_device_id_is_generated_once(store, tmp_path):
    device_id = store.get_device_id()

    assert device_id.startswith("device_")
    assert store.get_device_id() == device_id
    assert LocalStore(str(tmp_path / "device.db")).get_device_id() == device_id


def test_favorite_changes_do_not_create_a_device_id(store):
    store.save_favorite("An excuse")
    store.remove_favorite(excuse_key("An excuse"))

    assert store.get_item(DEVICE_ID_KEY) is None


class TestLocalFavorites:

    def test_save_and_list_newest_first(self, store):
        store.save_favorite("First excuse", "Late to work", "absurd", "short")
        store.save_favorite("Second excuse")

        favorites = store.get_favorites()

        assert [fav.excuse for fav in favorites] == ["Second excuse", "First excuse"]
        assert favorites[1].situation == "Late to work"
        assert favorites[1].id == excuse_key("First excuse")

    def test_duplicate_save_is_idempotent(self, store):
        store.save_favorite("Same excuse")
        result = store.save_favorite("Same excuse ")

        assert result.success is True
        assert result.already_favorited is True
        assert store.favorites_count() == 1

    def test_cap_is_enforced(self, store):
        for i in range(3):
            assert store.save_favorite(f"Excuse {i}").success is True

        result = store.save_favorite("One too many")

        assert result.success is False
        assert result.limit_reached is True
        assert store.favorites_count() == 3

    def test_existing_favorite_succeeds_at_cap(self, store):
        for i in range(3):
            store.save_favorite(f"Excuse {i}")

        result = store.save_favorite("Excuse 0")

        assert result.success is True
        assert result.limit_reached is False

    def test_empty_text_is_not_saved(self, store):
        assert store.save_favorite("   ").success is False
        assert store.favorites_count() == 0

    def test_remove_and_is_favorited(self, store):
        store.save_favorite("Keep me")
        store.save_favorite("Remove me")

        assert store.is_favorited("Remove me") is True
        assert store.remove_favorite(excuse_key("Remove me")) is True
        assert store.is_favorited("Remove me") is False
        assert store.remove_favorite(excuse_key("Remove me")) is False
        assert store.is_favorited("Keep me") is True

    def test_clear_all_returns_count(self, store):
        store.save_favorite("a")
        store.save_favorite("b")

        assert store.clear_all_favorites() == 2
        assert store.get_favorites() == []

    def test_unreadable_value_reads_as_empty(self, store):
        store.set_item(FAVORITES_KEY, "{broken")
        assert store.get_favorites() == []


class TestLocalRatings:

    def test_rating_is_keyed_by_text(self, store):
        store.save_rating("Great excuse", 5)
        store.save_rating("Bad excuse", 1)

        assert store.get_rating("Great excuse") == 5
        assert store.get_rating(" Great excuse ") == 5
        assert store.get_rating("Bad excuse") == 1
        assert store.get_rating("Unrated") is None

    def test_rating_overwrites_previous(self, store):
        store.save_rating("Excuse", 2)
        store.save_rating("Excuse", 4)
        assert store.get_rating("Excuse") == 4

    @pytest.mark.parametrize("stars", [0, 6, "5"])
    def test_invalid_rating_rejected(self, store, stars):
        with pytest.raises(ExcuseValidationError):
            store.save_rating("Excuse", stars)
        assert store.get_rating("Excuse") is None
