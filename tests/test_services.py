# =============================================================================
# tests/test_services.py - Service Layer Tests
# =============================================================================
# The database client is patched with MagicMock so these tests cover only
# the business rules: ownership, not-found handling and the translation of
# raw database failures into classified errors.
# =============================================================================

from unittest.mock import patch

import pytest

from app.auth.security import hash_password
from app.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
)
from core.services import ItemService, UserService
from core.services.item_service import ITEM_NOT_FOUND, NOT_ITEM_OWNER
from core.services.user_service import DUPLICATE_EMAIL, INVALID_CREDENTIALS
from lib.supabase_client import SupabaseClientError

OWNER_ID = "a" * 24
OTHER_ID = "b" * 24
ITEM_ID = "c" * 24


@pytest.fixture
def mock_db():
    with patch("core.services.user_service.SupabaseClient") as user_db, \
            patch("core.services.item_service.SupabaseClient") as item_db:
        yield user_db, item_db


def _item(owner=OWNER_ID, likes=None):
    return {
        "id": ITEM_ID,
        "name": "Beanie",
        "weather": "cold",
        "image_url": "https://example.com/beanie.png",
        "owner": owner,
        "likes": likes or [],
    }


# =============================================================================
# UserService
# =============================================================================

class TestCreateUser:
    def test_hashes_password(self, mock_db):
        user_db, _ = mock_db
        user_db.fetch_user_by_email.return_value = None
        user_db.insert_user.side_effect = lambda data: {
            k: v for k, v in data.items() if k != "password"
        }

        user = UserService.create_user("Al", "a@a.com", "password1", rounds=4)

        stored = user_db.insert_user.call_args.args[0]
        assert stored["password"].startswith("$2")
        assert stored["password"] != "password1"
        assert len(stored["id"]) == 24
        assert "password" not in user

    def test_existing_email_is_conflict(self, mock_db):
        user_db, _ = mock_db
        user_db.fetch_user_by_email.return_value = {"id": OWNER_ID, "email": "a@a.com"}

        with pytest.raises(ConflictError) as exc_info:
            UserService.create_user("Al", "a@a.com", "password1", rounds=4)

        assert exc_info.value.message == DUPLICATE_EMAIL
        user_db.insert_user.assert_not_called()

    def test_racing_signup_is_conflict(self, mock_db):
        """The pre-check passed but the unique constraint fired."""
        user_db, _ = mock_db
        user_db.fetch_user_by_email.return_value = None
        user_db.insert_user.side_effect = SupabaseClientError("duplicate", code="23505")

        with pytest.raises(ConflictError):
            UserService.create_user("Al", "a@a.com", "password1", rounds=4)

    def test_database_down_is_internal(self, mock_db):
        user_db, _ = mock_db
        user_db.fetch_user_by_email.side_effect = SupabaseClientError("connection refused")

        with pytest.raises(InternalServerError):
            UserService.create_user("Al", "a@a.com", "password1", rounds=4)


class TestAuthenticate:
    def test_valid_credentials(self, mock_db):
        user_db, _ = mock_db
        user_db.fetch_user_by_email.return_value = {
            "id": OWNER_ID,
            "name": "Al",
            "avatar": "",
            "email": "a@a.com",
            "password": hash_password("password1", rounds=4),
        }

        user = UserService.authenticate("a@a.com", "password1")

        assert user["id"] == OWNER_ID
        assert "password" not in user

    def test_wrong_password(self, mock_db):
        user_db, _ = mock_db
        user_db.fetch_user_by_email.return_value = {
            "id": OWNER_ID,
            "email": "a@a.com",
            "password": hash_password("password1", rounds=4),
        }

        with pytest.raises(UnauthorizedError) as exc_info:
            UserService.authenticate("a@a.com", "wrongpass1")
        assert exc_info.value.message == INVALID_CREDENTIALS

    def test_unknown_email_same_error(self, mock_db):
        user_db, _ = mock_db
        user_db.fetch_user_by_email.return_value = None

        with pytest.raises(UnauthorizedError) as exc_info:
            UserService.authenticate("nobody@a.com", "password1")
        assert exc_info.value.message == INVALID_CREDENTIALS


class TestGetAndUpdateUser:
    def test_missing_user(self, mock_db):
        user_db, _ = mock_db
        user_db.fetch_user.return_value = None

        with pytest.raises(NotFoundError):
            UserService.get_user(OWNER_ID)

    def test_update_sends_only_given_fields(self, mock_db):
        user_db, _ = mock_db
        user_db.update_user.return_value = {"id": OWNER_ID, "name": "Alice"}

        UserService.update_user(OWNER_ID, name="Alice")

        user_db.update_user.assert_called_once_with(OWNER_ID, {"name": "Alice"})

    def test_empty_update_reads_profile(self, mock_db):
        user_db, _ = mock_db
        user_db.fetch_user.return_value = {"id": OWNER_ID, "name": "Al"}

        assert UserService.update_user(OWNER_ID)["name"] == "Al"
        user_db.update_user.assert_not_called()

    def test_update_of_deleted_user(self, mock_db):
        user_db, _ = mock_db
        user_db.update_user.return_value = None

        with pytest.raises(NotFoundError):
            UserService.update_user(OWNER_ID, name="Alice")

    def test_check_violation_is_bad_request(self, mock_db):
        user_db, _ = mock_db
        user_db.update_user.side_effect = SupabaseClientError("check", code="23514")

        with pytest.raises(BadRequestError):
            UserService.update_user(OWNER_ID, name="Alice")


# =============================================================================
# ItemService
# =============================================================================

class TestDeleteItem:
    def test_owner_can_delete(self, mock_db):
        _, item_db = mock_db
        item_db.fetch_item.return_value = _item()
        item_db.delete_item.return_value = _item()

        ItemService.delete_item(ITEM_ID, OWNER_ID)

        item_db.delete_item.assert_called_once_with(ITEM_ID)

    def test_non_owner_forbidden(self, mock_db):
        _, item_db = mock_db
        item_db.fetch_item.return_value = _item()

        with pytest.raises(ForbiddenError) as exc_info:
            ItemService.delete_item(ITEM_ID, OTHER_ID)

        assert exc_info.value.message == NOT_ITEM_OWNER
        item_db.delete_item.assert_not_called()

    def test_missing_item(self, mock_db):
        _, item_db = mock_db
        item_db.fetch_item.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            ItemService.delete_item(ITEM_ID, OWNER_ID)
        assert exc_info.value.message == ITEM_NOT_FOUND

    def test_deleted_concurrently(self, mock_db):
        _, item_db = mock_db
        item_db.fetch_item.return_value = _item()
        item_db.delete_item.return_value = None

        with pytest.raises(NotFoundError):
            ItemService.delete_item(ITEM_ID, OWNER_ID)

    def test_uppercase_id_normalized(self, mock_db):
        _, item_db = mock_db
        item_db.fetch_item.return_value = None

        with pytest.raises(NotFoundError):
            ItemService.delete_item(ITEM_ID.upper(), OWNER_ID)
        item_db.fetch_item.assert_called_once_with(ITEM_ID)


class TestLikes:
    def test_like_returns_item(self, mock_db):
        _, item_db = mock_db
        item_db.add_item_like.return_value = _item(likes=[OTHER_ID])

        item = ItemService.like_item(ITEM_ID, OTHER_ID)

        assert item["likes"] == [OTHER_ID]
        item_db.add_item_like.assert_called_once_with(ITEM_ID, OTHER_ID)

    def test_like_missing_item(self, mock_db):
        _, item_db = mock_db
        item_db.add_item_like.return_value = None

        with pytest.raises(NotFoundError):
            ItemService.like_item(ITEM_ID, OTHER_ID)

    def test_unlike_missing_item(self, mock_db):
        _, item_db = mock_db
        item_db.remove_item_like.return_value = None

        with pytest.raises(NotFoundError):
            ItemService.unlike_item(ITEM_ID, OTHER_ID)


class TestCreateAndList:
    def test_create_sets_owner_and_empty_likes(self, mock_db):
        _, item_db = mock_db
        item_db.insert_item.side_effect = lambda data: data

        item = ItemService.create_item("Beanie", "cold", "https://example.com/b.png", OWNER_ID)

        assert item["owner"] == OWNER_ID
        assert item["likes"] == []
        assert len(item["id"]) == 24

    def test_missing_owner_is_not_found(self, mock_db):
        _, item_db = mock_db
        item_db.insert_item.side_effect = SupabaseClientError("fk", code="23503")

        with pytest.raises(NotFoundError) as exc_info:
            ItemService.create_item("Beanie", "cold", "https://example.com/b.png", OWNER_ID)
        assert exc_info.value.message == "User not found"

    def test_list_failure_is_internal(self, mock_db):
        _, item_db = mock_db
        item_db.fetch_items.side_effect = SupabaseClientError("timeout", code="57014")

        with pytest.raises(InternalServerError):
            ItemService.list_items()
