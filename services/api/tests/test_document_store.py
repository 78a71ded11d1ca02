import pytest
from unittest.mock import AsyncMock, MagicMock
from redis.exceptions import ConnectionError as RedisConnectionError

from chefai.infra.document_store import DocumentStore, API_KEY, PREFERENCES, chat_history_key
from chefai.services.profile import ProfileService
from chefai.settings import PLACEHOLDER_API_KEY


def broken_redis():
    r = MagicMock()
    r.get = AsyncMock(side_effect=RedisConnectionError("down"))
    r.set = AsyncMock(side_effect=RedisConnectionError("down"))
    r.delete = AsyncMock(side_effect=RedisConnectionError("down"))
    r.ping = AsyncMock(side_effect=RedisConnectionError("down"))
    return r


@pytest.mark.asyncio
async def test_set_get_remove(store, fake_redis):
    assert await store.set("meal_plans", {"Senin": []}) is True
    assert await store.get("meal_plans") == {"Senin": []}

    # Namespaced under the prefix, stored as JSON text
    assert await fake_redis.get("test:meal_plans") == '{"Senin": []}'

    assert await store.remove("meal_plans") is True
    assert await store.get("meal_plans", default="absent") == "absent"


@pytest.mark.asyncio
async def test_chat_keys_are_per_recipe(store):
    await store.set(chat_history_key("52772"), ["a"])
    await store.set(chat_history_key("52773"), ["b"])
    assert await store.get(chat_history_key("52772")) == ["a"]
    assert await store.get(chat_history_key("52773")) == ["b"]


@pytest.mark.asyncio
async def test_failures_never_raise():
    store = DocumentStore(broken_redis(), prefix="test")

    assert await store.get("shopping_list", default=[]) == []
    value, ok = await store.load("shopping_list", [])
    assert value == [] and ok is False
    assert await store.set("shopping_list", []) is False
    assert await store.remove("shopping_list") is False
    assert await store.ping() is False


@pytest.mark.asyncio
async def test_missing_key_is_not_a_failure(store):
    value, ok = await store.load("nothing_here", {})
    assert value == {}
    assert ok is True


@pytest.mark.asyncio
async def test_corrupt_document_reported_as_failed_read(store, fake_redis):
    await fake_redis.set("test:finished_recipes", "{not json")
    value, ok = await store.load("finished_recipes", [])
    assert value == []
    assert ok is False


# --- Profile on top of the store ---

@pytest.mark.asyncio
async def test_save_settings_partial_failure_keeps_the_successful_write(store, monkeypatch):
    real_set = store.set

    async def flaky_set(key, value):
        if key == API_KEY:
            return False
        return await real_set(key, value)

    monkeypatch.setattr(store, "set", flaky_set)
    profile = ProfileService(store)

    assert await profile.save_settings("my-key", "no peanuts") is False
    # No rollback: preferences were written
    assert await store.get(PREFERENCES) == "no peanuts"
    assert await store.get(API_KEY) is None


@pytest.mark.asyncio
async def test_save_settings_both_succeed(profile):
    assert await profile.save_settings("  my-key ", "vegetarian") is True
    assert await profile.get_api_key() == "my-key"
    assert await profile.get_preferences() == "vegetarian"


@pytest.mark.asyncio
async def test_preferences_default_to_empty(profile):
    assert await profile.get_preferences() == ""


@pytest.mark.asyncio
async def test_active_key_resolution(store):
    placeholder = ProfileService(store, default_api_key=PLACEHOLDER_API_KEY)
    assert await placeholder.get_active_api_key() is None

    with_default = ProfileService(store, default_api_key="build-key")
    assert await with_default.get_active_api_key() == "build-key"

    await store.set(API_KEY, "user-key")
    assert await with_default.get_active_api_key() == "user-key"
    assert await placeholder.get_active_api_key() == "user-key"

    await placeholder.remove_api_key()
    assert await placeholder.get_active_api_key() is None


@pytest.mark.asyncio
async def test_blank_user_key_falls_back_to_default(store):
    await store.set(API_KEY, "   ")
    profile = ProfileService(store, default_api_key="build-key")
    assert await profile.get_active_api_key() == "build-key"


@pytest.mark.asyncio
async def test_ping(store):
    assert await store.ping() is True


@pytest.mark.asyncio
async def test_non_string_profile_documents_are_ignored(store):
    await store.set(API_KEY, {"key": "user-key"})
    await store.set(PREFERENCES, ["vegan"])
    profile = ProfileService(store, default_api_key="build-key")

    assert await profile.get_api_key() is None
    assert await profile.get_active_api_key() == "build-key"
    assert await profile.get_preferences() == ""
