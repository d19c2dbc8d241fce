import pytest

from airbrb_client.db.store import KeyValueStore
from airbrb_client.schemas.notifications import NotificationType
from airbrb_client.services.notifications import NotificationCenter, storage_key

EMAIL = "host@example.com"


@pytest.mark.unit
def test_add_prepends_newest_first(store: KeyValueStore) -> None:
    center = NotificationCenter(store, EMAIL)

    center.add(NotificationType.HOST, "first")
    center.add(NotificationType.GUEST, "second")

    assert [n.message for n in center.items()] == ["second", "first"]
    assert center.unread_count == 2


@pytest.mark.unit
def test_list_is_capped_and_drops_oldest(store: KeyValueStore) -> None:
    center = NotificationCenter(store, EMAIL)

    for i in range(31):
        center.add(NotificationType.HOST, f"n{i}")

    items = center.items()
    assert len(items) == 30
    assert items[0].message == "n30"
    assert items[-1].message == "n1"
    assert len(store.get_json(storage_key(EMAIL))) == 30


@pytest.mark.unit
def test_every_mutation_is_persisted(store: KeyValueStore) -> None:
    center = NotificationCenter(store, EMAIL)
    kept = center.add(NotificationType.HOST, "keep")
    gone = center.add(NotificationType.HOST, "drop")

    center.mark_read(kept.id)
    center.dismiss(gone.id)

    reloaded = NotificationCenter(store, EMAIL)
    items = reloaded.load()
    assert [n.message for n in items] == ["keep"]
    assert items[0].read is True
    assert items[0].id == kept.id


@pytest.mark.unit
def test_mark_all_read(store: KeyValueStore) -> None:
    center = NotificationCenter(store, EMAIL)
    center.add(NotificationType.HOST, "a")
    center.add(NotificationType.GUEST, "b")

    center.mark_all_read()

    assert center.unread_count == 0
    assert all(n.read for n in NotificationCenter(store, EMAIL).load())


@pytest.mark.unit
def test_unknown_ids_are_reported(store: KeyValueStore) -> None:
    center = NotificationCenter(store, EMAIL)
    center.add(NotificationType.HOST, "a")

    assert center.mark_read("missing") is None
    assert center.dismiss("missing") is False
    assert len(center.items()) == 1


@pytest.mark.unit
def test_histories_are_namespaced_per_user(store: KeyValueStore) -> None:
    NotificationCenter(store, EMAIL).add(NotificationType.HOST, "for host")

    other = NotificationCenter(store, "guest@example.com")

    assert other.load() == []


@pytest.mark.unit
@pytest.mark.parametrize("stored", [{"not": "a list"}, [{"type": "alien"}], "text"])
def test_invalid_stored_history_loads_empty(store: KeyValueStore, stored: object) -> None:
    store.set_json(storage_key(EMAIL), stored)

    assert NotificationCenter(store, EMAIL).load() == []
