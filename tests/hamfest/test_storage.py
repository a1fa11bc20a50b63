from pathlib import Path

from pytest_mock import MockerFixture

from hamfest.enums import ViewMode
from hamfest.storage import JsonFileStorage, MemoryStorage, PersistedValue


def test_persisted_value__nothing_stored__uses_initial_value(
    memory_storage: MemoryStorage,
) -> None:
    value = PersistedValue(memory_storage, "view", ViewMode.GRID, parse=ViewMode)

    assert value.value == ViewMode.GRID
    assert value.hydrated


def test_persisted_value__not_hydrated__exposes_initial_value_until_hydrate(
    memory_storage: MemoryStorage,
) -> None:
    memory_storage.set_item("view", '"list"')

    value = PersistedValue(memory_storage, "view", ViewMode.GRID, parse=ViewMode, hydrate=False)
    assert not value.hydrated
    assert value.value == ViewMode.GRID

    assert value.hydrate() == ViewMode.LIST
    assert value.hydrated
    assert value.value == ViewMode.LIST


def test_persisted_value_set__enum_value__is_stored_as_json_string(
    memory_storage: MemoryStorage,
) -> None:
    value = PersistedValue(memory_storage, "view", ViewMode.GRID, parse=ViewMode)

    value.set(ViewMode.LIST)

    assert value.value == ViewMode.LIST
    assert memory_storage.get_item("view") == '"list"'


def test_persisted_value__unparseable_stored_value__falls_back_to_initial_value(
    memory_storage: MemoryStorage,
) -> None:
    memory_storage.set_item("view", "{not json")

    value = PersistedValue(memory_storage, "view", ViewMode.GRID, parse=ViewMode)

    assert value.value == ViewMode.GRID
    assert value.hydrated


def test_persisted_value__storage_unavailable__never_raises(mocker: MockerFixture) -> None:
    storage = MemoryStorage()
    mocker.patch.object(storage, "get_item", side_effect=OSError("read-only file system"))
    mocker.patch.object(storage, "set_item", side_effect=OSError("read-only file system"))

    value = PersistedValue(storage, "view", ViewMode.GRID, parse=ViewMode)
    value.set(ViewMode.LIST)

    assert value.value == ViewMode.LIST


def test_json_file_storage__value_written__is_read_back_by_new_instance(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "storage.json"

    JsonFileStorage(path).set_item("listings-view-mode", '"list"')
    JsonFileStorage(path).set_item("other", '"x"')

    storage = JsonFileStorage(path)
    assert storage.get_item("listings-view-mode") == '"list"'
    assert storage.get_item("other") == '"x"'
    assert storage.get_item("missing") is None


def test_json_file_storage__corrupt_file__is_replaced_on_write(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    storage = JsonFileStorage(path)

    value = PersistedValue(storage, "view", ViewMode.GRID, parse=ViewMode)
    assert value.value == ViewMode.GRID

    value.set(ViewMode.LIST)

    assert storage.get_item("view") == '"list"'
