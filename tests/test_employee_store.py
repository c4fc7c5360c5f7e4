import json
import os

from conftest import record
from employee_directory.database.employee_store import EmployeeStore
from employee_directory.database.json_storage import InMemoryStorage, JsonFileStorage
from employee_directory.utils.helpers import parse_timestamp


def test_missing_file_is_an_empty_collection(store, data_file):
    assert not os.path.exists(data_file)
    assert store.list_all() == []


def test_create_assigns_id_and_timestamps(store):
    employee = store.create(record())
    assert employee.id
    assert employee.name == "John Doe"
    assert employee.salary == 75000.0
    assert employee.created_at == employee.updated_at
    assert employee.deleted_at is None


def test_create_persists_whole_collection_as_camel_case_json(store, data_file):
    first = store.create(record())
    second = store.create(record(name="Jane Smith", email="jane.smith@example.com"))
    with open(data_file) as fh:
        documents = json.load(fh)
    assert [doc["id"] for doc in documents] == [first.id, second.id]
    assert documents[0]["phoneNo"] == "1234567890"
    assert documents[0]["deletedAt"] is None


def test_ids_are_unique(store):
    ids = {store.create(record(email=f"user{i}@example.com")).id for i in range(5)}
    assert len(ids) == 5


def test_find_by_id(store):
    employee = store.create(record(name="Jane Smith"))
    found = store.find_by_id(employee.id)
    assert found.name == "Jane Smith"
    assert found.id == employee.id
    assert store.find_by_id("missing") is None


def test_update_merges_and_refreshes_updated_at(store):
    employee = store.create(record(name="Bob Johnson", email="bob.johnson@example.com"))
    updated = store.update(employee.id, {"name": "Bob Johnson Jr.", "salary": 55000.0, "department": "finance"})

    assert updated.name == "Bob Johnson Jr."
    assert updated.salary == 55000.0
    assert updated.department == "finance"
    assert updated.email == "bob.johnson@example.com"
    assert updated.created_at == employee.created_at
    assert parse_timestamp(updated.updated_at) > parse_timestamp(employee.updated_at)
    assert store.find_by_id(employee.id).name == "Bob Johnson Jr."


def test_update_keeps_id_and_created_at(store):
    employee = store.create(record())
    updated = store.update(employee.id, {"id": "hijacked", "createdAt": "1970-01-01T00:00:00+00:00"})
    assert updated.id == employee.id
    assert updated.created_at == employee.created_at


def test_update_unknown_id_returns_none(store):
    assert store.update("missing", {"name": "Nobody"}) is None


def test_updated_at_strictly_increases_across_rapid_updates(store):
    employee = store.create(record())
    stamps = [employee.updated_at]
    for salary in range(5):
        stamps.append(store.update(employee.id, {"salary": float(salary)}).updated_at)
    parsed = [parse_timestamp(s) for s in stamps]
    assert all(later > earlier for earlier, later in zip(parsed, parsed[1:]))


def test_soft_delete_keeps_record(store):
    employee = store.create(record())
    assert store.soft_delete(employee.id) is True

    deleted = store.find_by_id(employee.id)
    assert deleted.is_deleted()
    assert deleted.deleted_at == deleted.updated_at
    assert store.find_active(employee.id) is None
    assert len(store.list_all()) == 1


def test_update_refuses_soft_deleted_record(store):
    employee = store.create(record())
    store.soft_delete(employee.id)
    deleted = store.find_by_id(employee.id)

    assert store.update(employee.id, {"salary": 1.0}) is None
    assert store.find_by_id(employee.id) == deleted


def test_soft_delete_unknown_or_repeated(store):
    employee = store.create(record())
    assert store.soft_delete("missing") is False
    assert store.soft_delete(employee.id) is True
    assert store.soft_delete(employee.id) is False


def test_store_uploaded_photo(store, upload_dir):
    path = store.store_uploaded_photo(b"\x89PNG", "PNG")
    directory, filename = path.split("/")
    assert directory == "avatars"
    assert filename.endswith(".png")
    with open(os.path.join(upload_dir, directory, filename), "rb") as fh:
        assert fh.read() == b"\x89PNG"
    assert store.store_uploaded_photo(b"x", "png") != path


def test_store_uploaded_photo_custom_directory(store):
    assert store.store_uploaded_photo(b"gif", ".gif", directory="documents").startswith("documents/")


def test_discard_photo(store, upload_dir):
    path = store.store_uploaded_photo(b"\x89PNG", "png")
    store.discard_photo(path)
    assert os.listdir(os.path.join(upload_dir, "avatars")) == []
    store.discard_photo(path)


def test_json_storage_roundtrip_leaves_no_temp_files(tmp_path):
    storage = JsonFileStorage(str(tmp_path / "nested" / "employees.json"))
    storage.save_all([{"id": "1"}])
    storage.save_all([{"id": "1"}, {"id": "2"}])
    assert storage.load() == [{"id": "1"}, {"id": "2"}]
    assert os.listdir(tmp_path / "nested") == ["employees.json"]


def test_store_works_with_any_storage_backend(upload_dir):
    store = EmployeeStore(InMemoryStorage(), upload_dir)
    employee = store.create(record())
    assert store.find_by_id(employee.id).email == "john.doe@example.com"
