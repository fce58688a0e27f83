# tests/test_client_cache.py
from medicall.client.cache import ClientCache
from medicall.config.constants import StorageKey
from medicall.schemas.doctor import Doctor, Visit
from medicall.schemas.shared import User


def test_missing_entry_reads_as_none(cache):
    assert cache.get(StorageKey.DOCTORS) is None
    assert cache.load_models(StorageKey.DOCTORS, Doctor) is None


def test_models_are_stored_in_wire_format(cache):
    doctor = Doctor(id="d1", name="A", sub_specialty="Cadera", visits=[Visit(id="v1", follow_up="2025-04-01")])
    cache.save_models(StorageKey.DOCTORS, [doctor])

    stored = cache.load_json(StorageKey.DOCTORS)
    assert stored[0]["subSpecialty"] == "Cadera"
    assert stored[0]["visits"][0]["followUp"] == "2025-04-01"
    assert cache.load_models(StorageKey.DOCTORS, Doctor) == [doctor]


def test_corrupt_json_is_ignored(cache):
    cache.set(StorageKey.PROCEDURES, "{not json")
    assert cache.load_json(StorageKey.PROCEDURES) is None


def test_wrong_shape_is_ignored(cache):
    cache.save_json(StorageKey.USER, {"name": "sin id"})
    assert cache.load_model(StorageKey.USER, User) is None


def test_remove_and_overwrite(cache):
    cache.set(StorageKey.SIDEBAR, "true")
    cache.set(StorageKey.SIDEBAR, "false")
    assert cache.get(StorageKey.SIDEBAR) == "false"

    cache.remove(StorageKey.SIDEBAR)
    assert cache.get(StorageKey.SIDEBAR) is None
    # removing twice is fine
    cache.remove(StorageKey.SIDEBAR)


def test_entries_survive_a_new_instance(client_settings):
    ClientCache(client_settings.cache_dir).save_model(StorageKey.USER, User(id="u1", name="Ana"))

    reopened = ClientCache(client_settings.cache_dir)
    assert reopened.load_model(StorageKey.USER, User) == User(id="u1", name="Ana")
    # no temp files left behind by the atomic write
    assert sorted(p.name for p in reopened.cache_dir.iterdir()) == [f"{StorageKey.USER.value}.json"]
