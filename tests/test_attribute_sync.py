"""Attribute value replace-on-save tests."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.models.user_attribute_value import UserAttributeValue
from src.schemas.attribute import AttributeCreate
from src.services.attribute_service import AttributeService
from src.services.attribute_sync import AttributeSyncService, is_blank
from src.services.attribute_value_service import AttributeValueService
from src.services.exceptions import ConflictError, StorageError


class FailingValueService(AttributeValueService):
    """Value service whose Nth insert raises a database error."""

    def __init__(self, db, fail_on: int, error=IntegrityError):
        super().__init__(db)
        self.fail_on = fail_on
        self.error = error
        self.calls = 0

    def insert(self, user_id, attribute_id, value):
        self.calls += 1
        if self.calls == self.fail_on:
            raise self.error("INSERT INTO user_attribute_values", {}, Exception("simulated"))
        return super().insert(user_id, attribute_id, value)


def stored(db, user_id):
    """Return the user's stored values as {attribute_id: value}."""
    return {v.attribute_id: v.value for v in AttributeValueService(db).get_by_user(user_id)}


def make_attributes(db, count):
    service = AttributeService(db)
    return [
        service.create(AttributeCreate(attribute_name=f"Attr {i}", display_order=i)).id
        for i in range(1, count + 1)
    ]


@pytest.mark.parametrize("value", [None, "", " ", "\t\n "])
def test_is_blank(value):
    """Test that empty and whitespace-only values are blank."""
    assert is_blank(value)


def test_is_blank_keeps_content():
    """Test that values with content are not blank."""
    assert not is_blank(" x ")
    assert not is_blank("0")


def test_save_empty_map_removes_all_values(db, attributes, alice):
    """Test that saving an empty map leaves the user with no values."""
    sync = AttributeSyncService(db)
    sync.save(alice.id, {attributes["Age"].id: "30", attributes["Dept"].id: "Sales"})
    assert len(stored(db, alice.id)) == 2

    written = sync.save(alice.id, {})

    assert written == 0
    assert stored(db, alice.id) == {}


def test_save_empty_map_without_prior_values(db, alice):
    """Test that saving an empty map for a user with no values is a no-op."""
    assert AttributeSyncService(db).save(alice.id, {}) == 0
    assert stored(db, alice.id) == {}


def test_save_replaces_instead_of_merging(db, attributes, alice):
    """Test that a second save drops values not present in the new map."""
    age_id = attributes["Age"].id
    dept_id = attributes["Dept"].id
    sync = AttributeSyncService(db)

    sync.save(alice.id, {age_id: "1"})
    sync.save(alice.id, {dept_id: "2"})

    assert stored(db, alice.id) == {dept_id: "2"}


def test_save_prunes_blank_values(db, alice):
    """Test that only non-blank values are persisted."""
    a, b, c = make_attributes(db, 3)

    written = AttributeSyncService(db).save(alice.id, {a: "", b: "  ", c: "x"})

    assert written == 1
    assert stored(db, alice.id) == {c: "x"}


def test_save_stores_value_unmodified(db, attributes, alice):
    """Test that surrounding whitespace is kept on stored values."""
    age_id = attributes["Age"].id

    AttributeSyncService(db).save(alice.id, {age_id: " 30 "})

    assert stored(db, alice.id) == {age_id: " 30 "}


def test_save_does_not_check_data_type(db, attributes, alice):
    """Test that a Number attribute accepts any string."""
    age_id = attributes["Age"].id

    AttributeSyncService(db).save(alice.id, {age_id: "thirty"})

    assert stored(db, alice.id) == {age_id: "thirty"}


def test_save_is_atomic_on_simulated_failure(db, alice):
    """Test that a failing third insert leaves the previous values intact."""
    ids = make_attributes(db, 6)
    AttributeSyncService(db).save(alice.id, {ids[5]: "before"})

    failing = FailingValueService(db, fail_on=3)
    sync = AttributeSyncService(db, value_service=failing)
    with pytest.raises(ConflictError):
        sync.save(alice.id, {attribute_id: f"v{attribute_id}" for attribute_id in ids[:5]})

    assert failing.calls == 3
    assert stored(db, alice.id) == {ids[5]: "before"}


def test_save_storage_failure_raises_storage_error(db, alice):
    """Test that a non-constraint database error rolls back and becomes StorageError."""
    a, b, c = make_attributes(db, 3)
    AttributeSyncService(db).save(alice.id, {a: "old"})

    failing = FailingValueService(db, fail_on=2, error=OperationalError)
    sync = AttributeSyncService(db, value_service=failing)
    with pytest.raises(StorageError):
        sync.save(alice.id, {b: "1", c: "2"})

    assert stored(db, alice.id) == {a: "old"}


def test_seed_defaults_on_empty_catalog(db):
    """Test that the default catalog is inserted once."""
    service = AttributeService(db)

    assert service.seed_defaults() == 4
    assert [(a.attribute_name, a.data_type, a.is_required) for a in service.list_all()] == [
        ("Age", "Number", False),
        ("Department", "Text", True),
        ("Position", "Text", False),
        ("Hire Date", "Date", True),
    ]

    assert service.seed_defaults() == 0
    assert len(service.list_all()) == 4


def test_seed_defaults_skips_existing_catalog(db, attributes):
    """Test that seeding leaves a non-empty catalog alone."""
    service = AttributeService(db)

    assert service.seed_defaults() == 0
    assert [a.attribute_name for a in service.list_all()] == ["Age", "Dept"]


def test_save_is_atomic_on_unknown_attribute(db, alice):
    """Test that a foreign key violation on the third value rolls back everything."""
    a, b, c, d = make_attributes(db, 4)
    sync = AttributeSyncService(db)
    sync.save(alice.id, {a: "old"})

    with pytest.raises(ConflictError):
        sync.save(alice.id, {a: "1", b: "2", 999999: "3", c: "4", d: "5"})

    assert stored(db, alice.id) == {a: "old"}


def test_save_unknown_user_conflicts(db, attributes):
    """Test that values for a missing user violate the user foreign key."""
    with pytest.raises(ConflictError):
        AttributeSyncService(db).save(424242, {attributes["Age"].id: "30"})

    assert db.query(UserAttributeValue).count() == 0


def test_save_sets_timestamps(db, attributes, alice):
    """Test that inserted rows get created and updated timestamps."""
    AttributeSyncService(db).save(alice.id, {attributes["Age"].id: "30"})

    (row,) = AttributeValueService(db).get_by_user(alice.id)
    assert row.created_at is not None
    assert row.updated_at is not None


def test_saves_for_different_users_are_independent(db, attributes):
    """Test that saving one user's values does not touch another's."""
    from src.schemas.user import UserCreate
    from src.services.user_service import UserService

    users = UserService(db)
    alice = users.create(UserCreate(name="Alice", email="alice@example.com"))
    bob = users.create(UserCreate(name="Bob", email="bob@example.com"))
    age_id = attributes["Age"].id
    sync = AttributeSyncService(db)

    sync.save(alice.id, {age_id: "30"})
    sync.save(bob.id, {age_id: "40"})
    sync.save(bob.id, {})

    assert stored(db, alice.id) == {age_id: "30"}
    assert stored(db, bob.id) == {}


def test_insert_duplicate_pair_conflicts(db, attributes, alice):
    """Test that the store refuses a second value for the same attribute."""
    service = AttributeValueService(db)
    age_id = attributes["Age"].id
    service.insert(alice.id, age_id, "30")

    with pytest.raises(ConflictError):
        service.insert(alice.id, age_id, "31")

    db.rollback()


def test_delete_all_for_user_returns_count(db, attributes, alice):
    """Test that deleting a user's values reports how many went."""
    AttributeSyncService(db).save(
        alice.id, {attributes["Age"].id: "30", attributes["Dept"].id: "Sales"}
    )

    removed = AttributeValueService(db).delete_all_for_user(alice.id)
    db.commit()

    assert removed == 2
    assert stored(db, alice.id) == {}


def test_end_to_end_required_attribute_is_still_pruned(db, attributes, alice):
    """Test that a blank required attribute is pruned like any other."""
    age_id = attributes["Age"].id
    dept_id = attributes["Dept"].id

    AttributeSyncService(db).save(alice.id, {age_id: "30", dept_id: ""})

    rows = AttributeValueService(db).get_by_user(alice.id)
    assert [(r.user_id, r.attribute_id, r.value) for r in rows] == [(alice.id, age_id, "30")]
