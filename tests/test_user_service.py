"""User service tests."""

from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from src.models.user import User
from src.schemas.user import UserUpdate
from src.services.attribute_sync import AttributeSyncService
from src.services.attribute_value_service import AttributeValueService
from src.services.exceptions import StorageError
from src.services.user_service import UserService


def test_update_with_same_data_refreshes_updated_at(db, alice):
    """Test that updated_at moves even when name and email are unchanged."""
    db.query(User).filter(User.id == alice.id).update({User.updated_at: datetime(2000, 1, 1)})
    db.commit()

    user = UserService(db).update(alice.id, UserUpdate(name="Alice", email="a@x.com"))

    assert user.updated_at.year > 2000


def test_delete_storage_failure_rolls_back(db, attributes, alice, monkeypatch):
    """Test that a database error while deleting keeps the user and values."""
    age_id = attributes["Age"].id
    AttributeSyncService(db).save(alice.id, {age_id: "30"})

    def broken_delete(self, user_id):
        raise OperationalError("DELETE FROM user_attribute_values", {}, Exception("disk I/O"))

    monkeypatch.setattr(AttributeValueService, "delete_all_for_user", broken_delete)

    with pytest.raises(StorageError):
        UserService(db).delete(alice.id)

    monkeypatch.undo()
    assert UserService(db).get(alice.id).email == "a@x.com"
    assert [v.value for v in AttributeValueService(db).get_by_user(alice.id)] == ["30"]
