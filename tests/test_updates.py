from typing import Optional

import pytest
from fastapi import HTTPException
from pydantic import BaseModel

from utils.updates import apply_changes, changed_fields


class Patch(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None


class Target:
    name = "old"
    phone = "123"


def test_only_sent_fields_are_returned():
    assert changed_fields(Patch(phone=None)) == {"phone": None}
    assert changed_fields(Patch.model_validate({"name": "new"})) == {"name": "new"}


def test_empty_change_set_rejected():
    with pytest.raises(HTTPException) as exc:
        changed_fields(Patch())
    assert exc.value.status_code == 400
    assert exc.value.detail == "No fields to update"


def test_null_for_required_field_rejected():
    with pytest.raises(HTTPException) as exc:
        changed_fields(Patch(name=None), required=("name",))
    assert exc.value.detail == "Field 'name' cannot be null"


def test_apply_changes():
    target = apply_changes(Target(), {"name": "new"})

    assert (target.name, target.phone) == ("new", "123")
