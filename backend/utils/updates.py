# backend/utils/updates.py
"""Partial updates driven by pydantic models with all-optional fields.

Only the fields a client actually sent are applied; SQL is produced by the
ORM from column attributes, never from concatenated field names.
"""
from typing import Any, Dict, Iterable

from fastapi import HTTPException
from pydantic import BaseModel


def changed_fields(payload: BaseModel, required: Iterable[str] = ()) -> Dict[str, Any]:
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    for field in required:
        if field in changes and changes[field] is None:
            raise HTTPException(status_code=400, detail=f"Field '{field}' cannot be null")
    return changes


def apply_changes(obj, changes: Dict[str, Any]):
    for key, value in changes.items():
        setattr(obj, key, value)
    return obj
