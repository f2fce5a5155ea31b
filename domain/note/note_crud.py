from typing import List, Optional

from database.gateway import DatabaseGateway
from domain.note.note_schema import NoteCreate
from domain.parent import parent_crud

TABLE = "medical_notes"


async def get_notes_for_user(db: DatabaseGateway, user_id: str, note_type: Optional[str] = None) -> List[dict]:
    filters = {"type": note_type} if note_type else None
    return await parent_crud.get_children_for_user(db, TABLE, user_id, filters)


async def get_notes_for_parent(db: DatabaseGateway, parent_id: str) -> List[dict]:
    return await parent_crud.get_children_for_parent(db, TABLE, parent_id)


async def get_note(db: DatabaseGateway, note_id: str, user_id: str) -> Optional[dict]:
    return await parent_crud.get_owned_child(db, TABLE, note_id, user_id)


async def create_note(db: DatabaseGateway, note: NoteCreate) -> dict:
    return await db.insert(TABLE, note.model_dump(mode="json"))


async def update_note(db: DatabaseGateway, note_id: str, updates: dict) -> dict:
    return await db.update(TABLE, {"id": note_id}, updates)


async def delete_note(db: DatabaseGateway, note_id: str) -> bool:
    return await db.delete(TABLE, {"id": note_id})
