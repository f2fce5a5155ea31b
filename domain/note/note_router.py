from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from database.errors import NotFoundError
from database.gateway import DatabaseGateway
from database.session import get_db
from domain.auth.auth_schema import CurrentUser, MessageResponse
from domain.note import note_crud, note_schema
from domain.parent.parent_router import get_owned_parent
from security import get_current_user

router = APIRouter(
    prefix="/notes",
    tags=["Medical Notes"]
)

VALID_TYPES = [t.value for t in note_schema.NoteType]


async def get_owned_note(db: DatabaseGateway, note_id: str, user_id: str) -> dict:
    note = await note_crud.get_note(db, note_id, user_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Medical note not found")
    return note


@router.get("", response_model=note_schema.NoteList)
async def get_notes(
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    notes = await note_crud.get_notes_for_user(db, current_user.id)
    return {"notes": notes}


@router.get("/parent/{parent_id}", response_model=note_schema.NoteList)
async def get_parent_notes(
    parent_id: str,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await get_owned_parent(db, parent_id, current_user.id)
    notes = await note_crud.get_notes_for_parent(db, parent_id)
    return {"notes": notes}


@router.get("/type/{note_type}", response_model=note_schema.NoteList)
async def get_notes_by_type(
    note_type: str,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    if note_type not in VALID_TYPES:
        raise HTTPException(status_code=400, detail="Invalid note type")

    notes = await note_crud.get_notes_for_user(db, current_user.id, note_type)
    return {"notes": notes}


@router.post("", response_model=note_schema.NoteMessage, status_code=status.HTTP_201_CREATED)
async def create_note(
    note: note_schema.NoteCreate,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await get_owned_parent(db, str(note.parent_id), current_user.id)
    new_note = await note_crud.create_note(db, note)
    return {"message": "Medical note created successfully", "note": new_note}


@router.put("/{note_id}", response_model=note_schema.NoteMessage)
async def update_note(
    note_id: str,
    note_update: note_schema.NoteUpdate,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await get_owned_note(db, note_id, current_user.id)

    updates = note_update.model_dump(mode="json", exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    try:
        updated = await note_crud.update_note(db, note_id, updates)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Medical note not found")
    return {"message": "Medical note updated successfully", "note": updated}


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await get_owned_note(db, note_id, current_user.id)
    await note_crud.delete_note(db, note_id)
    return {"message": "Medical note deleted successfully"}
