from typing import List, Optional

from database.gateway import DatabaseGateway
from domain.appointment.appointment_schema import AppointmentCreate
from domain.parent import parent_crud

TABLE = "appointments"


async def get_appointments_for_user(
    db: DatabaseGateway, user_id: str, completed: Optional[bool] = None
) -> List[dict]:
    filters = {"completed": completed} if completed is not None else None
    return await parent_crud.get_children_for_user(db, TABLE, user_id, filters)


async def get_appointments_for_parent(db: DatabaseGateway, parent_id: str) -> List[dict]:
    return await parent_crud.get_children_for_parent(db, TABLE, parent_id)


async def get_appointment(db: DatabaseGateway, appointment_id: str, user_id: str) -> Optional[dict]:
    return await parent_crud.get_owned_child(db, TABLE, appointment_id, user_id)


async def create_appointment(db: DatabaseGateway, appointment: AppointmentCreate) -> dict:
    data = appointment.model_dump(mode="json")
    data["completed"] = False
    return await db.insert(TABLE, data)


async def update_appointment(db: DatabaseGateway, appointment_id: str, updates: dict) -> dict:
    return await db.update(TABLE, {"id": appointment_id}, updates)


async def delete_appointment(db: DatabaseGateway, appointment_id: str) -> bool:
    return await db.delete(TABLE, {"id": appointment_id})
