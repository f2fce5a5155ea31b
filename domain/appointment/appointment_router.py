from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from database.errors import NotFoundError
from database.gateway import DatabaseGateway
from database.session import get_db
from domain.auth.auth_schema import CurrentUser, MessageResponse
from domain.appointment import appointment_crud, appointment_schema
from domain.parent.parent_router import get_owned_parent
from security import get_current_user

router = APIRouter(
    prefix="/appointments",
    tags=["Appointments"]
)


async def get_owned_appointment(db: DatabaseGateway, appointment_id: str, user_id: str) -> dict:
    appointment = await appointment_crud.get_appointment(db, appointment_id, user_id)
    if appointment is None:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


@router.get("", response_model=appointment_schema.AppointmentList)
async def get_appointments(
    completed: Optional[bool] = None,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """내 모든 부모님의 진료 예약 (날짜 내림차순)"""
    appointments = await appointment_crud.get_appointments_for_user(db, current_user.id, completed)
    return {"appointments": appointments}


@router.get("/parent/{parent_id}", response_model=appointment_schema.AppointmentList)
async def get_parent_appointments(
    parent_id: str,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await get_owned_parent(db, parent_id, current_user.id)
    appointments = await appointment_crud.get_appointments_for_parent(db, parent_id)
    return {"appointments": appointments}


@router.post("", response_model=appointment_schema.AppointmentMessage, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    appointment: appointment_schema.AppointmentCreate,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await get_owned_parent(db, str(appointment.parent_id), current_user.id)
    new_appointment = await appointment_crud.create_appointment(db, appointment)
    return {"message": "Appointment created successfully", "appointment": new_appointment}


@router.put("/{appointment_id}", response_model=appointment_schema.AppointmentMessage)
async def update_appointment(
    appointment_id: str,
    appointment_update: appointment_schema.AppointmentUpdate,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await get_owned_appointment(db, appointment_id, current_user.id)

    updates = appointment_update.model_dump(mode="json", exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    try:
        updated = await appointment_crud.update_appointment(db, appointment_id, updates)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return {"message": "Appointment updated successfully", "appointment": updated}


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(
    appointment_id: str,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await get_owned_appointment(db, appointment_id, current_user.id)
    await appointment_crud.delete_appointment(db, appointment_id)
    return {"message": "Appointment deleted successfully"}
