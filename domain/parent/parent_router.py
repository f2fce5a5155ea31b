from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from database.errors import NotFoundError
from database.gateway import DatabaseGateway
from database.session import get_db
from domain.auth.auth_schema import CurrentUser, MessageResponse
from domain.parent import parent_crud, parent_schema
from security import get_current_user
from services import insight_service

router = APIRouter(
    prefix="/parents",
    tags=["Parents"]
)


async def get_owned_parent(db: DatabaseGateway, parent_id: str, user_id: str) -> dict:
    try:
        return await parent_crud.get_parent(db, parent_id, user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Parent not found")


@router.get("", response_model=parent_schema.ParentList)
async def get_parents(
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    parents = await parent_crud.get_parents(db, current_user.id)
    return {"parents": parents}


@router.get("/{parent_id}", response_model=parent_schema.ParentDetail)
async def get_parent(
    parent_id: str,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    parent = await get_owned_parent(db, parent_id, current_user.id)
    return {"parent": parent}


@router.get("/{parent_id}/insights")
async def get_parent_insights(
    parent_id: str,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """남은 시간 계산 (기대 수명 기준)"""
    parent = await get_owned_parent(db, parent_id, current_user.id)
    insights = insight_service.calculate_insights(parent)
    return {"insights": parent_schema.ParentInsights(**insights)}


@router.post("", response_model=parent_schema.ParentMessage, status_code=status.HTTP_201_CREATED)
async def create_parent(
    parent: parent_schema.ParentCreate,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    new_parent = await parent_crud.create_parent(db, current_user.id, parent)
    return {"message": "Parent profile created successfully", "parent": new_parent}


@router.put("/{parent_id}", response_model=parent_schema.ParentMessage)
async def update_parent(
    parent_id: str,
    parent_update: parent_schema.ParentUpdate,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await get_owned_parent(db, parent_id, current_user.id)

    updates = parent_update.model_dump(mode="json", exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    try:
        updated_parent = await parent_crud.update_parent(db, parent_id, current_user.id, updates)
    except NotFoundError:
        # 확인 직후 삭제된 경우
        raise HTTPException(status_code=404, detail="Parent not found")
    return {"message": "Parent profile updated successfully", "parent": updated_parent}


@router.delete("/{parent_id}", response_model=MessageResponse)
async def delete_parent(
    parent_id: str,
    db: DatabaseGateway = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await get_owned_parent(db, parent_id, current_user.id)
    await parent_crud.delete_parent(db, parent_id, current_user.id)
    return {"message": "Parent profile deleted successfully"}
