from typing import List, Optional

from database.errors import NotFoundError
from database.gateway import DatabaseGateway
from domain.parent.parent_schema import ParentCreate

TABLE = "parents"
# 자식 행 조회 시 부모 정보를 함께 가져옴 (소유자 확인용)
OWNER_JOIN = "*,parents!inner(user_id)"
SUMMARY_JOIN = "*,parents!inner(id,name,user_id)"


async def get_parents(db: DatabaseGateway, user_id: str) -> List[dict]:
    return await db.select_many(TABLE, {"user_id": user_id}, order_by=("created_at", True))


async def get_parent(db: DatabaseGateway, parent_id: str, user_id: str) -> dict:
    """소유자가 다르면 존재하지 않는 것과 똑같이 NotFoundError"""
    return await db.select_one(TABLE, {"id": parent_id, "user_id": user_id})


async def get_parent_ids(db: DatabaseGateway, user_id: str) -> List[str]:
    rows = await db.select_many(TABLE, {"user_id": user_id}, columns="id")
    return [row["id"] for row in rows]


async def create_parent(db: DatabaseGateway, user_id: str, parent: ParentCreate) -> dict:
    data = parent.model_dump(mode="json")
    data["user_id"] = user_id
    return await db.insert(TABLE, data)


async def update_parent(db: DatabaseGateway, parent_id: str, user_id: str, updates: dict) -> dict:
    return await db.update(TABLE, {"id": parent_id, "user_id": user_id}, updates)


async def delete_parent(db: DatabaseGateway, parent_id: str, user_id: str) -> bool:
    return await db.delete(TABLE, {"id": parent_id, "user_id": user_id})


async def get_children_for_user(
    db: DatabaseGateway,
    table: str,
    user_id: str,
    filters: Optional[dict] = None,
) -> List[dict]:
    """사용자의 모든 부모님에 속한 행을 날짜 내림차순으로 조회"""
    parent_ids = await get_parent_ids(db, user_id)
    if not parent_ids:
        return []

    conditions = {"parent_id": parent_ids}
    conditions.update(filters or {})
    return await db.select_many(table, conditions, order_by=("date", False), columns=SUMMARY_JOIN)


async def get_children_for_parent(db: DatabaseGateway, table: str, parent_id: str) -> List[dict]:
    return await db.select_many(table, {"parent_id": parent_id}, order_by=("date", False))


async def get_owned_child(db: DatabaseGateway, table: str, row_id: str, user_id: str) -> Optional[dict]:
    """부모님을 통해 소유자를 확인. 없거나 남의 것이면 None"""
    try:
        row = await db.select_one(table, {"id": row_id}, columns=OWNER_JOIN)
    except NotFoundError:
        return None

    owner = (row.get("parents") or {}).get("user_id")
    if owner != user_id:
        return None
    return row
