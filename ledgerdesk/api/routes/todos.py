from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk import actions
from ledgerdesk.api.deps import get_principal
from ledgerdesk.database import get_db
from ledgerdesk.schemas import ActionResult, TodoCreateRequest, TodoOut
from ledgerdesk.services.auth import Principal

router = APIRouter()


@router.get("", response_model=ActionResult[list[TodoOut]], summary="List own todos")
async def list_todos(
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.list_todos(db, principal)


@router.post("", response_model=ActionResult[TodoOut], summary="Add todo")
async def add_todo(
    body: TodoCreateRequest,
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.add_todo(db, principal, body.title)


@router.post("/{todo_id}/toggle", response_model=ActionResult[TodoOut], summary="Toggle completion")
async def toggle_todo(
    todo_id: int = Path(...),
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.toggle_todo(db, principal, todo_id)


@router.delete("/{todo_id}", response_model=ActionResult[None], summary="Delete todo")
async def delete_todo(
    todo_id: int = Path(...),
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.delete_todo(db, principal, todo_id)
