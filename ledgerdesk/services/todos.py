from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.models import Todo
from ledgerdesk.repositories import todo_repo
from ledgerdesk.services.auth import Principal, require_principal
from ledgerdesk.services.errors import InvalidInputError, NotFoundError


class TodoService:
    async def list_todos(self, db: AsyncSession, principal: Principal | None) -> list[Todo]:
        principal = require_principal(principal)
        return await todo_repo.list_for_user(db, principal.user_id)

    async def add_todo(self, db: AsyncSession, principal: Principal | None, title: str | None) -> Todo:
        principal = require_principal(principal)
        title = (title or "").strip()
        if not title:
            raise InvalidInputError("Title cannot be empty")
        return await todo_repo.create(db, principal.user_id, title)

    async def toggle_todo(self, db: AsyncSession, principal: Principal | None, todo_id: int) -> Todo:
        principal = require_principal(principal)
        todo = await todo_repo.get_owned(db, todo_id, principal.user_id)
        if todo is None:
            raise NotFoundError(f"Todo {todo_id} not found")
        todo.is_complete = not todo.is_complete
        await db.flush()
        return todo

    async def delete_todo(self, db: AsyncSession, principal: Principal | None, todo_id: int) -> None:
        principal = require_principal(principal)
        if not await todo_repo.delete_owned(db, todo_id, principal.user_id):
            raise NotFoundError(f"Todo {todo_id} not found")


todo_service = TodoService()
