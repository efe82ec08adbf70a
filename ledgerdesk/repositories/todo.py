from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.models import Todo


class TodoRepository:
    async def list_for_user(self, db: AsyncSession, user_id: str) -> list[Todo]:
        result = await db.execute(
            select(Todo).where(Todo.user_id == user_id).order_by(Todo.created_at.desc(), Todo.id.desc())
        )
        return list(result.scalars().all())

    async def get_owned(self, db: AsyncSession, todo_id: int, user_id: str) -> Todo | None:
        result = await db.execute(select(Todo).where(Todo.id == todo_id, Todo.user_id == user_id))
        return result.scalar_one_or_none()

    async def create(self, db: AsyncSession, user_id: str, title: str) -> Todo:
        todo = Todo(user_id=user_id, title=title, is_complete=False)
        db.add(todo)
        await db.flush()
        return todo

    async def delete_owned(self, db: AsyncSession, todo_id: int, user_id: str) -> bool:
        result = await db.execute(
            delete(Todo)
            .where(Todo.id == todo_id, Todo.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


todo_repo = TodoRepository()
