from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Literal, Optional

from app.core.config import MAX_LIMIT
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.core.responses import success_response
from app.core.security import TokenClaims
from app.schemas.task import Priority, TodoCreate, TodoListQuery, TodoUpdate
from app.services import todo_service

# toutes les routes /todos exigent un bearer token
router = APIRouter(prefix="/todos", tags=["todos"], dependencies=[Depends(get_current_user)])


@router.get("")
def list_todos(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=MAX_LIMIT),
    status_filter: Optional[Literal["waiting", "inprogress", "finished", "all"]] = Query(None, alias="status"),
    priority: Optional[Priority] = Query(None),
    search: Optional[str] = Query(None, pattern=r"\S"),
    include_deleted: bool = Query(False, alias="includeDeleted"),
):
    query = TodoListQuery(
        page=page,
        limit=limit,
        status=None if status_filter == "all" else status_filter,
        priority=priority,
        search=search.strip() if search is not None else None,
        include_deleted=include_deleted,
    )
    result = todo_service.list_todos(db, current_user.sub, query)
    meta = {
        "pagination": {
            "total": result.total,
            "page": result.page,
            "limit": result.limit,
            "totalPages": result.total_pages,
        }
    }
    return success_response(result.data, "Todos retrieved successfully.", meta)


@router.get("/{todo_id}")
def get_todo(
    todo_id: str,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    todo = todo_service.get_todo(db, current_user.sub, todo_id)
    return success_response(todo, "Todo retrieved successfully.")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_todo(
    payload: TodoCreate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    todo = todo_service.create_todo(db, current_user.sub, payload)
    return success_response(todo, "Todo created successfully.")


@router.put("/{todo_id}")
def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    todo = todo_service.update_todo(db, current_user.sub, todo_id, payload)
    return success_response(todo, "Todo updated successfully.")


@router.delete("/{todo_id}")
def delete_todo(
    todo_id: str,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    todo_service.delete_todo(db, current_user.sub, todo_id)
    return success_response(message="Todo deleted successfully.")
