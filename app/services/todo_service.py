"""Todo flow : toutes les opérations sont limitées aux tâches de l'utilisateur."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.config import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT
from app.core.errors import DomainValidation, NotFound, ValidationFailure
from app.models.common import as_utc, is_object_id, utcnow
from app.models.task import ModelValidationError, Task
from app.schemas.task import TodoCreate, TodoListQuery, TodoUpdate, todo_to_dict
from app.services import task_store
from app.services.task_store import TaskFilter

TODO_NOT_FOUND = "Todo not found"

UPDATABLE_FIELDS = ("title", "desc", "priority", "status", "image")


@dataclass
class PaginatedResult:
    data: List[dict] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    total_pages: int = 0


def parse_due_date(payload, fields_set) -> Tuple[bool, Optional[datetime]]:
    """Retourne (à appliquer ?, valeur).

    - champ absent   -> (False, None) : ne touche pas à la valeur existante
    - null explicite -> (True, None)  : efface l'échéance
    - chaîne         -> (True, datetime) ou DomainValidation si illisible
    """
    if "due_date" not in fields_set:
        return False, None
    raw = payload.due_date
    if raw is None:
        return True, None
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        raise DomainValidation("Invalid due date")
    return True, as_utc(parsed).astimezone(timezone.utc)


def _persist(db: Session, task: Task, creating: bool) -> Task:
    try:
        if creating:
            return task_store.insert(db, task)
        return task_store.save(db, task)
    except ModelValidationError as e:
        raise ValidationFailure("Todo validation failed", details=e.issues)


def _load_owned(db: Session, user_id: str, todo_id: str) -> Task:
    # id mal formé, absent, supprimé ou à quelqu'un d'autre : même 404
    if not is_object_id(todo_id):
        raise NotFound(TODO_NOT_FOUND)
    task = task_store.find_one(db, TaskFilter(user_id=user_id, task_id=todo_id.lower()))
    if not task:
        raise NotFound(TODO_NOT_FOUND)
    return task


def list_todos(db: Session, user_id: str, query: TodoListQuery) -> PaginatedResult:
    page = max(query.page if query.page is not None else DEFAULT_PAGE, DEFAULT_PAGE)
    limit = min(max(query.limit if query.limit is not None else DEFAULT_LIMIT, 1), MAX_LIMIT)
    skip = (page - 1) * limit

    task_filter = TaskFilter(
        user_id=user_id,
        active_only=not query.include_deleted,
        status=query.status,
        priority=query.priority,
        search=query.search,
    )

    total = task_store.count(db, task_filter)
    # au-delà du total : page vide, sans envoyer un offset énorme à la base
    records = task_store.find(db, task_filter, skip=skip, limit=limit) if skip < total else []
    total_pages = 0 if total == 0 else math.ceil(total / limit)

    return PaginatedResult(
        data=[todo_to_dict(task) for task in records],
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
    )


def get_todo(db: Session, user_id: str, todo_id: str) -> dict:
    return todo_to_dict(_load_owned(db, user_id, todo_id))


def create_todo(db: Session, user_id: str, payload: TodoCreate) -> dict:
    apply_due, due_date = parse_due_date(payload, payload.model_fields_set)

    values = payload.model_dump(exclude={"due_date"}, exclude_none=True)
    task = Task(user_id=user_id, **values)
    if apply_due and due_date is not None:
        task.due_date = due_date

    return todo_to_dict(_persist(db, task, creating=True))


def update_todo(db: Session, user_id: str, todo_id: str, payload: TodoUpdate) -> dict:
    task = _load_owned(db, user_id, todo_id)

    apply_due, due_date = parse_due_date(payload, payload.model_fields_set)
    if apply_due:
        task.due_date = due_date

    # seulement les champs envoyés ; deletedAt n'est jamais modifiable ici
    for name, value in payload.model_dump(include=set(UPDATABLE_FIELDS), exclude_unset=True).items():
        if value is None and name in ("title", "priority", "status"):
            continue
        setattr(task, name, value)

    return todo_to_dict(_persist(db, task, creating=False))


def delete_todo(db: Session, user_id: str, todo_id: str) -> None:
    task = _load_owned(db, user_id, todo_id)
    task.deleted_at = utcnow()
    task_store.save(db, task)
