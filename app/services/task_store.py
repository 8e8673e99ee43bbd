"""Task store : requêtes filtrées, comptage, insertion et sauvegarde."""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.task import Task

NEWEST_FIRST = (Task.created_at.desc(), Task.id.desc())


@dataclass
class TaskFilter:
    user_id: Optional[str] = None
    task_id: Optional[str] = None
    active_only: bool = True
    status: Optional[str] = None
    priority: Optional[str] = None
    search: Optional[str] = None


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _conditions(task_filter: TaskFilter) -> list:
    conditions = []
    if task_filter.user_id is not None:
        conditions.append(Task.user_id == task_filter.user_id)
    if task_filter.task_id is not None:
        conditions.append(Task.id == task_filter.task_id)
    if task_filter.active_only:
        conditions.append(Task.deleted_at.is_(None))
    if task_filter.status:
        conditions.append(Task.status == task_filter.status)
    if task_filter.priority:
        conditions.append(Task.priority == task_filter.priority)
    if task_filter.search:
        pattern = f"%{_escape_like(task_filter.search)}%"
        conditions.append(or_(
            Task.title.ilike(pattern, escape="\\"),
            Task.desc.ilike(pattern, escape="\\"),
        ))
    return conditions


def find(db: Session, task_filter: TaskFilter, sort=NEWEST_FIRST, skip: int = 0, limit: Optional[int] = None) -> List[Task]:
    query = db.query(Task).filter(*_conditions(task_filter)).order_by(*sort).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def count(db: Session, task_filter: TaskFilter) -> int:
    return db.query(Task).filter(*_conditions(task_filter)).count()


def find_one(db: Session, task_filter: TaskFilter) -> Optional[Task]:
    return db.query(Task).filter(*_conditions(task_filter)).first()


def insert(db: Session, task: Task) -> Task:
    task.validate()
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def save(db: Session, task: Task) -> Task:
    # ModelValidationError avant tout flush : la session reste propre
    task.validate()
    db.commit()
    db.refresh(task)
    return task
