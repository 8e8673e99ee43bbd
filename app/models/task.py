"""Task model"""

import re

from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from app.core.database import Base
from app.models.common import as_utc, new_object_id, utcnow

PRIORITIES = ("low", "medium", "high")
STATUSES = ("waiting", "inprogress", "finished")

IMAGE_URL_RE = re.compile(r"^https?://.+")


class ModelValidationError(Exception):
    """Violations du schéma du modèle, détectées avant persistance."""

    def __init__(self, issues: list[dict]):
        super().__init__("; ".join(f"{i['path']}: {i['message']}" for i in issues))
        self.issues = issues


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_user_created", "user_id", "created_at"),
        Index("ix_tasks_user_deleted_created", "user_id", "deleted_at", "created_at"),
    )

    id = Column(String(24), primary_key=True, default=new_object_id)
    user_id = Column(String(24), ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(100), nullable=False)
    desc = Column(String(1000), nullable=True)
    priority = Column(String(16), nullable=False, default="low")
    status = Column(String(16), nullable=False, default="waiting")
    due_date = Column(DateTime(timezone=True), nullable=True)
    image = Column(String(500), nullable=True)

    deleted_at = Column(DateTime(timezone=True), nullable=True, default=None)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @property
    def is_overdue(self) -> bool:
        if self.due_date is None:
            return False
        return utcnow() > as_utc(self.due_date) and self.status != "finished"

    def validation_issues(self) -> list[dict]:
        """Liste toutes les violations (ne s'arrête pas à la première)"""
        issues = []
        if not self.user_id:
            issues.append({"path": "userId", "message": "Path `userId` is required."})
        title = (self.title or "").strip()
        if not title:
            issues.append({"path": "title", "message": "Path `title` is required."})
        elif len(title) > 100:
            issues.append({"path": "title", "message": "Title must be at most 100 characters"})
        if self.desc is not None and len(self.desc) > 1000:
            issues.append({"path": "desc", "message": "Description must be at most 1000 characters"})
        if self.priority is not None and self.priority not in PRIORITIES:
            issues.append({"path": "priority", "message": f"`{self.priority}` is not a valid priority"})
        if self.status is not None and self.status not in STATUSES:
            issues.append({"path": "status", "message": f"`{self.status}` is not a valid status"})
        if self.image:
            if len(self.image) > 500:
                issues.append({"path": "image", "message": "Image must be at most 500 characters"})
            elif not IMAGE_URL_RE.match(self.image):
                issues.append({"path": "image", "message": "Image must be a valid URL"})
        return issues

    def validate(self):
        issues = self.validation_issues()
        if issues:
            raise ModelValidationError(issues)
