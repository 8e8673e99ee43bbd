"""Pydantic schemas for todo request/response validation."""

from pydantic import ConfigDict, Field, StringConstraints, field_validator, model_validator
from datetime import datetime
from typing import Annotated, Literal, Optional

from app.models.common import as_utc
from app.schemas.user import CamelModel

Priority = Literal["low", "medium", "high"]
Status = Literal["waiting", "inprogress", "finished"]

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Desc = Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]
ImageUrl = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


class TodoCreate(CamelModel):
    title: Title
    desc: Optional[Desc] = None
    priority: Optional[Priority] = None
    status: Optional[Status] = None
    # chaîne de date libre : le parsing (et l'erreur 400) se fait dans le service
    due_date: Optional[str] = None
    image: Optional[ImageUrl] = None


class TodoUpdate(CamelModel):
    title: Optional[Title] = None
    desc: Optional[Desc] = None
    priority: Optional[Priority] = None
    status: Optional[Status] = None
    due_date: Optional[str] = None
    image: Optional[ImageUrl] = None

    @model_validator(mode="after")
    def check_not_empty(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class TodoListQuery(CamelModel):
    page: Optional[int] = None
    limit: Optional[int] = None
    status: Optional[Status] = None
    priority: Optional[Priority] = None
    search: Optional[str] = None
    include_deleted: bool = False


class TodoResponse(CamelModel):
    id: str
    user_id: str
    title: str
    desc: Optional[str] = None
    priority: Priority
    status: Status
    due_date: Optional[datetime] = None
    image: Optional[str] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    is_overdue: bool = Field(default=False)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("due_date", "deleted_at", "created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, value):
        return as_utc(value)


def todo_to_dict(task) -> dict:
    return TodoResponse.model_validate(task).model_dump(mode="json", by_alias=True)
