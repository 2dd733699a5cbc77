# backend/models/task.py
from typing import Annotated, Optional

from pydantic import BaseModel, StringConstraints, field_validator, model_validator

from models.constraints import (
    DESCRIPTION_MAX_LENGTH,
    SEARCH_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TaskStatus,
    parse_status,
)

TaskTitle = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LENGTH)
]
TaskDescription = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
]


class TaskCreate(BaseModel):
    title: TaskTitle
    description: TaskDescription
    status: TaskStatus = TaskStatus.PENDING

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, v):
        # solo la omisión da pending; null, "" o un valor desconocido son error
        return parse_status(v)


class TaskUpdate(BaseModel):
    title: Optional[TaskTitle] = None
    description: Optional[TaskDescription] = None
    status: Optional[TaskStatus] = None

    @model_validator(mode="before")
    @classmethod
    def _reject_nulls(cls, data):
        if isinstance(data, dict):
            nulls = [k for k in ("title", "description", "status") if k in data and data[k] is None]
            if nulls:
                raise ValueError(f"Los campos no pueden ser nulos: {', '.join(nulls)}")
        return data

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, v):
        return parse_status(v)

    def changes(self) -> dict:
        """Solo los campos enviados por el cliente."""
        data = self.model_dump(exclude_unset=True)
        if "status" in data:
            data["status"] = data["status"].value
        return data


class TaskFilter(BaseModel):
    search: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=SEARCH_MAX_LENGTH)]] = None
    status: Optional[TaskStatus] = None

    @field_validator("search", mode="after")
    @classmethod
    def _blank_search(cls, v):
        return v or None

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, v):
        if v is None or v == "":
            return None
        return parse_status(v)
