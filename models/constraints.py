# backend/models/constraints.py
# Restricciones compartidas por el servidor y el cliente Python.
from enum import Enum


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


TASK_STATUS_VALUES = [s.value for s in TaskStatus]

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
# límite de bcrypt, en bytes UTF-8
PASSWORD_MAX_BYTES = 72
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
SEARCH_MAX_LENGTH = 100


def normalize_email(value: str) -> str:
    return value.strip().lower()


def parse_status(value) -> TaskStatus:
    if isinstance(value, TaskStatus):
        return value
    try:
        return TaskStatus(value)
    except ValueError:
        raise ValueError(f"El estado debe ser uno de: {', '.join(TASK_STATUS_VALUES)}") from None


def password_fits_bcrypt(value: str) -> bool:
    return len(value.encode("utf-8")) <= PASSWORD_MAX_BYTES
