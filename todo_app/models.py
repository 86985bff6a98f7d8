"""
Database models for the Todo Manager application.

This module defines SQLAlchemy models representing the data structure
of the application, plus the ownership-scoped operations on to-dos.
Every mutation takes the acting user's id and refuses to touch a row
owned by somebody else.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import select
from werkzeug.security import check_password_hash, generate_password_hash

from todo_app import db

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200
PASSWORD_MIN_LENGTH = 8

# Largest value a signed 64-bit INTEGER primary key can hold
MAX_ROW_ID = 2**63 - 1


class ValidationError(ValueError):
    """Raised when submitted user or to-do data is invalid."""


class TodoOwnershipError(Exception):
    """Raised when a user acts on a to-do they do not own."""

    def __init__(self, todo_id: int, user_id: int):
        super().__init__(f"Todo {todo_id} does not belong to user {user_id}")
        self.todo_id = todo_id
        self.user_id = user_id


def today() -> date:
    """Return the current UTC calendar date."""
    return datetime.now(timezone.utc).date()


def parse_due_date(value: Any) -> date:
    """
    Parse a due date from a request value.

    Accepts a plain ``YYYY-MM-DD`` date or a full ISO-8601 timestamp,
    which is normalized to UTC and truncated to its date.

    Raises:
        ValidationError: If the value is missing or unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError("Invalid due date format. Use YYYY-MM-DD") from None
    else:
        raise ValidationError("Due date is required")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


class User(db.Model):
    """
    Registered user of the application.

    Attributes:
        id: Unique identifier for the user.
        first_name: Given name, required at signup.
        last_name: Family name, optional.
        email: Unique, lower-cased login identifier.
        password_hash: Werkzeug hash of the password.
        todos: To-dos owned by this user.
    """

    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    first_name: str = db.Column(db.String(80), nullable=False)
    last_name: str = db.Column(db.String(80), nullable=True)
    email: str = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash: str = db.Column(db.String(256), nullable=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    todos = db.relationship(
        "Todo",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Todo.id",
    )

    @staticmethod
    def normalize_email(email: Any) -> str:
        if not isinstance(email, str):
            return ""
        return email.strip().lower()

    @classmethod
    def validate_signup(
        cls,
        first_name: Any,
        email: Any,
        password: Any,
    ) -> None:
        """
        Validate signup fields.

        Raises:
            ValidationError: On the first invalid field.
        """
        if not isinstance(first_name, str) or not first_name.strip():
            raise ValidationError("First name is required")
        normalized = cls.normalize_email(email)
        if not normalized:
            raise ValidationError("Email is required")
        if "@" not in normalized:
            raise ValidationError("Email address is invalid")
        if not isinstance(password, str) or not password:
            raise ValidationError("Password is required")
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )

    @classmethod
    def find_by_email(cls, email: Any) -> "User | None":
        return db.session.scalar(
            select(cls).where(cls.email == cls.normalize_email(email))
        )

    @classmethod
    def authenticate(cls, email: Any, password: Any) -> "User | None":
        """Return the user matching the credentials, or None."""
        user = cls.find_by_email(email)
        if user is None or not isinstance(password, str) or not user.check_password(password):
            return None
        return user

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the user without the password hash."""
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"


class Todo(db.Model):
    """
    To-do item owned by exactly one user.

    Attributes:
        id: Unique identifier for the to-do.
        title: Short title describing the to-do.
        due_date: Calendar date the to-do is due.
        completed: Whether the to-do is done.
        user_id: Owning user.
    """

    __tablename__ = "todos"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    due_date: date = db.Column(db.Date, nullable=False)
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    user_id: int = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    user = db.relationship("User", back_populates="todos")

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    @classmethod
    def add_todo(cls, user_id: int, title: Any, due_date: Any) -> "Todo":
        """
        Create and persist a new, incomplete to-do for ``user_id``.

        Raises:
            ValidationError: If the title or due date is invalid.
        """
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Title is required")
        title = title.strip()
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Title must be {TITLE_MAX_LENGTH} characters or less"
            )

        todo = cls(
            title=title,
            due_date=parse_due_date(due_date),
            completed=False,
            user_id=user_id,
        )
        db.session.add(todo)
        db.session.commit()
        logger.info("Created todo %s for user %s", todo.id, user_id)
        return todo

    # -------------------------------------------------------------------------
    # Grouped listing
    # -------------------------------------------------------------------------

    @classmethod
    def _owned_by(cls, user_id: int):
        return select(cls).where(cls.user_id == user_id).order_by(cls.id.asc())

    @classmethod
    def overdue(cls, user_id: int) -> list["Todo"]:
        stmt = cls._owned_by(user_id).where(
            cls.completed.is_(False), cls.due_date < today()
        )
        return list(db.session.scalars(stmt))

    @classmethod
    def due_today(cls, user_id: int) -> list["Todo"]:
        stmt = cls._owned_by(user_id).where(
            cls.completed.is_(False), cls.due_date == today()
        )
        return list(db.session.scalars(stmt))

    @classmethod
    def due_later(cls, user_id: int) -> list["Todo"]:
        stmt = cls._owned_by(user_id).where(
            cls.completed.is_(False), cls.due_date > today()
        )
        return list(db.session.scalars(stmt))

    @classmethod
    def completed_items(cls, user_id: int) -> list["Todo"]:
        stmt = cls._owned_by(user_id).where(cls.completed.is_(True))
        return list(db.session.scalars(stmt))

    @classmethod
    def grouped_for(cls, user_id: int) -> dict[str, list["Todo"]]:
        """Return the user's to-dos split into the four listing buckets."""
        return {
            "overdue": cls.overdue(user_id),
            "dueToday": cls.due_today(user_id),
            "dueLater": cls.due_later(user_id),
            "completedItems": cls.completed_items(user_id),
        }

    # -------------------------------------------------------------------------
    # Ownership-scoped mutations
    # -------------------------------------------------------------------------

    @classmethod
    def find(cls, todo_id: int) -> "Todo | None":
        """Look up a to-do by id; ids outside the key range match nothing."""
        if not 0 < todo_id <= MAX_ROW_ID:
            return None
        return db.session.get(cls, todo_id)

    @classmethod
    def get_owned(cls, todo_id: int, user_id: int) -> "Todo":
        """
        Fetch a to-do for mutation by its owner.

        Raises:
            TodoOwnershipError: If the to-do is missing or owned by
                another user.
        """
        todo = cls.find(todo_id)
        if todo is None or todo.user_id != user_id:
            raise TodoOwnershipError(todo_id, user_id)
        return todo

    @classmethod
    def set_completion_status(
        cls, todo_id: int, user_id: int, completed: bool
    ) -> "Todo":
        """Set ``completed`` on a to-do owned by ``user_id``."""
        todo = cls.get_owned(todo_id, user_id)
        todo.completed = completed
        db.session.commit()
        logger.info("Set todo %s completed=%s", todo_id, completed)
        return todo

    @classmethod
    def remove(cls, todo_id: int, user_id: int) -> bool:
        """
        Delete a to-do owned by ``user_id``.

        Returns:
            True if a row was deleted, False if no to-do has that id.

        Raises:
            TodoOwnershipError: If the to-do exists but belongs to
                another user.
        """
        todo = cls.find(todo_id)
        if todo is None:
            return False
        if todo.user_id != user_id:
            raise TodoOwnershipError(todo_id, user_id)

        db.session.delete(todo)
        db.session.commit()
        logger.info("Deleted todo %s", todo_id)
        return True

    # -------------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the to-do to a dictionary representation.

        Returns:
            Dictionary with camelCase keys used on the wire.
        """
        return {
            "id": self.id,
            "title": self.title,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "completed": bool(self.completed),
            "userId": self.user_id,
        }

    def __repr__(self) -> str:
        """Return string representation of the to-do."""
        return f"<Todo {self.id}: {self.title}>"
