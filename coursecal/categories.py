"""Closed category vocabularies and their display metadata."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .errors import ValidationError


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata for a category."""

    label: str
    color: str
    icon: str


class StudentCategory(str, Enum):
    ASSIGNMENT = "assignment"
    DEADLINE = "deadline"
    LIVE_SESSION = "liveSession"
    EXAM = "exam"
    STUDY_GROUP = "studyGroup"
    REMINDER = "reminder"


class AdminCategory(str, Enum):
    COURSE = "course"
    INSTRUCTOR = "instructor"
    STUDENT = "student"
    SYSTEM = "system"


class InstructorCategory(str, Enum):
    WEBINAR = "webinar"
    WORKSHOP = "workshop"
    REVIEW = "review"
    DEADLINE = "deadline"


Category = Union[StudentCategory, AdminCategory, InstructorCategory]


@dataclass(frozen=True)
class Vocabulary:
    """
    A closed set of categories used by one calendar instance.

    Attributes:
        name: Vocabulary name ("student", "admin", "instructor")
        categories: Enum class holding the allowed categories
        metadata: Label, color and icon for every category
        default: Category used when none is given
    """

    name: str
    categories: type[Enum]
    metadata: dict[Any, CategoryInfo]
    default: Any

    def __post_init__(self) -> None:
        missing = [c.value for c in self.categories if c not in self.metadata]
        if missing:
            raise ValueError(f"Vocabulary '{self.name}' lacks metadata for: {missing}")
        if self.default not in self:
            raise ValueError(f"Default category for '{self.name}' is not in vocabulary")

    def parse(self, value: Any) -> Any:
        """
        Resolve a category member or its string value.

        Args:
            value: Enum member or raw string such as "liveSession"

        Returns:
            The matching category member

        Raises:
            ValidationError: If the value is not part of this vocabulary
        """
        if isinstance(value, self.categories):
            return value
        if isinstance(value, str) and not isinstance(value, Enum):
            try:
                return self.categories(value)
            except ValueError:
                pass
        allowed = ", ".join(c.value for c in self.categories)
        raise ValidationError(
            f"Unknown {self.name} category '{value}'. Expected one of: {allowed}"
        )

    def parse_many(self, values: Any) -> frozenset:
        """Resolve an iterable of categories, empty or None gives an empty set."""
        if not values:
            return frozenset()
        return frozenset(self.parse(v) for v in values)

    def info(self, category: Any) -> CategoryInfo:
        return self.metadata[self.parse(category)]

    def __contains__(self, category: object) -> bool:
        return isinstance(category, self.categories)

    def __iter__(self):
        return iter(self.categories)


STUDENT = Vocabulary(
    name="student",
    categories=StudentCategory,
    metadata={
        StudentCategory.ASSIGNMENT: CategoryInfo("Assignment", "blue", "book-open"),
        StudentCategory.DEADLINE: CategoryInfo("Deadline", "red", "clock"),
        StudentCategory.LIVE_SESSION: CategoryInfo("Live Session", "green", "calendar"),
        StudentCategory.EXAM: CategoryInfo("Exam", "amber", "book-open"),
        StudentCategory.STUDY_GROUP: CategoryInfo("Study Group", "purple", "calendar"),
        StudentCategory.REMINDER: CategoryInfo("Reminder", "slate", "bell"),
    },
    default=StudentCategory.ASSIGNMENT,
)

ADMIN = Vocabulary(
    name="admin",
    categories=AdminCategory,
    metadata={
        AdminCategory.COURSE: CategoryInfo("Course", "blue", "book-open"),
        AdminCategory.INSTRUCTOR: CategoryInfo("Instructor", "amber", "graduation-cap"),
        AdminCategory.STUDENT: CategoryInfo("Student", "green", "users"),
        AdminCategory.SYSTEM: CategoryInfo("System", "purple", "bell"),
    },
    default=AdminCategory.COURSE,
)

INSTRUCTOR = Vocabulary(
    name="instructor",
    categories=InstructorCategory,
    metadata={
        InstructorCategory.WEBINAR: CategoryInfo("Webinar", "blue", "video"),
        InstructorCategory.WORKSHOP: CategoryInfo("Workshop", "green", "users"),
        InstructorCategory.REVIEW: CategoryInfo("Review", "purple", "file-check"),
        InstructorCategory.DEADLINE: CategoryInfo("Deadline", "red", "clock"),
    },
    default=InstructorCategory.WEBINAR,
)

VOCABULARIES: dict[str, Vocabulary] = {
    STUDENT.name: STUDENT,
    ADMIN.name: ADMIN,
    INSTRUCTOR.name: INSTRUCTOR,
}


def get_vocabulary(name: str) -> Vocabulary:
    """
    Look up a vocabulary by name.

    Raises:
        ValidationError: If no vocabulary has that name
    """
    try:
        return VOCABULARIES[name.strip().lower()]
    except (KeyError, AttributeError):
        raise ValidationError(
            f"Unknown vocabulary '{name}'. Expected one of: {', '.join(VOCABULARIES)}"
        )
