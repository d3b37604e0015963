from dataclasses import dataclass, field


@dataclass(frozen=True)
class Course:
    """A single curriculum course.

    Instances are immutable and may be shared between terms, graphs and
    collaborators without copying. Relation fields are tuples of course codes.
    """

    code: str
    credits: int
    expected_semester: int
    name: str = ""
    group: str = ""
    is_required: bool = True
    difficulty: int = 1
    is_practical: bool = False
    prerequisites: tuple[str, ...] = field(default_factory=tuple)
    corequisites: tuple[str, ...] = field(default_factory=tuple)
    equivalents: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.code or not self.code.strip():
            raise ValueError("Course code must be a non-empty string")
        if self.credits <= 0:
            raise ValueError(f"Course {self.code} must have positive credits")
        if self.expected_semester < 1:
            raise ValueError(f"Course {self.code} has invalid expected semester {self.expected_semester}")
        if not 1 <= self.difficulty <= 5:
            raise ValueError(f"Course {self.code} difficulty must be between 1 and 5")
        # Normalise list inputs so callers can pass lists
        for name in ("prerequisites", "corequisites", "equivalents"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value or ()))
