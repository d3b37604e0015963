from dataclasses import dataclass, field


@dataclass(frozen=True)
class Recommendation:
    type: str
    priority: str  # high/medium/low
    description: str
    suggestion: str
    courses: list[str] = field(default_factory=list)
