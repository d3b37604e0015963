from app.schemas.base import CamelModel


class RecommendationOut(CamelModel):
    type: str
    priority: str
    description: str
    suggestion: str
    courses: list[str] = []
