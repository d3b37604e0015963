from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    environment: str = "development"
    log_level: str = "INFO"

    # Planning engine defaults
    advance_window: int = 4
    max_terms: int = 16
    max_summer_credits: int = 12
    max_summer_courses: int = 4
    summer_lookahead: int = 2
    first_term_credit_cap: int = 25
    overload_factor: float = 1.2
    default_max_credits: int = 22
    default_min_credits: int = 14

    class Config:
        env_file = ".env"
        env_prefix = "TERMPLANNER_"
        extra = "ignore"


settings = Settings()
