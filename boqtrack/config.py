from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Workday calendar (weekday numbers use Sun=0 .. Sat=6)
    WEEKEND_DAYS: list[int] = [5, 6]
    INCLUDE_WEEKENDS: bool = False

    # Lookahead
    INCLUDE_UNDATED_PROGRESS: bool = True
    DEFAULT_LOOKAHEAD_PERIOD: str = "months"
    DEFAULT_LOOKAHEAD_COUNT: int = 3

    # App
    APP_ENV: str = "development"
    ALLOWED_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
