from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Naive datetimes (check-in dates, metric timestamps) are read in this zone.
    default_tz: str = "UTC"

    # Metric summaries: window used when the caller passes no period ("day" | "week" | "month" | "year")
    metrics_default_period: str = "month"

    # Goal statistics
    goal_stats_precision: int = 2  # decimals for completion_rate
    goal_streak_precision: int = 1  # decimals for average_streak

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
