from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql://postgres:postgres@db:5432/flarefood"
    redis_url: str = "redis://redis:6379/0"

    log_level: str = "INFO"

    # Correlation analysis policy
    analysis_window_months: int = 3  # Trailing window loaded for each run
    max_delay_hours: float = 48.0  # Symptoms later than this are not attributed to a meal
    min_sample_size: int = 5  # Minimum food-containing meals per food/symptom pair
    significance_threshold: float = 0.05
    confidence_z: float = 1.96  # 95% two-sided

    class Config:
        env_file = ".env"


settings = Settings()
