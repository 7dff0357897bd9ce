from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    OUTPUT_MODE: str = "new"
    OUTPUT_SUFFIX: str = "_fixed"
    OUTPUT_DIRECTORY_NAME: str = "output"
    REPORT_SUFFIX: str = "_report"
    CSV_DELIMITER: str = ","
    DETECTION_SAMPLE_SIZE: int = 100
    DETECTION_MIN_SCORE: int = 30
    MAX_UPLOAD_SIZE_MB: int = 50
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "PHONEFIX_"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
