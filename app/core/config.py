"""
환경 변수 및 설정 로드.
"""

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "PDF-Quiz-Generator"
    # 비어 있으면 문항 생성 요청이 검증 단계에서 거절된다
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_BASE_URL: str | None = None
    OPENAI_TEMPERATURE: float = 0.2
    REQUEST_TIMEOUT: float = 60

    # 문항 생성
    MAX_SOURCE_CHARS: int = 12000
    MAX_QUESTIONS_PER_REQUEST: int = 25

    # HTTP
    PING_MESSAGE: str = "ping"
    CORS_ORIGINS: list[str] = [
        "http://localhost:8080",
        "http://localhost:8081",
    ]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
