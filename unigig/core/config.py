from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    BCRYPT_ROUNDS: int = 12

    DATABASE_URL: str = "sqlite+aiosqlite:///./unigig.db"

    # Resume file storage (store-by-key, overwrite on re-upload)
    RESUME_DIR: str = "storage/resumes"
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
