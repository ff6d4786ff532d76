from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "hometail"
    DB_PASSWORD: str = ""
    DB_NAME: str = "hometail"

    # full SQLAlchemy URL, wins over the DB_* parts when set (sqlite for local runs)
    SQLALCHEMY_URL: Optional[str] = None

    FIREBASE_CREDENTIALS: Optional[str] = None

    # pytz zone used to decide what "today" is for ages and age-group search
    TIMEZONE: str = "UTC"

    LOG_LEVEL: str = "INFO"

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"

    @property
    def DATABASE_URL(self) -> str:
        """SQLAlchemy connection URL (MySQL unless SQLALCHEMY_URL is given)"""
        if self.SQLALCHEMY_URL:
            return self.SQLALCHEMY_URL
        return (
            f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


settings = Settings()
