from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Dolphin Spa Booking API"

    # Server
    PORT: int = 3000
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/errors.log"

    # Database ("postgres" or "supabase")
    DB_BACKEND: str = "postgres"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "dolphin_spa_db"
    DB_POOL_SIZE: int = 5
    DB_AUTO_CREATE: bool = False
    DATABASE_URL: str = ""

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""

    # Simulated payments
    PAYMENT_SIMULATION_DELAY: float = 1.0
    PAYMENT_QR_BASE_URL: str = "https://i.postimg.cc/Dz3sgw1N/QR1.jpg"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
