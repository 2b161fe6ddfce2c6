import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel

load_dotenv(find_dotenv())

HOST = "0.0.0.0"
PORT = 8080


class Settings(BaseModel):
    database_url: str = "sqlite:///tasks.db"
    log_level: str = "INFO"
    host: str = HOST
    port: int = PORT

    @classmethod
    def from_env(cls) -> "Settings":
        values = {
            "database_url": os.getenv("TASKS_DATABASE_URL"),
            "log_level": os.getenv("TASKS_LOG_LEVEL"),
        }
        return cls(**{key: value for key, value in values.items() if value})
