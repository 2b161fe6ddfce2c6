from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

Base = declarative_base()


# ---------- Database Models ----------
class TaskDB(Base):
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text)
    description: Mapped[str] = mapped_column(Text)
    due_date: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(Text)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "due_date": self.due_date,
            "status": self.status,
        }


# ---------- Data Models ----------
class BaseTask(BaseModel):
    title: StrictStr
    description: StrictStr = ""
    due_date: StrictStr = ""
    status: StrictStr = ""


class InputTask(BaseTask):
    # Clients may echo back a task they received; its id is dropped here.
    model_config = ConfigDict(extra="ignore")


class OutputTask(BaseModel):
    id: Annotated[int, Field(gt=0)]
    title: StrictStr
    description: StrictStr = ""
    due_date: StrictStr = ""
    status: StrictStr = ""
