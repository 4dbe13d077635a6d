import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


def _env_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    database_url: str = Field(default=os.getenv("DATABASE_URL", "sqlite:///./gridtable.db"))
    log_level: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))

    class Config:
        frozen = True


class TableConfig(BaseModel):
    """Options the table pipeline reads while rendering.

    Keys:
        default_value: shown when a column resolves to an empty value and the
            column has no default of its own.
        search_debounce: seconds the grid waits before sending a search.
        td_classes: default class binding of every column cell.
        per_page_options: page sizes offered when a table does not override them.
    """

    default_value: Any = Field(default=os.getenv("GRIDTABLE_DEFAULT_VALUE", "—"))
    search_debounce: Any = Field(default=os.getenv("GRIDTABLE_SEARCH_DEBOUNCE", "0.5"))
    td_classes: list[str] = Field(default=_env_list("GRIDTABLE_TD_CLASSES", "tc-table-td"))
    per_page_options: list[int] = Field(
        default=[int(v) for v in _env_list("GRIDTABLE_PER_PAGE_OPTIONS", "20,50,100")]
    )

    @field_validator("search_debounce", mode="before")
    @classmethod
    def parse_debounce(cls, v: Any) -> Any:
        # Environment values arrive as strings; anything unparsable is kept
        # as-is so Table.debounce_for can fall back.
        if isinstance(v, str):
            try:
                return float(v)
            except ValueError:
                return v
        return v

    @field_validator("per_page_options", mode="after")
    @classmethod
    def validate_per_page_options(cls, v: list[int]) -> list[int]:
        if not v or any(option < 1 for option in v):
            raise ValueError("per_page_options must be a non-empty list of positive integers")
        return v

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)

    class Config:
        frozen = True


settings = Settings()
table_settings = TableConfig()
