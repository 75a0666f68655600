import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Pagination
    default_per_page: int = Field(default=int(os.getenv("TABLEVIEW_PER_PAGE", "20")))
    max_per_page: int = Field(default=int(os.getenv("TABLEVIEW_MAX_PER_PAGE", "200")))
    # Page numbers shown on each side of the current page before an ellipsis.
    pagination_window: int = Field(
        default=int(os.getenv("TABLEVIEW_PAGINATION_WINDOW", "1")), ge=0
    )

    # Search box
    search_debounce_ms: int = Field(
        default=int(os.getenv("TABLEVIEW_SEARCH_DEBOUNCE_MS", "300"))
    )

    nothing_found_text: str = Field(
        default=os.getenv("TABLEVIEW_NOTHING_FOUND_TEXT", "Nothing Found")
    )

    # Cookie security
    secure_cookies: bool = Field(
        default=os.getenv("SECURE_COOKIES", "true").lower() in ("true", "1", "yes")
    )


settings = Settings()
