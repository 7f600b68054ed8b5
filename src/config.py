import os
from enum import Enum
from typing import Final


class CategoryIcon(Enum):
    # Enum Member = ("Symbol Name", "Emoji")
    PARTNER = ("heart.fill", "❤️")
    FRIENDS = ("person.2.fill", "👥")
    DATE = ("sparkles", "✨")
    SELF = ("person.fill.questionmark", "🤔")

    def __init__(self, symbol: str, emoji: str):
        self.symbol = symbol
        self.emoji = emoji

    @classmethod
    def get_emoji(cls, symbol: str) -> str:
        """Returns the emoji for a given symbol name, or a default."""
        for icon in cls:
            if icon.symbol == symbol:
                return icon.emoji
        return "❓"  # Default fallback


class StorageKey(str, Enum):
    LAST_SELECTED_CATEGORY = "lastSelectedCategory"
    LAST_ANSWERED_DATE = "lastAnsweredDate"
    LAST_ANSWER = "lastAnswer"
    ANSWERED_DATES = "answeredDates"
    ANSWERED_CATEGORIES_FOR_TODAY = "answeredCategoriesForToday"


class AppTheme:
    PRIMARY = "#5B4CEC"
    PRIMARY_DARK = "#4438B8"
    BACKGROUND = "#F8F8FC"
    TEXT = "#1A1A2F"
    SUCCESS = "#4CAF50"
    MUTED = "#D1D5DB"


class AppConfig:
    # --- App Identity ---
    APP_TITLE = "Question of the Day"
    SERVICE_NAME = "question-of-the-day"

    # --- Infrastructure ---
    DEFAULT_DB_PATH: Final[str] = "data/qotd.db"
    METRICS_PORT: Final[int] = 8000

    # --- Calendar ---
    DAY_KEY_FORMAT: Final[str] = "%Y-%m-%d"
    CALENDAR_DAYS: Final[int] = 7

    @staticmethod
    def get_db_path() -> str:
        """Database path, overridable via QOTD_DB_PATH."""
        return os.getenv("QOTD_DB_PATH", AppConfig.DEFAULT_DB_PATH)
