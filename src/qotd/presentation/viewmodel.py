import uuid
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from src.config import CategoryIcon
from src.qotd.application.tracker import DailyStateTracker
from src.qotd.domain.calendar_days import header_label
from src.qotd.domain.models import DayStatus, Question
from src.qotd.presentation.state_provider import IStateProvider
from src.shared.telemetry import Telemetry


class Screen(Enum):
    CATEGORY_SELECTION = auto()  # No active category
    QUESTION_ACTIVE = auto()  # Active category, not answered today
    ANSWERED = auto()  # Active category already answered today


@dataclass(frozen=True)
class CategoryRow:
    id: str
    name: str
    icon: str
    answered: bool


class QuestionViewModel:
    TRACKER_KEY = "daily_tracker"
    SCREEN_KEY = "screen"

    def __init__(
        self,
        tracker_factory: Callable[[], DailyStateTracker],
        state_provider: IStateProvider,
    ) -> None:
        self.state = state_provider
        self.telemetry = Telemetry("ViewModel")

        tracker = self.state.get(self.TRACKER_KEY)
        if tracker is None:
            tracker = tracker_factory()
            tracker.subscribe(self._on_tracker_change)
            tracker.load()
            self.state.set(self.TRACKER_KEY, tracker)
        else:
            # Every rerun counts as a query: pick up a day change here
            tracker.refresh_day()
        self.tracker: DailyStateTracker = tracker

    # --- Derived State ---

    @staticmethod
    def resolve_screen(tracker: DailyStateTracker) -> Screen:
        category = tracker.selected_category
        if category is None:
            return Screen.CATEGORY_SELECTION
        if tracker.has_answered_category(category):
            return Screen.ANSWERED
        return Screen.QUESTION_ACTIVE

    @property
    def current_screen(self) -> Screen:
        return self.resolve_screen(self.tracker)

    @property
    def title(self) -> str:
        category = self.tracker.selected_category
        return category.name if category else "Question Categories"

    @property
    def date_label(self) -> str:
        return header_label(self.tracker.today)

    @property
    def question(self) -> Question | None:
        return self.tracker.current_question

    @property
    def answer(self) -> str:
        return self.tracker.current_answer_text

    @property
    def can_submit(self) -> bool:
        return bool(self.tracker.current_answer_text)

    def category_rows(self) -> list[CategoryRow]:
        return [
            CategoryRow(
                id=str(category.id),
                name=category.name,
                icon=CategoryIcon.get_emoji(category.icon),
                answered=self.tracker.has_answered_category(category),
            )
            for category in self.tracker.catalog
        ]

    def calendar(self) -> list[DayStatus]:
        return self.tracker.recent_history()

    # --- Actions ---

    def select_category(self, category_id: str) -> None:
        Telemetry.start_trace()
        try:
            category = self.tracker.catalog.get(uuid.UUID(category_id))
        except ValueError:
            category = None
        if category is None:
            self.telemetry.log_warning("Select ignored, unknown category", category_id=category_id)
            return
        self.tracker.select_category(category)

    def choose_option(self, option: str) -> None:
        self.tracker.update_answer(option)

    def update_answer(self, text: str) -> None:
        self.tracker.update_answer(text)

    def submit(self) -> bool:
        Telemetry.start_trace()
        if not self.can_submit:
            self.telemetry.log_warning("Submit ignored, empty answer")
            return False
        self.tracker.submit_answer()
        return True

    def back_to_categories(self) -> None:
        Telemetry.start_trace()
        self.tracker.clear_selection()

    # --- Observer ---

    def _on_tracker_change(self, tracker: DailyStateTracker) -> None:
        previous = self.state.get(self.SCREEN_KEY)
        current = self.resolve_screen(tracker)
        if previous != current:
            self.state.set(self.SCREEN_KEY, current)
            self.telemetry.log_info(
                "Screen change",
                previous=previous.name if previous else None,
                current=current.name,
            )
