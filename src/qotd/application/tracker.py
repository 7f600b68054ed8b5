import uuid
from collections.abc import Callable
from datetime import date, datetime

from src.config import AppConfig
from src.qotd.domain.calendar_days import (
    day_key,
    is_same_day,
    local_now,
    recent_days,
    to_local_day,
)
from src.qotd.domain.catalog import QuestionCatalog
from src.qotd.domain.models import Category, DayStatus, Question, TrackerSnapshot
from src.qotd.domain.ports import ITrackerRepository
from src.qotd.domain.question_selector import QuestionOfDaySelector
from src.shared.telemetry import Telemetry, measure_time

Clock = Callable[[], datetime]
Listener = Callable[["DailyStateTracker"], None]


class DailyStateTracker:
    """
    Process-wide holder of the daily question state.

    Built once per session, loaded from the repository, then mutated only by
    user actions. Every mutation is persisted synchronously and announced to
    subscribers. Day rollover is detected lazily by `refresh_day()`; there is
    no timer.
    """

    def __init__(
        self,
        catalog: QuestionCatalog,
        repo: ITrackerRepository,
        clock: Clock = local_now,
    ) -> None:
        self.catalog = catalog
        self.repo = repo
        self._clock = clock
        self.telemetry = Telemetry("DailyStateTracker")

        self.selected_category_id: uuid.UUID | None = None
        self.current_question: Question | None = None
        self.current_answer_text: str = ""
        self.has_answered_today: bool = False
        self.answered_dates: set[str] = set()
        self.answered_category_ids_today: set[uuid.UUID] = set()

        # Local day the day-scoped fields were derived for
        self._loaded_day: date | None = None
        self._listeners: list[Listener] = []

    # --- Observers ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # --- Properties ---

    @property
    def selected_category(self) -> Category | None:
        return self.catalog.get(self.selected_category_id)

    @property
    def today(self) -> date:
        return to_local_day(self._clock())

    # --- Loading ---

    @measure_time("tracker_load")
    def load(self) -> None:
        """Startup sequence. All steps share one 'now'."""
        now = self._clock()
        snapshot = self.repo.load_snapshot()

        self._apply_last_category(snapshot, now)
        self._apply_answered_today(snapshot, now)
        self.answered_dates = set(snapshot.answered_dates)
        self._apply_answered_categories(snapshot, now)
        self._loaded_day = to_local_day(now)

        self.telemetry.log_info(
            "State loaded",
            category=self.selected_category.name if self.selected_category else None,
            answered_today=self.has_answered_today,
            answered_days=len(self.answered_dates),
        )
        self._notify()

    def refresh_day(self) -> bool:
        """
        Re-derives the day-scoped state if the local day changed since it was
        loaded. Returns True when a rollover happened.
        """
        if self._loaded_day is None:
            self.load()
            return True

        now = self._clock()
        if to_local_day(now) == self._loaded_day:
            return False

        self.telemetry.log_info(
            "Day rollover", previous=str(self._loaded_day), current=day_key(now)
        )
        snapshot = self.repo.load_snapshot()
        self._apply_answered_today(snapshot, now)
        self._apply_answered_categories(snapshot, now)
        self._loaded_day = to_local_day(now)
        if self.selected_category is not None:
            self.current_question = self.compute_question_of_day(
                self.selected_category, self._loaded_day
            )
        self._notify()
        return True

    def check_answered_today(self, now: datetime | None = None) -> None:
        now = now or self._clock()
        self._apply_answered_today(self.repo.load_snapshot(), now)
        self._notify()

    def load_answered_categories_for_today(self, now: datetime | None = None) -> None:
        now = now or self._clock()
        self._apply_answered_categories(self.repo.load_snapshot(), now)
        self._notify()

    def _apply_last_category(self, snapshot: TrackerSnapshot, now: datetime) -> None:
        category = self.catalog.category_at(snapshot.last_selected_category)
        if category is None:
            if snapshot.last_selected_category is not None:
                self.telemetry.log_warning(
                    "Stored category index out of range",
                    index=snapshot.last_selected_category,
                )
            self.selected_category_id = None
            self.current_question = None
            return

        self.selected_category_id = category.id
        self.current_question = self.compute_question_of_day(category, to_local_day(now))

    def _apply_answered_today(self, snapshot: TrackerSnapshot, now: datetime) -> None:
        if is_same_day(snapshot.last_answered_at, now):
            self.has_answered_today = True
            self.current_answer_text = snapshot.last_answer
        else:
            self.has_answered_today = False
            self.current_answer_text = ""

    def _apply_answered_categories(self, snapshot: TrackerSnapshot, now: datetime) -> None:
        if is_same_day(snapshot.last_answered_at, now):
            self.answered_category_ids_today = set(snapshot.answered_categories_for_today)
        else:
            # Stale: recorded for an earlier day
            self.answered_category_ids_today = set()
            self.repo.clear_answered_categories()

    # --- Queries ---

    def compute_question_of_day(self, category: Category, day: date | None = None) -> Question:
        return QuestionOfDaySelector.select(category, day or self.today)

    def has_answered_on(self, day: date | datetime) -> bool:
        return day_key(day) in self.answered_dates

    def has_answered_category(self, category: Category) -> bool:
        # Recorded for an earlier day until refresh_day() runs
        if self._loaded_day is not None and self._loaded_day != self.today:
            return False
        return category.id in self.answered_category_ids_today

    def recent_history(self, days: int = AppConfig.CALENDAR_DAYS) -> list[DayStatus]:
        today = self.today
        return [
            DayStatus(day=d, answered=self.has_answered_on(d), is_today=d == today)
            for d in recent_days(today, days)
        ]

    # --- Actions ---

    def select_category(self, category: Category) -> None:
        index = self.catalog.index_of(category)
        if index is None:
            self.telemetry.log_warning("Unknown category selected", category_id=str(category.id))
            return

        self.refresh_day()
        self.selected_category_id = category.id
        self.repo.save_selected_category(index)
        self.current_question = self.compute_question_of_day(category)

        # A new category starts with an empty draft; an answered one keeps the last answer
        if not self.has_answered_category(category):
            self.current_answer_text = ""

        self.telemetry.log_info(
            "Category selected",
            category=category.name,
            question_id=str(self.current_question.id),
        )
        self._notify()

    def clear_selection(self) -> None:
        """Back to the category list. The stored last category is kept."""
        self.selected_category_id = None
        self.current_question = None
        self._notify()

    def update_answer(self, text: str) -> None:
        if text == self.current_answer_text:
            return
        self.current_answer_text = text
        self._notify()

    @measure_time("submit_answer")
    def submit_answer(self) -> None:
        """
        Records the current answer for today. The UI only enables submission
        for a non-empty answer; no validation happens here.
        """
        # A draft typed before midnight is still submitted after the rollover
        draft = self.current_answer_text
        if self.refresh_day():
            self.current_answer_text = draft

        now = self._clock()
        today = to_local_day(now)
        category = self.selected_category

        answered_categories = set(self.answered_category_ids_today)
        if category is not None:
            answered_categories.add(category.id)
        answered_dates = self.answered_dates | {day_key(today)}

        self.repo.save_submission(
            TrackerSnapshot(
                last_answered_at=now,
                last_answer=self.current_answer_text,
                answered_dates=answered_dates,
                answered_categories_for_today=answered_categories,
            )
        )

        self.answered_dates = answered_dates
        self.answered_category_ids_today = answered_categories
        self.has_answered_today = True
        self._loaded_day = today

        category_name = category.name if category else "none"
        Telemetry.record_submission(category_name)
        self.telemetry.log_info("Answer submitted", category=category_name, day=day_key(today))
        self._notify()
