from datetime import date

from src.qotd.domain.calendar_days import day_of_year
from src.qotd.domain.models import Category, Question


class QuestionOfDaySelector:
    """
    Pure domain logic for picking a category's question for a given day.

    The same calendar day maps to the same question every year, and the
    category's questions rotate day by day. Categories are guaranteed to
    hold at least one question by the model validators.
    """

    @staticmethod
    def index_for(category: Category, day: date) -> int:
        """
        Day-of-year modulo the number of questions. Self-Reflection has
        3 questions, so on Jan 7 (day 7) it shows question index 1.
        """
        return day_of_year(day) % len(category.questions)

    @classmethod
    def select(cls, category: Category, day: date) -> Question:
        return category.questions[cls.index_for(category, day)]
