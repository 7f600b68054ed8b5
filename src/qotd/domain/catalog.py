import uuid
from collections.abc import Iterator, Sequence

from src.config import CategoryIcon
from src.qotd.domain.models import Category, Question, stable_id


def _category(name: str, icon: CategoryIcon, prompts: Sequence[tuple]) -> Category:
    """
    Builds a Category from (text,) or (text, options) tuples.
    Ids are derived from names, so they are stable across launches.
    """
    questions = []
    for prompt in prompts:
        text = prompt[0]
        options = prompt[1] if len(prompt) > 1 else None
        questions.append(
            Question(id=stable_id(name, text), text=text, options=options)
        )
    return Category(
        id=stable_id(name), name=name, icon=icon.symbol, questions=tuple(questions)
    )


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    _category(
        "Partner Questions",
        CategoryIcon.PARTNER,
        [
            ("What's one thing your partner did recently that made you smile?",),
            ("What's a new activity you'd like to try together?",),
            (
                "What's your partner's love language?",
                [
                    "Words of Affirmation",
                    "Acts of Service",
                    "Physical Touch",
                    "Quality Time",
                    "Receiving Gifts",
                ],
            ),
        ],
    ),
    _category(
        "Friend Questions",
        CategoryIcon.FRIENDS,
        [
            ("Which friend haven't you contacted in a while?",),
            ("What's one way you can be a better friend today?",),
            ("What activity would you like to plan with your friends?",),
        ],
    ),
    _category(
        "Date Questions",
        CategoryIcon.DATE,
        [
            ("What's your idea of a perfect date?",),
            ("What are your long-term goals?",),
            (
                "What's your favorite way to relax?",
                ["Reading", "Exercise", "Movies", "Nature", "Music"],
            ),
        ],
    ),
    _category(
        "Self-Reflection",
        CategoryIcon.SELF,
        [
            ("What's one thing you're proud of about yourself?",),
            ("What's a habit you'd like to develop?",),
            (
                "How are you feeling today?",
                ["Energetic", "Content", "Tired", "Anxious", "Excited"],
            ),
        ],
    ),
)


class QuestionCatalog:
    """
    Fixed, ordered list of categories. Positions are persisted,
    so the order must not change between releases.
    """

    def __init__(self, categories: Sequence[Category] = DEFAULT_CATEGORIES) -> None:
        self._categories = tuple(categories)
        self._by_id = {c.id: c for c in self._categories}
        if len(self._by_id) != len(self._categories):
            raise ValueError("category ids must be unique")

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def get(self, category_id: uuid.UUID | None) -> Category | None:
        if category_id is None:
            return None
        return self._by_id.get(category_id)

    def index_of(self, category: Category) -> int | None:
        for idx, candidate in enumerate(self._categories):
            if candidate.id == category.id:
                return idx
        return None

    def category_at(self, index: int | None) -> Category | None:
        if index is None or not 0 <= index < len(self._categories):
            return None
        return self._categories[index]
