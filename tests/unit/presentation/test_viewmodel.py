from unittest.mock import Mock

import pytest

from src.qotd.application.tracker import DailyStateTracker
from src.qotd.presentation.state_provider import DictStateProvider, StreamlitStateProvider
from src.qotd.presentation.viewmodel import QuestionViewModel, Screen


@pytest.fixture
def state():
    return DictStateProvider()


@pytest.fixture
def factory(catalog, repo, clock):
    return Mock(side_effect=lambda: DailyStateTracker(catalog, repo, clock=clock))


@pytest.fixture
def vm(factory, state):
    return QuestionViewModel(factory, state)


def test_tracker_built_once_per_session(factory, state):
    first = QuestionViewModel(factory, state)
    second = QuestionViewModel(factory, state)

    assert factory.call_count == 1
    assert first.tracker is second.tracker


def test_starts_on_category_selection(vm):
    assert vm.current_screen == Screen.CATEGORY_SELECTION
    assert vm.title == "Question Categories"


def test_category_rows(vm, catalog):
    rows = vm.category_rows()
    assert [r.name for r in rows] == [c.name for c in catalog]
    assert rows[0].icon == "❤️"
    assert not any(r.answered for r in rows)


def test_select_then_answer_flow(vm, self_reflection, state):
    vm.select_category(str(self_reflection.id))
    assert vm.current_screen == Screen.QUESTION_ACTIVE
    assert vm.title == "Self-Reflection"
    assert vm.can_submit is False

    vm.update_answer("Walking daily")
    assert vm.can_submit is True
    assert vm.submit() is True

    assert vm.current_screen == Screen.ANSWERED
    assert state.get(QuestionViewModel.SCREEN_KEY) == Screen.ANSWERED
    assert next(r for r in vm.category_rows() if r.name == "Self-Reflection").answered


def test_choose_option_sets_answer(vm, catalog):
    partner = catalog.category_at(0)
    vm.select_category(str(partner.id))
    vm.choose_option("Quality Time")
    assert vm.answer == "Quality Time"


def test_empty_answer_not_submitted(vm, self_reflection):
    vm.select_category(str(self_reflection.id))
    assert vm.submit() is False
    assert vm.tracker.has_answered_today is False


def test_back_to_categories(vm, self_reflection):
    vm.select_category(str(self_reflection.id))
    vm.back_to_categories()
    assert vm.current_screen == Screen.CATEGORY_SELECTION


@pytest.mark.parametrize("category_id", ["not-a-uuid", "00000000-0000-0000-0000-000000000000"])
def test_unknown_category_id_ignored(vm, category_id):
    vm.select_category(category_id)
    assert vm.current_screen == Screen.CATEGORY_SELECTION


def test_rerun_next_day_rolls_over(factory, state, clock, self_reflection):
    vm = QuestionViewModel(factory, state)
    vm.select_category(str(self_reflection.id))
    vm.update_answer("Content")
    vm.submit()

    clock.advance(days=1)
    vm = QuestionViewModel(factory, state)

    assert vm.current_screen == Screen.QUESTION_ACTIVE
    assert vm.answer == ""


def test_select_after_midnight_without_rerun_opens_question(vm, clock, self_reflection):
    vm.select_category(str(self_reflection.id))
    vm.update_answer("Content")
    vm.submit()
    vm.back_to_categories()

    clock.advance(days=1)
    vm.select_category(str(self_reflection.id))

    assert vm.current_screen == Screen.QUESTION_ACTIVE
    assert vm.answer == ""


def test_calendar_and_date_label(vm):
    assert vm.date_label == "Wednesday, January 7"
    assert len(vm.calendar()) == 7


def test_streamlit_state_provider_uses_session_state(mock_streamlit_session):
    provider = StreamlitStateProvider()
    provider.set("answer", "Content")

    assert mock_streamlit_session["answer"] == "Content"
    assert provider.get("answer") == "Content"
    assert provider.get("missing", "default") == "default"
