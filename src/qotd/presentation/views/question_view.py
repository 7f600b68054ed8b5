import html

import streamlit as st

from src.components.mobile import mobile_choice
from src.qotd.presentation.viewmodel import QuestionViewModel
from src.qotd.presentation.views import components


def _render_context(vm: QuestionViewModel, label: str) -> None:
    components.render_date_header(vm.date_label)
    components.render_calendar(vm.calendar())
    st.markdown(f'<div class="section-label">{label}</div>', unsafe_allow_html=True)

    text = vm.question.text if vm.question else ""
    st.markdown(
        f'<div class="question-text">{html.escape(text)}</div>', unsafe_allow_html=True
    )


def render_active(vm: QuestionViewModel) -> None:
    st.title(vm.title)
    _render_context(vm, "Today's Question:")

    q = vm.question
    if q is None:
        return

    if q.options:
        for idx, option in enumerate(q.options):
            clicked = mobile_choice(
                option, selected=vm.answer == option, key=f"choice_{q.id}_{idx}"
            )
            if clicked:
                vm.choose_option(clicked)
                st.rerun()
    else:
        text = st.text_area(
            "Your answer",
            value=vm.answer,
            height=100,
            key=f"draft_{q.id}",
            label_visibility="collapsed",
        )
        vm.update_answer(text)

    if st.button(
        "Submit",
        type="primary",
        use_container_width=True,
        disabled=not vm.can_submit,
    ):
        vm.submit()
        st.rerun()


def render_answered(vm: QuestionViewModel) -> None:
    st.title(vm.title)
    _render_context(vm, "You've answered today's question:")

    st.markdown('<div class="section-label">Your answer:</div>', unsafe_allow_html=True)
    st.markdown(
        f'<div class="answer-box">{html.escape(vm.answer)}</div>', unsafe_allow_html=True
    )
    st.caption("Come back tomorrow for a new question!")

    if st.button("⬅️ Choose Another Category"):
        vm.back_to_categories()
        st.rerun()
