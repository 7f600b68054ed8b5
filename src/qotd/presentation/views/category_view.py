import streamlit as st

from src.qotd.presentation.viewmodel import QuestionViewModel


def render(vm: QuestionViewModel) -> None:
    """Category list; a check mark flags categories answered today."""
    st.title(vm.title)

    for row in vm.category_rows():
        label = f"{row.icon}  {row.name}"
        if row.answered:
            label += "  ✅"

        if st.button(label, key=f"cat_{row.id}", use_container_width=True):
            vm.select_category(row.id)
            st.rerun()
