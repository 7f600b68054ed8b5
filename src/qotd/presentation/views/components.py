import streamlit as st

from src.config import AppTheme
from src.qotd.domain.models import DayStatus


def apply_styles() -> None:
    st.markdown(
        f"""
        <style>
            .stApp {{ background-color: {AppTheme.BACKGROUND}; }}
            .block-container {{ padding-top: 2rem !important; max-width: 480px; }}
            .date-header {{ font-weight: 600; color: {AppTheme.TEXT}; margin-bottom: 8px; }}
            .section-label {{ color: #6b7280; font-weight: 600; margin: 12px 0 4px; }}
            .question-text {{ font-size: 1.35rem; font-weight: 500; margin-bottom: 1rem; }}
            .answer-box {{ padding: 12px; background: rgba(128,128,128,0.1); border-radius: 10px; }}
            .dot-row {{ display: flex; gap: 4px; padding: 4px 0; }}
            .dot {{ width: 8px; height: 8px; border-radius: 50%; display: inline-block; }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_date_header(label: str) -> None:
    st.markdown(f'<div class="date-header">{label}</div>', unsafe_allow_html=True)


def calendar_dots_html(days: list[DayStatus]) -> str:
    dots = []
    for status in days:
        color = AppTheme.PRIMARY if status.answered else AppTheme.MUTED
        dots.append(
            f'<span class="dot" title="{status.day.isoformat()}" '
            f'style="background:{color}"></span>'
        )
    return f'<div class="dot-row">{"".join(dots)}</div>'


def render_calendar(days: list[DayStatus]) -> None:
    st.markdown('<div class="section-label">Calendar</div>', unsafe_allow_html=True)
    st.markdown(calendar_dots_html(days), unsafe_allow_html=True)
