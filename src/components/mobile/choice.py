import streamlit as st

from src.components.mobile.shared import SHARED_CSS

CHOICE_HTML = """
<button id="btn" class="choice-card">
    <span id="text" class="text"></span>
    <span id="check" class="check">✔</span>
</button>
"""

CHOICE_CSS = (
    SHARED_CSS
    + """
.choice-card {
    display: flex;
    align-items: center;
    justify-content: space-between;
    width: 100%;
    background: var(--bg-card);
    border: 1px solid transparent;
    border-radius: 10px;
    padding: 14px 16px;
    cursor: pointer;
    text-align: left;
    color: inherit;
    box-shadow: 0 2px 2px rgba(0, 0, 0, 0.05);
    transition: transform 0.1s;
}
.choice-card:active { transform: scale(0.99); }
.choice-card.selected { border-color: var(--primary); }

.text { font-size: 15px; }

.check {
    visibility: hidden;
    color: var(--primary);
    font-weight: 700;
}
.selected .check { visibility: visible; }
"""
)

CHOICE_JS = """
export default function(component) {
    const { data, setTriggerValue, parentElement } = component;

    const btn = parentElement.querySelector('#btn');
    parentElement.querySelector('#text').textContent = data.text;
    btn.classList.toggle('selected', data.selected);

    btn.onclick = () => {
        setTriggerValue('clicked', data.text);
    };
}
"""

_mobile_choice_component = st.components.v2.component(
    "qotd_mobile_choice",
    html=CHOICE_HTML,
    css=CHOICE_CSS,
    js=CHOICE_JS,
    isolate_styles=True,
)


def mobile_choice(text: str, selected: bool, key: str | None = None) -> str | None:
    """
    Renders one answer choice card. Returns the choice text if tapped.
    """
    result = _mobile_choice_component(
        data={"text": text, "selected": selected},
        key=key,
        on_clicked_change=lambda: None,
    )
    clicked = result.clicked
    return str(clicked) if clicked is not None else None
