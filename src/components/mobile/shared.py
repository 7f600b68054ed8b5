# Components keep their HTML/CSS/JS as Python string constants (Streamlit
# Components V2 takes code as strings), so each module is self-contained.

from src.config import AppTheme

SHARED_CSS = f"""
:host {{
    display: block;
    width: 100%;
    font-family: -apple-system, BlinkMacSystemFont, "Inter", Roboto, sans-serif;
    box-sizing: border-box;
    font-size: 16px;
    line-height: 1.5;
    color: {AppTheme.TEXT};
    -webkit-font-smoothing: antialiased;
    --primary: {AppTheme.PRIMARY};
    --primary-dark: {AppTheme.PRIMARY_DARK};
    --success: {AppTheme.SUCCESS};
    --muted: {AppTheme.MUTED};
    --bg-card: #ffffff;
}}
* {{
    box-sizing: border-box;
    margin: 0;
    padding: 0;
    -webkit-tap-highlight-color: transparent;
}}
@media (prefers-color-scheme: dark) {{
    :host {{
        --bg-card: #292524;
        color: #fafaf9;
    }}
}}
"""
