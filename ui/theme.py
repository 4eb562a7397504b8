"""
ui/theme.py

Shared portal theme helper.
Call apply_portal_theme() immediately after st.set_page_config() in any
portal page to inject styling and render the consistent header bar.

Tokens:
    accent:      #2F6FEB
    dark:        #14213D
    light gray:  #EEF1F5
"""

from __future__ import annotations

import streamlit as st

_ACCENT     = "#2F6FEB"
_DARK       = "#14213D"
_LIGHT_GRAY = "#EEF1F5"

# ---------------------------------------------------------------------------
# CSS — injected once per page render.
# Double braces {{ }} produce literal CSS braces in the f-string.
# ---------------------------------------------------------------------------
_CSS = f"""
<style>
.block-container {{
    padding-top: 0.75rem !important;
    padding-bottom: 2rem !important;
}}

#MainMenu {{ visibility: hidden; }}
footer {{ visibility: hidden; }}

section[data-testid="stSidebar"] > div:first-child {{
    background-color: {_LIGHT_GRAY};
}}

.stButton > button {{
    border-radius: 8px !important;
}}
.stButton > button[kind="primary"] {{
    background-color: {_ACCENT} !important;
    color: white !important;
    border: none !important;
}}

div[data-testid="metric-container"] {{
    border: 1px solid #E2E6EC;
    border-radius: 10px;
    padding: 0.5rem 0.8rem;
    background-color: white;
}}
</style>
"""


def apply_portal_theme(
    portal_title: str,
    subtitle: str | None = None,
) -> None:
    """Inject portal CSS and render the shared top bar.

    Must be called immediately after st.set_page_config() in each portal page.
    """
    st.markdown(_CSS, unsafe_allow_html=True)

    subtitle_html = (
        f"<div style='color:{_LIGHT_GRAY}; font-size:0.85rem; margin-top:0.15rem;'>{subtitle}</div>"
        if subtitle else
        ""
    )

    st.markdown(
        f"""
        <div style="
            background: {_DARK};
            border-bottom: 3px solid {_ACCENT};
            padding: 0.65rem 1.25rem;
            margin: -0.75rem -1rem 1.0rem -1rem;
            display: flex;
            flex-direction: column;
            line-height: 1.1;
        ">
            <div style="color:white; font-size:1.25rem; font-weight:650;">
                {portal_title}
            </div>
            {subtitle_html}
        </div>
        """,
        unsafe_allow_html=True,
    )
