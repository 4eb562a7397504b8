"""
ui/dev_portal/dev_app.py

Dev Portal — entry point.
Pages are discovered automatically from the sibling pages/ directory.

Run from the repository root:
    streamlit run ui/dev_portal/dev_app.py
"""

import streamlit as st

st.set_page_config(
    page_title="Class Scheduling Dev Portal",
    page_icon="🔧",
    layout="wide",
)

st.title("Class Scheduling Dev Portal")
st.warning("⚠ DEV ONLY — These tools write to the local SQLite database.")
st.markdown(
    """
Open **Admin Test Mode** in the sidebar to:

- seed a course and a class with sessions and registrations
- generate the follow-on class for a finished class

Browse the result with the Upcoming Classes viewer:
```
streamlit run ui/app.py
```
"""
)
