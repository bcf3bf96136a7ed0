"""
Dashboard.py

Main app for my Golf Match Log

This file sets up the page, the sidebar navigation and logging, then hands off
to the UI module, passing in data-access functions from the DB module

Structure:
- Imports data-access functions from 'db.py'
- Imports UI rendering functions from 'ui.py'
- Defines the main() function that:
    - Creates the sidebar navigation between "Dashboard" and "Logbook"
    - Opens the "Log Match" form straight away when the URL carries ?new=true
    - Renders the selected view by calling its UI function
- Runs the main() function if the script is executed as the main module

Usage:
- streamlit run dashboard.py

Dependencies:
- streamlit
- db.py
- ui.py
- utils.py
"""

import streamlit as st
from db import get_matches, get_courses, save_match
from ui import PAGES, init_session, render_dashboard_tab, render_logbook_tab
from utils import configure_logging

st.set_page_config(page_title="Golf Match Log", page_icon="⛳")
configure_logging()


def main():
    """
    Main function to launch the streamlit app

    Sidebar pages:
    1. Dashboard: record, streak, favourite course, best win and monthly chart
    2. Logbook: filtered match list and the form to log a new match
    """
    init_session(st.query_params)

    page = st.sidebar.radio("Go to", PAGES, key="page")

    if page == "Logbook":
        render_logbook_tab(get_matches, get_courses, save_match)
    else:
        render_dashboard_tab(get_matches)


if __name__ == "__main__":
    main()
