"""
ui.py

User Interface module for the Golf Match Log built with Streamlit

Defines rendering functions for the two views:

1. render_dashboard_tab: Record, streak, favourite course, best win and the monthly chart
2. render_logbook_tab: Filterable, month-grouped match list and the "Log Match" form

Functions accept database query functions as parameters to fetch data, enabling
decoupling of UI and data access logic. The views share nothing but the database;
navigation between them goes through st.session_state.

Dependencies:
- streamlit
- plotly.graph_objects

Functions:
- build_performance_chart(monthly)
- render_dashboard_tab(get_matches)
- render_logbook_tab(get_matches, get_courses, save_match)
"""

import html
import logging
from datetime import date

import streamlit as st
import plotly.graph_objects as go

from db import MatchLogError
from filters import (
    ALL, PERIODS, PERIOD_LABELS, RESULT_LABELS,
    course_names, course_suggestions, filter_matches, group_by_month,
)
from models import FORMATS, RESULTS, MatchEntry
from stats import ALL_TIME, available_years, filter_by_year, monthly_results, summarize

logger = logging.getLogger(__name__)

RESULT_COLORS = {"Win": "#22c55e", "Half": "#9ca3af", "Loss": "#ef4444"}
# Stack order bottom to top
CHART_STACK = ["Win", "Half", "Loss"]

PAGES = ["Dashboard", "Logbook"]

FORM_KEYS = {
    "lb_date": None,
    "lb_course_name": "",
    "lb_format": FORMATS[0],
    "lb_opponent": "",
    "lb_result": RESULTS[0],
    "lb_score": "",
}
# Filter values live outside the widgets so they survive while the panel is hidden
FILTER_WIDGETS = {
    "filter_period": "flt_period",
    "filter_result": "flt_result",
    "filter_course": "flt_course",
}


# ---------------------------------------------------------------------------
# Navigation / session-state callbacks
# ---------------------------------------------------------------------------
def init_session(query_params):
    """
    First-load defaults: dashboard page, logbook in list mode, or straight
    into the "Log Match" form when the URL carries ?new=true
    """
    if "page" in st.session_state:
        return
    st.session_state["page"] = PAGES[0]
    st.session_state["logbook_view"] = "list"
    if query_params.get("new") == "true":
        open_add_form()


def current_filters():
    return tuple(st.session_state.get(key, ALL) for key in FILTER_WIDGETS)


def reset_match_form():
    for key, default in FORM_KEYS.items():
        st.session_state[key] = date.today() if key == "lb_date" else default


def open_add_form():
    st.session_state["page"] = "Logbook"
    st.session_state["logbook_view"] = "add"
    st.session_state.pop("lb_error", None)


def open_match_list():
    st.session_state["page"] = "Logbook"
    st.session_state["logbook_view"] = "list"


def open_dashboard():
    st.session_state["page"] = "Dashboard"


def _cancel_add_form():
    reset_match_form()
    st.session_state.pop("lb_error", None)
    st.session_state["logbook_view"] = "list"


def _pick_course(name):
    st.session_state["lb_course_name"] = name


def _sync_filter(key):
    st.session_state[key] = st.session_state[FILTER_WIDGETS[key]]


def _clear_filters():
    for key, widget_key in FILTER_WIDGETS.items():
        st.session_state[key] = ALL
        st.session_state.pop(widget_key, None)


def _toggle_filters():
    st.session_state["lb_show_filters"] = not st.session_state.get("lb_show_filters", False)


def _entry_from_state():
    return MatchEntry(
        date=st.session_state.get("lb_date") or date.today(),
        course_name=st.session_state.get("lb_course_name", ""),
        format=st.session_state.get("lb_format", FORMATS[0]),
        opponent=st.session_state.get("lb_opponent", ""),
        result=st.session_state.get("lb_result", RESULTS[0]),
        score=st.session_state.get("lb_score", ""),
    )


def _on_save(get_courses, save_match):
    """
    Save button callback

    Runs before the rerun so the form widgets can be reset on success. Errors
    are parked in session state and shown by the form on the next render
    """
    st.session_state.pop("lb_error", None)
    entry = _entry_from_state()
    errors = entry.validate()
    if errors:
        logger.info("Rejected match entry: %s", errors)
        st.session_state["lb_error"] = " ".join(errors)
        return
    try:
        save_match(entry, get_courses())
    except MatchLogError as exc:
        st.session_state["lb_error"] = str(exc)
        return
    reset_match_form()
    st.session_state["logbook_view"] = "list"
    st.session_state["lb_saved"] = True


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
def build_performance_chart(monthly):
    """
    Stacked bar chart of results per month

    Args:
        - monthly (pd.DataFrame): Output of stats.monthly_results()

    Returns:
        plotly.graph_objects.Figure
    """
    fig = go.Figure()
    for result in CHART_STACK:
        fig.add_trace(go.Bar(
            name=result,
            x=monthly["month"],
            y=monthly[result],
            marker_color=RESULT_COLORS[result],
        ))
    fig.update_layout(
        barmode="stack",
        height=300,
        margin=dict(t=10, r=0, b=0, l=0),
        legend=dict(orientation="h", y=-0.15),
        yaxis=dict(showgrid=True, gridcolor="#f3f4f6", dtick=1),
        plot_bgcolor="white",
    )
    return fig


def _stat_card(label, value, sub):
    with st.container(border=True):
        st.metric(label, value)
        st.caption(sub)


def render_dashboard_tab(get_matches):
    """
    Render the "Dashboard" view

    Displays:
    - A year selector ("All Time" or any year with matches)
    - Record, favourite course, unbeaten streak and best win cards
    - A stacked bar chart of wins / halves / losses per month

    Args:
        - get_matches (function): Function to retrieve the matches DataFrame
    """
    head, action = st.columns([4, 1])
    with head:
        st.title("Match Play")
    with action:
        st.button("➕ Log Match", on_click=open_add_form, key="dash_log_match", type="primary")

    matches = get_matches(ascending=True)

    year_options = [ALL_TIME] + [str(year) for year in available_years(matches)]
    if st.session_state.get("dash_year") not in year_options:
        st.session_state["dash_year"] = ALL_TIME
    year = st.selectbox("Period", year_options, key="dash_year")

    filtered = filter_by_year(matches, year)
    summary = summarize(filtered)

    row1 = st.columns(2)
    with row1[0]:
        _stat_card("Record", summary.record, f"{summary.total} Games")
    with row1[1]:
        _stat_card("Fav Course", summary.favorite_course, "Most Wins")
    row2 = st.columns(2)
    with row2[0]:
        _stat_card("Unbeaten", summary.unbeaten_streak, "Current Streak")
    with row2[1]:
        _stat_card("Best Win", summary.best_win, year)

    st.subheader("Performance")
    st.caption(year)
    st.plotly_chart(build_performance_chart(monthly_results(filtered)), use_container_width=True)

    st.button("View Match Log →", on_click=open_match_list, key="dash_view_log")


# ---------------------------------------------------------------------------
# Logbook
# ---------------------------------------------------------------------------
def _text(value, fallback):
    return value if isinstance(value, str) and value.strip() else fallback


def _result_badge(result, score):
    color = RESULT_COLORS.get(result, RESULT_COLORS["Half"])
    return (
        f'<div style="width:56px;height:56px;border-radius:50%;background:{color};'
        f'color:white;display:flex;align-items:center;justify-content:center;'
        f'font-weight:800;font-size:0.85rem">{html.escape(_text(score, "-"))}</div>'
    )


def _format_played_on(value):
    return f"{value.day} {value:%B %Y}"


def _render_match_card(row):
    with st.container(border=True):
        cols = st.columns([1, 5, 2])
        with cols[0]:
            st.markdown(_result_badge(row["result"], row["score"]), unsafe_allow_html=True)
        with cols[1]:
            st.markdown(f"**{_text(row['course_name'], 'Unknown Course')}**")
            st.caption(f"vs {row['opponent']} • {row['format']}")
            st.caption(_format_played_on(row["date"]))
        with cols[2]:
            st.markdown(f"**{str(row['result']).upper()}**")


def _filter_select(label, options, key, format_func):
    current = st.session_state.get(key, ALL)
    st.selectbox(
        label, options, key=FILTER_WIDGETS[key],
        index=options.index(current) if current in options else 0,
        format_func=format_func, on_change=_sync_filter, args=(key,),
    )


def _render_filters(matches):
    courses = [ALL] + course_names(matches)
    if st.session_state.get("filter_course", ALL) not in courses:
        st.session_state["filter_course"] = ALL
        st.session_state.pop(FILTER_WIDGETS["filter_course"], None)

    show = st.session_state.get("lb_show_filters", False)
    st.button("Hide Filters" if show else "Show Filters", on_click=_toggle_filters, key="lb_filters_toggle")
    if show:
        with st.container(border=True):
            cols = st.columns(2)
            with cols[0]:
                _filter_select("Period", PERIODS, "filter_period", lambda p: PERIOD_LABELS.get(p, p))
            with cols[1]:
                _filter_select("Result", [ALL] + RESULTS, "filter_result", lambda r: RESULT_LABELS.get(r, r))
            _filter_select("Course", courses, "filter_course", lambda c: "All Courses" if c == ALL else c)
            if current_filters() != (ALL, ALL, ALL):
                st.button("✕ Clear Filters", on_click=_clear_filters, key="lb_clear_filters")
    return current_filters()


def _render_match_list(get_matches):
    head, back = st.columns([4, 1])
    with head:
        st.title("Match Logbook")
    with back:
        st.button("← Dashboard", on_click=open_dashboard, key="lb_back")

    if st.session_state.pop("lb_saved", False):
        st.success("Match saved.")

    st.button("➕ Log New Match", on_click=open_add_form, key="lb_open_form",
              type="primary", use_container_width=True)

    matches = get_matches(ascending=False)
    period, result, course = _render_filters(matches)
    filtered = filter_matches(matches, period=period, result=result, course=course)

    groups = group_by_month(filtered)
    if not groups:
        st.info("No matches found.")
        return
    for title, items in groups:
        st.caption(title.upper())
        for _, row in items.iterrows():
            _render_match_card(row)


def _render_match_form(get_courses, save_match):
    st.title("Log Match")

    # Widget state is dropped while the list view is showing
    if any(key not in st.session_state for key in FORM_KEYS):
        reset_match_form()

    courses = get_courses()

    with st.container(border=True):
        st.date_input("Date", key="lb_date")

        query = st.text_input("Course Name", key="lb_course_name", placeholder="e.g. Fancourt Montagu")
        suggestions = course_suggestions(courses, query)
        suggestions = suggestions[suggestions["name"].astype(str).str.lower() != query.strip().lower()]
        for _, course in suggestions.iterrows():
            st.button(course["name"], key=f"lb_suggest_{course['id']}",
                      on_click=_pick_course, args=(course["name"],))

        cols = st.columns(2)
        with cols[0]:
            st.selectbox("Format", FORMATS, key="lb_format")
        with cols[1]:
            st.text_input("Opponent", key="lb_opponent", placeholder="Name")

        st.radio("Result", RESULTS, key="lb_result", horizontal=True)
        st.text_input("Score", key="lb_score", placeholder="e.g. 3 & 2")

        if st.session_state.get("lb_error"):
            st.error(st.session_state["lb_error"])

        cols = st.columns(2)
        with cols[0]:
            st.button("Save Match", type="primary", use_container_width=True, key="lb_save",
                      on_click=_on_save, args=(get_courses, save_match))
        with cols[1]:
            st.button("Cancel", use_container_width=True, key="lb_cancel", on_click=_cancel_add_form)


def render_logbook_tab(get_matches, get_courses, save_match):
    """
    Render the "Logbook" view

    Displays either the match list (with collapsible period / result / course
    filters and month headers) or the "Log Match" form, depending on
    st.session_state["logbook_view"]

    Args:
        - get_matches (function): Function to retrieve the matches DataFrame
        - get_courses (function): Function to retrieve the courses DataFrame
        - save_match (function): Function that writes a models.MatchEntry
    """
    if st.session_state.get("logbook_view") == "add":
        _render_match_form(get_courses, save_match)
    else:
        _render_match_list(get_matches)
