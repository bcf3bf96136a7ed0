"""
filters.py

Filter engine for the logbook view

Works on the match DataFrame returned by db.get_matches(ascending=False) and on
the course DataFrame returned by db.get_courses().
"""

from datetime import date, timedelta

import pandas as pd

ALL = "All"
PERIODS = ["All", "Last 30 Days", "This Year", "Last Year"]
PERIOD_LABELS = {"All": "All Time"}
RESULT_LABELS = {"All": "All Results", "Win": "Wins", "Loss": "Losses", "Half": "Halves"}
RECENT_DAYS = 30
MIN_SUGGESTION_QUERY = 2


def course_names(matches):
    names = matches["course_name"].dropna().astype(str)
    return sorted({name for name in names if name})


def _period_mask(dates, period, today):
    if period == "Last 30 Days":
        # Rolling window measured from now, so the day exactly 30 days back is already out
        cutoff = pd.Timestamp(today - timedelta(days=RECENT_DAYS))
        return dates > cutoff
    if period == "This Year":
        return dates.dt.year == today.year
    if period == "Last Year":
        return dates.dt.year == today.year - 1
    return pd.Series(True, index=dates.index)


def filter_matches(matches, period=ALL, result=ALL, course=ALL, today=None):
    """
    Applies the logbook filters, all of which must pass

    Args:
        - matches (pd.DataFrame): Matches with date, result and course_name columns
        - period (str): One of PERIODS
        - result (str): "All" or Win / Loss / Half
        - course (str): "All" or an exact course name
        - today (date, optional): Reference day for the period filters. Defaults to today

    Returns:
        pd.DataFrame: The matching rows in their original order
    """
    if period not in PERIODS:
        raise ValueError(f"Unknown period: {period}")
    today = today or date.today()

    dates = pd.to_datetime(matches["date"])
    mask = _period_mask(dates, period, today)
    if result != ALL:
        mask &= matches["result"] == result
    if course != ALL:
        mask &= matches["course_name"] == course
    return matches[mask]


def month_title(value):
    return pd.Timestamp(value).strftime("%B %Y")


def group_by_month(matches):
    """
    Splits the frame into consecutive runs sharing a "Month YYYY" title

    Input order is kept, so a frame sorted newest first yields the newest
    month first
    """
    if matches.empty:
        return []
    titles = pd.to_datetime(matches["date"]).map(month_title)
    run_ids = (titles != titles.shift()).cumsum()
    return [
        (titles.loc[group.index[0]], group)
        for _, group in matches.groupby(run_ids.values, sort=False)
    ]


def course_suggestions(courses, query):
    if not query or len(query) < MIN_SUGGESTION_QUERY or courses.empty:
        return courses.iloc[0:0]
    names = courses["name"].astype(str).str.lower()
    return courses[names.str.contains(query.lower(), regex=False)]
