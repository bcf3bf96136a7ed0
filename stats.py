"""
stats.py

Statistics engine for the dashboard view

Every function takes the match DataFrame returned by db.get_matches() (oldest
first) and works on it in memory; the data set is one player's history so
plain scans are enough.

Functions:
- available_years(matches): Years that have at least one match, newest first.
- filter_by_year(matches, year): Narrows the frame to one year or keeps "All Time".
- summarize(matches): Record, unbeaten streak, best win and favourite course.
- monthly_results(matches): Win / Loss / Half counts per calendar month.
"""

from dataclasses import dataclass

import pandas as pd

ALL_TIME = "All Time"
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
RESULT_ORDER = ["Win", "Loss", "Half"]
UNKNOWN_COURSE = "Unknown"
EMPTY_STAT = "-"


@dataclass(frozen=True)
class MatchSummary:
    wins: int
    losses: int
    halves: int
    total: int
    unbeaten_streak: int
    best_win: str
    favorite_course: str

    @property
    def record(self):
        return f"{self.wins}-{self.losses}-{self.halves}"


def available_years(matches):
    if matches.empty:
        return []
    years = pd.to_datetime(matches["date"]).dt.year.dropna()
    return sorted({int(year) for year in years}, reverse=True)


def filter_by_year(matches, year):
    if year in (None, ALL_TIME):
        return matches
    years = pd.to_datetime(matches["date"]).dt.year
    return matches[years == int(year)]


def unbeaten_streak(results):
    """Matches since the most recent loss, counting back from the latest."""
    streak = 0
    for result in reversed(list(results)):
        if result == "Loss":
            break
        streak += 1
    return streak


def best_win(matches):
    """Score of the earliest win closed out early ("3 & 2"), "-" if there is none."""
    for score in matches.loc[matches["result"] == "Win", "score"]:
        if isinstance(score, str) and "&" in score:
            return score
    return EMPTY_STAT


def favorite_course(matches):
    wins = matches[matches["result"] == "Win"]
    if wins.empty:
        return EMPTY_STAT

    counts = {}
    for name in wins["course_name"]:
        key = name if isinstance(name, str) and name else UNKNOWN_COURSE
        counts[key] = counts.get(key, 0) + 1

    favorite = None
    for name, count in counts.items():
        if favorite is None or count >= counts[favorite]:
            favorite = name
    return favorite


def summarize(matches):
    results = matches["result"]
    return MatchSummary(
        wins=int((results == "Win").sum()),
        losses=int((results == "Loss").sum()),
        halves=int((results == "Half").sum()),
        total=len(matches),
        unbeaten_streak=unbeaten_streak(results),
        best_win=best_win(matches),
        favorite_course=favorite_course(matches),
    )


def monthly_results(matches):
    """
    Counts results per calendar month across every year in the frame

    Returns:
        pd.DataFrame: 12 rows (Jan..Dec) with columns month, Win, Loss, Half
    """
    if matches.empty:
        chart = pd.DataFrame(0, index=range(1, 13), columns=RESULT_ORDER)
    else:
        months = pd.to_datetime(matches["date"]).dt.month
        chart = (
            pd.crosstab(months, matches["result"])
            .reindex(index=range(1, 13), columns=RESULT_ORDER, fill_value=0)
        )
    chart = chart.astype(int)
    chart.columns.name = None
    chart.insert(0, "month", MONTHS)
    return chart.reset_index(drop=True)
