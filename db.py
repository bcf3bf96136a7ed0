"""
db.py

Data access layer for the Golf Match Log

Contains functions to query and write the Supabase Database tables `matches` and
`courses`. Reads are cached with Streamlit's caching feature; the caches are
cleared after every successful write so both views refetch fresh data.

Functions:
- get_matches(ascending=True): Fetches every match with its course name, ordered by date.
- get_courses(): Fetches every course ordered by name.
- find_course_id(courses, name): Case-insensitive lookup of a course id in a fetched frame.
- create_course(conn, name): Inserts a course and returns its id.
- insert_match(conn, entry, course_id): Inserts a match and returns its id.
- save_match(entry, courses): Reuses or creates the course, then inserts the match.

Dependencies:
- pandas
- psycopg2
- utils.db_connection (provides a database connection)
- streamlit (for caching)
"""

import logging

import pandas as pd
import psycopg2
import streamlit as st

from utils import db_connection

logger = logging.getLogger(__name__)

MATCH_COLUMNS = ["id", "date", "course_id", "course_name", "format", "opponent", "result", "score"]

MATCHES_QUERY = """
    SELECT
        m.id,
        m.date,
        m.course_id,
        c.name AS course_name,
        m.format,
        m.opponent,
        m.result,
        m.score
    FROM matches m
    LEFT JOIN courses c ON c.id = m.course_id
    ORDER BY m.date {direction}, m.id {direction};
"""


class MatchLogError(Exception):
    """Base class for failures while writing to the match log"""


class CourseCreateError(MatchLogError):
    pass


class MatchSaveError(MatchLogError):
    pass


@st.cache_data(ttl=600)
def get_matches(ascending=True):
    """
    Retrieves all logged matches joined with their course name

    Args:
        - ascending (bool, optional): Oldest first when True (dashboard), newest
          first when False (logbook). Defaults to True

    Returns:
        pd.DataFrame: DataFrame with columns:
            - id: Match ID
            - date: Date played (datetime64)
            - course_id: Course ID
            - course_name: Course name, None if the course row is missing
            - format: Singles / Betterball / Foursomes
            - opponent: Opponent name
            - result: Win / Loss / Half
            - score: Free-form score such as "3 & 2"
    """
    query = MATCHES_QUERY.format(direction="ASC" if ascending else "DESC")
    with db_connection() as conn:
        df = pd.read_sql(query, conn)
    df = df.reindex(columns=MATCH_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    logger.debug("Fetched %d matches", len(df))
    return df


@st.cache_data(ttl=600)
def get_courses():
    """
    Retrieves all courses

    Returns:
        pd.DataFrame: DataFrame with columns id, name ordered by name
    """
    query = """
        SELECT id, name
        FROM courses
        ORDER BY name;
    """
    with db_connection() as conn:
        return pd.read_sql(query, conn)


def find_course_id(courses, name):
    """
    Finds the id of a course whose name equals `name`, ignoring case

    Args:
        - courses (pd.DataFrame): Frame with at least id and name columns
        - name (str): Course name typed into the form

    Returns:
        int | None: The first matching course id, or None
    """
    if courses is None or courses.empty or not name:
        return None
    matches = courses[courses["name"].astype(str).str.lower() == name.lower()]
    if matches.empty:
        return None
    return int(matches.iloc[0]["id"])


def create_course(conn, name):
    with conn.cursor() as cur:
        cur.execute("INSERT INTO courses (name) VALUES (%s) RETURNING id;", (name,))
        course_id = cur.fetchone()[0]
    logger.info("Created course %r with id %s", name, course_id)
    return course_id


def insert_match(conn, entry, course_id):
    query = """
        INSERT INTO matches (date, course_id, format, opponent, result, score)
        VALUES (%s, %s, %s, %s, %s, %s)
        RETURNING id;
    """
    with conn.cursor() as cur:
        cur.execute(query, (
            entry.date,
            course_id,
            entry.format,
            entry.opponent,
            entry.result,
            entry.score,
        ))
        match_id = cur.fetchone()[0]
    logger.info("Saved %s vs %s on %s as match %s", entry.result, entry.opponent, entry.date, match_id)
    return match_id


def save_match(entry, courses):
    """
    Writes a match, creating its course first when the name is new

    Both inserts share one transaction, so a failed match insert does not
    leave an orphan course behind

    Args:
        - entry (models.MatchEntry): The validated form values
        - courses (pd.DataFrame): Known courses used for the name lookup

    Returns:
        int: The new match id

    Raises:
        CourseCreateError: The course insert failed
        MatchSaveError: The connection or the match insert failed
    """
    entry = entry.cleaned()
    course_id = find_course_id(courses, entry.course_name)

    try:
        conn = db_connection()
    except (psycopg2.Error, RuntimeError) as exc:
        logger.exception("Could not connect to save match")
        raise MatchSaveError(f"Error saving match: {exc}") from exc

    try:
        with conn:
            if course_id is None:
                try:
                    course_id = create_course(conn, entry.course_name)
                except psycopg2.Error as exc:
                    logger.exception("Course insert failed for %r", entry.course_name)
                    raise CourseCreateError(f"Error creating course: {exc}") from exc
            try:
                match_id = insert_match(conn, entry, course_id)
            except psycopg2.Error as exc:
                logger.exception("Match insert failed")
                raise MatchSaveError(f"Error saving match: {exc}") from exc
    finally:
        conn.close()

    get_matches.clear()
    get_courses.clear()
    return match_id
