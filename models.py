"""
models.py

Form model for logging a single match-play result

The dataclass documents the fields the "Log Match" form collects and
carries the only validation rule the app enforces before writing.

Fields:
    - date: day the match was played
    - course_name: free text, matched to an existing course case-insensitively
    - format: one of FORMATS
    - opponent: free text
    - result: one of RESULTS
    - score: free text such as "3 & 2" or "1 up", may be empty
"""

from dataclasses import dataclass, replace
from datetime import date as Date

RESULTS = ["Win", "Loss", "Half"]
FORMATS = ["Singles", "Betterball", "Foursomes"]

MISSING_FIELDS_MESSAGE = "Please fill in Course and Opponent"


@dataclass(frozen=True)
class MatchEntry:
    date: Date
    course_name: str = ""
    format: str = "Singles"
    opponent: str = ""
    result: str = "Win"
    score: str = ""

    @classmethod
    def blank(cls, today):
        return cls(date=today)

    def cleaned(self):
        """Copy with surrounding whitespace removed from the text fields."""
        return replace(
            self,
            course_name=(self.course_name or "").strip(),
            opponent=(self.opponent or "").strip(),
            score=(self.score or "").strip(),
        )

    def validate(self):
        entry = self.cleaned()
        errors = []
        if not entry.course_name or not entry.opponent:
            errors.append(MISSING_FIELDS_MESSAGE)
        if entry.result not in RESULTS:
            errors.append(f"Unknown result: {entry.result}")
        if entry.format not in FORMATS:
            errors.append(f"Unknown format: {entry.format}")
        return errors
