import unittest
from datetime import date

from models import MISSING_FIELDS_MESSAGE, MatchEntry


class MatchEntryTests(unittest.TestCase):
    def test_blank_form_defaults(self) -> None:
        entry = MatchEntry.blank(date(2025, 6, 15))
        self.assertEqual(entry.date, date(2025, 6, 15))
        self.assertEqual(entry.format, "Singles")
        self.assertEqual(entry.result, "Win")
        self.assertEqual((entry.course_name, entry.opponent, entry.score), ("", "", ""))

    def test_course_and_opponent_required(self) -> None:
        today = date(2025, 6, 15)
        self.assertEqual(MatchEntry(today, opponent="Jan").validate(), [MISSING_FIELDS_MESSAGE])
        self.assertEqual(MatchEntry(today, course_name="Fancourt").validate(), [MISSING_FIELDS_MESSAGE])
        self.assertEqual(MatchEntry(today, course_name="Fancourt", opponent="   ").validate(), [MISSING_FIELDS_MESSAGE])
        self.assertEqual(MatchEntry(today, course_name="Fancourt", opponent="Jan").validate(), [])

    def test_unknown_result_and_format(self) -> None:
        entry = MatchEntry(date(2025, 6, 15), course_name="Fancourt", opponent="Jan", result="Draw", format="Scramble")
        self.assertEqual(entry.validate(), ["Unknown result: Draw", "Unknown format: Scramble"])

    def test_cleaned_strips_text(self) -> None:
        entry = MatchEntry(date(2025, 6, 15), course_name=" Fancourt ", opponent="Jan ", score=" 3 & 2").cleaned()
        self.assertEqual((entry.course_name, entry.opponent, entry.score), ("Fancourt", "Jan", "3 & 2"))


if __name__ == "__main__":
    unittest.main()
