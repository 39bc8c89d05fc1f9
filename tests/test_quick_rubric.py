from __future__ import annotations

import unittest

from helpers import make_member

from ddmatch.models import Member
from ddmatch.quick_rubric import quick_match_score


class QuickRubricTest(unittest.TestCase):
    def test_identical_profiles(self) -> None:
        a = make_member("a")
        b = make_member("b")
        # 20 + 15 + 15 + 20 + tech 10 + goals 3 + needs 4
        self.assertEqual(quick_match_score(a, b), 0.87)

    def test_near_values_get_partial_points(self) -> None:
        base = dict(
            tech_interests=frozenset(),
            career_goals=frozenset(),
            spiritual_support_needs=frozenset(),
        )
        a = make_member("a", stage="college", faith_season="exploring", accountability_level="light", **base)
        b = make_member("b", stage="gap_year", faith_season="recently_committed", accountability_level="weekly", **base)
        self.assertEqual(quick_match_score(a, b), round((10 + 8 + 8 + 20) / 100, 2))

    def test_preferences(self) -> None:
        base = Member(id="x")
        mentor = Member(id="a", match_preference="mentor")
        mentee = Member(id="b", match_preference="mentee")
        peer = Member(id="c", match_preference="peer")
        self.assertAlmostEqual(quick_match_score(mentor, mentee) - quick_match_score(mentor, peer), 0.2)
        self.assertEqual(quick_match_score(base, peer), quick_match_score(mentor, mentee))

    def test_overlap_points_are_capped(self) -> None:
        tags = frozenset({"a", "b", "c", "d", "e"})
        a = Member(id="a", tech_interests=tags, career_goals=tags, spiritual_support_needs=tags)
        b = Member(id="b", tech_interests=tags, career_goals=tags, spiritual_support_needs=tags)
        self.assertEqual(quick_match_score(a, b), 1.0)

    def test_result_is_a_fraction(self) -> None:
        score = quick_match_score(Member(id="a", stage="college"), Member(id="b", stage="new_grad", match_preference="mentor"))
        self.assertGreaterEqual(score, 0.0)
        self.assertLessEqual(score, 1.0)


if __name__ == "__main__":
    unittest.main()
