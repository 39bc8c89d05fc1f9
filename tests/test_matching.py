from __future__ import annotations

import unittest

from helpers import make_member, sample_documents

from ddmatch.matching import (
    classify_match,
    generate_all_matches,
    match_score,
    rank_matches_for_member,
    score_breakdown,
    top_matches,
)
from ddmatch.models import Member, member_from_document


class MatchScoreTest(unittest.TestCase):
    def test_identical_peer_profiles_score_near_full(self) -> None:
        a = make_member("a")
        b = make_member("b")
        self.assertAlmostEqual(match_score(a, b), 100.0, places=6)
        self.assertEqual(classify_match(match_score(a, b)), "strong")

    def test_identical_mentor_profiles_lose_stage_points(self) -> None:
        a = make_member("a", match_preference="mentor")
        b = make_member("b", match_preference="mentor")
        self.assertAlmostEqual(match_score(a, b), 84.0, places=6)

    def test_identical_profiles_with_mixed_preferences(self) -> None:
        a = make_member("a", match_preference="peer")
        b = make_member("b", match_preference="mentor")
        self.assertAlmostEqual(match_score(a, b), 94.0, places=6)

    def test_empty_profiles(self) -> None:
        a = Member(id="a")
        b = Member(id="b")
        # stage 20 + faith season 9 + accountability 5 + timezone 4
        self.assertAlmostEqual(match_score(a, b), 38.0, places=6)
        self.assertEqual(classify_match(match_score(a, b)), "weak")

    def test_score_stays_in_range_across_sample_pool(self) -> None:
        members = [member_from_document(doc) for doc in sample_documents()]
        for a in members:
            for b in members:
                if a.id == b.id:
                    continue
                score = match_score(a, b)
                self.assertGreaterEqual(score, 0.0)
                self.assertLessEqual(score, 100.0)

    def test_breakdown_adds_up_to_score(self) -> None:
        a = make_member("a", pods=frozenset({"deploy"}), hobbies=frozenset({"chess", "guitar"}))
        b = make_member("b", stage="new_grad", match_preference="mentee", timezone_offset_hours=-8)
        breakdown = score_breakdown(a, b)
        self.assertEqual(
            set(breakdown),
            {"stage", "pods", "tech", "faith", "habits", "availability", "personality", "social_chemistry"},
        )
        self.assertAlmostEqual(sum(breakdown.values()), match_score(a, b))
        self.assertAlmostEqual(breakdown["stage"], 20 * 0.7)
        self.assertEqual(breakdown["pods"], 0.0)


class ClassifyMatchTest(unittest.TestCase):
    def test_boundaries(self) -> None:
        self.assertEqual(classify_match(100), "strong")
        self.assertEqual(classify_match(80), "strong")
        self.assertEqual(classify_match(79.999), "good")
        self.assertEqual(classify_match(65), "good")
        self.assertEqual(classify_match(64.999), "soft")
        self.assertEqual(classify_match(50), "soft")
        self.assertEqual(classify_match(49.999), "weak")
        self.assertEqual(classify_match(0), "weak")


class RankMatchesTest(unittest.TestCase):
    def test_target_is_never_ranked(self) -> None:
        target = make_member("t")
        x = make_member("x", stage="new_grad")
        y = make_member("y")
        ranked = rank_matches_for_member(target, [target, x, y])
        self.assertEqual(len(ranked), 2)
        self.assertNotIn("t", [r.member.id for r in ranked])

    def test_sorted_descending_with_tiers(self) -> None:
        target = make_member("t")
        weak = Member(id="w")
        close = make_member("c", match_preference="mentor")
        twin = make_member("s")
        ranked = rank_matches_for_member(target, [weak, close, twin])
        self.assertEqual([r.member.id for r in ranked], ["s", "c", "w"])
        for r in ranked:
            self.assertEqual(r.tier, classify_match(r.score))

    def test_ties_keep_input_order(self) -> None:
        target = make_member("t")
        first = make_member("first")
        second = make_member("second")
        self.assertEqual([r.member.id for r in rank_matches_for_member(target, [first, second])], ["first", "second"])
        self.assertEqual([r.member.id for r in rank_matches_for_member(target, [second, first])], ["second", "first"])

    def test_target_missing_from_pool(self) -> None:
        target = make_member("t")
        ranked = rank_matches_for_member(target, [make_member("x")])
        self.assertEqual([r.member.id for r in ranked], ["x"])

    def test_empty_pool(self) -> None:
        self.assertEqual(rank_matches_for_member(make_member("t"), []), [])

    def test_top_matches_truncates(self) -> None:
        target = make_member("t")
        pool = [make_member(f"m{i}", timezone_offset_hours=i) for i in range(6)]
        top = top_matches(target, pool, limit=3)
        self.assertEqual(len(top), 3)
        self.assertEqual(top, rank_matches_for_member(target, pool)[:3])
        self.assertEqual(top_matches(target, pool, limit=0), [])


class GenerateAllMatchesTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.members = [member_from_document(doc) for doc in sample_documents()]

    def test_every_member_gets_ranked_rows(self) -> None:
        result = generate_all_matches(self.members, limit=3)
        self.assertEqual(set(result), {m.id for m in self.members})
        for member_id, rows in result.items():
            self.assertEqual(len(rows), 3)
            self.assertEqual([r["priority_rank"] for r in rows], [1, 2, 3])
            scores = [r["score"] for r in rows]
            self.assertEqual(scores, sorted(scores, reverse=True))
            for row in rows:
                self.assertNotEqual(row["target_id"], member_id)
                self.assertIn(row["tier"], {"strong", "good", "soft", "weak"})
                self.assertIn("breakdown", row)
                self.assertIn("highlights", row)

    def test_without_limit_ranks_whole_pool(self) -> None:
        result = generate_all_matches(self.members)
        for rows in result.values():
            self.assertEqual(len(rows), len(self.members) - 1)


if __name__ == "__main__":
    unittest.main()
