from django.test import SimpleTestCase

from meetcore.apps.scoring.services.teams import (
    REQUIRED_FEMALE_COUNT,
    REQUIRED_MALE_COUNT,
    TeamContributor,
    TeamMember,
    compute_team_results,
    select_gender_quota,
)


def member(rid, club, gender, points, squat=0.0, bw=80.0, dq=False):
    return TeamMember(
        registration_id=rid,
        club=club,
        gender=gender,
        bodyweight_kg=bw,
        coefficient_points=points,
        total_weight=points,
        squat_points=squat,
        best_squat=squat,
        is_disqualified=dq,
    )


def _ids(row):
    return [c.registration_id for c in row.contributors]


class TeamQuotaTest(SimpleTestCase):
    def setUp(self):
        # 5 hombres y 2 mujeres en el mismo club; m5 es el peor en overall pero el mejor en squat
        self.members = [
            member("m1", "Alpha", "Male", 500, squat=100),
            member("m2", "Alpha", "Male", 400, squat=90),
            member("m3", "Alpha", "Male", 300, squat=80),
            member("m4", "Alpha", "Male", 200, squat=10),
            member("m5", "Alpha", "Male", 100, squat=150),
            member("f1", "Alpha", "Female", 300, squat=70),
            member("f2", "Alpha", "Female", 250, squat=60),
        ]

    def test_overall_takes_top_four_men_and_top_woman(self):
        results = compute_team_results(self.members)
        row = results.overall.row_for("Alpha")
        self.assertEqual(len(row.contributors), REQUIRED_MALE_COUNT + REQUIRED_FEMALE_COUNT)
        self.assertEqual(set(_ids(row)), {"m1", "m2", "m3", "m4", "f1"})
        self.assertEqual(row.total_points, 500 + 400 + 300 + 200 + 300)
        self.assertTrue(all(not c.is_placeholder for c in row.contributors))

    def test_squat_board_can_pick_a_different_fourth_man(self):
        results = compute_team_results(self.members)
        row = results.squat.row_for("Alpha")
        self.assertEqual(set(_ids(row)), {"m5", "m1", "m2", "m3", "f1"})
        self.assertEqual(row.total_points, 150 + 100 + 90 + 80 + 70)

    def test_overall_points_shared_across_boards(self):
        results = compute_team_results(self.members)
        expected = results.overall.row_for("Alpha").total_points
        for board in results.boards():
            self.assertEqual(board.row_for("Alpha").overall_points, expected)

    def test_contributors_sorted_for_display(self):
        row = compute_team_results(self.members).overall.row_for("Alpha")
        self.assertEqual(_ids(row), ["m1", "m2", "f1", "m3", "m4"])

    def test_select_gender_quota_is_two_bounded_selections(self):
        pool = [TeamContributor(f"f{i}", "Female", points=1000 - i) for i in range(3)]
        pool += [TeamContributor("m1", "Male", points=1)]
        males, females = select_gender_quota(pool)
        self.assertEqual([c.registration_id for c in males], ["m1"])
        self.assertEqual([c.registration_id for c in females], ["f0"])


class TeamPaddingTest(SimpleTestCase):
    def test_missing_slots_are_placeholders(self):
        members = [
            member("a", "Club B", "Male", 300),
            member("b", "Club B", "Male", 200),
        ]
        row = compute_team_results(members).overall.row_for("Club B")
        self.assertEqual(len(row.contributors), 5)
        self.assertEqual(row.total_points, 500)

        real = [c for c in row.contributors if not c.is_placeholder]
        placeholders = [c for c in row.contributors if c.is_placeholder]
        self.assertEqual(len(real), 2)
        self.assertEqual([c.gender for c in placeholders], ["Male", "Male", "Female"])
        self.assertEqual(
            [c.registration_id for c in placeholders],
            ["Club-B::placeholder-Male-0", "Club-B::placeholder-Male-1", "Club-B::placeholder-Female-0"],
        )
        self.assertTrue(all(c.points == 0 for c in placeholders))


class TeamEligibilityTest(SimpleTestCase):
    def test_excluded_rows(self):
        members = [
            member("dq", "Alpha", "Male", 900, dq=True),
            member("noclub", "   ", "Male", 800),
            member("x", "Alpha", "Other", 700),
            member("ok", " Alpha ", "Male", 100),
        ]
        results = compute_team_results(members)
        self.assertEqual([r.club for r in results.overall.rows], ["Alpha"])
        row = results.overall.row_for("Alpha")
        self.assertEqual(row.total_points, 100)

    def test_no_members_gives_empty_boards(self):
        results = compute_team_results([])
        self.assertEqual([b.rows for b in results.boards()], [[], [], [], []])


class TeamRankingTest(SimpleTestCase):
    def test_clubs_tied_on_points_get_distinct_ranks(self):
        members = [
            member("a1", "Alpha", "Male", 300),
            member("b1", "Beta", "Male", 300),
            member("c1", "Gamma", "Male", 100),
        ]
        rows = compute_team_results(members).overall.rows
        self.assertEqual([(r.club, r.rank) for r in rows], [("Alpha", 1), ("Beta", 2), ("Gamma", 3)])

    def test_tie_on_total_broken_by_contributor_points(self):
        members = [
            member("a1", "Alpha", "Male", 200),
            member("a2", "Alpha", "Male", 200),
            member("b1", "Beta", "Male", 300),
            member("b2", "Beta", "Male", 100),
        ]
        rows = compute_team_results(members).overall.rows
        self.assertEqual([(r.club, r.rank) for r in rows], [("Beta", 1), ("Alpha", 2)])

    def test_boards_order(self):
        results = compute_team_results([member("a", "Alpha", "Female", 10)])
        self.assertEqual([b.metric for b in results.boards()], ["overall", "squat", "bench", "deadlift"])
        self.assertEqual(set(results.as_dict()), {"overall", "squat", "bench", "deadlift"})
