from django.test import SimpleTestCase

from meetcore.apps.scoring.services.comparators import by_asc, by_desc
from meetcore.apps.scoring.services.ranking import (
    SCOPE_AGE,
    SCOPE_OPEN,
    SCOPE_WEIGHT,
    RankingRow,
    has_open_tag,
    has_tag,
    rank_all,
    rank_by_tag,
    rank_rows,
)


def row(rid, points, total=500, bw=80.0, dq=False, labels=(), age=1, weight=10):
    return RankingRow(
        registration_id=rid,
        coefficient_points=points,
        total_weight=total,
        bodyweight_kg=bw,
        is_disqualified=dq,
        labels=tuple(labels),
        age_category_id=age,
        weight_class_id=weight,
    )


class ComparatorChainTest(SimpleTestCase):
    def test_chain_applies_steps_in_order(self):
        data = [(1, "b"), (2, "a"), (1, "a")]
        order = by_desc(lambda t: t[0]).then_asc(lambda t: t[1])
        self.assertEqual(order.sort(data), [(2, "a"), (1, "a"), (1, "b")])

    def test_equal_items_compare_zero(self):
        order = by_asc(lambda t: t)
        self.assertEqual(order(3, 3), 0)
        self.assertEqual(order(2, 3), -1)


class RankRowsTest(SimpleTestCase):
    def test_places_by_points(self):
        ranked = rank_rows([row("a", 300), row("b", 400), row("c", 350)], SCOPE_OPEN)
        self.assertEqual([r.place_open for r in ranked], [3, 1, 2])
        # solo el campo del ámbito pedido
        self.assertTrue(all(r.place_in_age_class is None for r in ranked))

    def test_tie_on_points_breaks_by_total(self):
        ranked = rank_rows([row("a", 400, total=550), row("b", 400, total=600)], SCOPE_OPEN)
        self.assertEqual([r.place_open for r in ranked], [2, 1])

    def test_tie_on_total_lighter_wins(self):
        ranked = rank_rows([row("a", 400, bw=90), row("b", 400, bw=85)], SCOPE_OPEN)
        self.assertEqual([r.place_open for r in ranked], [2, 1])

    def test_final_tie_break_is_registration_id(self):
        ranked = rank_rows([row("b", 400), row("a", 400)], SCOPE_OPEN)
        self.assertEqual([r.place_open for r in ranked], [2, 1])
        # comparación lexicográfica
        ranked = rank_rows([row("9", 400), row("10", 400)], SCOPE_OPEN)
        self.assertEqual([r.place_open for r in ranked], [2, 1])

    def test_disqualified_never_placed(self):
        rows = [row("a", 900, dq=True), row("b", 100)]
        for r in rank_all(rows):
            if r.registration_id == "a":
                self.assertEqual(r.places(), (None, None, None))
            else:
                self.assertEqual(r.places(), (1, 1, 1))

    def test_open_scope_requires_open_label_or_no_labels(self):
        rows = [
            row("a", 300, labels=["Open"]),
            row("b", 400, labels=["Masters"]),
            row("c", 200),
        ]
        ranked = rank_rows(rows, SCOPE_OPEN)
        self.assertEqual([r.place_open for r in ranked], [1, None, 2])

    def test_age_and_weight_groups_are_independent(self):
        rows = [
            row("a", 300, age=1, weight=10),
            row("b", 400, age=2, weight=10),
            row("c", 350, age=1, weight=20),
            row("d", 100, age=None, weight=None),
        ]
        age = rank_rows(rows, SCOPE_AGE)
        weight = rank_rows(rows, SCOPE_WEIGHT)
        self.assertEqual([r.place_in_age_class for r in age], [2, 1, 1, None])
        self.assertEqual([r.place_in_weight_class for r in weight], [2, 1, 1, None])

    def test_rank_all_is_idempotent(self):
        rows = [row("a", 300), row("b", 400, labels=["Masters"]), row("c", 350, dq=True)]
        first = [r.places() for r in rank_all(rows)]
        second = [r.places() for r in rank_all(rows)]
        self.assertEqual(first, second)

    def test_unknown_scope(self):
        with self.assertRaises(ValueError):
            rank_rows([row("a", 1)], "club")

    def test_has_open_tag(self):
        self.assertTrue(has_open_tag([]))
        self.assertTrue(has_open_tag(None))
        self.assertTrue(has_open_tag(["open"]))
        self.assertFalse(has_open_tag(["Juniors"]))


class RankByTagTest(SimpleTestCase):
    def test_has_tag_ignores_case_and_spaces(self):
        self.assertTrue(has_tag([" masters "], "Masters"))
        self.assertFalse(has_tag(["Open"], "Masters"))
        self.assertFalse(has_tag([], "Masters"))
        # Open implícito sin etiquetas
        self.assertTrue(has_tag([], "open"))

    def test_only_tagged_rows_are_placed(self):
        rows = [
            row("a", 400, labels=["Masters"]),
            row("b", 500, labels=["Open"]),
            row("c", 450, labels=["Open", "masters"]),
            row("d", 600, labels=["Masters"], dq=True),
        ]
        ranked = rank_by_tag(rows, "Masters")
        self.assertEqual([(r.registration_id, place) for r, place in ranked], [("c", 1), ("a", 2)])

    def test_unknown_tag_is_empty(self):
        self.assertEqual(rank_by_tag([row("a", 400, labels=["Open"])], "Juniors"), [])
