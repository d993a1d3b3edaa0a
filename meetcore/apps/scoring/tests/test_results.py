from django.test import SimpleTestCase

from meetcore.apps.scoring.services.results import (
    DISQUALIFICATION_REASON,
    Attempt,
    Coefficients,
    best_successful,
    compute_result,
    lifts_for_discipline,
)

RESHEL = 0.6699
MCC = 1.08


def _attempts():
    return [
        Attempt("Squat", 1, 200, "Successful"),
        Attempt("Squat", 2, 210, "Failed"),
        Attempt("Bench", 1, 140, "Successful"),
        Attempt("Bench", 2, 150, "Successful"),
        Attempt("Deadlift", 1, 250, "Successful"),
        Attempt("Deadlift", 2, 265, "Pending"),
    ]


class ComputeResultTest(SimpleTestCase):
    def test_full_powerlifting_total(self):
        r = compute_result(_attempts(), "Powerlifting", Coefficients(RESHEL, MCC))
        self.assertEqual(r.best_squat, 200)
        self.assertEqual(r.best_bench, 150)
        self.assertEqual(r.best_deadlift, 250)
        self.assertEqual(r.total_weight, 600)
        self.assertFalse(r.is_disqualified)
        self.assertIsNone(r.disqualification_reason)
        self.assertEqual(r.coefficient_points, 600 * RESHEL * MCC)

    def test_missing_deadlift_disqualifies(self):
        attempts = [a for a in _attempts() if a.lift != "Deadlift"]
        r = compute_result(attempts, "Powerlifting", Coefficients(RESHEL, MCC))
        self.assertTrue(r.is_disqualified)
        self.assertEqual(r.disqualification_reason, DISQUALIFICATION_REASON)
        self.assertEqual(r.disqualification_reason, "Missing required lifts")

    def test_only_failed_attempts_count_as_missing(self):
        attempts = _attempts() + [Attempt("Deadlift", 3, 280, "Failed")]
        attempts = [a for a in attempts if not (a.lift == "Deadlift" and a.status == "Successful")]
        r = compute_result(attempts, "Powerlifting", Coefficients())
        self.assertEqual(r.best_deadlift, 0)
        self.assertTrue(r.is_disqualified)

    def test_single_lift_discipline_totals_one_lift(self):
        r = compute_result(_attempts(), "Bench", Coefficients(RESHEL, MCC))
        self.assertEqual(r.total_weight, 150)
        self.assertEqual(r.coefficient_points, 150 * RESHEL * MCC)
        # los puntos por movimiento se calculan igual para los tres
        self.assertEqual(r.squat_points, 200 * RESHEL * MCC)
        self.assertEqual(r.deadlift_points, 250 * RESHEL * MCC)

    def test_unknown_discipline_totals_everything(self):
        self.assertEqual(lifts_for_discipline("Strongman"), ("Squat", "Bench", "Deadlift"))
        self.assertEqual(lifts_for_discipline("deadlift"), ("Deadlift",))
        r = compute_result(_attempts(), None, Coefficients())
        self.assertEqual(r.total_weight, 600)

    def test_missing_or_non_finite_coefficients_default_to_one(self):
        for coefs in (Coefficients(None, None), Coefficients(float("nan"), float("inf"))):
            r = compute_result(_attempts(), "Powerlifting", coefs)
            self.assertEqual(r.coefficient_points, 600)

    def test_no_attempts(self):
        r = compute_result([], "Powerlifting", Coefficients())
        self.assertEqual(r.total_weight, 0)
        self.assertEqual(r.coefficient_points, 0)
        self.assertTrue(r.is_disqualified)

    def test_idempotent(self):
        a = compute_result(_attempts(), "Powerlifting", Coefficients(RESHEL, MCC))
        b = compute_result(_attempts(), "Powerlifting", Coefficients(RESHEL, MCC))
        self.assertEqual(a, b)
        self.assertEqual(a.as_dict(), b.as_dict())


class BestSuccessfulTest(SimpleTestCase):
    def test_ignores_pending_and_failed(self):
        self.assertEqual(best_successful(_attempts(), "Squat"), 200)
        self.assertEqual(best_successful(_attempts(), "Deadlift"), 250)

    def test_default_zero(self):
        self.assertEqual(best_successful([], "Bench"), 0)
