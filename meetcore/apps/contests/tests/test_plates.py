from django.test import SimpleTestCase

from meetcore.apps.contests.services.plates import (
    DEFAULT_PLATE_COLOR,
    DEFAULT_PLATE_INVENTORY,
    PlateStock,
    build_plate_plan,
    default_plate_color,
    resolve_bar_weight,
)

# Barra 20 kg + 2 clips de 1.25 kg
BAR = 20.0
CLAMP = 1.25


class SmallInventoryPlanTest(SimpleTestCase):
    def setUp(self):
        self.inventory = [PlateStock(0.5, 2)]

    def plan(self, target, inventory=None):
        return build_plate_plan(inventory or self.inventory, target, BAR, CLAMP)

    def test_empty_bar(self):
        p = self.plan(22.5)
        self.assertTrue(p.exact)
        self.assertAlmostEqual(p.total_loaded, 22.5)
        self.assertEqual(p.plates, ())

    def test_one_pair(self):
        p = self.plan(23.5)
        self.assertTrue(p.exact)
        self.assertAlmostEqual(p.total_loaded, 23.5)
        self.assertEqual([(l.plate_weight, l.pair_count) for l in p.plates], [(0.5, 1)])

    def test_both_pairs(self):
        p = self.plan(24.5)
        self.assertTrue(p.exact)
        self.assertEqual([(l.plate_weight, l.pair_count) for l in p.plates], [(0.5, 2)])

    def test_not_enough_plates_never_overshoots(self):
        p = self.plan(25.5)
        self.assertFalse(p.exact)
        self.assertAlmostEqual(p.total_loaded, 24.5)
        self.assertLessEqual(p.total_loaded, 25.5)

    def test_adding_a_pair_of_1_25(self):
        p = self.plan(25.0, [PlateStock(1.25, 1), PlateStock(0.5, 2)])
        self.assertTrue(p.exact)
        self.assertAlmostEqual(p.total_loaded, 25.0)
        self.assertEqual([(l.plate_weight, l.pair_count) for l in p.plates], [(1.25, 1)])

    def test_increment_is_twice_smallest_plate(self):
        self.assertEqual(self.plan(30).increment_kg, 1.0)

    def test_reported_fields(self):
        p = self.plan(24.5)
        self.assertEqual(p.bar_weight_kg, 20.0)
        self.assertEqual(p.clamp_weight_total_kg, 2.5)
        self.assertAlmostEqual(p.weight_to_load_kg, 2.0)
        self.assertEqual(p.target_weight_kg, 24.5)


class DefaultInventoryPlanTest(SimpleTestCase):
    def test_competition_load(self):
        p = build_plate_plan(DEFAULT_PLATE_INVENTORY, 100, 20, 2.5)
        self.assertTrue(p.exact)
        self.assertAlmostEqual(p.total_loaded, 100)
        self.assertEqual([(l.plate_weight, l.pair_count) for l in p.plates], [(25.0, 1), (10.0, 1), (2.5, 1)])
        self.assertEqual(p.plates[0].color, "#DC2626")
        self.assertEqual(p.increment_kg, 0.5)

    def test_inventory_order_does_not_matter(self):
        shuffled = list(reversed(DEFAULT_PLATE_INVENTORY))
        a = build_plate_plan(shuffled, 272.5, 20, 2.5)
        b = build_plate_plan(DEFAULT_PLATE_INVENTORY, 272.5, 20, 2.5)
        self.assertEqual(a, b)

    def test_greedy_is_kept_for_non_canonical_plates(self):
        # 3 x 2 kg por lado cuadraría, pero el reparto voraz empieza por 5 kg
        p = build_plate_plan([PlateStock(5, 1), PlateStock(2, 3)], 37, 20, 2.5)
        self.assertFalse(p.exact)
        self.assertAlmostEqual(p.total_loaded, 35)

    def test_no_plates(self):
        p = build_plate_plan([], 100, 20, 2.5)
        self.assertFalse(p.exact)
        self.assertEqual(p.total_loaded, 25)
        self.assertEqual(p.increment_kg, 2.5)

    def test_target_below_bar(self):
        p = build_plate_plan(DEFAULT_PLATE_INVENTORY, 20, 20, 2.5)
        self.assertTrue(p.exact)
        self.assertEqual(p.plates, ())
        self.assertEqual(p.weight_to_load_kg, 0)

    def test_float_noise_does_not_drop_a_pair(self):
        # 2 * (0.3 - 0.1) = 0.39999999999999997: dos pares de 0.1 por lado
        p = build_plate_plan([PlateStock(0.1, 5)], 2 * (0.3 - 0.1), 0, 0)
        self.assertTrue(p.exact)
        self.assertEqual([(l.plate_weight, l.pair_count) for l in p.plates], [(0.1, 2)])

    def test_tolerance_never_overloads(self):
        # 0.19 por lado con discos de 0.1: un par, nunca dos
        p = build_plate_plan([PlateStock(0.1, 5)], 0.38, 0, 0)
        self.assertFalse(p.exact)
        self.assertEqual([(l.plate_weight, l.pair_count) for l in p.plates], [(0.1, 1)])
        self.assertLessEqual(p.total_loaded, 0.38)

    def test_competition_loads_are_exact(self):
        for target in (102.5, 137.5, 200.5, 272.5, 320):
            p = build_plate_plan(DEFAULT_PLATE_INVENTORY, target, 20, 2.5)
            self.assertTrue(p.exact, target)
            self.assertAlmostEqual(p.total_loaded, target)

    def test_ignores_empty_or_invalid_stock(self):
        p = build_plate_plan([PlateStock(0, 5), PlateStock(10, 0), PlateStock(5, 2)], 45, 20, 2.5)
        self.assertTrue(p.exact)
        self.assertEqual([(l.plate_weight, l.pair_count) for l in p.plates], [(5.0, 2)])


class BarAndColorTest(SimpleTestCase):
    def test_bar_by_gender(self):
        self.assertEqual(resolve_bar_weight("Female", 20, 15), 15)
        self.assertEqual(resolve_bar_weight("Male", 20, 15), 20)
        self.assertEqual(resolve_bar_weight(None), 20)
        self.assertEqual(resolve_bar_weight("f"), 15)

    def test_override_wins(self):
        self.assertEqual(resolve_bar_weight("Female", 20, 15, override_kg=25), 25)

    def test_colors(self):
        self.assertEqual(default_plate_color(25), "#DC2626")
        self.assertEqual(default_plate_color(1.25), "#16A34A")
        self.assertEqual(default_plate_color(0.25), DEFAULT_PLATE_COLOR)

    def test_stock_color_overrides_default(self):
        p = build_plate_plan([PlateStock(20, 1, "#000000")], 65, 20, 2.5)
        self.assertEqual(p.plates[0].color, "#000000")
