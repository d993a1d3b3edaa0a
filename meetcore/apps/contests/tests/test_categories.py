from datetime import date

from django.test import SimpleTestCase

from meetcore.apps.contests.services.categories import (
    DEFAULT_AGE_CATEGORY_TEMPLATES,
    DEFAULT_WEIGHT_CLASS_TEMPLATES,
    AgeCategoryDescriptor,
    WeightClassDescriptor,
    determine_age_category,
    determine_weight_class,
    validate_age_categories,
    validate_weight_classes,
)


class AgeCategoryTest(SimpleTestCase):
    def test_default_templates(self):
        self.assertEqual(determine_age_category("2008-04-15", "2025-09-21", DEFAULT_AGE_CATEGORY_TEMPLATES), "T19")
        self.assertEqual(determine_age_category(date(1990, 5, 1), date(2025, 9, 21), DEFAULT_AGE_CATEGORY_TEMPLATES), "OPEN")
        self.assertEqual(determine_age_category("1950-01-01", "2025-09-21", DEFAULT_AGE_CATEGORY_TEMPLATES), "M60")

    def test_sort_order_decides_overlaps(self):
        # 16 años cae en T16 y en T19; gana el de menor sort_order
        self.assertEqual(determine_age_category("2009-01-01", "2025-06-01", DEFAULT_AGE_CATEGORY_TEMPLATES), "T16")

    def test_fallback_to_senior_or_open(self):
        descriptors = [
            AgeCategoryDescriptor(1, "M40", 40, 49, 10),
            AgeCategoryDescriptor(2, "Senior", 24, 39, 20),
        ]
        self.assertEqual(determine_age_category("2005-01-01", "2025-01-01", descriptors), "Senior")

    def test_fallback_to_first_descriptor(self):
        descriptors = [
            AgeCategoryDescriptor(1, "M50", 50, 59, 20),
            AgeCategoryDescriptor(2, "M40", 40, 49, 10),
        ]
        self.assertEqual(determine_age_category("2005-01-01", "2025-01-01", descriptors), "M40")

    def test_unparseable_date_uses_fallback(self):
        self.assertEqual(determine_age_category("??", "2025-01-01", DEFAULT_AGE_CATEGORY_TEMPLATES), "OPEN")

    def test_no_descriptors(self):
        self.assertEqual(determine_age_category("2000-01-01", "2025-01-01", []), "SENIOR")


class WeightClassTest(SimpleTestCase):
    def test_default_templates(self):
        self.assertEqual(determine_weight_class(94.3, "Male", DEFAULT_WEIGHT_CLASS_TEMPLATES), "M_95")
        self.assertEqual(determine_weight_class(52, "Female", DEFAULT_WEIGHT_CLASS_TEMPLATES), "F_52")
        self.assertEqual(determine_weight_class(61, "female", DEFAULT_WEIGHT_CLASS_TEMPLATES), "F_67_5")

    def test_gender_normalisation(self):
        self.assertEqual(determine_weight_class(70, "F", DEFAULT_WEIGHT_CLASS_TEMPLATES), "F_82_5")
        # cualquier cosa que no empiece por f es Male
        self.assertEqual(determine_weight_class(70, "x", DEFAULT_WEIGHT_CLASS_TEMPLATES), "M_82_5")

    def test_overflow_goes_to_last_class(self):
        descriptors = [
            WeightClassDescriptor(1, "M_74", "Male", None, 74, 10),
            WeightClassDescriptor(2, "M_83", "Male", 74.01, 83, 20),
        ]
        self.assertEqual(determine_weight_class(140, "Male", descriptors), "M_83")

    def test_uses_all_classes_when_gender_has_none(self):
        descriptors = [WeightClassDescriptor(1, "M_OPEN", "Male", None, None, 10)]
        self.assertEqual(determine_weight_class(60, "Female", descriptors), "M_OPEN")

    def test_no_descriptors(self):
        self.assertIsNone(determine_weight_class(80, "Male", []))


class ValidationTest(SimpleTestCase):
    def test_templates_are_valid(self):
        self.assertEqual(validate_age_categories(DEFAULT_AGE_CATEGORY_TEMPLATES), [])
        self.assertEqual(validate_weight_classes(DEFAULT_WEIGHT_CLASS_TEMPLATES), [])

    def test_detects_problems(self):
        errors = validate_age_categories([
            AgeCategoryDescriptor(None, "A", 30, 20, 1),
            AgeCategoryDescriptor(None, "a", None, None, 2),
            AgeCategoryDescriptor(None, "", None, None, 3),
        ])
        self.assertEqual(len(errors), 3)

    def test_same_code_allowed_for_different_genders(self):
        errors = validate_weight_classes([
            WeightClassDescriptor(None, "OPEN", "Male"),
            WeightClassDescriptor(None, "OPEN", "Female"),
        ])
        self.assertEqual(errors, [])
