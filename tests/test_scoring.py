import math
import unittest

from application.services.scoring import MIN_SCORE, TITLE_BOOST, smoothed_idf, term_frequency


class TestTermFrequency(unittest.TestCase):
    def test_title_occurrences_are_boosted(self):
        self.assertEqual(TITLE_BOOST, 3.0)
        self.assertEqual(term_frequency(title_freq=1, content_freq=2), 5.0)
        self.assertEqual(term_frequency(title_freq=0, content_freq=4), 4.0)

    def test_custom_boost(self):
        self.assertEqual(term_frequency(2, 1, title_boost=1.5), 4.0)


class TestSmoothedIdf(unittest.TestCase):
    def test_falls_back_to_one_without_enough_documents(self):
        self.assertEqual(smoothed_idf(total_documents=0, document_frequency=0), 1.0)
        self.assertEqual(smoothed_idf(total_documents=1, document_frequency=1), 1.0)

    def test_absent_term_contributes_nothing(self):
        self.assertEqual(smoothed_idf(total_documents=5, document_frequency=0), 0.0)

    def test_formula(self):
        self.assertAlmostEqual(smoothed_idf(2, 1), math.log(3 / 2))
        self.assertAlmostEqual(smoothed_idf(2, 2), 0.0)
        self.assertAlmostEqual(smoothed_idf(10, 9), math.log(11 / 10))

    def test_min_score(self):
        self.assertEqual(MIN_SCORE, 0.1)


if __name__ == "__main__":
    unittest.main()
