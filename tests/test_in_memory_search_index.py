import math
import threading
import unittest

from application.services.scoring import TITLE_BOOST
from domain.entities import Document, DocumentStatus
from domain.errors import InvalidDocumentError
from domain.interfaces import SearchIndex
from infrastructure.index.in_memory_search_index import InMemorySearchIndex


def make_document(document_id, title, content, owner_id=42, status=DocumentStatus.READY):
    return Document(id=document_id, title=title, content=content, owner_id=owner_id, status=status)


class TestIndexing(unittest.TestCase):
    def setUp(self) -> None:
        self.index = InMemorySearchIndex()

    def test_index_does_not_change_document_status(self):
        document = make_document(1, "Title", "Some content to index", status=DocumentStatus.NEW)

        self.index.index(document)

        self.assertEqual(document.status, DocumentStatus.NEW)
        self.assertEqual(self.index.owner_of(1), 42)
        self.assertEqual(self.index.document_count, 1)

    def test_document_without_id_is_rejected(self):
        with self.assertRaises(InvalidDocumentError):
            self.index.index(make_document(None, "Title", "content"))
        self.assertEqual(self.index.document_count, 0)

    def test_blank_title_or_content_is_rejected(self):
        with self.assertRaises(InvalidDocumentError):
            self.index.index(make_document(1, "   ", "content"))
        with self.assertRaises(InvalidDocumentError):
            self.index.index(make_document(2, "Title", ""))
        self.assertIsNone(self.index.owner_of(1))
        self.assertIsNone(self.index.owner_of(2))

    def test_reindex_replaces_previous_postings(self):
        self.index.index(make_document(1, "Title", "java java java"))
        self.index.index(make_document(1, "Title", "python"))

        self.assertEqual(self.index.rank(42, ["java"]), [])
        self.assertEqual(self.index.document_frequency("java"), 0)
        self.assertEqual([item.document_id for item in self.index.rank(42, ["python"])], [1])
        self.assertEqual(self.index.rank(42, ["python"])[0].score, 1.0)

    def test_remove_strips_postings_and_owner(self):
        self.index.index(make_document(1, "Title one", "shared words here"))
        self.index.index(make_document(2, "Title two", "shared words there"))

        self.index.remove(1)

        self.assertIsNone(self.index.owner_of(1))
        self.assertEqual(self.index.document_count, 1)
        self.assertEqual(self.index.document_frequency("shared"), 1)
        self.assertEqual([item.document_id for item in self.index.rank(42, ["shared"])], [2])

    def test_document_frequency_is_part_of_the_index_port(self):
        self.assertIsInstance(self.index, SearchIndex)
        self.assertIn("document_frequency", SearchIndex.__abstractmethods__)

        self.index.index(make_document(1, "Alpha", "shared", owner_id=1))
        self.index.index(make_document(2, "Beta", "shared shared", owner_id=2))

        self.assertEqual(self.index.document_frequency("shared"), 2)
        self.assertEqual(self.index.document_frequency("alpha"), 1)
        self.assertEqual(self.index.document_frequency("missing"), 0)

    def test_remove_is_idempotent_and_ignores_none(self):
        self.index.index(make_document(1, "Title", "content"))

        self.index.remove(1)
        self.index.remove(1)
        self.index.remove(None)
        self.index.remove(999)

        self.assertEqual(self.index.document_count, 0)


class TestRanking(unittest.TestCase):
    def setUp(self) -> None:
        self.index = InMemorySearchIndex()

    def test_idf_removes_terms_present_in_every_document(self):
        self.index.index(make_document(42, "Test title 1", "Test containing word java 1. Spring"))
        self.index.index(make_document(52, "Test title 2", "Test containing word java 2"))

        ranked = self.index.rank(42, ["java", "spring"])

        self.assertEqual([item.document_id for item in ranked], [42])
        self.assertAlmostEqual(ranked[0].score, math.log(3.0 / 2.0), places=9)

    def test_single_document_uses_plain_tf(self):
        self.index.index(make_document(1, "Title", "Java search engine test content"))

        ranked = self.index.rank(42, ["search", "engine"])

        self.assertEqual(len(ranked), 1)
        self.assertEqual(ranked[0].score, 2.0)

    def test_owner_isolation(self):
        self.index.index(make_document(1, "Alpha", "shared term", owner_id=1))
        self.index.index(make_document(2, "Beta", "shared term", owner_id=2))
        self.index.index(make_document(3, "Gamma", "other words", owner_id=2))

        self.assertEqual([item.document_id for item in self.index.rank(1, ["shared"])], [1])
        self.assertEqual([item.document_id for item in self.index.rank(2, ["shared"])], [2])
        self.assertEqual(self.index.rank(3, ["shared"]), [])

    def test_idf_is_computed_across_all_owners(self):
        self.index.index(make_document(1, "Alpha", "shared", owner_id=1))
        self.index.index(make_document(2, "Beta", "shared", owner_id=2))
        self.index.index(make_document(3, "Gamma", "other", owner_id=2))

        ranked = self.index.rank(1, ["shared"])

        self.assertAlmostEqual(ranked[0].score, math.log(4 / 3))

    def test_title_occurrence_adds_title_boost_times_idf(self):
        self.index.index(make_document(1, "alpha", "alpha beta"))
        self.index.index(make_document(2, "gamma", "delta"))
        before = self.index.rank(42, ["alpha"])[0].score

        self.index.index(make_document(1, "alpha alpha", "alpha beta"))
        after = self.index.rank(42, ["alpha"])[0].score

        idf = math.log(3 / 2)
        self.assertAlmostEqual(before, (1 + TITLE_BOOST) * idf)
        self.assertAlmostEqual(after - before, TITLE_BOOST * idf)
        self.assertGreater(after, before)

    def test_documents_below_min_score_are_dropped(self):
        for document_id in range(1, 10):
            content = "common common" if document_id == 1 else "common"
            self.index.index(make_document(document_id, f"Doc {document_id}", content))
        self.index.index(make_document(10, "Doc 10", "unrelated"))

        ranked = self.index.rank(42, ["common"])

        # ln(11/10) ~ 0.095 for a single occurrence
        self.assertEqual([item.document_id for item in ranked], [1])

    def test_ranked_by_score_then_id(self):
        self.index.index(make_document(3, "Three", "java"))
        self.index.index(make_document(1, "One", "java"))
        self.index.index(make_document(2, "Two", "java java"))
        self.index.index(make_document(4, "Four", "other"))

        ranked = self.index.rank(42, ["java"])

        self.assertEqual([item.document_id for item in ranked], [2, 1, 3])

    def test_unknown_tokens_are_ignored(self):
        self.index.index(make_document(1, "Title", "java"))

        self.assertEqual(self.index.rank(42, ["missing"]), [])
        self.assertEqual(len(self.index.rank(42, ["missing", "java"])), 1)


class TestConcurrency(unittest.TestCase):
    def test_parallel_index_and_remove(self):
        index = InMemorySearchIndex()
        errors: list[BaseException] = []

        def worker(offset: int) -> None:
            try:
                for document_id in range(offset, offset + 50):
                    index.index(make_document(document_id, "Title", f"shared token{document_id}"))
                    index.rank(42, ["shared"])
                for document_id in range(offset, offset + 50, 2):
                    index.remove(document_id)
            except BaseException as exc:  # pragma: no cover - reported below
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(offset,)) for offset in range(0, 400, 50)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(errors, [])
        self.assertEqual(index.document_count, 200)
        self.assertEqual(index.document_frequency("shared"), 200)


if __name__ == "__main__":
    unittest.main()
