"""Search coordination: issue-order application and failure handling."""

from __future__ import annotations

import unittest

from browse_fakes import FakeFilesystemService, ManualDispatcher, sample_tree

from lazybrowse.errors import ProtocolViolation, SearchFailed
from lazybrowse.runtime.dispatch import SEARCH_LANE, ImmediateDispatcher
from lazybrowse.runtime.search import SearchCoordinator
from lazybrowse.service.types import FileEntry, SearchQuery
from lazybrowse.state.search import SearchResultSet, SearchStore

HIT_A = {"name": "a.txt", "path": "/docs/a.txt", "filetype": "File"}
HIT_B = {"name": "b.txt", "path": "/b.txt", "filetype": "File"}


def _coordinator(dispatcher=None, service=None) -> tuple[SearchCoordinator, SearchStore, list]:
    store = SearchStore()
    errors: list = []
    coordinator = SearchCoordinator(
        service if service is not None else FakeFilesystemService(sample_tree()),
        dispatcher if dispatcher is not None else ImmediateDispatcher(),
        store,
        error_sink=errors.append,
    )
    return coordinator, store, errors


class SearchOrderingTests(unittest.TestCase):
    def test_later_issued_query_wins_when_it_completes_first(self) -> None:
        dispatcher = ManualDispatcher()
        coordinator, store, _errors = _coordinator(dispatcher)
        query_a = SearchQuery("a")
        query_b = SearchQuery("b")

        coordinator.search(query_a)
        coordinator.search(query_b)
        dispatcher.complete_with(1, [HIT_B])
        dispatcher.complete_with(0, [HIT_A])

        self.assertEqual(store.get().results, (FileEntry("b.txt", "/b.txt", "File"),))
        self.assertEqual(store.get().query, query_b)
        self.assertEqual(coordinator.latest_applied, 2)

    def test_in_order_completions_are_each_applied(self) -> None:
        dispatcher = ManualDispatcher()
        coordinator, store, _errors = _coordinator(dispatcher)
        seen: list[SearchResultSet] = []
        store.subscribe(seen.append)

        coordinator.search(SearchQuery("a"))
        coordinator.search(SearchQuery("b"))
        dispatcher.complete_with(0, [HIT_A])
        dispatcher.complete_with(0, [HIT_B])

        self.assertEqual([len(s.results) for s in seen], [1, 1])
        self.assertEqual(store.get().results[0].name, "b.txt")

    def test_previous_results_stay_visible_while_query_is_pending(self) -> None:
        dispatcher = ManualDispatcher()
        coordinator, store, _errors = _coordinator(dispatcher)
        coordinator.search(SearchQuery("a"))
        dispatcher.complete_with(0, [HIT_A])
        shown = store.get()

        coordinator.search(SearchQuery("b"))

        self.assertIs(store.get(), shown)
        self.assertEqual(coordinator.latest_issued, 2)
        self.assertEqual(coordinator.latest_applied, 1)

    def test_results_replace_rather_than_merge(self) -> None:
        coordinator, store, _errors = _coordinator()

        coordinator.search(SearchQuery("a"))
        first = store.get().results
        coordinator.search(SearchQuery("src", include_files=False))

        self.assertTrue(first)
        self.assertEqual(store.get().results, (FileEntry("src", "/src", "Folder"),))


class SearchFailureTests(unittest.TestCase):
    def test_failure_keeps_last_results_and_reports(self) -> None:
        service = FakeFilesystemService(sample_tree())
        coordinator, store, errors = _coordinator(service=service)
        coordinator.search(SearchQuery("a"))
        shown = store.get()

        service.fail_next("find_file")
        coordinator.search(SearchQuery("readme"))

        self.assertIs(store.get(), shown)
        self.assertEqual(len(errors), 1)
        self.assertIsInstance(errors[0], SearchFailed)
        self.assertIn("readme", str(errors[0]))
        self.assertIs(coordinator.last_error, errors[0])

    def test_failure_of_superseded_query_is_ignored(self) -> None:
        dispatcher = ManualDispatcher()
        coordinator, _store, errors = _coordinator(dispatcher)
        coordinator.search(SearchQuery("a"))
        coordinator.search(SearchQuery("b"))
        dispatcher.complete_with(1, [HIT_B])

        request = dispatcher.pending.pop(0)
        request.on_failure(OSError("late"))

        self.assertEqual(errors, [])

    def test_malformed_results_are_a_search_failure(self) -> None:
        dispatcher = ManualDispatcher()
        coordinator, store, errors = _coordinator(dispatcher)

        coordinator.search(SearchQuery("a"))
        dispatcher.complete_with(0, {"not": "a list"})

        self.assertEqual(store.get(), SearchResultSet())
        self.assertIsInstance(errors[0].__cause__, ProtocolViolation)


class SearchRequestTests(unittest.TestCase):
    def test_query_fields_are_forwarded_to_service(self) -> None:
        service = FakeFilesystemService(sample_tree())
        coordinator, _store, _errors = _coordinator(service=service)

        coordinator.search(SearchQuery("intro.md", include_files=True, include_folders=False, include_links=False, exact=True))

        self.assertEqual(service.calls, [("find_file", "intro.md", True, False, False, True)])

    def test_searches_use_search_lane(self) -> None:
        dispatcher = ManualDispatcher()
        coordinator, _store, _errors = _coordinator(dispatcher)
        coordinator.search(SearchQuery("a"))
        self.assertEqual(dispatcher.pending[0].lane, SEARCH_LANE)

    def test_clear_results_drops_responses_to_earlier_queries(self) -> None:
        dispatcher = ManualDispatcher()
        coordinator, store, _errors = _coordinator(dispatcher)
        coordinator.search(SearchQuery("a"))

        coordinator.clear_results()
        dispatcher.complete_with(0, [HIT_A])

        self.assertEqual(store.get(), SearchResultSet())

        coordinator.search(SearchQuery("b"))
        dispatcher.complete_with(0, [HIT_B])
        self.assertEqual(len(store.get().results), 1)


if __name__ == "__main__":
    unittest.main()
