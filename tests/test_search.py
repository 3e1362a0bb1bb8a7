"""Tests for the knowledge base search/filter predicate."""

import pytest

from helpdesk.search import categories, entry_contains, search

from conftest import make_entry


def _contains(entry, query):
    q = query.lower()
    return q in entry.question.lower() or q in entry.answer.lower() or any(q in t.lower() for t in entry.tags)


class TestSearch:
    """Tests for search."""

    def test_empty_query_returns_everything_in_order(self, default_entries):
        assert search("", default_entries) == list(default_entries)

    def test_results_keep_kb_order(self, default_entries):
        results = search("react", default_entries)
        positions = [default_entries.index(e) for e in results]
        assert positions == sorted(positions)

    def test_idempotent(self, default_entries):
        assert search("docker", default_entries) == search("docker", default_entries)

    def test_case_insensitive(self, default_entries):
        assert search("MongoDB", default_entries) == search("mongodb", default_entries)

    @pytest.mark.parametrize("query", ["react", "Docker", "learning-path", "JVM", "ptr", "memory", "xyz-nothing", " "])
    def test_substring_law(self, default_entries, query):
        """An entry is returned exactly when the query occurs in its question, answer or a tag."""
        results = search(query, default_entries)
        assert results == [e for e in default_entries if _contains(e, query)]

    def test_matches_tag_only(self):
        entries = [make_entry("a", ["getting-started"], question="Q?", answer="A.")]
        assert search("getting-st", entries) == entries

    def test_does_not_match_across_tags(self):
        """Tags are tested one by one, never as a joined string."""
        entries = [make_entry("a", ["react", "hooks"], question="Q?", answer="A.")]
        assert search("react hooks", entries) == []

    def test_no_results(self, default_entries):
        assert search("cobol mainframe", default_entries) == []


class TestCategoryFilter:
    """Tests for the optional category filter."""

    def test_filters_by_category(self, default_entries):
        results = search("", default_entries, category="Databases")
        assert results
        assert all(e.category == "Databases" for e in results)

    def test_category_is_case_insensitive(self, default_entries):
        assert search("", default_entries, category="databases") == search("", default_entries, category="Databases")

    def test_all_disables_filter(self, default_entries):
        assert search("", default_entries, category="all") == list(default_entries)

    def test_combines_with_query(self, default_entries):
        results = search("mongodb", default_entries, category="Databases")
        assert results
        assert all(e.category == "Databases" and _contains(e, "mongodb") for e in results)

    def test_unknown_category(self, default_entries):
        assert search("", default_entries, category="Cooking") == []


def test_categories_in_first_appearance_order():
    entries = [
        make_entry("1", ["a"], category="React"),
        make_entry("2", ["b"], category="Databases"),
        make_entry("3", ["c"], category="React"),
    ]
    assert categories(entries) == ["React", "Databases"]


def test_entry_contains_expects_lowercase_needle():
    entry = make_entry("1", ["docker"], question="What is Docker?")
    assert entry_contains(entry, "docker")
