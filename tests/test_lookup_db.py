"""
Lookup Store Tests

1. Search - ranking, ordering, limits, literal matching
2. Lookup by id
3. Opening - read-only open, init failures, embedded catalog
"""

import sqlite3

import pytest

from ghofig.errors import NotFoundError, StoreInitError, StoreQueryError
from ghofig.lookup_db import LookupStore, SEARCH_LIMIT
from ghofig.reference_parser import write_database


ENTRIES = [
    ("font-size", "Font size in points."),
    ("font-family", "The font families to use."),
    ("background", "Background color for the window."),
    ("cursor-style", "The style of the cursor. Block, bar or underline."),
    ("theme", "A theme to use. Colors from the theme override the font color defaults."),
    ("adjust_cell", "Adjust cell metrics by 20% or 1 point."),
    ("adjustXcell", "Lookalike used to check wildcard escaping."),
]


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def store(tmp_path):
    """Store over a small known catalog"""
    db_path = tmp_path / "configs.db"
    write_database(db_path, ENTRIES)

    store = LookupStore(db_path)
    yield store
    store.close()


@pytest.fixture
def big_store(tmp_path):
    """Store with more rows than the search limit"""
    db_path = tmp_path / "big.db"
    entries = [(f"option-{i:03d}", f"Description number {i}") for i in range(80, 0, -1)]
    write_database(db_path, entries)

    store = LookupStore(db_path)
    yield store
    store.close()


# =============================================================================
# SEARCH
# =============================================================================

class TestSearch:
    """Substring search over title and description"""

    def test_empty_query_sorted_by_title(self, store):
        """Empty query lists all entries alphabetically"""
        titles = [e.title for e in store.search("")]
        assert titles == sorted(title for title, _ in ENTRIES)

    def test_limit_on_empty_query(self, big_store):
        results = big_store.search("")
        assert len(results) == SEARCH_LIMIT
        assert results[0].title == "option-001"

    def test_limit_on_query(self, big_store):
        assert len(big_store.search("option")) == SEARCH_LIMIT
        assert len(big_store.search("Description")) == SEARCH_LIMIT

    def test_every_result_contains_query(self, store):
        for entry in store.search("font"):
            haystack = (entry.title + entry.description).lower()
            assert "font" in haystack

    def test_title_matches_rank_first(self, store):
        """Title matches sort strictly before description-only matches"""
        titles = [e.title for e in store.search("font")]

        assert titles == ["font-family", "font-size", "theme"]

    def test_case_insensitive(self, store):
        upper = [e.title for e in store.search("FONT")]
        lower = [e.title for e in store.search("font")]
        assert upper == lower

    def test_description_only_match(self, store):
        results = store.search("underline")
        assert [e.title for e in results] == ["cursor-style"]

    def test_no_match(self, store):
        assert store.search("nonexistent-option-xyz") == []

    def test_underscore_is_literal(self, store):
        """'_' in the query is not a single-character wildcard"""
        titles = [e.title for e in store.search("adjust_cell")]
        assert titles == ["adjust_cell"]

    def test_percent_is_literal(self, store):
        titles = [e.title for e in store.search("20%")]
        assert titles == ["adjust_cell"]

    def test_entries_carry_ids(self, store):
        results = store.search("background")
        assert results[0].id > 0
        assert results[0].description == "Background color for the window."

    def test_query_error_wrapped(self, store):
        """A broken connection surfaces as StoreQueryError"""
        store.conn.close()

        with pytest.raises(StoreQueryError):
            store.search("font")


# =============================================================================
# LOOKUP BY ID
# =============================================================================

class TestGetById:
    """Fetching a single entry"""

    def test_get_by_id_matches_search(self, store):
        first = store.search("font")[0]
        assert store.get_by_id(first.id) == first

    def test_missing_id(self, store):
        with pytest.raises(NotFoundError, match="config not found"):
            store.get_by_id(99999)

    def test_count(self, store):
        assert store.count() == len(ENTRIES)


# =============================================================================
# OPENING
# =============================================================================

class TestOpen:
    """Read-only open and startup failures"""

    def test_store_is_read_only(self, store):
        with pytest.raises(sqlite3.OperationalError):
            store.conn.execute("INSERT INTO configs (title, description) VALUES ('x', 'y')")

    def test_missing_file(self, tmp_path):
        with pytest.raises(StoreInitError):
            LookupStore(tmp_path / "does-not-exist.db")

    def test_missing_table(self, tmp_path):
        db_path = tmp_path / "empty.db"
        conn = sqlite3.connect(str(db_path))
        conn.execute("CREATE TABLE other (id INTEGER)")
        conn.commit()
        conn.close()

        with pytest.raises(StoreInitError, match="no configs table"):
            LookupStore(db_path)

    def test_context_manager_closes(self, tmp_path):
        db_path = tmp_path / "configs.db"
        write_database(db_path, ENTRIES)

        with LookupStore(db_path) as store:
            assert store.count() == len(ENTRIES)
        assert store.conn is None
        assert db_path.exists()


class TestEmbeddedCatalog:
    """Bundled reference materialized at startup"""

    def test_materializes_and_searches(self, tmp_path):
        store = LookupStore.from_embedded(temp_dir=tmp_path)
        try:
            assert store.count() > 0
            titles = [e.title for e in store.search("font")]
            assert "font-family" in titles
            assert titles.index("font-family") < 10
        finally:
            store.close()

    def test_temp_file_removed_on_close(self, tmp_path):
        store = LookupStore.from_embedded(temp_dir=tmp_path)
        db_path = store.db_path
        assert db_path.exists()

        store.close()
        assert not db_path.exists()

    def test_aliases_share_description(self, tmp_path):
        with LookupStore.from_embedded(temp_dir=tmp_path) as store:
            bold = store.search("font-family-bold")[0]
            italic = [e for e in store.search("font-family-italic") if e.title == "font-family-italic"][0]
            assert bold.description == italic.description

    def test_unreadable_reference(self, tmp_path):
        with pytest.raises(StoreInitError):
            LookupStore.from_embedded(reference_path=tmp_path / "missing.md", temp_dir=tmp_path)

    def test_sessions_use_separate_files(self, tmp_path):
        first = LookupStore.from_embedded(temp_dir=tmp_path)
        second = LookupStore.from_embedded(temp_dir=tmp_path)
        try:
            assert first.db_path != second.db_path

            first.close()
            assert not first.db_path.exists()
            assert second.count() > 0
        finally:
            first.close()
            second.close()

    def test_leftover_file_does_not_block_startup(self, tmp_path):
        """A stale file from an earlier run is left alone"""
        stale = tmp_path / "ghofig.db"
        stale.write_text("not a database")

        with LookupStore.from_embedded(temp_dir=tmp_path) as store:
            assert store.count() > 0
        assert stale.read_text() == "not a database"

    def test_failed_build_leaves_no_file(self, tmp_path):
        with pytest.raises(StoreInitError):
            LookupStore.from_embedded(reference_path=tmp_path / "missing.md", temp_dir=tmp_path)
        assert list(tmp_path.iterdir()) == []
