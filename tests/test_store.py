"""Tests for the CSV index store."""

import pytest

from evlens.core.errors import IndexFileError
from evlens.core.logging import configure_logging
from evlens.store import IndexStore, parse_query


class TestLoadCsv:
    def test_index_named_after_stem(self, store):
        assert list(store.indexes) == ["SecurityEvents", "DnsQueries"]
        assert len(store.indexes["SecurityEvents"]) == 4

    def test_explicit_index_name(self, dns_csv):
        store = IndexStore()
        assert store.load_csv(dns_csv, index_name="Dns") == 2
        assert list(store.indexes) == ["Dns"]

    def test_same_name_appends(self, dns_csv):
        store = IndexStore()
        store.load_csv(dns_csv)
        store.load_csv(dns_csv)
        assert len(store.indexes["DnsQueries"]) == 4

    def test_short_rows_become_empty_strings(self, tmp_path):
        path = tmp_path / "t.csv"
        path.write_text("a,b,c\n1\n")
        store = IndexStore()
        store.load_csv(path)
        assert store.indexes["t"] == [{"a": "1", "b": "", "c": ""}]

    def test_wide_rows_drop_spill_over(self, tmp_path, capsys):
        configure_logging(log_format="text", quiet=True)
        path = tmp_path / "t.csv"
        path.write_text("a,b\n1,2,3\n")
        store = IndexStore()
        store.load_csv(path)

        assert store.indexes["t"] == [{"a": "1", "b": "2"}]
        assert "Dropped extra cells from 1 rows" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        with pytest.raises(IndexFileError):
            IndexStore().load_csv(tmp_path / "missing.csv")

    def test_no_header(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")
        with pytest.raises(IndexFileError):
            IndexStore().load_csv(path)


class TestSearch:
    def test_no_query_returns_everything_in_order(self, store):
        results = store.get_search_results()
        assert [r.index for r in results] == ["SecurityEvents"] * 4 + ["DnsQueries"] * 2
        assert results[0].row["EventID"] == "4625"

    def test_bare_word_substring(self, store):
        store.set_query("10.0.0.5")
        results = store.get_search_results()
        assert len(results) == 3
        assert {r.index for r in results} == {"SecurityEvents", "DnsQueries"}

    def test_index_term(self, store):
        store.set_query("index=securityevents")
        assert {r.index for r in store.get_search_results()} == {"SecurityEvents"}

    def test_column_term(self, store):
        store.set_query("computer=win-02")
        results = store.get_search_results()
        assert [r.row["EventID"] for r in results] == ["1102"]

    def test_terms_are_anded(self, store):
        store.set_query("index=SecurityEvents alice")
        assert len(store.get_search_results()) == 2

    def test_repeated_calls_are_stable(self, store):
        store.set_query("WIN")
        assert store.get_search_results() == store.get_search_results()


class TestParseQuery:
    def test_terms(self):
        assert parse_query("Foo  index=Sec EventID=4625") == [
            (None, "foo"),
            ("index", "sec"),
            ("eventid", "4625"),
        ]

    def test_empty(self):
        assert parse_query("") == []

    def test_leading_equals_is_bare(self):
        assert parse_query("=x") == [(None, "=x")]
