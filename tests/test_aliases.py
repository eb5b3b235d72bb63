"""Tests for canonical field alias resolution."""

from evlens.models import AliasGroup
from evlens.normalizer.aliases import CANONICAL_FIELDS, EVENT_ID, FieldResolver, resolve_event_id


class TestResolveEventId:
    def test_exact_key(self):
        assert resolve_event_id({"EventID": "4624"}) == "4624"

    def test_case_insensitive(self):
        assert resolve_event_id({"eventid": "9999"}) == "9999"

    def test_key_with_space(self):
        assert resolve_event_id({"Event ID": "4688"}) == "4688"

    def test_trims_value(self):
        assert resolve_event_id({"EventId": "  4625 "}) == "4625"

    def test_alias_priority_beats_row_order(self):
        row = {"Id": "1", "EventId": "4624"}
        assert resolve_event_id(row) == "4624"

    def test_blank_value_falls_through_to_next_alias(self):
        row = {"EventId": "   ", "ID": "4720"}
        assert resolve_event_id(row) == "4720"

    def test_missing(self):
        assert resolve_event_id({"Message": "hello"}) == ""

    def test_empty_row(self):
        assert resolve_event_id({}) == ""

    def test_none_value_is_blank(self):
        assert resolve_event_id({"EventID": None}) == ""


class TestFieldResolver:
    def test_returns_matched_key(self):
        resolver = FieldResolver({"targetusername": " alice "})
        group = AliasGroup(label="Account", aliases=("TargetUserName", "User"))
        assert resolver.resolve(group) == ("targetusername", "alice")

    def test_case_variants_keep_row_order(self):
        row = {"COMPUTER": "first", "computer": "second"}
        group = AliasGroup(label="Computer", aliases=("Computer",))
        assert FieldResolver(row).resolve(group) == ("COMPUTER", "first")

    def test_case_variant_with_blank_value_is_skipped(self):
        row = {"COMPUTER": "", "computer": "second"}
        group = AliasGroup(label="Computer", aliases=("Computer",))
        assert FieldResolver(row).resolve(group) == ("computer", "second")

    def test_unresolved_value_is_empty(self):
        assert FieldResolver({"a": "b"}).value(EVENT_ID) == ""

    def test_canonical_labels_are_unique(self):
        labels = [group.label for group in CANONICAL_FIELDS]
        assert len(labels) == len(set(labels))
        assert EVENT_ID.label not in labels
