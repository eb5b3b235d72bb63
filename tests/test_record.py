"""Tests for the record normalizer."""

from evlens.catalog import EventCatalog
from evlens.models import CatalogEntry
from evlens.normalizer.aliases import CANONICAL_FIELDS
from evlens.normalizer.record import UNKNOWN_EVENT, RecordNormalizer, normalize, truncate


class TestNormalize:
    def test_failed_logon(self, failed_logon_row, catalog):
        view = normalize(failed_logon_row, catalog)

        assert view.event_id == "4625"
        assert view.label == "Failed Logon"
        assert view.category == "Authentication"
        assert view.severity == "warn"
        assert view.field("Account") == "alice"
        assert view.field("Computer") == "WIN-01"
        assert view.extra_fields == []
        assert view.extra_overflow == 0

    def test_unknown_event(self, catalog):
        view = normalize({"eventid": "9999", "Foo": "bar"}, catalog)

        assert view.event_id == "9999"
        assert view.label == UNKNOWN_EVENT
        assert view.category is None
        assert view.severity == "info"
        assert [(e.key, e.value) for e in view.extra_fields] == [("Foo", "bar")]

    def test_no_identifier(self, catalog):
        view = normalize({"Message": "hello"}, catalog)

        assert view.event_id == ""
        assert view.label == UNKNOWN_EVENT
        assert view.field("Event ID") is None
        assert [f.label for f in view.canonical_fields] == ["Description"]

    def test_field_order_follows_canonical_list(self, catalog):
        row = {
            "IpAddress": "10.0.0.5",
            "Computer": "WIN-01",
            "TimeCreated": "2024-03-01T10:00:00Z",
            "EventID": "4624",
        }
        labels = [f.label for f in normalize(row, catalog).canonical_fields]
        assert labels == ["Event ID", "Description", "Time", "Computer", "Source IP"]

    def test_empty_fields_omitted(self, catalog):
        view = normalize({"EventID": "4624", "Computer": "  ", "TargetUserName": ""}, catalog)
        assert all(f.value for f in view.canonical_fields)
        assert view.field("Computer") is None

    def test_critical_severity(self, catalog):
        assert normalize({"ID": "1102"}, catalog).severity == "critical"

    def test_values_are_trimmed(self, catalog):
        view = normalize({"EventID": " 4740 ", "TargetUserName": "  bob "}, catalog)
        assert view.event_id == "4740"
        assert view.field("Account") == "bob"

    def test_is_deterministic(self, failed_logon_row, catalog):
        row = {**failed_logon_row, "Extra1": "x" * 80, "Extra2": "y"}
        first = normalize(row, catalog)
        second = normalize(row, catalog)
        assert first.model_dump_json() == second.model_dump_json()

    def test_does_not_mutate_row(self, catalog):
        row = {"EventID": " 4624 ", "Foo": " bar "}
        before = dict(row)
        normalize(row, catalog)
        assert row == before

    def test_defaults_to_builtin_catalog(self):
        assert normalize({"EventID": "4698"}).label == "Scheduled Task Created"

    def test_total_over_odd_rows(self, catalog):
        view = normalize({"": "", "EventID": None, "x": "  "}, catalog)
        assert view.label == UNKNOWN_EVENT
        assert view.extra_fields == []


class TestExtras:
    def test_consumed_keys_not_in_extras(self, catalog):
        row = {"EventID": "4624", "TargetUserName": "alice", "AccountName": "alice2", "Channel": "Security"}
        view = normalize(row, catalog)

        extra_keys = [e.key for e in view.extra_fields]
        assert "EventID" not in extra_keys
        assert "TargetUserName" not in extra_keys
        # Lower-priority alias of a resolved field is not consumed
        assert extra_keys == ["AccountName", "Channel"]

    def test_every_alias_group_consumes_its_key(self, catalog):
        row = {group.aliases[0]: f"value-{i}" for i, group in enumerate(CANONICAL_FIELDS)}
        row["EventID"] = "4624"
        view = normalize(row, catalog)
        assert view.extra_fields == []
        assert len(view.canonical_fields) == len(CANONICAL_FIELDS) + 2

    def test_blank_extras_skipped(self, catalog):
        view = normalize({"EventID": "4624", "A": "", "B": "   ", "C": "c"}, catalog)
        assert [(e.key, e.value) for e in view.extra_fields] == [("C", "c")]

    def test_extras_keep_row_order(self, catalog):
        view = normalize({"Zeta": "1", "EventID": "4624", "Alpha": "2"}, catalog)
        assert [e.key for e in view.extra_fields] == ["Zeta", "Alpha"]

    def test_long_values_truncated(self, catalog):
        view = normalize({"EventID": "4624", "CommandLine": "a" * 80}, catalog)
        assert view.extra_fields[0].value == "a" * 50 + "…"

    def test_extras_capped_with_overflow(self, catalog):
        row = {"EventID": "4624", **{f"K{i}": str(i) for i in range(9)}}
        view = normalize(row, catalog)
        assert [e.key for e in view.extra_fields] == ["K0", "K1", "K2", "K3", "K4", "K5"]
        assert view.extra_overflow == 3

    def test_custom_caps(self, catalog):
        row = {"EventID": "4624", **{f"K{i}": "v" * 70 for i in range(10)}}
        view = RecordNormalizer(catalog=catalog, value_cap=60, extras_cap=8).normalize(row)
        assert len(view.extra_fields) == 8
        assert view.extra_overflow == 2
        assert view.extra_fields[0].value == "v" * 60 + "…"


class TestValueTracking:
    def test_key_tracking_keeps_duplicate_values(self, catalog):
        row = {"EventID": "4624", "TargetUserName": "alice", "Owner": "alice"}
        view = normalize(row, catalog, used_field_tracking="key")
        assert [(e.key, e.value) for e in view.extra_fields] == [("Owner", "alice")]

    def test_value_tracking_collapses_duplicate_values(self, catalog):
        row = {"EventID": "4624", "TargetUserName": "alice", "Owner": " alice ", "Other": "bob"}
        view = normalize(row, catalog, used_field_tracking="value")
        assert [(e.key, e.value) for e in view.extra_fields] == [("Other", "bob")]

    def test_value_tracking_still_hides_consumed_keys(self, failed_logon_row, catalog):
        view = normalize(failed_logon_row, catalog, used_field_tracking="value")
        assert view.extra_fields == []


class TestCustomCatalog:
    def test_catalog_is_explicit(self):
        custom = EventCatalog({"4625": CatalogEntry(label="Bad Password", category="Auth", severity="critical")})
        view = normalize({"EventID": "4625"}, custom)
        assert view.label == "Bad Password"
        assert view.severity == "critical"


class TestTruncate:
    def test_short_value_untouched(self):
        assert truncate("abc", 5) == "abc"

    def test_exact_length_untouched(self):
        assert truncate("abcde", 5) == "abcde"

    def test_long_value(self):
        assert truncate("abcdef", 5) == "abcde…"
