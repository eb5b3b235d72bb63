import pytest

from evlens.catalog import default_catalog
from evlens.models import ResultEntry
from evlens.store import IndexStore


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def failed_logon_row():
    return {
        "EventID": "4625",
        "TargetUserName": "alice",
        "Computer": "WIN-01",
    }


@pytest.fixture
def security_results():
    """Mixed high-value, low-value and identifier-less security rows."""
    rows = [
        {"EventID": "4624", "TargetUserName": "bob"},
        {"EventID": "5156", "Application": "svchost.exe"},
        {"EventID": "4625", "TargetUserName": "alice"},
        {"Message": "no identifier here"},
        {"EventID": "4658"},
    ]
    return [ResultEntry(index="SecurityEvents", row=row) for row in rows]


@pytest.fixture
def security_csv(tmp_path):
    path = tmp_path / "SecurityEvents.csv"
    path.write_text(
        "EventID,TimeCreated,Computer,TargetUserName,IpAddress,Channel\n"
        "4625,2024-03-01T10:00:00Z,WIN-01,alice,10.0.0.5,Security\n"
        "4624,2024-03-01T10:01:00Z,WIN-01,alice,10.0.0.5,Security\n"
        "5156,2024-03-01T10:02:00Z,WIN-01,,,Security\n"
        "1102,2024-03-01T10:03:00Z,WIN-02,admin,,Security\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def dns_csv(tmp_path):
    path = tmp_path / "DnsQueries.csv"
    path.write_text(
        "QueryName,ClientIP\n"
        "example.com,10.0.0.5\n"
        "evil.test,10.0.0.9\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def store(security_csv, dns_csv):
    s = IndexStore()
    s.load_csv(security_csv)
    s.load_csv(dns_csv)
    return s
