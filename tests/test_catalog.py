import json

import pytest

from catalog import CatalogProvider, load_records, normalize_for_search


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_snapshot_is_cached_until_ttl_expires(catalog_file, banner_record):
    clock = FakeClock()
    provider = CatalogProvider(str(catalog_file), ttl_seconds=3600, clock=clock)

    first = provider.snapshot()
    assert len(first.sections) == 5

    payload = json.loads(catalog_file.read_text(encoding="utf-8"))
    payload["data"].append(banner_record("40001", "QUIM1101", "Química", "1", ("friday",), "1000", "1100"))
    catalog_file.write_text(json.dumps(payload), encoding="utf-8")

    clock.now += 3599
    assert provider.snapshot() is first

    clock.now += 1
    assert provider.is_stale()
    assert len(provider.snapshot().sections) == 6


def test_refresh_forces_reload(catalog_file):
    provider = CatalogProvider(str(catalog_file), clock=FakeClock())
    first = provider.snapshot()
    assert provider.refresh() is not first


def test_snapshot_queries(catalog_file):
    snapshot = CatalogProvider(str(catalog_file)).snapshot()

    assert [s.section_label for s in snapshot.sections_for("admi1101")] == ["A", "B"]
    assert snapshot.sections_for("NOPE0000") == []
    assert set(snapshot.by_course()) == {"ADMI1101", "MATE1203", "FISI1518"}
    assert snapshot.subjects() == ["ADMI", "FISI", "MATE"]
    assert len(snapshot.filter(open_only=True)) == 4
    assert [s.reference_number for s in snapshot.filter(subject="MATE")] == ["20001", "20002"]
    assert snapshot.filter(term="209910") == []


def test_search_ignores_accents_and_case(catalog_file):
    snapshot = CatalogProvider(str(catalog_file)).snapshot()
    assert list(snapshot.search("calculo")) == ["MATE1203"]
    assert list(snapshot.search("fisi")) == ["FISI1518"]
    assert normalize_for_search(" Introducción ") == "INTRODUCCION"


def test_bare_list_catalog(tmp_path, banner_record):
    path = tmp_path / "courses.json"
    path.write_text(json.dumps([banner_record("1", "ADMI1101")]), encoding="utf-8")
    assert len(load_records(str(path))) == 1


def test_invalid_record_fails_the_load(tmp_path, banner_record):
    path = tmp_path / "courses.json"
    path.write_text(json.dumps([banner_record("1", "ADMI1101", begin="1200", end="1100")]), encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid time range"):
        CatalogProvider(str(path)).snapshot()


def test_missing_file_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        CatalogProvider(str(tmp_path / "missing.json")).snapshot()
