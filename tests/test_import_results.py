"""
Tests for the CSV import script
"""
import pytest

from services.result_client import ResultStoreClient
from scripts.import_results import import_results

CSV = """roll_number,student_name,maths,science,english,tamil,computer_science
R001,Asha,90,90,90,90,90
R002,,40,40,40,40,40
R003,Ravi,34,90,90,90,90
R004,Meena,abc,50,50,50,50
"""


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "results.csv"
    path.write_text(CSV, encoding="utf-8")
    return str(path)


def test_import_results(csv_path, store):
    imported, rejected = import_results(store.create, csv_path)

    assert imported == [0, 1]
    assert rejected == [
        (3, {"student_name": "Student name is required"}),
        (5, {"maths": "Enter a whole number"}),
    ]
    records = store.list()
    assert [(r.roll_number, r.grade) for r in records] == [("R001", "A"), ("R003", "Fail")]


def test_import_results_through_api(csv_path, client, store):
    """CLI path: rows go to the server's own store over the API"""
    api = ResultStoreClient(http=client, prefix="/v1", caller="import_results")

    imported, rejected = import_results(api.add_result, csv_path)

    assert imported == [0, 1]
    assert len(rejected) == 2
    assert [r.roll_number for r in store.list()] == ["R001", "R003"]
