"""
Tests for ResultStoreClient against the in-process app
"""
import httpx
import pytest

from services.grade_calculator import FormValidationError
from services.result_client import ResultStoreClient
from services.result_store import ResultNotFoundError


@pytest.fixture
def api(client):
    return ResultStoreClient(http=client, prefix="/v1", caller="staff-1")


FORM = {
    "student_name": "Asha",
    "roll_number": "R001",
    "maths": "90",
    "science": "90",
    "english": "90",
    "tamil": "90",
    "computer_science": "90",
}


class TestResultStoreClient:

    def test_submit_then_list(self, api):
        assert api.submit(FORM, timestamp=123) == 0
        records = api.get_results()
        assert len(records) == 1
        assert records[0].id == 0
        assert records[0].grade == "A"
        assert records[0].total == 450
        assert records[0].timestamp == 123

    def test_submit_stamps_current_time(self, api):
        api.submit(FORM)
        assert api.get_results()[0].timestamp > 1_600_000_000_000

    def test_submit_invalid_form_sends_nothing(self, api):
        with pytest.raises(FormValidationError) as exc_info:
            api.submit(dict(FORM, maths="abc"))
        assert exc_info.value.errors == {"maths": "Enter a whole number"}
        assert api.get_results() == []

    def test_delete_unknown_raises_not_found(self, api):
        with pytest.raises(ResultNotFoundError):
            api.delete_result(5)

    def test_delete_and_clear(self, api):
        first = api.submit(FORM)
        second = api.submit(FORM)
        api.delete_result(first)
        assert [r.id for r in api.get_results()] == [second]

        api.clear_all()
        assert api.get_results() == []
        assert api.submit(FORM) == 0

    def test_calculate_remote(self, api):
        result = api.calculate(dict(FORM, maths="34"))
        assert result.grade == "Fail"
        assert result.average == pytest.approx(78.8)

    def test_calculate_remote_errors_are_snake_case(self, api):
        with pytest.raises(FormValidationError) as exc_info:
            api.calculate(dict(FORM, student_name="", computer_science="200"))
        assert exc_info.value.errors == {
            "student_name": "Student name is required",
            "computer_science": "Marks must be 0–100",
        }

    def test_other_errors_propagate(self, api):
        api.prefix = "/missing"
        with pytest.raises(httpx.HTTPStatusError):
            api.get_results()

    def test_calculate_maps_schema_errors_to_fields(self, api):
        with pytest.raises(FormValidationError) as exc_info:
            api.calculate(dict(FORM, student_name=5))
        assert list(exc_info.value.errors) == ["student_name"]

    def test_delete_on_wrong_route_is_not_a_missing_record(self, api):
        api.prefix = "/missing"
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            api.delete_result(0)
        assert exc_info.value.response.status_code == 404
