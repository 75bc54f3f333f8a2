"""Tests for the Sheets API client."""

from unittest.mock import MagicMock, Mock

import pytest
from googleapiclient.errors import HttpError

from gssheets.sheets import RemoteFailureError, SheetsClient

SPREADSHEET = {
    "spreadsheetId": "sheet-123",
    "spreadsheetUrl": "https://docs.google.com/spreadsheets/d/sheet-123/edit",
    "properties": {"title": "people"},
    "sheets": [
        {
            "properties": {
                "sheetId": 7,
                "title": "Data",
                "index": 0,
                "gridProperties": {"rowCount": 100, "columnCount": 3},
            }
        }
    ],
}


def http_error(status: int = 404) -> HttpError:
    resp = Mock(status=status, reason="Not Found")
    return HttpError(resp, b'{"error": {"message": "Requested entity was not found."}}')


@pytest.fixture
def service():
    return MagicMock()


@pytest.fixture
def client(service):
    return SheetsClient(service=service)


class TestSheetsClient:
    def test_requires_auth_or_service(self):
        with pytest.raises(ValueError):
            SheetsClient()

    def test_builds_service_from_auth(self):
        auth = Mock()
        client = SheetsClient(auth=auth)
        auth.build_service.return_value.spreadsheets.return_value.get.return_value.execute.return_value = (
            SPREADSHEET
        )
        client.get_spreadsheet("sheet-123")
        auth.build_service.assert_called_once_with("sheets", "v4")

    def test_get_spreadsheet(self, client, service):
        service.spreadsheets().get.return_value.execute.return_value = SPREADSHEET

        spreadsheet = client.get_spreadsheet("sheet-123")

        service.spreadsheets().get.assert_called_with(spreadsheetId="sheet-123")
        assert spreadsheet.id == "sheet-123"
        assert spreadsheet.title == "people"
        sheet = spreadsheet.default_sheet
        assert sheet.title == "Data"
        assert sheet.id == 7
        assert sheet.column_count == 3
        assert sheet.properties["gridProperties"]["rowCount"] == 100

    def test_get_spreadsheet_without_sheets(self, client, service):
        service.spreadsheets().get.return_value.execute.return_value = {"spreadsheetId": "x"}
        assert client.get_spreadsheet("x").default_sheet is None

    def test_http_error_becomes_remote_failure(self, client, service):
        service.spreadsheets().get.return_value.execute.side_effect = http_error(404)

        with pytest.raises(RemoteFailureError) as exc:
            client.get_spreadsheet("missing")
        assert exc.value.status_code == 404

    def test_read_range(self, client, service):
        values = service.spreadsheets().values()
        values.get.return_value.execute.return_value = {"values": [["a", "b"], ["c", "d"]]}

        rows = client.read_range("sheet-123", "Data!A:B")

        assert rows == [["a", "b"], ["c", "d"]]
        kwargs = values.get.call_args.kwargs
        assert kwargs["range"] == "Data!A:B"
        assert kwargs["valueRenderOption"] == "FORMATTED_VALUE"

    def test_read_empty_range(self, client, service):
        service.spreadsheets().values().get.return_value.execute.return_value = {}
        assert client.read_range("sheet-123", "Data!A:B") == []

    def test_create_spreadsheet(self, client, service):
        service.spreadsheets().create.return_value.execute.return_value = SPREADSHEET

        spreadsheet = client.create_spreadsheet("people", ["Data"])

        body = service.spreadsheets().create.call_args.kwargs["body"]
        assert body == {"properties": {"title": "people"}, "sheets": [{"properties": {"title": "Data"}}]}
        assert spreadsheet.url.endswith("/edit")

    def test_write_range(self, client, service):
        values = service.spreadsheets().values()
        values.update.return_value.execute.return_value = {"updatedCells": 4}

        updated = client.write_range("sheet-123", "Data!A:B", [["a", "b"], ["c", "d"]])

        assert updated == 4
        kwargs = values.update.call_args.kwargs
        assert kwargs["valueInputOption"] == "RAW"
        assert kwargs["body"]["values"] == [["a", "b"], ["c", "d"]]

    def test_write_range_error(self, client, service):
        service.spreadsheets().values().update.return_value.execute.side_effect = http_error(403)
        with pytest.raises(RemoteFailureError):
            client.write_range("sheet-123", "Data!A:B", [["a"]])

    def test_freeze(self, client, service):
        client.freeze("sheet-123", 7)

        body = service.spreadsheets().batchUpdate.call_args.kwargs["body"]
        props = body["requests"][0]["updateSheetProperties"]["properties"]
        assert props["sheetId"] == 7
        assert props["gridProperties"] == {"frozenRowCount": 1, "frozenColumnCount": 1}
