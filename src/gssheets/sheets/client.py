"""Google Sheets API client implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from googleapiclient.errors import HttpError

from gssheets.google import GoogleOAuth
from gssheets.sheets.exceptions import RemoteFailureError

logger = logging.getLogger(__name__)


@dataclass
class Sheet:
    """Represents a sheet within a spreadsheet."""

    id: int
    title: str
    index: int
    row_count: int = 1000
    column_count: int = 26
    properties: dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class Spreadsheet:
    """Represents a Google Spreadsheet."""

    id: str
    title: str
    sheets: list[Sheet] | None = None
    url: str | None = None

    @property
    def default_sheet(self) -> Sheet | None:
        """Get the first sheet."""
        if self.sheets:
            return self.sheets[0]
        return None


class SheetsClient:
    """Google Sheets API client with OAuth authentication.

    Usage:
        client = SheetsClient(GoogleOAuth("client-credential.json"))

        # Create a spreadsheet
        sheet = client.create_spreadsheet("My Spreadsheet", ["Data"])

        # Write values
        client.write_range(sheet.id, "Data!A:B", [["Name", "Age"], ["Alice", "30"]])

        # Read values
        values = client.read_range(sheet.id, "Data!A:B")

    Note:
        Requires OAuth authorization. Run `gssheets auth` to authorize.
        Every API error is raised as RemoteFailureError.
    """

    def __init__(self, auth: GoogleOAuth | None = None, service: Any = None) -> None:
        """Initialize Sheets client.

        Args:
            auth: OAuth session used to build the service on first use.
            service: Prebuilt Sheets API service; takes precedence over auth.
        """
        if auth is None and service is None:
            raise ValueError("Either auth or service is required")
        self._auth = auth
        self._service = service

    def _get_service(self) -> Any:
        """Get or create Sheets API service."""
        if self._service is None:
            self._service = self._auth.build_service("sheets", "v4")
        return self._service

    def _execute(self, request: Any, action: str) -> dict[str, Any]:
        try:
            return request.execute()
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            raise RemoteFailureError(f"Failed to {action}: {e}", status_code=status) from e

    # =========================================================================
    # Spreadsheets
    # =========================================================================

    def get_spreadsheet(self, spreadsheet_id: str) -> Spreadsheet:
        """Get a spreadsheet by ID.

        Args:
            spreadsheet_id: Google Sheets spreadsheet ID.

        Returns:
            Spreadsheet with its sheets' properties.
        """
        service = self._get_service()
        result = self._execute(
            service.spreadsheets().get(spreadsheetId=spreadsheet_id),
            f"get spreadsheet {spreadsheet_id}",
        )
        return self._parse_spreadsheet(result)

    def create_spreadsheet(self, title: str, sheet_titles: list[str] | None = None) -> Spreadsheet:
        """Create a new spreadsheet.

        Args:
            title: Spreadsheet title.
            sheet_titles: List of sheet names (optional).

        Returns:
            Created Spreadsheet.
        """
        service = self._get_service()

        body: dict[str, Any] = {"properties": {"title": title}}

        if sheet_titles:
            body["sheets"] = [{"properties": {"title": name}} for name in sheet_titles]

        result = self._execute(service.spreadsheets().create(body=body), "create spreadsheet")
        spreadsheet = self._parse_spreadsheet(result)
        logger.info(f"Created spreadsheet {spreadsheet.id}")
        return spreadsheet

    # =========================================================================
    # Values
    # =========================================================================

    def read_range(
        self,
        spreadsheet_id: str,
        range_notation: str,
        value_render_option: str = "FORMATTED_VALUE",
    ) -> list[list[Any]]:
        """Read values from a range.

        Args:
            spreadsheet_id: Spreadsheet ID.
            range_notation: A1 notation (e.g., "Data!A:C").
            value_render_option: How to render values ("FORMATTED_VALUE", "UNFORMATTED_VALUE", "FORMULA").

        Returns:
            2D list of cell values.
        """
        service = self._get_service()
        result = self._execute(
            service.spreadsheets()
            .values()
            .get(
                spreadsheetId=spreadsheet_id,
                range=range_notation,
                majorDimension="ROWS",
                valueRenderOption=value_render_option,
            ),
            f"read {range_notation}",
        )
        return result.get("values", [])

    def write_range(
        self,
        spreadsheet_id: str,
        range_notation: str,
        values: list[list[Any]],
        value_input_option: str = "RAW",
    ) -> int:
        """Write values to a range.

        Args:
            spreadsheet_id: Spreadsheet ID.
            range_notation: A1 notation (e.g., "Data!A:C").
            values: 2D list of values to write.
            value_input_option: How to interpret input ("RAW" or "USER_ENTERED").

        Returns:
            Number of cells updated.
        """
        service = self._get_service()
        result = self._execute(
            service.spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=range_notation,
                valueInputOption=value_input_option,
                body={"majorDimension": "ROWS", "values": values},
            ),
            f"write {range_notation}",
        )
        return result.get("updatedCells", 0)

    # =========================================================================
    # Sheet Management
    # =========================================================================

    def freeze(self, spreadsheet_id: str, sheet_id: int, rows: int = 1, columns: int = 1) -> None:
        """Freeze leading rows and columns of a sheet.

        Args:
            spreadsheet_id: Spreadsheet ID.
            sheet_id: Sheet ID (not title).
            rows: Number of rows to freeze.
            columns: Number of columns to freeze.
        """
        service = self._get_service()
        request = {
            "updateSheetProperties": {
                "properties": {
                    "sheetId": sheet_id,
                    "gridProperties": {"frozenRowCount": rows, "frozenColumnCount": columns},
                },
                "fields": "gridProperties.frozenRowCount,gridProperties.frozenColumnCount",
            }
        }
        self._execute(
            service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id, body={"requests": [request]}
            ),
            "freeze header",
        )

    def _parse_spreadsheet(self, data: dict) -> Spreadsheet:
        """Parse spreadsheet from API response."""
        sheets = []
        for sheet_data in data.get("sheets", []):
            props = sheet_data.get("properties", {})
            grid_props = props.get("gridProperties", {})
            sheets.append(
                Sheet(
                    id=props.get("sheetId", 0),
                    title=props.get("title", ""),
                    index=props.get("index", 0),
                    row_count=grid_props.get("rowCount", 1000),
                    column_count=grid_props.get("columnCount", 26),
                    properties=props,
                )
            )

        return Spreadsheet(
            id=data["spreadsheetId"],
            title=data.get("properties", {}).get("title", ""),
            sheets=sheets,
            url=data.get("spreadsheetUrl"),
        )
