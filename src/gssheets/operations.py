"""High-level operations: authorize, download, upload.

Each operation takes already-parsed parameters and either returns a
result or raises. Nothing is retried, and a local output file is only
created once the whole table has been converted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from gssheets.config import DEFAULT_CLIENT_CREDENTIALS
from gssheets.google import AuthorizationFlow, Credential, CredentialCache, GoogleOAuth
from gssheets.google.flow import CodePrompt, console_prompt
from gssheets.sheets.a1 import compute_range, range_for_table
from gssheets.sheets.client import SheetsClient
from gssheets.sheets.exceptions import EmptyResultError
from gssheets.sheets.table import TableCodec, read_lines, write_lines

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Data"


@dataclass
class DownloadResult:
    """Outcome of a download."""

    path: Path
    sheet_title: str
    range: str
    row_count: int
    properties: str | None = None


@dataclass
class UploadResult:
    """Outcome of an upload."""

    spreadsheet_id: str
    url: str | None
    range: str
    row_count: int
    updated_cells: int


def authorize(
    credentials_path: str | Path = DEFAULT_CLIENT_CREDENTIALS,
    cache: CredentialCache | None = None,
    prompt: CodePrompt = console_prompt,
) -> Credential:
    """Run the interactive authorization flow and cache the token.

    Args:
        credentials_path: OAuth client credentials file.
        cache: Token cache. Defaults to the file under ~/.credentials.
        prompt: Reads the authorization code from the operator.

    Returns:
        The cached Credential.
    """
    oauth = GoogleOAuth(credentials_path, cache=cache)
    return AuthorizationFlow(oauth, prompt=prompt).run()


def download(
    client: SheetsClient,
    spreadsheet_id: str,
    output_path: str | Path,
    codec: TableCodec | None = None,
    show_properties: bool = False,
    value_render_option: str = "FORMATTED_VALUE",
) -> DownloadResult:
    """Download the first sheet of a spreadsheet to a local table file.

    Args:
        client: Sheets gateway.
        spreadsheet_id: ID of the spreadsheet to read.
        output_path: File to create; must not exist yet.
        codec: Converts rows to text. Defaults to TableCodec().
        show_properties: Include the sheet properties as JSON in the result.
        value_render_option: How the API renders cell values.

    Returns:
        DownloadResult describing the written file.

    Raises:
        FileExistsError: If output_path already exists.
        EmptyResultError: If the spreadsheet has no sheets or no data rows.
        RemoteFailureError: If the Sheets API call fails.
    """
    output = Path(output_path)
    if output.exists():
        raise FileExistsError(f"{output} already exists")

    codec = codec or TableCodec()

    spreadsheet = client.get_spreadsheet(spreadsheet_id)
    sheet = spreadsheet.default_sheet
    if sheet is None:
        raise EmptyResultError(f"spreadsheet {spreadsheet_id} is empty")

    properties = json.dumps(sheet.properties, indent=2) if show_properties else None

    rng = compute_range(sheet.title, sheet.column_count)
    logger.info(f"Downloading {rng} from {spreadsheet_id}")
    rows = client.read_range(spreadsheet_id, rng, value_render_option=value_render_option)

    lines = codec.decode(rows)
    write_lines(output, lines)
    logger.info(f"Wrote {len(lines)} rows to {output}")

    return DownloadResult(
        path=output,
        sheet_title=sheet.title,
        range=rng,
        row_count=len(lines),
        properties=properties,
    )


def upload(
    client: SheetsClient,
    input_path: str | Path,
    title: str | None = None,
    sheet_name: str = DEFAULT_SHEET_NAME,
    frozen: bool = True,
    codec: TableCodec | None = None,
) -> UploadResult:
    """Upload a local table file as a new spreadsheet.

    Args:
        client: Sheets gateway.
        input_path: Table file to read.
        title: Spreadsheet title. Defaults to the input file name without suffix.
        sheet_name: Title of the single sheet that receives the data.
        frozen: Freeze the first row and first column.
        codec: Splits lines into cells. Defaults to TableCodec().

    Returns:
        UploadResult with the new spreadsheet's URL.

    Raises:
        EmptyLineError: If the file has a blank line.
        ColumnCountMismatchError: If the file is not rectangular.
        InvalidDimensionError: If the file has no rows.
        RemoteFailureError: If a Sheets API call fails.
    """
    path = Path(input_path)
    codec = codec or TableCodec()

    table = codec.encode(read_lines(path))
    rng = range_for_table(sheet_name, table)

    spreadsheet = client.create_spreadsheet(title or path.stem, [sheet_name])
    updated = client.write_range(spreadsheet.id, rng, table, value_input_option="RAW")

    if frozen and spreadsheet.default_sheet is not None:
        client.freeze(spreadsheet.id, spreadsheet.default_sheet.id)

    logger.info(f"Uploaded {len(table)} rows to {spreadsheet.id}")
    return UploadResult(
        spreadsheet_id=spreadsheet.id,
        url=spreadsheet.url,
        range=rng,
        row_count=len(table),
        updated_cells=updated,
    )
