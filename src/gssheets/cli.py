"""CLI for gssheets - move CSV tables to and from Google Sheets.

Usage:
    gssheets auth [--credential FILE]              # Interactive OAuth authorization
    gssheets download --sheet ID [--out FILE]      # Download first sheet to a CSV file
    gssheets upload --in FILE [--title TITLE]      # Upload a CSV file as a new spreadsheet
    gssheets status [--credential FILE]            # Show credential and token status
    gssheets revoke [--credential FILE]            # Revoke token and clear the cache
"""

from __future__ import annotations

import argparse
import logging
import sys
import webbrowser

from gssheets import __version__
from gssheets.config import DEFAULT_CLIENT_CREDENTIALS


def _reportable_errors() -> tuple[type[Exception], ...]:
    """Errors printed as a one-line message instead of a traceback."""
    from gssheets.google import GoogleAuthError
    from gssheets.sheets import SheetsError

    return (GoogleAuthError, SheetsError, OSError, ValueError)


def _build_client(credential: str):
    from gssheets.google import GoogleOAuth
    from gssheets.sheets import SheetsClient

    return SheetsClient(GoogleOAuth(credential))


def cmd_auth(credential: str, no_browser: bool = False) -> int:
    """Interactive Google OAuth authorization."""
    from gssheets.google import console_prompt
    from gssheets.operations import authorize

    print("=" * 60)
    print("GSSHEETS AUTHORIZATION")
    print("=" * 60)
    print()

    def prompt(url: str) -> str:
        if not no_browser:
            webbrowser.open(url)
        return console_prompt(url)

    try:
        authorize(credential, prompt=prompt)
    except _reportable_errors() as e:
        print(f"\nError: {e}")
        return 1

    print("\n~/.credentials/ has been created")
    return 0


def cmd_download(
    credential: str,
    sheet_id: str,
    output: str,
    show_property: bool = True,
    plain: bool = False,
) -> int:
    """Download the first sheet of a spreadsheet."""
    from gssheets.operations import download
    from gssheets.sheets import TableCodec, plain_formatter

    if plain:
        codec = TableCodec(formatter=plain_formatter)
        render = "UNFORMATTED_VALUE"
    else:
        codec = TableCodec()
        render = "FORMATTED_VALUE"

    print(f"downloading sheet {sheet_id}...")
    try:
        result = download(
            _build_client(credential),
            sheet_id,
            output,
            codec=codec,
            show_properties=show_property,
            value_render_option=render,
        )
    except _reportable_errors() as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.properties:
        print(result.properties)
    print(f"wrote {result.row_count} rows from '{result.sheet_title}' to {result.path}")
    return 0


def cmd_upload(
    credential: str,
    input_path: str,
    title: str | None = None,
    sheet_name: str = "Data",
    frozen: bool = True,
) -> int:
    """Upload a CSV file as a new spreadsheet."""
    from gssheets.operations import upload

    print(f"uploading {input_path}...")
    try:
        result = upload(
            _build_client(credential),
            input_path,
            title=title,
            sheet_name=sheet_name,
            frozen=frozen,
        )
    except _reportable_errors() as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"read {result.row_count} rows")
    print(f"saved URL: {result.url} cells: {result.updated_cells}")
    return 0


def cmd_status(credential: str) -> int:
    """Show credential and token status."""
    from gssheets.config import get_credential_status
    from gssheets.google import GoogleAuthError, GoogleOAuth

    status = get_credential_status(credential)

    print("=" * 60)
    print("GSSHEETS CREDENTIAL STATUS")
    print("=" * 60)
    print()
    client = status["client_credentials"]
    token = status["token"]
    print(f"  client credentials: {'[x]' if client['exists'] else '[ ]'} {client['path']}")
    print(f"  token cache:        {'[x]' if token['exists'] else '[ ]'} {token['path']}")
    print()

    if not client["exists"]:
        return 1

    try:
        info = GoogleOAuth(credential).get_token_info()
    except GoogleAuthError as e:
        print(f"Error: {e}")
        return 1

    if info["status"] == "no_token":
        print("No token found - run 'gssheets auth'")
        return 1

    print(f"Status     : {info['status']}")
    print(f"Scopes     : {', '.join(info.get('scopes', []))}")
    print(f"Expires in : {info.get('expires_in', 'unknown')}")
    print(f"Refreshable: {'yes' if info.get('has_refresh_token') else 'no'}")
    return 0


def cmd_revoke(credential: str) -> int:
    """Revoke the cached token."""
    from gssheets.google import GoogleAuthError, GoogleOAuth

    try:
        GoogleOAuth(credential).revoke_token()
    except GoogleAuthError as e:
        print(f"Error: {e}")
        return 1

    print("Token revoked and local cache cleared")
    return 0


def _add_credential_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--credential",
        type=str,
        default=DEFAULT_CLIENT_CREDENTIALS,
        help=f"Google OAuth client credential (default: {DEFAULT_CLIENT_CREDENTIALS})",
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="gssheets",
        description="Download and upload CSV tables with Google Sheets",
    )
    parser.add_argument("--version", action="version", version=f"gssheets {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # auth
    auth_parser = subparsers.add_parser("auth", help="Authorize Google Account")
    _add_credential_arg(auth_parser)
    auth_parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open browser automatically",
    )

    # download
    download_parser = subparsers.add_parser("download", help="Download from Google Sheets")
    _add_credential_arg(download_parser)
    download_parser.add_argument("--sheet", required=True, help="Google Sheets spreadsheet ID")
    download_parser.add_argument("--out", default="out.csv", help="Output filename (default: out.csv)")
    download_parser.add_argument(
        "--property",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show sheet properties",
    )
    download_parser.add_argument(
        "--plain",
        action="store_true",
        help="Write numbers and booleans instead of leaving them blank",
    )

    # upload
    upload_parser = subparsers.add_parser("upload", help="Upload a CSV file to Google Sheets")
    _add_credential_arg(upload_parser)
    upload_parser.add_argument("--in", dest="input", required=True, help="Input file")
    upload_parser.add_argument("--title", help="Spreadsheet title (default: input file name)")
    upload_parser.add_argument("--sheet-name", default="Data", help="Sheet name (default: Data)")
    upload_parser.add_argument(
        "--frozen",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Freeze first column and first row",
    )

    # status
    status_parser = subparsers.add_parser("status", help="Show credential status")
    _add_credential_arg(status_parser)

    # revoke
    revoke_parser = subparsers.add_parser("revoke", help="Revoke token")
    _add_credential_arg(revoke_parser)

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "auth":
        return cmd_auth(args.credential, args.no_browser)

    if args.command == "download":
        return cmd_download(args.credential, args.sheet, args.out, args.property, args.plain)

    if args.command == "upload":
        return cmd_upload(args.credential, args.input, args.title, args.sheet_name, args.frozen)

    if args.command == "status":
        return cmd_status(args.credential)

    if args.command == "revoke":
        return cmd_revoke(args.credential)

    return 0


if __name__ == "__main__":
    sys.exit(main())
