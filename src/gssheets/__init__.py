"""gssheets - move comma-delimited tables to and from Google Sheets.

Usage:
    from gssheets.google import GoogleOAuth
    from gssheets.operations import download, upload
    from gssheets.sheets import SheetsClient

    client = SheetsClient(GoogleOAuth("client-credential.json"))
    download(client, "1AbC...", "out.csv")
    result = upload(client, "people.csv")
    print(result.url)
"""

__version__ = "0.1.0"
