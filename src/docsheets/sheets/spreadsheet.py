from googleapiclient.discovery import Resource

from ..errors import SheetNotFoundError
from .resources import Spreadsheet
from .sheet import GoogleSheet
from . import ops

class GoogleSpreadSheet():
    """
    A single Google Sheets document.  Creating one doesn't query the server,
    sheets() and get() do.
    """
    def __init__(self, service: Resource, spreadsheet_id: str) -> None:
        self._service = service
        self._spreadsheetid = spreadsheet_id
        self._spreadsheet = Spreadsheet()

    def __str__(self) -> str:
        return str(self._spreadsheet) if self._spreadsheet else f"{self._spreadsheetid}(unconnected)"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    def __getitem__(self, title: str) -> GoogleSheet:
        return self.sheet(title)

    @property
    def id(self) -> str:
        return self._spreadsheetid

    @property
    def spreadsheet(self) -> Spreadsheet:
        """Last fetched spreadsheet resource, empty until get() or sheets() is called."""
        return self._spreadsheet

    def get(self) -> Spreadsheet:
        spreadsheet = ops.get(self._service, self._spreadsheetid)
        if spreadsheet:
            self._spreadsheet = spreadsheet
        return spreadsheet

    def sheets(self) -> list[str]:
        """
        Titles of the sheets (tabs) in this document, in tab order.
        Queries the server.
        """
        spreadsheet = self.get()
        ordered = sorted(spreadsheet.sheets, key=lambda s: s.properties.index)
        return [s.properties.title for s in ordered]

    def sheet(self, title: str) -> GoogleSheet:
        """Proxy for a sheet by title.  Doesn't query the server."""
        return GoogleSheet(self._service, self._spreadsheetid, title)

    def sheet_id(self, title: str) -> int:
        """
        Resolve a sheet title to its numeric ID.
        Queries the server, raises SheetNotFoundError for an unknown title.
        """
        sheet = self.get().find(title)
        if sheet is None:
            raise SheetNotFoundError(title)
        return sheet.properties.sheetId
