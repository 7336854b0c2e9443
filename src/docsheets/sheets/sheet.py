from collections.abc import Iterable

from googleapiclient.discovery import Resource

from ..a1 import A1Notation
from ..headers import HeaderRow, pad_rows
from ..errors import SheetNotFoundError
from .resources import *
from .requests import *
from . import ops

class GoogleSheet():
    """
    Class representation of a sheet.  In Google Sheets parlance a 'sheet' is
    an individual tab within a parent 'spreadsheet'.  This is a proxy, nothing
    is fetched until a read or write is made, and every read or write is a
    request to the service.

    Reads take an offset (1-based first row) and a size (number of rows after
    that) and cover rows offset..offset + size.  Writes are sent column-major
    with the RAW input option so values are stored as given.
    """
    DEFAULT_OFFSET = 1
    DEFAULT_SIZE = 1000

    def __init__(self, service: Resource, spreadsheet_id: str, title: str) -> None:
        self._service = service
        self._spreadsheetid = spreadsheet_id
        self._title = title
        # always quoted, so titles like '19.Б07' work as is
        self._quoted = "'" + title.replace("'", "''") + "'"
        self._sheet_id = None

    def __str__(self) -> str:
        return f"{self._spreadsheetid}:{self._title}"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheetid

    @property
    def title(self) -> str:
        return self._title

    @staticmethod
    def _check_range(offset: int, size: int|None = None) -> None:
        if offset <= 0:
            raise ValueError(f"offset shall be greater than zero, got {offset}")
        if size is not None and size < offset:
            raise ValueError(f"size shall not be less than offset, got size {size} for offset {offset}")

    def _a1(self, start_col: str|int = "", start_row: int = 0,
            end_col: str|int = "", end_row: int = 0) -> str:
        a1 = A1Notation.generate_a1(self._quoted, start_col, start_row, end_col, end_row)
        if not A1Notation.valid_a1(a1) or "!" not in a1:
            raise ValueError(f"invalid range for {self._title}: {start_col}{start_row}:{end_col}{end_row}")
        return a1

    def _get_rows(self, a1: str) -> list[list[str]]:
        response = ops.getValues(self._service, self._spreadsheetid, a1)
        if not response.valueRanges:
            return []
        return [[str(v) for v in row] for row in response.valueRanges[0].values]

    def sheet_id(self) -> int:
        """
        Numeric ID of this tab, which batchUpdate requests need instead of the title.
        Queries the server the first time, raises SheetNotFoundError if no tab has this title.
        """
        if self._sheet_id is None:
            sheet = ops.get(self._service, self._spreadsheetid).find(self._title)
            if sheet is None:
                raise SheetNotFoundError(self._title)
            self._sheet_id = sheet.properties.sheetId
        return self._sheet_id

    def read_sheet(self, start_column: str, end_column: str,
                   offset: int = DEFAULT_OFFSET, size: int = DEFAULT_SIZE) -> list[list[str]]:
        """
        Read a rectangle of the sheet and return it as rows.
        The service leaves off trailing empty cells so rows are padded
        with "" to the length of the longest.
        """
        self._check_range(offset, size)
        a1 = self._a1(start_column, offset, end_column, offset + size)
        return pad_rows(self._get_rows(a1))

    def read_column(self, column: str, offset: int = DEFAULT_OFFSET,
                    size: int = DEFAULT_SIZE) -> list[str]:
        """Read a single column as a flat list."""
        return [v for row in self.read_sheet(column, column, offset, size) for v in row]

    def read_by_headers(self, names: Iterable[str], offset: int = DEFAULT_OFFSET,
                        size: int = DEFAULT_SIZE) -> list[dict[str,str]]:
        """
        Assumes the row at offset holds headings and reads only the named columns
        from the rows that follow.  Returns one dict per row of header -> value.
        """
        self._check_range(offset, size)
        names = list(names)
        rows = pad_rows(self._get_rows(self._a1("", offset, "", offset + size)))
        if not rows:
            return []
        headers = HeaderRow(rows[0])
        return [headers.project(row, names) for row in rows[1:]]

    def write_column(self, column: str, data: Iterable[str],
                     offset: int = DEFAULT_OFFSET) -> UpdateValuesRequestResponse:
        """
        Write values down a column starting at row offset.
        """
        return self.write_block(column, [data], offset)

    def write_block(self, start_column: str, columns: Iterable[Iterable[str]],
                    offset: int = DEFAULT_OFFSET) -> UpdateValuesRequestResponse:
        """
        Write a rectangle given as a list of columns, the first going into
        start_column at row offset and the rest to its right.
        Nothing is sent if there is nothing to write.
        """
        self._check_range(offset)
        values = [[str(v) for v in c] for c in columns]
        height = max((len(c) for c in values), default=0)
        if not height:
            return UpdateValuesRequestResponse(self._spreadsheetid)
        start = A1Notation.column_index(start_column)
        a1 = self._a1(A1Notation.column_letter(start), offset,
                      A1Notation.column_letter(start + len(values) - 1), offset + height - 1)
        vr = ValueRange(range=a1, majorDimension="COLUMNS", values=values)
        return ops.updateValues(self._service, self._spreadsheetid, vr, "RAW")

    def _grid_range(self, start_column: str|int, start_row: int,
                    end_column: str|int, end_row: int) -> GridRange:
        """
        A1 style corners (1-based inclusive rows, column letters) to a
        GridRange (0-based, end exclusive).
        """
        self._check_range(start_row, end_row)
        sc = A1Notation.column_index(start_column)
        ec = A1Notation.column_index(end_column)
        if ec < sc:
            raise ValueError(f"end column {end_column} is before start column {start_column}")
        return GridRange(self.sheet_id(), start_row - 1, end_row, sc, ec + 1)

    def merge(self, start_column: str|int, start_row: int,
              end_column: str|int, end_row: int,
              merge_type: str = "MERGE_ALL") -> GoogleSheetsUpdateRequestResponse:
        """
        Merge the cells of a range.
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#mergecellsrequest
        """
        if not GoogleSheetsEnum.mergeType(merge_type):
            raise ValueError(f"Invalid mergeType value: {merge_type}")
        request = MergeCellsRequest(self._grid_range(start_column, start_row, end_column, end_row),
                                    merge_type)
        return ops.batchUpdate(self._service, self._spreadsheetid,
                               GoogleSheetsUpdateRequest([request]))

    def unmerge(self, start_column: str|int, start_row: int,
                end_column: str|int, end_row: int) -> GoogleSheetsUpdateRequestResponse:
        """
        Unmerge every merged cell inside a range.
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#unmergecellsrequest
        """
        request = UnmergeCellsRequest(self._grid_range(start_column, start_row, end_column, end_row))
        return ops.batchUpdate(self._service, self._spreadsheetid,
                               GoogleSheetsUpdateRequest([request]))
