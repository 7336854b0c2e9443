import logging

from collections.abc import Iterable

from openpyxl.worksheet.worksheet import Worksheet

from ..a1 import A1Notation
from ..headers import HeaderRow, zip_columns

logger = logging.getLogger(__name__)

class XlsxSheet():
    """
    Class representation of a single sheet (tab) in a .xlsx spreadsheet.
    Everything is read and written as strings.  Columns can be given as a
    letter ('A'-'ZZZ') or a zero-based int index.  Rows are 1-based, same
    as the file format.
    """
    def __init__(self, worksheet: Worksheet) -> None:
        self._ws = worksheet

    def __str__(self) -> str:
        return f"{self.title}<{len(self)}R>"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    def __len__(self) -> int:
        """
        In this context length is the number of rows.
        openpyxl reports a max_row of 1 for a sheet with nothing in it
        so that case needs picking out.
        """
        rows = self._ws.max_row
        if rows == 1 and all(c.value is None for c in self._ws[1]):
            return 0
        return rows

    @property
    def title(self) -> str:
        return self._ws.title

    @property
    def worksheet(self) -> Worksheet:
        return self._ws

    def _cell_value(self, row: int, column: int) -> str:
        # Worksheet.cell() creates what it's asked for, so stay inside the used area
        if column >= self._ws.max_column or row > self._ws.max_row:
            return ""
        v = self._ws.cell(row=row, column=column + 1).value
        return "" if v is None else str(v)

    def _set_cell(self, row: int, column: int, value: str) -> None:
        cell = self._ws.cell(row=row, column=column + 1)
        cell.value = str(value)
        # store as a plain string even when it looks like a formula
        cell.data_type = "s"

    def column(self, column: str|int) -> list[str]:
        """
        Contents of a whole column, one string per row.  Missing cells read as "".
        """
        c = A1Notation.column_index(column)
        return [self._cell_value(r, c) for r in range(1, len(self) + 1)]

    def header_row(self) -> HeaderRow:
        """Mapping of the first row's values to their column positions."""
        if not len(self):
            return HeaderRow([])
        return HeaderRow(self._cell_value(1, c) for c in range(self._ws.max_column))

    def column_by_name(self, header: str) -> list[str]:
        """
        Contents of the column with the given header (first row value),
        without the header itself.  An unknown header gives an empty list.
        """
        return self._column_by_name(self.header_row(), header)

    def _column_by_name(self, headers: HeaderRow, header: str) -> list[str]:
        c = headers.get(header)
        if c is None:
            return []
        return [self._cell_value(r, c) for r in range(2, len(self) + 1)]

    def read_by_headers(self, names: Iterable[str]) -> list[dict[str,str]]:
        """
        Assumes the first row holds headings and reads only the named columns.
        Returns one dict per row mapping header name to cell value.  Columns
        shorter than the longest are padded with "".
        """
        names = list(names)
        headers = self.header_row()
        columns = [self._column_by_name(headers, n) for n in names]
        return zip_columns(names, columns)

    def write_column(self, column: str|int, offset: int, data: Iterable[str]) -> None:
        """
        Write values down a column starting from row offset (1-based).
        Existing cells are overwritten and the sheet grows as needed, rows
        before offset are left alone.
        """
        if offset <= 0:
            raise ValueError(f"offset shall be greater than zero, got {offset}")
        c = A1Notation.column_index(column)
        count = 0
        for row, value in enumerate(data, start=offset):
            self._set_cell(row, c, value)
            count += 1
        logger.debug("wrote %d cells to %s!%s%d", count, self.title, A1Notation.column_letter(c), offset)

    def write_row(self, data: Iterable[str]) -> int:
        """
        Append a new row after the last one.  An empty row still takes up
        a row, held by a single "" in the first column.
        Returns the 1-based index of the row written.
        """
        row = len(self) + 1
        values = list(data) or [""]
        for c, value in enumerate(values):
            self._set_cell(row, c, value)
        return row
