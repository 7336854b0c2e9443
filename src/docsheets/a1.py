"""
A1 notation and column letter arithmetic.

A range in A1 notation reads  <title>!<start col><start row>:<end col><end row>
with 1-based rows and columns A-ZZZ.  Any part may be missing, which leaves
that side unbounded:

    Sheet1          the whole sheet
    Sheet1!A:B      every row of columns A and B
    'Лист 1'!1:6    every column of rows 1 to 6
    A45:46          rows 45 and 46 of column A

https://developers.google.com/sheets/api/guides/concepts#cell
"""
import re

from typing import NamedTuple

from . import MaxColumns

class A1Parts(NamedTuple):
    """The pieces of an A1 string.  "" and 0 mean not given."""
    sheet: str = ""
    start_col: str = ""
    start_row: int = 0
    end_col: str = ""
    end_row: int = 0

    def __bool__(self) -> bool:
        return any(self)


class A1Notation():
    """
    A validated A1 string and its parts.  Constructed from an invalid string
    it is simply false, assigning an invalid string to .a1 raises ValueError.

    Columns convert two ways:
        col_to_int/int_to_col:      1-based, as A1 counts them
        column_index/column_letter: 0-based, as python sequences count them
    """
    _RANGE_RE = re.compile(r"^\s*((?P<sheet>\w+|'(?:[^']|'')+')!)?"
                           r"((?P<start_col>[A-Z]{0,3})?(?P<start_row>\d+)?"
                           r"(:(?P<end_col>[A-Z]{0,3})?(?P<end_row>\d+)?)?)?\s*$")
    _COLUMN_RE = re.compile(r"^[A-Z]{1,3}$")
    _PLAIN_TITLE_RE = re.compile(r"^\w+$")

    def __init__(self, a1: str = ""):
        self._a1 = ""
        self._parts = A1Parts()
        if a1:
            self.set_a1(a1)

    def __str__(self) -> str:
        return self._a1 or "<invalid>"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    def __eq__(self, value: object) -> bool:
        return self._a1 == str(value)

    def __bool__(self) -> bool:
        return bool(self._a1)

    @classmethod
    def col_to_int(cls, column: str) -> int:
        """'A' -> 1, 'AA' -> 27.  0 for anything that isn't A-ZZZ."""
        c = str(column).upper()
        if not cls._COLUMN_RE.match(c):
            return 0
        num = 0
        for letter in c:
            num = num * 26 + ord(letter) - ord('A') + 1
        return num

    @classmethod
    def int_to_col(cls, index: int) -> str:
        """1 -> 'A', 27 -> 'AA'.  "" outside 1..MaxColumns."""
        i = int(index)
        if not 0 < i <= MaxColumns:
            return ""
        col = ""
        while i:
            i, r = divmod(i - 1, 26)
            col = chr(ord('A') + r) + col
        return col

    @classmethod
    def column_letter(cls, index: int) -> str:
        """
        Zero-based column index to its letter, 0 -> 'A', 26 -> 'AA'.
        Raises ValueError outside of A-ZZZ.
        """
        col = cls.int_to_col(int(index) + 1)
        if not col:
            raise ValueError(f"column index out of range: {index}")
        return col

    @classmethod
    def column_index(cls, column: str|int) -> int:
        """
        Column letter to its zero-based index, 'A' -> 0, 'AA' -> 26.
        An int is taken as already being an index and only range checked.
        Raises ValueError for anything that isn't A-ZZZ.
        """
        if isinstance(column, int):
            if not 0 <= column < MaxColumns:
                raise ValueError(f"column index out of range: {column}")
            return column
        i = cls.col_to_int(column)
        if not i:
            raise ValueError(f"invalid column: {column}")
        return i - 1

    @classmethod
    def _is_title(cls, s: str) -> bool:
        return bool(cls._PLAIN_TITLE_RE.match(s)) or (len(s) > 1 and s[0] == s[-1] == "'")

    @classmethod
    def quote_sheet(cls, sheet: str) -> str:
        """
        Quote a sheet title if it needs it, which is anything other than
        letters, digits and underscores.  Already quoted titles are left
        alone, embedded single quotes are doubled.
        """
        s = str(sheet)
        if not s or cls._is_title(s):
            return s
        return "'" + s.replace("'", "''") + "'"

    @classmethod
    def valid_a1(cls, a1: str) -> bool:
        return bool(cls(a1))

    @classmethod
    def generate_a1(cls, sheet: str = "",
                    start_col: str|int = "", start_row: int = 0,
                    end_col: str|int = "", end_row: int = 0) -> str:
        """
        Build an A1 string.  Columns are A-ZZZ or a 1-based int, rows are
        1-based, and ""/0 leaves that side unbounded.  The sheet title is
        quoted as needed.  Returns "" if any part is malformed.
        """
        sc = cls.int_to_col(start_col) if isinstance(start_col, int) and start_col else str(start_col or "")
        ec = cls.int_to_col(end_col) if isinstance(end_col, int) and end_col else str(end_col or "")
        sr = int(start_row)
        er = int(end_row)
        if (sc and not cls._COLUMN_RE.match(sc)) or (ec and not cls._COLUMN_RE.match(ec)):
            return ""
        if sr < 0 or er < 0:
            return ""

        start = f"{sc}{sr or ''}"
        end = f"{ec}{er or ''}"
        cells = f"{start}:{end}" if end else start
        s = cls.quote_sheet(sheet)
        if s and cells:
            return f"{s}!{cells}"
        return s or cells

    @classmethod
    def extract_a1(cls, a1: str) -> A1Parts:
        """
        Split an A1 string into its parts.  All of them empty means it
        didn't parse.
        """
        a = str(a1).strip()
        m = cls._RANGE_RE.match(a)
        if not m or not any(m.groupdict().values()):
            # a bare title on its own means the whole sheet
            return A1Parts(sheet=a) if cls._is_title(a) else A1Parts()
        return A1Parts(m.group('sheet') or "",
                       m.group('start_col') or "",
                       int(m.group('start_row') or 0),
                       m.group('end_col') or "",
                       int(m.group('end_row') or 0))

    @classmethod
    def valid_dimensions(cls, parts: A1Parts) -> bool:
        """
        Something has to be given, an end needs a start, and columns can't
        run backwards.  Rows can, A5:B2 is fine but B2:A5 isn't.
        """
        if not parts:
            return False
        if (parts.end_col or parts.end_row) and not (parts.start_col or parts.start_row):
            return False
        if parts.start_col and parts.end_col:
            return cls.col_to_int(parts.end_col) >= cls.col_to_int(parts.start_col)
        return True

    def set_a1(self, a1: str) -> bool:
        """Take on a new A1 string.  False, and no change, if it's invalid."""
        parts = self.extract_a1(a1)
        if not self.valid_dimensions(parts):
            return False
        self._a1 = str(a1).strip()
        self._parts = parts
        return True

    @property
    def a1(self) -> str:
        return self._a1

    @a1.setter
    def a1(self, value: str) -> None:
        if not self.set_a1(value):
            raise ValueError(f"invalid A1 notation: {value}")

    @property
    def parts(self) -> A1Parts:
        return self._parts

    @property
    def sheet(self) -> str:
        """Sheet title as written, quotes included"""
        return self._parts.sheet

    @property
    def start_col(self) -> str:
        return self._parts.start_col

    @property
    def end_col(self) -> str:
        return self._parts.end_col

    @property
    def start_col_int(self) -> int:
        """1-based, 0 when unbounded"""
        return self.col_to_int(self.start_col) if self.start_col else 0

    @property
    def end_col_int(self) -> int:
        """1-based, 0 when unbounded"""
        return self.col_to_int(self.end_col) if self.end_col else 0

    @property
    def start_row(self) -> int:
        return self._parts.start_row

    @property
    def end_row(self) -> int:
        return self._parts.end_row

    @property
    def bounded(self) -> bool:
        """True if rows and columns both have a start and an end"""
        return bool(self.start_col and self.end_col and self.start_row and self.end_row)
