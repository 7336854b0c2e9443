"""
Sheets v4 resources as dataclasses.
The client speaks plain dicts: asdict() covers the way out, from_dict()
plus a fixup() that converts nested dicts covers the way in.
Only what this package reads or sends is modelled, and only the fields
of those it actually looks at.
"""
from dataclasses import dataclass, field, asdict
from typing import List

from ..resources import GoogleResourceBase

class GoogleSheetsEnum():
    """
    An 'enum' in the sheets client is just a string, so this translates
    short or lower case spellings to the API's and gives "" for anything
    the API wouldn't take.
    """
    _OPTIONS = {
        'valueRenderOption': {
            "FORMATTED": "FORMATTED_VALUE",
            "UNFORMATTED": "UNFORMATTED_VALUE",
            "FORMULA": "FORMULA",
        },
        'dateTimeRenderOption': {
            "SERIAL": "SERIAL_NUMBER",
            "FORMATTED": "FORMATTED_STRING",
        },
        'dimension': {
            "R": "ROWS",
            "ROWS": "ROWS",
            "C": "COLUMNS",
            "COLS": "COLUMNS",
        },
        'valueInputOption': {
            "RAW": "RAW",
            "USER": "USER_ENTERED",
        },
        'mergeType': {
            "ALL": "MERGE_ALL",
            "COLUMNS": "MERGE_COLUMNS",
            "ROWS": "MERGE_ROWS",
        },
    }

    @classmethod
    def _lookup(cls, kind: str, option: str) -> str:
        table = cls._OPTIONS[kind]
        key = str(option).upper()
        if key in table.values():
            return key
        return table.get(key, "")

    @classmethod
    def valueRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueRenderOption"""
        return cls._lookup('valueRenderOption', option)

    @classmethod
    def dateTimeRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/DateTimeRenderOption"""
        return cls._lookup('dateTimeRenderOption', option)

    @classmethod
    def dimension(cls, dim: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/Dimension"""
        return cls._lookup('dimension', dim)

    @classmethod
    def valueInputOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueInputOption"""
        return cls._lookup('valueInputOption', option)

    @classmethod
    def mergeType(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#mergetype"""
        return cls._lookup('mergeType', option)

@dataclass
class SpreadsheetProperties(GoogleResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#SpreadsheetProperties"""
    title: str = field(default="")
    locale: str = field(default="")

    def __bool__(self) -> bool:
        return bool(self.title)

@dataclass
class SheetProperties(GoogleResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheetproperties
    The title is what people use, the sheetId is what structural requests need.
    """
    sheetId: int = field(default=-1)
    title: str = field(default="")
    index: int = field(default=-1)
    hidden: bool = field(default=False)

    def __bool__(self) -> bool:
        """Valid once the server has filled in an ID, index and title."""
        return self.sheetId >= 0 and self.index >= 0 and bool(self.title)

    def __str__(self) -> str:
        if not self:
            return "<invalid sheet>"
        return f"{self.title}({self.sheetId}[{self.index}])"

@dataclass
class GridRange(GoogleResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#gridrange
    Indexes are zero-based, start inclusive and end exclusive.
    """
    sheetId: int = field(default=-1)
    startRowIndex: int|None = field(default=None)
    endRowIndex: int|None = field(default=None)
    startColumnIndex: int|None = field(default=None)
    endColumnIndex: int|None = field(default=None)

    def __bool__(self) -> bool:
        return self.sheetId >= 0

    def to_base(self) -> dict:
        # None means unbounded and has to be left out of the request
        return {k: v for k, v in asdict(self).items() if v is not None}

@dataclass
class ValueRange(GoogleResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values#resource:-valuerange"""
    range: str = field(default="")
    majorDimension: str = field(default="")
    values: list[list[bool|str|float|None]] = field(default_factory=list)

    def __post_init__(self):
        self.fixup()

    def fixup(self) -> None:
        if self.majorDimension:
            self.majorDimension = GoogleSheetsEnum.dimension(self.majorDimension)

    def __bool__(self) -> bool:
        return bool(self.range) and bool(self.majorDimension)

@dataclass
class UpdateValuesResponse(GoogleResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/UpdateValuesResponse"""
    spreadsheetId: str = field(default="")
    updatedRange: str = field(default="")
    updatedRows: int = field(default=0)
    updatedColumns: int = field(default=0)
    updatedCells: int = field(default=0)

    def __bool__(self) -> bool:
        return bool(self.updatedRange)

@dataclass
class Sheet(GoogleResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheet
    One tab of a spreadsheet: its properties and the merged ranges in it.
    """
    properties: SheetProperties|dict = field(default_factory=dict)
    merges: List[GridRange|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.properties, SheetProperties):
            self.properties = SheetProperties.from_dict(self.properties)
        self.merges = [m if isinstance(m, GridRange) else GridRange.from_dict(m) for m in self.merges]

    def to_base(self) -> dict:
        self.fixup()
        return {'properties': self.properties.to_base(),
                'merges': [m.to_base() for m in self.merges]}

    def __bool__(self) -> bool:
        return bool(self.properties)

    def __str__(self) -> str:
        return str(self.properties)

@dataclass
class Spreadsheet(GoogleResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#resource:-spreadsheet
    As returned by spreadsheets.get, so only as complete as the fields asked for.
    """
    spreadsheetId: str = field(default="")
    properties: SpreadsheetProperties|dict = field(default_factory=dict)
    sheets: List[Sheet|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.properties, SpreadsheetProperties):
            self.properties = SpreadsheetProperties.from_dict(self.properties)
        self.sheets = [s if isinstance(s, Sheet) else Sheet.from_dict(s) for s in self.sheets]

    def to_base(self) -> dict:
        self.fixup()
        return {'spreadsheetId': self.spreadsheetId,
                'properties': self.properties.to_base(),
                'sheets': [s.to_base() for s in self.sheets]}

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId) or bool(self.sheets)

    def __str__(self) -> str:
        if not self:
            return 'unconnected'
        return f"{self.properties.title or self.spreadsheetId}[{','.join(str(s) for s in self.sheets)}]"

    def find(self, title: str) -> Sheet|None:
        """The sheet (tab) with the given title, or None."""
        for s in self.sheets:
            if s.properties.title == title:
                return s
        return None
