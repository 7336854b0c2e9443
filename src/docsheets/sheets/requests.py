from dataclasses import dataclass, field
from typing import List
import re

from ..resources import GoogleResourceBase
from .resources import *

class GoogleSheetsUpdateRequestBase(GoogleResourceBase):
    """
    Base class for sheet batchUpdate requests to get the actual
    request dict into the right format.
    """
    def to_request(self) -> dict[str,dict]:
        name = self.__class__.__name__
        # the request key is the class name without the trailing 'Request'
        # and with the first letter lower case
        m = re.match("^([a-zA-Z])([a-zA-Z]+)Request$", name)
        if not m:
            raise RuntimeError("Invalid Google Sheets request format for class name")
        key = m.group(1).lower() + m.group(2)
        return {key: self.to_base()}

@dataclass
class MergeCellsRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#mergecellsrequest
    """
    range: GridRange
    mergeType: str = field(default="MERGE_ALL")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        t = GoogleSheetsEnum.mergeType(self.mergeType)
        if not t:
            raise ValueError(f"Invalid mergeType value: {self.mergeType}")
        self.mergeType = t

    def to_base(self) -> dict:
        self.fixup()
        return {'range': self.range.to_base(), 'mergeType': self.mergeType}

@dataclass
class UnmergeCellsRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#unmergecellsrequest
    """
    range: GridRange

    def to_base(self) -> dict:
        return {'range': self.range.to_base()}

@dataclass
class GoogleSheetsUpdateRequest(GoogleResourceBase):
    """
    Generate a GSheet Batch Update request body.
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#request-body
    """
    requests: List[GoogleSheetsUpdateRequestBase|dict]
    includeSpreadsheetInResponse: bool = field(default=False)

    def to_base(self) -> dict:
        return {
            'requests': [r.to_request() if isinstance(r, GoogleSheetsUpdateRequestBase) else r
                         for r in self.requests],
            'includeSpreadsheetInResponse': self.includeSpreadsheetInResponse
        }

# Responses are only ever parsed, never sent back, so they stop at from_dict().

@dataclass
class GoogleSheetsUpdateRequestResponse(GoogleResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#response-body"""
    spreadsheetId: str = field(default="")
    replies: List[dict] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

@dataclass
class GetValuesRequestResponse(GoogleResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchGet#response-body
    One ValueRange per requested range, in request order.
    """
    spreadsheetId: str = field(default="")
    valueRanges: list[ValueRange|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.valueRanges = [vr if isinstance(vr, ValueRange) else ValueRange.from_dict(vr)
                            for vr in self.valueRanges]

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

@dataclass
class UpdateValuesRequestResponse(GoogleResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate#response-body"""
    spreadsheetId: str = field(default="")
    totalUpdatedRows: int = field(default=0)
    totalUpdatedColumns: int = field(default=0)
    totalUpdatedCells: int = field(default=0)
    responses: list[UpdateValuesResponse|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.responses = [r if isinstance(r, UpdateValuesResponse) else UpdateValuesResponse.from_dict(r)
                          for r in self.responses]

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)
