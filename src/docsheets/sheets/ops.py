import logging

from collections.abc import Iterable

from googleapiclient.discovery import Resource

from .resources import *
from .requests import *

logger = logging.getLogger(__name__)

# Thin wrappers around the sheets v4 calls.  The built service is passed in
# explicitly so a test can hand over a stand-in without any authentication.

def get(service: Resource, spreadsheetId: str,
        fields: str = "spreadsheetId,properties.title,sheets.properties") -> Spreadsheet:
    """
    Wrapper for calling the get() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/get
    By default only asks for the sheet properties, which is what tab listing
    and tab name -> sheet ID resolution need.
    """
    ret = Spreadsheet()
    if spreadsheetId:
        logger.debug("get spreadsheet %s", spreadsheetId)
        response = service.spreadsheets().get(spreadsheetId=spreadsheetId,
                                              fields=fields).execute()
        if response:
            ret = Spreadsheet.from_dict(response)
    return ret

def batchUpdate(service: Resource, spreadsheetId: str,
                request: GoogleSheetsUpdateRequest|dict) -> GoogleSheetsUpdateRequestResponse:
    """
    Wrapper for calling the batchUpdate() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate
    This is for altering spreadsheet structure, like merges, not the actual
    data read/write which is done from the values() resource.
    """
    body = request.to_base() if isinstance(request, GoogleSheetsUpdateRequest) else request
    logger.debug("batchUpdate %s: %d requests", spreadsheetId, len(body.get('requests', [])))
    response = service.spreadsheets().batchUpdate(spreadsheetId=spreadsheetId, body=body).execute()
    if response:
        return GoogleSheetsUpdateRequestResponse.from_dict(response)
    return GoogleSheetsUpdateRequestResponse()

def getValues(service: Resource, spreadsheetId: str,
              ranges: str|list[str],
              dimension: str = "ROWS",
              valueRenderOption: str = "FORMATTED",
              dateTimeRenderOption: str = "SERIAL") -> GetValuesRequestResponse:
    """
    Wrapper for calling the batchGet() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchGet
    We always call batchGet, even for a single range instead of calling get() just
    for consistency.  Calling batchGet() with only 1 range is fine.
    """
    range_list = [ranges] if isinstance(ranges, str) else [str(r) for r in ranges]
    dim = GoogleSheetsEnum.dimension(dimension)
    if not dim:
        raise ValueError(f"Invalid majorDimension value: {dimension}")
    value_render = GoogleSheetsEnum.valueRenderOption(valueRenderOption)
    if not value_render:
        raise ValueError(f"Invalid valueRenderOption value: {valueRenderOption}")
    date_time_render = GoogleSheetsEnum.dateTimeRenderOption(dateTimeRenderOption)
    if not date_time_render and value_render != "FORMATTED_VALUE":
        raise ValueError(f"Invalid dateTimeRenderOption value: {dateTimeRenderOption}")

    response = GetValuesRequestResponse(spreadsheetId)
    if range_list:
        logger.debug("batchGet %s: %s", spreadsheetId, range_list)
        r = service.spreadsheets().values().batchGet(spreadsheetId=spreadsheetId,
                                                     ranges=range_list,
                                                     majorDimension=dim,
                                                     valueRenderOption=value_render,
                                                     dateTimeRenderOption=date_time_render).execute()
        if r:
            response = GetValuesRequestResponse.from_dict(r)
        else:
            response.spreadsheetId = ""
    return response

def updateValues(service: Resource, spreadsheetId: str,
                 data: ValueRange|Iterable[ValueRange],
                 valueInputOption: str = "RAW",
                 includeValuesInResponse: bool = False) -> UpdateValuesRequestResponse:
    """
    Wrapper for calling the batchUpdate() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate
    Write the cell data to the specified ranges.  RAW by default so nothing
    written gets parsed as a formula or a date.
    """
    dlist = [data.to_base()] if isinstance(data, ValueRange) else [d.to_base() for d in data]
    value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
    if not value_input:
        raise ValueError(f"Invalid valueInputOption value: {valueInputOption}")
    response = UpdateValuesRequestResponse(spreadsheetId)
    if dlist:
        body = {
            "valueInputOption": value_input,
            "data": dlist,
            "includeValuesInResponse": includeValuesInResponse
        }
        logger.debug("values.batchUpdate %s: %s", spreadsheetId, [d['range'] for d in dlist])
        r = service.spreadsheets().values().batchUpdate(spreadsheetId=spreadsheetId, body=body).execute()
        if r:
            response = UpdateValuesRequestResponse.from_dict(r)
        else:
            response.spreadsheetId = ""
    return response
