from unittest.mock import MagicMock

import pytest

from docsheets.errors import SheetNotFoundError
from docsheets.sheets import GoogleSheet, GoogleSpreadSheet, GoogleSheetService

SPREADSHEET_ID = "sid"

SPREADSHEET = {
    'spreadsheetId': SPREADSHEET_ID,
    'properties': {'title': "Grades"},
    'sheets': [
        {'properties': {'sheetId': 11, 'title': "19.Б07", 'index': 1}},
        {'properties': {'sheetId': 7, 'title': "Sheet1", 'index': 0}},
    ],
}

@pytest.fixture
def service():
    service = MagicMock()
    spreadsheets = service.spreadsheets.return_value
    spreadsheets.get.return_value.execute.return_value = SPREADSHEET
    spreadsheets.batchUpdate.return_value.execute.return_value = {'spreadsheetId': SPREADSHEET_ID, 'replies': [{}]}
    spreadsheets.values.return_value.batchUpdate.return_value.execute.return_value = {'spreadsheetId': SPREADSHEET_ID}
    return service

def set_values(service, rows):
    batchGet = service.spreadsheets.return_value.values.return_value.batchGet
    batchGet.return_value.execute.return_value = {
        'spreadsheetId': SPREADSHEET_ID,
        'valueRanges': [{'range': "Sheet1!A1:C1001", 'majorDimension': "ROWS", 'values': rows}],
    }
    return batchGet

def values_update(service):
    return service.spreadsheets.return_value.values.return_value.batchUpdate

def test_read_sheet_pads_rows(service):
    batchGet = set_values(service, [["a"], ["b", "c", "d"]])
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")

    assert(sheet.read_sheet("A", "C") == [["a", "", ""], ["b", "c", "d"]])
    kwargs = batchGet.call_args.kwargs
    assert(kwargs['spreadsheetId'] == SPREADSHEET_ID)
    assert(kwargs['ranges'] == ["'Sheet1'!A1:C1001"])
    assert(kwargs['majorDimension'] == "ROWS")

def test_read_sheet_window(service):
    batchGet = set_values(service, [])
    sheet = GoogleSheet(service, SPREADSHEET_ID, "19.Б07")

    assert(sheet.read_sheet("B", "D", offset=5, size=10) == [])
    assert(batchGet.call_args.kwargs['ranges'] == ["'19.Б07'!B5:D15"])

def test_read_values_are_strings(service):
    set_values(service, [[1, 2.5, True]])
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")
    assert(sheet.read_sheet("A", "C") == [["1", "2.5", "True"]])

def test_read_column(service):
    batchGet = set_values(service, [["a"], [], ["c"]])
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")

    assert(sheet.read_column("C", offset=2, size=100) == ["a", "", "c"])
    assert(batchGet.call_args.kwargs['ranges'] == ["'Sheet1'!C2:C102"])

def test_read_by_headers(service):
    batchGet = set_values(service, [
        ["Name", "Group", "Grade"],
        ["Ann", "19.Б07", "5"],
        ["Bob"],
    ])
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")

    assert(sheet.read_by_headers(["Name", "Grade", "Age"]) == [
        {"Name": "Ann", "Grade": "5"},
        {"Name": "Bob", "Grade": ""},
    ])
    assert(batchGet.call_args.kwargs['ranges'] == ["'Sheet1'!1:1001"])

def test_read_by_headers_empty(service):
    set_values(service, [])
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")
    assert(sheet.read_by_headers(["Name"]) == [])

@pytest.mark.parametrize("offset,size", [(0, 10), (-1, 10), (10, 5)])
def test_bad_window(service, offset, size):
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")
    with pytest.raises(ValueError):
        sheet.read_sheet("A", "C", offset=offset, size=size)
    with pytest.raises(ValueError):
        sheet.read_by_headers(["Name"], offset=offset, size=size)
    service.spreadsheets.assert_not_called()

def test_write_column(service):
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")
    sheet.write_column("B", ["x", "y", "z"], offset=3)

    kwargs = values_update(service).call_args.kwargs
    assert(kwargs['spreadsheetId'] == SPREADSHEET_ID)
    assert(kwargs['body'] == {
        'valueInputOption': "RAW",
        'data': [{'range': "'Sheet1'!B3:B5", 'majorDimension': "COLUMNS", 'values': [["x", "y", "z"]]}],
        'includeValuesInResponse': False,
    })

def test_write_block(service):
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")
    sheet.write_block("C", [["a", "b"], ["c"]], offset=2)

    body = values_update(service).call_args.kwargs['body']
    assert(body['data'][0]['range'] == "'Sheet1'!C2:D3")
    assert(body['data'][0]['values'] == [["a", "b"], ["c"]])

def test_write_nothing(service):
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")
    sheet.write_column("A", [])
    sheet.write_block("A", [[], []])
    values_update(service).assert_not_called()

def test_write_bad_offset(service):
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")
    with pytest.raises(ValueError):
        sheet.write_column("A", ["x"], offset=0)
    service.spreadsheets.assert_not_called()

def test_merge(service):
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")
    sheet.merge("A", 1, "C", 2)

    batchUpdate = service.spreadsheets.return_value.batchUpdate
    assert(batchUpdate.call_args.kwargs['body'] == {
        'requests': [{'mergeCells': {
            'range': {'sheetId': 7, 'startRowIndex': 0, 'endRowIndex': 2,
                      'startColumnIndex': 0, 'endColumnIndex': 3},
            'mergeType': "MERGE_ALL",
        }}],
        'includeSpreadsheetInResponse': False,
    })

def test_merge_rows(service):
    sheet = GoogleSheet(service, SPREADSHEET_ID, "19.Б07")
    sheet.merge("B", 4, "D", 6, merge_type="merge_rows")

    request = service.spreadsheets.return_value.batchUpdate.call_args.kwargs['body']['requests'][0]
    assert(request['mergeCells']['mergeType'] == "MERGE_ROWS")
    assert(request['mergeCells']['range']['sheetId'] == 11)
    assert(request['mergeCells']['range']['startColumnIndex'] == 1)
    assert(request['mergeCells']['range']['endColumnIndex'] == 4)

def test_unmerge(service):
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")
    sheet.unmerge("A", 1, "A", 5)

    body = service.spreadsheets.return_value.batchUpdate.call_args.kwargs['body']
    assert(body['requests'] == [{'unmergeCells': {
        'range': {'sheetId': 7, 'startRowIndex': 0, 'endRowIndex': 5,
                  'startColumnIndex': 0, 'endColumnIndex': 1},
    }}])

def test_merge_bad_ranges(service):
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Sheet1")
    with pytest.raises(ValueError):
        sheet.merge("C", 1, "A", 2)
    with pytest.raises(ValueError):
        sheet.merge("A", 3, "B", 2)
    with pytest.raises(ValueError):
        sheet.merge("A", 1, "B", 2, merge_type="MERGE_DIAGONAL")
    service.spreadsheets.assert_not_called()

def test_merge_missing_sheet(service):
    sheet = GoogleSheet(service, SPREADSHEET_ID, "Missing")
    with pytest.raises(SheetNotFoundError):
        sheet.merge("A", 1, "B", 2)

def test_spreadsheet_sheets(service):
    spreadsheet = GoogleSpreadSheet(service, SPREADSHEET_ID)
    assert(spreadsheet.sheets() == ["Sheet1", "19.Б07"])
    assert(spreadsheet.sheet_id("19.Б07") == 11)
    assert(spreadsheet["Sheet1"].title == "Sheet1")
    with pytest.raises(SheetNotFoundError):
        spreadsheet.sheet_id("Missing")

def test_service_builds_once():
    access = MagicMock()
    access.get_service.return_value = MagicMock()
    with GoogleSheetService(access=access) as service:
        first = service.service
        assert(service.service is first)
        sheet = service.sheet(SPREADSHEET_ID, "Sheet1")
        assert(sheet.title == "Sheet1")
    access.get_service.assert_called_once_with("sheets", "v4")

def test_service_unavailable():
    access = MagicMock()
    access.get_service.return_value = None
    with pytest.raises(RuntimeError):
        GoogleSheetService(access=access).service
