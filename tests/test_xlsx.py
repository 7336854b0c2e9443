import pytest

from docsheets.xlsx import XlsxSpreadsheet, SheetNotFoundError

def reload(spreadsheet, path):
    spreadsheet.save_to(path)
    spreadsheet.close()
    return XlsxSpreadsheet.from_file(path)

def test_empty_spreadsheet_round_trip(tmp_path):
    path = tmp_path / "test.xlsx"
    with XlsxSpreadsheet.new() as spreadsheet:
        spreadsheet.save_to(path)
    assert(path.exists())
    assert(path.stat().st_size > 0)

    with XlsxSpreadsheet.from_file(path) as spreadsheet:
        assert(spreadsheet.sheet_names == ["Лист 1"])
        for sheet in spreadsheet.sheets():
            assert(len(sheet) == 0)
            assert(sheet.column("A") == [])

def test_write_row_appends_rows(tmp_path):
    spreadsheet = XlsxSpreadsheet.new("Sheet1")
    sheet = spreadsheet.sheet("Sheet1")
    assert(sheet.write_row(["1", "2", "3"]) == 1)
    assert(sheet.write_row(["4", "5", "6"]) == 2)

    with reload(spreadsheet, tmp_path / "test.xlsx") as spreadsheet:
        sheet = spreadsheet.sheet("Sheet1")
        assert(sheet.column("A") == ["1", "4"])
        assert(sheet.column("B") == ["2", "5"])
        assert(sheet.column(2) == ["3", "6"])
        assert(sheet.write_row(["7"]) == 3)

def test_write_column_from_offset(tmp_path):
    spreadsheet = XlsxSpreadsheet.new("Sheet1")
    sheet = spreadsheet.sheet("Sheet1")
    sheet.write_row(["h1", "h2"])
    sheet.write_row(["a", "b"])
    sheet.write_column("B", 3, ["x", "y", "z"])

    with reload(spreadsheet, tmp_path / "test.xlsx") as spreadsheet:
        sheet = spreadsheet.sheet("Sheet1")
        assert(len(sheet) == 5)
        assert(sheet.column("B") == ["h2", "b", "x", "y", "z"])
        assert(sheet.column("A") == ["h1", "a", "", "", ""])

def test_write_column_overwrites(tmp_path):
    spreadsheet = XlsxSpreadsheet.new("Sheet1")
    sheet = spreadsheet.sheet("Sheet1")
    for v in ["1", "2", "3"]:
        sheet.write_row([v])
    sheet.write_column("A", 2, ["two"])

    with reload(spreadsheet, tmp_path / "test.xlsx") as spreadsheet:
        assert(spreadsheet.sheet("Sheet1").column("A") == ["1", "two", "3"])

@pytest.mark.parametrize("offset", [0, -1])
def test_write_column_bad_offset(offset):
    sheet = XlsxSpreadsheet.new().sheets()[0]
    with pytest.raises(ValueError):
        sheet.write_column("A", offset, ["x"])
    assert(len(sheet) == 0)

def test_values_stay_strings(tmp_path):
    spreadsheet = XlsxSpreadsheet.new("Sheet1")
    spreadsheet.sheet("Sheet1").write_row(["=1+1", "007"])

    with reload(spreadsheet, tmp_path / "test.xlsx") as spreadsheet:
        sheet = spreadsheet.sheet("Sheet1")
        assert(sheet.column("A") == ["=1+1"])
        assert(sheet.column("B") == ["007"])

def test_read_by_headers():
    sheet = XlsxSpreadsheet.new().sheets()[0]
    sheet.write_row(["Name", "Group", "Grade"])
    sheet.write_column("A", 2, ["Ann", "Bob", "Cid"])
    sheet.write_column("C", 2, ["5"])

    assert(sheet.column_by_name("Name") == ["Ann", "Bob", "Cid"])
    assert(sheet.column_by_name("Age") == [])
    assert(sheet.read_by_headers(["Name", "Grade", "Age"]) == [
        {"Name": "Ann", "Grade": "5", "Age": ""},
        {"Name": "Bob", "Grade": "", "Age": ""},
        {"Name": "Cid", "Grade": "", "Age": ""},
    ])

def test_read_by_headers_empty_sheet():
    sheet = XlsxSpreadsheet.new().sheets()[0]
    assert(sheet.read_by_headers(["Name"]) == [])

def test_missing_sheet():
    spreadsheet = XlsxSpreadsheet.new("Sheet1")
    assert("Sheet1" in spreadsheet)
    assert("Sheet2" not in spreadsheet)
    with pytest.raises(SheetNotFoundError) as e:
        spreadsheet.sheet("Sheet2")
    assert("Sheet2" in str(e.value))
    with pytest.raises(KeyError):
        spreadsheet["Sheet2"]

def test_from_bytes():
    spreadsheet = XlsxSpreadsheet.new("Sheet1")
    spreadsheet.sheet("Sheet1").write_row(["a", "b"])
    data = spreadsheet.to_bytes()

    with XlsxSpreadsheet.from_bytes(data) as copy:
        assert(copy.sheet("Sheet1").column("B") == ["b"])

def test_save_to_stream(tmp_path):
    spreadsheet = XlsxSpreadsheet.new("Sheet1")
    spreadsheet.sheet("Sheet1").write_row(["a"])
    path = tmp_path / "stream.xlsx"
    with open(path, "wb") as f:
        spreadsheet.save_to(f)

    with XlsxSpreadsheet.from_file(path) as copy:
        assert(copy.sheet("Sheet1").column("A") == ["a"])

def test_reading_leaves_sheet_alone():
    sheet = XlsxSpreadsheet.new().sheets()[0]
    sheet.write_row(["Name", "Grade"])
    sheet.write_row(["Ann", "5"])

    assert(sheet.column("F") == ["", ""])
    assert(sheet.column(100) == ["", ""])
    assert(sheet.worksheet.max_column == 2)
    assert(sheet.header_row().headers == ["Name", "Grade"])
    assert(sheet.column_by_name("") == [])
    assert(sheet.read_by_headers([""]) == [])

def test_write_empty_rows():
    sheet = XlsxSpreadsheet.new().sheets()[0]
    assert(sheet.write_row([]) == 1)
    assert(sheet.write_row([]) == 2)
    assert(sheet.write_row(["x"]) == 3)
    assert(sheet.column("A") == ["", "", "x"])
