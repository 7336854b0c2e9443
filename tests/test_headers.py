from docsheets.headers import HeaderRow, pad_rows, zip_columns

def test_header_positions():
    headers = HeaderRow(["Name", "Group", "Grade"])
    assert(len(headers) == 3)
    assert(headers["Group"] == 1)
    assert("Grade" in headers)
    assert("Age" not in headers)
    assert(headers.get("Age") is None)
    assert(headers.headers == ["Name", "Group", "Grade"])

def test_duplicate_header_last_wins():
    headers = HeaderRow(["Name", "Grade", "Name"])
    assert(headers["Name"] == 2)

def test_project():
    headers = HeaderRow(["Name", "Group", "Grade"])
    assert(headers.project(["Ann", "19.Б07", "5"], ["Grade", "Name"]) == {"Grade": "5", "Name": "Ann"})
    # unknown names are skipped, short rows read as empty
    assert(headers.project(["Bob"], ["Name", "Grade", "Age"]) == {"Name": "Bob", "Grade": ""})

def test_pad_rows():
    assert(pad_rows([["a"], ["b", "c", "d"], []]) == [["a", "", ""], ["b", "c", "d"], ["", "", ""]])
    assert(pad_rows([]) == [])

def test_zip_columns_pads_short_columns():
    records = zip_columns(["Name", "Grade", "Age"], [["Ann", "Bob", "Cid"], ["5"], []])
    assert(records == [
        {"Name": "Ann", "Grade": "5", "Age": ""},
        {"Name": "Bob", "Grade": "", "Age": ""},
        {"Name": "Cid", "Grade": "", "Age": ""},
    ])
    assert(zip_columns(["Name"], [[]]) == [])
