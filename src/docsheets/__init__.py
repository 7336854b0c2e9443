"""
A collection of utility wrappers for reading and writing spreadsheet data.
The goal is to hide the fiddly parts, like authentication, A1 notation,
column letters and header lookups, behind a few column/row oriented calls.

Three backends are supported:
    xlsx:   local .xlsx files through openpyxl
    sheets: Google Sheets through the Google API python client
    yandex: .xlsx files stored on Yandex.Disk, fetched and uploaded over
            its REST API and then handled with the xlsx classes

The backends don't depend on each other apart from yandex reusing xlsx.
"""

# can address up to 'ZZZ'
MaxColumns = 18278
