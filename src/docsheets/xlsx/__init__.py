"""
Classes to work with local .xlsx spreadsheets
"""
from .sheet import XlsxSheet
from .spreadsheet import XlsxSpreadsheet
from ..errors import SheetNotFoundError
