"""
Classes to facilitate working with Google Sheets
"""
from .resources import *
from .requests import *
from .sheet import GoogleSheet
from .spreadsheet import GoogleSpreadSheet
from .service import GoogleSheetService
