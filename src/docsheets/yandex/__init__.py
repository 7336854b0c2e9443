"""
Classes to work with .xlsx spreadsheets stored on Yandex.Disk
"""
from .auth import ClientSecrets, YandexAuth, YandexToken
from .disk import YandexService, YandexSpreadsheet
from ..errors import AuthorizationError, ServerCommunicationError
