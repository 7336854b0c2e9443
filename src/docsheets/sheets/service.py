import logging

from pathlib import Path
from typing import Self

from googleapiclient.discovery import Resource

from ..access import GoogleAccess
from .sheet import GoogleSheet
from .spreadsheet import GoogleSpreadSheet

logger = logging.getLogger(__name__)

class GoogleSheetService():
    """
    Entry point for Google Sheets, typically one for the entire application.
    Authentication happens on first use: the token cache is tried first,
    then the browser OAuth flow using the client secrets file.
    """
    def __init__(self, client_secrets: Path|str = "credentials.json",
                 token_cache: Path|str = "token.json",
                 access: GoogleAccess|None = None) -> None:
        self._access = access or GoogleAccess(client_secrets, token_cache, "sheets")
        self._service = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def access(self) -> GoogleAccess:
        return self._access

    @property
    def service(self) -> Resource:
        """
        The built sheets v4 service, connecting first if needed.
        """
        if self._service is None:
            self._service = self._access.get_service("sheets", "v4")
            if self._service is None:
                raise RuntimeError(f"Unable to authenticate with Google using {self._access.client_secrets}")
            logger.debug("built sheets v4 service")
        return self._service

    def spreadsheet(self, spreadsheet_id: str) -> GoogleSpreadSheet:
        """Document by its ID.  Doesn't query the server."""
        return GoogleSpreadSheet(self.service, spreadsheet_id)

    def sheet(self, spreadsheet_id: str, title: str) -> GoogleSheet:
        """Sheet (tab) by document ID and tab title.  Doesn't query the server."""
        return GoogleSheet(self.service, spreadsheet_id, title)

    def close(self) -> None:
        if self._service is not None:
            self._service.close()
            self._service = None
