import io
import logging
import urllib.parse
import webbrowser

from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO, Self

import httpx
from openpyxl import Workbook

from ..errors import ServerCommunicationError
from ..xlsx.spreadsheet import XlsxSpreadsheet
from .auth import (ClientSecrets, YandexAuth, DEFAULT_CLIENT_SECRETS,
                   DEFAULT_REDIRECT_PORT, DEFAULT_TOKEN_CACHE)

logger = logging.getLogger(__name__)

API_URL = "https://cloud-api.yandex.net/v1/disk"
DISK_CLIENT_URL = "https://disk.yandex.ru/client/disk/"
DEFAULT_TIMEOUT = 60

class YandexSpreadsheet(XlsxSpreadsheet):
    """
    .xlsx spreadsheet that came from Yandex.Disk and knows how to go back there.
    """
    def __init__(self, workbook: Workbook, service: "YandexService", path: str) -> None:
        super().__init__(workbook)
        self._service = service
        self._path = path

    @classmethod
    def from_download(cls, data: bytes, service: "YandexService", path: str) -> Self:
        """Open the bytes downloaded from path, remembering where they came from."""
        return cls(cls._read_workbook(data), service, path)

    @property
    def path(self) -> str:
        """Path on the disk this spreadsheet was downloaded from."""
        return self._path

    async def save(self) -> None:
        """Serialize and upload the spreadsheet back to its original path, overwriting it."""
        with io.BytesIO() as stream:
            self.save_to(stream)
            await self._service.upload(stream, self._path)


class YandexService():
    """
    Yandex.Disk access, typically one for the entire application.
    Authenticates on first use (see yandex.auth) and reuses the token after that.
    Close it, or use it with 'async with', to release the HTTP client.
    """
    def __init__(self, client_id: str, client_secret: str,
                 token_cache: Path|str = DEFAULT_TOKEN_CACHE,
                 redirect_port: int = DEFAULT_REDIRECT_PORT,
                 open_browser: Callable[[str], object] = webbrowser.open,
                 timeout: float = DEFAULT_TIMEOUT,
                 transport: httpx.AsyncBaseTransport|None = None) -> None:
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._auth = YandexAuth(ClientSecrets(client_id, client_secret), self._client,
                                token_cache=token_cache, redirect_port=redirect_port,
                                open_browser=open_browser)

    @classmethod
    def from_client_secrets_file(cls, path: Path|str = DEFAULT_CLIENT_SECRETS, **kwargs) -> Self:
        """
        Set up the service from a JSON file with "clientId" and "clientSecret" fields.
        Client secrets are provided by https://oauth.yandex.ru/ for a registered application.
        """
        secrets = ClientSecrets.from_file(path)
        return cls(secrets.client_id, secrets.client_secret, **kwargs)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def auth(self) -> YandexAuth:
        return self._auth

    async def _headers(self) -> dict[str,str]:
        return {'Authorization': f"OAuth {await self._auth.access_token()}"}

    async def _link(self, endpoint: str, params: dict) -> str:
        """
        Ask the API for a download/upload link.  Error statuses propagate as
        httpx.HTTPStatusError.  A success that isn't a JSON Link object means
        the server is having trouble, and the body is the most useful thing
        to hand back.
        """
        response = await self._client.get(f"{API_URL}/{endpoint}", params=params,
                                          headers=await self._headers())
        response.raise_for_status()
        try:
            return response.json()['href']
        except (ValueError, KeyError, TypeError):
            raise ServerCommunicationError(response.text) from None

    async def download(self, path: str) -> bytes:
        """Raw contents of a file given its absolute path on the disk."""
        logger.debug("downloading %s", path)
        link = await self._link("resources/download", {'path': path})
        # the link answers with a redirect to the storage host
        response = await self._client.get(link, headers=await self._headers(), follow_redirects=True)
        response.raise_for_status()
        return response.content

    async def get_spreadsheet(self, path: str) -> YandexSpreadsheet:
        """Download a spreadsheet given its absolute path on the disk."""
        data = await self.download(path)
        return YandexSpreadsheet.from_download(data, self, path)

    async def get_spreadsheet_by_folder_and_file_name(self, folder_url: str, file_name: str) -> YandexSpreadsheet:
        """
        Download a spreadsheet given the web URL of its folder, as seen in the
        browser address bar, and the file name without extension.
        """
        if not folder_url.startswith(DISK_CLIENT_URL):
            raise ValueError(f"not a Yandex.Disk folder URL: {folder_url}")
        folder = urllib.parse.unquote(folder_url[len(DISK_CLIENT_URL):])
        return await self.get_spreadsheet(f"{folder}/{file_name}.xlsx")

    async def upload(self, stream: BinaryIO, path: str) -> None:
        """Upload a stream's contents to the given path on the disk, overwriting what is there."""
        logger.debug("uploading %s", path)
        link = await self._link("resources/upload", {'path': path, 'overwrite': 'true'})
        stream.seek(0)
        response = await self._client.put(link, content=stream.read(),
                                          headers={'Content-Type': 'application/octet-stream'})
        response.raise_for_status()
