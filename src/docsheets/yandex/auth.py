"""
Yandex OAuth for the Disk API.

The state lives on a YandexAuth instance: no token (unauthenticated) or a
YandexToken that hasn't expired (authenticated).  Getting to authenticated
tries, in order:
    - the token cache file, if its token is still fresh
    - the refresh token from that cache, if it has one
    - the browser: a local listener is started on the redirect URI, the
      system browser is pointed at the authorize page, and the code from
      the redirect is exchanged for a token
A new token is written back to the cache file.
See https://yandex.ru/dev/id/doc/en/codes/code-url
"""
import asyncio
import json
import logging
import urllib.parse
import webbrowser
import wsgiref.simple_server
import wsgiref.util

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Self

import httpx

from ..errors import AuthorizationError

logger = logging.getLogger(__name__)

OAUTH_URL = "https://oauth.yandex.ru"
DEFAULT_REDIRECT_PORT = 8888
DEFAULT_TOKEN_CACHE = "yandexToken.json"
DEFAULT_CLIENT_SECRETS = "clientSecrets.json"
# knocked off the lifetime so a token isn't used right as it runs out
EXPIRY_MARGIN = timedelta(seconds=10)

@dataclass
class ClientSecrets():
    """
    Application credentials from https://oauth.yandex.ru/ for a registered app.
    Stored as JSON with "clientId" and "clientSecret" fields.
    """
    client_id: str
    client_secret: str = field(repr=False)

    @classmethod
    def from_file(cls, path: Path|str = DEFAULT_CLIENT_SECRETS) -> Self:
        with open(path, 'r', encoding='utf-8') as f:
            j = json.load(f)
        return cls(j['clientId'], j['clientSecret'])

@dataclass
class YandexToken():
    """Access token with its expiry, and the refresh token that came with it."""
    access_token: str = field(repr=False)
    expires_at: datetime
    refresh_token: str = field(default="", repr=False)

    @property
    def expired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at

    @classmethod
    def from_response(cls, payload: dict, now: datetime|None = None) -> Self:
        """
        Build from the token endpoint's JSON, which gives a lifetime in
        seconds rather than an expiry time.
        """
        now = now or datetime.now(timezone.utc)
        expires_at = now + timedelta(seconds=int(payload['expires_in'])) - EXPIRY_MARGIN
        return cls(payload['access_token'], expires_at, payload.get('refresh_token', ""))

    def to_dict(self) -> dict:
        return {'accessToken': self.access_token,
                'expiresAt': self.expires_at.isoformat(),
                'refreshToken': self.refresh_token}

    @classmethod
    def from_dict(cls, values: dict) -> Self:
        expires_at = datetime.fromisoformat(values['expiresAt'])
        if expires_at.tzinfo is None:
            # written without an offset, take it as local time
            expires_at = expires_at.astimezone()
        return cls(values['accessToken'], expires_at, values.get('refreshToken') or "")

    @classmethod
    def load(cls, path: Path|str) -> Self|None:
        """Token from a cache file, or None if there is no cache file."""
        p = Path(path)
        if not p.is_file():
            return None
        with open(p, 'r', encoding='utf-8') as f:
            return cls.from_dict(json.load(f))

    def save(self, path: Path|str) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)


class _RedirectWSGIApp():
    """Answers the OAuth redirect and keeps hold of the code it carried."""
    def __init__(self) -> None:
        self.code = None
        self.query = {}

    def __call__(self, environ, start_response):
        uri = wsgiref.util.request_uri(environ)
        self.query = urllib.parse.parse_qs(urllib.parse.urlparse(uri).query)
        self.code = self.query.get('code', [None])[0]
        start_response('200 OK', [('Content-type', 'text/html; charset=utf-8')])
        if self.code:
            message = f"<HTML><BODY>Access code {self.code} received, you can close this window</BODY></HTML>"
        else:
            message = "<HTML><BODY>No access code received, you can close this window</BODY></HTML>"
        return [message.encode('utf-8')]


class _QuietHandler(wsgiref.simple_server.WSGIRequestHandler):
    def log_message(self, format, *args):
        logger.debug(format, *args)


class YandexAuth():
    """
    OAuth state for one Yandex application.  Hand it the HTTP client to use
    for the token endpoint; the browser opener is swappable so tests (or a
    headless setup) can drive the redirect themselves.
    """
    def __init__(self, secrets: ClientSecrets,
                 client: httpx.AsyncClient,
                 token_cache: Path|str = DEFAULT_TOKEN_CACHE,
                 redirect_host: str = "localhost",
                 redirect_port: int = DEFAULT_REDIRECT_PORT,
                 open_browser: Callable[[str], object] = webbrowser.open) -> None:
        self._secrets = secrets
        self._client = client
        self._token_cache = Path(token_cache)
        self._redirect_host = redirect_host
        self._redirect_port = redirect_port
        self._open_browser = open_browser
        self._token = None

    def __bool__(self) -> bool:
        return self.authenticated

    @property
    def token(self) -> YandexToken|None:
        return self._token

    @property
    def token_cache(self) -> Path:
        return self._token_cache

    @property
    def authenticated(self) -> bool:
        return self._token is not None and not self._token.expired

    def clear(self) -> None:
        """Forget the in-memory token.  The cache file is left alone."""
        self._token = None

    def authorization_url(self, redirect_uri: str) -> str:
        query = urllib.parse.urlencode({'response_type': 'code',
                                        'client_id': self._secrets.client_id,
                                        'redirect_uri': redirect_uri})
        return f"{OAUTH_URL}/authorize?{query}"

    async def access_token(self) -> str:
        """Current access token, authenticating first if there isn't a fresh one."""
        if not self.authenticated:
            await self.authenticate()
        return self._token.access_token

    async def authenticate(self) -> YandexToken:
        """
        Go from whatever state we're in to authenticated.
        """
        cached = YandexToken.load(self._token_cache)
        if cached is not None and not cached.expired:
            logger.info("using cached Yandex token from %s", self._token_cache)
            self._token = cached
            return cached

        if cached is not None and cached.refresh_token:
            try:
                token = await self._request_token({'grant_type': 'refresh_token',
                                                   'refresh_token': cached.refresh_token})
                logger.info("refreshed Yandex token")
                return self._store(token)
            except httpx.HTTPStatusError as e:
                logger.warning("failed to refresh Yandex token: %s...re-authorizing", e)

        code = await self._authorization_code()
        token = await self._request_token({'grant_type': 'authorization_code', 'code': code})
        logger.info("obtained Yandex token through browser authorization")
        return self._store(token)

    def _store(self, token: YandexToken) -> YandexToken:
        self._token = token
        token.save(self._token_cache)
        logger.info("saved Yandex token to %s", self._token_cache)
        return token

    async def _request_token(self, data: dict) -> YandexToken:
        response = await self._client.post(f"{OAUTH_URL}/token", data=data,
                                           auth=(self._secrets.client_id, self._secrets.client_secret))
        response.raise_for_status()
        return YandexToken.from_response(response.json())

    async def _authorization_code(self) -> str:
        """
        Run the browser part of the flow and return the authorization code.
        Waits for as long as it takes someone to go through the browser.
        """
        app = _RedirectWSGIApp()
        server = wsgiref.simple_server.make_server(self._redirect_host, self._redirect_port, app,
                                                   handler_class=_QuietHandler)
        try:
            redirect_uri = f"http://{self._redirect_host}:{server.server_port}/"
            url = self.authorization_url(redirect_uri)
            logger.info("opening browser for Yandex authorization: %s", url)
            self._open_browser(url)
            await asyncio.to_thread(server.handle_request)
        finally:
            server.server_close()
        if not app.code:
            raise AuthorizationError(f"authorization redirect carried no code: {app.query}")
        return app.code
