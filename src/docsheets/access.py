"""
Authenticated access to Google APIs.

See https://developers.google.com/workspace/guides/create-credentials#choose_the_access_credential_that_is_right_for_you
for how to obtain a client secrets file.  With one in place GoogleAccess runs
the OAuth confirmation in the browser once and keeps the resulting refresh
token in a cache file, so later runs go straight through.
"""
import json
import logging

from collections.abc import Iterable
from pathlib import Path

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource

logger = logging.getLogger(__name__)

SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "drive-file": "https://www.googleapis.com/auth/drive.file",
    "drive": "https://www.googleapis.com/auth/drive",
    "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
}
SCOPE_URL_PREFIX = "https://www.googleapis.com/"

class GoogleAccess():
    """
    Credentials plus the services built with them.  One of these is normally
    shared by everything in an application, so create it once and hand it to
    whatever needs a service.

    Changing the secrets, cache or scopes drops the current session, the next
    get_service() connects again.
    """
    AUTH_PROMPT_MSG = "Please visit this URL to authorize access to your spreadsheets: {url}"
    AUTH_SUCCESS_MSG = "Authorization complete, you can close this window."
    DEFAULT_SECRETS = Path.home() / "credentials.json"
    DEFAULT_CACHE = Path.home() / "token.json"

    def __init__(self, client_secrets: Path|str|None = None,
                 cred_cache: Path|str|None = None,
                 scopes: None|list[str]|str = None) -> None:
        self._secrets = Path(client_secrets) if client_secrets is not None else self.DEFAULT_SECRETS
        self._cache = Path(cred_cache) if cred_cache is not None else self.DEFAULT_CACHE
        self._scopes = self._resolve_scopes(scopes)
        self._creds = None
        self._services = {}
        self.auth_server = 'localhost'
        self.auth_port = 0
        self.auth_prompt_msg = self.AUTH_PROMPT_MSG
        self.auth_success_msg = self.AUTH_SUCCESS_MSG

    def __bool__(self) -> bool:
        return self.connected

    def __str__(self) -> str:
        if self.connected:
            return f"Connected:{self.session_scopes}"
        return f"Disconnected:{self._scopes}"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @staticmethod
    def get_scope(scope: str) -> str:
        """
        Scope URL for a short label like 'sheets'.  A full scope URL passes
        through, anything else gives "".
        """
        s = str(scope)
        if s in SCOPES:
            return SCOPES[s]
        return s if s.startswith(SCOPE_URL_PREFIX) else ""

    @classmethod
    def _resolve_scopes(cls, value: None|Iterable[str]|str) -> list[str]:
        if value is None:
            return []
        items = [value] if isinstance(value, str) else value
        resolved = []
        for scope in (cls.get_scope(v) for v in items):
            if scope and scope not in resolved:
                resolved.append(scope)
        return resolved

    def _disconnect(self) -> None:
        self._creds = None
        self._services = {}

    @property
    def client_secrets(self) -> Path:
        """Client secrets file as downloaded from the Google Cloud console."""
        return self._secrets

    @client_secrets.setter
    def client_secrets(self, value: Path|str) -> None:
        if Path(value) != self._secrets:
            self._secrets = Path(value)
            self._disconnect()

    @property
    def cred_cache(self) -> Path:
        """Where the authorized user credentials are kept between runs."""
        return self._cache

    @cred_cache.setter
    def cred_cache(self, value: Path|str) -> None:
        if Path(value) != self._cache:
            self._cache = Path(value)
            self._disconnect()

    @property
    def scopes(self) -> list[str]:
        """Scopes asked for on the next connect."""
        return self._scopes

    @scopes.setter
    def scopes(self, value: None|list[str]|str) -> None:
        self._scopes = self._resolve_scopes(value)
        self._disconnect()

    @property
    def connected(self) -> bool:
        return self._creds is not None and bool(self._creds.valid)

    @property
    def session_scopes(self) -> list[str]:
        """Scopes Google granted for the current session."""
        if self.connected:
            return list(self._creds.scopes or [])
        return []

    @property
    def creds(self) -> Credentials|None:
        return self._creds

    @property
    def config(self) -> dict:
        """
        All settings as a plain dict, ready to go into a json or toml file.
        """
        return {
            'secrets': str(self._secrets),
            'cache': str(self._cache),
            'scopes': list(self._scopes),
            'server': self.auth_server,
            'port': self.auth_port,
        }

    @config.setter
    def config(self, config: dict) -> None:
        """
        Apply settings from a dict like the one config returns.  Missing
        keys keep their current value.
        """
        if config.get('port') is not None:
            self.auth_port = int(config['port'])
        if config.get('server') is not None:
            self.auth_server = str(config['server'])
        if config.get('auth_prompt_msg') is not None:
            self.auth_prompt_msg = str(config['auth_prompt_msg'])
        if config.get('auth_success_msg') is not None:
            self.auth_success_msg = str(config['auth_success_msg'])
        if config.get('scopes'):
            self.scopes = config['scopes']
        if config.get('cache') is not None:
            self.cred_cache = config['cache']
        if config.get('secrets') is not None:
            self.client_secrets = config['secrets']

    def _load_cache(self, scopes: list[str]) -> Credentials|None:
        """
        Cached credentials, if the cache was written for all of the scopes
        asked for.  A cache that falls short is deleted.
        """
        if not self._cache.is_file():
            return None
        with open(self._cache, 'r', encoding='utf-8') as f:
            cached_scopes = json.load(f).get('scopes', [])
        if not all(s in cached_scopes for s in scopes):
            logger.info("credential cache %s lacks requested scopes, discarding", self._cache)
            self._cache.unlink()
            return None
        logger.info("using cached credentials from %s", self._cache)
        return Credentials.from_authorized_user_file(str(self._cache), scopes)

    def _save_cache(self, scopes: list[str]) -> None:
        # scopes are kept only so _load_cache can tell what the cache covers
        user_info = {'refresh_token': self._creds.refresh_token,
                     'client_id': self._creds.client_id,
                     'client_secret': self._creds.client_secret,
                     'scopes': scopes}
        with open(self._cache, 'w', encoding='utf-8') as f:
            json.dump(user_info, f, ensure_ascii=False, indent=2)
        logger.info("saved credentials to %s", self._cache)

    def _refresh(self, creds: Credentials) -> Credentials|None:
        try:
            creds.refresh(Request())
        except google.auth.exceptions.RefreshError as e:
            logger.warning("failed to refresh stored creds: %s...deleting cred cache and re-authorizing", e)
        if creds.valid:
            logger.info("refreshed cached credentials")
            return creds
        self._cache.unlink(missing_ok=True)
        return None

    def _run_flow(self, scopes: list[str]) -> Credentials:
        logger.info("starting OAuth flow with %s", self._secrets)
        flow = InstalledAppFlow.from_client_secrets_file(str(self._secrets), scopes)
        return flow.run_local_server(host=self.auth_server, port=self.auth_port,
                                     authorization_prompt_message=self.auth_prompt_msg,
                                     success_message=self.auth_success_msg)

    def _default_credentials(self, scopes: list[str]) -> Credentials|None:
        # GOOGLE_APPLICATION_CREDENTIALS and the other cloud default locations
        try:
            creds, _ = google.auth.default(scopes=scopes)
        except google.auth.exceptions.DefaultCredentialsError:
            logger.warning("no client secrets at %s and no default credentials", self._secrets)
            return None
        if not creds.valid:
            creds.refresh(Request())
        return creds

    def connect(self) -> bool:
        """
        Start a new session.  Tries, in order: the credential cache,
        refreshing the cached credentials, the installed app OAuth flow with
        the client secrets file, and application default credentials.
        Credentials from the OAuth flow are written to the cache.
        """
        self._disconnect()
        if not self._scopes:
            return False
        scopes = list(self._scopes)

        creds = self._load_cache(scopes)
        if creds is not None and not creds.valid:
            creds = self._refresh(creds) if creds.refresh_token else None
        self._creds = creds
        if self.connected:
            return True

        if self._secrets.is_file():
            self._creds = self._run_flow(scopes)
            if self.connected:
                self._save_cache(scopes)
        else:
            self._creds = self._default_credentials(scopes)
        return self.connected

    def get_service(self, name: str, version: str) -> Resource|None:
        """
        Build a service, connecting first if needed.  Services are built once
        per session.  None if no session could be established.
        """
        if not self.connected and not self.connect():
            return None
        key = f"{name}:{version}"
        if key not in self._services:
            logger.debug("building %s service", key)
            self._services[key] = build(name, version, credentials=self._creds)
        return self._services[key]
