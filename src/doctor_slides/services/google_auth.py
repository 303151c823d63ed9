"""Google OAuth2 credential management.

Handles the OAuth2 authorization flow, token persistence and building
authenticated Google Docs / Slides service objects.

Token persistence goes through a ``TokenStore``:

  1. ``FileTokenStore`` keeps the token in ``token.json`` next to the
     client secrets, which is what the CLI uses.
  2. ``MemoryTokenStore`` keeps it in memory, for tests and embedding.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from doctor_slides.utils.error_handling import AuthenticationError

logger = logging.getLogger(__name__)

# OAuth scopes required to read the source document and write the deck
SCOPES = [
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/presentations",
]


class TokenStore(Protocol):
    """Where the authorized-user token JSON lives between runs."""

    def load(self) -> Optional[str]:
        ...

    def save(self, token_json: str) -> None:
        ...


class FileTokenStore:
    """Token JSON in a local file, readable only by the owner."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def save(self, token_json: str) -> None:
        logger.info("Saving credential file", extra={"path": str(self.path)})
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # The mode argument only applies to newly created files.
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(token_json)


class MemoryTokenStore:
    """Token JSON held in memory."""

    def __init__(self, token_json: Optional[str] = None):
        self.token_json = token_json

    def load(self) -> Optional[str]:
        return self.token_json

    def save(self, token_json: str) -> None:
        self.token_json = token_json


class GoogleAuth:
    """Manages OAuth2 credentials for the Docs and Slides APIs.

    The OAuth client configuration comes either as a raw JSON string
    (``credentials_json``) or from a ``credentials.json`` file
    (``credentials_path``). The user token is read from and written to
    ``token_store``.
    """

    def __init__(
        self,
        token_store: TokenStore,
        *,
        credentials_json: Optional[str] = None,
        credentials_path: Optional[Path | str] = None,
    ):
        if credentials_json is None and credentials_path is None:
            raise AuthenticationError(
                "Either credentials_json or credentials_path is required"
            )
        self._token_store = token_store
        self._credentials_json = credentials_json
        self._credentials_path = Path(credentials_path) if credentials_path else None
        self._flow: Optional[Flow] = None

        if self._credentials_json is None and not self._credentials_path.exists():
            logger.warning(
                "Google OAuth credentials file not found",
                extra={"path": str(self._credentials_path)},
            )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def is_authorized(self) -> bool:
        """Check if a valid (non-expired or refreshable) token exists."""
        creds = self._load_token()
        if creds is None:
            return False
        if creds.valid:
            return True
        if creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
                self._save_token(creds)
                return True
            except Exception:
                logger.warning("Token refresh failed", exc_info=True)
                return False
        return False

    def get_credentials(self) -> Credentials:
        """Return valid credentials, refreshing if necessary.

        Raises:
            AuthenticationError: If no valid credentials are available.
        """
        creds = self._load_token()
        if creds is None:
            raise AuthenticationError(
                "Not authorized. Complete the OAuth flow first."
            )
        if creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
                self._save_token(creds)
            except Exception as exc:
                raise AuthenticationError(
                    f"Token refresh failed: {exc}"
                ) from exc
        if not creds.valid:
            raise AuthenticationError(
                "Credentials are invalid. Re-authorize via the OAuth flow."
            )
        return creds

    def get_auth_url(self, redirect_uri: str) -> str:
        """Generate the OAuth2 consent URL.

        The flow is kept on the instance so ``authorize`` can finish it
        with the same state and code verifier.
        """
        self._flow = self._build_flow(redirect_uri)
        auth_url, _ = self._flow.authorization_url(
            access_type="offline",
            include_granted_scopes="true",
            prompt="consent",
        )
        logger.info("Generated Google OAuth consent URL")
        return auth_url

    def authorize(self, code: str, redirect_uri: str) -> Credentials:
        """Exchange an authorization code for tokens and persist them."""
        flow = self._flow or self._build_flow(redirect_uri)
        try:
            flow.fetch_token(code=code.strip())
        except Exception as exc:
            raise AuthenticationError(
                f"Could not exchange authorization code: {exc}"
            ) from exc
        finally:
            self._flow = None
        creds = flow.credentials
        self._save_token(creds)
        logger.info("Google OAuth authorization successful, token saved")
        return creds

    def build_docs_service(self):
        """Return an authenticated Google Docs API service."""
        creds = self.get_credentials()
        return build("docs", "v1", credentials=creds, cache_discovery=False)

    def build_slides_service(self):
        """Return an authenticated Google Slides API service."""
        creds = self.get_credentials()
        return build("slides", "v1", credentials=creds, cache_discovery=False)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _build_flow(self, redirect_uri: str) -> Flow:
        """Create an OAuth ``Flow`` from either in-memory JSON or a file."""
        if self._credentials_json is not None:
            try:
                client_config = json.loads(self._credentials_json)
            except json.JSONDecodeError as exc:
                raise AuthenticationError(
                    f"OAuth client configuration is not valid JSON: {exc}"
                ) from exc
            return Flow.from_client_config(
                client_config, scopes=SCOPES, redirect_uri=redirect_uri
            )
        if not self._credentials_path.exists():
            raise AuthenticationError(
                f"OAuth credentials file not found: {self._credentials_path}"
            )
        return Flow.from_client_secrets_file(
            str(self._credentials_path), scopes=SCOPES, redirect_uri=redirect_uri
        )

    def _load_token(self) -> Optional[Credentials]:
        """Load the stored token, or None if missing or unreadable."""
        try:
            token_json = self._token_store.load()
        except OSError:
            logger.warning("Failed to read stored token", exc_info=True)
            return None
        if not token_json:
            return None
        try:
            info = json.loads(token_json)
            return Credentials.from_authorized_user_info(info, SCOPES)
        except Exception:
            logger.warning("Failed to parse stored token JSON", exc_info=True)
            return None

    def _save_token(self, creds: Credentials) -> None:
        """Persist the token through the store."""
        self._token_store.save(creds.to_json())
        logger.debug("Token saved")
