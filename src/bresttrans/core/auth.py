"""
Google sign-in for Drive uploads.

Wraps the OAuth installed-app flow. The token is cached on disk so the
surveyor signs in once per device.
"""

import logging
from pathlib import Path

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

logger = logging.getLogger(__name__)

# Access limited to files this application creates
SCOPES = ["https://www.googleapis.com/auth/drive.file"]


class DriveAuthHelper:
    """Loads, refreshes and obtains Drive credentials."""

    def __init__(self, config: dict | None = None):
        """
        Initialize the helper.

        Args:
            config: Drive configuration dict with client_secrets and token_file.
        """
        self.config = config or {}
        self.client_secrets_path = Path(
            self.config.get("client_secrets", "~/.bresttrans/client_secrets.json")
        ).expanduser()
        self.token_path = Path(
            self.config.get("token_file", "~/.bresttrans/token.json")
        ).expanduser()

    def load_credentials(self) -> Credentials | None:
        """
        Return cached credentials, refreshing them if expired.

        Returns:
            Valid credentials, or None if the user has not signed in or the
            token could not be refreshed.
        """
        if not self.token_path.exists():
            return None

        try:
            credentials = Credentials.from_authorized_user_file(str(self.token_path), SCOPES)
            if credentials.expired and credentials.refresh_token:
                credentials.refresh(Request())
                self._save(credentials)
        except Exception as e:
            logger.warning(f"Failed to load Drive credentials: {e}")
            return None

        if not credentials.valid:
            return None
        return credentials

    def sign_in(self) -> Credentials | None:
        """
        Run the browser sign-in flow and cache the resulting token.

        Returns:
            New credentials, or None if sign-in failed or was cancelled.
        """
        try:
            flow = InstalledAppFlow.from_client_secrets_file(str(self.client_secrets_path), SCOPES)
            credentials = flow.run_local_server(port=0)
            self._save(credentials)
        except Exception as e:
            logger.warning(f"Google sign-in failed: {e}")
            return None

        logger.info("Google sign-in completed")
        return credentials

    def get_credentials(self) -> Credentials | None:
        """Cached credentials if available, otherwise an interactive sign-in."""
        return self.load_credentials() or self.sign_in()

    def sign_out(self) -> None:
        if self.token_path.exists():
            self.token_path.unlink()
            logger.info("Drive token removed")

    def _save(self, credentials: Credentials) -> None:
        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        self.token_path.write_text(credentials.to_json(), encoding="utf-8")
