"""
Surveyor profile: registration, editing and persistence.

The profile is a small YAML key/value file. It is read once when the app
starts and written only by registration and by saving the profile screen.
"""

import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9+._%\-]{1,256}"
    r"@"
    r"[a-zA-Z0-9][a-zA-Z0-9\-]{0,64}"
    r"(\.[a-zA-Z0-9][a-zA-Z0-9\-]{0,25})+"
)
DRIVE_LINK_PATTERN = re.compile(r"https://drive\.google\.com/drive/folders/[^\s]+")

# Persisted key names
KEY_REGISTERED = "is_registered"
KEY_FIRST_NAME = "first_name"
KEY_LAST_NAME = "last_name"
KEY_EMAIL = "email"
KEY_DRIVE_LINK = "driveLink"


class ProfileError(ValueError):
    """Raised when registration data does not pass validation."""


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email or "") is not None


def is_valid_drive_link(link: str) -> bool:
    return DRIVE_LINK_PATTERN.fullmatch(link or "") is not None


@dataclass(frozen=True)
class UserProfile:
    """Registered surveyor and their upload folder."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    drive_link: str = ""
    is_registered: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            KEY_REGISTERED: self.is_registered,
            KEY_FIRST_NAME: self.first_name,
            KEY_LAST_NAME: self.last_name,
            KEY_EMAIL: self.email,
            KEY_DRIVE_LINK: self.drive_link,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        return cls(
            first_name=str(data.get(KEY_FIRST_NAME) or ""),
            last_name=str(data.get(KEY_LAST_NAME) or ""),
            email=str(data.get(KEY_EMAIL) or ""),
            drive_link=str(data.get(KEY_DRIVE_LINK) or ""),
            is_registered=bool(data.get(KEY_REGISTERED, False)),
        )

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class ProfileForm:
    """Editable state of the registration and profile screens."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    drive_link: str = ""

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileForm":
        return cls(
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            drive_link=profile.drive_link,
        )

    @property
    def all_fields_valid(self) -> bool:
        return (
            bool(self.first_name.strip())
            and bool(self.last_name.strip())
            and is_valid_email(self.email)
            and is_valid_drive_link(self.drive_link)
        )


class ProfileStore:
    """
    YAML-backed profile persistence.

    A missing or unreadable file is treated as an unregistered user.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self._profile = self._read()

    @property
    def profile(self) -> UserProfile:
        return self._profile

    @property
    def is_registered(self) -> bool:
        return self._profile.is_registered

    def _read(self) -> UserProfile:
        if not self.path.exists():
            return UserProfile()
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except Exception as e:
            logger.warning(f"Failed to read profile {self.path}: {e}")
            return UserProfile()
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed profile file {self.path}")
            return UserProfile()
        return UserProfile.from_dict(data)

    def _write(self, profile: UserProfile) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(profile.to_dict(), f, allow_unicode=True, sort_keys=False)
        self._profile = profile

    def register(self, form: ProfileForm) -> UserProfile:
        """
        Complete registration.

        Raises:
            ProfileError: If a name is blank, the email is malformed or the
                Drive link is not a folder link.
        """
        if not form.all_fields_valid:
            raise ProfileError("Введите корректную почту и ссылку на папку Google Drive")

        profile = UserProfile(
            first_name=form.first_name.strip(),
            last_name=form.last_name.strip(),
            email=form.email.strip(),
            drive_link=form.drive_link.strip(),
            is_registered=True,
        )
        self._write(profile)
        logger.info(f"Registered {profile.display_name}")
        return profile

    def has_changes(self, form: ProfileForm) -> bool:
        return form != ProfileForm.from_profile(self._profile)

    def save(self, form: ProfileForm) -> UserProfile:
        """Store edited profile fields as entered; registration state is kept."""
        profile = replace(
            self._profile,
            first_name=form.first_name,
            last_name=form.last_name,
            email=form.email,
            drive_link=form.drive_link,
        )
        self._write(profile)
        logger.info("Profile saved")
        return profile

    def reset(self) -> None:
        """Forget the profile so the next start shows registration again."""
        if self.path.exists():
            self.path.unlink()
        self._profile = UserProfile()
        logger.info("Profile reset")
