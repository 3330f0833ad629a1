"""
Unit tests for the surveyor profile.
"""

import pytest
import yaml

from bresttrans.core.profile import (
    ProfileError,
    ProfileForm,
    ProfileStore,
    UserProfile,
    is_valid_drive_link,
    is_valid_email,
)

DRIVE_LINK = "https://drive.google.com/drive/folders/1AbC_dEf?usp=sharing"


@pytest.fixture
def profile_path(tmp_path):
    return tmp_path / "profile" / "profile.yaml"


@pytest.fixture
def valid_form():
    return ProfileForm(
        first_name="Иван",
        last_name="Петров",
        email="ivan.petrov@example.by",
        drive_link=DRIVE_LINK,
    )


class TestValidation:
    @pytest.mark.parametrize(
        "email", ["a@b.by", "first.last+tag@mail.example.com", "X_1%y@host-name.org"]
    )
    def test_valid_emails(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize(
        "email", ["", "plain", "a@b", "@example.com", "a b@example.com", "a@b.by\n"]
    )
    def test_invalid_emails(self, email):
        assert not is_valid_email(email)

    @pytest.mark.parametrize(
        "link",
        [
            "https://drive.google.com/drive/folders/abc",
            DRIVE_LINK,
        ],
    )
    def test_valid_drive_links(self, link):
        assert is_valid_drive_link(link)

    @pytest.mark.parametrize(
        "link",
        [
            "",
            "http://drive.google.com/drive/folders/abc",
            "https://drive.google.com/file/d/abc",
            "https://drive.google.com/drive/folders/",
            "https://drive.google.com/drive/folders/a b",
            "https://drive.google.com/drive/folders/abc\n",
            " https://drive.google.com/drive/folders/abc",
        ],
    )
    def test_invalid_drive_links(self, link):
        assert not is_valid_drive_link(link)

    def test_form_requires_names(self, valid_form):
        assert valid_form.all_fields_valid
        valid_form.last_name = "  "
        assert not valid_form.all_fields_valid


class TestProfileStore:
    """Registration and persistence."""

    def test_missing_file_is_unregistered(self, profile_path):
        store = ProfileStore(profile_path)
        assert not store.is_registered
        assert store.profile == UserProfile()

    def test_register_persists(self, profile_path, valid_form):
        valid_form.first_name = " Иван "
        profile = ProfileStore(profile_path).register(valid_form)

        assert profile.is_registered
        assert profile.first_name == "Иван"
        assert profile.display_name == "Иван Петров"

        reopened = ProfileStore(profile_path)
        assert reopened.is_registered
        assert reopened.profile == profile

    def test_file_uses_readable_keys(self, profile_path, valid_form):
        ProfileStore(profile_path).register(valid_form)

        data = yaml.safe_load(profile_path.read_text(encoding="utf-8"))
        assert data == {
            "is_registered": True,
            "first_name": "Иван",
            "last_name": "Петров",
            "email": "ivan.petrov@example.by",
            "driveLink": DRIVE_LINK,
        }

    def test_register_rejects_invalid(self, profile_path, valid_form):
        valid_form.email = "not-an-email"
        store = ProfileStore(profile_path)

        with pytest.raises(ProfileError):
            store.register(valid_form)
        assert not profile_path.exists()
        assert not store.is_registered

    def test_has_changes(self, profile_path, valid_form):
        store = ProfileStore(profile_path)
        store.register(valid_form)

        form = ProfileForm.from_profile(store.profile)
        assert not store.has_changes(form)
        form.email = "other@example.by"
        assert store.has_changes(form)

    def test_save_keeps_registration(self, profile_path, valid_form):
        store = ProfileStore(profile_path)
        store.register(valid_form)

        form = ProfileForm.from_profile(store.profile)
        form.drive_link = "https://drive.google.com/drive/folders/new"
        store.save(form)

        reopened = ProfileStore(profile_path)
        assert reopened.is_registered
        assert reopened.profile.drive_link.endswith("/new")

    @pytest.mark.parametrize("content", ["{broken: [", "- just\n- a list\n", ""])
    def test_unreadable_file_is_unregistered(self, profile_path, content):
        profile_path.parent.mkdir(parents=True)
        profile_path.write_text(content, encoding="utf-8")

        assert not ProfileStore(profile_path).is_registered

    def test_reset(self, profile_path, valid_form):
        store = ProfileStore(profile_path)
        store.register(valid_form)

        store.reset()

        assert not profile_path.exists()
        assert not store.is_registered
        assert not ProfileStore(profile_path).is_registered
