"""
Registration and profile screens for BrestTrans.

Registration is shown on first start; the profile screen edits the same
fields later.
"""

import logging
from typing import Callable

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.textinput import TextInput

from ...core.profile import ProfileError, ProfileForm, ProfileStore

logger = logging.getLogger(__name__)

NOTICE_PROFILE_SAVED = "Изменения сохранены"

FORM_FIELDS = [
    ("first_name", "Имя"),
    ("last_name", "Фамилия"),
    ("email", "Электронная почта"),
    ("drive_link", "Ссылка на папку Google Drive"),
]


class _ProfileFormLayout(BoxLayout):
    """Shared layout: a title, the four profile fields and one action button."""

    def __init__(self, title: str, action_text: str, form: ProfileForm, **kwargs):
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("padding", [16, 16, 16, 16])
        kwargs.setdefault("spacing", 12)
        super().__init__(**kwargs)

        self.form = form

        title_label = Label(
            text=title,
            font_size="22sp",
            bold=True,
            size_hint_y=None,
            height=50,
            halign="left",
            valign="middle",
        )
        title_label.bind(size=title_label.setter("text_size"))
        self.add_widget(title_label)

        for field, hint in FORM_FIELDS:
            text_input = TextInput(
                text=getattr(form, field),
                hint_text=hint,
                multiline=False,
                font_size="16sp",
                size_hint_y=None,
                height=50,
            )
            text_input.bind(text=lambda instance, value, f=field: self._on_field(f, value))
            self.add_widget(text_input)

        self.action_btn = Button(text=action_text, size_hint_y=None, height=56, font_size="16sp")
        self.action_btn.bind(on_press=self._on_action)
        self.add_widget(self.action_btn)

        # Spacer
        self.add_widget(BoxLayout(size_hint=(1, 1)))

        self._update_button()

    def _on_field(self, field: str, value: str) -> None:
        setattr(self.form, field, value)
        self._update_button()

    def _update_button(self) -> None:
        pass

    def _on_action(self, instance) -> None:
        raise NotImplementedError


class RegistrationScreen(_ProfileFormLayout):
    """First-run registration form."""

    def __init__(
        self,
        profile_store: ProfileStore,
        on_registered: Callable[[], None],
        notify: Callable[[str], None],
        **kwargs,
    ):
        self.profile_store = profile_store
        self.on_registered = on_registered
        self.notify = notify
        super().__init__(
            title="Регистрация",
            action_text="Зарегистрироваться",
            form=ProfileForm.from_profile(profile_store.profile),
            **kwargs,
        )

    def _update_button(self) -> None:
        self.action_btn.disabled = not self.form.all_fields_valid

    def _on_action(self, instance) -> None:
        try:
            self.profile_store.register(self.form)
        except ProfileError as e:
            self.notify(str(e))
            return
        self.on_registered()


class ProfileScreen(_ProfileFormLayout):
    """Edit the stored profile; saving is enabled only when something changed."""

    def __init__(
        self,
        profile_store: ProfileStore,
        notify: Callable[[str], None],
        **kwargs,
    ):
        self.profile_store = profile_store
        self.notify = notify
        super().__init__(
            title="Профиль",
            action_text="Сохранить изменения",
            form=ProfileForm.from_profile(profile_store.profile),
            **kwargs,
        )

    def _update_button(self) -> None:
        self.action_btn.disabled = not self.profile_store.has_changes(self.form)

    def _on_action(self, instance) -> None:
        self.profile_store.save(self.form)
        self._update_button()
        self.notify(NOTICE_PROFILE_SAVED)
