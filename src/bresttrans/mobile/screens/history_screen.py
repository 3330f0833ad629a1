"""
History screen for BrestTrans.

Lists the session's records and offers delete, delete all, CSV export and
Drive upload.
"""

import logging
from typing import Callable

from kivy.clock import Clock
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.popup import Popup
from kivy.uix.scrollview import ScrollView

from ...core.history import HistoryController
from ...core.models import TransportRecord
from ...core.store import RecordStore

logger = logging.getLogger(__name__)


class RecordItem(BoxLayout):
    """Single record card in the list."""

    def __init__(
        self,
        index: int,
        record: TransportRecord,
        on_delete: Callable[[int], None] | None = None,
        **kwargs,
    ):
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("size_hint_y", None)
        kwargs.setdefault("height", 190)
        kwargs.setdefault("padding", [10, 5, 10, 5])
        kwargs.setdefault("spacing", 2)
        super().__init__(**kwargs)

        self.index = index
        self.on_delete = on_delete

        lines = [
            (record.summary, "15sp", True),
            (f"{record.current_stop} → {record.next_stop}", "14sp", False),
            (
                f"Заполненность остановки: {record.people_at_stop}, "
                f"заполненность транспорта: {record.people_in_transport}",
                "12sp",
                False,
            ),
            (f"Вошло: {record.entered}, вышло: {record.exited}", "12sp", False),
            (f"Координаты: {record.latitude}, {record.longitude}", "12sp", False),
            (f"Погода: {record.weather}", "12sp", False),
        ]
        for text, font_size, bold in lines:
            label = Label(
                text=text,
                font_size=font_size,
                bold=bold,
                halign="left",
                valign="middle",
            )
            label.bind(size=label.setter("text_size"))
            self.add_widget(label)

        delete_btn = Button(
            text="Удалить запись",
            size_hint=(None, None),
            size=(160, 36),
            pos_hint={"right": 1},
            font_size="12sp",
            background_color=(0.8, 0.2, 0.2, 1),
        )
        delete_btn.bind(on_press=self._on_delete)
        self.add_widget(delete_btn)

    def _on_delete(self, instance):
        if self.on_delete:
            self.on_delete(self.index)


class HistoryScreen(BoxLayout):
    """
    Screen showing the records collected in this session.

    Features:
    - Records in entry order
    - Delete one record or all records (with confirmation)
    - Save CSV locally, upload CSV to Google Drive
    """

    def __init__(
        self,
        store: RecordStore,
        controller: HistoryController,
        **kwargs,
    ):
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("padding", [16, 16, 16, 16])
        kwargs.setdefault("spacing", 10)
        super().__init__(**kwargs)

        self.store = store
        self.controller = controller
        self._active = True

        self._create_ui()
        self.store.subscribe(self._on_store_changed)
        self.refresh_list()

    def _create_ui(self):
        """Create the UI components."""
        title = Label(
            text="История записей",
            font_size="20sp",
            bold=True,
            size_hint_y=None,
            height=40,
            halign="left",
            valign="middle",
        )
        title.bind(size=title.setter("text_size"))
        self.add_widget(title)

        scroll_view = ScrollView(size_hint=(1, 1))
        self.list_layout = BoxLayout(orientation="vertical", size_hint_y=None, spacing=5)
        self.list_layout.bind(minimum_height=self.list_layout.setter("height"))
        scroll_view.add_widget(self.list_layout)
        self.add_widget(scroll_view)

        actions = BoxLayout(orientation="vertical", size_hint_y=None, height=200, spacing=10)

        delete_all_btn = Button(
            text="Удалить всё",
            font_size="16sp",
            background_color=(0.8, 0.2, 0.2, 1),
        )
        delete_all_btn.bind(on_press=lambda x: self._confirm_delete_all())
        actions.add_widget(delete_all_btn)

        export_btn = Button(text="Сохранить CSV", font_size="16sp")
        export_btn.bind(on_press=lambda x: self.controller.export_async())
        actions.add_widget(export_btn)

        self.upload_btn = Button(text="Отправить в Google Drive", font_size="16sp")
        self.upload_btn.bind(on_press=self._on_upload)
        actions.add_widget(self.upload_btn)

        self.add_widget(actions)

    def refresh_list(self):
        """Rebuild the record list from the store."""
        self.list_layout.clear_widgets()

        if self.store.is_empty:
            empty = Label(
                text="Записей пока нет",
                font_size="14sp",
                halign="center",
                valign="middle",
                size_hint_y=None,
                height=100,
            )
            empty.bind(size=empty.setter("text_size"))
            self.list_layout.add_widget(empty)
            return

        for index, record in enumerate(self.store):
            self.list_layout.add_widget(
                RecordItem(index=index, record=record, on_delete=self.controller.delete)
            )

    def _on_store_changed(self, store: RecordStore) -> None:
        if self._active:
            self.refresh_list()

    def _on_upload(self, instance):
        """Upload in the background; re-enable the button when done."""
        self.upload_btn.disabled = True
        future = self.controller.upload_async()
        future.add_done_callback(
            lambda f: Clock.schedule_once(lambda dt: self._upload_finished(), 0)
        )

    def _upload_finished(self) -> None:
        if not self._active:
            return
        self.upload_btn.disabled = False

    def _confirm_delete_all(self):
        """Show confirmation dialog before clearing the history."""
        content = BoxLayout(orientation="vertical", padding=[20, 10, 20, 10], spacing=10)
        content.add_widget(
            Label(
                text="Удалить все записи?",
                font_size="14sp",
                halign="center",
                valign="middle",
                size_hint_y=0.6,
            )
        )

        buttons = BoxLayout(orientation="horizontal", size_hint_y=0.4, spacing=10)
        cancel_btn = Button(text="Отмена", font_size="14sp")
        delete_btn = Button(
            text="Удалить",
            font_size="14sp",
            background_color=(0.8, 0.2, 0.2, 1),
        )
        buttons.add_widget(cancel_btn)
        buttons.add_widget(delete_btn)
        content.add_widget(buttons)

        popup = Popup(
            title="Подтверждение",
            content=content,
            size_hint=(0.8, 0.4),
            auto_dismiss=False,
        )
        cancel_btn.bind(on_press=popup.dismiss)
        delete_btn.bind(on_press=lambda x: self._delete_all(popup))
        popup.open()

    def _delete_all(self, popup: Popup):
        popup.dismiss()
        self.controller.delete_all()

    def on_leave(self) -> None:
        """Detach from the store; late upload results are ignored."""
        self._active = False
        self.store.unsubscribe(self._on_store_changed)
