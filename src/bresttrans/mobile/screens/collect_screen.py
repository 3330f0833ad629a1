"""
Data collection screen for BrestTrans.

Entry form for one ridership observation: vehicle, route, type, current and
next stop with suggestions, and the four passenger counts.
"""

import logging

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.scrollview import ScrollView
from kivy.uix.spinner import Spinner
from kivy.uix.textinput import TextInput

from ...core.entry import RecordEntryFlow, RecordForm, next_stop_options
from ...core.models import DEFAULT_TRANSPORT_TYPE, TransportType
from ...core.stops import StopDirectory
from ..widgets.autocomplete_input import AutoCompleteInput

logger = logging.getLogger(__name__)

COUNT_FIELDS = [
    ("people_at_stop", "Заполненность остановки"),
    ("people_in_transport", "Заполненность транспорта"),
    ("entered", "Вошло"),
    ("exited", "Вышло"),
]


class CollectScreen(BoxLayout):
    """
    Form screen feeding the record entry flow.

    The form values live in a RecordForm; widgets only mirror them.
    """

    def __init__(
        self,
        entry_flow: RecordEntryFlow,
        directory: StopDirectory,
        debounce_seconds: float = 0.5,
        **kwargs,
    ):
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("padding", [16, 16, 16, 16])
        kwargs.setdefault("spacing", 12)
        super().__init__(**kwargs)

        self.entry_flow = entry_flow
        self.directory = directory
        self.debounce_seconds = debounce_seconds
        self.form = RecordForm()

        self._create_ui()

    def _set_field(self, field: str, value: str) -> None:
        """Mirror a widget change into the form; any edit leaves the saved state."""
        setattr(self.form, field, value)
        self.entry_flow.edit()

    def _text_input(self, hint: str, field: str, numeric: bool = False) -> TextInput:
        text_input = TextInput(
            hint_text=hint,
            multiline=False,
            font_size="16sp",
            size_hint_y=None,
            height=50,
            input_filter="int" if numeric else None,
        )
        text_input.bind(text=lambda instance, value: self._set_field(field, value))
        return text_input

    def _create_ui(self):
        """Create the form widgets."""
        scroll_view = ScrollView(size_hint=(1, 1))
        form_layout = BoxLayout(orientation="vertical", size_hint_y=None, spacing=12)
        form_layout.bind(minimum_height=form_layout.setter("height"))

        form_layout.add_widget(self._text_input("Регистрационный номер", "vehicle_number"))
        form_layout.add_widget(self._text_input("Номер маршрута", "route_number"))

        self.type_spinner = Spinner(
            text=DEFAULT_TRANSPORT_TYPE,
            values=TransportType.labels(),
            size_hint_y=None,
            height=50,
            font_size="16sp",
        )
        self.type_spinner.bind(text=lambda instance, value: self._set_field("transport_type", value))
        form_layout.add_widget(self.type_spinner)

        self.current_stop_input = AutoCompleteInput(
            hint_text="Текущая остановка",
            options=self.directory.ordered_stop_names,
            on_text=lambda value: self._set_field("current_stop", value),
            delay=self.debounce_seconds,
        )
        form_layout.add_widget(self.current_stop_input)

        self.next_stop_input = AutoCompleteInput(
            hint_text="Следующая остановка",
            options=lambda: next_stop_options(self.directory, self.form),
            on_text=lambda value: self._set_field("next_stop", value),
            delay=self.debounce_seconds,
        )
        form_layout.add_widget(self.next_stop_input)

        for field, hint in COUNT_FIELDS:
            form_layout.add_widget(self._text_input(hint, field, numeric=True))

        if len(self.directory) == 0:
            form_layout.add_widget(
                Label(
                    text="Справочник остановок недоступен",
                    font_size="12sp",
                    color=(0.7, 0.7, 0.7, 1),
                    size_hint_y=None,
                    height=30,
                )
            )

        scroll_view.add_widget(form_layout)
        self.add_widget(scroll_view)

        save_btn = Button(text="Сохранить", size_hint_y=None, height=64, font_size="18sp")
        save_btn.bind(on_press=self._on_save)
        self.add_widget(save_btn)

    def _on_save(self, instance):
        """Handle save button press."""
        self.entry_flow.save(self.form)

    def on_leave(self) -> None:
        """Called by the app when another tab is shown."""
        self.current_stop_input.close()
        self.next_stop_input.close()
