"""
BrestTrans Kivy Application - Transit ridership survey collector.

Main entry point for the Kivy-based mobile/desktop application.
"""

import logging
import os
import platform as sys_platform
from pathlib import Path

# Prevent Kivy from consuming command-line arguments
os.environ["KIVY_NO_ARGS"] = "1"

from kivy.app import App
from kivy.clock import Clock
from kivy.core.window import Window
from kivy.logger import Logger
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.floatlayout import FloatLayout

from ..core.auth import DriveAuthHelper
from ..core.config import Config
from ..core.drive import DriveUploader
from ..core.entry import RecordEntryFlow
from ..core.history import HistoryController
from ..core.models import TransportRecord
from ..core.profile import ProfileStore
from ..core.stops import StopDirectory
from ..core.store import RecordStore
from ..core.weather import WeatherClient
from .screens.collect_screen import CollectScreen
from .screens.history_screen import HistoryScreen
from .screens.profile_screen import ProfileScreen, RegistrationScreen
from .widgets.nav_bar import NavBar
from .widgets.toast import Toast

logger = logging.getLogger(__name__)


class BrestTransApp(App):
    """
    Main BrestTrans Kivy application.

    Coordinates:
    - Stop directory and weather lookup (via RecordEntryFlow)
    - Session records (via RecordStore)
    - CSV export and Drive upload (via HistoryController)
    - Registration and profile (via ProfileStore)
    """

    def __init__(self, app_config: Config | None = None, **kwargs):
        """
        Initialize the BrestTrans app.

        Args:
            app_config: Optional Config object. If not provided, loads from default location.
        """
        super().__init__(**kwargs)

        # Use app_config to avoid conflict with Kivy's config
        if app_config is None:
            app_config = Config()
        self.app_config = app_config

        self.platform_type = self._detect_platform()
        self.export_dir = self._get_export_directory()

        # Components (initialized in build())
        self.directory = None
        self.weather = None
        self.store = None
        self.profile_store = None
        self.auth_helper = None
        self.entry_flow = None
        self.history = None

        # UI
        self.toast = None
        self.nav_bar = None
        self.content = None
        self.current_screen = None

        Logger.info(f"BrestTrans: Initialized on {sys_platform.system()} ({self.platform_type})")
        Logger.info(f"BrestTrans: Export directory: {self.export_dir}")

    def _detect_platform(self) -> str:
        """Detect current platform type."""
        if sys_platform.system() == "Linux":
            try:
                import android  # noqa: F401
                return "android"
            except ImportError:
                return "desktop"
        return "desktop"

    def _get_export_directory(self) -> str:
        """Get platform-appropriate export directory."""
        configured = self.app_config.get("export.directory")
        if configured:
            return str(Path(configured).expanduser())
        if self.platform_type == "android":
            return "/sdcard/BrestTrans/exports/"
        return str(Path.home() / "BrestTrans" / "exports")

    def build(self):
        """Build the application UI."""
        if self.platform_type == "desktop":
            Window.size = (540, 960)
        self.title = "BrestTrans"

        self.directory = StopDirectory.load(self.app_config.get("stops.asset") or None)
        Logger.info(f"BrestTrans: {len(self.directory)} stop entries loaded")

        self.store = RecordStore()
        self.weather = WeatherClient(self.app_config.get("weather", {}), notify=self.show_notice)
        self.profile_store = ProfileStore(
            self.app_config.get("profile.file", "~/.bresttrans/profile.yaml")
        )

        drive_config = self.app_config.get("drive", {})
        self.auth_helper = DriveAuthHelper(drive_config)

        self.entry_flow = RecordEntryFlow(
            directory=self.directory,
            weather=self.weather,
            on_record=self._on_record,
            notify=self.show_notice,
        )
        self.history = HistoryController(
            store=self.store,
            uploader=DriveUploader(drive_config, notify=self.show_notice),
            profile_store=self.profile_store,
            credentials_provider=self.auth_helper.get_credentials,
            export_dir=self.export_dir,
            notify=self.show_notice,
            run_on_ui=lambda fn: Clock.schedule_once(lambda dt: fn(), 0),
        )

        root = FloatLayout()
        self.main_layout = BoxLayout(orientation="vertical")
        self.content = BoxLayout()
        self.main_layout.add_widget(self.content)
        self.nav_bar = NavBar(on_select=self.show_screen)
        root.add_widget(self.main_layout)

        self.toast = Toast()
        root.add_widget(self.toast)

        if self.profile_store.is_registered:
            self._show_main()
        else:
            self._show_registration()

        return root

    def _show_registration(self) -> None:
        self._set_content(
            RegistrationScreen(
                profile_store=self.profile_store,
                on_registered=self._show_main,
                notify=self.show_notice,
            )
        )

    def _show_main(self) -> None:
        if self.nav_bar.parent is None:
            self.main_layout.add_widget(self.nav_bar)
        self.show_screen("collect")

    def show_screen(self, route: str) -> None:
        """Switch the content area to a tab."""
        if route == "collect":
            screen = CollectScreen(
                entry_flow=self.entry_flow,
                directory=self.directory,
                debounce_seconds=self.app_config.get("entry.debounce_seconds", 0.5),
            )
        elif route == "history":
            screen = HistoryScreen(store=self.store, controller=self.history)
        elif route == "profile":
            screen = ProfileScreen(profile_store=self.profile_store, notify=self.show_notice)
        else:
            logger.warning(f"Unknown screen: {route}")
            return

        self.nav_bar.select(route)
        self._set_content(screen)

    def _set_content(self, screen) -> None:
        if self.current_screen is not None and hasattr(self.current_screen, "on_leave"):
            self.current_screen.on_leave()
        self.content.clear_widgets()
        self.content.add_widget(screen)
        self.current_screen = screen

    def _on_record(self, record: TransportRecord) -> None:
        """Hand a finished record to the store on the main thread."""
        Clock.schedule_once(lambda dt: self.store.append(record), 0)

    def show_notice(self, message: str) -> None:
        """Show a transient notice; callable from any thread."""
        if self.toast is not None:
            self.toast.show(message)
        else:
            logger.info(f"Notice: {message}")

    def on_stop(self):
        """Called when the application stops."""
        Logger.info("BrestTrans: Application stopping")

        if self.current_screen is not None and hasattr(self.current_screen, "on_leave"):
            self.current_screen.on_leave()
        if self.entry_flow:
            self.entry_flow.shutdown()
        if self.history:
            self.history.shutdown()
        if self.weather:
            self.weather.close()

        Logger.info("BrestTrans: Application stopped")


def run_mobile_app(config: Config | None = None):
    """
    Run the BrestTrans mobile/desktop Kivy application.

    Args:
        config: Optional Config object.
    """
    app = BrestTransApp(app_config=config)
    app.run()
