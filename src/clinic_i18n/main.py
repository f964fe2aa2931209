"""Main entry point for the clinic translation demo shell."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from clinic_i18n.coordinators import LanguageContext, install_context
from clinic_i18n.io import create_cache_gateway
from clinic_i18n.services import BatchDispatcher, SettingsManager, create_translation_provider
from clinic_i18n.ui import MainWindow


def main():
    """
    Bootstrap the application following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # 1. Initialize Application
    app = QApplication(sys.argv)
    app.setApplicationName("Clinic")
    app.setOrganizationName("ClinicI18n")

    # 2. Initialize Infrastructure
    settings = SettingsManager()
    gateway = create_cache_gateway(settings.get_cache_backend(), settings.get_cache_path())
    provider = create_translation_provider(settings.get_provider_name())
    if settings.get_provider_api_key() is None:
        logging.getLogger(__name__).warning(
            "No API key for the %s provider; untranslated text stays in English",
            settings.get_provider_name(),
        )

    # 3. Instantiate Context (Dependency Injection)
    dispatcher = BatchDispatcher(
        gateway=gateway,
        provider=provider,
        source_language=settings.get_source_language(),
    )
    context = LanguageContext(dispatcher=dispatcher, settings_manager=settings)
    install_context(context)

    # 4. Construct UI
    main_window = MainWindow(context)

    # 5. Show UI and start event loop
    main_window.show()

    exit_code = app.exec()
    context.close()
    gateway.close()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
