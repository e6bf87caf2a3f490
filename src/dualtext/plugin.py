"""
Host adapter for DualText Translator.

Models the editor plugin lifecycle: settings are loaded from a store when the
plugin loads, a selection is read from the host, translated, and the outcome is
handed to a presenter.
"""

from typing import Any, Optional, Protocol

import structlog

from .config import DEFAULT_SETTINGS, TranslatorSettings
from .stores import BaseSettingsStore
from .translator import (
    TranslationClient,
    TranslationFailure,
    TranslationOutcome,
    TranslationRequest,
    is_blank,
)

logger = structlog.get_logger(__name__)

NO_SELECTION_NOTICE = "No text selected!"


class SelectionProvider(Protocol):
    """Supplies the currently selected text."""

    def get_selection(self) -> str:
        ...


class TranslationPresenter(Protocol):
    """Receives translations and user-visible notices."""

    def show_translation(self, result: Any) -> None:
        ...

    def show_notice(self, message: str) -> None:
        ...


class StaticSelection:
    """Selection provider returning a fixed text."""

    def __init__(self, text: str):
        self.text = text

    def get_selection(self) -> str:
        return self.text


class DualTextTranslator:
    """Translate-selection command bound to a settings store and a client."""

    def __init__(self, store: BaseSettingsStore, client: TranslationClient):
        """
        Initialize the translator plugin.

        Args:
            store: Settings store holding languages and credential
            client: Translation client used for each command
        """
        self.store = store
        self.client = client
        self.settings: TranslatorSettings = DEFAULT_SETTINGS
        self.loaded = False

    async def load(self) -> None:
        """Load settings and mark the plugin ready."""
        logger.info("Loading DualText Translator")
        await self.store.initialize()
        await self.load_settings()
        self.loaded = True

    async def unload(self) -> None:
        """Release the settings store."""
        logger.info("Unloading DualText Translator")
        await self.store.shutdown()
        self.loaded = False

    async def load_settings(self) -> TranslatorSettings:
        """Reload settings from the store, merged over defaults."""
        self.settings = await self.store.load()
        logger.debug(
            "Settings loaded",
            source_language=self.settings.source_language,
            target_language=self.settings.target_language,
            configured=self.settings.is_configured(),
        )
        return self.settings

    async def save_settings(self) -> None:
        """Persist the current settings."""
        await self.store.save(self.settings)

    async def update_settings(self, **changes: Optional[str]) -> TranslatorSettings:
        """
        Change and persist settings.

        Args:
            **changes: ``source_language``, ``target_language`` or ``api_key``;
                None values are ignored

        Returns:
            The updated settings
        """
        values = self.settings.to_dict()
        values.update({k: v for k, v in changes.items() if v is not None})
        self.settings = TranslatorSettings.merged_over_defaults(values)
        await self.save_settings()
        return self.settings

    async def translate_text(
        self,
        text: str,
        source_language: Optional[str] = None,
        target_language: Optional[str] = None,
    ) -> TranslationOutcome:
        """Translate ``text`` using the current settings, optionally overriding languages."""
        request = TranslationRequest.from_settings(
            text,
            self.settings,
            source_language=source_language,
            target_language=target_language,
        )
        outcome = await self.client.translate(request)
        if isinstance(outcome, TranslationFailure):
            logger.warning(
                "Translation failed",
                kind=outcome.kind.value,
                detail=outcome.detail,
            )
        return outcome

    async def translate_selection(
        self,
        selection: SelectionProvider,
        presenter: TranslationPresenter,
    ) -> Optional[TranslationOutcome]:
        """
        Translate the current selection and present the outcome.

        Returns:
            The outcome, or None if nothing was selected
        """
        text = selection.get_selection()
        if is_blank(text):
            presenter.show_notice(NO_SELECTION_NOTICE)
            return None

        outcome = await self.translate_text(text)
        if isinstance(outcome, TranslationFailure):
            presenter.show_notice(outcome.notice)
        else:
            presenter.show_translation(outcome)
        return outcome
