"""Unit tests for LanguageContext."""

from unittest.mock import MagicMock

import pytest

from clinic_i18n.coordinators import LanguageContext, current_context, install_context, tr
from clinic_i18n.exceptions import TranslationContextError
from clinic_i18n.io import InMemoryCacheGateway
from clinic_i18n.services import BatchDispatcher, BatchTranslationResult, DispatchOutcome


class RecordingProvider:
    """Prefixes every string with its target language and records each batch."""

    def __init__(self):
        self.calls = []

    def translate_batch(self, texts, target_language, api_key, source_language="en"):
        self.calls.append((list(texts), target_language))
        return BatchTranslationResult(texts=[f"{target_language}:{text}" for text in texts], model="stub")


@pytest.fixture
def provider():
    return RecordingProvider()


@pytest.fixture
def gateway():
    return InMemoryCacheGateway()


@pytest.fixture
def dispatcher(gateway, provider):
    return BatchDispatcher(gateway=gateway, provider=provider)


@pytest.fixture
def context(dispatcher, settings_manager, sync_pool):
    """Create a LanguageContext whose workers run inline."""
    ctx = LanguageContext(
        dispatcher=dispatcher,
        settings_manager=settings_manager,
        thread_pool=sync_pool,
    )
    yield ctx
    ctx.close()


class TestLanguageContextInitialization:
    """Tests for initial state."""

    def test_language_comes_from_settings(self, context):
        assert context.language == "he"
        assert context.source_language == "en"

    def test_explicit_language_overrides_settings(self, dispatcher, settings_manager, sync_pool):
        ctx = LanguageContext(dispatcher, settings_manager, thread_pool=sync_pool, language="ru")
        assert ctx.language == "ru"

    def test_not_dispatching_initially(self, context):
        assert not context.is_dispatching()


class TestLookup:
    """Tests for register/lookup during rendering."""

    def test_lookup_falls_back_to_source(self, context):
        assert context.lookup("Never seen") == "Never seen"

    def test_lookup_empty_string(self, context):
        assert context.text("") == ""

    def test_register_does_no_io(self, context, provider, sync_pool):
        context.register("Save")
        context.register("Save")
        assert provider.calls == []
        assert sync_pool.started == []
        assert context.tracker.pending("he") == ("Save",)

    def test_source_language_is_identity(self, context, provider):
        context.set_language("en")
        assert context.text("Save") == "Save"
        context.render_pass_settled()
        assert provider.calls == []

    def test_lookup_after_dispatch(self, context):
        assert context.text("Save") == "Save"
        context.render_pass_settled()
        assert context.lookup("Save") == "he:Save"


class TestRenderPassSettled:
    """Tests for the settlement phase."""

    def test_one_batch_per_pass(self, context, provider):
        for text in ["a", "b", "a"]:
            context.register(text)
        context.render_pass_settled()
        assert provider.calls == [(["a", "b"], "he")]

    def test_nothing_pending_starts_no_worker(self, context, sync_pool):
        context.render_pass_settled()
        assert sync_pool.started == []

    def test_translations_updated_emitted_on_new_entries(self, context):
        spy = MagicMock()
        context.translations_updated.connect(spy)

        context.register("Save")
        context.render_pass_settled()

        spy.assert_called_once_with("he")

    def test_no_update_signal_when_nothing_resolved(self, dispatcher, settings_manager, sync_pool):
        settings_manager.get_provider_api_key.return_value = None
        ctx = LanguageContext(dispatcher, settings_manager, thread_pool=sync_pool)
        spy = MagicMock()
        ctx.translations_updated.connect(spy)

        ctx.register("Save")
        ctx.render_pass_settled()

        spy.assert_not_called()
        assert ctx.lookup("Save") == "Save"
        ctx.close()

    def test_started_and_finished_signals(self, context):
        started, finished = MagicMock(), MagicMock()
        context.dispatch_started.connect(started)
        context.dispatch_finished.connect(finished)

        context.register("Save")
        context.render_pass_settled()

        started.assert_called_once_with("he")
        finished.assert_called_once_with("he")
        assert not context.is_dispatching("he")

    def test_provider_error_reported(self, gateway, settings_manager, sync_pool):
        provider = MagicMock()
        provider.translate_batch.return_value = BatchTranslationResult(model="stub", error="quota")
        ctx = LanguageContext(BatchDispatcher(gateway, provider), settings_manager, thread_pool=sync_pool)
        failed = MagicMock()
        ctx.dispatch_failed.connect(failed)

        ctx.register("Save")
        ctx.render_pass_settled()

        failed.assert_called_once_with("he", "quota")
        assert ctx.lookup("Save") == "Save"
        assert ctx.tracker.register("he", "Save") is True
        ctx.close()

    def test_unexpected_worker_error_reported(self, settings_manager, sync_pool):
        dispatcher = MagicMock()
        dispatcher.resolve.side_effect = RuntimeError("boom")
        ctx = LanguageContext(dispatcher, settings_manager, thread_pool=sync_pool)
        failed, finished = MagicMock(), MagicMock()
        ctx.dispatch_failed.connect(failed)
        ctx.dispatch_finished.connect(finished)

        ctx.register("Save")
        ctx.render_pass_settled()

        failed.assert_called_once()
        assert "boom" in failed.call_args.args[1]
        finished.assert_called_once_with("he")
        assert not ctx.is_dispatching("he")
        ctx.close()

    def test_uses_current_provider_key(self, context, settings_manager, dispatcher):
        settings_manager.get_provider_api_key.return_value = "rotated-key"
        dispatcher.resolve = MagicMock(wraps=dispatcher.resolve)

        context.register("Save")
        context.render_pass_settled()

        assert dispatcher.resolve.call_args.kwargs["api_key"] == "rotated-key"


class TestSerializedCycles:
    """At most one dispatch per language is in flight."""

    @pytest.fixture
    def held_context(self, dispatcher, settings_manager, held_pool):
        ctx = LanguageContext(dispatcher, settings_manager, thread_pool=held_pool)
        yield ctx
        ctx.close()

    def test_second_pass_waits_for_running_cycle(self, held_context, held_pool, provider):
        held_context.register("a")
        held_context.render_pass_settled()
        assert held_context.is_dispatching("he")

        held_context.register("b")
        held_context.render_pass_settled()
        assert len(held_pool.started) == 1
        assert held_context.tracker.pending("he") == ("b",)

        held_pool.run_held()
        assert provider.calls == [(["a"], "he")]
        assert not held_context.is_dispatching("he")
        # The follow-up cycle is armed on the settle timer
        assert held_context._flush_timer.isActive()

        held_context.render_pass_settled()
        held_pool.run_held()
        assert provider.calls == [(["a"], "he"), (["b"], "he")]

    def test_resolved_string_not_requeued(self, held_context, held_pool):
        held_context.register("a")
        held_context.render_pass_settled()
        held_pool.run_held()
        held_context.register("a")
        assert held_context.tracker.pending("he") == ()

    def test_language_switch_does_not_cancel_in_flight_cycle(self, held_context, held_pool, provider):
        held_context.register("a")
        held_context.render_pass_settled()

        held_context.set_language("ru")
        held_context.register("a")
        held_context.render_pass_settled()
        assert len(held_pool.started) == 2

        held_pool.run_held()

        assert provider.calls == [(["a"], "he"), (["a"], "ru")]
        assert held_context.store.get("he", "a") == "he:a"
        assert held_context.lookup("a") == "ru:a"


class TestLanguageSwitching:
    """Tests for set_language and language isolation."""

    def test_set_language_persists_and_emits(self, context, settings_manager):
        spy = MagicMock()
        context.language_changed.connect(spy)

        context.set_language("ar")

        assert context.language == "ar"
        settings_manager.set_language.assert_called_once_with("ar")
        spy.assert_called_once_with("ar")

    def test_same_language_is_noop(self, context, settings_manager):
        spy = MagicMock()
        context.language_changed.connect(spy)
        context.set_language("he")
        spy.assert_not_called()
        settings_manager.set_language.assert_not_called()

    def test_translations_do_not_leak_across_languages(self, context):
        context.register("Save")
        context.render_pass_settled()
        context.set_language("ru")
        assert context.lookup("Save") == "Save"

    def test_dispatch_only_for_active_language(self, context, provider):
        context.register("a")
        context.set_language("ru")
        context.render_pass_settled()
        assert provider.calls == []
        assert context.tracker.pending("he") == ("a",)

    def test_switching_back_rearms_pending_flush(self, context):
        context.register("a")
        context.set_language("ru")
        context._flush_timer.stop()

        context.set_language("he")
        assert context._flush_timer.isActive()


class TestRegistrationArmsFlush:
    """The settle timer is the deferred trigger for dispatch."""

    def test_new_registration_starts_timer(self, context):
        assert not context._flush_timer.isActive()
        context.register("a")
        assert context._flush_timer.isActive()

    def test_known_string_does_not_start_timer(self, context):
        context.store.set("he", "a", "A")
        context.register("a")
        assert not context._flush_timer.isActive()

    def test_flush_delay_from_settings(self, context):
        assert context._flush_timer.interval() == 50


class TestPersistentCacheIntegration:
    """The shared cache answers before the provider is asked."""

    def test_second_session_pays_nothing(self, gateway, provider, settings_manager, sync_pool):
        first = LanguageContext(BatchDispatcher(gateway, provider), settings_manager, thread_pool=sync_pool)
        first.register("Save")
        first.render_pass_settled()
        first.close()

        second = LanguageContext(BatchDispatcher(gateway, provider), settings_manager, thread_pool=sync_pool)
        second.register("Save")
        second.render_pass_settled()

        assert provider.calls == [(["Save"], "he")]
        assert second.lookup("Save") == "he:Save"
        second.close()


class TestClose:
    """Session end and misuse."""

    def test_close_clears_state(self, context):
        context.register("a")
        context.render_pass_settled()
        context.register("b")
        context.close()

        assert context.is_closed
        assert context.store.size() == 0
        assert not context.tracker.has_pending("he")

    def test_use_after_close_raises(self, context):
        context.close()
        with pytest.raises(TranslationContextError):
            context.register("a")
        with pytest.raises(TranslationContextError):
            context.lookup("a")

    def test_late_result_after_close_is_ignored(self, dispatcher, settings_manager, held_pool):
        ctx = LanguageContext(dispatcher, settings_manager, thread_pool=held_pool)
        ctx.register("a")
        ctx.render_pass_settled()
        ctx.close()

        held_pool.run_held()

        assert ctx.store.size() == 0

    def test_handle_result_applies_outcome(self, context):
        outcome = DispatchOutcome(language="he", requested=["a"], translated={"a": "A"})
        context._in_flight.add("he")
        context._handle_dispatch_result(outcome, "he")
        assert context.lookup("a") == "A"
        assert not context.is_dispatching("he")


class TestInstalledContext:
    """Module-level context used by widgets and tr()."""

    @pytest.fixture(autouse=True)
    def reset_installed(self):
        install_context(None)
        yield
        install_context(None)

    def test_missing_context_fails_loudly(self):
        with pytest.raises(TranslationContextError):
            current_context()
        with pytest.raises(TranslationContextError):
            tr("Save")

    def test_tr_registers_and_looks_up(self, context):
        install_context(context)
        assert current_context() is context
        assert tr("Save") == "Save"
        context.render_pass_settled()
        assert tr("Save") == "he:Save"
