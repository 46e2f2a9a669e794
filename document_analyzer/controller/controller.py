"""Finite-state controller that owns the current document and its analysis."""

import threading
from collections.abc import Callable

from document_analyzer.cancellation import CancellationToken
from document_analyzer.config.settings import Settings
from document_analyzer.controller.states import Error, Initial, PipelineState, Processing, Ready
from document_analyzer.exceptions import FileValidationError, PipelineCancelledError
from document_analyzer.logging.logger import Log
from document_analyzer.processor.error_mapper import (
    UNKNOWN_ERROR_MESSAGE,
    ErrorInfo,
    map_error,
)
from document_analyzer.processor.models import DocumentFile, OwnerReference
from document_analyzer.processor.pipeline import PipelineAction, PipelineContext
from document_analyzer.processor.processor import Processor
from document_analyzer.processor.validator import validate_file

INVALID_FILE_TITLE = "Invalid File"
ERROR_TITLES: dict[PipelineAction, str] = {
    PipelineAction.ANALYZE: "Processing Error",
    PipelineAction.REGENERATE: "Regeneration Error",
    PipelineAction.TRANSLATE: "Translation Error",
    PipelineAction.EXPAND: "Expansion Error",
}


class DocumentAnalyzerController:
    """Sequences one document through the pipeline and tracks the result.

    States: Initial -> Processing -> Ready | Error, Ready -> Processing for
    transforms, Ready | Error -> Initial on reset. A trigger that does not
    apply to the current state, including any trigger while Processing, is
    ignored and the current state is returned. Runs execute on the calling
    thread; `cancel()` may be called from another thread.
    """

    def __init__(
        self,
        processor: Processor,
        settings: Settings,
        *,
        owner: OwnerReference | None = None,
        on_output_changed: Callable[[str], None] | None = None,
    ) -> None:
        self._processor = processor
        self._settings = settings
        self._owner = owner
        self._on_output_changed = on_output_changed
        self._lock = threading.Lock()
        self._state: PipelineState = Initial()
        self._cancel_token: CancellationToken | None = None
        self._document_summary = ""

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def document_summary(self) -> str:
        """Last published output; kept after reset until a new run succeeds."""
        return self._document_summary

    def get_outputs(self) -> dict[str, str]:
        return {"documentSummary": self._document_summary}

    def submit_file(self, file: DocumentFile) -> PipelineState:
        with self._lock:
            if not isinstance(self._state, Initial):
                return self._ignore("submit_file")
            validation = validate_file(file, self._settings)
            if not validation.is_valid:
                Log.warning(f"Rejected {file.name}: {validation.reason}")
                rejection = FileValidationError(validation.reason or UNKNOWN_ERROR_MESSAGE)
                self._state = Error(map_error(rejection, INVALID_FILE_TITLE))
                return self._state
            context = self._begin(PipelineAction.ANALYZE, file)
        return self._run(context)

    def regenerate(self) -> PipelineState:
        with self._lock:
            ready = self._state
            if not isinstance(ready, Ready):
                return self._ignore("regenerate")
            context = self._begin(PipelineAction.REGENERATE, ready.file)
            context.current_analysis = ready.analysis
        return self._run(context)

    def translate(self, language: str) -> PipelineState:
        language = (language or "").strip()
        with self._lock:
            ready = self._state
            if not isinstance(ready, Ready):
                return self._ignore("translate")
            if not language:
                Log.warning("Ignoring translate with an empty target language")
                return self._state
            context = self._begin(PipelineAction.TRANSLATE, ready.file)
            context.current_analysis = ready.analysis
            context.target_language = language
        return self._run(context)

    def expand(self) -> PipelineState:
        with self._lock:
            ready = self._state
            if not isinstance(ready, Ready):
                return self._ignore("expand")
            context = self._begin(PipelineAction.EXPAND, ready.file)
            context.current_analysis = ready.analysis
        return self._run(context)

    def reset(self) -> PipelineState:
        """Back to Initial from Ready or Error, dropping the file and analysis."""
        with self._lock:
            if not isinstance(self._state, (Ready, Error)):
                return self._ignore("reset")
            self._state = Initial()
            Log.info("Controller reset to initial state")
            return self._state

    def cancel(self) -> bool:
        """Abort the in-flight run at its next suspension point.

        Returns True if a run was signalled.
        """
        with self._lock:
            if not isinstance(self._state, Processing) or self._cancel_token is None:
                return False
            self._cancel_token.cancel()
            Log.info(f"Cancellation requested for {self._state.file_name}")
            return True

    def _begin(self, action: PipelineAction, file: DocumentFile) -> PipelineContext:
        # Caller holds the lock.
        token = CancellationToken()
        self._cancel_token = token
        self._state = Processing(file_name=file.name, action=action)
        Log.info(f"State -> Processing ({action.value} {file.name})")
        return PipelineContext(
            action=action,
            file=file,
            cancel_token=token,
            owner=self._owner,
        )

    def _run(self, context: PipelineContext) -> PipelineState:
        try:
            context = self._processor.process(context)
        except PipelineCancelledError:
            return self._finish(Initial(), context)
        except Exception as exc:
            Log.error(f"{context.action.value} failed for {context.file.name}: {exc}")
            return self._finish(Error(map_error(exc, ERROR_TITLES[context.action])), context)

        if context.analysis is None:
            error = ErrorInfo(
                title=ERROR_TITLES[context.action],
                message=UNKNOWN_ERROR_MESSAGE,
            )
            return self._finish(Error(error), context)

        state = self._finish(
            Ready(analysis=context.analysis, file=context.file, summary=context.summary),
            context,
        )
        if isinstance(state, Ready) and self._on_output_changed is not None:
            self._on_output_changed(state.summary)
        return state

    def _finish(self, state: PipelineState, context: PipelineContext) -> PipelineState:
        with self._lock:
            if context.cancel_token.is_cancelled:
                state = Initial()
            if isinstance(state, Ready):
                self._document_summary = state.summary
            self._state = state
            self._cancel_token = None
        Log.info(f"State -> {type(state).__name__}")
        return state

    def _ignore(self, trigger: str) -> PipelineState:
        # Caller holds the lock.
        Log.warning(f"Ignoring {trigger} in state {type(self._state).__name__}")
        return self._state
