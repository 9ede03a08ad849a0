"""
Session state machine: upload/paste ➜ extraction ➜ editable résumé.

The whole session is one immutable SessionState. Events go through a FIFO
queue and a pure reducer, reduce(state, event) -> state; subscribers (the UI)
are told about every new state. Only one ingestion can be in flight: each
one is tagged with a token, and a completion carrying a stale token (the user
started over meanwhile) is dropped.
"""

from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Deque, FrozenSet, List, Optional, Union

from .errors import ExportError, ExtractionError
from .exporter import ExportKind, ExportResult
from .generator_rule import TemplateType
from .parser_llm import FileSource, ResumeExtractor, Source, TextSource
from .sample import SAMPLE_RESUME
from .schema_resume import ResumeRecord

logger = logging.getLogger(__name__)

READ_FAILED_MESSAGE = "Error reading file."
EXTRACTION_FAILED_MESSAGE = "Failed to process resume. Please try again."
READING_MESSAGE = "Reading file..."
EXTRACTING_MESSAGE = "AI is analyzing and upgrading your resume..."
EXPORT_FAILED_MESSAGE = {
    ExportKind.PDF: "Failed to generate PDF. Please try again.",
    ExportKind.DOCX: "Failed to generate DOCX. Please try again.",
}


class Stage(str, Enum):
    IDLE = "idle"
    READING = "reading"
    EXTRACTING = "extracting"
    EDITABLE = "editable"
    ERROR = "error"


BUSY_STAGES = (Stage.READING, Stage.EXTRACTING)
ENTRY_STAGES = (Stage.IDLE, Stage.ERROR)


@dataclass(frozen=True)
class SessionState:
    stage: Stage = Stage.IDLE
    record: Optional[ResumeRecord] = None
    message: str = ""
    template: TemplateType = TemplateType.SOFTWARE_ENGINEER
    print_mode: bool = False
    ingestion_token: int = 0
    in_flight: Optional[int] = None
    exports_in_flight: FrozenSet[ExportKind] = field(default_factory=frozenset)
    alert: Optional[str] = None
    generation: int = 0

    @property
    def busy(self) -> bool:
        return self.stage in BUSY_STAGES


# ───────────────────────────────────────── events ──
@dataclass(frozen=True)
class FileSelected:
    name: str
    mime_type: str


@dataclass(frozen=True)
class FileRead:
    token: int


@dataclass(frozen=True)
class FileReadFailed:
    token: int
    reason: str = ""


@dataclass(frozen=True)
class TextSubmitted:
    pass


@dataclass(frozen=True)
class ExtractionSucceeded:
    token: int
    record: ResumeRecord


@dataclass(frozen=True)
class ExtractionFailed:
    token: int
    reason: str = ""


@dataclass(frozen=True)
class SampleLoaded:
    pass


@dataclass(frozen=True)
class StartOver:
    pass


@dataclass(frozen=True)
class RecordEdited:
    record: ResumeRecord
    structural: bool = False


@dataclass(frozen=True)
class TemplateSelected:
    template: TemplateType


@dataclass(frozen=True)
class PrintModeToggled:
    enabled: bool


@dataclass(frozen=True)
class ExportStarted:
    kind: ExportKind


@dataclass(frozen=True)
class ExportFinished:
    kind: ExportKind


@dataclass(frozen=True)
class ExportFailed:
    kind: ExportKind
    message: str


@dataclass(frozen=True)
class AlertDismissed:
    pass


Event = Union[
    FileSelected, FileRead, FileReadFailed, TextSubmitted, ExtractionSucceeded,
    ExtractionFailed, SampleLoaded, StartOver, RecordEdited, TemplateSelected,
    PrintModeToggled, ExportStarted, ExportFinished, ExportFailed, AlertDismissed,
]


# ───────────────────────────────────────── reducer ──
def _begin(state: SessionState, stage: Stage, message: str) -> SessionState:
    token = state.ingestion_token + 1
    return replace(
        state, stage=stage, message=message, record=None, alert=None,
        ingestion_token=token, in_flight=token, exports_in_flight=frozenset(),
    )


def _fail(state: SessionState, message: str) -> SessionState:
    return replace(state, stage=Stage.ERROR, message=message, record=None, in_flight=None)


def reduce(state: SessionState, event: Event) -> SessionState:
    """Pure transition function; events that do not apply return `state`."""
    if isinstance(event, (FileSelected, TextSubmitted, SampleLoaded)):
        if state.stage not in ENTRY_STAGES:
            return state
        if isinstance(event, FileSelected):
            return _begin(state, Stage.READING, READING_MESSAGE)
        if isinstance(event, TextSubmitted):
            return _begin(state, Stage.EXTRACTING, EXTRACTING_MESSAGE)
        return replace(
            state, stage=Stage.EDITABLE, record=SAMPLE_RESUME, message="",
            alert=None, in_flight=None, generation=state.generation + 1,
        )

    if isinstance(event, (FileRead, FileReadFailed, ExtractionSucceeded, ExtractionFailed)):
        if event.token != state.in_flight:
            return state
        if isinstance(event, FileRead) and state.stage is Stage.READING:
            return replace(state, stage=Stage.EXTRACTING, message=EXTRACTING_MESSAGE)
        if isinstance(event, FileReadFailed) and state.stage is Stage.READING:
            return _fail(state, READ_FAILED_MESSAGE)
        if isinstance(event, ExtractionSucceeded) and state.stage is Stage.EXTRACTING:
            return replace(
                state, stage=Stage.EDITABLE, record=event.record, message="",
                in_flight=None, generation=state.generation + 1,
            )
        if isinstance(event, ExtractionFailed) and state.stage is Stage.EXTRACTING:
            return _fail(state, EXTRACTION_FAILED_MESSAGE)
        return state

    if isinstance(event, StartOver):
        return replace(
            state, stage=Stage.IDLE, record=None, message="", alert=None,
            in_flight=None, exports_in_flight=frozenset(),
            generation=state.generation + 1,
        )

    if isinstance(event, RecordEdited):
        # the record is frozen while any export reads it
        if state.stage is not Stage.EDITABLE or state.exports_in_flight:
            return state
        generation = state.generation + 1 if event.structural else state.generation
        return replace(state, record=event.record, generation=generation)

    if isinstance(event, TemplateSelected):
        return replace(state, template=event.template)

    if isinstance(event, PrintModeToggled):
        return replace(state, print_mode=event.enabled)

    if isinstance(event, ExportStarted):
        if state.stage is not Stage.EDITABLE or event.kind in state.exports_in_flight:
            return state
        return replace(state, exports_in_flight=state.exports_in_flight | {event.kind}, alert=None)

    if isinstance(event, (ExportFinished, ExportFailed)):
        state = replace(state, exports_in_flight=state.exports_in_flight - {event.kind})
        if isinstance(event, ExportFailed) and state.stage is Stage.EDITABLE:
            state = replace(state, alert=event.message)
        return state

    if isinstance(event, AlertDismissed):
        return replace(state, alert=None)

    raise TypeError(f"unknown event: {event!r}")


# ───────────────────────────────────────── driver ──
Subscriber = Callable[[SessionState], None]


class IngestionPipeline:
    """Owns the session state and runs the slow steps between events."""

    def __init__(self, extractor: ResumeExtractor, state: Optional[SessionState] = None):
        self.extractor = extractor
        self._state = state or SessionState()
        self._queue: Deque[Event] = deque()
        self._draining = False
        self._subscribers: List[Subscriber] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, fn: Subscriber) -> Callable[[], None]:
        self._subscribers.append(fn)
        return lambda: self._subscribers.remove(fn)

    def dispatch(self, event: Event) -> SessionState:
        """Queue `event` and apply everything pending, in order."""
        self._queue.append(event)
        if self._draining:
            return self._state
        self._draining = True
        try:
            while self._queue:
                new_state = reduce(self._state, self._queue.popleft())
                if new_state is not self._state:
                    self._state = new_state
                    for fn in list(self._subscribers):
                        fn(new_state)
        finally:
            self._draining = False
        return self._state

    # ── ingestion ──
    def submit_file(
        self,
        read: Callable[[], bytes],
        name: str,
        mime_type: str,
        job_description: str = "",
    ) -> SessionState:
        before = self._state
        self.dispatch(FileSelected(name, mime_type))
        if self._state is before:
            logger.warning("Ignoring upload of %s: an ingestion is already running", name)
            return self._state
        token = self._state.in_flight

        try:
            data = read()
            if not data:
                raise ValueError("file is empty")
        except Exception:
            logger.exception("Could not read uploaded file %s", name)
            return self.dispatch(FileReadFailed(token, "unreadable"))

        self.dispatch(FileRead(token))
        return self._extract(token, FileSource(data, mime_type, name), job_description)

    def submit_text(self, text: str, job_description: str = "") -> SessionState:
        before = self._state
        self.dispatch(TextSubmitted())
        if self._state is before:
            logger.warning("Ignoring pasted text: an ingestion is already running")
            return self._state
        return self._extract(self._state.in_flight, TextSource(text), job_description)

    def _extract(self, token: int, source: Source, job_description: str) -> SessionState:
        try:
            record = self.extractor.extract(source, job_description)
        except ExtractionError:
            logger.exception("Résumé extraction failed")
            return self.dispatch(ExtractionFailed(token, "extraction"))
        except Exception:
            logger.exception("Unexpected error during résumé extraction")
            return self.dispatch(ExtractionFailed(token, "unexpected"))
        return self.dispatch(ExtractionSucceeded(token, record))

    def load_sample(self) -> SessionState:
        return self.dispatch(SampleLoaded())

    def start_over(self) -> SessionState:
        return self.dispatch(StartOver())

    # ── editing ──
    def edit(self, fn: Callable[..., ResumeRecord], *args, structural: bool = False) -> SessionState:
        """Apply an editor function to the current record."""
        if self._state.record is None:
            return self._state
        return self.dispatch(RecordEdited(fn(self._state.record, *args), structural))

    def select_template(self, template: TemplateType) -> SessionState:
        return self.dispatch(TemplateSelected(TemplateType(template)))

    def set_print_mode(self, enabled: bool) -> SessionState:
        return self.dispatch(PrintModeToggled(bool(enabled)))

    def dismiss_alert(self) -> SessionState:
        return self.dispatch(AlertDismissed())

    # ── exports ──
    def run_export(
        self, kind: ExportKind, export: Callable[[ResumeRecord], ExportResult]
    ) -> Optional[ExportResult]:
        """Run one export against a snapshot of the record.

        Returns None when the export could not start (no record, or the same
        kind is already running) or when it failed; failures set `alert`.
        """
        snapshot = self._state.record
        before = self._state
        self.dispatch(ExportStarted(kind))
        if self._state is before or snapshot is None:
            return None

        try:
            result = export(snapshot)
        except ExportError:
            logger.exception("%s export failed", kind.value.upper())
            self.dispatch(ExportFailed(kind, EXPORT_FAILED_MESSAGE[kind]))
            return None
        except Exception:
            logger.exception("Unexpected error during %s export", kind.value.upper())
            self.dispatch(ExportFailed(kind, EXPORT_FAILED_MESSAGE[kind]))
            return None

        self.dispatch(ExportFinished(kind))
        logger.info("Exported %s (%d bytes)", result.filename, len(result.data))
        return result
