"""
Editor-facing lint service.

Keeps the latest diagnostics of every open document and decides when to
re-lint: immediately on open and save, and after a quiet period following
edits. Each document has at most one pending re-lint; a new edit replaces
it.
"""

# Group 1: External direct imports (alphabetical)
import logging
import threading

# Group 2: External from imports (alphabetical by source module)
from collections.abc import Iterator

# Group 4: Internal from imports (alphabetical by source module)
from cbslint.core.types import Diagnostic
from cbslint.linter import CbsLinter

logger = logging.getLogger(__name__)


class DiagnosticCollection:
    """Latest diagnostics per document identity.

    Every ``set`` replaces the previous diagnostics of that document as a
    whole.
    """

    def __init__(self):
        self._entries: dict[str, list[Diagnostic]] = {}
        self._lock = threading.Lock()

    def set(self, document_id: str, diagnostics: list[Diagnostic]) -> None:
        with self._lock:
            self._entries[document_id] = list(diagnostics)

    def get(self, document_id: str) -> list[Diagnostic]:
        with self._lock:
            return list(self._entries.get(document_id, []))

    def delete(self, document_id: str) -> None:
        with self._lock:
            self._entries.pop(document_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, document_id: object) -> bool:
        with self._lock:
            return document_id in self._entries

    def __iter__(self) -> Iterator[tuple[str, list[Diagnostic]]]:
        with self._lock:
            snapshot = [(key, list(value)) for key, value in self._entries.items()]
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class LintScheduler:
    """Triggers lint passes in response to document lifecycle events.

    Every event that makes earlier results obsolete (an edit, a save, an
    immediate lint, closing the document) bumps the document's generation.
    A pass only publishes when the generation it started under is still
    current, so a slow pass never overwrites newer diagnostics or revives a
    closed document.

    Params:
        linter: Linter used for every pass
        collection: Where results are published
        delay: Seconds of inactivity after an edit before re-linting;
            defaults to the linter's ``config.debounce_delay``
    """

    def __init__(
        self,
        linter: CbsLinter | None = None,
        collection: DiagnosticCollection | None = None,
        delay: float | None = None,
    ):
        self.linter = linter or CbsLinter()
        self.collection = collection if collection is not None else DiagnosticCollection()
        self.delay = self.linter.config.debounce_delay if delay is None else delay
        self._pending: dict[str, tuple[threading.Timer, str]] = {}
        self._generations: dict[str, int] = {}
        self._lock = threading.Lock()

    def lint_now(self, document_id: str, text: str) -> list[Diagnostic]:
        """
        Lint a document immediately and publish the result.

        Params:
            document_id: Identity of the document, e.g. its URI
            text: Current document text

        Returns:
            The diagnostics of `text`, also when a newer event superseded
            them before they could be published
        """
        generation = self._cancel(document_id)
        diagnostics = self.linter.lint(text)
        self._publish(document_id, generation, diagnostics)
        return diagnostics

    def document_opened(self, document_id: str, text: str) -> list[Diagnostic]:
        return self.lint_now(document_id, text)

    def document_saved(self, document_id: str, text: str) -> list[Diagnostic]:
        return self.lint_now(document_id, text)

    def document_changed(self, document_id: str, text: str) -> None:
        """
        Schedule a re-lint after the debounce delay.

        Any re-lint already pending for the document is cancelled.

        Params:
            document_id: Identity of the edited document
            text: Document text after the edit
        """
        timer = threading.Timer(self.delay, self._run_pending)
        timer.args = (document_id, timer)
        timer.daemon = True
        with self._lock:
            previous = self._pending.get(document_id)
            if previous is not None:
                previous[0].cancel()
            self._bump(document_id)
            self._pending[document_id] = (timer, text)
        timer.start()

    def document_closed(self, document_id: str) -> None:
        """Drop pending work and published diagnostics of a closed document."""
        self._cancel(document_id)
        self.collection.delete(document_id)

    def pending(self) -> list[str]:
        """Identities of documents with a re-lint scheduled."""
        with self._lock:
            return list(self._pending)

    def flush(self) -> None:
        """Run every pending re-lint now instead of waiting for its timer."""
        for document_id in self.pending():
            self._run_pending(document_id)

    def dispose(self) -> None:
        """Cancel all pending re-lints and discard passes still running."""
        with self._lock:
            pending = list(self._pending.values())
            self._pending.clear()
            for document_id in list(self._generations):
                self._bump(document_id)
        for timer, _ in pending:
            timer.cancel()

    def _bump(self, document_id: str) -> int:
        # Caller holds self._lock
        generation = self._generations.get(document_id, 0) + 1
        self._generations[document_id] = generation
        return generation

    def _cancel(self, document_id: str) -> int:
        """Cancel the pending re-lint and return the new generation."""
        with self._lock:
            entry = self._pending.pop(document_id, None)
            generation = self._bump(document_id)
        if entry is not None:
            entry[0].cancel()
        return generation

    def _publish(
        self, document_id: str, generation: int, diagnostics: list[Diagnostic]
    ) -> None:
        with self._lock:
            if self._generations.get(document_id) != generation:
                logger.debug("Discarding superseded lint result for %s", document_id)
                return
            self.collection.set(document_id, diagnostics)

    def _run_pending(
        self, document_id: str, expected: threading.Timer | None = None
    ) -> None:
        with self._lock:
            entry = self._pending.get(document_id)
            # A superseded timer that fired before it could be cancelled
            if entry is None or (expected is not None and entry[0] is not expected):
                return
            del self._pending[document_id]
            generation = self._generations[document_id]
        timer, text = entry
        timer.cancel()
        logger.debug("Re-linting %s after edits", document_id)
        self._publish(document_id, generation, self.linter.lint(text))
