"""Holder for the currently loaded save."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
import logging
import threading

from jominisave.archive import (
    ArchiveOptions,
    SaveArchive,
    edited_filename,
    extract_text,
    load_archive,
    rebuild_text,
)
from jominisave.diagnostics import STATE_NO_SAVE, Diagnostic, has_errors, make_diagnostic
from jominisave.patch import (
    FieldPatch,
    PatchResult,
    TypedValue,
    ValueKind,
    apply_field_patches,
    apply_typed_patch,
    coerce_literal,
)
from jominisave.query import PathLike, describe_path, format_path
from jominisave.state.summary import SaveSummary, summarize
from jominisave.tree import ParsedDocument, ParserOptions, parse_document

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SaveState:
    """One fully validated save: archive model, its current bytes, and overview fields."""

    archive: SaveArchive
    data: bytes = field(repr=False)
    summary: SaveSummary

    @property
    def filename(self) -> str:
        return self.archive.filename


@dataclass(frozen=True, slots=True)
class StateResult:
    state: SaveState | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    @property
    def ok(self) -> bool:
        return self.state is not None and not self.has_errors


@dataclass(frozen=True, slots=True)
class ExportResult:
    data: bytes | None
    filename: str | None
    download_name: str | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.data is not None and not has_errors(self.diagnostics)


class SaveStateStore:
    """Explicit owner of the current save.

    Uploads and patches are serialized under one lock and only ever swap in a state that was
    completely built and validated; a failure leaves the previous state in place. Readers get
    the immutable state object (and its immutable `bytes`), never a buffer that a later
    mutation could change underneath them.
    """

    def __init__(
        self,
        archive_options: ArchiveOptions | None = None,
        parser_options: ParserOptions | None = None,
    ) -> None:
        self._archive_options = archive_options or ArchiveOptions()
        self._parser_options = parser_options or ParserOptions()
        self._lock = threading.Lock()
        self._state: SaveState | None = None

    def load(self, data: bytes, filename: str) -> StateResult:
        """Validate an uploaded archive and make it the current save."""
        built = self._build_state(bytes(data), filename)
        if built.state is None:
            log.warning("Upload %r rejected; keeping previous save", filename)
            return built
        with self._lock:
            self._state = built.state
        log.info(
            "Loaded %r: %d bytes, %d planets",
            filename,
            len(built.state.data),
            built.state.summary.num_planets,
        )
        return built

    def get(self) -> SaveState | None:
        with self._lock:
            return self._state

    def replace(self, state: SaveState) -> None:
        with self._lock:
            self._state = state

    def clear(self) -> None:
        with self._lock:
            self._state = None

    def has_save(self) -> bool:
        return self.get() is not None

    def summary(self) -> SaveSummary | None:
        state = self.get()
        return state.summary if state is not None else None

    def apply_field_patch(
        self,
        path: PathLike,
        value: TypedValue,
        kind: ValueKind = ValueKind.RAW,
    ) -> StateResult:
        """Patch one field of the current gamestate and swap in the rebuilt archive."""
        return self._mutate(
            lambda document: apply_typed_patch(document, path, value, kind),
            description=f"{describe_path(path)}={value!r}",
        )

    def apply_field_patches(self, patches: Sequence[FieldPatch]) -> StateResult:
        """Apply literal patches against a single parse; all or nothing."""
        return self._mutate(
            lambda document: _apply_literal_patches(document, patches),
            description=f"{len(patches)} patches",
        )

    def update_planet_size(self, planet_id: str, size: int) -> StateResult:
        state = self.get()
        planet = state.summary.planet(planet_id) if state is not None else None
        path = planet.path if planet is not None else ("planets", planet_id)
        return self.apply_field_patch((*path, "planet_size"), size, ValueKind.INT)

    def export(self) -> ExportResult:
        """Current archive bytes plus the `<name>_edited<ext>` download name."""
        state = self.get()
        if state is None:
            return ExportResult(
                data=None,
                filename=None,
                download_name=None,
                diagnostics=[make_diagnostic(STATE_NO_SAVE)],
            )
        download_name = edited_filename(state.filename, self._archive_options.edited_suffix)
        log.info("Exporting %r as %r (%d bytes)", state.filename, download_name, len(state.data))
        return ExportResult(data=state.data, filename=state.filename, download_name=download_name)

    def _mutate(self, patch: Callable[[ParsedDocument], PatchResult], *, description: str) -> StateResult:
        with self._lock:
            state = self._state
            if state is None:
                return StateResult(state=None, diagnostics=[make_diagnostic(STATE_NO_SAVE)])

            text = extract_text(state.archive, self._archive_options)
            if text.text is None:
                return StateResult(state=state, diagnostics=text.diagnostics)

            result = patch(parse_document(text.text, self._parser_options))
            if result.has_errors:
                log.warning("Patch %s rejected: %s", description, "; ".join(d.message for d in result.diagnostics))
                return StateResult(state=state, diagnostics=result.diagnostics)

            patched = parse_document(result.text, self._parser_options)
            if patched.has_errors:
                log.warning("Patch %s rejected: patched gamestate no longer parses", description)
                return StateResult(state=state, diagnostics=patched.diagnostics)

            updated = self._state_from_document(state.archive, patched)
            self._state = updated
        log.info("Applied %s to %r", description, state.filename)
        return StateResult(state=updated)

    def _build_state(self, data: bytes, filename: str) -> StateResult:
        loaded = load_archive(data, filename, self._archive_options)
        if loaded.archive is None:
            return StateResult(state=None, diagnostics=loaded.diagnostics)

        text = extract_text(loaded.archive, self._archive_options)
        if text.text is None:
            return StateResult(state=None, diagnostics=text.diagnostics)

        document = parse_document(text.text, self._parser_options)
        if document.has_errors:
            return StateResult(state=None, diagnostics=document.diagnostics)

        return StateResult(
            state=SaveState(archive=loaded.archive, data=data, summary=summarize(document)),
            diagnostics=document.diagnostics,
        )

    def _state_from_document(self, archive: SaveArchive, document: ParsedDocument) -> SaveState:
        text = document.source_text
        updated_archive = archive.with_entry_data(archive.gamestate_name, text.encode(self._archive_options.encoding))
        return SaveState(
            archive=updated_archive,
            data=rebuild_text(archive, text, self._archive_options),
            summary=summarize(document),
        )


def _apply_literal_patches(document: ParsedDocument, patches: Sequence[FieldPatch]) -> PatchResult:
    """Batch patch where every literal must be one scalar token, as `ValueKind.RAW` requires."""
    diagnostics: list[Diagnostic] = []
    for patch in patches:
        coerced = coerce_literal(patch.value, ValueKind.RAW)
        diagnostics.extend(
            replace(d, message=f"{d.message} (at `{format_path(patch.path)}`)", path=patch.path)
            for d in coerced.diagnostics
        )
    if diagnostics:
        return PatchResult(text=document.source_text, diagnostics=diagnostics)
    return apply_field_patches(document, patches)


__all__ = ["ExportResult", "SaveState", "SaveStateStore", "StateResult"]
