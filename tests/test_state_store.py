import io
import threading
import zipfile

import pytest

from jominisave.archive import ArchiveOptions
from jominisave.diagnostics import (
    ARCHIVE_FORMAT,
    PARSER_UNTERMINATED_BLOCK,
    PATCH_TYPE_COERCION,
    QUERY_INVALID_PATH,
    QUERY_PATH_NOT_FOUND,
    STATE_NO_SAVE,
)
from jominisave.patch import FieldPatch, ValueKind, apply_field_patches
from jominisave.state import SaveStateStore
from jominisave.state import store as store_module
from tests._shared_cases import STELLARIS_LIKE

META = b'version="Corvus v3.14.1"\nname="United Nations of Earth"\n'


def _make_save(gamestate: str = STELLARIS_LIKE) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("meta", META)
        zf.writestr("gamestate", gamestate.encode("utf-8"))
    return buffer.getvalue()


def _entries(data: bytes) -> dict[str, bytes]:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


def _loaded_store() -> SaveStateStore:
    store = SaveStateStore()
    assert store.load(_make_save(), "2230.04.17.sav").ok
    return store


def test_load_makes_save_current() -> None:
    store = SaveStateStore()
    data = _make_save()

    result = store.load(data, "2230.04.17.sav")

    assert result.ok
    assert store.has_save()
    state = store.get()
    assert state is result.state
    assert state.filename == "2230.04.17.sav"
    assert state.data == data
    assert store.summary().empire_name == "United Nations of Earth"
    assert store.summary().num_planets == 2


def test_rejected_load_keeps_previous_save() -> None:
    store = _loaded_store()
    previous = store.get()

    result = store.load(b"garbage", "other.sav")

    assert not result.ok
    assert result.state is None
    assert [d.code for d in result.diagnostics] == [ARCHIVE_FORMAT.code]
    assert store.get() is previous


def test_load_rejects_gamestate_with_parse_errors() -> None:
    store = SaveStateStore()

    result = store.load(_make_save("planets={ 1={ planet_size=3 }"), "truncated.sav")

    assert result.state is None
    assert PARSER_UNTERMINATED_BLOCK.code in [d.code for d in result.diagnostics]
    assert not store.has_save()


def test_operations_without_save() -> None:
    store = SaveStateStore()

    exported = store.export()
    assert not exported.ok
    assert exported.data is None
    assert [d.code for d in exported.diagnostics] == [STATE_NO_SAVE.code]

    patched = store.apply_field_patch("date", "2231.01.01")
    assert patched.state is None
    assert [d.code for d in patched.diagnostics] == [STATE_NO_SAVE.code]
    assert store.summary() is None


def test_update_planet_size_and_export() -> None:
    store = _loaded_store()

    result = store.update_planet_size("2", 25)

    assert result.ok
    assert store.summary().planet("2").size == 25
    assert store.summary().planet("1").size == 30

    exported = store.export()
    assert exported.ok
    assert exported.filename == "2230.04.17.sav"
    assert exported.download_name == "2230.04.17_edited.sav"
    entries = _entries(exported.data)
    assert list(entries) == ["meta", "gamestate"]
    assert entries["meta"] == META
    assert entries["gamestate"].decode("utf-8") == STELLARIS_LIKE.replace("planet_size=16", "planet_size=25")


def test_update_unknown_planet_keeps_state() -> None:
    store = _loaded_store()
    previous = store.get()

    result = store.update_planet_size("9", 25)

    assert result.state is previous
    assert [d.code for d in result.diagnostics] == [QUERY_PATH_NOT_FOUND.code]
    assert store.get() is previous


def test_typed_patch_through_store() -> None:
    store = _loaded_store()

    result = store.apply_field_patch("date", (2231, 1, 1), ValueKind.DATE)

    assert result.ok
    assert store.summary().game_date == "2231.01.01"


def test_bad_typed_value_keeps_state() -> None:
    store = _loaded_store()
    previous = store.get()

    result = store.apply_field_patch("planets.planet.1.planet_size", "huge", ValueKind.INT)

    assert [d.code for d in result.diagnostics] == [PATCH_TYPE_COERCION.code]
    assert store.get() is previous


def test_batch_patch_through_store() -> None:
    store = _loaded_store()

    result = store.apply_field_patches(
        [
            FieldPatch.of("ironman", "yes"),
            FieldPatch.of("empire.name.key", '"Terran Hegemony"'),
        ]
    )

    assert result.ok
    summary = store.summary()
    assert summary.is_ironman is True
    assert summary.empire_name == "Terran Hegemony"


def test_exported_bytes_are_a_snapshot() -> None:
    store = _loaded_store()
    first = store.export().data

    store.update_planet_size("1", 12)
    second = store.export().data

    assert first != second
    assert "planet_size=30" in _entries(first)["gamestate"].decode("utf-8")
    assert "planet_size=12" in _entries(second)["gamestate"].decode("utf-8")


def test_custom_edited_suffix() -> None:
    store = SaveStateStore(archive_options=ArchiveOptions(edited_suffix="_patched"))
    store.load(_make_save(), "ironman.sav")

    assert store.export().download_name == "ironman_patched.sav"


def test_clear_and_replace() -> None:
    store = _loaded_store()
    state = store.get()

    store.clear()
    assert not store.has_save()

    store.replace(state)
    assert store.get() is state


def test_concurrent_patches_are_serialized() -> None:
    store = _loaded_store()
    sizes = list(range(10, 26))

    threads = [threading.Thread(target=store.update_planet_size, args=("2", size)) for size in sizes]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    final = store.summary().planet("2").size
    assert final in sizes
    gamestate = _entries(store.export().data)["gamestate"].decode("utf-8")
    assert gamestate == STELLARIS_LIKE.replace("planet_size=16", f"planet_size={final}")


@pytest.mark.parametrize("literal", ["{", "}", "", "a b", '"open'])
def test_batch_literal_that_is_not_one_scalar_is_rejected(literal: str) -> None:
    store = _loaded_store()
    previous = store.get()

    result = store.apply_field_patches([FieldPatch.of("planets.planet.1.planet_size", literal)])

    assert result.state is previous
    [diagnostic] = result.diagnostics
    assert diagnostic.code == PATCH_TYPE_COERCION.code
    assert diagnostic.path == ("planets", "planet", "1", "planet_size")
    assert store.get() is previous


def test_patch_that_breaks_the_gamestate_is_not_swapped_in(monkeypatch: pytest.MonkeyPatch) -> None:
    # Skip literal validation so the splice itself produces unbalanced braces.
    monkeypatch.setattr(store_module, "_apply_literal_patches", apply_field_patches)
    store = _loaded_store()
    previous = store.get()

    result = store.apply_field_patches([FieldPatch.of("planets.planet.1.planet_size", "{")])

    assert result.state is previous
    assert PARSER_UNTERMINATED_BLOCK.code in [d.code for d in result.diagnostics]
    assert store.get() is previous
    assert store.apply_field_patch("ironman", "yes").ok


def test_string_with_trailing_backslash_keeps_state() -> None:
    store = _loaded_store()
    previous = store.get()

    result = store.apply_field_patch("empire.name.key", "C:\\", ValueKind.STRING)

    assert [d.code for d in result.diagnostics] == [PATCH_TYPE_COERCION.code]
    assert store.get() is previous


@pytest.mark.parametrize("path", ["planets..planet_size", "", "date/"])
def test_malformed_path_is_a_diagnostic(path: str) -> None:
    store = _loaded_store()
    previous = store.get()

    result = store.apply_field_patch(path, "20")

    assert result.state is previous
    [diagnostic] = result.diagnostics
    assert diagnostic.code == QUERY_INVALID_PATH.code
    assert repr(path) in diagnostic.message


def test_update_planet_size_with_empty_id() -> None:
    store = _loaded_store()

    result = store.update_planet_size("", 25)

    assert [d.code for d in result.diagnostics] == [QUERY_INVALID_PATH.code]
