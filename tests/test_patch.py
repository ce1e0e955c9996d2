import pytest

from jominisave.diagnostics import (
    PARSER_UNTERMINATED_BLOCK,
    PATCH_NOT_A_SCALAR,
    PATCH_OVERLAPPING_TARGETS,
    QUERY_INVALID_PATH,
    QUERY_PATH_NOT_FOUND,
)
from jominisave.patch import FieldPatch, apply_field_patch, apply_field_patches, patch_text
from jominisave.query import resolve
from jominisave.tree import parse_document
from tests._debug import debug_dump_diagnostics
from tests._shared_cases import DUPLICATE_OWNERS, PLANETS_SCENARIO, QUOTED_BRACES, STELLARIS_LIKE

STELLARIS_SCALAR_PATHS = [
    "version",
    "date",
    "ironman",
    "empire.name.key",
    "planets.planet.1.planet_class",
    "planets.planet.1.planet_size",
    "planets.planet.1.coordinate.origin",
    "planets.planet.1.color",
    "planets.planet.2.owner",
    "planets.planet.2.trigger.num_pops",
]


def test_planet_size_scenario() -> None:
    result = patch_text(PLANETS_SCENARIO, "planets.0.planet_size", "20")

    assert result.ok
    assert result.text == PLANETS_SCENARIO.replace("planet_size=16", "planet_size=20")
    reparsed = parse_document(result.text)
    assert resolve(reparsed, "planets.0.planet_size").node.value == "20"


@pytest.mark.parametrize("path", STELLARIS_SCALAR_PATHS)
def test_identity_patch_is_exact(path: str) -> None:
    document = parse_document(STELLARIS_LIKE)
    node = resolve(document, path).node
    assert node is not None

    result = apply_field_patch(document, path, node.value)

    assert result.ok
    assert result.text == STELLARIS_LIKE


@pytest.mark.parametrize("new_value", ["1", "123456789", '"a much longer quoted replacement"'])
@pytest.mark.parametrize("path", STELLARIS_SCALAR_PATHS)
def test_only_the_value_range_changes(path: str, new_value: str) -> None:
    document = parse_document(STELLARIS_LIKE)
    start, end = resolve(document, path).node.value_range.as_tuple()

    result = apply_field_patch(document, path, new_value)

    assert result.text[:start] == STELLARIS_LIKE[:start]
    assert result.text[start : start + len(new_value)] == new_value
    assert result.text[start + len(new_value) :] == STELLARIS_LIKE[end:]
    assert result.ranges[0].as_tuple() == (start, end)


def test_patch_is_idempotent() -> None:
    once = patch_text(STELLARIS_LIKE, "planets.planet.2.planet_size", "25").text
    twice = patch_text(once, "planets.planet.2.planet_size", "25").text

    assert once == twice


def test_patch_keeps_comments_and_unmodelled_text() -> None:
    result = patch_text(STELLARIS_LIKE, "ironman", "yes")

    assert "ironman=yes\n# editor note: left here on purpose\n" in result.text
    assert result.text.replace("ironman=yes", "ironman=no") == STELLARIS_LIKE


def test_patch_first_duplicate_only() -> None:
    result = patch_text(DUPLICATE_OWNERS, "owner", "9")

    assert result.text == "owner=9\nowner=2\nflag={ owner=3 }\n"


def test_patch_quoted_value_next_to_quoted_braces() -> None:
    result = patch_text(QUOTED_BRACES, "section.size", "4")

    assert result.text == QUOTED_BRACES.replace("size=3", "size=4")


def test_patch_keeps_crlf_line_endings() -> None:
    source = "a=1\r\nb={\r\n\tc=\"x\"\r\n}\r\n"
    result = patch_text(source, "b.c", '"yz"')

    assert result.text == "a=1\r\nb={\r\n\tc=\"yz\"\r\n}\r\n"


def test_patch_with_non_ascii_text_round_trips_through_utf8() -> None:
    source = 'name="Ærø Prime"\nsize=1\n'
    result = patch_text(source, "size", "2")

    assert result.text.encode("utf-8") == 'name="Ærø Prime"\nsize=2\n'.encode("utf-8")


def test_patch_block_node_is_not_a_scalar() -> None:
    result = patch_text(PLANETS_SCENARIO, "planets.0", "1")
    debug_dump_diagnostics("not scalar", result.diagnostics)

    assert result.has_errors
    assert result.text == PLANETS_SCENARIO
    [diagnostic] = result.diagnostics
    assert diagnostic.code == PATCH_NOT_A_SCALAR.code
    assert diagnostic.path == ("planets", "0")


def test_patch_missing_path() -> None:
    result = patch_text(PLANETS_SCENARIO, "planets.7.planet_size", "20")

    assert result.text == PLANETS_SCENARIO
    assert [d.code for d in result.diagnostics] == [QUERY_PATH_NOT_FOUND.code]
    assert result.diagnostics[0].path == ("planets", "7")


def test_patch_refused_when_document_has_parse_errors() -> None:
    source = "a={ b=1"
    result = patch_text(source, "a.b", "2")

    assert result.text == source
    assert [d.code for d in result.diagnostics] == [PARSER_UNTERMINATED_BLOCK.code]


def test_patch_allowed_when_document_only_has_warnings() -> None:
    result = patch_text("a=1 }\nb=2", "b", "3")

    assert result.ok
    assert result.text == "a=1 }\nb=3"


def test_batch_patches_apply_against_one_parse() -> None:
    document = parse_document(PLANETS_SCENARIO)
    result = apply_field_patches(
        document,
        [
            FieldPatch.of("planets.0.planet_size", "20"),
            FieldPatch.of("planets.0.name.key", '"New Eden"'),
            FieldPatch.of("planets.0.planet_class", '"pc_arid"'),
        ],
    )

    assert result.ok
    assert result.text == (
        'planets={\n 0={ name={ key="New Eden" } planet_class="pc_arid" planet_size=20 }\n}'
    )
    assert [r.start.value for r in result.ranges] == sorted(r.start.value for r in result.ranges)


def test_batch_is_all_or_nothing() -> None:
    document = parse_document(PLANETS_SCENARIO)
    result = apply_field_patches(
        document,
        [
            FieldPatch.of("planets.0.planet_size", "20"),
            FieldPatch.of("planets.0.moons", "2"),
        ],
    )

    assert result.text == PLANETS_SCENARIO
    assert [d.code for d in result.diagnostics] == [QUERY_PATH_NOT_FOUND.code]


def test_batch_rejects_two_patches_on_one_value() -> None:
    document = parse_document(PLANETS_SCENARIO)
    result = apply_field_patches(
        document,
        [
            FieldPatch.of("planets.0.planet_size", "20"),
            FieldPatch.of("planets/0/planet_size", "21"),
        ],
    )

    assert result.text == PLANETS_SCENARIO
    assert [d.code for d in result.diagnostics] == [PATCH_OVERLAPPING_TARGETS.code]


def test_empty_batch_is_identity() -> None:
    document = parse_document(PLANETS_SCENARIO)
    result = apply_field_patches(document, [])

    assert result.ok
    assert result.text == PLANETS_SCENARIO
    assert result.ranges == ()


def test_empty_literal_is_spliced_verbatim_and_drops_the_value() -> None:
    result = patch_text(PLANETS_SCENARIO, "planets.0.planet_size", "")

    assert result.ok
    assert result.text == PLANETS_SCENARIO.replace("planet_size=16 }", "planet_size= }")
    reparsed = parse_document(result.text)
    planet_size = resolve(reparsed, "planets.0.planet_size").node
    assert planet_size.operator == "="
    assert planet_size.value is None
    assert [d.code for d in patch_text(result.text, "planets.0.planet_size", "16").diagnostics] == [
        PATCH_NOT_A_SCALAR.code
    ]


@pytest.mark.parametrize("path", ["planets..planet_size", "", "planets/"])
def test_malformed_path_is_reported(path: str) -> None:
    result = patch_text(PLANETS_SCENARIO, path, "20")

    assert result.text == PLANETS_SCENARIO
    [diagnostic] = result.diagnostics
    assert diagnostic.code == QUERY_INVALID_PATH.code
    assert repr(path) in diagnostic.message
