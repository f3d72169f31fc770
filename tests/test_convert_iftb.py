import pytest

from iftkit.convert_iftb import (
    EncoderConfig,
    convert_iftb,
    create_config,
    load_chunk_set,
    load_gid_map,
    next_token,
)

SAMPLE_INPUT = (
    "version: 1\n"
    "gidMap: 0:0, 1:1, 2:1, 3:1, 4:2, 5:0, 6:2\n"
    "chunkSet indexes: 0\n"
    "other field: ignored\n"
)

EXPECTED_CONFIG = (
    "glyph_segments {\n"
    "  key: 0\n"
    "  value {\n"
    "    values: 0\n"
    "    values: 5\n"
    "  }\n"
    "}\n"
    "glyph_segments {\n"
    "  key: 1\n"
    "  value {\n"
    "    values: 1\n"
    "    values: 2\n"
    "    values: 3\n"
    "  }\n"
    "}\n"
    "glyph_segments {\n"
    "  key: 2\n"
    "  value {\n"
    "    values: 4\n"
    "    values: 6\n"
    "  }\n"
    "}\n"
    "initial_glyph_patches {\n"
    "  values: 0\n"
    "}\n"
    "glyph_patch_groupings {\n"
    "  values: 1\n"
    "  values: 2\n"
    "}\n"
)


def test_basic_conversion():
    config = convert_iftb(SAMPLE_INPUT)
    assert config.to_text() == EXPECTED_CONFIG


def test_basic_conversion_structure():
    config = convert_iftb(SAMPLE_INPUT)
    assert config.glyph_segments == {0: [0, 5], 1: [1, 2, 3], 2: [4, 6]}
    assert config.initial_glyph_patches == [0]
    assert config.glyph_patch_groupings == [[1, 2]]


def test_conversion_logs_field_names(capsys):
    convert_iftb(SAMPLE_INPUT)
    err = capsys.readouterr().err
    assert ">> gidMap" in err
    assert ">> chunkSet indexes" in err


@pytest.mark.parametrize(
    "line, delim, expected",
    [
        ("", ", ", ("", "")),
        ("abc", ", ", ("abc", "")),
        ("a, b, c", ", ", ("a", "b, c")),
        ("gidMap: 1:2", ": ", ("gidMap", "1:2")),
        ("a, ", ", ", ("a", "")),
    ],
)
def test_next_token(line, delim, expected):
    assert next_token(line, delim) == expected


def test_load_chunk_set():
    assert load_chunk_set("3, 1, 2, 1") == {1, 2, 3}
    assert load_chunk_set("") == set()


def test_load_gid_map():
    assert load_gid_map("0:0, 7:3, 2:1") == {0: 0, 7: 3, 2: 1}


def test_load_gid_map_later_entry_wins():
    assert load_gid_map("4:1, 4:2") == {4: 2}


def test_load_gid_map_invalid():
    with pytest.raises(ValueError):
        load_gid_map("x:1")
    with pytest.raises(ValueError):
        load_gid_map("5")


def test_load_chunk_set_invalid():
    with pytest.raises(ValueError):
        load_chunk_set("a, b")


def test_create_config_without_loaded_chunks():
    config = create_config({0: 2, 1: 1}, set())
    assert config.initial_glyph_patches is None
    assert config.glyph_patch_groupings == [[1, 2]]
    assert "initial_glyph_patches" not in config.to_text()


def test_create_config_all_loaded_has_empty_grouping():
    config = create_config({0: 0, 1: 0}, {0})
    assert config.glyph_patch_groupings == [[]]
    assert config.to_text().endswith("glyph_patch_groupings {\n}\n")


def test_empty_dump():
    config = convert_iftb("")
    assert config.glyph_segments == {}
    assert config.to_text() == "glyph_patch_groupings {\n}\n"


def test_to_text_orders_segments_by_key():
    config = EncoderConfig(glyph_segments={5: [1], 2: [3]})
    text = config.to_text()
    assert text.index("key: 2") < text.index("key: 5")