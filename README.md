# iftkit

Building blocks for incremental font transfer (IFT): table keyed patches
between two fonts, patch URL templates, and conversion of IFTB info dumps
into encoder configs.

## Install

    pip install iftkit

With the test dependencies:

    pip install "iftkit[test]"

## Modules

### `iftkit.sfnt`

- `build_font(tables)` assembles a minimal font file from a mapping of four
  byte tags (`str` or `bytes`) to table bytes. Tables are written in tag
  order, each padded to four bytes, with checksums in the table directory.
- `read_tables(font)` reads a font file back into a `dict` of tag to table
  bytes.
- `SfntError` (a `ValueError`) is raised for an invalid or duplicate tag, too
  many tables, or font data that is truncated.

### `iftkit.table_keyed_diff`

- `CompatId(value_a, value_b, value_c, value_d)` is a frozen 128-bit
  compatibility id; `to_bytes()` gives its four big-endian uint32 values.
  Components outside the uint32 range raise `ValueError`.
- `TableKeyedDiff(base_compat_id, excluded_tags=(), replaced_tags=())`
  builds an `iftk` patch with `diff(font_base, font_derived)`:
  - tables in `excluded_tags` are left out entirely;
  - tables that are the same in both fonts are left out;
  - a table new in the derived font, or listed in `replaced_tags`, gets the
    replace flag and is diffed against empty data;
  - a table only in the base font gets a removal entry with no data.

  Entries are ordered by tag. A patch with more than 0xFFFF entries raises
  `ValueError`.
- `brotli_diff(base, derived)` is the per table diff: `derived` compressed
  with brotli at quality 11. The stream makes no references into `base`, so
  it decodes to `derived` with or without `base` as a dictionary.

### `iftkit.url_template`

- `expand(template, variables)` expands a URI template (simple, reserved,
  fragment, label, path, path-style parameter, query and query continuation
  expressions, with prefix and explode modifiers). Malformed templates raise
  `ValueError`.
- `patch_to_url(url_template, patch_idx)` encodes a patch index as base32hex
  with leading zero bytes and padding removed, and expands the template with
  `id` set to that string and `d1` to `d4` set to its last, second to last,
  third to last and fourth to last character, or `_` where it is shorter.

### `iftkit.convert_iftb`

- `convert_iftb(iftb_dump)` reads the `gidMap` and `chunkSet indexes` lines
  of an IFTB info dump and returns an `EncoderConfig`. Each field name it
  meets is reported on standard error.
- `EncoderConfig` holds `glyph_segments` (chunk to glyph ids),
  `initial_glyph_patches` (the loaded chunks, or `None`) and
  `glyph_patch_groupings` (one grouping of every chunk not loaded);
  `to_text()` renders it in protobuf text format.
- The helpers `next_token`, `load_chunk_set`, `load_gid_map` and
  `create_config` are available on their own. A value that is not an integer
  raises `ValueError`.

## Examples

    from iftkit.sfnt import build_font
    from iftkit.table_keyed_diff import CompatId, TableKeyedDiff

    before = build_font({"tag1": b"foo", "tag2": b"bar"})
    after = build_font({"tag1": b"fooo", "tag2": b"baar"})
    patch = TableKeyedDiff(CompatId(1, 2, 3, 4)).diff(before, after)

    from iftkit.url_template import patch_to_url

    patch_to_url("//foo.bar/{id}", 123)          # "//foo.bar/FC"
    patch_to_url("//foo.bar{/d1,d2,id}", 478)   # "//foo.bar/0/F/07F0"

## Command line

`iftb2config` reads an IFTB info dump on standard input and writes the
matching encoder config in text format to standard output:

    iftb2config < dump.txt > config.txtpb

It exits with status 0 on success; if the dump holds a value that cannot be
parsed, it reports the failure on standard error and exits with -1.

## What this package does not do

- It does not encode a font into an IFT font: there is no encoder, no font
  subsetting and no command that takes a font and a config and writes the
  base font and its patches.
- It does not apply patches or extend a font on the client side.
- `iftkit.sfnt` handles only the table directory; it does not interpret any
  table's contents.