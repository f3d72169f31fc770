"""Command that turns an IFTB info dump on stdin into an encoder config on stdout."""

from __future__ import annotations

import argparse
import sys

from iftkit.convert_iftb import convert_iftb

__all__ = ["main"]


def main(argv: list[str] | None = None) -> int:
    """Read an IFTB info dump from stdin and print the encoder config."""
    parser = argparse.ArgumentParser(
        prog="iftb2config",
        description="Convert an IFTB info dump (stdin) into an encoder config (stdout).",
    )
    parser.parse_args(argv)

    dump = sys.stdin.read()
    try:
        config = convert_iftb(dump)
    except ValueError as exc:
        print(f"Failure parsing iftb info dump: {exc}", file=sys.stderr)
        return -1

    print(config.to_text())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())