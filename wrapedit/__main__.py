"""wrapedit CLI entry point.

Allows running via `python -m wrapedit` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from .metrics import FontLoadError
from .settings import SettingsStore, validate_setting

logger = logging.getLogger(__name__)

# Setting name -> command line option that overrides it
SETTING_OPTIONS = {
    "width": "--width",
    "pref_rows": "--rows",
    "font_name": "--font",
    "font_size": "--font-size",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wrapedit", description="Word-wrapping terminal text editor.")
    parser.add_argument("filename", nargs="?", help="file to edit")
    parser.add_argument("--width", type=int, help="line width in columns")
    parser.add_argument("--rows", type=int, dest="pref_rows", help="visible rows (0 fills the screen)")
    parser.add_argument("--font", dest="font_name", help='"cell" or a reportlab font such as Courier')
    parser.add_argument("--font-size", type=float, dest="font_size", help="font size in points")
    parser.add_argument("--save-settings", action="store_true", help="remember the given options")
    parser.add_argument("--log-file", help="write debug logging to this file")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # A full-screen editor can't log to stderr; log to a file when asked
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    store = SettingsStore()
    settings = store.load()
    overrides = {}
    for key, option in SETTING_OPTIONS.items():
        value = getattr(args, key)
        if value is None:
            continue
        if not validate_setting(key, value):
            print(f"Invalid value for {option}: {value}", file=sys.stderr)
            return 2
        overrides[key] = value
    settings = replace(settings, **overrides)
    logger.debug(f"Starting with {settings}")
    if args.save_settings and not store.save(settings):
        print(f"Could not save settings to {store.settings_file}", file=sys.stderr)

    # Lazy import to keep --help free of terminal setup
    from .editor import Editor
    try:
        editor = Editor(settings)
    except FontLoadError as e:
        print(str(e), file=sys.stderr)
        return 2
    if args.filename:
        editor.load_file(args.filename)
    editor.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
