from __future__ import annotations

import argparse
import sys

from rich.console import Console

from hunkview.renderer import DiffRenderer
from hunkview.themes import available_palettes, get_palette
from hunkview.utils.config import Config
from hunkview.utils.io import FileReadResult, safe_read_file
from hunkview.utils.line_pairing import STRATEGIES
from hunkview.utils.logger import log


def _create_argument_parser():
    """Create and configure the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="hunkview",
        description="hunkview: render unified diffs as styled inline or side-by-side text",
    )
    parser.add_argument('path', nargs='?', default='-', help="Diff file to render, or '-' for stdin (default)")
    layout = parser.add_mutually_exclusive_group()
    layout.add_argument('--split', dest='split', action='store_true', default=None, help='Side-by-side view')
    layout.add_argument('--inline', dest='split', action='store_false', help='Unified (inline) view')
    parser.add_argument('--width', type=int, default=None, help='Render width in columns (default: terminal width)')
    parser.add_argument('--theme', type=str, default=None, help=f"Palette name ({', '.join(available_palettes())})")
    parser.add_argument(
        '--new-file',
        action='store_true',
        help='Treat the input as the content of an untracked file rather than a diff',
    )
    parser.add_argument('--filename', type=str, default='', help='Filename hint for syntax highlighting')
    parser.add_argument(
        '--strategy',
        choices=sorted(STRATEGIES),
        default='positional',
        help='How removed and added lines are paired in the split view',
    )
    parser.add_argument('--config', type=str, default=None, help='Path to a JSON config file')
    return parser


def _load_config(args) -> Config:
    """Config file first, then environment, then command-line flags."""
    if args.config:
        config = Config.load_from(args.config).apply_env()
    else:
        config = Config.load()
    if args.theme:
        config.theme = args.theme
    if args.split is not None:
        config.split_diff = args.split
    return config


def _read_input(args) -> FileReadResult:
    """Read the diff or file content from PATH, or stdin for '-'."""
    if args.path == '-':
        return FileReadResult(success=True, content=sys.stdin.read(), encoding=sys.stdin.encoding or "")
    return safe_read_file(args.path)


def _render(args, config: Config, source: FileReadResult, width: int):
    renderer = DiffRenderer(
        palette=get_palette(config.theme),
        tab_width=config.tab_width,
        strategy=args.strategy,
    )
    split = config.split_diff and width >= config.min_split_width
    if config.split_diff and not split:
        log.info(f"Width {width} is below {config.min_split_width}, using inline view")

    if args.new_file:
        filename = args.filename or ('' if args.path == '-' else args.path)
        if source.is_binary:
            text = renderer.render_binary_file(width)
            text.append("\n")
            return text
        if split:
            return renderer.render_new_file_split(source.content, filename, width)
        return renderer.render_new_file(source.content, filename, width)

    return renderer.render_commit_diff(
        source.content,
        width,
        split=split,
        max_lines=config.max_diff_lines,
        filename=args.filename,
    )


def main(argv=None) -> int:
    """Main entry point for the hunkview command."""
    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    config = _load_config(args)
    source = _read_input(args)
    if not source.success:
        sys.stderr.write(f"hunkview: {source.error_message}\n")
        return 1

    console = Console(highlight=False)
    width = args.width if args.width is not None else console.width
    text = _render(args, config, source, max(0, width))
    console.print(text, end="", soft_wrap=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
