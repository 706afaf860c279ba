"""CLI for handoffnotes - render shift-handoff notes."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.inline_parser import parse_inline
from .core.model import HandoffRecord
from .lint import lint_notes
from .render.html import html_page, render_html
from .render.terminal import render_text
from .runtime import Runtime, build_runtime

FORMATS = ("text", "html", "json")


def _read_source(path: str) -> tuple[str, str]:
    """Return (record id, file contents) for a path, or stdin for ``-``."""
    if path == "-":
        return "stdin", sys.stdin.read()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"File not found: {p}")
    return p.stem, p.read_text(encoding="utf-8-sig")


def _load_record(args: argparse.Namespace, rt: Runtime) -> HandoffRecord:
    rid, raw = _read_source(args.file)
    if getattr(args, "raw", False):
        return HandoffRecord(id=rid, meta={}, notes=raw)
    return rt.store.codec.decode_file(raw, rid)


def _emit(tree: Any, fmt: str, rt: Runtime, page: bool = False, title: str = "Handoff Notes") -> None:
    if fmt == "json":
        print(json.dumps(tree.to_dict(), indent=2, ensure_ascii=False))
    elif fmt == "html":
        fragment = render_html(tree, indent=True)
        print(html_page(fragment, title=title) if page else fragment, end="")
    elif fmt == "text":
        colors = rt.config.ui.colors and sys.stdout.isatty()
        print(render_text(tree, colors=colors), end="")
    else:
        raise ValueError(f"Unknown output format: {fmt}")


def cmd_render(args: argparse.Namespace, rt: Runtime) -> int:
    """Render a notes file or stdin."""
    record = _load_record(args, rt)
    fmt = "json" if args.json else args.format
    _emit(rt.render(record.notes), fmt, rt, page=args.page, title=str(record.meta.get("patient", record.id)))
    return 0


def cmd_blocks(args: argparse.Namespace, rt: Runtime) -> int:
    """Dump the block sequence as JSON."""
    record = _load_record(args, rt)
    print(json.dumps(rt.document(record.notes).to_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_inline(args: argparse.Namespace, rt: Runtime) -> int:
    """Dump the inline nodes of one line as JSON."""
    nodes = parse_inline(args.text)
    print(json.dumps([n.to_dict() for n in nodes], indent=2, ensure_ascii=False))
    return 0


def cmd_lint(args: argparse.Namespace, rt: Runtime) -> int:
    """Report markup that will render as literal text."""
    record = _load_record(args, rt)
    findings = lint_notes(record.notes)

    if args.json:
        print(json.dumps([f.to_dict() for f in findings], indent=2))
    elif not args.quiet:
        for f in findings:
            print(f"{record.id}:{f.line}: [{f.severity}] {f.rule}: {f.message}")
        if not findings:
            print("No findings")
    return 0


def cmd_ls(args: argparse.Namespace, rt: Runtime) -> int:
    """List stored records."""
    ids = list(rt.store.list_ids())
    if args.json:
        print(json.dumps(ids))
        return 0
    for rid in ids:
        record = rt.store.get(rid)
        label = record.meta.get("patient", "") if record else ""
        print(f"{rid}\t{label}" if label else rid)
    return 0


def cmd_show(args: argparse.Namespace, rt: Runtime) -> int:
    """Render a stored record."""
    record = rt.store.get(args.id)
    if record is None:
        print(f"Record {args.id} not found", file=sys.stderr)
        return 1
    fmt = "json" if args.json else args.format
    _emit(rt.render(record.notes), fmt, rt, page=args.page, title=str(record.meta.get("patient", record.id)))
    return 0


def cmd_export_html(args: argparse.Namespace, rt: Runtime) -> int:
    """Render every stored record to HTML files."""
    from .export.html import HtmlExportAdapter

    exporter = HtmlExportAdapter(rt.store, Path(args.out), renderer=rt.renderer)
    index = exporter.export_all()
    if args.json:
        print(json.dumps(index, indent=2))
    elif not args.quiet:
        print(f"Exported {len(index['records'])} records to {args.out}")
    return 0


def cmd_watch(args: argparse.Namespace, rt: Runtime) -> int:
    """Keep an HTML export current while record files change."""
    try:
        from .watch import watch_notes
    except ImportError as e:
        print(
            "Error: watchdog library not installed. Install with: pip install handoffnotes[watch]",
            file=sys.stderr,
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1
    from .export.html import HtmlExportAdapter

    notes_path = rt.store.storage.root
    exporter = HtmlExportAdapter(rt.store, Path(args.out), renderer=rt.renderer)
    return watch_notes(
        notes_path,
        exporter,
        debounce_ms=args.debounce,
        quiet=args.quiet,
        json_output=args.json,
    )


def cmd_serve(args: argparse.Namespace, rt: Runtime) -> int:
    """Start local JSON API server."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(
            "Error: API dependencies not installed. "
            "Install with: pip install handoffnotes[api]",
            file=sys.stderr
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1

    token_arg = args.token
    if token_arg == "auto":
        token: str | None = generate_token()
        print(f"Generated bearer token: {token}")
        print(f"Use in requests: Authorization: Bearer {token}")
    elif token_arg == "none":
        print("Warning: Running without authentication. Only use in trusted environments.")
        token = None
    else:
        token = token_arg

    app = create_app(rt, token=token, enable_cors=args.cors)

    host = args.host or rt.config.api.host
    port = args.port or rt.config.api.port
    print(f"Starting server on http://{host}:{port}")

    uvicorn.run(app, host=host, port=port, log_level="info")
    return 0


class _VersionAction(argparse.Action):
    def __init__(self, option_strings: list[str], dest: str = argparse.SUPPRESS, **kwargs: Any):
        super().__init__(option_strings, dest=dest, nargs=0, default=argparse.SUPPRESS, **kwargs)

    def __call__(self, parser: argparse.ArgumentParser, namespace: argparse.Namespace, values: Any, option_string: str | None = None) -> None:
        print(f"handoffnotes {__version__}")
        print(f"python {platform.python_version()}")
        print(f"platform {platform.platform()}")
        parser.exit()


def _add_output_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--format", choices=FORMATS, default="text",
        help="Output format (default: text)"
    )
    p.add_argument(
        "--page", action="store_true",
        help="With --format html, wrap the fragment in a full HTML page"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="handoff", description="Render shift-handoff notes"
    )
    parser.add_argument("--version", action=_VersionAction, help="Show version information and exit")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/handoff.toml, notes/handoff.toml)",
    )
    parser.add_argument(
        "--notes",
        type=Path,
        default=None,
        help="Path to notes directory (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging to stderr"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # render command
    parser_render = subparsers.add_parser("render", help="Render a notes file (or - for stdin)")
    parser_render.add_argument("file", nargs="?", default="-")
    parser_render.add_argument(
        "--raw", action="store_true",
        help="Do not strip YAML front matter"
    )
    _add_output_args(parser_render)

    # blocks command
    parser_blocks = subparsers.add_parser("blocks", help="Dump parsed blocks as JSON")
    parser_blocks.add_argument("file", nargs="?", default="-")
    parser_blocks.add_argument("--raw", action="store_true", help="Do not strip YAML front matter")

    # inline command
    parser_inline = subparsers.add_parser("inline", help="Dump inline nodes of one line as JSON")
    parser_inline.add_argument("text")

    # lint command
    parser_lint = subparsers.add_parser("lint", help="Report markup that renders literally")
    parser_lint.add_argument("file", nargs="?", default="-")
    parser_lint.add_argument("--raw", action="store_true", help="Do not strip YAML front matter")

    # ls command
    subparsers.add_parser("ls", help="List stored records")

    # show command
    parser_show = subparsers.add_parser("show", help="Render a stored record")
    parser_show.add_argument("id")
    _add_output_args(parser_show)

    # export command
    parser_export = subparsers.add_parser("export", help="Export records")
    export_sub = parser_export.add_subparsers(dest="export_type", required=True)
    parser_export_html = export_sub.add_parser("html", help="Render every record to HTML")
    parser_export_html.add_argument("--out", default="site", help="Output directory (default: site)")

    # watch command
    parser_watch = subparsers.add_parser("watch", help="Re-render records as they change")
    parser_watch.add_argument("--out", default="site", help="Output directory (default: site)")
    parser_watch.add_argument(
        "--debounce", type=int, default=150,
        help="Debounce window in milliseconds (default: 150)"
    )

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument(
        "--host", default=None,
        help="Host to bind to (default: config or 127.0.0.1)"
    )
    parser_serve.add_argument(
        "--port", type=int, default=None,
        help="Port to bind to (default: config or 8765)"
    )
    parser_serve.add_argument(
        "--token", default="auto",
        help="Bearer token (auto|<string>|none, default: auto)"
    )
    parser_serve.add_argument(
        "--cors", action="store_true",
        help="Enable CORS (default: false)"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    rt = build_runtime(
        notes_path=args.notes,
        config_path=args.config,
    )

    handlers = {
        "render": cmd_render,
        "blocks": cmd_blocks,
        "inline": cmd_inline,
        "lint": cmd_lint,
        "ls": cmd_ls,
        "show": cmd_show,
        "export": cmd_export_html,
        "watch": cmd_watch,
        "serve": cmd_serve,
    }
    handler = handlers.get(args.cmd)

    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
