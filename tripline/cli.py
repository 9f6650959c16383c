"""tripline CLI 入口：从请求文件生成行程时间线"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from tripline.config.settings import resolve_settings
from tripline.domain.exceptions import DomainError
from tripline.services.export_formatter import export_timeline_xml, render_timeline_markdown
from tripline.services.request_loader import load_trip_request
from tripline.services.timeline_service import TimelineResult, execute_timeline
from tripline.shared.exceptions import ToolError

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def _render(result: TimelineResult, fmt: str) -> str:
    if fmt == "markdown":
        return render_timeline_markdown(result.timeline)
    if fmt == "json":
        return json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2) + "\n"
    return export_timeline_xml(result.timeline)


def _build(args: argparse.Namespace) -> int:
    try:
        request = load_trip_request(args.request)
        settings = resolve_settings(pool_strategy=args.strategy) if args.strategy else None
        result = execute_timeline(request, settings=settings)
    except (DomainError, ToolError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    text = _render(result, args.format)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)

    for issue in result.issues:
        print(f"[{issue.severity.value}] {issue.code}: {issue.message}", file=sys.stderr)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tripline", description="Trip timeline builder")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build a timeline from a JSON request document")
    build.add_argument("request", help="Path to the trip request JSON file")
    build.add_argument("--format", choices=["xml", "markdown", "json"], default="xml", help="Output format")
    build.add_argument("--strategy", choices=["chunked", "shared"], default=None, help="Movable item pool strategy")
    build.add_argument("--output", default=None, help="Write output to this file instead of stdout")
    build.add_argument(
        "--env-file",
        default=".env",
        help="Optional env file to load before building (default: .env)",
    )
    build.set_defaults(handler=_build)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.env_file:
        load_dotenv(args.env_file, override=False)
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
