#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import get_args


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _bootstrap_pythonpath() -> None:
    src = _repo_root() / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


_bootstrap_pythonpath()

from pydantic import ValidationError  # noqa: E402

from post_enhancer.api.schemas import GenerateRequest, Tone  # noqa: E402
from post_enhancer.service.generator import GenerateService  # noqa: E402

DEFAULT_AUDIENCE = "General Professional"
DEFAULT_TONE = "informational"
DEFAULT_CTA = "Ask a Question"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a LinkedIn post from the command line.")
    parser.add_argument("--context", required=True, help="Company or project context.")
    parser.add_argument("--idea", required=True, help="Specific idea the post should convey.")
    parser.add_argument("--audience", default=DEFAULT_AUDIENCE, help="Target audience.")
    parser.add_argument("--tone", default=DEFAULT_TONE, choices=get_args(Tone), help="Tone of voice.")
    parser.add_argument("--cta", default=DEFAULT_CTA, help="Call to action.")
    parser.add_argument("--verbose", action="store_true", help="Show provider request/response logs.")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    try:
        request = GenerateRequest(
            context=args.context,
            idea=args.idea,
            audience=args.audience,
            tone=args.tone,
            cta=args.cta,
        )
    except ValidationError as exc:
        print(f"Invalid input: {exc.error_count()} error(s)", file=sys.stderr)
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ()))
            print(f"  {field}: {error.get('msg')}", file=sys.stderr)
        return 2

    result = await GenerateService().generate(request)
    if not result.ok:
        print(result.error, file=sys.stderr)
        return 1
    print(result.post)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
