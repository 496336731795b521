"""Command line access to object operations.

Usage:
  opcstore put my-container report.pdf --file ./report.pdf --content-type application/pdf
  opcstore put my-container copy.pdf --copy-from my-container/report.pdf
  opcstore head my-container/report.pdf --newest
  opcstore delete my-container report.pdf

Connection settings come from the environment (STORAGE_ENDPOINT, STORAGE_ACCOUNT,
IDENTITY_DOMAIN, AUTH_TOKEN, ...) or a local .env file.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import Sequence

from opcstore.app.services import get_service_bundle
from opcstore.common.config import get_settings
from opcstore.common.errors import StorageError
from opcstore.common.logging import setup_logging
from opcstore.domain.models import (
    CreateObjectInput,
    DeleteObjectInput,
    GetObjectInput,
    ObjectInfo,
)

logger = logging.getLogger("opcstore.cli")


def _parse_metadata(items: Sequence[str]) -> dict[str, str]:
    metadata: dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"metadata must be key=value: {item!r}")
        metadata[key] = value
    return metadata


def _target(args: argparse.Namespace) -> dict[str, str | None]:
    # One positional is an ID, two are container and name.
    if args.name is None:
        return {"id": args.target, "container": None, "name": None}
    return {"id": None, "container": args.target, "name": args.name}


def _print_object(info: ObjectInfo) -> None:
    payload = dataclasses.asdict(info)
    payload["metadata"] = dict(info.metadata)
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opcstore", description="Create, inspect and delete storage objects"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    put = subparsers.add_parser("put", help="Upload or copy an object")
    put.add_argument("container")
    put.add_argument("name")
    source = put.add_mutually_exclusive_group()
    source.add_argument("--file", help="Path of the file to upload ('-' for stdin)")
    source.add_argument("--copy-from", default="", help="container/object to copy")
    put.add_argument("--content-type", default="")
    put.add_argument("--content-encoding", default="")
    put.add_argument("--content-disposition", default="")
    put.add_argument("--etag", default="", help="Unquoted MD5 of the body")
    put.add_argument(
        "--transfer-encoding",
        default="",
        choices=["", "chunked"],
        help="Only chunked is accepted by the server",
    )
    put.add_argument(
        "--delete-at", type=int, default=0, help="Expiry as seconds since the epoch"
    )
    put.add_argument(
        "--meta",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="User metadata, may be repeated",
    )

    head = subparsers.add_parser("head", help="Show object metadata")
    head.add_argument("target", help="container/name ID, or container when NAME is given")
    head.add_argument("name", nargs="?")
    head.add_argument("--range", default="", help="Byte range, e.g. bytes=0-99")
    head.add_argument("--newest", action="store_true")

    delete = subparsers.add_parser("delete", help="Delete an object")
    delete.add_argument("target", help="container/name ID, or container when NAME is given")
    delete.add_argument("name", nargs="?")

    return parser


def run(args: argparse.Namespace, bundle) -> int:
    objects = bundle.objects()
    if args.command == "put":
        body = None
        handle = None
        if args.file == "-":
            body = sys.stdin.buffer
        elif args.file:
            try:
                handle = open(args.file, "rb")
            except OSError as exc:
                raise argparse.ArgumentTypeError(
                    f"cannot read {args.file}: {exc.strerror}"
                ) from exc
            body = handle
        try:
            info = objects.create_object(
                CreateObjectInput(
                    container=args.container,
                    name=args.name,
                    body=body,
                    content_type=args.content_type,
                    content_encoding=args.content_encoding,
                    content_disposition=args.content_disposition,
                    copy_from=args.copy_from,
                    etag=args.etag,
                    transfer_encoding=args.transfer_encoding,
                    delete_at=args.delete_at,
                    metadata=_parse_metadata(args.meta),
                )
            )
        finally:
            if handle is not None:
                handle.close()
        _print_object(info)
    elif args.command == "head":
        info = objects.get_object(
            GetObjectInput(range=args.range, newest=args.newest, **_target(args))
        )
        _print_object(info)
    elif args.command == "delete":
        objects.delete_object(DeleteObjectInput(**_target(args)))
        print(f"Deleted {args.target}" + (f"/{args.name}" if args.name else ""))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = get_settings()
    except ValueError as exc:
        parser.error(f"invalid settings: {exc}")
    setup_logging(settings.LOG_LEVEL)
    try:
        with get_service_bundle(settings) as bundle:
            return run(args, bundle)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except StorageError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
