"""CLI entry point for FlyerOCR."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from .camera import FlyerCamera
from .config import FlyerConfig, load_config
from .export import build_rows, write_workbook
from .image import ImagePayload, load_image
from .session import AppStatus, FlyerSession, run_extraction
from .vision import create_backend


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="flyerocr",
        description="Flyer digitization: extract products from a flyer image and export them to Excel",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to a TOML config file",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # cameras
    sub.add_parser("cameras", help="List available cameras")

    # scan
    scan_parser = sub.add_parser("scan", help="Extract products and print them")
    scan_parser.add_argument(
        "--image", type=str, default=None, help="Use an existing image file instead of the camera"
    )
    scan_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    # export
    export_parser = sub.add_parser("export", help="Extract products and write an .xlsx file")
    export_parser.add_argument(
        "--image", type=str, default=None, help="Use an existing image file instead of the camera"
    )
    export_parser.add_argument(
        "--output", "-o", type=str, required=True, metavar="NAME",
        help="Spreadsheet filename (.xlsx is appended)",
    )
    export_parser.add_argument(
        "--output-dir", type=str, default=None, help="Directory for the spreadsheet"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    config = load_config(args.config)

    match args.command:
        case "cameras":
            _cmd_cameras()
        case "scan":
            session = asyncio.run(_extract(config, args))
            _print_records(session, as_json=args.json)
        case "export":
            session = asyncio.run(_extract(config, args))
            _cmd_export(config, session, args)


def _cmd_cameras() -> None:
    cameras = FlyerCamera.list_cameras()
    if not cameras:
        print("No cameras found.")
        return
    print(f"Available cameras: {len(cameras)}")
    for idx in cameras:
        print(f"  camera {idx}")


def _acquire(config: FlyerConfig, image_path: str | None) -> ImagePayload:
    if image_path:
        return load_image(image_path)
    camera = FlyerCamera(
        camera_index=config.camera.index,
        save_dir=config.camera.save_dir,
        width=config.camera.width,
        height=config.camera.height,
        jpeg_quality=config.camera.jpeg_quality,
    )
    print("Capturing flyer...")
    capture = camera.capture()
    print(f"   saved {capture.image_path}")
    return capture.load()


async def _extract(config: FlyerConfig, args) -> FlyerSession:
    try:
        image = _acquire(config, args.image)
    except (FileNotFoundError, ValueError, RuntimeError, ImportError) as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    session = FlyerSession().acquire(image)
    print("Analysing flyer...")
    try:
        backend = create_backend(config)
        session = await run_extraction(session, backend)
    except (ValueError, ImportError) as e:
        # Configuration problems: missing API key, unknown backend, missing SDK
        print(str(e), file=sys.stderr)
        sys.exit(1)

    if session.status is AppStatus.ERROR:
        if session.unreadable:
            print("Image too blurry: please capture the flyer again.", file=sys.stderr)
        else:
            print(f"Extraction error: {session.error}", file=sys.stderr)
        sys.exit(1)
    return session


def _print_records(session: FlyerSession, as_json: bool = False) -> None:
    if as_json:
        data = [r.to_dict() for r in session.records]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not session.records:
        print("No products detected.")
        return

    print(f"\nDetected products ({len(session.records)}):")
    header, *rows = build_rows(session.records)
    columns = header[2:]
    print("  " + " | ".join(columns))
    for row in rows:
        print("  " + " | ".join(str(v) for v in row[2:]))


def _cmd_export(config: FlyerConfig, session: FlyerSession, args) -> None:
    _print_records(session)
    session = session.with_filename(args.output)
    if not session.can_export:
        print("Nothing to export: no products detected or blank filename.", file=sys.stderr)
        sys.exit(1)

    path = write_workbook(
        session.records,
        session.filename,
        output_dir=args.output_dir or config.export.output_dir,
        sheet_name=config.export.sheet_name,
    )
    print(f"Spreadsheet saved: {path}")
