"""CLI entrypoint for the point-cloud object extractor."""
from __future__ import annotations

import argparse
import os
import sys

from .common import ensure_dirs, same_dir
from .constants import DETECTIONS_EXT, OUT_PARENT
from .errors import ConfigurationError
from .io_utils import pair_frames, write_json
from .processing import extract_objects_from_all_frames


def resolve_input_dir(path: str, label: str) -> str:
    """Return an absolute input folder or raise ConfigurationError."""
    if not os.path.isdir(path):
        raise ConfigurationError(f"{label} folder not found: {path}")
    return os.path.abspath(path)


def normalize_extension(value: str) -> str:
    """Return an extension with a single leading dot."""
    cleaned = value.strip().lstrip(".")
    if not cleaned:
        raise argparse.ArgumentTypeError("extension cannot be empty.")
    return f".{cleaned}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crop labelled 3D boxes out of point-cloud frames into one file per object."
    )
    parser.add_argument("pcd_dir", help="Folder with one point-cloud file per frame.")
    parser.add_argument("detections_dir", help="Folder with one detections JSON file per frame.")
    parser.add_argument("--output-dir", default=OUT_PARENT, help="Folder for the extracted objects.")
    parser.add_argument(
        "--detections-ext",
        type=normalize_extension,
        default=DETECTIONS_EXT,
        help="Extension of the detection files.",
    )
    parser.add_argument("--binary", action="store_true", help="Write binary instead of ASCII point clouds.")
    parser.add_argument("--summary-json", help="Also write the run summary to this JSON file.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for the object extractor."""
    args = build_parser().parse_args(argv)
    try:
        pcd_dir = resolve_input_dir(args.pcd_dir, "Point-cloud")
        detections_dir = resolve_input_dir(args.detections_dir, "Detections")
    except ConfigurationError as exc:
        print(exc, file=sys.stderr)
        return 1

    output_dir = os.path.abspath(args.output_dir)
    if same_dir(output_dir, pcd_dir) or same_dir(output_dir, detections_dir):
        print("output-dir must differ from the input folders to avoid re-ingesting outputs.", file=sys.stderr)
        return 1

    try:
        pairing = pair_frames(pcd_dir, detections_dir, args.detections_ext)
        ensure_dirs(output_dir)
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1

    summary = extract_objects_from_all_frames(pairing, output_dir, write_ascii=not args.binary)
    if pairing["unmatched"]:
        print(f"{summary['unmatched']} file(s) without detections were skipped.")
    if summary["skipped_frames"]:
        print(f"{summary['skipped_frames']} frame(s) with unreadable detections or clouds were skipped.")

    if args.summary_json:
        try:
            write_json(os.path.abspath(args.summary_json), dict(summary))
        except OSError as exc:
            print(f"Failed to write summary JSON: {exc}", file=sys.stderr)
    return 0
