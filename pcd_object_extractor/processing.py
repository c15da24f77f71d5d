"""Core processing: crop detected objects out of paired frames."""
import os
import sys

import numpy as np
import open3d as o3d

from .common import ensure_dirs, object_file_name
from .constants import PCD_EXT
from .detections import parse_detections
from .errors import ParseError, WriteError
from .geometry import build_oriented_box, points_in_box
from .io_utils import load_detections_json, load_point_cloud, save_point_cloud
from .models import Detection, ExtractedObject, FramePair, LabelCounts, PairingResult, RunSummary


def extract_objects_from_frame(
    cloud: o3d.geometry.PointCloud,
    detections: list[Detection],
    pcd_name: str,
    output_dir: str,
    write_ascii: bool = True,
) -> tuple[list[ExtractedObject], LabelCounts]:
    """Write one output cloud per detection and return them with per-label counts."""
    points = np.asarray(cloud.points)
    ext = os.path.splitext(pcd_name)[1] or PCD_EXT
    extracted: list[ExtractedObject] = []
    counts: LabelCounts = {}
    for index, detection in enumerate(detections, start=1):
        box = build_oriented_box(detection)
        indices = points_in_box(points, box)
        name = object_file_name(detection.label, pcd_name, index, ext)
        if len(indices) == 0:
            print(f"No points inside {name}, skipped")
            continue
        out_cloud = cloud.select_by_index(indices.tolist())
        path = os.path.join(output_dir, name)
        try:
            save_point_cloud(out_cloud, path, write_ascii=write_ascii)
        except WriteError as exc:
            print(f"Failed to write {name}: {exc.reason}", file=sys.stderr)
            continue
        print(f"Extracted: {name}")
        extracted.append(
            {
                "label": detection.label,
                "name": name,
                "path": path,
                "index": index,
                "point_count": len(indices),
            }
        )
        counts[detection.label] = counts.get(detection.label, 0) + 1
    return extracted, counts


def process_frame(pair: FramePair, output_dir: str, write_ascii: bool = True) -> tuple[list[ExtractedObject], LabelCounts]:
    """Load a paired frame and extract its objects.

    Every detection is parsed before any file is written, so a ParseError
    leaves no partial output behind for the frame.
    """
    document = load_detections_json(pair["detections_path"])
    detections = parse_detections(pair["name"], document)
    cloud = load_point_cloud(pair["pcd_path"])
    return extract_objects_from_frame(cloud, detections, pair["name"], output_dir, write_ascii)


def merge_label_counts(total: LabelCounts, delta: LabelCounts) -> LabelCounts:
    """Add per-label deltas into a running total in place and return it."""
    for label, count in delta.items():
        total[label] = total.get(label, 0) + count
    return total


def format_label_report(counts: LabelCounts) -> list[str]:
    """Return 'label: count' lines sorted by label."""
    return [f"{label}: {counts[label]}" for label in sorted(counts)]


def extract_objects_from_all_frames(
    pairing: PairingResult,
    output_dir: str,
    write_ascii: bool = True,
) -> RunSummary:
    """Process every paired frame in order and report the label totals."""
    ensure_dirs(output_dir)
    label_counts: LabelCounts = {}
    processed = 0
    skipped = 0
    extracted_total = 0
    for pair in pairing["pairs"]:
        try:
            extracted, counts = process_frame(pair, output_dir, write_ascii)
        except ParseError as exc:
            print(f"Skipping {pair['name']}: {exc.field} {exc.reason}", file=sys.stderr)
            skipped += 1
            continue
        merge_label_counts(label_counts, counts)
        extracted_total += len(extracted)
        processed += 1

    print("Number of objects found:")
    for line in format_label_report(label_counts):
        print(line)
    return {
        "common": len(pairing["pairs"]),
        "unmatched": len(pairing["unmatched"]),
        "processed_frames": processed,
        "skipped_frames": skipped,
        "extracted": extracted_total,
        "label_counts": dict(sorted(label_counts.items())),
    }
