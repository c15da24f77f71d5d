"""Typed structures used across the object extractor."""
from typing import NamedTuple, TypedDict

import numpy as np


class Detection(NamedTuple):
    label: str
    position: tuple[float, float, float]
    orientation: tuple[float, float, float, float]  # w, x, y, z
    size: tuple[float, float, float]


class OrientedBox(NamedTuple):
    translation: np.ndarray
    euler_angles: np.ndarray
    rotation: np.ndarray
    min_bound: np.ndarray
    max_bound: np.ndarray


class FramePair(TypedDict):
    name: str
    pcd_path: str
    detections_path: str


class ExtractedObject(TypedDict):
    label: str
    name: str
    path: str
    index: int
    point_count: int


LabelCounts = dict[str, int]


class PairingResult(TypedDict):
    pairs: list[FramePair]
    unmatched: list[str]


class RunSummary(TypedDict):
    common: int
    unmatched: int
    processed_frames: int
    skipped_frames: int
    extracted: int
    label_counts: LabelCounts
