import json
import math

import numpy as np
import open3d as o3d
import pytest


def write_cloud(path, points):
    cloud = o3d.geometry.PointCloud()
    cloud.points = o3d.utility.Vector3dVector(np.asarray(points, dtype=np.float64))
    assert o3d.io.write_point_cloud(str(path), cloud, write_ascii=True)
    return path


def read_points(path):
    return np.asarray(o3d.io.read_point_cloud(str(path)).points)


def detection(label="car", position=(0.0, 0.0, 0.0), orientation=(1.0, 0.0, 0.0, 0.0), size=(2.0, 2.0, 2.0)):
    return {
        "label": label,
        "bbox": {
            "position": {
                "position": dict(zip("xyz", position)),
                "orientation": dict(zip("wxyz", orientation)),
            },
            "size": dict(zip("xyz", size)),
        },
    }


def yaw_quaternion(degrees):
    half = math.radians(degrees) / 2.0
    return (math.cos(half), 0.0, 0.0, math.sin(half))


def write_detections(path, detections):
    path.write_text(json.dumps({"detections": detections}), encoding="utf-8")
    return path


@pytest.fixture
def dataset(tmp_path):
    pcd_dir = tmp_path / "pcd"
    dets_dir = tmp_path / "dets"
    out_dir = tmp_path / "out"
    pcd_dir.mkdir()
    dets_dir.mkdir()
    return pcd_dir, dets_dir, out_dir


# Points around a (2, 2, 2) box sitting on the origin.
INSIDE_POINTS = [
    (0.0, 0.0, 0.5),
    (1.0, 1.0, 2.0),
    (-1.0, -1.0, 0.0),
    (0.5, -0.5, 1.0),
]
OUTSIDE_POINTS = [
    (0.0, 0.0, -0.5),
    (1.5, 0.0, 1.0),
    (0.0, 0.0, 2.5),
]
