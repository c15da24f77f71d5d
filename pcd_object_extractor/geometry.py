"""Oriented box geometry: rotations and the point membership test."""
import numpy as np
import open3d as o3d

from .constants import GIMBAL_LOCK_EPS
from .models import Detection, OrientedBox


def quaternion_to_matrix(quaternion: tuple[float, float, float, float]) -> np.ndarray:
    """Return the 3x3 rotation matrix of a (w, x, y, z) quaternion, normalising it first."""
    quat = np.asarray(quaternion, dtype=np.float64)
    norm = np.linalg.norm(quat)
    if norm == 0.0:
        raise ValueError("quaternion has zero norm")
    return o3d.geometry.get_rotation_matrix_from_quaternion(quat / norm)


def matrix_to_euler_xyz(rotation: np.ndarray) -> np.ndarray:
    """Decompose R = Rx(a) @ Ry(b) @ Rz(c) into (a, b, c).

    At gimbal lock (b = +-pi/2) only a + c or a - c is defined; c is set to 0
    and the whole roll goes into a. The result is not continuous around
    those orientations.
    """
    sin_b = float(np.clip(rotation[0, 2], -1.0, 1.0))
    b = np.arcsin(sin_b)
    if np.sqrt(1.0 - sin_b * sin_b) < GIMBAL_LOCK_EPS:
        a = np.arctan2(rotation[2, 1], rotation[1, 1])
        c = 0.0
    else:
        a = np.arctan2(-rotation[1, 2], rotation[2, 2])
        c = np.arctan2(-rotation[0, 1], rotation[0, 0])
    return np.array([a, b, c], dtype=np.float64)


def build_oriented_box(detection: Detection) -> OrientedBox:
    """Build the crop region of a detection.

    x and y are centred on the detection position; z starts at the position
    and extends upwards by size.z, the position being the base of the box.
    """
    size_x, size_y, size_z = detection.size
    euler_angles = matrix_to_euler_xyz(quaternion_to_matrix(detection.orientation))
    return OrientedBox(
        translation=np.asarray(detection.position, dtype=np.float64),
        euler_angles=euler_angles,
        rotation=o3d.geometry.get_rotation_matrix_from_xyz(euler_angles),
        min_bound=np.array([-size_x / 2.0, -size_y / 2.0, 0.0]),
        max_bound=np.array([size_x / 2.0, size_y / 2.0, size_z]),
    )


def to_box_frame(points: np.ndarray, box: OrientedBox) -> np.ndarray:
    """Express world points in the local frame of a box."""
    # Row-vector form of R^T (p - t).
    return (np.asarray(points, dtype=np.float64) - box.translation) @ box.rotation


def points_in_box(points: np.ndarray, box: OrientedBox) -> np.ndarray:
    """Return indices of the points inside a box, bounds included."""
    local = to_box_frame(points, box)
    inside = np.all((local >= box.min_bound) & (local <= box.max_bound), axis=1)
    return np.flatnonzero(inside)
