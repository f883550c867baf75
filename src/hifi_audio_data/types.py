"""
Value types for the spatial audio data model.

All types use snake_case naming conventions for Python compatibility.
Units: positions in meters, Euler angles in degrees.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Point3D:
    """Position in 3D space, in meters.

    By default +x is to the right, +y is into the screen and +z is up.
    Unset coordinates are ``None`` ("unspecified"), not zero.
    """

    x: float | None = None
    y: float | None = None
    z: float | None = None


@dataclass(frozen=True)
class OrientationQuat3D:
    """Orientation as a quaternion. Defaults to the identity rotation."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class OrientationEuler3D:
    """Orientation as Euler angles in degrees. Defaults to no rotation.

    Pitch is nose up/down about the wing-to-wing axis (positive is nose up).
    Yaw is nose left/right about the vertical axis (positive is counter-clockwise
    seen from above). Roll is about the nose-to-tail axis (positive lowers the
    right wing).
    """

    pitch_degrees: float = 0.0
    yaw_degrees: float = 0.0
    roll_degrees: float = 0.0
