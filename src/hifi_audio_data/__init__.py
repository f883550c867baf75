"""
HiFi Audio Data Package

The spatial data model exchanged between a client and a spatial audio mixing
server: position, orientation (quaternion and Euler forms), per-user gain and
server-only telemetry, plus the diff that turns two snapshots of a user's
audio state into the minimal update worth transmitting.

Main Classes:
    AudioAPIData: Data a client sends to (and receives from) the server
    ReceivedAudioAPIData: Peer data only the server produces

Examples:
    from hifi_audio_data import AudioAPIData, OrientationEuler3D, Point3D

    previous = AudioAPIData(position=Point3D(x=0, y=0, z=0))
    current = AudioAPIData.from_euler(
        position=Point3D(x=0, y=1, z=0),
        orientation_euler=OrientationEuler3D(yaw_degrees=45),
    )
    update = previous.diff(current)
"""

from .audio_api_data import AudioAPIData, ReceivedAudioAPIData
from .orientation import (
    EulerOrder,
    euler_to_quaternion,
    quaternion_to_euler,
    roll_yaw_pitch_from_quaternion,
    roll_yaw_pitch_to_quaternion,
    yaw_pitch_roll_from_quaternion,
    yaw_pitch_roll_to_quaternion,
)
from .types import OrientationEuler3D, OrientationQuat3D, Point3D

# Export public API
__all__ = [
    # Data types
    "Point3D",
    "OrientationQuat3D",
    "OrientationEuler3D",
    "AudioAPIData",
    "ReceivedAudioAPIData",
    # Conversions
    "EulerOrder",
    "euler_to_quaternion",
    "quaternion_to_euler",
    "yaw_pitch_roll_to_quaternion",
    "yaw_pitch_roll_from_quaternion",
    "roll_yaw_pitch_to_quaternion",
    "roll_yaw_pitch_from_quaternion",
]

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hifi-audio-data")
except PackageNotFoundError:
    __version__ = "unknown"
