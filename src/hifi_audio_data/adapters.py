"""
Adapters for converting between snake_case Python naming and camelCase wire format.

The mixing server and the other client SDKs use camelCase field names. Only
present (non-``None``) fields are written, so a ``diff`` result converts
directly into the minimal update payload.
"""

from collections.abc import Mapping
from typing import Any

from .audio_api_data import AudioAPIData, ReceivedAudioAPIData
from .types import OrientationQuat3D, Point3D


class WireFormatError(ValueError):
    """Raised when a wire payload has the wrong structure."""


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise WireFormatError(
            f"'{key}' must be an object, got {type(value).__name__}"
        )
    return value


def point_to_wire(p: Point3D) -> dict[str, Any]:
    """Convert a position, omitting unspecified coordinates."""
    return {
        name: value
        for name, value in (("x", p.x), ("y", p.y), ("z", p.z))
        if value is not None
    }


def point_from_wire(data: Mapping[str, Any]) -> Point3D:
    return Point3D(x=data.get("x"), y=data.get("y"), z=data.get("z"))


def orientation_to_wire(q: OrientationQuat3D) -> dict[str, Any]:
    return {"w": q.w, "x": q.x, "y": q.y, "z": q.z}


def orientation_from_wire(data: Mapping[str, Any]) -> OrientationQuat3D:
    """Convert a wire quaternion; missing components take identity defaults."""
    return OrientationQuat3D(
        w=data.get("w", 1.0),
        x=data.get("x", 0.0),
        y=data.get("y", 0.0),
        z=data.get("z", 0.0),
    )


def audio_api_data_to_wire(data: AudioAPIData) -> dict[str, Any]:
    """Convert snake_case AudioAPIData to camelCase wire format."""
    result: dict[str, Any] = {}

    if data.position is not None:
        result["position"] = point_to_wire(data.position)
    if data.orientation is not None:
        result["orientation"] = orientation_to_wire(data.orientation)
    if data.gain is not None:
        result["hiFiGain"] = data.gain

    return result


def audio_api_data_from_wire(data: Mapping[str, Any]) -> AudioAPIData:
    """Convert camelCase wire format to snake_case AudioAPIData."""
    if not isinstance(data, Mapping):
        raise WireFormatError(f"payload must be an object, got {type(data).__name__}")
    position = _mapping(data, "position")
    orientation = _mapping(data, "orientation")
    return AudioAPIData(
        position=point_from_wire(position) if position is not None else None,
        orientation=(
            orientation_from_wire(orientation) if orientation is not None else None
        ),
        gain=data.get("hiFiGain"),
    )


def received_audio_api_data_to_wire(data: ReceivedAudioAPIData) -> dict[str, Any]:
    """Convert a received snapshot back to camelCase wire format."""
    result = audio_api_data_to_wire(data.data)

    if data.provided_user_id is not None:
        result["providedUserID"] = data.provided_user_id
    if data.hashed_visit_id is not None:
        result["hashedVisitID"] = data.hashed_visit_id
    if data.volume_decibels is not None:
        result["volumeDecibels"] = data.volume_decibels

    return result


def received_audio_api_data_from_wire(data: Mapping[str, Any]) -> ReceivedAudioAPIData:
    """Convert a camelCase peer update to ReceivedAudioAPIData."""
    return ReceivedAudioAPIData(
        data=audio_api_data_from_wire(data),
        provided_user_id=data.get("providedUserID"),
        hashed_visit_id=data.get("hashedVisitID"),
        volume_decibels=data.get("volumeDecibels"),
    )
