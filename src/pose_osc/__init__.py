"""
pose_osc - Webcam pose tracking to OSC
A PySide6 tool that runs MediaPipe Pose on a camera feed and sends the
landmarks to other applications over OSC/UDP.
"""

__version__ = "0.1.0"

# Lazy imports to avoid loading Qt/OpenCV for the lightweight modules
def __getattr__(name):
    if name in ("LandmarkPoint", "OscArg", "OscPacket", "TransportConfig",
                "TrackingState", "CameraDescriptor"):
        from . import models
        return getattr(models, name)
    elif name == "encode_landmarks":
        from .encoder import encode_landmarks
        return encode_landmarks
    elif name == "TransportBridge":
        from .transport import TransportBridge
        return TransportBridge
    elif name == "CaptureLoop":
        from .capture import CaptureLoop
        return CaptureLoop
    elif name == "PoseOscWindow":
        from .app import PoseOscWindow
        return PoseOscWindow
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "LandmarkPoint",
    "OscArg",
    "OscPacket",
    "TransportConfig",
    "TrackingState",
    "CameraDescriptor",
    "encode_landmarks",
    "TransportBridge",
    "CaptureLoop",
    "PoseOscWindow",
    "__version__",
]


def main():
    """Entry point for the application."""
    from .app import run_app
    run_app()
