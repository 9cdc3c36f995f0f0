"""Calibration data of the robot's cameras and the settings used to read them."""

from __future__ import annotations

import enum
import logging
import struct
from dataclasses import dataclass, field
from typing import Union

from .base import Header

logger = logging.getLogger(__name__)

TOP_FRAME = "CameraTop_optical_frame"
BOTTOM_FRAME = "CameraBottom_optical_frame"
DEPTH_FRAME = "CameraDepth_optical_frame"

_IDENTITY_3X3 = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)


class CameraSource(enum.IntEnum):
    """Which camera of the robot an image comes from."""

    TOP = 0
    BOTTOM = 1
    DEPTH = 2
    INFRARED_OR_STEREO = 3


class Resolution(enum.IntEnum):
    """Image resolutions the video device can deliver."""

    QQVGA = 0
    QVGA = 1
    VGA = 2
    P720 = 5
    Q720P = 6
    QQ720P = 7
    QQQ720P = 8
    QQQQ720P = 9
    P720X2 = 10
    Q720PX2 = 11
    QQ720PX2 = 12
    QQQ720PX2 = 13
    QQQQ720PX2 = 14


class ColorSpace(enum.IntEnum):
    """Pixel formats the video device can deliver."""

    RGB = 11
    DEPTH = 17
    RAW_DEPTH = 23
    INFRARED = 24


@dataclass
class CameraInfo:
    """Intrinsic calibration of one camera at one resolution."""

    header: Header = field(default_factory=Header)
    width: int = 0
    height: int = 0
    distortion_model: str = ""
    d: list[float] = field(default_factory=list)
    k: tuple[float, ...] = (0.0,) * 9
    r: tuple[float, ...] = (0.0,) * 9
    p: tuple[float, ...] = (0.0,) * 12


def _f32(value: float) -> float:
    """Round ``value`` to single precision, as the calibration tables are stored."""
    return struct.unpack("f", struct.pack("f", value))[0]


def empty_camera_info() -> CameraInfo:
    """Calibration with every field left at its default."""
    return CameraInfo()


def _plumb_bob(frame_id, width, height, k, d, p) -> CameraInfo:
    return CameraInfo(
        header=Header(frame_id=frame_id),
        width=width,
        height=height,
        distortion_model="plumb_bob",
        d=list(d),
        k=tuple(float(v) for v in k),
        r=_IDENTITY_3X3,
        p=tuple(float(v) for v in p),
    )


def _top_vga() -> CameraInfo:
    return _plumb_bob(
        TOP_FRAME, 640, 480,
        (556.845054830986, 0, 309.366895338178, 0, 555.898679730161, 230.592233628776, 0, 0, 1),
        (-0.0545211535376379, 0.0691973423510287, -0.00241094929163055, -0.00112245009306511, 0.0),
        (551.589721679688, 0, 308.271132841983, 0, 0, 550.291320800781, 229.20143668168, 0, 0, 0, 1, 0),
    )


def _top_qvga() -> CameraInfo:
    return _plumb_bob(
        TOP_FRAME, 320, 240,
        (274.139508945831, 0, 141.184472810944, 0, 275.741846757374, 106.693773654172, 0, 0, 1),
        (-0.0870160932911717, 0.128210165050533, 0.003379500659424, -0.00106205540818586, 0.0),
        (272.423675537109, 0, 141.131930791285, 0, 0, 273.515747070312, 107.391746054313, 0, 0, 0, 1, 0),
    )


def _top_qqvga() -> CameraInfo:
    return _plumb_bob(
        TOP_FRAME, 160, 120,
        (139.424539568966, 0, 76.9073669920582, 0, 139.25542782325, 59.5554242026743, 0, 0, 1),
        (-0.0843564504845967, 0.125733083790192, 0.00275901756247071, -0.00138645823460527, 0.0),
        (137.541534423828, 0, 76.3004646597892, 0, 0, 136.815216064453, 59.3909799751191, 0, 0, 0, 1, 0),
    )


def _bottom_vga() -> CameraInfo:
    return _plumb_bob(
        BOTTOM_FRAME, 640, 480,
        (558.570339530768, 0, 308.885375457296, 0, 556.122943034837, 247.600724811385, 0, 0, 1),
        (-0.0648763971625288, 0.0612520196884308, 0.0038281538281731, -0.00551104078371959, 0.0),
        (549.571655273438, 0, 304.799679526441, 0, 0, 549.687316894531, 248.526959297022, 0, 0, 0, 1, 0),
    )


def _bottom_qvga() -> CameraInfo:
    return _plumb_bob(
        BOTTOM_FRAME, 320, 240,
        (278.236008818534, 0, 156.194471689706, 0, 279.380102992049, 126.007123836447, 0, 0, 1),
        (-0.0481869853715082, 0.0201858398559121, 0.0030362056699177, -0.00172241952442813, 0.0),
        (273.491455078125, 0, 155.112454709117, 0, 0, 275.743133544922, 126.057357467223, 0, 0, 0, 1, 0),
    )


def _bottom_qqvga() -> CameraInfo:
    return _plumb_bob(
        BOTTOM_FRAME, 160, 120,
        (141.611855886672, 0, 78.6494086288656, 0, 141.367163830175, 58.9220646201529, 0, 0, 1),
        (-0.0688388724945936, 0.0697453843669642, 0.00309518737071049, -0.00570486993696543, 0.0),
        (138.705535888672, 0, 77.2544255212306, 0, 0, 138.954086303711, 58.7000861760043, 0, 0, 0, 1, 0),
    )


def _depth(width: int, height: int, divisor: float) -> CameraInfo:
    # The depth camera has no distortion model.
    f = 525 / divisor
    cx = 319.5 / divisor
    cy = 239.5 / divisor
    return CameraInfo(
        header=Header(frame_id=DEPTH_FRAME),
        width=width,
        height=height,
        k=(f, 0.0, cx, 0.0, f, cy, 0.0, 0.0, 1.0),
        r=_IDENTITY_3X3,
        p=(f, 0.0, cx, 0.0, 0.0, f, cy, 0.0, 0.0, 0.0, 1.0, 0.0),
    )


def stereo_camera_info(width: int, height: int, reduction_factor: float) -> CameraInfo:
    """Calibration of the stereo camera, scaled down by ``reduction_factor``."""
    factor = _f32(reduction_factor)

    def scaled(value: float) -> float:
        return _f32(_f32(value) / factor)

    k = (
        scaled(703.102356), 0.0, scaled(647.821594),
        0.0, scaled(702.432312), scaled(380.971680),
        0.0, 0.0, 1.0,
    )
    d = [_f32(v) for v in (-0.168594331, 0.00881872326, -0.000182721298, -0.0000145479062, 0.0137237618)]
    r = tuple(
        _f32(v)
        for v in (
            0.999984741, 0.000130843779, 0.00552622462,
            -0.000111592424, 0.999993920, -0.00348380185,
            -0.00552664697, 0.00348313176, 0.999978662,
        )
    )
    p = (
        scaled(569.869568), 0.0, scaled(644.672058), 0.0,
        0.0, scaled(569.869568), scaled(393.368958), 0.0,
        0.0, 0.0, 1.0, 0.0,
    )
    return CameraInfo(
        header=Header(frame_id=DEPTH_FRAME),
        width=int(width),
        height=int(height),
        distortion_model="plumb_bob",
        d=d,
        k=k,
        r=r,
        p=p,
    )


_DEPTH_LIKE = {
    Resolution.VGA: lambda: _depth(640, 480, 1.0),
    Resolution.QVGA: lambda: _depth(320, 240, 2.0),
    Resolution.QQVGA: lambda: _depth(160, 120, 4.0),
}

_TABLE = {
    CameraSource.TOP: {
        Resolution.VGA: _top_vga,
        Resolution.QVGA: _top_qvga,
        Resolution.QQVGA: _top_qqvga,
    },
    CameraSource.BOTTOM: {
        Resolution.VGA: _bottom_vga,
        Resolution.QVGA: _bottom_qvga,
        Resolution.QQVGA: _bottom_qqvga,
    },
    CameraSource.DEPTH: {
        **_DEPTH_LIKE,
        Resolution.P720: lambda: stereo_camera_info(1280, 720, 1.0),
        Resolution.Q720P: lambda: stereo_camera_info(640, 360, 2.0),
        Resolution.QQ720P: lambda: stereo_camera_info(320, 180, 4.0),
        Resolution.QQQ720P: lambda: stereo_camera_info(160, 90, 8.0),
        Resolution.QQQQ720P: lambda: stereo_camera_info(80, 45, 16.0),
    },
    CameraSource.INFRARED_OR_STEREO: {
        **_DEPTH_LIKE,
        Resolution.P720X2: lambda: stereo_camera_info(2560, 720, 1.0),
        Resolution.Q720PX2: lambda: stereo_camera_info(1280, 360, 2.0),
        Resolution.QQ720PX2: lambda: stereo_camera_info(640, 180, 4.0),
        Resolution.QQQ720PX2: lambda: stereo_camera_info(320, 90, 8.0),
        Resolution.QQQQ720PX2: lambda: stereo_camera_info(160, 45, 16.0),
    },
}

_DEPTH_SOURCES = (CameraSource.DEPTH, CameraSource.INFRARED_OR_STEREO)


def camera_info(
    camera_source: Union[CameraSource, int],
    resolution: Union[Resolution, int],
) -> CameraInfo:
    """Calibration for a camera and resolution; empty when none is known."""
    try:
        source = CameraSource(camera_source)
        res = Resolution(resolution)
        factory = _TABLE[source][res]
    except (ValueError, KeyError):
        logger.warning(
            "no camera information found for camera_source %s and res: %s",
            int(camera_source), int(resolution),
        )
        return empty_camera_info()
    if source in _DEPTH_SOURCES and res is Resolution.VGA:
        logger.warning("VGA resolution is not supported for the depth camera, use QVGA or lower")
    return factory()


@dataclass
class CameraSettings:
    """How a camera is subscribed to and how its images are labelled."""

    camera_source: CameraSource
    resolution: Resolution
    color_space: ColorSpace
    encoding: str
    channels: int
    bytes_per_channel: int
    frame_id: str
    info: CameraInfo


def camera_settings(
    camera_source: Union[CameraSource, int],
    resolution: Union[Resolution, int],
    has_stereo: bool = False,
) -> CameraSettings:
    """Settings for reading ``camera_source`` at ``resolution``."""
    source = CameraSource(camera_source)
    res = Resolution(resolution)
    if source is CameraSource.DEPTH:
        color_space, encoding, channels, depth = ColorSpace.RAW_DEPTH, "16UC1", 1, 2
    else:
        color_space, encoding, channels, depth = ColorSpace.RGB, "rgb8", 3, 1
    info = camera_info(source, res)
    frame_id = ""

    if source is CameraSource.TOP:
        frame_id = TOP_FRAME
    elif source is CameraSource.BOTTOM:
        frame_id = BOTTOM_FRAME
    elif source is CameraSource.DEPTH:
        frame_id = DEPTH_FRAME
        if has_stereo:
            color_space = ColorSpace.DEPTH
    elif source is CameraSource.INFRARED_OR_STEREO:
        frame_id = DEPTH_FRAME
        if not has_stereo:
            source = CameraSource.DEPTH
            color_space = ColorSpace.INFRARED
            encoding, channels, depth = "16UC1", 1, 2
        info = camera_info(source, res)

    return CameraSettings(
        camera_source=source,
        resolution=res,
        color_space=color_space,
        encoding=encoding,
        channels=channels,
        bytes_per_channel=depth,
        frame_id=frame_id,
        info=info,
    )