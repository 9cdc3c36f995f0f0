import logging

import pytest

from naoqi_converters.camera_info import (
    CameraInfo,
    CameraSettings,
    CameraSource,
    ColorSpace,
    Resolution,
    camera_info,
    camera_settings,
    empty_camera_info,
    stereo_camera_info,
)


def test_empty_info_has_defaults():
    info = empty_camera_info()
    assert info == CameraInfo()
    assert info.width == 0 and info.d == [] and len(info.p) == 12


def test_top_vga_values_from_table():
    info = camera_info(CameraSource.TOP, Resolution.VGA)
    assert info.header.frame_id == "CameraTop_optical_frame"
    assert (info.width, info.height) == (640, 480)
    assert info.k[0] == 556.845054830986
    assert info.distortion_model == "plumb_bob"
    assert info.d[0] == -0.0545211535376379
    assert info.p[0] == 551.589721679688


def test_bottom_qqvga_values_from_table():
    info = camera_info(CameraSource.BOTTOM, Resolution.QQVGA)
    assert info.header.frame_id == "CameraBottom_optical_frame"
    assert (info.width, info.height) == (160, 120)
    assert info.k[4] == 141.367163830175


@pytest.mark.parametrize("source", list(CameraSource))
@pytest.mark.parametrize("res", [Resolution.VGA, Resolution.QVGA, Resolution.QQVGA])
def test_matrix_sizes(source, res):
    info = camera_info(source, res)
    assert len(info.k) == 9
    assert len(info.r) == 9
    assert len(info.p) == 12
    assert info.k[8] == 1.0


def test_depth_resolutions_scale():
    vga = camera_info(CameraSource.DEPTH, Resolution.VGA)
    qvga = camera_info(CameraSource.DEPTH, Resolution.QVGA)
    qqvga = camera_info(CameraSource.DEPTH, Resolution.QQVGA)
    for i in (0, 2, 4, 5):
        assert qvga.k[i] == vga.k[i] / 2
        assert qqvga.k[i] == vga.k[i] / 4
    assert vga.k[0] == 525
    assert vga.distortion_model == ""
    assert vga.d == []


def test_depth_vga_warns(caplog):
    with caplog.at_level(logging.WARNING):
        camera_info(CameraSource.DEPTH, Resolution.VGA)
    assert "VGA resolution is not supported" in caplog.text


def test_unknown_combination_is_empty(caplog):
    with caplog.at_level(logging.WARNING):
        info = camera_info(CameraSource.TOP, Resolution.P720)
    assert info == empty_camera_info()
    assert "no camera information found" in caplog.text


def test_unknown_integer_source_is_empty():
    assert camera_info(42, 0) == empty_camera_info()


def test_integer_arguments_accepted():
    assert camera_info(0, 2) == camera_info(CameraSource.TOP, Resolution.VGA)


def test_stereo_full_resolution():
    info = stereo_camera_info(1280, 720, 1.0)
    assert (info.width, info.height) == (1280, 720)
    assert info.k[0] == pytest.approx(703.102356, rel=1e-6)
    assert info.p[6] == pytest.approx(393.368958, rel=1e-6)
    assert len(info.d) == 5
    assert info.distortion_model == "plumb_bob"


def test_stereo_reduction_divides_focal():
    full = stereo_camera_info(1280, 720, 1.0)
    half = stereo_camera_info(640, 360, 2.0)
    for i in (0, 2, 4, 5):
        assert half.k[i] == pytest.approx(full.k[i] / 2, rel=1e-6)
    assert half.r == full.r
    assert half.d == full.d


def test_depth_720p_matches_stereo_helper():
    assert camera_info(CameraSource.DEPTH, Resolution.Q720P) == stereo_camera_info(640, 360, 2.0)
    assert camera_info(CameraSource.INFRARED_OR_STEREO, Resolution.P720X2) == stereo_camera_info(
        2560, 720, 1.0
    )


def test_returned_infos_are_independent():
    first = camera_info(CameraSource.TOP, Resolution.QVGA)
    first.header.stamp = 12.0
    first.d.append(1.0)
    second = camera_info(CameraSource.TOP, Resolution.QVGA)
    assert second.header.stamp == 0.0
    assert len(second.d) == 5


def test_settings_top():
    settings = camera_settings(CameraSource.TOP, Resolution.QVGA)
    assert isinstance(settings, CameraSettings)
    assert settings.frame_id == "CameraTop_optical_frame"
    assert settings.encoding == "rgb8"
    assert settings.color_space is ColorSpace.RGB
    assert settings.info == camera_info(CameraSource.TOP, Resolution.QVGA)


def test_settings_depth_without_and_with_stereo():
    plain = camera_settings(CameraSource.DEPTH, Resolution.QVGA, False)
    assert plain.color_space is ColorSpace.RAW_DEPTH
    assert plain.encoding == "16UC1"
    assert plain.frame_id == "CameraDepth_optical_frame"
    stereo = camera_settings(CameraSource.DEPTH, Resolution.QVGA, True)
    assert stereo.color_space is ColorSpace.DEPTH
    assert stereo.encoding == "16UC1"


def test_settings_infrared_without_stereo_becomes_depth():
    settings = camera_settings(CameraSource.INFRARED_OR_STEREO, Resolution.QQVGA, False)
    assert settings.camera_source is CameraSource.DEPTH
    assert settings.color_space is ColorSpace.INFRARED
    assert settings.encoding == "16UC1"
    assert settings.info == camera_info(CameraSource.DEPTH, Resolution.QQVGA)


def test_settings_stereo_keeps_source_and_rgb():
    settings = camera_settings(CameraSource.INFRARED_OR_STEREO, Resolution.Q720PX2, True)
    assert settings.camera_source is CameraSource.INFRARED_OR_STEREO
    assert settings.color_space is ColorSpace.RGB
    assert settings.encoding == "rgb8"
    assert settings.info == stereo_camera_info(1280, 360, 2.0)


def test_settings_rejects_unknown_source():
    with pytest.raises(ValueError):
        camera_settings(99, Resolution.VGA)