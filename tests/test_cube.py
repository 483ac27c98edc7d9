"""cube.py 데모의 프레임 계산 테스트."""

from __future__ import annotations

import math

import numpy as np
import pytest

import cube
from _math import compose_all, perspective, rotate_x, rotate_y, scale, translate
from _scene import ModelTransform, SceneTransforms
from cube import CubeDemo


def test_frame_at_time_zero() -> None:
    demo = CubeDemo()
    clip = demo.frame(0.0)

    mvp = compose_all([perspective(math.pi / 2, 1.0, 1.0, 50.0), translate(0, 0, -20), scale(5, 5, 5)])
    expected = np.array([mvp.reshape((4, 4), order="F") @ np.append(c, 1.0) for c in demo.corners])
    np.testing.assert_allclose(clip, expected[:, :3] / expected[:, 3:4])
    assert np.all(np.abs(clip) <= 1.0)


def test_model_matrix_follows_time() -> None:
    demo = CubeDemo()
    now = 1234.0
    expected = compose_all([translate(0, 0, 0), rotate_y(now * 0.0005), rotate_x(now * 0.0003), scale(5, 5, 5)])
    np.testing.assert_allclose(demo.compute_model_matrix(now), expected)


def test_view_matrix_zooms_in_and_out() -> None:
    demo = CubeDemo()
    now = math.pi / 0.004
    view = demo.compute_view_matrix(now)
    assert view[14] == pytest.approx(-15.0)


def test_orthographic_frame_keeps_cube_inside() -> None:
    demo = CubeDemo(projection="orthographic", aspect=16 / 9)
    clip = demo.frame(500.0)
    assert np.all(np.abs(clip) <= 1.0)


def test_simple_projection_has_no_camera() -> None:
    demo = CubeDemo(projection="simple")
    demo.frame(0.0)
    assert demo.transforms.view.tolist() == np.eye(4).reshape(-1).tolist()
    assert demo.transforms.projection[11] == cube.SIMPLE_SCALE_FACTOR


def test_unknown_projection_is_rejected() -> None:
    with pytest.raises(ValueError):
        CubeDemo(projection="fisheye")


def test_main_prints_frames(capsys: pytest.CaptureFixture[str]) -> None:
    cube.main(["--frames", "2", "--quiet", "--css"])
    out = capsys.readouterr().out
    assert "[Frame 1/2]" in out
    assert "[Frame 2/2]" in out
    assert out.count("matrix3d(") == 2


def test_main_rejects_zero_frames() -> None:
    with pytest.raises(SystemExit):
        cube.main(["--frames", "0"])


def test_model_matrix_uses_model_transform() -> None:
    demo = CubeDemo(projection="simple")
    now = 800.0
    expected = ModelTransform(
        scale=(0.2, 0.2, 0.2), rotation_x=now * 0.0003, rotation_y=now * 0.0005, position=(0.0, -0.1, 0.0)
    ).matrix()
    np.testing.assert_array_equal(demo.compute_model_matrix(now), expected)


def test_wireframe_segments_follow_cube_edges() -> None:
    demo = CubeDemo()
    demo.frame(0.0)
    segments = demo.wireframe_segments()
    assert segments.shape == (36, 2, 3)
    # 첫 번째 선분: 앞면 정점 0 -> 1
    expected = demo.transforms.project(demo.cube.positions[[0, 1]])
    np.testing.assert_allclose(segments[0], expected)
    assert np.all(np.abs(segments) <= 1.0)


def test_main_prints_wireframe_and_uniform(capsys: pytest.CaptureFixture[str]) -> None:
    cube.main(["--frames", "1", "--quiet", "--wireframe", "--uniform"])
    out = capsys.readouterr().out
    assert "wireframe: " in out
    assert "/36 " in out
    assert f"uniform: {SceneTransforms.UNIFORM_BYTE_SIZE} bytes" in out
