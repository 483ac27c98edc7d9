"""_mesh 모듈의 큐브 데이터 테스트."""

from __future__ import annotations

import numpy as np

from _mesh import FACE_COLORS, cube_corners, cube_data, create_wireframe_indices


def test_cube_data_shapes_and_dtypes() -> None:
    cube = cube_data()
    assert cube.positions.shape == (24, 3)
    assert cube.positions.dtype == np.float32
    assert cube.colors.shape == (24, 4)
    assert cube.colors.dtype == np.float32
    assert cube.elements.shape == (36,)
    assert cube.elements.dtype == np.uint16


def test_cube_elements_use_two_triangles_per_face() -> None:
    elements = cube_data().elements
    assert elements[:12].tolist() == [0, 1, 2, 0, 2, 3, 4, 5, 6, 4, 6, 7]
    assert elements[-6:].tolist() == [20, 21, 22, 20, 22, 23]
    assert int(elements.max()) == 23


def test_cube_faces_are_planar_and_colored() -> None:
    cube = cube_data()
    for face in range(6):
        verts = cube.positions[face * 4:(face + 1) * 4]
        # 면의 정점 4개는 한 축에서 같은 값 (+-1)을 가짐
        assert any(np.all(verts[:, axis] == verts[0, axis]) for axis in range(3))
        expected = np.tile(np.array(FACE_COLORS[face], dtype=np.float32), (4, 1))
        np.testing.assert_array_equal(cube.colors[face * 4:(face + 1) * 4], expected)


def test_cube_corners_are_unique() -> None:
    corners = cube_corners()
    assert corners.shape == (8, 3)
    assert len({tuple(c) for c in corners.tolist()}) == 8
    assert np.all(np.abs(corners) == 1.0)


def test_wireframe_indices_from_triangles() -> None:
    lines = create_wireframe_indices(np.array([0, 1, 2, 0, 2, 3], dtype=np.uint16))
    assert lines.tolist() == [0, 1, 1, 2, 2, 0, 0, 2, 2, 3, 3, 0]
    assert lines.dtype == np.uint32
    assert len(create_wireframe_indices(cube_data().elements)) == 72
