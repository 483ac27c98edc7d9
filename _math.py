# _math.py
"""
4x4 변환 행렬 / 동차 좌표 연산 모듈

모든 행렬(Matrix4)은 길이 16의 flat numpy 배열이며 column-major 순서로 저장됩니다.

    index = column * 4 + row

    [ m[0]  m[4]  m[8]   m[12] ]
    [ m[1]  m[5]  m[9]   m[13] ]
    [ m[2]  m[6]  m[10]  m[14] ]
    [ m[3]  m[7]  m[11]  m[15] ]

즉 translation 성분은 m[12], m[13], m[14]에 위치하며, 이 배열을 그대로
GPU uniform (mat4x4<f32>)으로 업로드할 수 있습니다.
행렬은 수학 표기(행, 열)로 (4, 4) 배열을 만든 뒤 reshape(-1, order="F")로 펼칩니다.
반대로 연산 시에는 reshape((4, 4), order="F")로 되돌립니다.

점은 열 벡터로 취급합니다: p' = M @ p
따라서 compose_all([translate, rotate_y, rotate_x, scale])은
scale -> rotate_x -> rotate_y -> translate 순서로 점에 적용됩니다.

사용법:
    from _math import compose_all, scale, rotate_x, translate, transform_point

    model = compose_all([translate(0, 0, -20), rotate_x(0.5), scale(5, 5, 5)])
    clip = transform_point(model, [1, 1, 1, 1])
"""

import numpy as np
from math import cos, sin, tan, pi
from typing import Iterable, Sequence


class InvalidPreconditionError(ValueError):
    """호출자가 잘못된 인자를 넘긴 경우 (빈 행렬 목록, 퇴화된 투영 볼륨 등)"""


# 내부 헬퍼 -------------------------------------------------------------------

def _freeze(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


def _from_rows(rows) -> np.ndarray:
    """수학 표기 (행, 열) 4x4 배열을 column-major flat Matrix4로 변환합니다."""
    m = np.array(rows, dtype=np.float64).reshape(-1, order="F")
    return _freeze(m)


def _as_square(matrix: Sequence[float]) -> np.ndarray:
    """column-major flat 입력을 (행, 열) 4x4 배열로 변환합니다."""
    m = np.asarray(matrix, dtype=np.float64)
    # (4, 4) 입력은 행/열 해석이 모호하므로 flat 배열만 허용
    if m.shape != (16,):
        raise InvalidPreconditionError(
            f"Matrix4는 길이 16의 flat 배열이어야 합니다 (입력 shape: {m.shape})"
        )
    return m.reshape((4, 4), order="F")


def _as_vector(vector: Sequence[float], size: int) -> np.ndarray:
    v = np.asarray(vector, dtype=np.float64)
    if v.shape != (size,):
        raise InvalidPreconditionError(
            f"Vector{size}는 {size}개의 원소가 필요합니다 (입력 shape: {v.shape})"
        )
    return v


# 기본 변환 행렬 ---------------------------------------------------------------

def identity() -> np.ndarray:
    """단위 행렬을 생성합니다."""
    return _freeze(np.eye(4, dtype=np.float64).reshape(-1, order="F"))


def scale(sx: float, sy: float, sz: float) -> np.ndarray:
    """스케일 행렬을 생성합니다."""
    return _from_rows(
        [
            [sx, 0.0, 0.0, 0.0],
            [0.0, sy, 0.0, 0.0],
            [0.0, 0.0, sz, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotate_x(angle: float) -> np.ndarray:
    """X축 회전 행렬을 생성합니다. (라디안, 오른손 좌표계)"""
    c, s = cos(angle), sin(angle)
    return _from_rows(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotate_y(angle: float) -> np.ndarray:
    """Y축 회전 행렬을 생성합니다. (라디안, 오른손 좌표계)"""
    c, s = cos(angle), sin(angle)
    return _from_rows(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotate_z(angle: float) -> np.ndarray:
    """Z축 회전 행렬을 생성합니다. (라디안, 오른손 좌표계)"""
    c, s = cos(angle), sin(angle)
    return _from_rows(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def translate(x: float, y: float, z: float) -> np.ndarray:
    """이동(Translation) 행렬을 생성합니다."""
    # 마지막 열에 기록 -> flat 배열의 12, 13, 14번 원소
    return _from_rows(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


# 행렬 합성 -------------------------------------------------------------------

def multiply(a: Sequence[float], b: Sequence[float]) -> np.ndarray:
    """
    두 행렬의 곱 a @ b를 반환합니다.

    결과의 k번째 열은 a @ (b의 k번째 열)입니다.
    점에 적용하면 b가 먼저, a가 나중에 적용됩니다.
    """
    product = _as_square(a) @ _as_square(b)
    return _freeze(product.reshape(-1, order="F"))


def compose_all(matrices: Iterable[Sequence[float]]) -> np.ndarray:
    """
    행렬 목록을 왼쪽부터 차례로 곱합니다: ((m0 @ m1) @ m2) ...

    점에 적용되는 순서는 목록의 역순입니다.
    예) [translate, rotate_y, rotate_x, scale] -> scale이 가장 먼저 적용됨

    Raises
    ------
    InvalidPreconditionError
        빈 목록이 주어진 경우
    """
    matrices = list(matrices)
    if not matrices:
        raise InvalidPreconditionError("compose_all에는 최소 1개의 행렬이 필요합니다.")

    result = _as_square(matrices[0]).copy()
    for m in matrices[1:]:
        result = result @ _as_square(m)
    return _freeze(result.reshape(-1, order="F"))


# 점 변환 / 동차 좌표 -----------------------------------------------------------

def transform_point(matrix: Sequence[float], point: Sequence[float]) -> np.ndarray:
    """동차 좌표 점에 행렬을 적용합니다 (matrix @ point)."""
    return _freeze(_as_square(matrix) @ _as_vector(point, 4))


def transform_points(matrix: Sequence[float], points) -> np.ndarray:
    """(N, 4) 동차 좌표 배열 전체에 행렬을 적용합니다."""
    pts = np.asarray(points, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] != 4:
        raise InvalidPreconditionError(f"(N, 4) 배열이 필요합니다 (입력 shape: {pts.shape})")
    return _freeze(pts @ _as_square(matrix).T)


def to_homogeneous(point: Sequence[float]) -> np.ndarray:
    """Cartesian 좌표 (x, y, z)를 동차 좌표 (x, y, z, 1)로 변환합니다."""
    x, y, z = _as_vector(point, 3)
    return _freeze(np.array([x, y, z, 1.0], dtype=np.float64))


def to_cartesian(point: Sequence[float]) -> np.ndarray:
    """
    동차 좌표 (x, y, z, w)를 Cartesian 좌표 (x/w, y/w, z/w)로 변환합니다.

    w = 0이면 무한대(또는 0/0 -> NaN)가 그대로 반환됩니다.
    이는 무한히 먼 점(방향 벡터)을 나타내므로 오류가 아닙니다.
    """
    p = _as_vector(point, 4)
    with np.errstate(divide="ignore", invalid="ignore"):
        return _freeze(p[:3] / p[3])


def project_points(matrix: Sequence[float], points) -> np.ndarray:
    """(N, 3) 점들을 동차 좌표로 올려 변환한 뒤 w로 나눕니다."""
    pts = np.asarray(points, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise InvalidPreconditionError(f"(N, 3) 배열이 필요합니다 (입력 shape: {pts.shape})")
    homogeneous = np.hstack([pts, np.ones((len(pts), 1), dtype=np.float64)])
    clip = transform_points(matrix, homogeneous)
    with np.errstate(divide="ignore", invalid="ignore"):
        return _freeze(clip[:, :3] / clip[:, 3:4])


# 투영 행렬 -------------------------------------------------------------------

def perspective(fovy_radians: float, aspect: float, near: float, far: float) -> np.ndarray:
    """
    원근 투영 행렬을 생성합니다.

    카메라는 -z 방향을 바라봅니다. view 공간의 z = -near는 clip 공간 -1로,
    z = -far는 +1로 (w 나눗셈 이후) 매핑됩니다.

    Parameters
    ----------
    fovy_radians : float
        Y축 방향 시야각, (0, pi) 범위
    aspect : float
        화면 비율 (width / height), 양수
    near, far : float
        클리핑 평면까지의 거리, 0 < near < far

    Raises
    ------
    InvalidPreconditionError
        위 조건을 만족하지 않는 경우
    """
    if not 0.0 < fovy_radians < pi:
        raise InvalidPreconditionError(f"fovy는 (0, pi) 범위여야 합니다: {fovy_radians}")
    if not aspect > 0.0:
        raise InvalidPreconditionError(f"aspect는 양수여야 합니다: {aspect}")
    if not 0.0 < near < far:
        raise InvalidPreconditionError(f"0 < near < far 조건 위반: near={near}, far={far}")

    f = 1.0 / tan(fovy_radians / 2.0)
    range_inv = 1.0 / (near - far)
    return _from_rows(
        [
            [f / aspect, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, (near + far) * range_inv, near * far * range_inv * 2],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


def orthographic(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> np.ndarray:
    """
    직교 투영 행렬을 생성합니다. 각 인자는 경계 상자의 평면을 나타냅니다.

    z 스케일 항은 x/y와 달리 2 * nf 부호를 그대로 사용합니다.
    (z = -near -> -1, z = -far -> +1로 perspective와 같은 방향)
    """
    if left == right:
        raise InvalidPreconditionError(f"left와 right가 같습니다: {left}")
    if bottom == top:
        raise InvalidPreconditionError(f"bottom과 top이 같습니다: {bottom}")
    if near == far:
        raise InvalidPreconditionError(f"near와 far가 같습니다: {near}")

    lr = 1.0 / (left - right)
    bt = 1.0 / (bottom - top)
    nf = 1.0 / (near - far)
    return _from_rows(
        [
            [-2.0 * lr, 0.0, 0.0, (left + right) * lr],
            [0.0, -2.0 * bt, 0.0, (top + bottom) * bt],
            [0.0, 0.0, 2.0 * nf, (far + near) * nf],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def simple_projection(scale_factor: float) -> np.ndarray:
    """
    z 값을 w로 복사하는 단순 투영 행렬을 생성합니다.

    w' = (z + 1) * scale_factor 가 되어, 멀리 있는 점일수록 w 나눗셈으로 작아집니다.
    """
    return _from_rows(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, scale_factor, scale_factor],
        ]
    )


def look_at(eye: Sequence[float], target: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """뷰(View) 행렬을 생성합니다."""
    eye = _as_vector(eye, 3)
    f = _as_vector(target, 3) - eye
    f_norm = np.linalg.norm(f)
    if f_norm == 0.0:
        raise InvalidPreconditionError("eye와 target이 같은 위치입니다.")
    f = f / f_norm
    s = np.cross(f, _as_vector(up, 3))
    s_norm = np.linalg.norm(s)
    if s_norm == 0.0:
        raise InvalidPreconditionError("up 벡터가 시선 방향과 평행합니다.")
    s = s / s_norm
    u = np.cross(s, f)

    m = np.eye(4, dtype=np.float64)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye)
    m[1, 3] = -np.dot(u, eye)
    m[2, 3] = np.dot(f, eye)
    return _from_rows(m)


# GPU / CSS 출력 --------------------------------------------------------------

def to_float32(matrix: Sequence[float]) -> np.ndarray:
    """GPU 업로드용 float32 column-major 배열을 반환합니다."""
    return _freeze(_as_square(matrix).astype(np.float32).reshape(-1, order="F"))


def matrix_to_css(matrix: Sequence[float]) -> str:
    """CSS transform 속성에 쓸 수 있는 matrix3d(...) 문자열을 반환합니다."""
    m = _as_square(matrix).reshape(-1, order="F")
    values = [np.format_float_positional(v, trim="-") for v in m]
    return "matrix3d(" + ",".join(values) + ")"
