# _scene.py
"""
Model / View / Projection 행렬 관리

좌표 공간 변환 흐름:
    model space -> (model 행렬) -> world space
    world space -> (view 행렬)  -> view space
    view space  -> (projection 행렬) -> clip space

사용법:
    from _scene import ModelTransform, PerspectiveProjection, SceneTransforms

    scene = SceneTransforms()
    scene.model = ModelTransform(scale=(5, 5, 5), rotation_y=0.3).matrix()
    scene.view = translate(0, 0, -20)
    scene.projection = PerspectiveProjection(aspect=16 / 9).matrix()
    clip = scene.project(cube_corners())
"""

import numpy as np
from dataclasses import dataclass
from math import pi
from typing import Tuple

from _math import (
    compose_all,
    identity,
    orthographic,
    perspective,
    project_points,
    rotate_x,
    rotate_y,
    scale,
    to_float32,
    translate,
)


@dataclass
class ModelTransform:
    """모델 행렬 파라미터 (scale -> rotation_x -> rotation_y -> position 순서로 적용)"""
    scale: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    rotation_x: float = 0.0
    rotation_y: float = 0.0
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def matrix(self) -> np.ndarray:
        # 행렬 곱은 역순으로 읽어야 합니다
        return compose_all(
            [
                translate(*self.position),   # step 4
                rotate_y(self.rotation_y),   # step 3
                rotate_x(self.rotation_x),   # step 2
                scale(*self.scale),          # step 1
            ]
        )


@dataclass
class PerspectiveProjection:
    """원근 투영 파라미터"""
    fovy: float = pi * 0.5
    aspect: float = 1.0
    near: float = 1.0
    far: float = 50.0

    def matrix(self) -> np.ndarray:
        return perspective(self.fovy, self.aspect, self.near, self.far)


@dataclass
class OrthographicProjection:
    """직교 투영 파라미터 (경계 상자의 각 평면)"""
    left: float = -1.0
    right: float = 1.0
    bottom: float = -1.0
    top: float = 1.0
    near: float = 1.0
    far: float = 50.0

    def matrix(self) -> np.ndarray:
        return orthographic(self.left, self.right, self.bottom, self.top, self.near, self.far)


class SceneTransforms:
    """
    한 장면의 model / view / projection 행렬을 보관합니다.

    Attributes
    ----------
    model, view, projection : np.ndarray
        column-major Matrix4 (기본값은 단위 행렬)
    verbose : bool
        진행 상황 출력 여부
    """

    # model, view, projection (mat4x4<f32> 3개 = 192 bytes)을 256 bytes 정렬
    UNIFORM_BYTE_SIZE = 256

    def __init__(self, verbose: bool = False):
        self.model = identity()
        self.view = identity()
        self.projection = identity()
        self.verbose = verbose

    def _log(self, message: str):
        """로그 출력"""
        if self.verbose:
            print(message)

    def model_view_projection(self) -> np.ndarray:
        """projection @ view @ model 합성 행렬"""
        return compose_all([self.projection, self.view, self.model])

    def project(self, points) -> np.ndarray:
        """(N, 3) model space 점들을 clip space (w 나눗셈 이후)로 변환합니다."""
        clip = project_points(self.model_view_projection(), points)
        self._log(f"  {len(clip)}개 정점 투영 완료")
        return clip

    def uniform_data(self) -> np.ndarray:
        """GPU uniform 버퍼에 쓸 float32 데이터 (model, view, projection 순서)"""
        data = np.concatenate(
            [to_float32(self.model), to_float32(self.view), to_float32(self.projection)]
        )
        # uniform 버퍼 크기에 맞춰 0으로 패딩
        pad_floats = self.UNIFORM_BYTE_SIZE // 4 - data.size
        if pad_floats > 0:
            data = np.pad(data, (0, pad_floats), mode="constant")
        self._log(f"  uniform 데이터: {data.nbytes} bytes")
        return data
