# cube.py
"""
큐브 좌표 변환 데모 (GPU 없이 clip space 결과를 출력)

매 프레임마다 model / view / projection 행렬을 계산하고
큐브 꼭짓점 8개가 clip space의 어디에 놓이는지 출력합니다.

사용법:
    uv run python cube.py
    uv run python cube.py --projection orthographic --frames 5
    uv run python cube.py --projection simple --css
    uv run python cube.py --wireframe --uniform
"""

import argparse
import time
from math import radians, sin

import numpy as np

from _math import matrix_to_css, simple_projection, translate
from _mesh import create_wireframe_indices, cube_corners, cube_data
from _scene import ModelTransform, OrthographicProjection, PerspectiveProjection, SceneTransforms

PROJECTIONS = ("perspective", "orthographic", "simple")

# 단순 투영에서 w에 곱해지는 값
SIMPLE_SCALE_FACTOR = 0.5
# 직교 투영 상자의 절반 높이
ORTHO_HALF_HEIGHT = 10.0


class CubeDemo:
    """레슨의 큐브 장면을 프레임 단위로 계산하는 클래스."""

    def __init__(
        self,
        projection: str = "perspective",
        aspect: float = 1.0,
        fovy: float = radians(90.0),
        near: float = 1.0,
        far: float = 50.0,
        verbose: bool = False,
    ):
        if projection not in PROJECTIONS:
            raise ValueError(f"알 수 없는 투영 방식: '{projection}'. 사용 가능: {PROJECTIONS}")
        self.projection = projection
        self.aspect = aspect
        self.fovy = fovy
        self.near = near
        self.far = far
        self.transforms = SceneTransforms(verbose=verbose)
        self.corners = cube_corners()
        self.cube = cube_data()
        self.wire_indices = create_wireframe_indices(self.cube.elements)

    def compute_model_matrix(self, now: float) -> np.ndarray:
        if self.projection == "simple":
            # 단순 투영은 clip space 근처에서 동작하므로 작게 축소
            factors, position = (0.2, 0.2, 0.2), (0.0, -0.1, 0.0)
        else:
            factors, position = (5.0, 5.0, 5.0), (0.0, 0.0, 0.0)

        self.transforms.model = ModelTransform(
            scale=factors,
            rotation_x=now * 0.0003,
            rotation_y=now * 0.0005,
            position=position,
        ).matrix()
        return self.transforms.model

    def compute_view_matrix(self, now: float) -> np.ndarray:
        if self.projection == "simple":
            # 카메라 없음
            return self.transforms.view
        zoom_in_and_out = 5.0 * sin(now * 0.002)
        self.transforms.view = translate(0.0, 0.0, -20.0 + zoom_in_and_out)
        return self.transforms.view

    def compute_projection_matrix(self) -> np.ndarray:
        if self.projection == "perspective":
            proj = PerspectiveProjection(self.fovy, self.aspect, self.near, self.far)
        elif self.projection == "orthographic":
            half_w = ORTHO_HALF_HEIGHT * self.aspect
            proj = OrthographicProjection(
                -half_w, half_w, -ORTHO_HALF_HEIGHT, ORTHO_HALF_HEIGHT, self.near, self.far
            )
        else:
            self.transforms.projection = simple_projection(SIMPLE_SCALE_FACTOR)
            return self.transforms.projection
        self.transforms.projection = proj.matrix()
        return self.transforms.projection

    def frame(self, now: float) -> np.ndarray:
        """now (밀리초) 시점의 큐브 꼭짓점 clip space 좌표 (8, 3)"""
        self.compute_model_matrix(now)
        self.compute_view_matrix(now)
        self.compute_projection_matrix()
        return self.transforms.project(self.corners)

    def wireframe_segments(self) -> np.ndarray:
        """현재 행렬로 큐브 와이어프레임 엣지를 투영한 (M, 2, 3) 선분 배열"""
        clip = self.transforms.project(self.cube.positions)
        return clip[self.wire_indices].reshape(-1, 2, 3)


def _format_point(p) -> str:
    return "(" + ", ".join(f"{v:+.4f}" for v in p) + ")"


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description='큐브 좌표 변환 데모 (clip space 출력)')
    parser.add_argument('--projection', type=str, default='perspective', choices=PROJECTIONS,
                        help='투영 방식')
    parser.add_argument('--frames', type=int, default=3,
                        help='계산할 프레임 수')
    parser.add_argument('--interval', type=float, default=500.0,
                        help='프레임 간격 (밀리초)')
    parser.add_argument('--aspect', type=float, default=16 / 9,
                        help='화면 비율 (width / height)')
    parser.add_argument('--fov', type=float, default=90.0,
                        help='세로 시야각 (도)')
    parser.add_argument('--near', type=float, default=1.0,
                        help='near 클리핑 평면 거리')
    parser.add_argument('--far', type=float, default=50.0,
                        help='far 클리핑 평면 거리')
    parser.add_argument('--css', action='store_true',
                        help='합성 행렬을 CSS matrix3d 문자열로 출력')
    parser.add_argument('--wireframe', action='store_true',
                        help='와이어프레임 선분 중 clip space 안에 있는 개수 출력')
    parser.add_argument('--uniform', action='store_true',
                        help='GPU uniform 버퍼 크기 출력')
    parser.add_argument('--quiet', action='store_true',
                        help='상세 로그 생략')
    args = parser.parse_args(argv)

    if args.frames < 1:
        parser.error("--frames는 1 이상이어야 합니다.")

    demo = CubeDemo(
        projection=args.projection,
        aspect=args.aspect,
        fovy=radians(args.fov),
        near=args.near,
        far=args.far,
        verbose=not args.quiet,
    )

    print("=" * 60)
    print(f"큐브 좌표 변환 데모 ({args.projection})")
    print("=" * 60)

    start = time.perf_counter() * 1000.0
    for i in range(args.frames):
        now = start + i * args.interval
        print(f"\n[Frame {i + 1}/{args.frames}] t = {now - start:.0f} ms")
        clip = demo.frame(now)
        for corner, p in zip(demo.corners, clip):
            inside = bool(np.all(np.abs(p) <= 1.0))
            print(f"  {_format_point(corner)} -> {_format_point(p)}{'' if inside else '  (clipped)'}")
        if args.css:
            print(f"  {matrix_to_css(demo.transforms.model_view_projection())}")
        if args.wireframe:
            segments = demo.wireframe_segments()
            inside = int(np.all(np.abs(segments) <= 1.0, axis=(1, 2)).sum())
            print(f"  wireframe: {inside}/{len(segments)} 선분이 clip space 안에 있음")
        if args.uniform:
            print(f"  uniform: {demo.transforms.uniform_data().nbytes} bytes")


if __name__ == "__main__":
    main()
