# _mesh.py
import numpy as np
from dataclasses import dataclass

# 각 면의 색상 (RGBA)
FACE_COLORS = (
    (0.3, 1.0, 1.0, 1.0),  # 앞면: cyan
    (1.0, 0.3, 0.3, 1.0),  # 뒷면: red
    (0.3, 1.0, 0.3, 1.0),  # 윗면: green
    (0.3, 0.3, 1.0, 1.0),  # 아랫면: blue
    (1.0, 1.0, 0.3, 1.0),  # 오른쪽: yellow
    (1.0, 0.3, 1.0, 1.0),  # 왼쪽: purple
)


@dataclass
class CubeData:
    """큐브 렌더링 데이터 (GPU 버퍼에 그대로 올릴 수 있는 포맷)"""
    positions: np.ndarray  # (24, 3) float32
    colors: np.ndarray     # (24, 4) float32
    elements: np.ndarray   # (36,) uint16


def cube_data() -> CubeData:
    """-1 ~ 1 범위의 큐브 데이터를 생성하여 반환합니다. 면마다 정점 4개를 사용합니다."""
    positions = np.array(
        [
            # 앞면
            [-1.0, -1.0, 1.0], [1.0, -1.0, 1.0], [1.0, 1.0, 1.0], [-1.0, 1.0, 1.0],
            # 뒷면
            [-1.0, -1.0, -1.0], [-1.0, 1.0, -1.0], [1.0, 1.0, -1.0], [1.0, -1.0, -1.0],
            # 윗면
            [-1.0, 1.0, -1.0], [-1.0, 1.0, 1.0], [1.0, 1.0, 1.0], [1.0, 1.0, -1.0],
            # 아랫면
            [-1.0, -1.0, -1.0], [1.0, -1.0, -1.0], [1.0, -1.0, 1.0], [-1.0, -1.0, 1.0],
            # 오른쪽
            [1.0, -1.0, -1.0], [1.0, 1.0, -1.0], [1.0, 1.0, 1.0], [1.0, -1.0, 1.0],
            # 왼쪽
            [-1.0, -1.0, -1.0], [-1.0, -1.0, 1.0], [-1.0, 1.0, 1.0], [-1.0, 1.0, -1.0],
        ],
        dtype=np.float32,
    )

    # 면 색상을 해당 면의 정점 4개에 복사
    colors = np.repeat(np.array(FACE_COLORS, dtype=np.float32), 4, axis=0)

    # 면마다 삼각형 2개: (0, 1, 2), (0, 2, 3)
    base = np.arange(6, dtype=np.uint16)[:, None] * 4
    elements = (base + np.array([0, 1, 2, 0, 2, 3], dtype=np.uint16)).astype(np.uint16).reshape(-1)

    return CubeData(positions=positions, colors=colors, elements=elements)


def cube_corners() -> np.ndarray:
    """큐브의 꼭짓점 8개를 (8, 3) 배열로 반환합니다."""
    signs = (-1.0, 1.0)
    return np.array([[x, y, z] for z in signs for y in signs for x in signs], dtype=np.float64)


def create_wireframe_indices(elements: np.ndarray) -> np.ndarray:
    """삼각형 인덱스 배열에서 와이어프레임(라인 리스트) 인덱스를 생성합니다."""
    elements = np.asarray(elements)
    if len(elements) % 3 != 0:
        raise ValueError(f"삼각형 인덱스 개수는 3의 배수여야 합니다: {len(elements)}")
    triangles = elements.reshape(-1, 3)
    # 삼각형마다 엣지 3개: v0-v1, v1-v2, v2-v0
    lines = triangles[:, [0, 1, 1, 2, 2, 0]]
    return lines.reshape(-1).astype(np.uint32)
