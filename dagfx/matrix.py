"""Column-major 3x3, 3x4 and 4x4 matrices used for model transforms."""

from __future__ import annotations

from dataclasses import dataclass, field


def _zeros(columns: int, rows: int) -> list[list[float]]:
    return [[0.0] * rows for _ in range(columns)]


def _check_shape(cells: list[list[float]], columns: int, rows: int, kind: str) -> None:
    if len(cells) != columns or any(len(column) != rows for column in cells):
        raise ValueError(f"{kind} needs {columns} columns of {rows} values")


@dataclass
class Matrix3x3:
    """A 3x3 matrix stored as three columns of three values."""

    cells: list[list[float]] = field(default_factory=lambda: _zeros(3, 3))

    def __post_init__(self) -> None:
        _check_shape(self.cells, 3, 3, "Matrix3x3")

    @classmethod
    def identity(cls) -> Matrix3x3:
        return cls([[1.0 if row == col else 0.0 for row in range(3)] for col in range(3)])


@dataclass
class Matrix3x4:
    """An affine matrix: four columns of three rows, the fourth column a translation."""

    cells: list[list[float]] = field(default_factory=lambda: _zeros(4, 3))

    def __post_init__(self) -> None:
        _check_shape(self.cells, 4, 3, "Matrix3x4")

    @classmethod
    def identity(cls) -> Matrix3x4:
        return cls([[1.0 if row == col else 0.0 for row in range(3)] for col in range(4)])

    def translate(self, x: float, y: float, z: float) -> Matrix3x4:
        """Apply a translation in the matrix's own frame, in place; returns self."""
        c = self.cells
        for row in range(3):
            c[3][row] = c[3][row] + c[0][row] * x + c[1][row] * y + c[2][row] * z
        return self


@dataclass
class Matrix4x4:
    """A 4x4 matrix stored as four columns of four values."""

    cells: list[list[float]] = field(default_factory=lambda: _zeros(4, 4))

    def __post_init__(self) -> None:
        _check_shape(self.cells, 4, 4, "Matrix4x4")


def mul_3x4_4x4(m1: Matrix3x4, m2: Matrix4x4) -> Matrix4x4:
    """Return m2 . m1, treating m1 as a 4x4 matrix whose bottom row is (0, 0, 0, 1)."""
    a = m1.cells
    b = m2.cells
    out = _zeros(4, 4)
    for col in range(3):
        r0, r1, r2 = a[col]
        for row in range(4):
            out[col][row] = r0 * b[0][row] + r1 * b[1][row] + r2 * b[2][row]
    d, h, l = a[3]
    for row in range(4):
        out[3][row] = d * b[0][row] + h * b[1][row] + l * b[2][row] + b[3][row]
    return Matrix4x4(out)