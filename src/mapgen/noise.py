"""Noise field generation for element placement and cosmetic textures.

Provides a vectorized 2D gradient (Perlin) noise function and the square
noise fields sampled from it.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray
from PIL import Image

# Reference permutation table, doubled so corner lookups never wrap
_PERMUTATION = np.array(
    [
        151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
        140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
        247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
        57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
        74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
        60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
        65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
        200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
        52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
        207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
        119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
        129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
        218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
        81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
        184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
        222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
    ],
    dtype=np.int64,
)
_PERM = np.concatenate([_PERMUTATION, _PERMUTATION])

_GRADIENTS = np.array([[0, 1], [0, -1], [1, 0], [-1, 0]], dtype=np.float64)

# Raw noise with unit axis gradients spans about [-sqrt(0.5), sqrt(0.5)]
_NORMALIZE = 1.0 / np.sqrt(2.0)

# Seed offsets are drawn from [0, scale * SEED_RANGE_FACTOR)
SEED_RANGE_FACTOR = 100.0


class FilterMode(str, Enum):
    """How a noise field should be sampled when used as a texture."""

    POINT = "point"
    BILINEAR = "bilinear"


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Quintic fade curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a, b, t):
    return a + t * (b - a)


def _gradient(h: NDArray[np.int64], x: NDArray[np.float64], y: NDArray[np.float64]):
    """Dot product between the hashed gradient vector and the offset."""
    g = _GRADIENTS[h % 4]
    return g[..., 0] * x + g[..., 1] * y


def perlin_noise_2d(x: NDArray, y: NDArray) -> NDArray[np.float64]:
    """Sample 2D gradient noise at the given coordinates.

    Smooth and continuous in both axes, deterministic for a given input.

    Args:
        x: Array of x coordinates.
        y: Array of y coordinates, same shape as x.

    Returns:
        Noise values in [0, 1] with the shape of the inputs.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    x_floor = np.floor(x)
    y_floor = np.floor(y)
    xf = x - x_floor
    yf = y - y_floor

    px0 = x_floor.astype(np.int64) & 255
    py0 = y_floor.astype(np.int64) & 255
    px1 = px0 + 1
    py1 = py0 + 1

    u = _fade(xf)
    v = _fade(yf)

    g00 = _gradient(_PERM[_PERM[px0] + py0], xf, yf)
    g01 = _gradient(_PERM[_PERM[px0] + py1], xf, yf - 1)
    g10 = _gradient(_PERM[_PERM[px1] + py0], xf - 1, yf)
    g11 = _gradient(_PERM[_PERM[px1] + py1], xf - 1, yf - 1)

    x1 = _lerp(g00, g10, u)
    x2 = _lerp(g01, g11, u)
    raw = _lerp(x1, x2, v)

    return np.clip(0.5 + raw * _NORMALIZE, 0.0, 1.0)


@dataclass(frozen=True, eq=False)
class NoiseField:
    """Square grid of noise samples, indexed ``values[y, x]``.

    The values array is read-only once the field is built.
    """

    values: NDArray[np.float32]
    seed_x: float
    seed_y: float
    scale: float
    filter_mode: FilterMode = FilterMode.POINT

    def __post_init__(self) -> None:
        self.values.flags.writeable = False

    @property
    def resolution(self) -> int:
        return self.values.shape[1] if self.values.ndim == 2 else 0

    def value_at(self, x: int, y: int) -> float:
        """Return the sample for grid cell (x, y)."""
        return float(self.values[y, x])

    def to_image(self, size: int | None = None) -> Image.Image:
        """Render the field as a grayscale image.

        Args:
            size: Optional output edge length. Resampling follows the
                field's filter mode.

        Returns:
            PIL image in mode "L".
        """
        pixels = np.round(self.values * 255).astype(np.uint8)
        image = Image.fromarray(pixels)
        if size is not None and size != self.resolution:
            resample = (
                Image.Resampling.BILINEAR
                if self.filter_mode == FilterMode.BILINEAR
                else Image.Resampling.NEAREST
            )
            image = image.resize((size, size), resample=resample)
        return image


def sample_noise_field(
    resolution: int,
    scale: float,
    seed_x: float,
    seed_y: float,
    filter_mode: FilterMode = FilterMode.POINT,
) -> NoiseField:
    """Build a noise field from explicit seed offsets.

    Cell (x, y) samples the noise function at
    ``(seed_x + x / resolution * scale, seed_y + y / resolution * scale)``.

    Args:
        resolution: Grid edge length in cells.
        scale: Spatial frequency of the sampled region.
        seed_x: Offset into the noise domain along x.
        seed_y: Offset into the noise domain along y.
        filter_mode: Texture sampling mode recorded on the field.

    Returns:
        NoiseField of shape (resolution, resolution), or 0x0 when
        resolution <= 0.
    """
    rez = max(resolution, 0)
    steps = np.arange(rez, dtype=np.float64) / rez * scale if rez else np.zeros(0)
    ys, xs = np.meshgrid(seed_y + steps, seed_x + steps, indexing="ij")

    values = perlin_noise_2d(xs, ys).astype(np.float32)

    return NoiseField(
        values=values,
        seed_x=seed_x,
        seed_y=seed_y,
        scale=scale,
        filter_mode=filter_mode,
    )


def generate_noise_field(
    resolution: int,
    scale: float,
    rng: np.random.Generator,
    filter_mode: FilterMode = FilterMode.POINT,
) -> NoiseField:
    """Generate a noise field from a freshly drawn region of the noise domain.

    Both seed offsets are drawn uniformly from ``[0, scale * 100)`` so that
    repeated generations differ even with identical parameters.

    Args:
        resolution: Grid edge length in cells.
        scale: Spatial frequency of the sampled region.
        rng: Random number generator for the seed offsets.
        filter_mode: Texture sampling mode recorded on the field.

    Returns:
        New NoiseField.
    """
    seed_x = float(rng.random()) * scale * SEED_RANGE_FACTOR
    seed_y = float(rng.random()) * scale * SEED_RANGE_FACTOR
    return sample_noise_field(resolution, scale, seed_x, seed_y, filter_mode)
