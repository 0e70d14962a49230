"""
Shared fixtures for imgcomp tests.
Creates isolated temporary directories, synthetic images and fake samplers.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
from PIL import Image

from imgcomp.core.sampler import DecodeError


@pytest.fixture(autouse=True)
def isolated_cache_home(tmp_path, monkeypatch):
    """Point the default cache location at a per-test directory."""
    cache_home = tmp_path / "xdg-cache"
    monkeypatch.setenv("XDG_CACHE_HOME", str(cache_home))
    return cache_home


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def cache_path(tmp_path) -> Path:
    return tmp_path / "fingerprints.sqlite"


def horizontal_gradient(width: int = 64, height: int = 64) -> np.ndarray:
    """Brightness increases left to right; every row is identical."""
    row = np.linspace(0, 255, width).astype(np.uint8)
    return np.tile(row, (height, 1))


def vertical_gradient(width: int = 64, height: int = 64) -> np.ndarray:
    """Brightness increases top to bottom; every column is identical."""
    return horizontal_gradient(height, width).T.copy()


def save_image(path: Path, pixels: np.ndarray) -> Path:
    Image.fromarray(pixels).save(path)
    return path


@pytest.fixture
def test_images(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled image files:
    - 2 identical horizontal gradients (similar pair)
    - 1 vertical gradient (different from both)
    - 1 corrupt file with an image extension
    - 1 non-image document
    """
    files = {}
    files["gradient_a"] = save_image(temp_dir / "gradient_a.png", horizontal_gradient())
    files["gradient_b"] = save_image(temp_dir / "gradient_b.png", horizontal_gradient())
    files["vertical"] = save_image(temp_dir / "vertical.png", vertical_gradient())

    files["corrupt"] = temp_dir / "corrupt.jpg"
    files["corrupt"].write_bytes(b"definitely not a jpeg")

    files["document"] = temp_dir / "document.pdf"
    files["document"].write_bytes(b"%PDF-1.4")
    return files


class FakeSampler:
    """
    Sampler double: returns a fixed grid per path (or a default grid) and
    records every call. Paths listed in `broken` raise DecodeError.
    """

    def __init__(
        self,
        grids: Optional[Dict[str, np.ndarray]] = None,
        default: Optional[np.ndarray] = None,
        broken: Optional[List[str]] = None
    ):
        self.grids = grids or {}
        self.default = default
        self.broken = set(broken or [])
        self.calls: List[Tuple[str, int, int]] = []

    def sample(self, path: str, width: int, height: int) -> np.ndarray:
        self.calls.append((path, width, height))
        if path in self.broken:
            raise DecodeError(f"cannot decode {path}")
        grid = self.grids.get(path, self.default)
        if grid is None:
            grid = np.arange(width * height, dtype=np.int64).reshape(height, width)
        return np.asarray(grid)


@pytest.fixture
def fake_sampler() -> FakeSampler:
    return FakeSampler()
