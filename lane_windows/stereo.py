from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

PathLike = Union[str, Path]


@dataclass(frozen=True)
class StereoImageFileInfo:
    name: str
    left_image_path: PathLike
    right_image_path: PathLike


def _read(path: PathLike, flags: int) -> np.ndarray:
    img = cv2.imread(str(path), flags)
    if img is None:
        raise FileNotFoundError(f"Could not read image: {path}")
    return img


@dataclass
class StereoImage:
    """A named left/right camera image pair."""

    left: np.ndarray
    right: np.ndarray
    name: Optional[str] = None

    @classmethod
    def load(cls, info: StereoImageFileInfo, flags: int = cv2.IMREAD_COLOR) -> "StereoImage":
        return cls(
            left=_read(info.left_image_path, flags),
            right=_read(info.right_image_path, flags),
            name=info.name,
        )

    def convert(self, code: int) -> "StereoImage":
        """Apply a ``cv2.cvtColor`` conversion code to both images."""
        return replace(self, left=cv2.cvtColor(self.left, code), right=cv2.cvtColor(self.right, code))

    def copy(self) -> "StereoImage":
        return replace(self, left=self.left.copy(), right=self.right.copy())

    @property
    def size(self):
        h, w = self.left.shape[:2]
        return w, h
