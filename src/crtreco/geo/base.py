"""Basic detector components shared across multiple geometry elements.

This currently handles:
- :class:`Box` which corresponds to box-shaped detector components.
"""

from dataclasses import dataclass

import numpy as np

__all__ = ["Box"]


@dataclass
class Box:
    """Class which holds all methods associated with a box-shaped component.

    Attributes
    ----------
    boundaries : np.ndarray
        (3, 2) Box boundaries
        - 3 is the number of dimensions
        - 2 corresponds to the lower/upper boundaries along each axis
    """

    boundaries: np.ndarray

    def __init__(self, lower: np.ndarray, upper: np.ndarray):
        """Initialize the box object.

        Parameters
        ----------
        lower : np.ndarray
            (3,) Lower bounds of the box
        upper : np.ndarray
            (3,) Upper bounds of the box
        """
        lower = np.asarray(lower, dtype=np.float64)
        upper = np.asarray(upper, dtype=np.float64)
        assert np.all(lower <= upper), (
            f"The lower bounds of a box ({lower}) must not exceed its "
            f"upper bounds ({upper})."
        )
        self.boundaries = np.vstack((lower, upper)).T

    @property
    def lower(self) -> np.ndarray:
        """Lower bounds of the box.

        Returns
        -------
        np.ndarray
            (3,) Lower bounds of the box
        """
        return self.boundaries[:, 0]

    @property
    def upper(self) -> np.ndarray:
        """Upper bounds of the box.

        Returns
        -------
        np.ndarray
            (3,) Upper bounds of the box
        """
        return self.boundaries[:, 1]

    @property
    def dimensions(self) -> np.ndarray:
        """Dimensions of the box.

        Returns
        -------
        np.ndarray
            (3,) Box dimensions
        """
        return self.boundaries[:, 1] - self.boundaries[:, 0]

    def contains(self, point: np.ndarray) -> bool:
        """Checks whether a point lies inside the box (boundaries included).

        Parameters
        ----------
        point : np.ndarray
            (3,) Coordinates of the point

        Returns
        -------
        bool
            `True` if the point is inside the box
        """
        point = np.asarray(point)
        return bool(np.all((point >= self.lower) & (point <= self.upper)))
