"""
Class Label Encoding.

Maps arbitrary integer class labels to the canonical codes 0..k-1 used by
the supervised feature scorers. Codes follow the ascending order of the
original label values, so labels already coded 0..k-1 keep their values.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from featkit._typing import LabelInput, ensure_label_vector
from featkit.error import InvalidLabelError


class ClassLabels:
    """Encoder between original class labels and canonical codes.

    Attributes:
        k: Number of distinct classes.
        classes: Sorted distinct original labels (int64, length k).
        y: Canonical codes of the fitted labels (int64, a new array).

    Examples:
        >>> codec = ClassLabels.fit([3, 7, 3, 7])
        >>> codec.k
        2
        >>> codec.y
        array([0, 1, 0, 1])
        >>> codec.inverse_transform([1, 0])
        array([7, 3])
    """

    def __init__(self, classes: "np.ndarray", y: "np.ndarray"):
        self.classes = classes
        self.y = y
        self.k = int(classes.shape[0])

    @classmethod
    def fit(cls, labels: LabelInput, size: Optional[int] = None) -> "ClassLabels":
        """Learn the label set and encode ``labels``.

        Args:
            labels: 1-D integer class labels.
            size: Expected number of labels, checked when given.

        Returns:
            Fitted ClassLabels.

        Raises:
            SizeMismatchError: If ``size`` is given and differs.
            InvalidLabelError: If labels are not a 1-D integer vector.
        """
        arr = ensure_label_vector(labels, size=size)
        classes, codes = np.unique(arr, return_inverse=True)
        return cls(classes, codes.astype(np.int64).reshape(-1))

    def transform(self, labels: LabelInput) -> "np.ndarray":
        """Encode labels with the fitted label set.

        Raises:
            InvalidLabelError: If a label was not seen by ``fit``.
        """
        arr = ensure_label_vector(labels)
        if self.k == 0:
            if arr.size:
                raise InvalidLabelError(f"Invalid class label: {arr[0]}")
            return arr

        codes = np.clip(np.searchsorted(self.classes, arr), 0, self.k - 1)
        unknown = self.classes[codes] != arr
        if np.any(unknown):
            bad = arr[np.argmax(unknown)]
            raise InvalidLabelError(f"Invalid class label: {bad}")
        return codes.astype(np.int64)

    def inverse_transform(self, codes: LabelInput) -> "np.ndarray":
        """Map canonical codes back to the original labels.

        Raises:
            InvalidLabelError: If a code is outside 0..k-1.
        """
        arr = ensure_label_vector(codes)
        bad = (arr < 0) | (arr >= self.k)
        if np.any(bad):
            raise InvalidLabelError(f"Invalid class label: {arr[np.argmax(bad)]}")
        return self.classes[arr]

    def __repr__(self) -> str:
        return f"ClassLabels(k={self.k}, classes={self.classes.tolist()})"


__all__ = ["ClassLabels"]
