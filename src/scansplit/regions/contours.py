from typing import List

import numpy as np
import cv2


def find_external_contours(edge_map: np.ndarray) -> List[np.ndarray]:
    """
    Trace the outer boundaries in an edge map.

    Holes and nested boundaries are not reported. Every non-zero pixel counts
    as foreground. Contours come back as (N, 2) int32 arrays in OpenCV's
    discovery order.
    """
    if edge_map.ndim != 2:
        raise ValueError(f"Edge map must be single-channel, got shape {edge_map.shape}")

    if edge_map.dtype != np.uint8:
        edge_map = cv2.convertScaleAbs(edge_map)

    contours, _ = cv2.findContours(edge_map, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    return [c.reshape(-1, 2) for c in contours]
