"""String distance kernels."""

from .edit import edit_distance, indel_distance

__all__ = ["edit_distance", "indel_distance"]
