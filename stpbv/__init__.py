"""Sphere-torus-patch bounding volumes, their patches and the matrix helpers behind support-point queries."""

__version__ = "0.1.0"

__all__ = ["matrix3", "matrix4", "sobject", "big_sphere", "geometry", "stp_bv"]