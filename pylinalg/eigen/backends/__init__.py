"""
Eigen backends.

Available backends:
    CPUQREigenBackend: Shifted QR algorithm on the Hessenberg form
    CPUClosedFormEigenBackend: Characteristic polynomial roots (n <= 3)
"""

from pylinalg.eigen.backends.cpu import CPUQREigenBackend, CPUClosedFormEigenBackend

__all__ = [
    "CPUQREigenBackend",
    "CPUClosedFormEigenBackend",
]
