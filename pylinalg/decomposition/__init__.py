"""
Matrix decompositions.

All decompositions are built from the same Householder primitive
(except LU, which uses Gaussian elimination with partial pivoting).
Each returns a frozen result dataclass holding Matrix factors.

Public API:
    householder_transform(x)  - reflector H with H·x = α·e₁
    qr_decompose(A)           - A = QR
    qr_solve(A, b)            - least squares via QR
    lu_decompose(A)           - PA = LU
    hessenberg_decompose(A)   - A = QHQᵗ
"""

from pylinalg.decomposition.householder import householder_transform
from pylinalg.decomposition.qr import QRResult, qr_decompose, qr_solve
from pylinalg.decomposition.lu import LUResult, lu_decompose
from pylinalg.decomposition.hessenberg import HessenbergResult, hessenberg_decompose

__all__ = [
    # Householder
    "householder_transform",
    # QR decomposition
    "QRResult",
    "qr_decompose",
    "qr_solve",
    # LU decomposition
    "LUResult",
    "lu_decompose",
    # Hessenberg
    "HessenbergResult",
    "hessenberg_decompose",
]
