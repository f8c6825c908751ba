#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from functools import lru_cache
from scipy.sparse import spdiags, eye, csr_matrix

from .transform import sptoeplitz, sphankel, spconvert

CACHE_SIZE = 25


@lru_cache(maxsize=CACHE_SIZE)
def diffmat(n, m=1, format='csr'):
    """ Differentiation matrices for the ultraspherical spectral method.

        Maps n Chebyshev T coefficients to n coefficients of the m-th
        derivative in the C^{(m)} basis.
    """
    if m == 0:
        return eye(n, format=format)
    elif m < 0:
        raise ValueError(f'Differentiation order must be non-negative, got {m}!')

    D = spdiags(np.arange(n), 1, n, n)
    for s in range(1, m):
        D = spdiags(2 * s * np.ones(n), 1, n, n) @ D
    return D.asformat(format)


@lru_cache(maxsize=CACHE_SIZE)
def convertmat(n, K1, K2, format='csr'):
    """ Conversion matrix used in the ultraspherical spectral method.

        Maps n coefficients in a C^{K1} basis to n coefficients in a
        C^{K2 + 1} basis. If K2 < K1 this is the identity.
    """
    S = eye(n, format='csr')
    for s in range(K1, K2 + 1):
        S = spconvert(n, s) @ S
    return S.asformat(format)


def multmat(n, a, lam, format='csr', eps=np.finfo(float).eps):
    """ Multiplication matrices for ultraspherical polynomials.

        Forms the n x n matrix representing multiplication by the function
        with Chebyshev T coefficients a in the C^{lam} basis.
    """
    a = np.asarray(a).ravel()

    # pad or truncate the coefficients
    if a.size < n:
        a = np.hstack((a, np.zeros(n - a.size, dtype=a.dtype)))
    else:
        a = a[:n]

    if n == 1:
        return csr_matrix(a[:1].reshape(1, 1)).asformat(format)

    if lam == 0:
        a = a / 2
        M = sptoeplitz(np.hstack((2 * a[0], a[1:]))).tolil()
        H = sphankel(a[1:])
        M[1:, :-1] = M[1:, :-1] + H
    elif lam == 1:
        M = (sptoeplitz(np.hstack((2 * a[0], a[1:]))) / 2).tolil()
        if n > 2:
            M[:-2, :-2] = M[:-2, :-2] - sphankel(a[2:] / 2)
    else:
        # Convert the ChebT coefficients to C^{lam}
        a = convertmat(n, 0, lam - 1) @ a
        m = 2 * n
        M0 = eye(m, format='csr')
        d1 = np.hstack((1, np.arange(2 * lam, 2 * lam + m - 1))) / \
            np.hstack((1, 2 * np.arange(lam + 1, lam + m)))
        d2 = np.arange(1, m + 1) / (2 * np.arange(lam, lam + m))
        Mx = spdiags(np.vstack((d2, d1)), [-1, 1], m, m, format='csr')
        M1 = 2 * lam * Mx

        # three-term recurrence
        M = a[0] * M0 + a[1] * M1
        for nn in range(a.size - 2):
            M2 = 2 * (nn + 1 + lam) / (nn + 2) * (Mx @ M1) - (nn + 2 * lam) / (nn + 2) * M0
            M = M + a[nn + 2] * M2
            M0, M1 = M1, M2
            if np.all(np.abs(a[nn + 3:]) < eps):
                break

        M = M[:n, :n]

    return csr_matrix(M).asformat(format)
