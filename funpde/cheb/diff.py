#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from functools import lru_cache

from .pts import bary_weights, chebpts_type2_compute


def computeDerCoeffs(c):
    """ Chebyshev coefficients of the derivative.

        Uses the recurrence c'_{k-1} = c'_{k+1} + 2 k c_k on each column
        of the coefficient matrix c.
    """
    if c.ndim == 1:
        c = c[:, None]

    n, m = c.shape
    if n == 1:
        return np.zeros((1, m), dtype=c.dtype)

    cout = np.zeros((n - 1, m), dtype=c.dtype)
    v = 2 * np.arange(1, n)[:, None] * c[1:, :]
    cout[n-2::-2, :] = np.cumsum(v[n-2::-2, :], axis=0)
    cout[n-3::-2, :] = np.cumsum(v[n-3::-2, :], axis=0)
    cout[0, :] *= 0.5
    return cout


def diffmat(x, k=1, w=None):
    """ k-th order barycentric differentiation matrix.

        Maps values at the points x to values of the k-th derivative of the
        interpolant at the same points. The weights w default to those of
        Chebyshev points of the second kind.
    """
    x = np.asarray(x, dtype=float)
    N = x.size

    if N == 0:
        return np.zeros((0, 0))
    elif N == 1 or k == 0:
        return np.eye(N) if k == 0 else np.zeros((1, 1))

    if w is None:
        w = bary_weights(N)

    Dx = x[:, None] - x[None, :]

    # use the antisymmetry of the differences for accuracy
    DxRot = np.rot90(Dx, 2)
    idxTo = np.rot90(np.logical_not(np.triu(np.ones((N, N), dtype=bool))))
    Dx[idxTo] = -DxRot[idxTo]

    np.fill_diagonal(Dx, 1.)
    Dxi = 1. / Dx

    Dw = w[None, :] / w[:, None]
    np.fill_diagonal(Dw, 0.)

    D = Dw * Dxi
    np.fill_diagonal(D, 0.)
    np.fill_diagonal(D, -np.sum(D, axis=1))

    for n in range(2, k + 1):
        if n == 2:
            D = 2. * D * (np.diag(D)[:, None] - Dxi)
        else:
            D = n * Dxi * (Dw * np.diag(D)[:, None] - D)
        np.fill_diagonal(D, 0.)
        np.fill_diagonal(D, -np.sum(D, axis=1))

    return D


@lru_cache(maxsize=25)
def colloc_diffmat(n, k=1):
    """ Differentiation matrix on n Chebyshev points of the second kind on [-1, 1] """
    return diffmat(chebpts_type2_compute(n), k)
