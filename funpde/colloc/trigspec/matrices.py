#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from functools import lru_cache
from scipy.sparse import diags, eye

from ..ultraS.transform import sptoeplitz
from ...trig.transform import wavenumbers

CACHE_SIZE = 25


@lru_cache(maxsize=CACHE_SIZE)
def diffmat(n, m=1, format='csr', flag=False):
    """ Differentiation matrices for the trigspec spectral method

    This matrix maps n centered Fourier coefficients to the n coefficients
    of the m-th derivative. For n even and m odd the coefficient of the
    wave number -n/2 is set to zero, unless flag is set.
    """
    if m == 0:
        return eye(n, format=format)
    elif m < 0:
        raise ValueError(f'Differentiation order must be non-negative, got {m}!')

    k = wavenumbers(n).astype(float)
    if n % 2 == 0 and m % 2 == 1 and not flag:
        k[0] = 0.

    return diags((1j * k)**m, 0, shape=(n, n), format=format)


def multmat(n, a, format='csr'):
    """ Multiplication matrices for trigspec

        Forms the n x n matrix that represents multiplication by the function
        with centered Fourier coefficients a.
    """
    c = np.asarray(a).ravel()
    k = c.size

    # a scalar
    if k == 1:
        return c.item() * eye(n, format=format)

    # make an even number of coefficients symmetric
    if k % 2 == 0:
        c = np.hstack((0.5 * c[0], c[1:], 0.5 * c[0]))
        k = c.size

    # position of the constant term
    Na = k // 2

    if Na < n:
        col = np.hstack((c[Na:], np.zeros(n - Na - 1, dtype=c.dtype)))
        row = np.hstack((c[Na::-1], np.zeros(n - Na - 1, dtype=c.dtype)))
    else:
        col = c[Na:Na + n]
        row = c[Na::-1][:n]

    return sptoeplitz(col, row, format=format)
