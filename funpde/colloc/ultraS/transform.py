#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
import scipy.linalg as LA
from functools import lru_cache
from scipy.sparse import spdiags, csr_matrix

CACHE_SIZE = 25


def sptoeplitz(col, row=None, format='csr'):
    """ Sparse (symmetric if row is None) Toeplitz matrix """
    col = np.asarray(col).ravel()
    row = col if row is None else np.asarray(row).ravel()
    return csr_matrix(LA.toeplitz(col, row)).asformat(format)


def sphankel(r, format='csr'):
    """ Sparse square Hankel matrix with first column r and zeros below the anti-diagonal """
    r = np.asarray(r).ravel()
    return csr_matrix(LA.hankel(r)).asformat(format)


@lru_cache(maxsize=CACHE_SIZE)
def spconvert(n, lam, format='csr'):
    """ Sparse conversion operator C^{lam} -> C^{lam + 1}.

        For lam = 0 this is the Chebyshev T to U conversion.
    """
    if lam < 0:
        raise ValueError('lam must be non-negative!')

    if lam == 0:
        dg = 0.5 * np.ones(n - 2)
        data = np.hstack((np.array([[1, 0.5], [0, 0]]), np.vstack((dg, -dg))))
    else:
        dg = lam / (lam + np.arange(2, n))
        data = np.hstack((np.array([[1, lam / (lam + 1)], [0, 0]]), np.vstack((dg, -dg))))

    return spdiags(data[:, :n], [0, 2], n, n).asformat(format)
