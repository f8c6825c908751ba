#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np


def pad_length(n, modulus, residue):
    """ The smallest length >= n that is congruent to residue modulo modulus """
    return n + (residue - n % modulus) % modulus


def centered_slice(n, nout):
    """ The indices of n centered Fourier coefficients among nout of them """
    start = nout // 2 - n // 2
    return slice(start, start + n)


def embed_centered(coeffs, nout, axis=0):
    """ Zero pad centered Fourier coefficients along axis to length nout """
    coeffs = np.moveaxis(np.asarray(coeffs), axis, 0)
    n = coeffs.shape[0]
    if nout < n:
        raise ValueError(f'Cannot embed {n} coefficients into {nout}!')

    out = np.zeros((nout,) + coeffs.shape[1:], dtype=coeffs.dtype)
    out[centered_slice(n, nout)] = coeffs
    return np.moveaxis(out, 0, axis)
