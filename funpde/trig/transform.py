#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from scipy.fft import ifft, fft, ifftshift, fftshift


def trigpts(n, interval=(-1, 1)):
    """ n equispaced points in [a, b) """
    a, b = interval
    return a + (b - a) * np.arange(n) / n


def wavenumbers(n):
    """ The wave numbers of n centered Fourier coefficients.

        n odd:  -(n-1)/2, ..., (n-1)/2
        n even: -n/2, ..., n/2 - 1
    """
    return np.arange(n) - n // 2


def _even_odd_fix(n, axis, ndim):
    shape = [1] * ndim
    shape[axis] = n
    return np.reshape((-1.)**wavenumbers(n), shape)


def vals2coeffs(values, axis=0):
    """ Convert values at n equally spaced points in [-1, 1) to n trigonometric coefficients

    If n is odd:
          F(x) = C(1)*z^(-(n-1)/2) + C(2)*z^(-(n-1)/2+1) + ... + C(n)*z^((n-1)/2)

    If n is even:
          F(x) = C(1)*z^(-n/2) + C(2)*z^(-n/2+1) + ... + C(n)*z^(n/2-1)

    where z = exp(1j pi x).
    """
    values = np.asarray(values)
    n = values.shape[axis]

    if n <= 1:
        return np.array(values, dtype=complex, copy=True)

    coeffs = (1. / n) * fftshift(fft(values, axis=axis), axes=axis)

    # The FFT interpolates on [0, 2 pi); the shift to [-pi, pi) multiplies
    # the k-th coefficient by (-1)^k
    return _even_odd_fix(n, axis, values.ndim) * coeffs


def coeffs2vals(coeffs, axis=0):
    """ Convert centered Fourier coefficients to values at n equally spaced points in [-1, 1) """
    coeffs = np.asarray(coeffs)
    n = coeffs.shape[axis]

    if n <= 1:
        return np.array(coeffs, copy=True)

    coeffs = _even_odd_fix(n, axis, coeffs.ndim) * coeffs
    return ifft(ifftshift(n * coeffs, axes=axis), axis=axis)


def alias(coeffs, m, axis=0):
    """ Alias n centered Fourier coefficients to m coefficients.

        For m < n the coefficient of wave number k is folded onto the wave
        number k' congruent to k modulo m, picking up the sign (-1)^(k - k')
        of exp(i pi (k - k') x) on the grid trigpts(m). For m > n the
        coefficients are zero padded; for even n the coefficient of -n/2 is
        split evenly between -n/2 and n/2.
    """
    coeffs = np.moveaxis(np.asarray(coeffs), axis, 0)
    n = coeffs.shape[0]
    out = np.zeros((m,) + coeffs.shape[1:], dtype=np.result_type(coeffs, complex))

    if m == n:
        out[...] = coeffs
    elif m > n:
        c = coeffs
        k = wavenumbers(n)
        if n % 2 == 0:
            c = np.concatenate((0.5 * c[:1], c[1:], 0.5 * c[:1]), axis=0)
            k = np.hstack((k, n // 2))
        out[k + m // 2] = c
    else:
        k = wavenumbers(n)
        idx = np.mod(k + m // 2, m)
        sign = (-1.)**np.mod(k - idx + m // 2, 2)
        np.add.at(out, idx, np.reshape(sign, (n,) + (1,) * (coeffs.ndim - 1)) * coeffs)

    return np.moveaxis(out, 0, axis)
