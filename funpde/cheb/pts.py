#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import warnings
import numpy as np
from scipy.fft import ifft
from functools import lru_cache


@lru_cache(maxsize=25)
def bary_weights(N):
    """ Barycentric weights for Chebyshev points of the second kind """
    if N == 1:
        return np.ones(1)

    v = np.ones(N)
    v[-2::-2] = -1
    v[[0, -1]] *= 0.5
    return v


@lru_cache(maxsize=25)
def bary_weights_type1(N):
    """ Barycentric weights for Chebyshev points of the first kind """
    if N == 1:
        return np.ones(1)

    t = (2 * np.arange(N - 1, -1, -1) + 1) * np.pi / (2 * N)
    v = np.sin(t)
    v[-2::-2] *= -1
    return v


@lru_cache(maxsize=25)
def quadwts(N):
    """ Clenshaw-Curtis quadrature weights on [-1, 1] """
    if N == 0:
        return np.empty(0)
    elif N == 1:
        return np.array([2.])

    c = 2. / np.hstack((1, 1 - np.arange(2, N, 2)**2))
    c = np.hstack((c, c[1:N // 2][::-1]))
    w = np.real(ifft(c))
    w[0] *= 0.5
    return np.hstack((w, w[0]))


@lru_cache(maxsize=25)
def quadwts_type1(N):
    """ Fejer quadrature weights for Chebyshev points of the first kind """
    if N == 1:
        return np.array([2.])

    k = np.arange(N)
    theta = (2 * k[::-1] + 1) * np.pi / (2 * N)
    j = np.arange(1, N // 2 + 1)
    w = np.ones(N)
    for jj in j:
        w -= 2 * np.cos(2 * jj * theta) / (4 * jj**2 - 1)
    return 2 * w / N


def scaleNodes(x, interval):
    """ Map nodes on [-1, 1] to the interval [a, b] """
    a, b = interval[0], interval[-1]
    if a == -1 and b == 1:
        return x
    return 0.5 * b * (1. + x) + 0.5 * a * (1. - x)


def scaleWeights(w, interval):
    a, b = interval[0], interval[-1]
    if a == -1 and b == 1:
        return w
    return 0.5 * (b - a) * w


def barymat(y, x, w=None):
    """ Barycentric interpolation matrix.

        Maps values at the nodes x (with barycentric weights w) to the values
        of the interpolant at the points y. Rows of points y that coincide with
        a node become the corresponding unit row.
    """
    y = np.atleast_1d(np.asarray(y, dtype=float))
    x = np.asarray(x, dtype=float)
    if w is None:
        w = bary_weights(x.size)

    if x.size == 1:
        return np.ones((y.size, 1))

    # don't warn here since we fix the division by zero below
    with warnings.catch_warnings():
        warnings.filterwarnings('ignore', r'divide by zero')
        warnings.filterwarnings('ignore', r'invalid value encountered')
        P = w[None, :] / (y[:, None] - x[None, :])
        P = P / np.sum(P, axis=1, keepdims=True)

    rows, cols = np.nonzero(y[:, None] == x[None, :])
    P[rows, :] = 0.
    P[rows, cols] = 1.
    return P


@lru_cache(maxsize=25)
def chebpts_type1_compute(N):
    if N == 1:
        return np.zeros(1)
    return np.sin(np.pi * np.arange(-N + 1, N, 2) / (2. * N))


@lru_cache(maxsize=25)
def chebpts_type2_compute(N):
    if N == 1:
        return np.zeros(1)
    return np.sin(np.pi * np.arange(-N + 1, N, 2) / (2. * (N - 1)))


def chebpts_type1(N, interval=None):
    if N == 0:
        return np.empty(0), np.empty(0), np.empty(0), np.empty(0)

    x = chebpts_type1_compute(N)
    w = quadwts_type1(N)
    v = bary_weights_type1(N)
    t = (2 * np.arange(N - 1, -1, -1) + 1) * np.pi / (2 * N)

    if interval is not None:
        x = scaleNodes(x, interval)
        w = scaleWeights(w, interval)

    return x, w, v, t


def chebpts_type2(N, interval=None):
    if N == 0:
        return np.empty(0), np.empty(0), np.empty(0), np.empty(0)

    x = chebpts_type2_compute(N)
    w = quadwts(N)
    v = bary_weights(N)
    t = np.pi * np.arange(N - 1, -1, -1) / max(N - 1, 1)

    if interval is not None:
        x = scaleNodes(x, interval)
        w = scaleWeights(w, interval)

    return x, w, v, t


def chebpts(N, interval=(-1, 1), type=2):
    """ Chebyshev points of the first or second kind in ascending order.

        Returns the points, the quadrature weights, the barycentric weights
        and the angles of the points.
    """
    if type == 1:
        return chebpts_type1(N, interval=interval)
    elif type == 2:
        return chebpts_type2(N, interval=interval)

    raise ValueError(f'Chebyshev points of kind {type} do not exist!')
