#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from scipy.fft import fft, ifft


def _as_columns(a):
    a = np.asarray(a)
    if a.ndim == 1:
        return a[:, None], True
    return a, False


def polyfit(values):
    """ Chebyshev coefficients of the polynomial interpolating the columns of
        values at Chebyshev points of the second kind (ascending order).
    """
    values, flat = _as_columns(values)
    n = values.shape[0]

    if n <= 1:
        coeffs = np.copy(values)
    else:
        tmp = np.vstack((values[n-1:0:-1, :], values[:n-1, :]))
        coeffs = ifft(tmp, axis=0)
        if np.isrealobj(values):
            coeffs = np.real(coeffs)
        coeffs = coeffs[:n, :]
        coeffs[1:n-1, :] *= 2

    coeffs = np.asfortranarray(coeffs)
    return coeffs[:, 0] if flat else coeffs


def polyval(coeffs):
    """ Values at Chebyshev points of the second kind from Chebyshev coefficients. """
    coeffs, flat = _as_columns(coeffs)
    n = coeffs.shape[0]

    if n <= 1:
        values = np.copy(coeffs)
    else:
        c = np.copy(coeffs)
        c[1:n-1, :] *= 0.5
        tmp = np.vstack((c, c[n-2:0:-1, :]))
        values = fft(tmp, axis=0)
        if np.isrealobj(coeffs):
            values = np.real(values)
        values = values[n-1::-1, :]

    values = np.asfortranarray(values)
    return values[:, 0] if flat else values


def clenshaw(x, coeffs):
    """ Evaluate the Chebyshev series with coefficient columns coeffs at x. """
    coeffs, _ = _as_columns(coeffs)
    x = np.asarray(x)
    shape = x.shape
    x = x.reshape(-1, 1)

    b1 = np.zeros((x.shape[0], coeffs.shape[1]), dtype=np.result_type(x, coeffs))
    b2 = np.zeros_like(b1)
    for k in range(coeffs.shape[0] - 1, 0, -1):
        b1, b2 = coeffs[k, :] + 2 * x * b1 - b2, b1

    y = coeffs[0, :] + x * b1 - b2
    if coeffs.shape[1] == 1:
        return y.reshape(shape)
    return y.reshape(shape + (coeffs.shape[1],))


def prolong(coeffs, Nout):
    """ Chop or zero-pad the coefficient columns to length Nout """
    coeffs, flat = _as_columns(coeffs)
    n, m = coeffs.shape

    if Nout <= n:
        out = np.asfortranarray(coeffs[:Nout, :])
    else:
        out = np.zeros((Nout, m), dtype=coeffs.dtype, order='F')
        out[:n, :] = coeffs

    return out[:, 0] if flat else out


def alias(coeffs, m):
    """ Aliased Chebyshev coefficients.

        Returns the m coefficients of the polynomial that agrees with the
        series at m Chebyshev points of the second kind.
    """
    coeffs, flat = _as_columns(coeffs)
    n = coeffs.shape[0]

    if m >= n:
        out = prolong(coeffs, m)
    elif m == 1:
        # T_k(0) = cos(k pi / 2)
        out = np.sum(coeffs[0::4, :], axis=0, keepdims=True) - np.sum(coeffs[2::4, :], axis=0, keepdims=True)
    else:
        out = np.array(coeffs[:m, :], copy=True)
        j = np.arange(m, n)
        k = np.abs(np.mod(j + m - 2, 2 * m - 2) - m + 2)
        np.add.at(out, k, coeffs[m:, :])

    return out[:, 0] if flat else out


def standardChop(coeffs, tol=np.finfo(float).eps):
    """ Find a cutoff for the Chebyshev series in coeffs.

        Implements the plateau detection of Aurentz & Trefethen. Returns the
        number of coefficients to keep; if no plateau is found the full length
        is returned.
    """
    tol = min(tol, 1.)
    coeffs = np.asarray(coeffs).ravel()
    n = coeffs.size
    cutoff = n

    if n < 17:
        return cutoff

    # Step 1: monotone envelope normalized to begin at 1
    b = np.abs(coeffs)
    m = np.maximum.accumulate(b[::-1])[::-1]
    if m[0] == 0.:
        return 1

    envelope = m / m[0]

    # Step 2: scan for a plateau
    plateauPoint = 0
    for j in range(2, n + 1):
        j2 = int(round(1.25 * j + 5))
        if j2 > n:
            return cutoff

        e1 = envelope[j - 1]
        e2 = envelope[j2 - 1]
        r = 3 * (1 - np.log(e1) / np.log(tol)) if e1 > 0 else 0.
        if e1 == 0 or e2 / e1 > r:
            plateauPoint = j - 1
            break

    # Step 3: fix the cutoff at a point where the envelope plus a linear
    # function is smallest
    if envelope[plateauPoint - 1] == 0.:
        return plateauPoint

    j3 = np.sum(envelope >= tol**(7./6.))
    if j3 < j2:
        j2 = j3 + 1
        envelope[j2 - 1] = tol**(7./6.)

    cc = np.log10(envelope[:j2])
    cc += np.linspace(0, (-1./3.) * np.log10(tol), j2)
    d = np.argmin(cc)
    return max(int(d), 1)


def vscale(coeffs):
    """ Column-wise vertical scale, i.e. max-abs of the values on the grid """
    coeffs, _ = _as_columns(coeffs)
    if coeffs.shape[0] == 0:
        return np.zeros(coeffs.shape[1])
    return np.max(np.abs(polyval(coeffs)), axis=0)


def happiness_check(coeffs, tol=np.finfo(float).eps, vscl=None):
    """ Standard happiness check.

        Chops each column relative to its vertical scale. Returns whether all
        columns were resolved and the number of coefficients to keep.
    """
    coeffs, _ = _as_columns(coeffs)
    n, m = coeffs.shape
    vscl = vscale(coeffs) if vscl is None else np.broadcast_to(vscl, (m,))
    tol = np.broadcast_to(tol, (m,))

    cutoff = np.empty(m, dtype=int)
    for k in range(m):
        if vscl[k] == 0:
            cutoff[k] = 1
            continue
        cutoff[k] = standardChop(coeffs[:, k] / vscl[k], tol[k])

    ishappy = bool(np.all(cutoff < n))
    return ishappy, int(np.max(cutoff)) if m > 0 else 0


def classic_check(coeffs, tol=np.finfo(float).eps, vscl=None):
    """ The classic tail test for happiness.

        A series of length n is happy when its last min(n, max(5, (n-1)/8))
        coefficients, relative to the vertical scale, are all below tol.
        Returns (ishappy, epslevel, cutoff).
    """
    coeffs, _ = _as_columns(coeffs)
    n = coeffs.shape[0]
    vscl = np.max(vscale(coeffs)) if vscl is None else vscl

    if vscl == 0 or n == 0:
        return True, tol, 1

    ac = np.max(np.abs(coeffs), axis=1) / vscl
    testLength = min(n, max(5, int(round((n - 1) / 8))))
    ishappy = bool(np.all(ac[n - testLength:] < tol))

    if not ishappy:
        return False, tol, n

    # keep everything up to the last significant coefficient
    significant = np.nonzero(ac >= tol)[0]
    cutoff = int(significant[-1]) + 1 if significant.size > 0 else 1
    epslevel = max(tol, np.max(ac[n - testLength:]))
    return True, epslevel, cutoff


def simplify_coeffs(coeffs, eps=np.finfo(float).eps):
    """ Chop trailing coefficients that are below eps relative to the vertical scale. """
    coeffs, flat = _as_columns(coeffs)
    n = coeffs.shape[0]
    if n <= 1:
        return coeffs[:, 0] if flat else coeffs

    # Pad to a length at which standardChop is able to find plateaus
    N = max(17, int(round(1.25 * n + 5)))
    padded = prolong(coeffs, N)
    ishappy, cutoff = happiness_check(padded, eps)
    if not ishappy:
        return coeffs[:, 0] if flat else coeffs

    out = prolong(coeffs, min(cutoff, n))
    return out[:, 0] if flat else out
