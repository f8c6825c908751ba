#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from numpy.polynomial.chebyshev import chebvander

from ..cheb import chebpts, polyfit, polyval
from ..cheb import alias as cheb_alias
from ..trig import trigpts, wavenumbers, vals2coeffs, coeffs2vals
from ..trig import alias as trig_alias


def _cheb_apply(fun, array, *args):
    """ Apply a function acting on the columns of a matrix along axis 0 """
    shape = array.shape
    out = fun(np.reshape(array, (shape[0], -1), order='F'), *args)
    return np.reshape(out, (out.shape[0],) + shape[1:], order='F')


def grid(m, n, p):
    """ The tensor grid (r, lam, th) of a ballfun of size (m, n, p) """
    r = chebpts(m)[0]
    lam = np.pi * trigpts(n)
    th = np.pi * trigpts(p)
    return np.meshgrid(r, lam, th, indexing='ij')


def cart2sph(x, y, z):
    x, y, z = np.broadcast_arrays(*[np.asarray(v, dtype=float) for v in (x, y, z)])
    r = np.sqrt(x**2 + y**2 + z**2)
    lam = np.arctan2(y, x)
    with np.errstate(invalid='ignore', divide='ignore'):
        th = np.where(r > 0, np.arccos(np.clip(z / np.where(r > 0, r, 1), -1, 1)), 0.)
    return r, lam, th


def sph2cart(r, lam, th):
    return r * np.sin(th) * np.cos(lam), r * np.sin(th) * np.sin(lam), r * np.cos(th)


class BallFun:
    """ A function on the unit ball in the double Fourier sphere representation

            f(r, lam, th) = sum_{jkl} c_{jkl} T_j(r) exp(i k lam) exp(i l th),

        with r in [-1, 1], lam and th in [-pi, pi). The coefficient tensor
        has shape (m, n, p): Chebyshev in r and centered Fourier coefficients
        in lam and th.
    """
    def __init__(self, coeffs, isreal=False):
        self.coeffs = np.asarray(coeffs)
        if self.coeffs.ndim != 3:
            raise ValueError(f'BallFun requires a 3D coefficient tensor, got shape {self.coeffs.shape}!')
        self.isreal = isreal

    @classmethod
    def from_values(cls, values, isreal=None):
        """ Construct from values on the tensor grid of size values.shape """
        values = np.asarray(values)
        coeffs = _cheb_apply(polyfit, values)
        coeffs = vals2coeffs(vals2coeffs(coeffs, axis=1), axis=2)
        return cls(coeffs, isreal=np.isrealobj(values) if isreal is None else isreal)

    @classmethod
    def from_function(cls, f, shape, coords='cartesian'):
        """ Sample f on the grid of the given shape.

            coords = 'cartesian': f(x, y, z); 'spherical': f(r, lam, th).
        """
        m, n, p = shape
        R, L, T = grid(m, n, p)
        if coords == 'cartesian':
            values = f(*sph2cart(R, L, T))
        elif coords == 'spherical':
            values = f(R, L, T)
        else:
            raise ValueError(f'Unknown coordinates "{coords}"!')
        return cls.from_values(np.broadcast_to(values, R.shape))

    @classmethod
    def from_coeffs(cls, coeffs, isreal=False):
        return cls(coeffs, isreal=isreal)

    @property
    def shape(self):
        return self.coeffs.shape

    @property
    def values(self):
        vals = _cheb_apply(polyval, self.coeffs)
        vals = coeffs2vals(coeffs2vals(vals, axis=1), axis=2)
        return np.real(vals) if self.isreal else vals

    def coeffs3(self, m, n=None, p=None):
        """ The coefficients aliased (or zero padded) to the size (m, n, p) """
        n = m if n is None else n
        p = m if p is None else p
        C = _cheb_apply(cheb_alias, self.coeffs, m)
        C = trig_alias(C, n, axis=1)
        return trig_alias(C, p, axis=2)

    def __call__(self, r, lam, th):
        """ Evaluate at the points (r, lam, th) """
        r, lam, th = np.broadcast_arrays(*[np.asarray(v, dtype=float) for v in (r, lam, th)])
        shape = r.shape
        m, n, p = self.shape

        # split the coefficients of the wave number -n/2 symmetrically
        C = self.coeffs3(m, n + 1 - n % 2, p + 1 - p % 2)

        Tr = chebvander(r.ravel(), m - 1)
        El = np.exp(1j * np.outer(lam.ravel(), wavenumbers(C.shape[1])))
        Et = np.exp(1j * np.outer(th.ravel(), wavenumbers(C.shape[2])))

        tmp = np.einsum('ij,jkl->ikl', Tr, C)
        vals = np.einsum('ikl,ik,il->i', tmp, El, Et)
        vals = np.reshape(vals, shape)
        return np.real(vals) if self.isreal else vals

    def feval_cart(self, x, y, z):
        """ Evaluate at the Cartesian points (x, y, z) in the unit ball """
        return self(*cart2sph(x, y, z))

    def vscale(self):
        return np.max(np.abs(self.values))

    def __repr__(self):
        return f'BallFun(shape={self.shape}, isreal={self.isreal})'
