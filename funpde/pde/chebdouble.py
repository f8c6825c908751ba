#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
from numbers import Number
import numpy as np

from ..cheb import chebpts, colloc_diffmat
from ..cheb.pts import quadwts
from ..cheb.detail import polyfit
from ..cheb.chebtech import cumsum as cheb_cumsum, chebtech

HANDLED_FUNCTIONS = {}


class ChebDouble(np.lib.mixins.NDArrayOperatorsMixin):
    """ Values of a function at the Chebyshev points of the second kind on
        the domain [a, b], tagged with the highest order of differentiation
        that has been applied to produce them.

        This is what the right hand sides and boundary conditions handed to
        pde15s see in place of the dependent variables.
    """
    def __init__(self, values, domain=(-1, 1), diffOrder=0):
        self.values = np.asarray(values)
        self.domain = np.asarray(domain, dtype=float)
        self.diffOrder = diffOrder

    @property
    def n(self):
        return self.values.shape[0]

    @property
    def x(self):
        return chebpts(self.n, self.domain)[0]

    @property
    def scale(self):
        return 2. / (self.domain[-1] - self.domain[0])

    def __len__(self):
        return self.values.shape[0]

    def __float__(self):
        return float(self.values.ravel()[0])

    def __array__(self, dtype=None, copy=None):
        return np.asarray(self.values, dtype=dtype)

    def __getitem__(self, idx):
        """ u[0] and u[-1] are the values at the left and right endpoints """
        return ChebDouble(np.atleast_1d(self.values[idx]), domain=self.domain,
                          diffOrder=self.diffOrder)

    def __repr__(self):
        return f'{self.__class__.__name__}(values={self.values!r}, diffOrder={self.diffOrder})'

    def __array_ufunc__(self, numpy_ufunc, method, *inputs, **kwargs):
        if method != '__call__' or kwargs.get('out') is not None:
            return NotImplemented

        for x in inputs:
            if not isinstance(x, (Number, np.ndarray, ChebDouble)):
                return NotImplemented

        order = max(x.diffOrder for x in inputs if isinstance(x, ChebDouble))
        values = numpy_ufunc(*[x.values if isinstance(x, ChebDouble) else x for x in inputs], **kwargs)
        return ChebDouble(values, domain=self.domain, diffOrder=order)

    def __array_function__(self, func, types, args, kwargs):
        if func not in HANDLED_FUNCTIONS:
            return NotImplemented
        if not all(issubclass(t, (ChebDouble, np.ndarray)) for t in types):
            return NotImplemented
        return HANDLED_FUNCTIONS[func](*args, **kwargs)


def implements(np_function):
    """ Register an __array_function__ implementation """
    def decorator(func):
        HANDLED_FUNCTIONS[np_function] = func
        return func
    return decorator


@implements(np.diff)
def diff(u, n=1, axis=0, *args, **kwargs):
    """ The n-th derivative on the collocation grid """
    if n == 0:
        return u
    D = colloc_diffmat(len(u), n) * u.scale**n
    return ChebDouble(D @ u.values, domain=u.domain, diffOrder=u.diffOrder + n)


@implements(np.sum)
def sum(u, *args, **kwargs):
    """ Definite integral over the domain by Clenshaw-Curtis quadrature """
    w = quadwts(len(u)) / u.scale
    return ChebDouble(np.atleast_1d(w @ u.values), domain=u.domain, diffOrder=u.diffOrder)


@implements(np.cumsum)
def cumsum(u, *args, **kwargs):
    """ Indefinite integral vanishing at the left endpoint """
    tech = cheb_cumsum(chebtech.from_coeffs(polyfit(u.values)))
    # the integral has one more coefficient, sample it on the same grid
    values = tech.feval(chebpts(len(u))[0]) / u.scale
    return ChebDouble(values, domain=u.domain, diffOrder=u.diffOrder - 1)


def fred(K, u):
    """ Fredholm integral operator with kernel K(x, y) applied to u:

            (F u)(x) = int_a^b K(x, y) u(y) dy
    """
    x, w = chebpts(len(u), u.domain)[:2]
    Kxy = np.broadcast_to(K(x[:, None], x[None, :]), (x.size, x.size))
    return ChebDouble(Kxy @ (w * u.values), domain=u.domain, diffOrder=u.diffOrder)


def volt(K, u):
    """ Volterra integral operator with kernel K(x, y) applied to u:

            (V u)(x) = int_a^x K(x, y) u(y) dy
    """
    x = chebpts(len(u), u.domain)[0]
    Kxy = np.broadcast_to(K(x[:, None], x[None, :]), (x.size, x.size))
    values = np.empty(x.size, dtype=np.result_type(Kxy, u.values))
    for i in range(x.size):
        values[i] = cumsum(ChebDouble(Kxy[i, :] * u.values, domain=u.domain)).values[i]
    return ChebDouble(values, domain=u.domain, diffOrder=u.diffOrder)


def order(v):
    """ The differential order of each component of v """
    if isinstance(v, ChebDouble):
        return [v.diffOrder]
    elif isinstance(v, (list, tuple)):
        return [o for w in v for o in order(w)]
    return [0]


def as_values(v, n):
    """ Flatten the result of a right hand side into an n x k matrix """
    if isinstance(v, (list, tuple)):
        return np.hstack([as_values(w, n) for w in v])

    values = np.asarray(v.values if isinstance(v, ChebDouble) else v)
    if values.size == 1:
        return np.full((n, 1), values.item())
    return np.reshape(values, (n, -1), order='F')
