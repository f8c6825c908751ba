#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
from copy import deepcopy
from numbers import Number

import numpy as np

from .refine import Refine, FunctionContainer
from .detail import polyfit, polyval, clenshaw, prolong, simplify_coeffs
from .detail import happiness_check, vscale
from .pts import chebpts_type2_compute, quadwts
from .diff import computeDerCoeffs

# Directory for numpy implementation of functions
HANDLED_FUNCTIONS = {}

# ufuncs which are linear in the coefficients
LINEAR_UFUNCS = (np.add, np.subtract)


class chebtech(np.lib.mixins.NDArrayOperatorsMixin):
    """ Array-valued Chebyshev series on [-1, 1] (second kind points).

        The columns of the coefficient matrix are independent functions.
    """
    def __init__(self, op=None, *args, **kwargs):
        self.coeffs = kwargs.pop('coeffs', np.zeros((0, 0), order='F'))
        if self.coeffs.ndim == 1:
            self.coeffs = self.coeffs[:, None]
        self.coeffs = np.asfortranarray(self.coeffs)

        # tolerance
        self.eps = kwargs.pop('eps', np.finfo(float).eps)
        self.hscale = kwargs.pop('hscale', 1)
        self.maxLength = kwargs.pop('maxLength', 1 + 2**14)
        self.ishappy = kwargs.pop('ishappy', False)

        if op is not None:
            if isinstance(op, np.ndarray):
                self.coeffs = np.asfortranarray(polyfit(op if op.ndim > 1 else op[:, None]))
            else:
                if isinstance(op, (list, tuple)):
                    op = FunctionContainer(op) if len(op) > 1 else op[0]
                refine = Refine(op, minSamples=min(self.maxLength, kwargs.pop('minSamples', 17)),
                                maxLength=self.maxLength, strategy=kwargs.pop('resample', 'nested'))
                self.populate(refine)

        if self.coeffs.size == 0:
            raise ValueError('Something went wrong during chebtech construction!')

        if not self.ishappy:
            self.ishappy, _ = self.happy()

        if kwargs.pop('simplify', True):
            self.simplify()

    @classmethod
    def from_values(cls, values, *args, **kwargs):
        values = np.asarray(values)
        coeffs = polyfit(values if values.ndim > 1 else values[:, None])
        kwargs.setdefault('ishappy', True)
        kwargs.setdefault('simplify', False)
        return cls(coeffs=coeffs, *args, **kwargs)

    @classmethod
    def from_coeffs(cls, coeffs, *args, **kwargs):
        kwargs.setdefault('simplify', False)
        return cls(coeffs=np.asarray(coeffs), *args, **kwargs)

    def _new(self, coeffs, **kwargs):
        """ A chebtech with our settings and the given coefficients """
        kwargs.setdefault('ishappy', self.ishappy)
        kwargs.setdefault('simplify', False)
        return chebtech(coeffs=coeffs, eps=self.eps, hscale=self.hscale,
                        maxLength=self.maxLength, **kwargs)

    def __deepcopy__(self, memo):
        id_self = id(self)
        _copy = memo.get(id_self)
        if _copy is None:
            _copy = self._new(deepcopy(self.coeffs))
            memo[id_self] = _copy
        return _copy

    def __repr__(self):
        return f'chebtech(coeffs={self.coeffs.T!r})'

    def __len__(self):
        return self.coeffs.shape[0]

    @property
    def n(self):
        """ The number of coefficients """
        return self.coeffs.shape[0]

    @property
    def m(self):
        """ The number of columns """
        return self.coeffs.shape[1]

    @property
    def shape(self):
        return self.coeffs.shape

    @property
    def size(self):
        return self.coeffs.shape[1]

    @property
    def x(self):
        return chebpts_type2_compute(self.n)

    @property
    def values(self):
        return polyval(self.coeffs)

    @property
    def vscale(self):
        return vscale(self.coeffs)

    def happy(self, eps=None):
        eps = self.eps if eps is None else eps
        ishappy, cutoff = happiness_check(self.coeffs, eps)
        return ishappy, cutoff

    def populate(self, refine):
        """ Sample the callable in refine until the coefficients are resolved """
        while True:
            values, giveUp = refine()
            self.coeffs = np.asfortranarray(polyfit(values))
            if giveUp:
                break

            self.ishappy, cutoff = self.happy()
            if self.ishappy:
                self.prolong(cutoff)
                break

    def prolong(self, Nout):
        # Nout < len: chop, Nout > len: zero-pad
        self.coeffs = prolong(self.coeffs, Nout)
        return self

    def simplify(self, eps=None, force=False):
        # nothing to do if we are not happy
        if not force and not self.ishappy:
            return self

        self.coeffs = np.asfortranarray(simplify_coeffs(self.coeffs, eps=self.eps if eps is None else eps))
        return self

    def lval(self):
        """ Value at x = -1 """
        c = np.copy(self.coeffs)
        c[1::2] *= -1
        return np.sum(c, axis=0)

    def rval(self):
        """ Value at x = 1 """
        return np.sum(self.coeffs, axis=0)

    def feval(self, x):
        return clenshaw(x, self.coeffs)

    def __call__(self, x):
        return self.feval(x)

    def __getitem__(self, idx):
        """ Select columns """
        if isinstance(idx, (int, np.integer)):
            if idx < -self.m or idx >= self.m:
                raise IndexError(f'The index {idx} is out of range ({self.m})!')
            return self._new(self.coeffs[:, [idx]])
        elif isinstance(idx, slice):
            return self._new(self.coeffs[:, idx])

        raise TypeError('Invalid argument type!')

    def __eq__(self, other):
        return isinstance(other, chebtech) and self.shape == other.shape \
            and np.all(self.coeffs == other.coeffs)

    def __array_ufunc__(self, numpy_ufunc, method, *inputs, **kwargs):
        if method != '__call__' or kwargs.get('out') is not None:
            return NotImplemented

        for x in inputs:
            if not isinstance(x, (Number, np.ndarray, chebtech)):
                return NotImplemented

        techs = [x for x in inputs if isinstance(x, chebtech)]
        eps = max(t.eps for t in techs)
        maxLength = max(t.maxLength for t in techs)
        ishappy = all(t.ishappy for t in techs)

        # sums and differences are exact in coefficient space
        if numpy_ufunc in LINEAR_UFUNCS and all(isinstance(x, chebtech) for x in inputs):
            n = max(len(x) for x in inputs)
            coeffs = numpy_ufunc(prolong(inputs[0].coeffs, n), prolong(inputs[1].coeffs, n))
            return chebtech(coeffs=coeffs, eps=eps, maxLength=maxLength,
                            ishappy=ishappy, simplify=ishappy)

        # scalings are too
        if numpy_ufunc in (np.multiply, np.negative) or \
                (numpy_ufunc == np.true_divide and isinstance(inputs[0], chebtech)):
            scalars = [x for x in inputs if not isinstance(x, chebtech)]
            if len(techs) == 1 and all(np.ndim(s) == 0 for s in scalars):
                coeffs = numpy_ufunc(*[x.coeffs if isinstance(x, chebtech) else x for x in inputs])
                return chebtech(coeffs=coeffs, eps=eps, maxLength=maxLength,
                                ishappy=ishappy, simplify=False)

        # otherwise we construct the result by sampling
        def op(x):
            return numpy_ufunc(*[f(x) if isinstance(f, chebtech) else f for f in inputs], **kwargs)

        return chebtech(op=op, eps=eps, maxLength=maxLength)

    def __array_function__(self, func, types, args, kwargs):
        if func not in HANDLED_FUNCTIONS:
            return NotImplemented
        if not all(issubclass(t, chebtech) for t in types):
            return NotImplemented
        return HANDLED_FUNCTIONS[func](*args, **kwargs)


def implements(np_function):
    """ Register an __array_function__ implementation """
    def decorator(func):
        HANDLED_FUNCTIONS[np_function] = func
        return func
    return decorator


@implements(np.real)
def real(cheb):
    return cheb._new(np.real(cheb.coeffs))


@implements(np.imag)
def imag(cheb):
    return cheb._new(np.imag(cheb.coeffs))


@implements(np.copy)
def copy(cheb):
    return cheb._new(np.copy(cheb.coeffs))


@implements(np.diff)
def diff(cheb, n=1, axis=0):
    """ The n-th derivative of the chebtech """
    if axis != 0:
        raise NotImplementedError('Axis other than zero not implemented yet!')

    c = cheb.coeffs
    if n >= c.shape[0]:
        return cheb._new(np.zeros((1, c.shape[1]), dtype=c.dtype))

    for _ in range(n):
        c = computeDerCoeffs(c)

    return cheb._new(c)


@implements(np.sum)
def sum(cheb, axis=0, **kwargs):
    """ Definite integral of each column over [-1, 1].

        Uses Int_{-1}^{1} T_k(x) dx = 2 / (1 - k^2) for k even and 0 for k odd.
    """
    n = cheb.n
    if n == 1:
        return np.squeeze(2 * cheb.coeffs[0, :])

    w = np.zeros(n)
    w[0] = 2.
    w[2::2] = 2. / (1. - np.arange(2, n, 2)**2)
    return np.squeeze(w @ cheb.coeffs)


@implements(np.cumsum)
def cumsum(cheb, **kwargs):
    """ Indefinite integral with the constant chosen such that F(-1) = 0.

        With f = sum_j c_j T_j the integral has coefficients
            b_1 = c_0 - c_2 / 2,
            b_r = (c_{r-1} - c_{r+1}) / (2 r) for r > 1,
        and b_0 fixed by the left boundary value.
    """
    n, m = cheb.shape
    c = np.vstack((cheb.coeffs, np.zeros((2, m), dtype=cheb.coeffs.dtype)))
    b = np.zeros((n + 1, m), dtype=cheb.coeffs.dtype)

    b[2:n+1, :] = (c[1:n, :] - c[3:n+2, :]) / (2 * np.arange(2, n + 1))[:, None]
    b[1, :] = c[0, :] - c[2, :] / 2
    v = np.ones(n)
    v[1::2] = -1
    b[0, :] = v @ b[1:, :]

    return cheb._new(b)


@implements(np.hstack)
def hstack(chebs):
    n = max(len(cheb) for cheb in chebs)
    coeffs = np.hstack([prolong(cheb.coeffs, n) for cheb in chebs])
    return chebtech(coeffs=coeffs, simplify=False,
                    ishappy=all(cheb.ishappy for cheb in chebs),
                    eps=max(cheb.eps for cheb in chebs),
                    maxLength=max(cheb.maxLength for cheb in chebs))


def inner(cheb1, cheb2):
    """ L2 inner product on [-1, 1] of the columns of two chebtechs """
    n = len(cheb1) + len(cheb2)
    fvalues = polyval(prolong(cheb1.coeffs, n))
    gvalues = polyval(prolong(cheb2.coeffs, n))
    w = quadwts(n)
    return np.squeeze((np.conj(fvalues).T * w) @ gvalues)
