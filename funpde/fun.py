#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
from copy import deepcopy
import numpy as np

# Local imports
from .cheb import chebtech
from .cheb.chebtech import inner as cheb_inner
from .mapping import Mapping

HANDLED_FUNCTIONS = {}
SMALL_EPS = 1e-8


class Fun(np.lib.mixins.NDArrayOperatorsMixin):
    r"""
        Wrapper for (array-valued) Chebyshev approximations on [a, b]
    """
    def __init__(self, *args, **kwargs):
        self.onefun = kwargs.pop('onefun', None)
        op = kwargs.pop('op', None)

        self.domain = np.asarray(kwargs.pop('domain', [-1, 1]), dtype=float)
        if self.domain.size != 2:
            raise ValueError(f'Fun requires a domain [a, b], got {self.domain}!')

        # mapping for [-1, 1] -> [a, b]
        self.mapping = kwargs.pop('mapping', Mapping(ends=self.domain))

        if op is not None and not isinstance(op, np.ndarray):
            def get_op(op):
                # own scope so that op is not overwritten
                def f(x):
                    return op(self.mapping.fwd(x))
                return f

            ops = op if isinstance(op, (list, tuple)) else [op]
            op = [get_op(oop) for oop in ops]

        if self.onefun is None:
            self.onefun = chebtech(op, *args, **kwargs)

        if not isinstance(self.onefun, chebtech):
            raise TypeError('Fun requires a chebtech!')

    @classmethod
    def from_values(cls, values, domain=(-1, 1), **kwargs):
        """ Construct from values at Chebyshev points of the second kind on domain """
        return cls(onefun=chebtech.from_values(values, **kwargs), domain=domain)

    @classmethod
    def from_coeffs(cls, coeffs, domain=(-1, 1), **kwargs):
        return cls(onefun=chebtech.from_coeffs(coeffs, **kwargs), domain=domain)

    @property
    def type(self):
        return 'cheb'

    @property
    def x(self):
        """ The points at which the onefun is sampled, mapped to the domain """
        return self.mapping.fwd(self.onefun.x)

    @property
    def coeffs(self):
        return self.onefun.coeffs

    @property
    def values(self):
        return self.onefun.values

    @property
    def m(self):
        return self.onefun.m

    @property
    def n(self):
        return self.onefun.n

    @property
    def shape(self):
        return self.onefun.shape

    @property
    def ishappy(self):
        return self.onefun.ishappy

    @property
    def eps(self):
        return self.onefun.eps

    @property
    def hscale(self):
        return np.linalg.norm(self.domain, np.inf)

    @property
    def vscale(self):
        return np.max(self.onefun.vscale)

    def __eq__(self, other):
        return isinstance(other, Fun) and np.all(self.domain == other.domain) \
            and self.onefun == other.onefun

    def simplify(self, *args, **kwargs):
        self.onefun = self.onefun.simplify(*args, **kwargs)
        return self

    def prolong(self, Nout):
        self.onefun = self.onefun.prolong(Nout)
        return self

    def norm(self, p=2):
        return norm(self, p=p)

    def lval(self):
        return self.onefun.lval()

    def rval(self):
        return self.onefun.rval()

    def __len__(self):
        return len(self.onefun)

    def __str__(self):
        return 'Fun (%d columns) on %s at %d points.' % (self.m, self.domain, len(self))

    def __repr__(self):
        with np.printoptions(precision=16):
            return f"{self.__class__.__name__}(coeffs={self.coeffs.T!r}, domain={self.domain!r})"

    def __call__(self, x):
        """ x in [a, b] -> [-1, 1] """
        z = self.mapping.bwd(x)
        if np.min(z) < -1 - SMALL_EPS or np.max(z) > 1 + SMALL_EPS:
            raise ValueError('Points [%.12g, %.12g] lie outside the domain %s!'
                             % (np.min(x), np.max(x), self.domain))
        return self.onefun.feval(np.clip(z, -1, 1))

    def __getitem__(self, idx):
        return Fun(domain=self.domain, mapping=self.mapping, onefun=self.onefun[idx])

    def __iter__(self):
        for i in range(self.m):
            yield self[i]

    def __copy__(self):
        return type(self)(domain=self.domain, mapping=self.mapping, onefun=self.onefun)

    def __deepcopy__(self, memo):
        id_self = id(self)
        _copy = memo.get(id_self)
        if _copy is None:
            _copy = type(self)(domain=deepcopy(self.domain, memo),
                               onefun=deepcopy(self.onefun, memo))
            memo[id_self] = _copy
        return _copy

    def __array_ufunc__(self, numpy_ufunc, method, *inputs, **kwargs):
        for x in inputs:
            if isinstance(x, Fun) and not np.all(np.abs(x.domain - self.domain) < SMALL_EPS):
                raise ValueError("Domain mismatch %s != %s!" % (x.domain, self.domain))

        if method != "__call__" or kwargs.get('out') is not None:
            return NotImplemented

        ipts = [x.onefun if isinstance(x, Fun) else x for x in inputs]
        new_fun = numpy_ufunc(*ipts, **kwargs)
        if new_fun is NotImplemented:
            return NotImplemented
        return Fun(domain=self.domain, mapping=self.mapping, onefun=new_fun)

    def __array_function__(self, func, types, args, kwargs):
        if func not in HANDLED_FUNCTIONS:
            return NotImplemented
        if not all(issubclass(t, Fun) for t in types):
            return NotImplemented
        return HANDLED_FUNCTIONS[func](*args, **kwargs)

    def plot(self, *args, **kwargs):
        return plot(self, *args, **kwargs)


class Piecewise:
    """ A function given by Funs on adjacent intervals.

        Only used to accept piecewise data; merge() attempts to resolve it by
        a single smooth Fun on the union of the intervals.
    """
    def __init__(self, funs):
        self.funs = list(funs)
        if len(self.funs) == 0:
            raise ValueError('Piecewise requires at least one piece!')

        ends = np.asarray([f.domain for f in self.funs])
        if np.any(np.abs(ends[1:, 0] - ends[:-1, 1]) > SMALL_EPS):
            raise ValueError('The pieces must be defined on adjacent intervals!')

        self.domain = np.asarray([ends[0, 0], ends[-1, 1]])
        self.breakpoints = np.hstack((ends[:, 0], ends[-1, 1]))

    @property
    def nfuns(self):
        return len(self.funs)

    def __call__(self, x):
        x = np.asarray(x, dtype=float)
        idx = np.clip(np.searchsorted(self.breakpoints, x, side='right') - 1, 0, self.nfuns - 1)
        out = np.empty(x.shape)
        for k, f in enumerate(self.funs):
            mask = idx == k
            if np.any(mask):
                out[mask] = f(x[mask])
        return out

    def merge(self, maxLength=1025, eps=np.finfo(float).eps):
        """ A single Fun on the whole domain, or None if none can be resolved
            with at most maxLength points to the tolerance eps.
        """
        if self.nfuns == 1:
            return self.funs[0]

        f = Fun(op=self, domain=self.domain, maxLength=maxLength, eps=eps)
        return f if f.ishappy else None


def implements(np_function):
    """ Register an __array_function__ implementation """
    def decorator(func):
        HANDLED_FUNCTIONS[np_function] = func
        return func
    return decorator


@implements(np.real)
def real(f):
    return Fun(domain=f.domain, mapping=f.mapping, onefun=np.real(f.onefun))


@implements(np.imag)
def imag(f):
    return Fun(domain=f.domain, mapping=f.mapping, onefun=np.imag(f.onefun))


@implements(np.diff)
def diff(f, n=1, axis=0, *args, **kwargs):
    """ Derivative with respect to x on [a, b] """
    onefun = np.diff(f.onefun, n=n, axis=axis)
    onefun.coeffs = onefun.coeffs * f.mapping.scale**n
    return Fun(domain=f.domain, mapping=f.mapping, onefun=onefun)


@implements(np.sum)
def sum(f, axis=0, *args, **kwargs):
    """ Definite integral over [a, b] """
    return np.sum(f.onefun) / f.mapping.scale


@implements(np.cumsum)
def cumsum(f, *args, **kwargs):
    onefun = np.cumsum(f.onefun)
    onefun.coeffs = onefun.coeffs / f.mapping.scale
    return Fun(domain=f.domain, mapping=f.mapping, onefun=onefun)


@implements(np.hstack)
def hstack(funs):
    funs = list(funs)
    domain = funs[0].domain
    for f in funs[1:]:
        if not np.all(np.abs(f.domain - domain) < SMALL_EPS):
            raise ValueError("Domain mismatch %s != %s!" % (f.domain, domain))
    return Fun(domain=domain, onefun=np.hstack([f.onefun for f in funs]))


@implements(np.copy)
def copy(fun):
    return Fun(domain=fun.domain, mapping=fun.mapping, onefun=np.copy(fun.onefun))


def norm(f, p=2):
    """ L^p norm of each column on the domain (p = 2 or p = inf) """
    if p == 2:
        return np.sqrt(np.abs(np.diag(np.atleast_2d(cheb_inner(f.onefun, f.onefun))))
                       / f.mapping.scale).squeeze()
    elif p == np.inf:
        x = np.linspace(f.domain[0], f.domain[1], max(2001, 4 * len(f)))
        vals = np.reshape(f(x), (x.size, -1))
        return np.max(np.abs(vals), axis=0).squeeze()

    raise ValueError(f'Unsupported norm p = {p}!')


def plot(f, *args, npts=1000, **kwargs):
    import matplotlib.pyplot as plt
    ax = kwargs.pop('ax', None) or plt.gca()
    xs = np.linspace(f.domain[0], f.domain[1], npts)
    return ax.plot(xs, np.real(np.reshape(f(xs), (npts, -1))), *args, **kwargs)
