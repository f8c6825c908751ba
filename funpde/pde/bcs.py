#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import warnings
from numbers import Number
import numpy as np

from ..cheb import colloc_diffmat
from ..errors import ConfigError
from .chebdouble import ChebDouble, as_values
from .parse import normalize

SIDES = ('left', 'middle', 'right')
TAGS = ('dirichlet', 'neumann')


class PointConstraint:
    """ A linear condition on variable var at one of the endpoints:

            dirichlet: u(a) = value           neumann: u'(a) = value
            periodic:  u^(k)(a) - u^(k)(b) = 0

        row(n) is the constraint row over the stacked syssize * n unknowns.
        The value may be a number or a function of t.
    """
    def __init__(self, kind, side, var, syssize, domain, value=0., order=0):
        self.kind = kind
        self.side = side
        self.var = var
        self.syssize = syssize
        self.domain = np.asarray(domain, dtype=float)
        self.value = value
        self.order = order

    @property
    def size(self):
        return 1

    @property
    def scale(self):
        return 2. / (self.domain[-1] - self.domain[0])

    def functional(self, n):
        """ The row acting on the values of a single variable """
        if self.kind == 'dirichlet':
            A = np.zeros(n)
            A[0 if self.side == 'left' else -1] = 1.
        elif self.kind == 'neumann':
            D = colloc_diffmat(n, 1)
            A = D[0 if self.side == 'left' else -1, :] * self.scale
        elif self.kind == 'periodic':
            D = colloc_diffmat(n, self.order) if self.order > 0 else np.eye(n)
            A = (D[0, :] - D[-1, :]) * self.scale**self.order
        else:
            raise ConfigError(f'Unknown boundary condition type "{self.kind}"!')
        return A

    def rows(self, n):
        B = np.zeros((1, self.syssize * n))
        B[0, self.var * n:(self.var + 1) * n] = self.functional(n)
        return B

    def rhs(self, t):
        return np.atleast_1d(self.value(t) if callable(self.value) else self.value)

    def __repr__(self):
        return f'PointConstraint({self.kind}, {self.side}, var={self.var}, order={self.order})'


class NonlinearConstraint:
    """ A general condition given by a function of the solution.

        On the left (right) the value of the function at the first (last)
        grid point is used; a middle condition contributes all of its values.
        The rows of such a condition are placeholders that the residual
        overwrites.
    """
    def __init__(self, side, op, syssize, domain):
        self.side = side
        self.op = op
        self.syssize = syssize
        self.domain = np.asarray(domain, dtype=float)

        # discover the number of conditions on single point placeholders
        U = [ChebDouble(np.ones(1), domain=self.domain) for _ in range(syssize)]
        x = np.atleast_1d(np.mean(self.domain))
        self.n_conditions = as_values(op(0., x, U), 1).size

    @property
    def size(self):
        return self.n_conditions

    def rows(self, n):
        return np.zeros((self.size, self.syssize * n))

    def rhs(self, t):
        return np.zeros(self.size)

    def residual(self, t, x, U):
        if self.side == 'middle':
            return np.ravel(as_values(self.op(t, x, U), 1))

        vals = as_values(self.op(t, x, U), len(x))
        return vals[0, :] if self.side == 'left' else vals[-1, :]

    def __repr__(self):
        return f'NonlinearConstraint({self.side}, size={self.size})'


class BoundaryConditions:
    """ The ordered set of constraints (left, then middle, then right) """
    def __init__(self, left=None, middle=None, right=None):
        self.left = left or []
        self.middle = middle or []
        self.right = right or []

    @property
    def constraints(self):
        return self.left + self.middle + self.right

    def __len__(self):
        return sum(c.size for c in self.constraints)

    @property
    def nrows(self):
        return len(self)

    def matrix(self, n):
        """ The stacked constraint rows B at discretization size n """
        rows = [c.rows(n) for c in self.constraints]
        if not rows:
            return np.zeros((0, 0))
        return np.vstack(rows)

    def rhs(self, t):
        """ The (possibly time dependent) right hand sides q(t) """
        if not self.constraints:
            return np.zeros(0)
        return np.hstack([c.rhs(t) for c in self.constraints])

    def nonlinear(self):
        """ The nonlinear constraints and their row offsets """
        offset = 0
        for c in self.constraints:
            if isinstance(c, NonlinearConstraint):
                yield slice(offset, offset + c.size), c
            offset += c.size

    def check(self, difforder):
        if self.nrows != int(np.sum(difforder)):
            raise ConfigError('Dimension mismatch. Check boundary conditions. '
                              f'Got {self.nrows} conditions for differential orders {list(difforder)}.')

    def __repr__(self):
        return f'BoundaryConditions(left={self.left}, middle={self.middle}, right={self.right})'


def struct_side(spec, side):
    """ Single op / val structures are still accepted, sequences of them are not """
    if isinstance(spec, (list, tuple)) and len(spec) > 0 and all(isinstance(s, dict) for s in spec):
        raise ConfigError(f'Struct input for the {side} boundary condition is no longer supported!')

    if isinstance(spec, dict):
        if 'op' not in spec:
            raise ConfigError(f'Struct input for the {side} boundary condition is no longer supported!')
        warnings.warn(f'Struct input for the {side} boundary condition is deprecated; '
                      'use a tag, a (tag, value) pair or a function.', DeprecationWarning, stacklevel=3)
        return (spec['op'], spec['val']) if 'val' in spec else spec['op']

    return spec


def parse_side(spec, side, syssize, domain, legacy=False):
    spec = struct_side(spec, side)
    if spec is None:
        return []

    if isinstance(spec, Number) and not isinstance(spec, bool):
        spec = ('dirichlet', spec)
    elif isinstance(spec, str):
        spec = (spec, 0.)

    if isinstance(spec, (tuple, list)) and len(spec) == 2 and isinstance(spec[0], str):
        tag, value = spec[0].lower(), spec[1]
        if side == 'middle' or tag not in TAGS:
            raise ConfigError(f'Unknown boundary condition "{spec[0]}" for the {side} boundary!')
        if not (isinstance(value, Number) or callable(value)):
            raise ConfigError(f'For boundary conditions of the form (tag, value) on the {side} '
                              f'boundary the value must be numeric, got {value!r}!')
        return [PointConstraint(tag, side, k, syssize, domain, value=value) for k in range(syssize)]

    if callable(spec):
        op = normalize(spec, syssize, role=side, legacy=legacy)
        return [NonlinearConstraint(side, op, syssize, domain)]

    raise ConfigError(f'Unknown boundary condition syntax for the {side} boundary: {spec!r}!')


def periodic(syssize, difforder, domain):
    """ u^(k)(a) = u^(k)(b) for k < difforder[j] for each variable j """
    rows = [PointConstraint('periodic', 'left', j, syssize, domain, order=k)
            for j in range(syssize) for k in range(difforder[j])]
    for c in rows[1::2]:
        c.side = 'right'
    return BoundaryConditions(left=rows[0::2], right=rows[1::2])


def parse_bcs(bc, syssize, difforder, domain, legacy=False):
    """ Translate the boundary condition specification bc into a BoundaryConditions.

        bc may be:
            'dirichlet' | 'neumann'   on both sides for every variable
            'periodic'
            a number                  Dirichlet data on both sides
            (left, right)             a specification for each side
            a dict or an object with (some of) the keys left, right, middle
            a callable               a (middle) condition on the solution

        Each side is a tag, a number, a (tag, value) pair with a numeric or
        time dependent value, or a callable of the solution.
    """
    if isinstance(bc, BoundaryConditions):
        return bc

    if isinstance(bc, str):
        if bc.lower() == 'periodic':
            return periodic(syssize, difforder, domain)
        elif bc.lower() in TAGS:
            bc = {'left': bc, 'right': bc}
        else:
            raise ConfigError(f'Unknown boundary condition "{bc}"!')
    elif isinstance(bc, Number) and not isinstance(bc, bool):
        bc = {'left': bc, 'right': bc}
    elif callable(bc):
        bc = {'middle': bc}
    elif isinstance(bc, (list, tuple)) and len(bc) == 2:
        bc = {'left': bc[0], 'right': bc[1]}
    elif bc is None:
        bc = {}
    elif not isinstance(bc, dict):
        if not any(hasattr(bc, side) for side in SIDES):
            raise ConfigError(f'Unknown boundary condition syntax {bc!r}!')
        bc = {side: getattr(bc, side) for side in SIDES if hasattr(bc, side)}

    unknown = set(bc) - set(SIDES)
    if unknown:
        raise ConfigError(f'Unknown boundary condition sides {sorted(unknown)}!')

    return BoundaryConditions(**{side: parse_side(bc.get(side), side, syssize, domain, legacy=legacy)
                                 for side in SIDES})
