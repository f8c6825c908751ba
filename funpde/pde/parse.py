#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import inspect
import warnings

from ..errors import ParseError
from .chebdouble import diff, cumsum, fred
from .chebdouble import sum as integral
from .source import PDESource

# Parameter names marking the old calling convention in which the operators
# were passed as arguments: f(u1, ..., uN, t, x, diff, sum, cumsum, fred)
LEGACY_NAMES = ('diff', 'Diff', 'D')
LEGACY_OPERATORS = (diff, integral, cumsum, fred)

ROLES = ('interior', 'left', 'right', 'middle')


def positional_names(fun):
    """ Names of the positional parameters of fun """
    try:
        sig = inspect.signature(fun)
    except (TypeError, ValueError) as e:
        raise ParseError(f'Cannot determine the signature of {fun!r}!') from e

    kinds = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    return [p.name for p in sig.parameters.values()
            if p.kind in kinds and p.default is inspect.Parameter.empty]


def legacy_rewrite(fun, names, syssize):
    """ Rewrite a function using the legacy convention

            f(u1, ..., uN, [t, [x,]] D, S, C, F)

        into one taking the independent variables first f(t, x, u1, ..., uN)
        with the built-in operators spliced in. Returns the new function and
        the number of independent variables it takes.
    """
    idx = min(names.index(name) for name in LEGACY_NAMES if name in names)
    nind = idx - syssize
    if nind < 0:
        raise ParseError(f'Too few dependent variables before "{names[idx]}" in {names}!')

    ops = LEGACY_OPERATORS[:len(names) - idx]
    warnings.warn(f'The calling convention ({", ".join(names)}) is deprecated; '
                  f'use f(t, x, u, ...) with diff, sum and cumsum applied directly.',
                  DeprecationWarning, stacklevel=3)

    def rewritten(*args):
        return fun(*args[nind:], *args[:nind], *ops)

    return rewritten, nind


def normalize(fun, syssize, role='interior', legacy=False):
    """ Rewrite fun into the canonical form (t, x, U) -> F.

        The number of independent variables is the number of positional
        parameters minus syssize:

            0: f(u1, ..., uN)
            1: f(x, u1, ..., uN) in the interior; f(t, u1, ..., uN) for the
               boundary roles (middle conditions warn about the ambiguity)
            2: f(t, x, u1, ..., uN)
    """
    if role not in ROLES:
        raise ValueError(f'Unknown role "{role}"!')

    if isinstance(fun, (str, list, tuple)):
        fun = PDESource(fun)

    if isinstance(fun, PDESource):
        if fun.syssize != syssize:
            raise ParseError(f'The equations depend on {fun.syssize} variables '
                             f'{fun.function_names}, expected {syssize}!')
        return lambda t, x, U: fun(t, x, *U)

    if not callable(fun):
        raise ParseError(f'Expected a callable, got {type(fun).__name__}!')

    names = positional_names(fun)
    if legacy and any(name in LEGACY_NAMES for name in names):
        fun, nind = legacy_rewrite(fun, names, syssize)
    else:
        nind = len(names) - syssize

    if nind == 0:
        return lambda t, x, U: fun(*U)
    elif nind == 1:
        if role == 'interior':
            return lambda t, x, U: fun(x, *U)
        if role == 'middle':
            warnings.warn('Please input both time and space independent variables to '
                          'middle boundary conditions; assuming the given variable is time.',
                          UserWarning, stacklevel=2)
        return lambda t, x, U: fun(t, *U)
    elif nind == 2:
        return lambda t, x, U: fun(t, x, *U)

    msg = f'Incorrect number of independent variables ({nind}) in {names} for ' \
          f'{syssize} dependent variable(s); must be 0, 1, or 2.'
    if any(name in LEGACY_NAMES for name in names):
        msg += ' For the legacy calling convention set the option Legacy=True.'
    raise ParseError(msg)
