#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
from sympy import symbols, Function, Derivative, Integral, sympify, lambdify
from sympy.core.sympify import SympifyError
from sympy.solvers.deutils import ode_order

from ..errors import ParseError
from . import chebdouble

# Names of the operators that may appear in the equations
OPERATOR_NAMES = ('diff', 'sum', 'cumsum')


class PDESource:
    """ Right hand side of a PDE (system) given as strings, e.g.

            PDESource('u_t = 0.1 * diff(u, 2) + sin(x) * u')
            PDESource(['u_t = diff(u, 2) - v', 'v_t = diff(v, 2) + u'], ['u', 'v'])

        The equations may use the dependent variables, t, x, the operators
        diff, sum, and cumsum, and any numpy function. A left hand side
        such as u_t is ignored. The compiled function has the signature
        (t, x, u1, ..., uN).
    """
    def __init__(self, eqns, function_names=None):
        if isinstance(eqns, str):
            eqns = [eqns]
        self.eqn_src = [self.strip_lhs(eqn) for eqn in eqns]

        self.t, self.x = symbols('t x', real=True)
        self.operators = {name: Function(name) for name in OPERATOR_NAMES}
        self.ns = {'t': self.t, 'x': self.x}
        self.ns.update(self.operators)

        if function_names is None:
            function_names = self.discover(self.eqn_src)
        self.function_names = list(function_names)

        self.functions = [symbols(name, real=True) for name in self.function_names]
        self.ns.update(zip(self.function_names, self.functions))
        self.exprs = [self.sympify(src) for src in self.eqn_src]

        unknown = set().union(*[e.free_symbols for e in self.exprs]) \
            - set(self.functions) - {self.t, self.x}
        if unknown:
            raise ParseError('Unknown symbols %s in the equations!' % sorted(s.name for s in unknown))

        modules = [{'diff': chebdouble.diff, 'sum': chebdouble.sum,
                    'cumsum': chebdouble.cumsum}, 'numpy']
        args = [self.t, self.x] + self.functions
        out = self.exprs[0] if len(self.exprs) == 1 else self.exprs
        self.fun = lambdify(args, out, modules=modules)

    @staticmethod
    def strip_lhs(eqn):
        parts = eqn.split('=')
        if len(parts) > 2:
            raise ParseError(f'Could not understand the equation "{eqn}"!')
        return parts[-1].strip()

    def sympify(self, src):
        try:
            return sympify(src, locals=self.ns)
        except (SympifyError, SyntaxError, TypeError) as e:
            raise ParseError(f'Could not parse "{src}": {e}') from e

    def discover(self, srcs):
        """ Dependent variable names are the free symbols other than t and x """
        names = set()
        for src in srcs:
            names |= {s.name for s in self.sympify(src).free_symbols}
        return sorted(names - {'t', 'x'})

    @property
    def syssize(self):
        return len(self.function_names)

    @property
    def n_eqn(self):
        return len(self.exprs)

    def symbolic(self, expr):
        """ The equation with the dependent variables as functions of x and
            the operators replaced by their sympy counterparts.
        """
        funcs = [Function(name, real=True)(self.x) for name in self.function_names]
        expr = expr.subs(dict(zip(self.functions, funcs)))
        expr = expr.replace(self.operators['diff'], lambda e, k=1: Derivative(e, (self.x, k)))
        expr = expr.replace(self.operators['sum'], lambda e: Integral(e, (self.x, -1, 1)))
        expr = expr.replace(self.operators['cumsum'], lambda e: Integral(e, self.x))
        return expr, funcs

    @property
    def difforder(self):
        """ The highest derivative appearing in each equation """
        orders = []
        for expr in self.exprs:
            sexpr, funcs = self.symbolic(expr)
            orders.append(max([ode_order(sexpr, f) for f in funcs], default=0))
        return orders

    def __call__(self, t, x, *U):
        return self.fun(t, x, *U)

    def __str__(self):
        return '\n'.join(f'{name}_t = {expr}' for name, expr in zip(self.function_names, self.exprs))
