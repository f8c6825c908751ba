#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
from copy import deepcopy
import numpy as np

from ..fun import Fun, Piecewise, SMALL_EPS
from ..cheb import chebpts, polyfit, classic_check
from ..integrate import ros2
from ..errors import ConfigError, ConvergenceError, DimensionMismatchError
from ..errors import UnsupportedInputError
from .assembler import DAEAssembler
from .bcs import parse_bcs
from .chebdouble import ChebDouble, as_values, order
from .parse import normalize
from .source import PDESource
from .pdeset import pdeset

# smallest grid used by the adaptive solver
MIN_LENGTH = 9


class PDE15s:
    """ Method of lines solver for the system of PDEs

            u_t = f(t, x, u, u_x, u_xx, ...)

        on an interval, with boundary conditions imposed as algebraic
        equations of the resulting differential algebraic system.

        In the adaptive mode (no fixed N) the spatial discretization is
        checked at every output time: if the solution is not resolved to
        Eps the grid size n is increased to 2n - 1 and the time chunk is
        restarted from the last resolved output time.
    """
    def __init__(self, pdefun, tt, u0, bc, opts=None, N=None, **kwargs):
        self.opts = pdeset(opts or {}, **kwargs)
        if N is not None:
            self.opts['N'] = N

        self.tt = np.asarray(tt, dtype=float).ravel()
        if self.tt.size < 2 or np.any(np.diff(self.tt) <= 0):
            raise ValueError('The output times tt must be strictly increasing!')

        self.u0 = self.initial_condition(u0)
        self.domain = self.u0.domain
        self.syssize = self.u0.m
        self.eps = self.opts['Eps']

        if isinstance(pdefun, (str, list, tuple)):
            pdefun = PDESource(pdefun)
        self.source = pdefun if isinstance(pdefun, PDESource) else None

        legacy = self.opts['Legacy']
        self.pdefun = normalize(pdefun, self.syssize, role='interior', legacy=legacy)

        if self.opts['difforder'] is not None:
            self.difforder = np.broadcast_to(np.atleast_1d(self.opts['difforder']),
                                             (self.syssize,)).astype(int)
        else:
            self.difforder = self.infer_difforder()

        self.bcs = parse_bcs(bc, self.syssize, self.difforder, self.domain, legacy=legacy)
        self.bcs.check(self.difforder)

        self.assembler = DAEAssembler(self.bcs, self.difforder, self.domain,
                                      pdeflag=self.opts['PDEflag'], mass=self.opts['Mass'])
        self.atol, self.rtol = self.opts.tolerances()

        # discretization state
        self.n = None
        self.x = None
        self.currentLength = None

        # the solution
        self.tCurrent = self.tt[0]
        self.uCurrent = self.u0
        self.uOut = [self.u0]
        self.done = False

    def initial_condition(self, u0):
        """ The initial condition as a single Fun whose columns are the variables """
        if isinstance(u0, (list, tuple)):
            funs = [self.merge(u) for u in u0]
            for f in funs[1:]:
                if np.any(np.abs(f.domain - funs[0].domain) > SMALL_EPS):
                    raise ValueError(f'Domain mismatch {f.domain} != {funs[0].domain}!')
            u0 = np.hstack(funs) if len(funs) > 1 else funs[0]
        else:
            u0 = self.merge(u0)

        u0 = deepcopy(u0)
        if self.opts.adaptive:
            u0.simplify(eps=self.opts['Eps'], force=True)
        else:
            u0.prolong(self.opts['N'])
        return u0

    def merge(self, u):
        if isinstance(u, Fun):
            return u
        if isinstance(u, Piecewise):
            f = u.merge(maxLength=self.opts['MaxLength'], eps=self.opts['Eps'])
            if f is None:
                raise UnsupportedInputError('pde15s does not support piecewise initial conditions!')
            return f
        raise TypeError(f'Unsupported initial condition of type {type(u).__name__}!')

    def infer_difforder(self):
        """ The differential order of each equation read from an equation string,
            or found by evaluating the right hand side on placeholder variables.
        """
        if self.source is not None:
            return self.check_orders(self.source.difforder)

        n = MIN_LENGTH
        x = chebpts(n, self.domain)[0]
        U = [ChebDouble(np.zeros(n), domain=self.domain) for _ in range(self.syssize)]
        with np.errstate(all='ignore'):
            orders = order(self.pdefun(0., x, U))
        return self.check_orders(orders)

    def check_orders(self, orders):
        if len(orders) == 1:
            orders = orders * self.syssize
        elif len(orders) != self.syssize:
            raise ConfigError(f'The PDE has {len(orders)} components for {self.syssize} variables!')
        return np.maximum(np.asarray(orders, dtype=int), 0)

    def discretize(self, n):
        self.n = n
        self.x = chebpts(n, self.domain)[0]
        self.B, self.M, self.P, self.rows = self.assembler.assemble(n)

    def ode_fun(self, t, y):
        """ The right hand side of the DAE at discretization size n """
        n = self.n
        U = [ChebDouble(Uk, domain=self.domain)
             for Uk in np.reshape(y, (n, self.syssize), order='F').T]

        F = as_values(self.pdefun(t, self.x, U), n)
        F = self.P @ np.ravel(F, order='F')

        # the boundary conditions
        F[self.rows] = self.B @ y - self.bcs.rhs(t)
        for idx, c in self.bcs.nonlinear():
            F[self.rows[idx]] = c.residual(t, self.x, U)

        return F

    def snapshot(self, y):
        return np.reshape(y, (self.n, self.syssize), order='F')

    def store(self, t, u):
        self.uCurrent = u
        self.tCurrent = t
        self.uOut.append(u)
        self.plot(u, t)

        stop = self.opts['Stop']
        if stop is not None and stop(t, u):
            self.done = True
        return self.done

    def fixed_event(self, t, y):
        u = Fun.from_values(self.snapshot(y), domain=self.domain)
        return self.store(t, u)

    def adaptive_event(self, t, y):
        Uk = self.snapshot(y)

        # arbitrary linear combination of the variables
        c = 1 + np.sin(np.arange(1, self.syssize + 1))
        coeffs = polyfit(Uk @ c / np.sum(c))
        ishappy, epslevel, _ = classic_check(coeffs, self.eps)

        if ishappy:
            u = Fun.from_values(Uk, domain=self.domain)
            u.simplify(eps=epslevel, force=True)
            return self.store(t, u)

        # increase the resolution and restart the chunk
        self.currentLength = 2 * self.currentLength - 1
        return True

    def one_step(self, tSpan, callback):
        """ Integrate over the output times tSpan at the current discretization """
        U0 = np.ravel(np.reshape(self.uCurrent(self.x), (self.n, self.syssize)), order='F')

        try:
            ros2(self.ode_fun, tSpan, U0, mass=self.M, atol=self.atol, rtol=self.rtol,
                 callback=callback, max_step=self.opts['MaxStep'],
                 first_step=self.opts['InitialStep'])
        except DimensionMismatchError as e:
            raise ConfigError('Dimension mismatch. Check boundary conditions.') from e

    def solve(self):
        """ Returns the reached output times and the solution """
        self.plot(self.u0, self.tt[0])

        if not self.opts.adaptive:
            self.currentLength = self.opts['N']
            self.discretize(self.opts['N'])
            self.one_step(self.tt, self.fixed_event)
        else:
            self.currentLength = max(len(self.u0), MIN_LENGTH)
            while self.tCurrent < self.tt[-1] and not self.done:
                if self.currentLength > self.opts['MaxLength']:
                    raise ConvergenceError(f'The solution could not be resolved with MaxLength = '
                                           f'{self.opts["MaxLength"]} points at t = {self.tCurrent:.6g}!')
                tSpan = self.tt[self.tt >= self.tCurrent]
                self.discretize(self.currentLength)
                self.one_step(tSpan, self.adaptive_event)

        tt = self.tt[:len(self.uOut)]
        return tt, self.output()

    def output(self):
        if self.syssize == 1:
            return np.hstack(self.uOut)

        uu = np.empty((self.syssize, len(self.uOut)), dtype=object)
        for j, u in enumerate(self.uOut):
            for k in range(self.syssize):
                uu[k, j] = u[k]
        return uu

    def plot(self, u, t):
        if not self.opts.plotting:
            return

        import matplotlib.pyplot as plt
        ax = plt.gca()
        if str(self.opts['HoldPlot']).lower() != 'on':
            ax.cla()

        u.plot(ax=ax, **self.opts['PlotStyle'])
        if self.opts['YLim'] is not None:
            ax.set_ylim(self.opts['YLim'])

        ax.set_xlabel('x')
        ax.set_title(f't = {t:.3f}, len = [{len(u)}, {self.currentLength}]')
        plt.draw()
        plt.pause(1e-3)


def pde15s(pdefun, tt, u0, bc, opts=None, N=None, full_output=False, **kwargs):
    """ Solve the (system of) time dependent PDE(s)

            u_t = pdefun(t, x, u)

        with initial condition u0 (a Fun, or a list of Funs for systems) and
        the boundary conditions bc at the output times tt.

        pdefun may take any of the forms f(u), f(x, u), f(t, x, u) (with one
        argument per variable for systems) or be an equation string. Inside
        pdefun the variables support arithmetic, numpy functions and
        np.diff(u, k), np.sum(u), np.cumsum(u) (or diff, sum, cumsum and fred
        from funpde.pde).

        Options are given as opts = pdeset(...) or as keywords. If N is
        given the solution is computed on a fixed grid of N points.

        Returns the solution, a Fun with one column per output time for a
        single variable and an object array (variables x times) of Funs for
        systems; with full_output=True also the output times reached.
    """
    solver = PDE15s(pdefun, tt, u0, bc, opts=opts, N=N, **kwargs)
    tt, uu = solver.solve()
    return (tt, uu) if full_output else uu
