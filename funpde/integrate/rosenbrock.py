#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import warnings
import numpy as np
import scipy.sparse as sps
import scipy.linalg as LA

from ..errors import ConvergenceError, DimensionMismatchError

# L-stable choice for the two stage method
GAMMA = 1. + 1. / np.sqrt(2.)
EPS = np.finfo(float).eps


class Rosenbrock:
    """ Linearly implicit two stage Rosenbrock method (ROS2) for

            M y' = F(t, y),

        where the constant mass matrix M may be singular, i.e. the system may
        be a differential-algebraic equation of index one. Each step solves

            (M - g h J) k1 = F(t, y) + g h F_t
            (M - g h J) k2 = F(t + h, y + h k1) - 2 M k1 - g h F_t

        and sets y+ = y + 3/2 h k1 + 1/2 h k2. The difference to the embedded
        first order solution y + h k1 is used for step size control.

        The integrator steps exactly onto each of the requested output times
        and calls callback(t, y) there; a callback returning True ends the
        integration.
    """
    def __init__(self, fun, tspan, y0, mass=None, **kwargs):
        self.fun = fun
        self.tspan = np.asarray(tspan, dtype=float)
        if self.tspan.size < 2 or np.any(np.diff(self.tspan) <= 0):
            raise ValueError('The output times must be strictly increasing!')

        self.y0 = np.array(y0, dtype=float).ravel()
        N = self.y0.size

        if mass is None:
            mass = np.eye(N)
        self.mass = mass.toarray() if sps.issparse(mass) else np.asarray(mass, dtype=float)

        if self.mass.shape != (N, N):
            raise DimensionMismatchError(f'The mass matrix of shape {self.mass.shape} does not '
                                         f'match the initial condition of size {N}!')

        self.rtol = kwargs.pop('rtol', 1e-3)
        self.atol = kwargs.pop('atol', 1e-6)
        self.callback = kwargs.pop('callback', None)

        span = self.tspan[-1] - self.tspan[0]
        self.h_max = kwargs.pop('max_step', None) or 0.1 * span
        self.h_init = kwargs.pop('first_step', None) or min(1e-4 * span, self.h_max)
        self.max_steps = kwargs.pop('max_steps', 100000)
        self.jac_every = kwargs.pop('jac_every', 5)

        # step size controller
        self.safe = kwargs.pop('safe', 0.8)
        self.fac_min = kwargs.pop('fac_min', 0.2)
        self.fac_max = kwargs.pop('fac_max', 5.0)

        # rows without time derivative
        self.algebraic = np.nonzero(np.max(np.abs(self.mass), axis=1) == 0)[0]

        self.nfev = 0
        self.njev = 0
        self.nsteps = 0
        self.nrejected = 0

    def F(self, t, y):
        self.nfev += 1
        f = np.asarray(self.fun(t, y), dtype=float).ravel()
        if f.size != y.size:
            raise DimensionMismatchError(f'The right hand side returned {f.size} values '
                                         f'for a state of size {y.size}!')
        return f

    def jacobian(self, t, y, f0):
        """ Forward difference approximation of dF/dy """
        self.njev += 1
        N = y.size
        J = np.empty((N, N))
        delta = np.sqrt(EPS) * np.maximum(np.abs(y), 1.)
        for j in range(N):
            yj = y[j]
            y[j] = yj + delta[j]
            J[:, j] = (self.F(t, y) - f0) / delta[j]
            y[j] = yj
        return J

    def dfdt(self, t, y, f0):
        dt = np.sqrt(EPS) * max(abs(t), 1.)
        return (self.F(t + dt, y) - f0) / dt

    def consistent_initial_condition(self, t, y, maxit=10):
        """ Newton iteration for the algebraic rows keeping M y fixed """
        if self.algebraic.size == 0:
            return y

        differential = np.setdiff1d(np.arange(y.size), self.algebraic)
        for _ in range(maxit):
            f0 = self.F(t, y)
            g = f0[self.algebraic]
            if np.max(np.abs(g), initial=0.) <= self.atol:
                return y

            J = self.jacobian(t, y, f0)
            A = np.vstack((self.mass[differential, :], J[self.algebraic, :]))
            rhs = np.hstack((np.zeros(differential.size), -g))
            dy = LA.lstsq(A, rhs)[0]
            y = y + dy

        g = self.F(t, y)[self.algebraic]
        if np.max(np.abs(g)) > np.sqrt(self.atol):
            warnings.warn(f'Failed to compute consistent initial conditions; residual {np.max(np.abs(g)):.4g}.',
                          RuntimeWarning)
        return y

    def error_norm(self, err, y, ynew):
        scale = self.atol + self.rtol * np.maximum(np.abs(y), np.abs(ynew))
        return np.sqrt(np.mean((err / scale)**2))

    def step(self, t, y, h, f0, J, ft):
        W = self.mass - GAMMA * h * J
        lu = LA.lu_factor(W, check_finite=False)

        k1 = LA.lu_solve(lu, f0 + GAMMA * h * ft)
        f1 = self.F(t + h, y + h * k1)
        k2 = LA.lu_solve(lu, f1 - 2 * (self.mass @ k1) - GAMMA * h * ft)

        ynew = y + 1.5 * h * k1 + 0.5 * h * k2
        return ynew, 0.5 * h * (k1 + k2)

    def run(self):
        """ Integrate; returns the reached output times and the states there. """
        t = self.tspan[0]
        y = self.consistent_initial_condition(t, self.y0.copy())

        ts = [t]
        ys = [y.copy()]

        h = min(self.h_init, self.h_max)
        J = None
        age = 0
        span = self.tspan[-1] - self.tspan[0]

        for tout in self.tspan[1:]:
            while t < tout:
                if self.nsteps >= self.max_steps:
                    raise ConvergenceError(f'Maximum number of steps {self.max_steps} exceeded at t = {t:.6g}!')

                # land exactly on the output time
                clamped = t + h >= tout - 100 * EPS * span
                h_step = tout - t if clamped else h

                if h_step < 16 * EPS * max(abs(t), 1.):
                    raise ConvergenceError(f'Step size {h_step:.4g} too small at t = {t:.6g}!')

                f0 = self.F(t, y)
                if J is None or age >= self.jac_every:
                    J = self.jacobian(t, y, f0)
                    age = 0
                ft = self.dfdt(t, y, f0)

                ynew, errvec = self.step(t, y, h_step, f0, J, ft)
                err = self.error_norm(errvec, y, ynew)

                if not np.isfinite(err) or err > 1.:
                    # rejected; refresh the Jacobian and try a smaller step
                    self.nrejected += 1
                    fac = self.fac_min if not np.isfinite(err) else \
                        max(self.fac_min, self.safe * err**(-0.5))
                    h = h_step * min(1., fac)
                    if age > 0:
                        J = None
                    continue

                self.nsteps += 1
                age += 1
                t = tout if clamped else t + h_step
                y = ynew

                fac = min(self.fac_max, max(self.fac_min, self.safe * max(err, 1e-10)**(-0.5)))
                h_new = h_step * fac
                if clamped and fac >= 1.:
                    h_new = max(h_new, h)
                h = min(h_new, self.h_max)

            ts.append(t)
            ys.append(y.copy())
            if self.callback is not None and self.callback(t, y):
                break

        return np.asarray(ts), np.asarray(ys)


def ros2(fun, tspan, y0, mass=None, **kwargs):
    """ Solve M y' = fun(t, y) and return the states at the output times tspan.

        See Rosenbrock for the keyword arguments.
    """
    return Rosenbrock(fun, tspan, y0, mass=mass, **kwargs).run()
