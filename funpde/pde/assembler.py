#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
import scipy.linalg as LA

from ..cheb import chebpts, barymat, bary_weights


class DAEAssembler:
    """ Builds the matrices of the differential algebraic system

            M U' = [B U - q(t); P F(t, x, U)]

        for a discretization of size n:

            B: the boundary condition rows,
            P: for each variable, the interpolation from the n point second
               kind grid to the n - difforder first kind grid on which its
               equation is imposed,
            M: P with each block scaled by whether the variable carries a
               time derivative; left multiplied by a user mass matrix.

        The matrices are cached and only rebuilt when n changes.
    """
    def __init__(self, bcs, difforder, domain, pdeflag=True, mass=None):
        self.bcs = bcs
        self.difforder = np.atleast_1d(np.asarray(difforder, dtype=int))
        self.syssize = self.difforder.size
        self.domain = np.asarray(domain, dtype=float)
        self.pdeflag = np.broadcast_to(np.asarray(pdeflag, dtype=float), (self.syssize,))
        self.mass = mass

        self.n = None
        self.B = None
        self.M = None
        self.P = None
        self.rows = None

    def projection(self, n):
        x = chebpts(n, self.domain)[0]
        blocks = []
        for k in range(self.syssize):
            xk = chebpts(n - self.difforder[k], self.domain, type=1)[0]
            blocks.append(barymat(xk, x, bary_weights(n)))
        return blocks

    def assemble(self, n):
        """ Returns (B, M, P, rows) at discretization size n """
        if self.n == n:
            return self.B, self.M, self.P, self.rows

        B = self.bcs.matrix(n)
        if B.size == 0:
            B = np.zeros((0, self.syssize * n))

        blocks = self.projection(n)
        P = np.vstack((0 * B, LA.block_diag(*blocks)))
        M = np.vstack((0 * B, LA.block_diag(*[flag * Pk for flag, Pk in zip(self.pdeflag, blocks)])))

        if self.mass is not None:
            M = np.asarray(self.mass(n)) @ M

        self.n = n
        self.B, self.M, self.P = B, M, P
        self.rows = np.arange(B.shape[0])
        return self.B, self.M, self.P, self.rows

    def __repr__(self):
        return f'DAEAssembler(n={self.n}, difforder={self.difforder.tolist()})'
