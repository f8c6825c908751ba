#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
from numbers import Number
import numpy as np
import scipy.sparse as sps
import scipy.linalg as LA
from scipy.sparse.linalg import spsolve

from ..colloc import ultraS, trigspec
from ..cheb import alias as cheb_alias
from ..trig import trigpts, vals2coeffs, wavenumbers
from ..trig import alias as trig_alias
from ..linalg import bartels_stewart, qz_pencil
from .ballfun import BallFun
from .padding import pad_length, centered_slice, embed_centered

# Fourier modes whose data is below this are identically zero
MODE_TOL = 1e-16

# Fourier coefficients of sin(th)^2 and cos(th) sin(th)
SIN2 = np.array([-0.25, 0, 0.5, 0, -0.25])
COSSIN = np.array([0.25j, 0, 0, 0, -0.25j])


def _dense(A):
    return A.toarray() if sps.issparse(A) else np.asarray(A)


def rhs_coeffs(f, m, n, p):
    """ The coefficients of the right hand side of size (m, n, p) """
    if isinstance(f, BallFun):
        return f.coeffs3(m, n, p), f.isreal
    elif callable(f):
        F = BallFun.from_function(f, (m, n, p))
        return F.coeffs, F.isreal
    elif isinstance(f, Number):
        F = BallFun.from_values(np.full((m, n, p), f))
        return F.coeffs, F.isreal
    return BallFun(f).coeffs3(m, n, p), False


def boundary_coeffs(bc, n, p):
    """ The (p, n) Fourier coefficients (th x lam) of the boundary data

        bc may be a function of (lam, th), a constant, or an (n, p) array of
        coefficients (lam x th).
    """
    if callable(bc) or isinstance(bc, Number):
        lam = np.pi * trigpts(n)
        th = np.pi * trigpts(p)
        ll, tt = np.meshgrid(lam, th, indexing='ij')
        vals = bc(ll, tt) if callable(bc) else bc
        vals = np.broadcast_to(vals, (n, p))
        return vals2coeffs(vals2coeffs(vals, axis=1), axis=0).T, np.isrealobj(vals)

    BC = trig_alias(trig_alias(np.asarray(bc), n, axis=0), p, axis=1)
    return BC.T, False


class RadialOperators:
    """ The ultraspherical matrices in r for m Chebyshev coefficients """
    def __init__(self, m, K=0):
        self.m = m
        self.DC2 = _dense(ultraS.diffmat(m, 2))
        self.DC1 = _dense(ultraS.diffmat(m, 1))
        self.S01 = _dense(ultraS.convertmat(m, 0, 0))
        self.S02 = _dense(ultraS.convertmat(m, 0, 1))
        self.S12 = _dense(ultraS.convertmat(m, 1, 1))
        self.Mr = _dense(ultraS.multmat(m, [0, 1], 1))
        self.Mr2 = _dense(ultraS.multmat(m, [0.5, 0, 0.5], 2))

        # r^2 u_rr + 2 r u_r + K^2 r^2 u, divided by K^2 for large K
        if abs(K) > 1:
            self.Lr = (self.Mr2 @ self.DC2 + 2 * self.S12 @ self.Mr @ self.DC1) / K**2 \
                + self.Mr2 @ self.S02
        else:
            self.Lr = self.Mr2 @ self.DC2 + 2 * self.S12 @ self.Mr @ self.DC1 \
                + K**2 * self.Mr2 @ self.S02

    def dirichlet_rows(self):
        """ (u(1) + u(-1)) / 2 and (u(1) - u(-1)) / 2 """
        alt = (-1.)**np.arange(self.m)
        return (1 + alt) / 2, (1 - alt) / 2

    def neumann_rows(self):
        """ As dirichlet_rows for u_r; the second row is scaled by 1/4 """
        bc1, bc2 = self.dirichlet_rows()
        D = np.linalg.solve(self.S01, self.DC1)
        return bc1 @ D, bc2 @ D / 4


class PolarOperators:
    """ The trigspec matrices in th for p Fourier coefficients """
    def __init__(self, p, neumann=False):
        self.p = p
        self.I = np.eye(p)
        self.Msin2 = _dense(trigspec.multmat(p, SIN2))
        self.Mcossin = _dense(trigspec.multmat(p, COSSIN))
        self.DF2 = _dense(trigspec.diffmat(p, 2))
        self.DF1 = _dense(trigspec.diffmat(p, 1, flag=neumann))

        # sin(th)^2 u_thth + cos(th) sin(th) u_th
        self.Lth = self.Msin2 @ self.DF2 + self.Mcossin @ self.DF1


def eliminate(S, L, cols, rows):
    """ Remove the degrees of freedom cols using the boundary rows from the
        operators S and L. Returns the modified operators and the removed
        columns c1, c2 (of S) and c3, c4 (of L).
    """
    S = S.astype(complex)
    L = L.astype(complex)

    c1 = S[:, cols[0]].copy()
    S = S - np.outer(S[:, cols[0]], rows[0])
    c2 = S[:, cols[1]].copy()
    S = S - np.outer(S[:, cols[1]], rows[1])

    c3 = L[:, cols[0]].copy()
    L = L - np.outer(L[:, cols[0]], rows[0])
    c4 = L[:, cols[1]].copy()
    L = L - np.outer(L[:, cols[1]], rows[1])
    return S, L, (c1, c2, c3, c4)


def active_modes(F, BC1, BC2):
    """ The lam wave numbers for which the data does not vanish """
    n = F.shape[2]
    return [k for k in range(n)
            if np.max(np.abs(F[:, :, k])) > MODE_TOL
            or np.max(np.abs(BC1[:, k])) > MODE_TOL
            or np.max(np.abs(BC2[:, k])) > MODE_TOL]


def helmholtz_dirichlet(f, K, bc, m, n=None, p=None):
    """ Solve Laplacian(u) + K^2 u = f in the unit ball with u = bc on the sphere.

        Multiplied by r^2 sin(th)^2 the equation in spherical coordinates

            r^2 sin^2 u_rr + 2 r sin^2 u_r + sin^2 u_thth + cos sin u_th
                + u_lamlam + K^2 r^2 sin^2 u = r^2 sin^2 f

        decouples in lam. For each Fourier mode in lam the (th x r) matrix
        equation is solved by the Bartels-Stewart algorithm after the two
        boundary conditions have been used to eliminate the first two
        Chebyshev coefficients.
    """
    n = m if n is None else n
    p = m if p is None else p

    # the solver works with the order (th, r, lam)
    F, freal = rhs_coeffs(f, m, n, p)
    F = np.transpose(F, (2, 0, 1))

    BC1, breal = boundary_coeffs(bc, n, p)
    BC2 = (-1.)**wavenumbers(p)[:, None] * BC1

    rad = RadialOperators(m, K)
    pol = PolarOperators(p)
    DF2lam = np.diag(_dense(trigspec.diffmat(n, 2)))

    bc1, bc2 = rad.dirichlet_rows()
    myS02, myLr, (c1, c2, c3, c4) = eliminate(rad.S02, rad.Lr, (0, 1), (bc1, bc2))

    # the right pencil is the same for all modes
    B, D = myLr[:-2, 2:], myS02[:-2, 2:]
    right = qz_pencil(B, D)

    CFS = np.zeros((p, m, n), dtype=complex)
    for k in active_modes(F, BC1, BC2):
        A = pol.Lth + DF2lam[k] * pol.I

        # multiply F by r^2 sin(th)^2
        ff = pol.Msin2 @ F[:, :, k] @ rad.S02.T @ rad.Mr2.T

        if abs(K) > 1:
            A = A / K**2
            ff = ff / K**2

        even = (BC1[:, k] + BC2[:, k]) / 2
        odd = (BC1[:, k] - BC2[:, k]) / 2

        # eliminating the boundary conditions changes the right hand side
        ff = ff - np.outer(A @ even, c1) - np.outer(A @ odd, c2)
        ff = ff - np.outer(pol.Msin2 @ even, c3) - np.outer(pol.Msin2 @ odd, c4)

        X = bartels_stewart(pol.Msin2, B, A, D, ff[:, :-2], right=right)

        # put the boundary coefficients back
        col1 = even - X @ bc1[2:]
        col2 = odd - X @ bc2[2:]
        CFS[:, :, k] = np.column_stack((col1, col2, X))

    return BallFun(np.transpose(CFS, (1, 2, 0)), isreal=freal and breal)


def neumann_zero_mode(ff, BC1k, BC2k, m, p, rad, pol):
    """ The lam wave number zero mode of the Neumann problem for K = 0.

        The operator has the constants in its null space. The system is
        solved for all coefficients at once with the boundary rows
        prepended, after fixing the constant coefficient to zero and
        dropping one equation. This needs m = 3 mod 4 and p = 1 mod 4, so
        the problem is zero padded to such a size first.
    """
    mexp = pad_length(m, 4, 3)
    pexp = pad_length(p, 4, 1)

    if mexp != m:
        rad = RadialOperators(mexp, 0)
    if pexp != p:
        pol = PolarOperators(pexp, neumann=True)

    bc1, bc2 = rad.neumann_rows()

    ffExp = np.zeros((pexp, mexp), dtype=complex)
    ffExp[centered_slice(p, pexp), :m] = ff
    BC1Exp = embed_centered(BC1k, pexp)
    BC2Exp = embed_centered(BC2k, pexp)

    # use m - 2 rows of the equation, the kronecker products act on vec(X)
    ii = np.arange(mexp - 2)
    Lop = sps.kron(rad.Lr[ii, :], pol.Msin2) + sps.kron(rad.S02[ii, :], pol.Lth)
    b1 = sps.kron(bc1[None, :], sps.eye(pexp))
    b2 = sps.kron(bc2[None, :], sps.eye(pexp))
    Bop = sps.vstack((b1, b2, Lop)).tocsc()

    # remove the constant coefficient and the last equation
    keep = np.setdiff1d(np.arange(pexp * mexp), [pexp // 2])
    Bop = Bop[:-1, :][:, keep]

    rhs = np.hstack(((BC1Exp + BC2Exp) / 2, (BC1Exp - BC2Exp) / 8,
                     np.ravel(ffExp[:, ii], order='F')[:-1]))

    xk = spsolve(Bop.astype(complex), rhs)
    xk = np.insert(xk, pexp // 2, 0.)
    xk = np.reshape(xk, (pexp, mexp), order='F')

    if mexp != m:
        xk = cheb_alias(xk.T, m).T
    if pexp != p:
        xk = trig_alias(xk, p, axis=0)
    return xk


def helmholtz_neumann(f, K, bc, m, n=None, p=None):
    """ Solve Laplacian(u) + K^2 u = f in the unit ball with u_r = bc on the sphere.

        As helmholtz_dirichlet, but the boundary rows evaluate the radial
        derivative and eliminate the second and third Chebyshev coefficients.
        For K = 0 the solution is only determined up to a constant; it is
        fixed by setting the constant coefficient to zero.
    """
    n = m if n is None else n
    p = m if p is None else p

    F, freal = rhs_coeffs(f, m, n, p)
    F = np.transpose(F, (2, 0, 1))

    # the derivative of a smooth function on the ball contains r^k exp(i l th)
    # with k and l of the same parity
    BC1, breal = boundary_coeffs(bc, n, p)
    BC2 = (-1.)**(wavenumbers(p) + 1)[:, None] * BC1

    rad = RadialOperators(m, K)
    pol = PolarOperators(p, neumann=True)
    DF2lam = np.diag(_dense(trigspec.diffmat(n, 2)))

    bc1, bc2 = rad.neumann_rows()
    myS02, myLr, (c1, c2, c3, c4) = eliminate(rad.S02, rad.Lr, (1, 2), (bc1, bc2))

    keep = np.hstack((0, np.arange(3, m)))
    B, D = myLr[:-2, :][:, keep], myS02[:-2, :][:, keep]
    right = qz_pencil(B, D)

    CFS = np.zeros((p, m, n), dtype=complex)
    for k in active_modes(F, BC1, BC2):
        A = pol.Lth + DF2lam[k] * pol.I
        ff = pol.Msin2 @ F[:, :, k] @ rad.S02.T @ rad.Mr2.T

        if abs(K) > 1:
            A = A / K**2
            ff = ff / K**2

        if k == n // 2 and K == 0:
            CFS[:, :, k] = neumann_zero_mode(ff, BC1[:, k], BC2[:, k], m, p, rad, pol)
            continue

        even = (BC1[:, k] + BC2[:, k]) / 2
        odd = (BC1[:, k] - BC2[:, k]) / 8

        ff = ff - np.outer(A @ even, c1) - np.outer(A @ odd, c2)
        ff = ff - np.outer(pol.Msin2 @ even, c3) - np.outer(pol.Msin2 @ odd, c4)

        X = bartels_stewart(pol.Msin2, B, A, D, ff[:, :-2], right=right)

        col2 = even - X @ bc1[keep]
        col3 = odd - X @ bc2[keep]
        CFS[:, :, k] = np.column_stack((X[:, 0], col2, col3, X[:, 1:]))

    return BallFun(np.transpose(CFS, (1, 2, 0)), isreal=freal and breal)


def helmholtz(f, K, bc, m, n=None, p=None, bc_type='dirichlet'):
    """ Solve the Helmholtz equation

            Laplacian(u) + K^2 u = f

        in the unit ball with Dirichlet (u = bc) or Neumann (u_r = bc) data
        on the unit sphere, discretized with m x n x p coefficients.

        f is a BallFun, a function f(x, y, z), a constant or an (m, n, p)
        coefficient tensor; bc is a function of (lam, th), a constant, or an
        (n, p) array of Fourier coefficients.

        The cost is O(n^4) for n = m = p.
    """
    kind = str(bc_type).lower()
    if kind == 'dirichlet':
        return helmholtz_dirichlet(f, K, bc, m, n, p)
    elif kind == 'neumann':
        return helmholtz_neumann(f, K, bc, m, n, p)
    raise ValueError(f'Unknown boundary condition type "{bc_type}"!')


def poisson(f, bc, m, n=None, p=None, bc_type='dirichlet'):
    """ Solve Laplacian(u) = f in the unit ball, see helmholtz """
    return helmholtz(f, 0, bc, m, n, p, bc_type=bc_type)
