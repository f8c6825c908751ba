#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
import scipy.sparse as sps
import scipy.linalg as LA


def _dense(A):
    return A.toarray() if sps.issparse(A) else np.asarray(A)


def qz_pencil(A, B):
    """ Complex generalized Schur decomposition of the pencil (A, B).

        Returns (AA, BB, Q, Z) with A = Q AA Z^H and B = Q BB Z^H, where AA
        and BB are upper triangular.
    """
    AA, BB, Q, Z = LA.qz(_dense(A).astype(complex), _dense(B).astype(complex), output='complex')
    return AA, BB, Q, Z


def bartels_stewart(A, B, C, D, E, right=None):
    """ Solve the generalized Sylvester equation

            A X B^T + C X D^T = E

        by the Bartels-Stewart algorithm. Both pencils (A, C) and (B, D) are
        reduced to triangular form by the QZ algorithm, the resulting
        triangular matrix equation is solved column by column starting from
        the last one.

        The decomposition of the right pencil (B, D) does not depend on the
        data and may be supplied as right = qz_pencil(B, D) when the same
        pencil is used for many solves.
    """
    E = _dense(E)
    P, S, Q1, Z1 = qz_pencil(A, C)
    T, R, Q2, Z2 = qz_pencil(B, D) if right is None else right

    m, n = E.shape
    if P.shape[0] != m or T.shape[0] != n:
        raise ValueError(f'Sylvester equation dimension mismatch: E is {E.shape}, '
                         f'pencils are {P.shape} and {T.shape}!')

    F = Q1.conj().T @ E @ Q2.conj()

    Y = np.zeros((m, n), dtype=complex)
    PY = np.zeros((m, n), dtype=complex)
    SY = np.zeros((m, n), dtype=complex)

    for k in range(n - 1, -1, -1):
        rhs = F[:, k]
        if k < n - 1:
            rhs = rhs - PY[:, k+1:] @ T[k, k+1:] - SY[:, k+1:] @ R[k, k+1:]

        # upper triangular system
        Y[:, k] = LA.solve_triangular(T[k, k] * P + R[k, k] * S, rhs)
        PY[:, k] = P @ Y[:, k]
        SY[:, k] = S @ Y[:, k]

    return Z1 @ Y @ Z2.T
