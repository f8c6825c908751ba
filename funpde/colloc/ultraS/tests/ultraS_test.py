#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from numpy.testing import assert_, assert_raises, assert_allclose
from numpy.polynomial.chebyshev import chebmul, chebder
from numpy.polynomial.chebyshev import cheb2poly

from funpde.colloc import ultraS


def pad(c, n):
    out = np.zeros(n)
    out[:len(c)] = c
    return out


class TestUltraSMatrices:
    def test_convert_T_to_U(self):
        # x^2 = (T_0 + T_2) / 2 = (U_0 + U_2) / 4
        S = ultraS.convertmat(5, 0, 0)
        assert_allclose(S @ pad([0.5, 0, 0.5], 5), [0.25, 0, 0.25, 0, 0])

    def test_convert_identity(self):
        S = ultraS.convertmat(6, 2, 1)
        assert_allclose(S.toarray(), np.eye(6))

    def test_diff(self):
        # T_k' = k U_{k-1}
        u = np.array([0.3, -1., 0.2, 0.7, 0.1, 0.])
        D = ultraS.diffmat(6, 1)
        S = ultraS.convertmat(6, 0, 0)
        assert_allclose(D @ u, S @ pad(chebder(u), 6), atol=1e-14)

    def test_diff_second(self):
        u = np.array([0.3, -1., 0.2, 0.7, 0.1, 0.5, 0., 0.])
        D2 = ultraS.diffmat(8, 2)
        S = ultraS.convertmat(8, 0, 1)
        assert_allclose(D2 @ u, S @ pad(chebder(u, 2), 8), atol=1e-13)

    def test_diff_negative(self):
        assert_raises(ValueError, ultraS.diffmat, 5, -1)

    def test_multmat_T(self):
        a = np.array([1., 2., 0.5])
        u = np.array([0.3, -1., 0.2, 0.7])
        M = ultraS.multmat(8, a, 0)
        assert_allclose(M @ pad(u, 8), pad(chebmul(a, u), 8), atol=1e-14)

    def test_multmat_U(self):
        a = np.array([1., 2., 0.5])
        u = np.array([0.3, -1., 0.2, 0.7])
        S = ultraS.convertmat(8, 0, 0)
        M = ultraS.multmat(8, a, 1)
        assert_allclose(M @ (S @ pad(u, 8)), S @ pad(chebmul(a, u), 8), atol=1e-14)

    def test_multmat_C2(self):
        # multiplication by r^2 as used for the radial part of the Laplacian
        a = np.array([0.5, 0., 0.5])
        u = np.array([0.3, -1., 0.2, 0.7, 0.1])
        S = ultraS.convertmat(10, 0, 1)
        M = ultraS.multmat(10, a, 2)
        assert_allclose(M @ (S @ pad(u, 10)), S @ pad(chebmul(a, u), 10), atol=1e-13)

    def test_multmat_x(self):
        M = ultraS.multmat(6, [0, 1], 0).toarray()
        # x T_0 = T_1
        assert_allclose(M[:, 0], [0, 1, 0, 0, 0, 0])
        # x^2 in monomials from x T_1
        assert_allclose(cheb2poly(M[:, 1])[:3], [0, 0, 1])
