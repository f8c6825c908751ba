#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from numpy.testing import assert_, assert_raises, assert_allclose, assert_almost_equal

from funpde.cheb import chebpts, quadwts, barymat, bary_weights, diffmat, colloc_diffmat


class TestChebPts:
    def test_second_kind(self):
        x, w, v, t = chebpts(5)
        assert_almost_equal(x, [-1, -np.sqrt(0.5), 0, np.sqrt(0.5), 1])
        assert_(np.all(np.diff(x) > 0))
        assert_almost_equal(np.cos(t), x)
        assert_almost_equal(np.sum(w), 2)

    def test_first_kind(self):
        x, w, v, t = chebpts(4, type=1)
        assert_(np.all(np.abs(x) < 1))
        assert_(np.all(np.diff(x) > 0))
        assert_almost_equal(np.cos(t), x)
        assert_almost_equal(np.sum(w), 2)

    def test_interval(self):
        x, w = chebpts(9, [0, 3])[:2]
        assert_almost_equal(x[[0, -1]], [0, 3])
        assert_almost_equal(np.sum(w), 3)
        assert_almost_equal(w @ x**2, 9)

    def test_single_point(self):
        assert_almost_equal(chebpts(1)[0], [0])
        assert_almost_equal(quadwts(1), [2])

    def test_unknown_kind(self):
        assert_raises(ValueError, chebpts, 5, (-1, 1), 3)

    def test_quadrature(self):
        x = chebpts(17)[0]
        w = quadwts(17)
        assert_almost_equal(w @ np.exp(x), np.exp(1) - np.exp(-1))
        assert_almost_equal(w @ x**3, 0)


class TestBarycentric:
    def test_interpolation(self):
        x = chebpts(12)[0]
        y = np.linspace(-1, 1, 37)
        P = barymat(y, x, bary_weights(12))
        assert_allclose(P @ x**7, y**7, atol=1e-13)

    def test_coinciding_nodes(self):
        x = chebpts(6)[0]
        P = barymat(x, x)
        assert_allclose(P, np.eye(6))

    def test_first_to_second_kind(self):
        # downsampling onto first kind points as used for the rectangular projection
        x = chebpts(10)[0]
        y = chebpts(8, type=1)[0]
        P = barymat(y, x, bary_weights(10))
        assert_(P.shape == (8, 10))
        assert_allclose(P @ np.cos(x), np.cos(y), atol=1e-8)


class TestDiffmat:
    def test_first_derivative(self):
        x = chebpts(10)[0]
        D = diffmat(x)
        assert_allclose(D @ x**4, 4 * x**3, atol=1e-12)

    def test_second_derivative(self):
        x = chebpts(10)[0]
        D2 = colloc_diffmat(10, 2)
        assert_allclose(D2 @ x**5, 20 * x**3, atol=1e-10)

    def test_constants(self):
        D = colloc_diffmat(7, 3)
        assert_allclose(D @ np.ones(7), np.zeros(7), atol=1e-10)

    def test_trivial(self):
        assert_(colloc_diffmat(1, 1).shape == (1, 1))
        assert_allclose(diffmat(chebpts(4)[0], 0), np.eye(4))
