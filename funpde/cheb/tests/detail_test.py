#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from numpy.testing import assert_, assert_allclose, assert_almost_equal
from numpy.polynomial.chebyshev import chebval

from funpde.cheb import chebpts, polyfit, polyval, clenshaw, alias
from funpde.cheb import standardChop, classic_check, happiness_check


class TestTransforms:
    def test_polyfit(self):
        x = chebpts(5)[0]
        # T_2 = 2x^2 - 1
        assert_allclose(polyfit(2 * x**2 - 1), [0, 0, 1, 0, 0], atol=1e-15)

    def test_polyval(self):
        c = np.array([1., 0.5, -0.25, 0.125])
        x = chebpts(4)[0]
        assert_allclose(polyval(c), chebval(x, c), atol=1e-15)

    def test_columns(self):
        x = chebpts(9)[0]
        V = np.column_stack((np.exp(x), np.cos(x)))
        C = polyfit(V)
        assert_(C.shape == (9, 2))
        assert_allclose(polyval(C), V, atol=1e-14)

    def test_clenshaw(self):
        c = np.array([0.3, -1., 2., 0.5])
        xs = np.linspace(-1, 1, 11)
        assert_allclose(clenshaw(xs, c), chebval(xs, c), atol=1e-14)


class TestAlias:
    def test_agrees_on_grid(self):
        c = 1. / (1 + np.arange(20))**2
        a = alias(c, 9)
        x = chebpts(9)[0]
        assert_allclose(polyval(a), chebval(x, c), atol=1e-14)

    def test_padding(self):
        c = np.array([1., 2., 3.])
        assert_allclose(alias(c, 5), [1, 2, 3, 0, 0])

    def test_single(self):
        c = np.array([1., 2., 3., 4., 5.])
        # the value at zero
        assert_allclose(alias(c, 1), [chebval(0., c)])


class TestHappiness:
    def test_standard_chop_short(self):
        assert_(standardChop(np.ones(10)) == 10)

    def test_standard_chop_geometric(self):
        c = 2.**-np.arange(80)
        cutoff = standardChop(c, 1e-10)
        assert_(30 < cutoff < 80)

    def test_classic_check_happy(self):
        c = 2.**-np.arange(60)
        ishappy, epslevel, cutoff = classic_check(c, 1e-10)
        assert_(ishappy)
        assert_(cutoff < 60)
        assert_(epslevel >= 1e-10)

    def test_classic_check_unhappy(self):
        ishappy, epslevel, cutoff = classic_check(np.ones(20), 1e-10)
        assert_(not ishappy)
        assert_(cutoff == 20)

    def test_classic_check_monotone(self):
        # a resolved function remains resolved at larger lengths
        f = lambda x: np.exp(np.sin(x))
        for n in [33, 65, 129]:
            ishappy, _, _ = classic_check(polyfit(f(chebpts(n)[0])), 1e-10)
            assert_(ishappy)

    def test_zero(self):
        ishappy, epslevel, cutoff = classic_check(np.zeros(9), 1e-8)
        assert_(ishappy)
        assert_(cutoff == 1)

    def test_happiness_check(self):
        x = chebpts(65)[0]
        ishappy, cutoff = happiness_check(polyfit(np.cos(x)))
        assert_(ishappy)
        assert_(cutoff < 65)
        assert_almost_equal(polyval(polyfit(np.cos(x))[:cutoff]), np.cos(chebpts(cutoff)[0]))
