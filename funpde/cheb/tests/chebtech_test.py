#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from numpy.testing import assert_, assert_raises, assert_almost_equal

from funpde.cheb import chebtech


class TestChebtechConstruction:
    def test_from_callable(self):
        f = chebtech(op=lambda x: np.sin(2 * np.pi * x))
        xs = np.linspace(-1, 1, 100)

        assert_(f.ishappy)
        assert_almost_equal(f(xs), np.sin(2 * np.pi * xs))

    def test_from_values(self):
        x = np.linspace(-1, 1, 3)
        f = chebtech.from_values(x**2)
        assert_almost_equal(f.coeffs.ravel(), [0.5, 0, 0.5])

    def test_columns(self):
        f = chebtech(op=[lambda x: np.cos(x), lambda x: np.exp(x)])
        assert_(f.m == 2)
        xs = np.linspace(-1, 1, 20)
        assert_almost_equal(f[1](xs), np.exp(xs))
        assert_raises(IndexError, f.__getitem__, 2)

    def test_endpoint_values(self):
        f = chebtech(op=lambda x: np.exp(x))
        assert_almost_equal(f.lval(), np.exp(-1))
        assert_almost_equal(f.rval(), np.exp(1))

    def test_simplify(self):
        f = chebtech.from_values(np.cos(np.cos(np.pi * np.arange(128) / 127)[::-1]))
        g = f.simplify(eps=1e-10)
        assert_(len(g) < 128)


class TestChebtechCalculus:
    def test_diff(self):
        f = chebtech(op=lambda x: np.sin(2 * np.pi * x))
        co = np.copy(f.coeffs)
        df = np.diff(f)
        xs = np.linspace(-1, 1, 100)

        assert_almost_equal(co, f.coeffs)
        assert_almost_equal(df(xs), 2 * np.pi * np.cos(2 * np.pi * xs))

    def test_sum(self):
        f = chebtech(op=lambda x: np.exp(x))
        assert_almost_equal(np.sum(f), np.exp(1) - np.exp(-1))

    def test_cumsum(self):
        f = chebtech(op=lambda x: np.sin(2 * np.pi * x))
        cf = np.cumsum(f)
        xs = np.linspace(-1, 1, 100)
        assert_almost_equal(cf(xs), (1 - np.cos(2 * np.pi * xs)) / (2 * np.pi))

    def test_arithmetic(self):
        f = chebtech(op=lambda x: np.sin(x))
        g = chebtech(op=lambda x: np.cos(x))
        h = f * f + g * g
        xs = np.linspace(-1, 1, 50)
        assert_almost_equal(h(xs), np.ones(50))

    def test_hstack(self):
        f = chebtech(op=lambda x: x)
        g = chebtech(op=lambda x: np.exp(x))
        h = np.hstack([f, g])
        assert_(h.m == 2)
        assert_almost_equal(h(0.5), [0.5, np.exp(0.5)])
