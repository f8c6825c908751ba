#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import pytest
import numpy as np
from numpy.testing import assert_, assert_raises, assert_allclose

from funpde import ParseError
from funpde.cheb import chebpts
from funpde.pde import ChebDouble, normalize
from funpde.pde.parse import positional_names


class TestNormalize:
    def setup_method(self):
        self.x = chebpts(9)[0]
        self.u = ChebDouble(self.x**2)
        self.v = ChebDouble(np.ones(9))

    def test_no_independent(self):
        f = normalize(lambda u: -u, 1)
        assert_allclose(f(0., self.x, [self.u]).values, -self.x**2)

    def test_space(self):
        f = normalize(lambda x, u: x * u, 1)
        assert_allclose(f(0., self.x, [self.u]).values, self.x**3)

    def test_time_boundary(self):
        f = normalize(lambda t, u: u - t, 1, role='left')
        assert_allclose(f(0.5, self.x, [self.u]).values, self.x**2 - 0.5)

    def test_middle_warns(self):
        with pytest.warns(UserWarning):
            f = normalize(lambda t, u: u - t, 1, role='middle')
        assert_allclose(f(1., self.x, [self.u]).values, self.x**2 - 1)

    def test_full(self):
        f = normalize(lambda t, x, u, v: t * x + u * v, 2)
        assert_allclose(f(2., self.x, [self.u, self.v]).values, 2 * self.x + self.x**2)

    def test_defaults_ignored(self):
        assert_(positional_names(lambda t, x, u, a=1: u) == ['t', 'x', 'u'])

    def test_string(self):
        f = normalize('u_t = diff(u, 2)', 1)
        assert_allclose(f(0., self.x, [self.u]).values, 2., atol=1e-10)

    def test_string_size(self):
        assert_raises(ParseError, normalize, 'u_t = diff(u, 2) + v', 1)

    def test_too_many(self):
        assert_raises(ParseError, normalize, lambda a, b, c, u: u, 1)

    def test_not_callable(self):
        assert_raises(ParseError, normalize, 3., 1)

    def test_unknown_role(self):
        assert_raises(ValueError, normalize, lambda u: u, 1, role='top')


class TestLegacy:
    def setup_method(self):
        self.x = chebpts(9)[0]
        self.u = ChebDouble(self.x**3)

    def test_requires_option(self):
        with pytest.raises(ParseError, match='Legacy'):
            normalize(lambda u, t, x, D: D(u, 2), 1)

    def test_rewrite(self):
        with pytest.warns(DeprecationWarning):
            f = normalize(lambda u, t, x, D: x * D(u, 2), 1, legacy=True)
        assert_allclose(f(0., self.x, [self.u]).values, 6 * self.x**2, atol=1e-10)

    def test_rewrite_operators(self):
        with pytest.warns(DeprecationWarning):
            f = normalize(lambda u, D, S, C: D(u) + S(u), 1, legacy=True)
        # int_{-1}^{1} x^3 dx = 0
        assert_allclose(f(0., self.x, [self.u]).values, 3 * self.x**2, atol=1e-10)

    def test_rewrite_system(self):
        v = ChebDouble(np.ones(9))
        with pytest.warns(DeprecationWarning):
            f = normalize(lambda u, v, x, Diff: Diff(u) * v + x, 2, legacy=True)
        assert_allclose(f(0., self.x, [self.u, v]).values, 3 * self.x**2 + self.x, atol=1e-10)
