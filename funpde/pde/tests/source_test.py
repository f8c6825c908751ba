#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from numpy.testing import assert_, assert_raises, assert_allclose

from funpde import PDESource, ParseError
from funpde.cheb import chebpts
from funpde.pde import ChebDouble


class TestPDESource:
    def test_scalar(self):
        src = PDESource('u_t = 0.1 * diff(u, 2) + sin(x) * u')
        assert_(src.function_names == ['u'])
        assert_(src.syssize == 1)
        assert_(src.difforder == [2])

        x = chebpts(10)[0]
        u = ChebDouble(x**2)
        F = src(0., x, u)
        assert_(F.diffOrder == 2)
        assert_allclose(F.values, 0.2 + np.sin(x) * x**2, atol=1e-10)

    def test_system(self):
        src = PDESource(['u_t = diff(u, 2) - v', 'v_t = diff(v) + u*v'])
        assert_(src.function_names == ['u', 'v'])
        assert_(src.n_eqn == 2)
        assert_(src.difforder == [2, 1])

        x = chebpts(8)[0]
        F = src(0., x, ChebDouble(x**2), ChebDouble(np.ones(8)))
        assert_(len(F) == 2)
        assert_allclose(F[0].values, 1., atol=1e-10)
        assert_allclose(F[1].values, x**2, atol=1e-10)

    def test_names(self):
        src = PDESource('diff(b, 2) + a', function_names=['b', 'a'])
        assert_(src.function_names == ['b', 'a'])
        assert_(src.difforder == [2])

    def test_time(self):
        src = PDESource('u_t = t * u')
        x = chebpts(5)[0]
        F = src(2., x, ChebDouble(np.ones(5)))
        assert_allclose(np.asarray(F), 2.)

    def test_integrals(self):
        src = PDESource('u_t = sum(u) + cumsum(u)')
        assert_(src.difforder == [0])

        x = chebpts(9)[0]
        F = src(0., x, ChebDouble(np.ones(9)))
        assert_allclose(F.values, 2 + (x + 1), atol=1e-12)

    def test_str(self):
        src = PDESource('u_t = diff(u, 2)')
        assert_('u_t' in str(src))

    def test_unknown_symbol(self):
        assert_raises(ParseError, PDESource, 'diff(u, 2) + w', ['u'])

    def test_syntax(self):
        assert_raises(ParseError, PDESource, 'u_t = diff(u,, 2')
        assert_raises(ParseError, PDESource, 'a = b = c')
