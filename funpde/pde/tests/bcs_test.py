#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
from types import SimpleNamespace
import pytest
import numpy as np
from numpy.testing import assert_, assert_raises, assert_allclose

from funpde import ConfigError
from funpde.cheb import chebpts
from funpde.pde import ChebDouble, parse_bcs, BoundaryConditions
from funpde.pde import PointConstraint, NonlinearConstraint


DOMAIN = [-1, 1]


class TestLinearConditions:
    def test_dirichlet(self):
        bcs = parse_bcs('dirichlet', 1, [2], DOMAIN)
        B = bcs.matrix(5)
        assert_(len(bcs) == 2)
        assert_allclose(B, [[1, 0, 0, 0, 0], [0, 0, 0, 0, 1]])
        assert_allclose(bcs.rhs(0.), [0, 0])

    def test_neumann_system(self):
        domain = [0, 2]
        bcs = parse_bcs('neumann', 2, [2, 2], domain)
        B = bcs.matrix(10)
        assert_(B.shape == (4, 20))

        x = chebpts(10, domain)[0]
        U = np.hstack((x**2, x**3))
        # u'(0), v'(0), u'(2), v'(2)
        assert_allclose(B @ U, [0, 0, 4, 12], atol=1e-10)

    def test_number(self):
        bcs = parse_bcs(3., 1, [2], DOMAIN)
        assert_allclose(bcs.rhs(0.), [3, 3])

    def test_sides(self):
        bcs = parse_bcs({'left': ('dirichlet', 2.), 'right': 'neumann'}, 1, [2], DOMAIN)
        assert_allclose(bcs.rhs(0.), [2, 0])
        assert_(bcs.left[0].kind == 'dirichlet')
        assert_(bcs.right[0].kind == 'neumann')

    def test_pair(self):
        bcs = parse_bcs(('neumann', 1.), 1, [2], DOMAIN)
        assert_(bcs.left[0].kind == 'neumann')
        assert_(bcs.right[0].kind == 'dirichlet')
        assert_allclose(bcs.rhs(0.), [0, 1])

    def test_time_dependent(self):
        bcs = parse_bcs({'left': ('dirichlet', lambda t: np.sin(t)), 'right': 0}, 1, [2], DOMAIN)
        assert_allclose(bcs.rhs(0.5), [np.sin(0.5), 0])

    def test_object(self):
        bcs = parse_bcs(SimpleNamespace(left='neumann', right=0.), 1, [2], DOMAIN)
        assert_(len(bcs) == 2)

    def test_periodic(self):
        bcs = parse_bcs('periodic', 1, [2], DOMAIN)
        B = bcs.matrix(20)
        assert_(B.shape == (2, 20))

        x = chebpts(20)[0]
        assert_allclose(B @ np.cos(np.pi * x), [0, 0], atol=1e-8)
        assert_allclose(B @ x, [-2, 0], atol=1e-12)
        # the derivative row sees a jump in the slope
        assert_allclose(B @ x**2, [0, -4], atol=1e-10)

    def test_periodic_scaled(self):
        bcs = parse_bcs('periodic', 1, [2], [0, 4])
        x = chebpts(12, [0, 4])[0]
        assert_allclose(bcs.matrix(12) @ x**2, [-16, -8], atol=1e-10)

    def test_row_count_check(self):
        bcs = parse_bcs('dirichlet', 1, [4], DOMAIN)
        with pytest.raises(ConfigError, match='Dimension mismatch'):
            bcs.check([4])
        bcs.check([2])


class TestNonlinearConditions:
    def test_left(self):
        bcs = parse_bcs({'left': lambda t, u: u - t, 'right': 0.}, 1, [2], DOMAIN)
        assert_(len(bcs) == 2)
        assert_(isinstance(bcs.left[0], NonlinearConstraint))

        x = chebpts(6)[0]
        u = ChebDouble(x + 2)
        (idx, c), = list(bcs.nonlinear())
        assert_(idx == slice(0, 1))
        assert_allclose(c.residual(0.5, x, [u]), [0.5])

    def test_right_system(self):
        bc = {'left': 'dirichlet', 'right': lambda u, v: [u - 1, np.diff(v)]}
        bcs = parse_bcs(bc, 2, [2, 2], DOMAIN)
        assert_(len(bcs) == 4)

        x = chebpts(6)[0]
        U = [ChebDouble(x**2), ChebDouble(x**2)]
        (idx, c), = list(bcs.nonlinear())
        assert_(idx == slice(2, 4))
        assert_allclose(c.residual(0., x, U), [0, 2], atol=1e-12)
        assert_allclose(c.rows(6), np.zeros((2, 12)))

    def test_middle(self):
        bcs = parse_bcs(lambda u: np.sum(u) - 1, 1, [1], DOMAIN)
        assert_(len(bcs) == 1)

        x = chebpts(6)[0]
        (idx, c), = list(bcs.nonlinear())
        assert_allclose(c.residual(0., x, [ChebDouble(np.ones(6))]), [1.])

    def test_struct_deprecated(self):
        with pytest.warns(DeprecationWarning):
            bcs = parse_bcs({'left': {'op': 'dirichlet', 'val': 1.}, 'right': 0.}, 1, [2], DOMAIN)
        assert_allclose(bcs.rhs(0.), [1, 0])


class TestErrors:
    def test_unknown_tag(self):
        with pytest.raises(ConfigError, match='left'):
            parse_bcs({'left': 'robin', 'right': 0.}, 1, [2], DOMAIN)
        assert_raises(ConfigError, parse_bcs, 'robin', 1, [2], DOMAIN)

    def test_non_numeric_value(self):
        with pytest.raises(ConfigError, match='right'):
            parse_bcs({'left': 0., 'right': ('dirichlet', 'one')}, 1, [2], DOMAIN)

    def test_struct_sequence(self):
        bc = {'left': [{'op': 'dirichlet', 'val': 1}, {'op': 'neumann', 'val': 0}]}
        assert_raises(ConfigError, parse_bcs, bc, 1, [2], DOMAIN)

    def test_struct_without_op(self):
        assert_raises(ConfigError, parse_bcs, {'left': {'val': 1}}, 1, [2], DOMAIN)

    def test_middle_tag(self):
        assert_raises(ConfigError, parse_bcs, {'middle': 'dirichlet'}, 1, [2], DOMAIN)

    def test_unknown_side(self):
        assert_raises(ConfigError, parse_bcs, {'top': 0.}, 1, [2], DOMAIN)

    def test_unknown_syntax(self):
        assert_raises(ConfigError, parse_bcs, object(), 1, [2], DOMAIN)
        assert_raises(ConfigError, parse_bcs, [1, 2, 3], 1, [2], DOMAIN)


class TestConstraints:
    def test_point_rows(self):
        c = PointConstraint('dirichlet', 'right', 1, 2, DOMAIN, value=lambda t: 2 * t)
        B = c.rows(4)
        assert_(B.shape == (1, 8))
        assert_(B[0, 7] == 1 and np.sum(B) == 1)
        assert_allclose(c.rhs(1.), [2.])

    def test_unknown_kind(self):
        c = PointConstraint('robin', 'left', 0, 1, DOMAIN)
        assert_raises(ConfigError, c.rows, 4)

    def test_empty(self):
        bcs = BoundaryConditions()
        assert_(len(bcs) == 0)
        assert_(bcs.rhs(0.).size == 0)
        assert_(list(bcs.nonlinear()) == [])
