#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np
from numpy.testing import assert_, assert_raises, assert_allclose

from funpde.ball import BallFun, cart2sph, sph2cart, pad_length, embed_centered


def sample_points():
    rng = np.random.default_rng(7)
    pts = rng.uniform(-0.55, 0.55, size=(3, 20))
    return pts[0], pts[1], pts[2]


class TestBallFun:
    def test_construction(self):
        F = BallFun.from_function(lambda x, y, z: x * z, (8, 9, 9))
        G = BallFun.from_function(lambda r, lam, th: r**2 * np.sin(th) * np.cos(lam) * np.cos(th),
                                  (8, 9, 9), coords='spherical')
        assert_(F.shape == (8, 9, 9))
        assert_(F.isreal)
        assert_allclose(F.coeffs, G.coeffs, atol=1e-13)

    def test_unknown_coords(self):
        assert_raises(ValueError, BallFun.from_function, lambda x, y, z: x, (5, 5, 5), 'polar')

    def test_not_3d(self):
        assert_raises(ValueError, BallFun, np.ones((4, 4)))

    def test_values(self):
        V = np.random.default_rng(1).standard_normal((6, 7, 8))
        F = BallFun.from_values(V)
        assert_(F.isreal)
        assert_allclose(F.values, V, atol=1e-12)

    def test_constant(self):
        F = BallFun.from_values(np.full((5, 5, 5), 3.))
        assert_allclose(F.coeffs[0, 2, 2], 3.)
        assert_allclose(np.sum(np.abs(F.coeffs)), 3., atol=1e-13)

    def test_coeffs3(self):
        F = BallFun.from_function(lambda x, y, z: x + y * z, (5, 6, 7))
        assert_(F.coeffs3(9, 8, 5).shape == (9, 8, 5))
        assert_(F.coeffs3(9).shape == (9, 9, 9))
        assert_allclose(F.coeffs3(5, 6, 7), F.coeffs)

    def test_feval(self):
        f = lambda x, y, z: x + y**2 + z**3 - x * y * z
        x, y, z = sample_points()
        for shape in [(10, 11, 11), (10, 12, 12)]:
            F = BallFun.from_function(f, shape)
            assert_allclose(F.feval_cart(x, y, z), f(x, y, z), atol=1e-10)

    def test_feval_spherical(self):
        F = BallFun.from_function(lambda x, y, z: z, (5, 5, 5))
        assert_allclose(F(0.5, 0.3, np.pi / 3), 0.25, atol=1e-12)
        assert_allclose(F(np.ones(4), np.zeros(4), np.zeros(4)), np.ones(4), atol=1e-12)

    def test_coordinates(self):
        x, y, z = sample_points()
        assert_allclose(np.vstack(sph2cart(*cart2sph(x, y, z))), np.vstack((x, y, z)), atol=1e-14)

        r, lam, th = cart2sph(0., 0., 0.)
        assert_(r == 0 and th == 0)


class TestPadding:
    def test_pad_length(self):
        assert_(pad_length(11, 4, 3) == 11)
        assert_(pad_length(12, 4, 3) == 15)
        assert_(pad_length(11, 4, 1) == 13)
        assert_(pad_length(13, 4, 1) == 13)

    def test_embed_centered(self):
        assert_allclose(embed_centered([1, 2, 3], 5), [0, 1, 2, 3, 0])
        # the coefficients of wave numbers -1, 0
        assert_allclose(embed_centered([1, 2], 5), [0, 1, 2, 0, 0])

        C = embed_centered(np.ones((2, 3)), 5, axis=1)
        assert_(C.shape == (2, 5))
        assert_allclose(C[:, 0], 0)
        assert_allclose(C[:, 4], 0)

    def test_embed_too_short(self):
        assert_raises(ValueError, embed_centered, np.ones(5), 3)
