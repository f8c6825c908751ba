#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np


class Mapping:
    """ Linear map between [-1, 1] and the interval [a, b].

        fwd -> maps [-1, 1] to [a, b]
        der -> derivative of fwd
        bwd -> maps [a, b] back to [-1, 1]
    """
    def __init__(self, ends):
        self.ends = np.asarray(ends, dtype=float)

    @property
    def a(self):
        return self.ends[0]

    @property
    def b(self):
        return self.ends[-1]

    def fwd(self, y):
        return (self.b * (np.asarray(y) + 1) + self.a * (1 - np.asarray(y))) / 2

    def der(self, y):
        return (self.b - self.a) / 2 + 0 * np.asarray(y)

    def bwd(self, x):
        return (2 * np.asarray(x) - self.a - self.b) / (self.b - self.a)

    @property
    def scale(self):
        """ d/dx of bwd, the factor each derivative picks up """
        return 2. / (self.b - self.a)

    def __call__(self, y):
        return self.fwd(y)

    def __eq__(self, other):
        return isinstance(other, Mapping) and np.all(self.ends == other.ends)

    def __repr__(self):
        return f"{self.__class__.__name__}(ends={self.ends})"

    def __str__(self):
        return 'Map([-1, 1] -> [%.2f, %.2f])' % (self.a, self.b)
