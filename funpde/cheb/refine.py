#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
import numpy as np

from .pts import chebpts_type2_compute


class FunctionContainer:
    """ Turns a list of scalar callables into one array-valued callable """
    def __init__(self, fs, dtype=np.float64):
        self.fs = fs
        self.dtype = dtype

    def __len__(self):
        return len(self.fs)

    def __call__(self, x):
        r = np.empty((x.size, len(self.fs)), order='F', dtype=self.dtype)
        for i, f in enumerate(self.fs):
            r[:, i] = f(x)
        return r


class Refine:
    """ Sampling strategy used while constructing a chebtech from a callable.

        Each call returns the values on the next grid and whether the
        construction should give up because maxLength was reached.

        'nested' doubles the grid (2n - 1) and only evaluates the new points,
        'resample' evaluates the callable on a fresh grid every time.
    """
    def __init__(self, op, minSamples=17, maxLength=1 + 2**14, strategy='nested'):
        self.op = op
        self.minSamples = max(9, minSamples)
        self.maxLength = maxLength
        self.values = np.zeros((0, 0), order='F')

        if strategy == 'nested':
            self._call = self.__nested
        elif strategy == 'resample':
            self._call = self.__resample
        else:
            raise ValueError(f'Unknown refinement strategy {strategy}!')

    def __call__(self):
        return self._call()

    def _evaluate(self, x):
        v = np.asarray(self.op(x))
        if v.ndim == 0:
            v = np.full(x.size, v.item())
        if v.ndim == 1:
            v = v[:, None]
        if v.shape[0] != x.size:
            v = np.broadcast_to(v, (x.size, v.shape[1]))
        return v

    def get_n(self):
        """ Guess the next grid size """
        if self.values.size == 0:
            n = 2**int(np.ceil(np.log2(self.minSamples - 1))) + 1
        else:
            pow = np.log2(self.values.shape[0] - 1)
            if pow == np.floor(pow) and pow > 5:
                n = int(np.round(2**(np.floor(pow) + 0.5))) + 1
                n = n - n % 2 + 1
            else:
                n = 2**int(np.floor(pow) + 1) + 1

        return int(n), n > self.maxLength

    def __resample(self):
        n, giveUp = self.get_n()
        if giveUp:
            return self.values, giveUp

        self.values = self._evaluate(chebpts_type2_compute(n))
        return self.values, giveUp

    def __nested(self):
        if self.values.size == 0:
            return self.__resample()

        n = 2 * self.values.shape[0] - 1
        if n > self.maxLength:
            return self.values, True

        # only the new points need to be evaluated
        x = chebpts_type2_compute(n)[1:-1:2]
        nv = self._evaluate(x)

        new_values = np.zeros((n, self.values.shape[1]), dtype=np.result_type(self.values, nv), order='F')
        new_values[0:n:2, :] = self.values
        new_values[1:-1:2, :] = nv
        self.values = new_values
        return self.values, False
