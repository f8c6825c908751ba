#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen


class ConfigError(ValueError):
    """ Malformed boundary conditions, options or assembled constraints. """
    pass


class UnsupportedInputError(ValueError):
    """ Input data the solvers cannot work with (e.g. piecewise initial data). """
    pass


class ParseError(ValueError):
    """ A user supplied function handle or equation string could not be understood. """
    pass


class ConvergenceError(RuntimeError):
    pass


class DimensionMismatchError(ValueError):
    """ Raised by the integrators when the mass matrix and state disagree in size. """
    pass
