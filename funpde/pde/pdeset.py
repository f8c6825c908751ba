#!/usr/bin/python
# -*- coding: utf-8 -*-
# Author: Andreas Buttenschoen
from ..errors import ConfigError

# name -> default value
DEFAULTS = {
    'Eps': 1e-6,
    'N': None,
    'AbsTol': None,
    'RelTol': None,
    'PDEflag': True,
    'difforder': None,
    'Mass': None,
    'MaxLength': 1025,
    'Plot': 'off',
    'HoldPlot': 'off',
    'PlotStyle': {},
    'YLim': None,
    'Stop': None,
    'Legacy': False,
    'MaxStep': None,
    'InitialStep': None,
}

# lower case name -> canonical name
CANONICAL = {k.lower(): k for k in DEFAULTS}


class PDEOptions(dict):
    """ Options for pde15s.

        Keys are matched case-insensitively and stored by their canonical
        name; unknown keys raise a ConfigError. Options can be accessed as
        items or as attributes.
    """
    def __init__(self, *args, **kwargs):
        super().__init__(DEFAULTS)
        self['PlotStyle'] = {}
        self.update(*args, **kwargs)

    @staticmethod
    def canonical(key):
        try:
            return CANONICAL[str(key).lower()]
        except KeyError:
            raise ConfigError(f'Unknown pde15s option "{key}"!') from None

    def __setitem__(self, key, value):
        super().__setitem__(self.canonical(key), value)

    def __getitem__(self, key):
        return super().__getitem__(self.canonical(key))

    def __contains__(self, key):
        return str(key).lower() in CANONICAL

    def __getattr__(self, key):
        try:
            return self[key]
        except ConfigError as e:
            raise AttributeError(str(e)) from None

    def update(self, *args, **kwargs):
        for k, v in dict(*args, **kwargs).items():
            self[k] = v

    def copy(self):
        return PDEOptions(self)

    @property
    def adaptive(self):
        return self['N'] is None

    @property
    def plotting(self):
        return str(self['Plot']).lower() == 'on'

    def tolerances(self):
        """ The integrator tolerances (atol, rtol).

            Both default to Eps/10; in adaptive mode they are also clamped to
            at most Eps/10.
        """
        tol = self['Eps'] / 10
        atol = tol if self['AbsTol'] is None else self['AbsTol']
        rtol = tol if self['RelTol'] is None else self['RelTol']
        if self.adaptive:
            atol, rtol = min(atol, tol), min(rtol, tol)
        return atol, rtol

    def __str__(self):
        rstr = 'PDEOptions:'
        for k, v in self.items():
            rstr += f' {k}={v!r}'
        return rstr


def pdeset(*args, **kwargs):
    """ Create (or update) options for pde15s.

        pdeset(Eps=1e-8, N=64) creates new options, pdeset(opts, Plot='on')
        returns a copy of opts with the given options changed.
    """
    opts = PDEOptions()
    for arg in args:
        if not isinstance(arg, dict):
            raise ConfigError(f'pdeset expects options or keywords, got {type(arg).__name__}!')
        opts.update(arg)
    opts.update(kwargs)
    return opts
