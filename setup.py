#!/usr/bin/env python
from setuptools import setup, find_packages

pkgs = find_packages(include=['funpde', 'funpde.*'])

setup(
    name='funpde',
    version='0.1.0',
    description='funPDE: spectral time stepping of PDEs and DAEs and ball Helmholtz solvers',
    author='Andreas Buttenschoen',
    author_email='andreas@buttenschoen.ca',
    url='https://github.com/adrs0049/funpy',
    packages=pkgs,
    python_requires='>=3.10',
    install_requires=[
        'numpy',
        'scipy',
        'sympy',
        'matplotlib',
    ],
    extras_require={
        'test': ['pytest'],
    },
    license='BSD 3-clause',
    classifiers=[
        'Development Status :: 1 - Planning',
        'Intended Audience :: Science/Research',
        'License :: BSD License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
)
