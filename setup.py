# setup.py - distutils/setuptools configuration for the TickScale package
# Copyright (C) 2014 Jochen Voss <voss@seehuhn.de>
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

"""distutils/setuptools configuration for the TickScale package"""

import os.path
import re

from setuptools import setup

# numpy may not be installed yet, so the package cannot be imported here
here = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(here, 'tickscale', '__init__.py')) as f:
    version = re.search(r"^__version__ = '([^']*)'", f.read(), re.M).group(1)

setup(
    name='TickScale',
    version=version,
    packages=['tickscale'],

    python_requires='>=3.9',
    install_requires=['numpy', 'python-dateutil'],
    extras_require={
        'test': ['pytest', 'tzdata'],
    },

    # metadata for upload to PyPI
    author='Jochen Voss',
    author_email='voss@seehuhn.de',
    description='find nice tick positions for numeric, discrete and date axes',
    keywords='axis ticks scale plotting dates',
    url='http://github.com/seehuhn/py-jvplot',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: GNU General Public License v3 or later' +
        ' (GPLv3+)',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Visualization',
    ]
)
