import setuptools
from pathlib import Path
import re

# https://www.python.org/dev/peps/pep-0440
with open(Path(__file__).parent/'crystview/VERSION') as f:
    version = re.sub(r'(-([^-]*)).*$',r'.\2',re.sub(r'^v(\d+\.\d+(\.\d+)?)',r'\1',f.readline().strip()))

setuptools.setup(
    name='crystview',
    version=version,
    description='Crystallographic coordinate transforms and view directions',
    long_description='Python library for converting between lattice and cartesian coordinates '
                     'and for orienting a camera along crystallographic directions',
    packages=setuptools.find_packages(include=['crystview','crystview.*']),
    package_data={'crystview': ['VERSION']},
    include_package_data=True,
    python_requires = '>=3.9',
    install_requires = [
        'numpy>=1.21',
        'pyyaml>=5.1',
    ],
    extras_require = {
        'test': ['pytest'],
    },
    classifiers = [
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering',
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
)
