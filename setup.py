#!/usr/bin/python
from setuptools import setup, find_packages
from selectel_storage.consts import __version__

requirements = ['requests', 'httplib2']

setup(
    name='selectel-storage',
    version=__version__,
    description='Selectel Cloud Storage client bindings for Python.',
    classifiers=[
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Topic :: System :: Distributed Computing',
        'Topic :: Utilities',
        ],
    license='MIT',
    python_requires='>=3.7',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': ['mock', 'pytest'],
    },
)
