from setuptools import setup, find_packages

setup(
    name="pyscurv",
    version="0.1",
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'numpy',
        'scipy',
        'open3d',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'pyscurv-estimate=pyscurv.cli:main',
        ],
    },
)
