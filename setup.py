# setup.py

from setuptools import setup, find_packages

setup(
    name='tone-equalizer',
    version='1.0.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'scipy',
        'matplotlib',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'tone-eq=tone_equalizer.cli.__main__:main',
        ],
    },
)
