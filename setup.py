from setuptools import find_packages, setup

setup(
    name='xxhauth',
    version='1.0.0',
    description='HMAC-style keyed hashing and secret derivation on top of xxHash (XXH3)',
    author='isantolin',
    author_email='',
    packages=find_packages(include=['xxhauth', 'xxhauth.*']),
    python_requires='>=3.11',
    install_requires=[
        'xxhash>=3.0',
        'msgspec>=0.18',
        'construct>=2.10',
        'transitions>=0.9',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'xxhauth-fixtures=xxhauth.fixtures:main',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: POSIX :: Linux',
    ],
)
