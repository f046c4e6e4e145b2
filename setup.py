from setuptools import setup, find_packages

setup(
    name='battledex',
    version='0.1',
    zip_safe=False,
    packages=find_packages(),
    install_requires=[
        'SQLAlchemy>=1.4',
        'whoosh>=2.7',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'battledex = battledex.main:setuptools_entry',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
    ]
)
