from setuptools import find_packages, setup

tests_require = [
    'pytest>=7.0',
]

setup(
    name='flameconv',
    version='0.1.0',
    description='Convert collapsed-stack (flamegraph.pl) text profiles to the Gecko profile format',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    python_requires='>=3.10',
    install_requires=[
        'requests>=2.21.0',
        'retrying>=1.3.3',
    ],
    entry_points='''
        [console_scripts]
        flameconv=flameconv.cli:run
    ''',
    extras_require={
        'test': tests_require,
    }
)
