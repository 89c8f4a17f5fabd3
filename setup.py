from setuptools import setup, find_packages

# Function to read a requirements file and return the list of dependencies
def read_requirements(filename='requirements.txt'):
    with open(filename) as req:
        return [line for line in req.read().splitlines() if line and not line.startswith('#')]

setup(
    name='primebench',
    version='0.1',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.9',
    entry_points={
        'console_scripts': [
            'primebench=primebench.cli:main',
        ],
    },
    install_requires=read_requirements(),
    extras_require={
        'test': read_requirements('requirements-test.txt'),
    },
)
