from setuptools import setup, find_packages
import re

# Read version from salarycalc/__init__.py
with open('salarycalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='salarycalc',
    version=version,
    packages=find_packages(include=['salarycalc', 'salarycalc.*']),
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'salary-calc=salarycalc.cli.__main__:main',
            'salary-calc-mcp=salarycalc.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Five insurances and one fund, with cumulative income tax withholding.',
    python_requires='>=3.10',
)
